"""LLM provider implementations."""

from swipelite.infrastructure.llm.base import BaseLLMProvider
from swipelite.infrastructure.llm.bill_parser import LLMBillParser
from swipelite.infrastructure.llm.ollama import OllamaProvider

__all__ = [
    "BaseLLMProvider",
    "LLMBillParser",
    "OllamaProvider",
]
