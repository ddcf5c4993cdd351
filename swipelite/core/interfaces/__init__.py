"""Core interfaces (ports) for dependency injection."""

from swipelite.core.interfaces.llm import HealthStatus, ILLMProvider, LLMResponse
from swipelite.core.interfaces.parser import IBillParser
from swipelite.core.interfaces.renderer import IPdfRenderer, IPrintRenderer
from swipelite.core.interfaces.storage import IKeyValueStore

__all__ = [
    # LLM interfaces
    "ILLMProvider",
    "LLMResponse",
    "HealthStatus",
    # Parsing
    "IBillParser",
    # Rendering
    "IPdfRenderer",
    "IPrintRenderer",
    # Storage
    "IKeyValueStore",
]
