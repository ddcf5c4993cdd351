"""
LLM-backed free-text bill parser.

Asks the model for JSON constrained to the ``ParsedBill`` shape and
validates the answer with pydantic.
"""

from pydantic import ValidationError as PydanticValidationError

from swipelite.config import get_logger
from swipelite.core.entities import ParsedBill
from swipelite.core.exceptions import ParsingFailedError
from swipelite.core.interfaces import IBillParser, ILLMProvider

logger = get_logger(__name__)

BILL_SCHEMA = {
    "type": "object",
    "properties": {
        "customerName": {"type": "string"},
        "phone": {"type": "string"},
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "number"},
                    "price": {"type": "number"},
                },
                "required": ["name", "quantity", "price"],
            },
        },
    },
    "required": ["items"],
}

SYSTEM_PROMPT = (
    "You extract billing data for a small retail shop. "
    "Respond with JSON only."
)

PROMPT_TEMPLATE = """Parse the following informal billing text into a structured JSON format.
Input: "{text}"

If products are mentioned with prices and quantities, list them.
If a customer name or phone is mentioned, extract it."""


class LLMBillParser(IBillParser):
    """Parses billing text through an LLM provider."""

    parser_name = "llm"

    def __init__(self, llm: ILLMProvider | None = None):
        self._llm = llm

    def _get_llm(self) -> ILLMProvider:
        if self._llm is None:
            from swipelite.infrastructure.llm.ollama import OllamaProvider

            self._llm = OllamaProvider()
        return self._llm

    async def parse(self, text: str) -> ParsedBill:
        response = await self._get_llm().generate(
            prompt=PROMPT_TEMPLATE.format(text=text),
            system_prompt=SYSTEM_PROMPT,
            json_schema=BILL_SCHEMA,
        )

        try:
            bill = ParsedBill.model_validate_json(response.text)
        except PydanticValidationError as e:
            logger.warning(
                "bill_parse_invalid_json",
                error=str(e),
                response_preview=response.text[:200],
            )
            raise ParsingFailedError("Model returned malformed bill data", self.parser_name) from e

        logger.info(
            "bill_parsed",
            customer=bill.customer_name,
            item_count=len(bill.items),
        )
        return bill
