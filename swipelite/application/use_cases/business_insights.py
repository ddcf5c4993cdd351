"""Business Insights Use Case: short LLM-written tips over sales data."""

import json

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from swipelite.config import get_logger
from swipelite.core.entities import Invoice, Product
from swipelite.core.exceptions import SwipeLiteError
from swipelite.core.interfaces import ILLMProvider

logger = get_logger(__name__)

FALLBACK_INSIGHTS = [
    "Monitor your top selling items",
    "Follow up on unpaid invoices",
    "Stock up on fast-moving goods",
]

INSIGHTS_SCHEMA = {"type": "array", "items": {"type": "string"}}

_insights_adapter = TypeAdapter(list[str])


class BusinessInsightsUseCase:
    """Ask the LLM for three actionable insights; fixed tips on failure."""

    def __init__(self, llm: ILLMProvider | None = None):
        self._llm = llm

    def _get_llm(self) -> ILLMProvider:
        if self._llm is None:
            from swipelite.infrastructure.llm import OllamaProvider

            self._llm = OllamaProvider()
        return self._llm

    @staticmethod
    def _build_prompt(invoices: list[Invoice], products: list[Product]) -> str:
        data = json.dumps(
            {
                "invoices": [i.to_json_dict() for i in invoices],
                "products": [p.to_json_dict() for p in products],
            }
        )
        return (
            "Analyze this business data and provide 3 short, actionable insights "
            "for a business owner.\n"
            f"Data: {data}\n"
            "Return as a simple list of strings."
        )

    async def execute(self, invoices: list[Invoice], products: list[Product]) -> list[str]:
        try:
            response = await self._get_llm().generate(
                prompt=self._build_prompt(invoices, products),
                json_schema=INSIGHTS_SCHEMA,
            )
            insights = _insights_adapter.validate_json(response.text)
        except (SwipeLiteError, PydanticValidationError) as e:
            logger.warning("business_insights_fallback", error=str(e))
            return list(FALLBACK_INSIGHTS)

        insights = [s.strip() for s in insights if s.strip()]
        if not insights:
            return list(FALLBACK_INSIGHTS)

        logger.info("business_insights_generated", count=len(insights))
        return insights[:3]
