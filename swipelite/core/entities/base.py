"""Shared pydantic base for persisted entities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Entity(BaseModel):
    """
    Base model for stored records.

    Fields serialize under camelCase aliases (``invoiceNumber``,
    ``customFields``) and accept either spelling on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_json_dict(self) -> dict:
        """Dump to a JSON-compatible dict using storage aliases."""
        return self.model_dump(mode="json", by_alias=True)
