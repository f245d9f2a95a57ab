"""
Base model for entities exchanged with the salon REST API.

The external API speaks camelCase JSON; models expose snake_case attributes
and accept either form on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SalonModel(BaseModel):
    """Base class for all salon entities (read-only snapshots of API data)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_api_payload(self) -> dict:
        """Serialize using the API's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
