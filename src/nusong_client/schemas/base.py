"""Shared base model for backend payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Backend payload with camelCase wire names.

    Fields are declared in snake_case; unknown fields sent by the backend
    are ignored. Validation errors are reported under the snake_case names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        loc_by_alias=False,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize for a request body, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
