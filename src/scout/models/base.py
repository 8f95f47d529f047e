"""Base model shared by every persisted Scout record.

Persisted records keep camelCase keys (``companyName``, ``emailField``,
``isPrimary``) because the stored state is serialized directly.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Pydantic model with camelCase aliases and snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_record(self) -> dict[str, Any]:
        """Dump to the persisted camelCase shape, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, data: dict[str, Any]):
        """Validate a persisted record."""
        return cls.model_validate(data)
