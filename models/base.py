"""
Base model classes.
"""

import secrets
import time
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


def new_id(prefix: str) -> str:
    """Generate a prefixed record id, e.g. ``q_1718000000000_3fa9c2d1``."""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


class RecordModel(BaseModel):
    """
    Base for every stored record.

    Stored JSON uses camelCase keys (stressLevel, categoryId, ...).
    Python code uses snake_case. Both are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Ignore unknown fields from older exports
    )

    @classmethod
    def field_name_for(cls, key: str) -> Optional[str]:
        """Map a snake_case or camelCase key to the field name (None if unknown)."""
        if key in cls.model_fields:
            return key
        for name, field in cls.model_fields.items():
            if field.alias == key:
                return name
        return None

    def to_record(self) -> dict:
        """Serialize with the stored (camelCase) key names."""
        return self.model_dump(mode="json", by_alias=True)


class TimestampMixin(RecordModel):
    """Mixin for created/updated timestamps."""
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class BaseEntity(TimestampMixin):
    """
    Base for top-level persistent entities (projects, interviews).

    Subclasses define their own id field with the right prefix.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now()
