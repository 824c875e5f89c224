from __future__ import annotations

import re
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# "<binding>:<id>", e.g. "hue:brightness"
UID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+:[A-Za-z0-9_-]+$")


def validate_uid(v: str) -> str:
    if not UID_PATTERN.match(v):
        raise ValueError(f"Invalid UID {v!r}: expected '<binding>:<id>' with segments [A-Za-z0-9_-]")
    return v


class ChannelType(BaseModel):
    """Descriptor for the semantic type of a channel (item type, label, category).

    Channel types are owned by the catalog that loaded them; channel
    definitions only hold a reference.
    """

    model_config = ConfigDict(frozen=True)

    uid: str
    item_type: str = Field(min_length=1)
    label: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    advanced: bool = False
    tags: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("uid")
    @classmethod
    def _validate_uid(cls, v: str) -> str:
        return validate_uid(v)

    @property
    def binding_id(self) -> str:
        return self.uid.split(":", 1)[0]

    @property
    def channel_type_id(self) -> str:
        return self.uid.split(":", 1)[1]
