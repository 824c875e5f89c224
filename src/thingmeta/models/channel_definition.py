from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import Field, field_serializer, field_validator, model_validator

from thingmeta.models.channel_type import ChannelType
from thingmeta.models.frozen_model import FrozenModel, freeze_properties

EMPTY_ID_MESSAGE = "The ID must neither be null nor empty!"


class ChannelDefinition(FrozenModel):
    """Defines a channel of a thing type.

    A channel is the part of a thing that represents one of its
    functionalities. Instances are immutable: ``id`` and ``type`` cannot be
    reassigned and ``properties`` is a read-only mapping detached from
    whatever the caller passed in.

    Example:
        >>> definition = ChannelDefinition.create("brightness", dimmer_type, {"min": "0"})
        >>> definition.properties["min"]
        '0'
    """

    id: str
    type: ChannelType
    properties: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def create(
        cls,
        id: str,
        type: ChannelType,
        properties: Optional[Mapping[str, str]] = None,
    ) -> "ChannelDefinition":
        """
        Create a channel definition.

        Args:
            id: Identifier of the channel (must neither be None nor empty)
            type: Type of the channel (must not be None)
            properties: Properties this channel provides (may be None)

        Raises:
            pydantic.ValidationError: If the ID is None or empty, or the type is None
        """
        return cls(id=id, type=type, properties=properties)

    @model_validator(mode="before")
    @classmethod
    def _validate_required(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        channel_id = data.get("id")
        if channel_id is None or channel_id == "":
            raise ValueError(EMPTY_ID_MESSAGE)

        if data.get("type") is None:
            raise ValueError("The channel type must not be null")

        if "properties" in data and data["properties"] is None:
            data = {**data, "properties": {}}
        return data

    # b"" passes the raw check above and only becomes "" once converted
    @field_validator("id", mode="after")
    @classmethod
    def _validate_id_not_empty(cls, v: str) -> str:
        if v == "":
            raise ValueError(EMPTY_ID_MESSAGE)
        return v

    @field_validator("properties", mode="after")
    @classmethod
    def _freeze_properties(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return freeze_properties(v)

    @field_serializer("properties")
    def _serialize_properties(self, v: Mapping[str, str]) -> Dict[str, str]:
        return dict(v)

    def __hash__(self) -> int:
        return hash((self.id, self.type, frozenset(self.properties.items())))

    def __str__(self) -> str:
        return (
            f"ChannelDefinition [id={self.id}, type={self.type.uid}, "
            f"properties={dict(self.properties)}]"
        )
