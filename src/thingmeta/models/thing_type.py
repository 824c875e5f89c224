from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from pydantic import Field, field_serializer, field_validator

from thingmeta.models.channel_definition import ChannelDefinition
from thingmeta.models.frozen_model import FrozenModel, freeze_properties
from thingmeta.models.channel_type import validate_uid


class ThingType(FrozenModel):
    """A device type and the channels every thing of that type exposes."""

    uid: str
    label: str = Field(min_length=1)
    description: Optional[str] = None
    supported_bridge_type_uids: Tuple[str, ...] = ()
    channel_definitions: Tuple[ChannelDefinition, ...] = ()
    properties: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("uid")
    @classmethod
    def _validate_uid(cls, v: str) -> str:
        return validate_uid(v)

    @field_validator("supported_bridge_type_uids")
    @classmethod
    def _validate_bridge_uids(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        for uid in v:
            validate_uid(uid)
        return v

    @field_validator("channel_definitions")
    @classmethod
    def _validate_unique_channel_ids(cls, v: Tuple[ChannelDefinition, ...]) -> Tuple[ChannelDefinition, ...]:
        seen = set()
        for definition in v:
            if definition.id in seen:
                raise ValueError(f"Duplicate channel id {definition.id!r}")
            seen.add(definition.id)
        return v

    @field_validator("properties", mode="before")
    @classmethod
    def _default_properties(cls, v):
        return {} if v is None else v

    @field_validator("properties", mode="after")
    @classmethod
    def _freeze_properties(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return freeze_properties(v)

    @field_serializer("properties")
    def _serialize_properties(self, v: Mapping[str, str]) -> Dict[str, str]:
        return dict(v)

    def __hash__(self) -> int:
        return hash((self.uid, self.channel_definitions, frozenset(self.properties.items())))

    @property
    def channel_ids(self) -> Tuple[str, ...]:
        return tuple(definition.id for definition in self.channel_definitions)

    def get_channel_definition(self, channel_id: str) -> Optional[ChannelDefinition]:
        for definition in self.channel_definitions:
            if definition.id == channel_id:
                return definition
        return None
