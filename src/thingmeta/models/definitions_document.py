from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

from thingmeta.models.channel_type import ChannelType


def _number_to_text(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


# YAML turns `max: 100` into an int; property values are text.
PropertyValue = Annotated[str, BeforeValidator(_number_to_text)]


class ChannelDefinitionConfig(BaseModel):
    """A channel as written in a definitions document.

    ``type`` is a channel type uid; the loader resolves it through the registry.
    """

    id: str
    type: str
    properties: Optional[Dict[str, PropertyValue]] = None


class ThingTypeConfig(BaseModel):
    uid: str
    label: str
    description: Optional[str] = None
    supported_bridge_type_uids: List[str] = Field(default_factory=list)
    channels: List[ChannelDefinitionConfig] = Field(default_factory=list)
    properties: Optional[Dict[str, PropertyValue]] = None


class DefinitionsDocument(BaseModel):
    channel_types: List[ChannelType] = Field(default_factory=list)
    thing_types: List[ThingTypeConfig] = Field(default_factory=list)
