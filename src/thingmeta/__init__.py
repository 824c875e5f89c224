"""thingmeta.

Immutable metadata records describing the channels a thing type exposes.

Public API for clients building or loading channel and thing type definitions.
"""

from thingmeta.models.channel_definition import ChannelDefinition
from thingmeta.models.channel_type import ChannelType
from thingmeta.models.thing_type import ThingType
from thingmeta.loader import load_definitions, load_definitions_file

__version__ = "0.1.0"

__all__ = [
    "ChannelDefinition",
    "ChannelType",
    "ThingType",
    "load_definitions",
    "load_definitions_file",
]
