"""
Example: Loading thing type definitions and building channel definitions by hand.

Run from the repository root:
    python examples/load_definitions_usage.py
"""

from thingmeta import ChannelDefinition, ChannelType, load_definitions_file
from thingmeta.catalog.registry import ChannelTypeRegistry


# =============================================================================
# Example 1: Load a YAML document
# =============================================================================
result = load_definitions_file("examples/definitions.yaml")

lamp = result.get_thing_type("hue:lamp")
for definition in lamp.channel_definitions:
    print(definition)


# =============================================================================
# Example 2: Build a definition directly against a registered channel type
# =============================================================================
color_temperature = ChannelType(uid="hue:color_temperature", item_type="Dimmer", label="Color Temperature")
ChannelTypeRegistry.register(color_temperature)

hints = {"min": "153", "max": "500"}
definition = ChannelDefinition.create("color_temperature", ChannelTypeRegistry.get("hue:color_temperature"), hints)

# The definition keeps its own copy of the properties
hints.clear()
print(dict(definition.properties))
