from __future__ import annotations

import json
import logging

import pytest

from thingmeta.catalog.registry import ChannelTypeRegistry
from thingmeta.core.exceptions import DefinitionLoadError, UnresolvedChannelTypeError, UnresolvedTypePolicy
from thingmeta.loader import load_definitions, load_definitions_file, read_definitions_file
from thingmeta.models.channel_type import ChannelType


def setup_function() -> None:
    ChannelTypeRegistry.clear()


def _document(**overrides):
    doc = {
        "channel_types": [
            {"uid": "hue:power", "item_type": "Switch", "label": "Power"},
            {"uid": "hue:brightness", "item_type": "Dimmer", "label": "Brightness"},
        ],
        "thing_types": [
            {
                "uid": "hue:lamp",
                "label": "Lamp",
                "channels": [
                    {"id": "power", "type": "hue:power"},
                    {"id": "brightness", "type": "hue:brightness", "properties": {"min": "0", "max": "100"}},
                ],
            }
        ],
    }
    doc.update(overrides)
    return doc


def test_load_definitions_builds_thing_types_and_registers_channel_types():
    result = load_definitions(_document())

    assert [ct.uid for ct in result.channel_types] == ["hue:power", "hue:brightness"]
    lamp = result.get_thing_type("hue:lamp")
    assert lamp is not None
    assert lamp.channel_ids == ("power", "brightness")

    brightness = lamp.get_channel_definition("brightness")
    assert brightness.type is ChannelTypeRegistry.get("hue:brightness")
    assert dict(brightness.properties) == {"min": "0", "max": "100"}
    assert dict(lamp.get_channel_definition("power").properties) == {}


def test_definitions_share_one_channel_type_instance():
    doc = _document()
    doc["thing_types"].append(
        {"uid": "hue:bulb", "label": "Bulb", "channels": [{"id": "on", "type": "hue:power"}]}
    )

    result = load_definitions(doc)

    lamp_power = result.get_thing_type("hue:lamp").get_channel_definition("power")
    bulb_power = result.get_thing_type("hue:bulb").get_channel_definition("on")
    assert lamp_power.type is bulb_power.type


def test_channels_may_reference_previously_registered_types():
    ChannelTypeRegistry.register(ChannelType(uid="hue:alert", item_type="String", label="Alert"))

    result = load_definitions(
        {
            "thing_types": [
                {"uid": "hue:lamp", "label": "Lamp", "channels": [{"id": "alert", "type": "hue:alert"}]}
            ]
        }
    )

    assert result.thing_types[0].channel_definitions[0].type is ChannelTypeRegistry.get("hue:alert")


def test_numeric_property_values_are_coerced_to_text():
    doc = _document()
    doc["thing_types"][0]["channels"][1]["properties"] = {"min": 0, "max": 100}

    result = load_definitions(doc)

    brightness = result.thing_types[0].get_channel_definition("brightness")
    assert dict(brightness.properties) == {"min": "0", "max": "100"}


def test_empty_channel_id_aborts_load_and_registers_nothing():
    doc = _document()
    doc["thing_types"][0]["channels"][0]["id"] = ""

    with pytest.raises(DefinitionLoadError, match="Invalid channel definition") as exc:
        load_definitions(doc)

    assert exc.value.details["thing_type"] == "hue:lamp"
    assert ChannelTypeRegistry.all() == []


def test_unresolved_type_fails_by_default():
    doc = _document()
    doc["thing_types"][0]["channels"].append({"id": "color", "type": "hue:color"})

    with pytest.raises(UnresolvedChannelTypeError, match="Unknown channel type") as exc:
        load_definitions(doc)

    assert exc.value.details["type"] == "hue:color"


def test_unresolved_type_warn_skips_channel(caplog):
    doc = _document()
    doc["thing_types"][0]["channels"].append({"id": "color", "type": "hue:color"})

    with caplog.at_level(logging.WARNING):
        result = load_definitions(doc, unresolved_policy=UnresolvedTypePolicy.WARN)

    assert result.thing_types[0].channel_ids == ("power", "brightness")
    assert "Unknown channel type" in caplog.text


def test_unresolved_type_ignore_skips_channel():
    doc = _document()
    doc["thing_types"][0]["channels"].append({"id": "color", "type": "hue:color"})

    result = load_definitions(doc, unresolved_policy=UnresolvedTypePolicy.IGNORE)

    assert result.thing_types[0].channel_ids == ("power", "brightness")


def test_duplicate_channel_ids_abort_load():
    doc = _document()
    doc["thing_types"][0]["channels"].append({"id": "power", "type": "hue:power"})

    with pytest.raises(DefinitionLoadError, match="Invalid thing type"):
        load_definitions(doc)


def test_already_registered_channel_type_requires_overwrite():
    load_definitions(_document())

    with pytest.raises(DefinitionLoadError, match="already registered"):
        load_definitions(_document())

    result = load_definitions(_document(), overwrite=True)
    assert ChannelTypeRegistry.get("hue:power") is result.channel_types[0]


def test_invalid_document_raises_definition_load_error():
    with pytest.raises(DefinitionLoadError, match="Invalid definitions document"):
        load_definitions({"channel_types": [{"uid": "bad", "item_type": "Switch", "label": "X"}]})


def test_load_definitions_file_reads_yaml(tmp_path):
    path = tmp_path / "definitions.yaml"
    path.write_text(
        "channel_types:\n"
        "  - uid: hue:brightness\n"
        "    item_type: Dimmer\n"
        "    label: Brightness\n"
        "thing_types:\n"
        "  - uid: hue:lamp\n"
        "    label: Lamp\n"
        "    channels:\n"
        "      - id: brightness\n"
        "        type: hue:brightness\n"
        "        properties:\n"
        "          min: 0\n"
        "          max: 100\n"
    )

    result = load_definitions_file(path)

    brightness = result.thing_types[0].get_channel_definition("brightness")
    assert dict(brightness.properties) == {"min": "0", "max": "100"}


def test_read_definitions_file_reads_json(tmp_path):
    path = tmp_path / "definitions.json"
    path.write_text(json.dumps(_document()))

    assert read_definitions_file(path) == _document()


def test_read_definitions_file_rejects_unknown_suffix(tmp_path):
    path = tmp_path / "definitions.txt"
    path.write_text("{}")

    with pytest.raises(ValueError, match="Unsupported definitions format"):
        read_definitions_file(path)


def test_read_definitions_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_definitions_file(tmp_path / "missing.yaml")


@pytest.mark.parametrize("field", ["uid", "label"])
def test_numeric_thing_type_fields_are_not_coerced(field):
    doc = _document()
    doc["thing_types"][0][field] = 42

    with pytest.raises(DefinitionLoadError, match="Invalid definitions document"):
        load_definitions(doc)


def test_numeric_channel_id_is_not_coerced():
    doc = _document()
    doc["thing_types"][0]["channels"][0]["id"] = 7

    with pytest.raises(DefinitionLoadError, match="Invalid definitions document"):
        load_definitions(doc)
