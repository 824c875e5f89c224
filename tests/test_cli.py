import json

import pytest

from thingmeta.catalog.registry import ChannelTypeRegistry
from thingmeta.cli import cli, main, validate_definitions
from thingmeta.core.exceptions import DefinitionLoadError


DOCUMENT = {
    "channel_types": [{"uid": "hue:brightness", "item_type": "Dimmer", "label": "Brightness"}],
    "thing_types": [
        {
            "uid": "hue:lamp",
            "label": "Lamp",
            "channels": [{"id": "brightness", "type": "hue:brightness", "properties": {"max": "100"}}],
        }
    ],
}


def setup_function() -> None:
    ChannelTypeRegistry.clear()


def test_main_with_config_dict_returns_summary():
    result = main(config_dict=DOCUMENT)

    assert result["status"] == "success"
    assert result["channel_types"] == ["hue:brightness"]
    assert result["thing_types"] == [
        {
            "uid": "hue:lamp",
            "label": "Lamp",
            "channels": [{"id": "brightness", "type": "hue:brightness", "properties": {"max": "100"}}],
        }
    ]


def test_main_with_config_path(tmp_path):
    path = tmp_path / "definitions.json"
    path.write_text(json.dumps(DOCUMENT))

    result = main(config_path=str(path))

    assert result["thing_types"][0]["uid"] == "hue:lamp"


def test_main_requires_a_source():
    with pytest.raises(ValueError, match="Either config_path or config_dict"):
        main()


def test_main_propagates_load_errors():
    bad = json.loads(json.dumps(DOCUMENT))
    bad["thing_types"][0]["channels"][0]["id"] = ""

    with pytest.raises(DefinitionLoadError):
        main(config_dict=bad)


def test_validate_definitions_does_not_register(tmp_path):
    path = tmp_path / "definitions.json"
    path.write_text(json.dumps(DOCUMENT))

    assert validate_definitions(str(path)) is True
    assert ChannelTypeRegistry.all() == []


def test_cli_validate_exit_codes(tmp_path):
    good = tmp_path / "good.json"
    good.write_text(json.dumps(DOCUMENT))
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"channel_types": [{"uid": "nope"}]}))

    with pytest.raises(SystemExit) as ok:
        cli(["validate", str(good)])
    assert ok.value.code == 0

    with pytest.raises(SystemExit) as failed:
        cli(["validate", str(bad)])
    assert failed.value.code == 1


def test_cli_show_prints_thing_types(tmp_path, capsys):
    path = tmp_path / "definitions.json"
    path.write_text(json.dumps(DOCUMENT))

    with pytest.raises(SystemExit) as exit_info:
        cli(["show", str(path)])

    assert exit_info.value.code == 0
    out = capsys.readouterr().out
    assert '"uid": "hue:lamp"' in out
    assert '"max": "100"' in out


def test_cli_show_missing_file_exits_non_zero(tmp_path):
    with pytest.raises(SystemExit) as exit_info:
        cli(["show", str(tmp_path / "missing.json")])

    assert exit_info.value.code == 1
