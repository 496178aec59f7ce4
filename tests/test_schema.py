"""Mini README: Tests for loading the command schema resource.

Confirms the bundled table is consistent and that corrupt documents are
reported as ``SchemaIntegrityError`` rather than slipping through.
"""

from __future__ import annotations

import json

import pytest

from tellodrone.schema import (
    EnumConstraint,
    RangeConstraint,
    SchemaIntegrityError,
    build_schema,
    default_schema,
    load_schema,
)


def test_bundled_schema_is_consistent() -> None:
    schema = load_schema()
    assert {"control", "set", "read"} <= set(schema.command_groups)
    assert {"takeoff", "cw", "go", "speed?"} <= schema.all_commands
    assert set(schema.limits) <= schema.all_commands
    assert schema.limits["cw"]["value"] == RangeConstraint(minimum=1, maximum=360)
    assert schema.limits["flip"]["value"] == EnumConstraint(allowed=("l", "r", "f", "b"))


def test_limit_parameters_keep_firmware_order() -> None:
    schema = load_schema()
    assert list(schema.limits["go"]) == ["x", "y", "z", "speed"]


def test_delay_for_converts_to_seconds() -> None:
    schema = load_schema()
    assert schema.delay_for("takeoff") == pytest.approx(5.0)
    assert schema.delay_for("not-a-command") == 0.0


def test_default_schema_is_cached() -> None:
    assert default_schema() is default_schema()


def test_command_union_is_computed_once() -> None:
    schema = build_schema(
        {"validCommands": {"control": ["takeoff", "land"], "read": ["battery?"]}, "commandLimits": {}}
    )
    assert schema.all_commands == frozenset({"takeoff", "land", "battery?"})
    assert schema.all_commands is schema.all_commands
    assert not hasattr(schema, "__dict__")


def test_load_schema_from_file(tmp_path) -> None:
    path = tmp_path / "schema.json"
    path.write_text(
        json.dumps(
            {
                "validCommands": {"control": ["land", "up"]},
                "commandLimits": {"up": {"value": {"min": 20, "max": 50}}},
                "delays": {"land": 1500},
            }
        ),
        encoding="utf-8",
    )
    schema = load_schema(path)
    assert schema.all_commands == frozenset({"land", "up"})
    assert schema.requires_parameters("up")
    assert not schema.requires_parameters("land")
    assert schema.delay_for("land") == pytest.approx(1.5)


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"validCommands": "takeoff"},
        {"validCommands": {"control": ["cw"]}, "commandLimits": {"ccw": {"value": {"min": 1, "max": 2}}}},
        {"validCommands": {"control": ["cw"]}, "commandLimits": {"cw": {"value": {"min": 1}}}},
        {"validCommands": {"control": ["cw"]}, "commandLimits": {"cw": {"value": {"min": 9, "max": 1}}}},
        {"validCommands": {"control": ["cw"]}, "commandLimits": {"cw": {"value": {"min": "a", "max": 1}}}},
        {"validCommands": {"control": ["cw"]}, "commandLimits": {"cw": {"value": []}}},
        {"validCommands": {"control": ["cw"]}, "commandLimits": {"cw": {"value": [{"x": 1}]}}},
        {"validCommands": {"control": ["cw"]}, "commandLimits": {"cw": {"value": 5}}},
    ],
)
def test_corrupt_documents_raise_integrity_errors(document: dict) -> None:
    with pytest.raises(SchemaIntegrityError):
        build_schema(document)


def test_unreadable_files_raise_integrity_errors(tmp_path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SchemaIntegrityError):
        load_schema(broken)
    with pytest.raises(SchemaIntegrityError):
        load_schema(tmp_path / "missing.json")
