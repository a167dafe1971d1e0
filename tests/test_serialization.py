"""
Tests for declaration files and console snapshots.

These tests ensure that YAML declarations build the same console as the
equivalent Python declarations, and that snapshots report variable state.
"""

import json
from io import StringIO

import pytest
import yaml

from cvarcon.console import Console
from cvarcon.model import CommandDecl, VariableDecl
from cvarcon.serialization import (
    NamespaceDecl,
    command_decl_from_dict,
    console_snapshot,
    console_snapshot_to_json,
    console_snapshot_to_yaml,
    create_namespaces,
    declarations_from_yaml,
    declarations_to_yaml,
    variable_decl_from_dict,
    variable_decl_to_dict,
)
from cvarcon.values import Value, ValueKind


DECLARATIONS = """
namespaces:
  - name: video
    variables:
      - {name: width, type: integer, default: 640, on_change: video_changed}
      - {name: fullscreen, type: boolean, default: 0}
      - {name: title, type: string, default: 42, description: Window title}
    commands:
      - {name: restart, func: restart, description: Reopen the window}
  - name: empty
"""


def restart(handler, console, stat):
    return True


def video_changed(handler, console, value):
    pass


CALLBACKS = {"restart": restart, "video_changed": video_changed}


class TestDeclarations:
    """Test reading declarations."""

    def test_from_yaml(self):
        decls = declarations_from_yaml(DECLARATIONS, CALLBACKS)
        assert [d.name for d in decls] == ["video", "empty"]

        video = decls[0]
        width, fullscreen, title = video.variables
        assert width.default_value() == Value.of(640)
        assert width.on_change is video_changed
        assert fullscreen.default_value() == Value.of(False)
        assert title.default_value() == Value.of("42")
        assert title.description == "Window title"

        (cmd,) = video.commands
        assert cmd.func is restart
        assert cmd.description == "Reopen the window"

    def test_empty_document(self):
        assert declarations_from_yaml("") == []

    def test_unknown_callback(self):
        with pytest.raises(KeyError, match="Unknown callback: missing"):
            command_decl_from_dict({"name": "go", "func": "missing"}, CALLBACKS)

    def test_unknown_keys_warn(self):
        with pytest.warns(UserWarning, match="colour"):
            decl = variable_decl_from_dict({"name": "x", "type": "integer", "colour": "red"})
        assert decl.default_value() == Value.of(0)

    def test_bad_type(self):
        with pytest.raises(ValueError):
            variable_decl_from_dict({"name": "x", "type": "float"})

    def test_create_namespaces(self):
        console = Console(output=StringIO(), install_builtins=False)
        create_namespaces(console, declarations_from_yaml(DECLARATIONS, CALLBACKS))
        assert [ns.name for ns in console.namespaces] == ["video", "empty"]
        assert console.get_int("video.width") == 640
        assert console.get_str("title") == "42"


class TestDeclarationsToYaml:
    """Test writing declarations."""

    def test_callbacks_written_by_name(self):
        decl = VariableDecl("width", ValueKind.INT, 640, video_changed)
        assert variable_decl_to_dict(decl, CALLBACKS) == {
            "name": "width",
            "type": "integer",
            "default": 640,
            "description": None,
            "on_change": "video_changed",
        }

    def test_round_trip(self):
        decls = [
            NamespaceDecl(
                name="video",
                commands=[CommandDecl("restart", restart, "Reopen the window")],
                variables=[VariableDecl("fullscreen", ValueKind.BOOL, True)],
            )
        ]
        text = declarations_to_yaml(decls, CALLBACKS)
        assert yaml.safe_load(text)["namespaces"][0]["commands"][0]["func"] == "restart"
        assert declarations_from_yaml(text, CALLBACKS) == decls


class TestSnapshot:
    """Test console snapshots."""

    @pytest.fixture
    def console(self):
        console = Console(output=StringIO(), install_builtins=False)
        console.create_namespace("game", variables=[
            VariableDecl("speed", ValueKind.INT, 1),
            VariableDecl("name", ValueKind.STRING, "jo"),
        ])
        console.set("game.speed", 3)
        return console

    def test_snapshot(self, console):
        assert console_snapshot(console) == {
            "game": {
                "attached": False,
                "pending": 1,
                "variables": {
                    "speed": {"type": "integer", "default": 1, "current": 3, "modified": True},
                    "name": {"type": "string", "default": "jo", "current": "jo", "modified": False},
                },
            }
        }

    def test_json_and_yaml_agree(self, console):
        assert json.loads(console_snapshot_to_json(console)) == console_snapshot(console)
        assert yaml.safe_load(console_snapshot_to_yaml(console)) == console_snapshot(console)
