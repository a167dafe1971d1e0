"""
Tests for name resolution.

Tests cover:
    - Dotted names and their two failure modes
    - Bare names: unique, missing, ambiguous
    - Namespace listings and their precedence over object names
"""

from io import StringIO

import pytest

from cvarcon.console import Console
from cvarcon.errors import (
    AmbiguousNameError,
    NoSuchNamespaceError,
    NoSuchObjectError,
    NotFoundError,
)
from cvarcon.model import CommandDecl, VariableDecl
from cvarcon.resolver import find_command, find_variable, lookup, resolve, split_name
from cvarcon.values import ValueKind


@pytest.fixture
def out():
    return StringIO()


@pytest.fixture
def console(out):
    console = Console(app_name="test", output=out, install_builtins=False)
    console.create_namespace(
        "video",
        commands=[CommandDecl("restart")],
        variables=[
            VariableDecl("width", ValueKind.INT, 640),
            VariableDecl("device", ValueKind.STRING, "gpu0"),
        ],
    )
    console.create_namespace(
        "audio",
        variables=[
            VariableDecl("volume", ValueKind.INT, 80),
            VariableDecl("device", ValueKind.STRING, "card0"),
        ],
    )
    return console


class TestSplitName:
    """Test separating namespace from object name."""

    def test_bare(self):
        assert split_name("width") == (None, "width")

    def test_dotted(self):
        assert split_name("video.width") == ("video", "width")

    def test_splits_at_first_separator(self):
        assert split_name("a.b.c") == ("a", "b.c")


class TestDottedNames:
    """Test ns.name lookups."""

    def test_resolves_object(self, console):
        ns, obj = lookup(console, "audio.device")
        assert ns.name == "audio"
        assert obj.name == "device"

    def test_unknown_namespace(self, console):
        with pytest.raises(NoSuchNamespaceError) as exc:
            lookup(console, "input.mouse")
        assert str(exc.value) == "input: No such namespace"

    def test_unknown_object(self, console):
        with pytest.raises(NoSuchObjectError) as exc:
            lookup(console, "video.height")
        assert str(exc.value) == 'height: No such command or variable in namespace "video"'

    def test_not_found_errors_share_a_base(self, console):
        with pytest.raises(NotFoundError):
            lookup(console, "video.height")


class TestBareNames:
    """Test lookups across every namespace."""

    def test_unique_name(self, console):
        ns, obj = lookup(console, "volume")
        assert ns.name == "audio"
        assert obj.qualified_name == "audio.volume"

    def test_missing_name(self, console):
        with pytest.raises(NotFoundError) as exc:
            lookup(console, "gamma")
        assert str(exc.value) == "gamma: No such command or variable"

    def test_ambiguous_name_lists_namespaces_in_order(self, console):
        with pytest.raises(AmbiguousNameError) as exc:
            lookup(console, "device")
        assert exc.value.namespaces == ["video", "audio"]
        assert str(exc.value) == (
            "device: Name is ambiguous for 2 namespaces:\n"
            "\tvideo.device\n"
            "\taudio.device"
        )

    def test_qualified_name_disambiguates(self, console):
        _, obj = lookup(console, "video.device")
        assert obj.current.data == "gpu0"


class TestNamespaceListing:
    """Test tokens that name a namespace."""

    def test_listing_written_to_output(self, console, out):
        resolution = resolve(console, "video")
        assert resolution.listed
        assert resolution.obj is None
        assert resolution.namespace.name == "video"
        assert out.getvalue() == (
            "video: namespace\n"
            "\tCommands: restart\n"
            "\tVariables: width device\n"
        )

    def test_empty_sections_say_none(self, console, out):
        resolve(console, "audio")
        assert "\tCommands: (none)\n" in out.getvalue()

    def test_empty_namespace(self, console, out):
        console.create_namespace("empty")
        resolve(console, "empty")
        assert out.getvalue() == "empty: namespace\n\tCommands: (none)\n\tVariables: (none)\n"

    def test_listing_wins_over_object_name(self, console, out):
        """A namespace name always lists, even if an object shares it."""
        console.create_namespace("misc", variables=[VariableDecl("audio", ValueKind.BOOL)])
        resolution = resolve(console, "audio")
        assert resolution.listed
        assert out.getvalue().startswith("audio: namespace\n")

    def test_dotted_reaches_object_hidden_by_listing(self, console, out):
        console.create_namespace("misc", variables=[VariableDecl("audio", ValueKind.BOOL)])
        resolution = resolve(console, "misc.audio")
        assert not resolution.listed
        assert resolution.obj.name == "audio"
        assert out.getvalue() == ""

    def test_resolving_object_writes_nothing(self, console, out):
        resolve(console, "width")
        assert out.getvalue() == ""


class TestTypedLookups:
    """Test find_variable and find_command."""

    def test_find_variable(self, console):
        assert find_variable(console, "width").kind is ValueKind.INT

    def test_find_variable_rejects_command(self, console):
        with pytest.raises(NotFoundError):
            find_variable(console, "restart")

    def test_find_command(self, console):
        assert find_command(console, "video.restart").name == "restart"

    def test_find_command_rejects_variable(self, console):
        with pytest.raises(NotFoundError):
            find_command(console, "volume")
