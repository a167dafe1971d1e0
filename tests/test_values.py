"""
Tests for typed cvar values.

These tests verify:
    - Values always carry a kind matching their payload
    - Type-specific equality
    - Display and literal renderings
    - Parsing console tokens into values
"""

import pytest

from cvarcon.values import Value, ValueKind, parse_value, quote


class TestValueConstruction:
    """Test building Value objects."""

    def test_infer_kind_from_payload(self):
        """Value.of should pick the kind from the Python type."""
        assert Value.of(True).kind is ValueKind.BOOL
        assert Value.of(3).kind is ValueKind.INT
        assert Value.of("x").kind is ValueKind.STRING

    def test_bool_is_not_an_integer(self):
        """An integer value must not accept a bool payload."""
        with pytest.raises(TypeError):
            Value(ValueKind.INT, True)

    def test_payload_must_match_kind(self):
        """A string value must not accept an int payload."""
        with pytest.raises(TypeError):
            Value(ValueKind.STRING, 5)

    def test_unsupported_payload(self):
        """Floats are not a cvar kind."""
        with pytest.raises(TypeError):
            Value.of(1.5)

    def test_zero_values(self):
        """Each kind has a zero value."""
        assert Value.zero(ValueKind.BOOL) == Value.of(False)
        assert Value.zero(ValueKind.INT) == Value.of(0)
        assert Value.zero(ValueKind.STRING) == Value.of("")


class TestValueEquality:
    """Test type-specific equality."""

    def test_same_kind_same_payload(self):
        assert Value.of("abc") == Value.of("abc")

    def test_different_kinds_never_equal(self):
        """True and 1 are equal in Python but not as values."""
        assert Value.of(True) != Value.of(1)
        assert Value.of(0) != Value.of(False)

    def test_values_are_immutable(self):
        value = Value.of(1)
        with pytest.raises(Exception):
            value.data = 2


class TestRenderings:
    """Test display and literal forms."""

    def test_bool_display_and_literal(self):
        assert Value.of(True).display() == "true"
        assert Value.of(False).display() == "false"
        assert Value.of(True).literal() == "1"
        assert Value.of(False).literal() == "0"

    def test_int_renderings(self):
        assert Value.of(-42).display() == "-42"
        assert Value.of(-42).literal() == "-42"

    def test_string_display_is_raw(self):
        assert Value.of("two words").display() == "two words"

    def test_string_literal_is_quoted(self):
        assert Value.of("two words").literal() == '"two words"'

    def test_string_literal_escapes_quotes_and_backslashes(self):
        assert quote('say "hi"') == '"say \\"hi\\""'
        assert quote("C:\\games") == '"C:\\\\games"'

    def test_string_literal_escapes_newlines(self):
        assert quote("a\nb") == '"a\\nb"'

    def test_string_literal_escapes_carriage_returns(self):
        assert quote("a\r\nb") == '"a\\r\\nb"'

    def test_token_is_unquoted(self):
        assert Value.of('say "hi"').token() == 'say "hi"'
        assert Value.of(True).token() == "1"
        assert Value.of(-4).token() == "-4"


class TestParseValue:
    """Test reading console tokens."""

    @pytest.mark.parametrize("token", ["1", "true", "TRUE", "yes", "On"])
    def test_true_words(self, token):
        assert parse_value(ValueKind.BOOL, token) == Value.of(True)

    @pytest.mark.parametrize("token", ["0", "false", "No", "off"])
    def test_false_words(self, token):
        assert parse_value(ValueKind.BOOL, token) == Value.of(False)

    def test_bad_boolean(self):
        with pytest.raises(ValueError):
            parse_value(ValueKind.BOOL, "2")

    def test_signed_integers(self):
        assert parse_value(ValueKind.INT, "-12") == Value.of(-12)
        assert parse_value(ValueKind.INT, "+3") == Value.of(3)

    @pytest.mark.parametrize("token", ["", "-", "1.5", "abc", "0x10"])
    def test_bad_integers(self, token):
        with pytest.raises(ValueError):
            parse_value(ValueKind.INT, token)

    def test_string_taken_verbatim(self):
        assert parse_value(ValueKind.STRING, " spaced ") == Value.of(" spaced ")
        assert parse_value(ValueKind.STRING, "") == Value.of("")
