"""
Tests for the Envelope text form

Checks:
1. Canonical formatting 'Env[min_x : max_x, min_y : max_y]' / 'Env[Null]'
2. Shortest round-trip numbers, integral values without '.0'
3. parse() as the inverse of to_string()
4. Wrapper, structure and numeric-field errors (EnvelopeFormatError)
"""

import pytest

from src.core.geometry import ORDINATE_LABELS, Envelope, EnvelopeFormatError, Position

# =============================================================================
# FORMATTING
# =============================================================================


class TestToString:
    def test_normalized_integral_values(self) -> None:
        """Envelope(5, 1, 5, 1) -> 'Env[1 : 5, 1 : 5]'"""
        env = Envelope.from_range(5.0, 1.0, 5.0, 1.0)
        assert env.to_string() == "Env[1 : 5, 1 : 5]"
        assert str(env) == "Env[1 : 5, 1 : 5]"

    def test_null(self) -> None:
        assert str(Envelope()) == "Env[Null]"

    def test_fractions_and_exponents(self) -> None:
        env = Envelope(0.1, 2.5, -3.0, 1e20)
        assert str(env) == "Env[0.1 : 2.5, -3 : 1e+20]"

    def test_shortest_round_trip_digits(self) -> None:
        env = Envelope(0.0, 1.0 / 3.0, 0.0, 0.1 + 0.2)
        assert str(env) == "Env[0 : 0.3333333333333333, 0 : 0.30000000000000004]"

    def test_signed_zero_range(self) -> None:
        env = Envelope(-0.0, 0.0, 0.0, 0.0)
        assert str(env) == "Env[-0 : 0, 0 : 0]"
        assert str(Envelope.parse(str(env))) == "Env[-0 : 0, 0 : 0]"

    def test_degenerate(self) -> None:
        assert str(Envelope.from_point(Position(-2.5, 7.0))) == "Env[-2.5 : -2.5, 7 : 7]"

    def test_repr(self) -> None:
        assert repr(Envelope()) == "Envelope()"
        assert repr(Envelope(1.0, 2.0, 3.0, 4.0)) == "Envelope(1.0, 2.0, 3.0, 4.0)"


# =============================================================================
# PARSING
# =============================================================================


class TestParse:
    @pytest.mark.parametrize(
        "env",
        [
            Envelope(1.0, 5.0, 1.0, 5.0),
            Envelope(0.1, 2.5, -3.0, 1e20),
            Envelope(-1e-300, 1e308, -0.0, 0.0),
            Envelope(1.0 / 3.0, 2.0 / 3.0, 4.889259338378906, 52.370725881211314),
            Envelope.from_point(Position(123456789.123, -0.000001)),
        ],
    )
    def test_round_trip(self, env: Envelope) -> None:
        """parse(str(e)) == e, bit for bit"""
        parsed = Envelope.parse(str(env))
        assert parsed == env
        assert parsed.hash_code() == env.hash_code()

    def test_null(self) -> None:
        env = Envelope.parse("Env[Null]")
        assert env.is_null
        assert (env.min_x, env.max_x, env.min_y, env.max_y) == (0.0, -1.0, 0.0, -1.0)

    def test_whitespace_tolerated(self) -> None:
        assert Envelope.parse("Env[ 1:5 ,  1 :5 ]") == Envelope(1.0, 5.0, 1.0, 5.0)

    def test_unordered_values_are_normalized(self) -> None:
        env = Envelope.parse("Env[5 : 1, 5 : 1]")
        assert (env.min_x, env.max_x, env.min_y, env.max_y) == (1.0, 5.0, 1.0, 5.0)

    def test_signs_and_exponents(self) -> None:
        env = Envelope.parse("Env[-1.5e2 : +2E-1, .5 : 3.]")
        assert env == Envelope(-150.0, 0.2, 0.5, 3.0)


class TestParseErrors:
    @pytest.mark.parametrize("text", ["", None])
    def test_empty_input(self, text) -> None:
        with pytest.raises(EnvelopeFormatError, match="empty"):
            Envelope.parse(text)

    @pytest.mark.parametrize(
        "text",
        ["Envelope[1 : 2, 3 : 4]", "Env[1 : 2, 3 : 4", "env[1 : 2, 3 : 4]", "1 : 2, 3 : 4", "Env["],
    )
    def test_missing_wrapper(self, text: str) -> None:
        with pytest.raises(EnvelopeFormatError, match="Env") as exc_info:
            Envelope.parse(text)
        assert exc_info.value.ordinate is None
        assert exc_info.value.text == text

    @pytest.mark.parametrize(
        "text",
        ["Env[1 : 2]", "Env[1 : 2, 3 : 4, 5 : 6]", "Env[null]", "Env[]"],
    )
    def test_not_two_ranges(self, text: str) -> None:
        with pytest.raises(EnvelopeFormatError, match="two ranges"):
            Envelope.parse(text)

    @pytest.mark.parametrize("text", ["Env[1 : 2 : 3, 4 : 5]", "Env[1 : 2, 3]", "Env[1 2, 3 : 4]"])
    def test_not_min_max_pairs(self, text: str) -> None:
        with pytest.raises(EnvelopeFormatError, match="min and max"):
            Envelope.parse(text)

    @pytest.mark.parametrize(
        "text, ordinate",
        [
            ("Env[a : 2, 3 : 4]", "x-min"),
            ("Env[1 : , 3 : 4]", "x-max"),
            ("Env[1 : 2, 1,5 : 4]", None),
            ("Env[1 : 2, 3x : 4]", "y-min"),
            ("Env[1 : 2, 3 : inf]", "y-max"),
            ("Env[1 : 2, 3 : NaN]", "y-max"),
            ("Env[1_0 : 2, 3 : 4]", "x-min"),
            ("Env[1 : 2, 3 : 1e999]", "y-max"),
        ],
    )
    def test_bad_numeric_field(self, text: str, ordinate) -> None:
        """The error names the ordinate that failed"""
        with pytest.raises(EnvelopeFormatError) as exc_info:
            Envelope.parse(text)
        assert exc_info.value.ordinate == ordinate

    def test_field_error_message(self) -> None:
        with pytest.raises(EnvelopeFormatError, match="y-max.*not finite"):
            Envelope.parse("Env[1 : 2, 3 : 1e999]")

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Envelope.parse("Env[x : 1, 2 : 3]")

    def test_ordinate_labels(self) -> None:
        assert ORDINATE_LABELS == ("x-min", "x-max", "y-min", "y-max")
