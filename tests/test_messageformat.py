"""Tests for the ICU-style message formatter.

Python 3.13+.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from babel import Locale
from hypothesis import given
from hypothesis import strategies as st

from localize.constants import MAX_DEPTH
from localize.diagnostics import DiagnosticCode, MessageFormatError
from localize.runtime.messageformat import format_message
from tests.strategies import argument_names, plain_templates

EN = Locale.parse("en")
DE = Locale.parse("de")
RU = Locale.parse("ru")

PEOPLE = (
    "{num_people, plural, =0{There are no people} one{There is one person} "
    "other{There are # people}} on {location}."
)
CLICKED = "Clicked {count, plural, one{# time} other{# times}}!"
GUESTS = (
    "{n, plural, offset:1 =0{nobody} =1{{host}} "
    "one{{host} and # other} other{{host} and # others}}"
)
ORDINAL = "{n, selectordinal, one{#st} two{#nd} few{#rd} other{#th}}"


class TestSimplePlaceholders:
    """{name} substitutes the argument value."""

    def test_positional(self) -> None:
        """Positional placeholders use stringified indices."""
        assert format_message("{0}-{1}", {"0": "X", "1": "Y"}, EN) == "X-Y"

    def test_named_order_independent(self) -> None:
        """Named arguments are looked up by name."""
        assert format_message("{a}, {b}", {"b": "Y", "a": "X"}, EN) == "X, Y"

    def test_repeated_placeholder(self) -> None:
        """The same argument may appear more than once."""
        assert format_message("{a}{a}", {"a": "x"}, EN) == "xx"

    def test_whitespace_in_placeholder(self) -> None:
        """Whitespace around the name is ignored."""
        assert format_message("{ name }", {"name": "Anna"}, EN) == "Anna"

    def test_number_uses_locale(self) -> None:
        """Numbers are formatted with the locale's separators."""
        assert format_message("{n}", {"n": 1234567}, EN) == "1,234,567"
        assert format_message("{n}", {"n": 1234.5}, DE) == "1.234,5"

    def test_decimal(self) -> None:
        """Decimal values are numbers too."""
        assert format_message("{n}", {"n": Decimal("1234.50")}, EN) == "1,234.5"

    def test_bool_is_not_a_number(self) -> None:
        """bool values render as their str()."""
        assert format_message("{flag}", {"flag": True}, EN) == "True"

    def test_none_renders_null(self) -> None:
        """None renders as 'null'."""
        assert format_message("Hello {name}", {"name": None}, EN) == "Hello null"

    def test_date(self) -> None:
        """Dates use the locale's short date format."""
        assert format_message("{d}", {"d": date(2024, 1, 15)}, Locale.parse("en_US")) == "1/15/24"
        assert format_message("{d}", {"d": date(2024, 1, 15)}, DE) == "15.01.24"

    def test_missing_argument_rendered_back(self) -> None:
        """A placeholder without an argument renders as {name}."""
        assert format_message("Hello {name}!", {"other": 1}, EN) == "Hello {name}!"

    def test_locale_defaults_to_en_us(self) -> None:
        """Without a locale, en_US conventions apply."""
        assert format_message("{n}", {"n": 1000}) == "1,000"


class TestNumberPlaceholders:
    """{name, number[, style]} formats numerically."""

    def test_number(self) -> None:
        assert format_message("{n, number}", {"n": 1234567}, EN) == "1,234,567"

    def test_integer(self) -> None:
        assert format_message("{n, number, integer}", {"n": 1234.4}, EN) == "1,234"

    def test_percent(self) -> None:
        assert format_message("{r, number, percent}", {"r": 0.25}, EN) == "25%"

    def test_pattern(self) -> None:
        assert format_message("{n, number, #,##0.00}", {"n": 3.5}, EN) == "3.50"

    def test_non_numeric_rejected(self) -> None:
        """Strings cannot be formatted as numbers."""
        with pytest.raises(MessageFormatError) as exc_info:
            format_message("{n, number}", {"n": "many"}, EN)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.PROCESSING_FAILED


class TestPlural:
    """{name, plural, ...} selects by CLDR plural category."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(1, "Clicked 1 time!"), (2, "Clicked 2 times!"), (0, "Clicked 0 times!")],
    )
    def test_english(self, count: int, expected: str) -> None:
        assert format_message(CLICKED, {"count": count}, EN) == expected

    def test_exact_match_wins(self) -> None:
        """=0 is checked before the category."""
        result = format_message(PEOPLE, {"num_people": 0, "location": "campus"}, EN)
        assert result == "There are no people on campus."

    def test_pound_formatted(self) -> None:
        """# renders the number with locale grouping."""
        result = format_message(PEOPLE, {"num_people": 1000, "location": "campus"}, EN)
        assert result == "There are 1,000 people on campus."

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(1, "one"), (2, "few"), (5, "many"), (21, "one")],
    )
    def test_russian_categories(self, count: int, expected: str) -> None:
        template = "{n, plural, one{one} few{few} many{many} other{other}}"
        assert format_message(template, {"n": count}, RU) == expected

    def test_missing_category_uses_other(self) -> None:
        """A category without a branch falls back to other."""
        template = "{n, plural, one{one} other{other}}"
        assert format_message(template, {"n": 5}, RU) == "other"

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, "nobody"),
            (1, "Ann"),
            (2, "Ann and 1 other"),
            (3, "Ann and 2 others"),
        ],
    )
    def test_offset(self, count: int, expected: str) -> None:
        """offset shifts the category value and #, not exact matches."""
        assert format_message(GUESTS, {"n": count, "host": "Ann"}, EN) == expected

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (22, "22nd")],
    )
    def test_selectordinal(self, n: int, expected: str) -> None:
        assert format_message(ORDINAL, {"n": n}, EN) == expected

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(MessageFormatError):
            format_message(CLICKED, {"count": "two"}, EN)

    def test_nested_placeholders(self) -> None:
        """Branches may contain placeholders and nested selects."""
        template = (
            "{gender, select, female{{n, plural, one{She has # cat} other{She has # cats}}} "
            "other{{n, plural, one{They have # cat} other{They have # cats}}}}"
        )
        assert format_message(template, {"gender": "female", "n": 2}, EN) == "She has 2 cats"
        assert format_message(template, {"gender": "x", "n": 1}, EN) == "They have 1 cat"

    @pytest.mark.parametrize("n", [float("inf"), float("-inf"), float("nan"), Decimal("Infinity")])
    def test_non_finite_uses_other(self, n: float | Decimal) -> None:
        """Infinity and NaN have no CLDR category; they select 'other'."""
        assert format_message("{n, plural, one{one} other{many}}", {"n": n}, EN) == "many"
        assert format_message("{n, selectordinal, one{st} other{th}}", {"n": n}, EN) == "th"

    def test_infinity_pound(self) -> None:
        assert format_message(CLICKED, {"count": float("inf")}, EN) == "Clicked ∞ times!"

    @given(n=st.integers(min_value=0, max_value=10**6))
    def test_english_one_only_for_one(self, n: int) -> None:
        """Property: English selects 'one' exactly for 1."""
        result = format_message("{n, plural, one{one} other{other}}", {"n": n}, EN)
        assert result == ("one" if n == 1 else "other")


class TestSelect:
    """{name, select, ...} matches str(value)."""

    TEMPLATE = "{gender, select, female{she} male{he} other{they}}"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("female", "she"), ("male", "he"), ("robot", "they"), (None, "they")],
    )
    def test_select(self, value: object, expected: str) -> None:
        assert format_message(self.TEMPLATE, {"gender": value}, EN) == expected


class TestQuoting:
    """Apostrophes quote syntax characters."""

    def test_doubled_apostrophe(self) -> None:
        assert format_message("It''s {name}", {"name": "Anna"}, EN) == "It's Anna"

    def test_lone_apostrophe_is_literal(self) -> None:
        assert format_message("I'm {name}", {"name": "Anna"}, EN) == "I'm Anna"

    def test_quoted_braces(self) -> None:
        assert format_message("'{name}' is {name}", {"name": "Anna"}, EN) == "{name} is Anna"

    def test_quoted_pound_in_plural(self) -> None:
        template = "{n, plural, other{'#' is #}}"
        assert format_message(template, {"n": 5}, EN) == "# is 5"

    def test_pound_outside_plural_is_literal(self) -> None:
        assert format_message("#{n}", {"n": 1}, EN) == "#1"

    def test_unterminated_quote_runs_to_end(self) -> None:
        assert format_message("a '{b} c", {"b": 1}, EN) == "a {b} c"


class TestMalformedTemplates:
    """Malformed templates raise MessageFormatError with a position."""

    @pytest.mark.parametrize(
        "template",
        [
            "Hello {name",
            "a } b",
            "{}",
            "{x, date}",
            "{n, plural, one{x}}",
            "{n, plural, one{x} other{y}",
            "{n, plural, =abc{x} other{y}}",
            "{n, plural, offset:x other{y}}",
            "{n, select, other}",
        ],
    )
    def test_rejected(self, template: str) -> None:
        with pytest.raises(MessageFormatError) as exc_info:
            format_message(template, {"name": "x", "n": 1, "x": 1}, EN)
        error = exc_info.value
        assert error.template == template
        assert 0 <= error.position <= len(template)
        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.TEMPLATE_INVALID

    def test_unmatched_brace_position(self) -> None:
        with pytest.raises(MessageFormatError) as exc_info:
            format_message("ab}", {"a": 1}, EN)
        assert exc_info.value.position == 2

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            format_message("{", {"a": 1}, EN)

class TestNestingDepth:
    """Nesting of select/plural arguments is limited to MAX_DEPTH."""

    @staticmethod
    def _nested(depth: int) -> str:
        return "{a, select, other{" * depth + "x" + "}}" * depth

    def test_maximum_depth_accepted(self) -> None:
        assert format_message(self._nested(MAX_DEPTH), {"a": 1}, EN) == "x"

    def test_one_level_deeper_rejected(self) -> None:
        with pytest.raises(MessageFormatError) as exc_info:
            format_message(self._nested(MAX_DEPTH + 1), {"a": 1}, EN)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.TEMPLATE_INVALID

    def test_far_beyond_recursion_limit_rejected(self) -> None:
        """Very deep templates fail as malformed, not with RecursionError."""
        with pytest.raises(MessageFormatError, match="deeper than"):
            format_message(self._nested(2000), {"a": 1}, EN)

    def test_plural_branches_count_toward_depth(self) -> None:
        template = "{n, plural, other{" * (MAX_DEPTH + 1) + "#" + "}}" * (MAX_DEPTH + 1)
        with pytest.raises(MessageFormatError):
            format_message(template, {"n": 2}, EN)

    def test_sibling_branches_do_not_accumulate(self) -> None:
        """Depth is nesting depth; many branches side by side are fine."""
        siblings = "".join(f"{{a, select, v{i}{{{i}}} other{{-}}}}" for i in range(MAX_DEPTH * 2))
        assert format_message(siblings, {"a": "v3"}, EN) == "-" * 3 + "3" + "-" * (MAX_DEPTH * 2 - 4)



class TestProperties:
    """Invariants over generated templates."""

    @given(template=plain_templates())
    def test_plain_text_unchanged(self, template: str) -> None:
        """Property: text without syntax characters is returned as-is."""
        assert format_message(template, {"unused": 1}, EN) == template

    @given(
        name=argument_names(),
        value=st.text(alphabet="abcdefghijklmnopqrstuvwxyz ", max_size=20),
        prefix=plain_templates(),
    )
    def test_string_substitution(self, name: str, value: str, prefix: str) -> None:
        """Property: string arguments are inserted verbatim."""
        assert format_message(prefix + "{" + name + "}", {name: value}, DE) == prefix + value
