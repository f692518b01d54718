"""Tests for templates, combined ids and e-mail domains."""

import pytest

from strutil import build_string_from_template, get_domain_from_email, to_combined_id


class TestBuildStringFromTemplate:
    def test_one_param(self) -> None:
        assert build_string_from_template("{test} blah", 3) == "3 blah"

    def test_none_template(self) -> None:
        assert build_string_from_template(None, 1, 2) is None

    def test_no_values_returns_same_object(self) -> None:
        template = "{test} blah {bar}"
        assert build_string_from_template(template) is template

    def test_no_placeholder_returns_same_object(self) -> None:
        template = "nothing to replace"
        assert build_string_from_template(template, 1) is template

    def test_value_braces_not_rescanned(self) -> None:
        assert build_string_from_template("{a} {b}", "{x}", 2) == "{x} 2"

    def test_placeholder_text_ignored(self) -> None:
        assert build_string_from_template("{id} {id} {id}", "a", "b", "c") == "a b c"

    def test_object_str(self) -> None:
        class Point:
            def __str__(self) -> str:
                return "(1, 2)"

        assert build_string_from_template("at {p}", Point()) == "at (1, 2)"

    def test_trailing_nulls_leave_placeholders(self) -> None:
        assert build_string_from_template("{a}-{b}", None, 1, None) == "1-{b}"


class TestToCombinedId:
    def test_with_null(self) -> None:
        assert to_combined_id() == ""

    def test_with_double_null(self) -> None:
        assert to_combined_id(None, None) == ""

    def test_single_value_verbatim(self) -> None:
        assert to_combined_id(None, "only", "") == "only"

    def test_custom_separator(self) -> None:
        assert to_combined_id("a", "b", separator="|") == "a|b"

    @pytest.mark.parametrize(
        "keys",
        [
            ["tenant", "user", "42"],
            ["a", None, "", "b"],
            [" ", "\t", "x"],
        ],
    )
    def test_split_reconstructs_non_empty_keys(self, keys: list[str | None]) -> None:
        expected = [k for k in keys if k]
        assert to_combined_id(*keys).split(":") == expected


class TestGetDomainFromEmail:
    def test_gets_domain(self) -> None:
        assert get_domain_from_email("blah@blah.com") == "blah.com"

    def test_last_at_wins(self) -> None:
        assert get_domain_from_email('"a@b"@example.org') == "example.org"

    @pytest.mark.parametrize("address", [None, "", "no-at-sign", "user@"])
    def test_not_found(self, address: str | None) -> None:
        assert get_domain_from_email(address) is None
