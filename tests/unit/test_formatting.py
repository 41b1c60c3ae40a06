from __future__ import annotations

import pytest

from fy_dashboard.services.formatting import (
    SHORT_NAME_MAX,
    format_amount,
    format_currency,
    shorten_name,
)


def test_short_names_unchanged():
    assert shorten_name("Acme") == "Acme"
    name = "x" * SHORT_NAME_MAX
    assert shorten_name(name) == name


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Acme Pty Ltd t/as Green Solutions", "Acme"),
        ("Smith Family Holdings atf Smith Family Trust", "Smith Family Holdings"),
        ("Northern Regional Council of New South Wales", "Northern Regional Council"),
        ("Globex Corporation Limited Australia", "Globex Corporation"),
        ("Initech Consulting PTY LTD Melbourne", "Initech Consulting"),
    ],
)
def test_long_names_cut_at_first_separator(name, expected):
    assert shorten_name(name) == expected


def test_long_name_without_separator_unchanged():
    name = "Supercalifragilistic Enterprises"
    assert len(name) > SHORT_NAME_MAX
    assert shorten_name(name) == name


def test_separator_must_be_whole_word():
    # "Ltd" inside a word is not a separator
    name = "Astoundingly Ltdlike Things Group"
    assert shorten_name(name) == name


def test_missing_name_is_empty():
    assert shorten_name(None) == ""
    assert shorten_name("") == ""


@pytest.mark.parametrize(
    "value,expected",
    [
        (1_500_000, "$1.50M"),
        (1_000_000, "$1.00M"),
        (45_000, "$45K"),
        (12_345, "$12K"),
        (2_500, "$3K"),
        (500.5, "$501"),
        (1_005_000, "$1.01M"),
        (1_000, "$1K"),
        (750, "$750"),
        (0, "$0"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_amount():
    assert format_amount(1234567) == "$1,234,567"
    assert format_amount(1234.5) == "$1,234.5"
    assert format_amount(0.12345) == "$0.123"
    assert format_amount(2.0005) == "$2.001"
