from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

"""Display formatting helpers: customer-name shortening and currency labels.

Rounding is half-up throughout (2500 -> "$3K"), matching what chart labels
and tooltips show in the browser.
"""

__all__ = [
    "SHORT_NAME_MAX",
    "shorten_name",
    "format_currency",
    "format_amount",
]

SHORT_NAME_MAX = 25

# whitespace-delimited legal-entity separators ("Pty." は "Pty" より後に試行)
_SEPARATORS = re.compile(r"\s+(?:of|as|atf|t/as|Pty|Ltd|Limited|Pty\.)\s+", re.IGNORECASE)


def shorten_name(name: str | None) -> str:
    """Shorten a long customer name for axis labels.

    Names up to 25 characters are returned unchanged. Longer names are cut at
    the first legal-entity separator word, e.g.
    ``"Acme Pty Ltd t/as Green Solutions"`` -> ``"Acme"``.
    """
    if not name:
        return ""
    if len(name) <= SHORT_NAME_MAX:
        return name
    return _SEPARATORS.split(name, maxsplit=1)[0].strip()


def _round_half_up(value: float, places: str) -> Decimal:
    return Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_currency(value: float) -> str:
    """Compact currency label: $1.50M, $45K, $750."""
    if value >= 1_000_000:
        return f"${_round_half_up(value / 1_000_000, '0.01')}M"
    if value >= 1_000:
        return f"${_round_half_up(value / 1_000, '1')}K"
    return f"${_round_half_up(value, '1')}"


def format_amount(value: float) -> str:
    """Full currency amount for row details: thousands separators, at most
    three decimals, trailing zeros dropped ($1,234.5)."""
    amount = _round_half_up(value, "0.001")
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return f"${text}"
