from __future__ import annotations

from dataclasses import dataclass

"""RawRow model for the financial-year dashboard.

RawRow represents a single CSV data line after the header has been applied.
Rows are transient: the normalizer consumes each one exactly once.
"""

__all__ = [
    "RawRow",
]


@dataclass(frozen=True)
class RawRow:
    """Typed representation of one physical CSV data line.

    ``label`` is the value of the label column (financial year, customer name
    or the aggregate sentinel). ``values`` maps every metric column to its
    numeric value, ``None`` when the cell is blank or not a number.
    The row_number is the 1-based CSV line number (header = line 1).
    """
    row_number: int
    label: str | None
    values: dict[str, float | None]

    def value(self, metric: str) -> float:
        """Metric value with blanks treated as 0."""
        v = self.values.get(metric)
        return v if v else 0.0
