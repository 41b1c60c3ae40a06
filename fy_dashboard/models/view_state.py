from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

"""Per-view selection state for the dashboard.

Each view owns one immutable selection object. State changes go through the
object's own methods, which return a new value. Invariants (at least one year
or metric selected, a cap on compared metrics) are enforced here by returning
the unchanged selection instead of raising.
"""

__all__ = [
    "Tab",
    "SingleMetricSelection",
    "YearComparisonSelection",
    "MetricComparisonSelection",
]


class Tab(Enum):
    """Dashboard tabs, one per view."""
    SINGLE = "single"
    YEARS = "years"
    METRICS = "metrics"

    @property
    def label(self) -> str:
        return _TAB_LABELS[self]


_TAB_LABELS = {
    Tab.SINGLE: "Single Metric View",
    Tab.YEARS: "Year Comparison",
    Tab.METRICS: "Metric Comparison",
}


def _check_top_n(top_n: int) -> int:
    if not isinstance(top_n, int) or isinstance(top_n, bool) or top_n < 1:
        raise ValueError(f"top_n must be a positive integer: {top_n!r}")
    return top_n


@dataclass(frozen=True)
class SingleMetricSelection:
    """Selection for the top-customers view: one year, one metric."""
    year: str
    metric: str
    top_n: int = 10

    def __post_init__(self) -> None:
        _check_top_n(self.top_n)

    def with_year(self, year: str) -> SingleMetricSelection:
        return replace(self, year=year)

    def with_metric(self, metric: str) -> SingleMetricSelection:
        return replace(self, metric=metric)

    def with_top_n(self, top_n: int) -> SingleMetricSelection:
        return replace(self, top_n=top_n)


@dataclass(frozen=True)
class YearComparisonSelection:
    """Selection for the year-over-year view: one metric, one or more years."""
    metric: str
    years: tuple[str, ...]
    top_n: int = 5

    def __post_init__(self) -> None:
        _check_top_n(self.top_n)
        if not self.years:
            raise ValueError("at least one year must be selected")

    def with_metric(self, metric: str) -> YearComparisonSelection:
        return replace(self, metric=metric)

    def with_top_n(self, top_n: int) -> YearComparisonSelection:
        return replace(self, top_n=top_n)

    def toggle_year(self, year: str) -> YearComparisonSelection:
        """Add or remove a year. Removing the last selected year is a no-op."""
        if year in self.years:
            if len(self.years) == 1:
                return self
            return replace(self, years=tuple(y for y in self.years if y != year))
        return replace(self, years=self.years + (year,))

    def select_all_years(self, all_years: Sequence[str]) -> YearComparisonSelection:
        return replace(self, years=tuple(all_years))

    def is_selected(self, year: str) -> bool:
        return year in self.years


@dataclass(frozen=True)
class MetricComparisonSelection:
    """Selection for the multi-metric view: one year, 1..max_selected metrics."""
    year: str
    metrics: tuple[str, ...]
    top_n: int = 5
    max_selected: int = 5

    def __post_init__(self) -> None:
        _check_top_n(self.top_n)
        if not self.metrics:
            raise ValueError("at least one metric must be selected")
        if len(self.metrics) > self.max_selected:
            raise ValueError(
                f"at most {self.max_selected} metrics can be selected, got {len(self.metrics)}"
            )

    def with_year(self, year: str) -> MetricComparisonSelection:
        return replace(self, year=year)

    def with_top_n(self, top_n: int) -> MetricComparisonSelection:
        return replace(self, top_n=top_n)

    def toggle_metric(self, metric: str) -> MetricComparisonSelection:
        """Add or remove a metric.

        Removing the last metric and adding beyond ``max_selected`` are both no-ops.
        """
        if metric in self.metrics:
            if len(self.metrics) == 1:
                return self
            return replace(self, metrics=tuple(m for m in self.metrics if m != metric))
        if len(self.metrics) >= self.max_selected:
            return self
        return replace(self, metrics=self.metrics + (metric,))

    @property
    def remaining_slots(self) -> int:
        return self.max_selected - len(self.metrics)

    def is_disabled(self, metric: str) -> bool:
        """True when the metric cannot be added because the cap is reached."""
        return metric not in self.metrics and self.remaining_slots <= 0
