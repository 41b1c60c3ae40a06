from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.normalized_model import NormalizedModel
from ..models.view_state import (
    MetricComparisonSelection,
    SingleMetricSelection,
    YearComparisonSelection,
)
from .formatting import shorten_name
from .ranking import merge_across_metrics, merge_across_years, top_n

"""View adapters: bind a view's selection state to the ranking engine.

Each view function returns a ViewResult holding one chart record per customer:
``customer``, ``short_name`` and a ``values`` mapping of series key -> number.
Series values live in their own mapping so a metric or year named "customer"
cannot overwrite the display fields. A dataset without metric columns yields
empty views.

Drawing the chart is left to the renderer; an empty ``rows`` list means the
renderer should show ``empty_message`` instead of a chart.
"""

__all__ = [
    "Series",
    "ViewResult",
    "SINGLE_SERIES_COLOR",
    "FALLBACK_SERIES_COLOR",
    "COMPARISON_EMPTY_MESSAGE",
    "popular_metrics",
    "single_metric_view",
    "year_comparison_view",
    "metric_comparison_view",
]

SINGLE_SERIES_COLOR = "#2563eb"
FALLBACK_SERIES_COLOR = "#8884d8"
COMPARISON_EMPTY_MESSAGE = "No data available for the selected criteria"


@dataclass(frozen=True)
class Series:
    key: str    # key in each row's "values" mapping
    label: str  # legend text
    color: str


@dataclass(frozen=True)
class ViewResult:
    title: str
    series: tuple[Series, ...]
    rows: list[dict[str, Any]]
    empty_message: str
    notes: tuple[str, ...] = field(default_factory=tuple)
    bottom_up: bool = False  # rows listed smallest first for bottom-up bar layouts

    @property
    def is_empty(self) -> bool:
        return not self.rows


def _row(customer: str, values: Mapping[str, float]) -> dict[str, Any]:
    return {"customer": customer, "short_name": shorten_name(customer), "values": dict(values)}


def popular_metrics(available: Sequence[str], priority: Sequence[str]) -> list[str]:
    """Metric picker order: configured priority metrics first, then the rest in header order."""
    head = [m for m in priority if m in available]
    return head + [m for m in available if m not in head]


def single_metric_view(
    model: NormalizedModel,
    selection: SingleMetricSelection,
    color: str = SINGLE_SERIES_COLOR,
) -> ViewResult:
    """Top customers for one metric in one year.

    Rows are returned smallest first so a horizontal bar chart lists the
    largest customer at the top.
    """
    entries = top_n(model, selection.year, selection.metric, selection.top_n) if model.metrics else []
    rows = [_row(e.customer, {"value": e.value}) for e in reversed(entries)]
    return ViewResult(
        title="Top Customers by Financial Metric",
        series=(Series(key="value", label=selection.metric, color=color),),
        rows=rows,
        empty_message=f"No data available for {selection.metric} in {selection.year}",
        notes=(
            "* Some customer names shortened for display purposes. Hover over bars to see full details.",
            f"* Showing top {selection.top_n} customers for {selection.metric} in {selection.year}.",
        ),
        bottom_up=True,
    )


def year_comparison_view(
    model: NormalizedModel,
    selection: YearComparisonSelection,
    year_colors: Mapping[str, str],
) -> ViewResult:
    """Same metric across the selected years, one series per year."""
    merged = (
        merge_across_years(model, selection.years, selection.metric, selection.top_n)
        if model.metrics
        else []
    )
    rows = [_row(r.customer, r.values) for r in merged]
    series = tuple(
        Series(key=y, label=y, color=year_colors.get(y, FALLBACK_SERIES_COLOR))
        for y in selection.years
    )
    return ViewResult(
        title="Financial Year Comparison",
        series=series,
        rows=rows,
        empty_message=COMPARISON_EMPTY_MESSAGE,
        notes=(
            f"* Showing top {selection.top_n} customers for {selection.metric} across selected years.",
            "* Names are shortened for display. Hover over bars for full details.",
        ),
    )


def metric_comparison_view(
    model: NormalizedModel,
    selection: MetricComparisonSelection,
    metric_colors: Sequence[str],
) -> ViewResult:
    """Several metrics side by side for one year, one series per metric."""
    merged = (
        merge_across_metrics(model, selection.year, selection.metrics, selection.top_n)
        if model.metrics
        else []
    )
    rows = [_row(r.customer, r.values) for r in merged]
    palette = list(metric_colors) or [FALLBACK_SERIES_COLOR]
    series = tuple(
        Series(key=m, label=m, color=palette[i % len(palette)])
        for i, m in enumerate(selection.metrics)
    )
    return ViewResult(
        title="Financial Metrics Comparison",
        series=series,
        rows=rows,
        empty_message=COMPARISON_EMPTY_MESSAGE,
        notes=(
            f"* Showing top {selection.top_n} customers across {len(selection.metrics)} metrics "
            f"for {selection.year}.",
            "* Names are shortened for display. Hover over bars for full details.",
        ),
    )
