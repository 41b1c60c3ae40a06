from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.customer_entry import CustomerEntry
from ..models.normalized_model import NormalizedModel

"""Query/ranking engine over a NormalizedModel.

Three stateless queries back the dashboard views:

- top_n: the N highest entries of one (year, metric) slice
- merge_across_years: union of each year's top-N, ranked by the sum of values
- merge_across_metrics: customers ranked by positional score across metrics

None of them mutate the model. Ties keep first-encountered order: equal values
stay in CSV order, equal sums and scores stay in the order customers were first
collected.
"""

__all__ = [
    "YearComparisonRow",
    "MetricComparisonRow",
    "top_n",
    "merge_across_years",
    "merge_across_metrics",
]


@dataclass(frozen=True)
class YearComparisonRow:
    customer: str
    values: dict[str, float]  # year -> value (不在年は 0)

    @property
    def total(self) -> float:
        return sum(self.values.values())


@dataclass(frozen=True)
class MetricComparisonRow:
    customer: str
    values: dict[str, float]  # metric -> value (不在 metric は 0)
    score: int


def top_n(model: NormalizedModel, year: str, metric: str, n: int) -> list[CustomerEntry]:
    """First ``n`` entries of the slice, already sorted by value descending.

    Returns every entry when fewer than ``n`` exist and ``[]`` for an empty
    slice. Unknown years or metrics raise UnknownSelectionError.
    """
    if n < 0:
        raise ValueError(f"n must not be negative: {n}")
    return list(model.entries(year, metric)[:n])


def merge_across_years(
    model: NormalizedModel, years: Sequence[str], metric: str, n: int
) -> list[YearComparisonRow]:
    """Compare one metric across years for the union of each year's top-N customers.

    Values come from the full per-year slice, so a customer who is top-N in one
    year but ranked lower elsewhere still shows its real value there.
    """
    customers: dict[str, None] = {}
    for year in years:
        for entry in top_n(model, year, metric, n):
            customers.setdefault(entry.customer)

    rows = [
        YearComparisonRow(
            customer=customer,
            values={year: model.value_of(year, metric, customer) for year in years},
        )
        for customer in customers
    ]
    rows.sort(key=lambda r: r.total, reverse=True)
    return rows


def merge_across_metrics(
    model: NormalizedModel, year: str, metrics: Sequence[str], n: int
) -> list[MetricComparisonRow]:
    """Rank customers across several metrics of one year by positional score.

    A customer at position ``i`` of a metric's top-N list scores ``n - i`` for
    that metric; scores are summed over metrics and the ``n`` best are kept.
    This favours customers ranking well on many metrics over raw value sums.
    """
    scores: dict[str, int] = {}
    for metric in metrics:
        for i, entry in enumerate(top_n(model, year, metric, n)):
            scores[entry.customer] = scores.get(entry.customer, 0) + (n - i)

    ranked = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)[:n]
    return [
        MetricComparisonRow(
            customer=customer,
            values={metric: model.value_of(year, metric, customer) for metric in metrics},
            score=score,
        )
        for customer, score in ranked
    ]
