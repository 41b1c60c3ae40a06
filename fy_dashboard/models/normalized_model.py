from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .customer_entry import CustomerEntry

"""NormalizedModel: financial year -> metric -> ranked customer entries.

The model is built once per CSV load by the normalizer and is read-only
afterwards. Slices are tuples wrapped in mapping proxies so that view queries
cannot mutate shared state.
"""

__all__ = [
    "NormalizedModel",
    "UnknownSelectionError",
]


class UnknownSelectionError(KeyError):
    """Raised when a year or metric is not part of the loaded model.

    An existing slice without entries is NOT an error; it yields an empty tuple.
    """


@dataclass(frozen=True)
class NormalizedModel:
    """Ranked customer entries for every (year, metric) pair.

    Attributes:
        years: Known financial years in configured order
        metrics: Metric names in CSV header order
        slices: year -> metric -> entries sorted by value descending
    """
    years: tuple[str, ...]
    metrics: tuple[str, ...]
    slices: Mapping[str, Mapping[str, tuple[CustomerEntry, ...]]]
    # customer -> value lookup per slice (先頭 = 最大値を採用)
    _lookup: dict[tuple[str, str], dict[str, float]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    @classmethod
    def build(
        cls,
        years: Iterable[str],
        metrics: Iterable[str],
        buckets: Mapping[str, Mapping[str, list[CustomerEntry]]],
    ) -> NormalizedModel:
        """Freeze mutable buckets into a model covering years x metrics."""
        years_t = tuple(years)
        metrics_t = tuple(metrics)
        frozen: dict[str, Mapping[str, tuple[CustomerEntry, ...]]] = {}
        for year in years_t:
            per_year = buckets.get(year, {})
            frozen[year] = MappingProxyType(
                {metric: tuple(per_year.get(metric, ())) for metric in metrics_t}
            )
        return cls(years=years_t, metrics=metrics_t, slices=MappingProxyType(frozen))

    def __getitem__(self, year: str) -> Mapping[str, tuple[CustomerEntry, ...]]:
        try:
            return self.slices[year]
        except KeyError:
            raise UnknownSelectionError(f"unknown financial year: {year!r}") from None

    def entries(self, year: str, metric: str) -> tuple[CustomerEntry, ...]:
        per_year = self[year]
        try:
            return per_year[metric]
        except KeyError:
            raise UnknownSelectionError(f"unknown metric: {metric!r}") from None

    def value_of(self, year: str, metric: str, customer: str) -> float:
        """Customer's value in the full slice, 0 when the customer is absent."""
        key = (year, metric)
        lookup = self._lookup.get(key)
        if lookup is None:
            lookup = {}
            for entry in self.entries(year, metric):
                lookup.setdefault(entry.customer, entry.value)
            self._lookup[key] = lookup
        return lookup.get(customer, 0.0)

    @property
    def customers(self) -> set[str]:
        return {
            e.customer
            for per_year in self.slices.values()
            for slice_ in per_year.values()
            for e in slice_
        }

    @property
    def entry_count(self) -> int:
        return sum(len(s) for per_year in self.slices.values() for s in per_year.values())

    def is_empty(self) -> bool:
        return self.entry_count == 0
