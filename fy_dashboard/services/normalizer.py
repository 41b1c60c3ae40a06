from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Any

from ..csvdata.reader import EmptyDataError, MissingColumnsError
from ..models.customer_entry import CustomerEntry
from ..models.normalized_model import NormalizedModel
from ..models.raw_row import RawRow

"""Data normalizer: flat CSV rows -> NormalizedModel.

The source table interleaves section header rows (a financial-year label in the
label column), customer rows and an aggregate "Grand Total" row. The normalizer
scans the rows once, tracking which year section it is in, and collects every
positive metric value as a CustomerEntry of that year.

The scan is a fold over the rows carrying a small state machine:

    NoCurrentYear --(year label)--> InYear(y) --(year label)--> InYear(y')

Rows seen before the first year label, aggregate rows and rows with an empty
label never contribute entries.
"""

__all__ = [
    "DEFAULT_LABEL_COLUMN",
    "DEFAULT_AGGREGATE_LABEL",
    "derive_metrics",
    "coerce_row",
    "normalize",
]

DEFAULT_LABEL_COLUMN = "Financial Year"
DEFAULT_AGGREGATE_LABEL = "Grand Total"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ScanState:
    """Fold accumulator: the current-year cursor plus the entries collected so far.

    ``year`` is None while no year section has started (NoCurrentYear).
    """
    year: str | None
    buckets: dict[str, dict[str, list[CustomerEntry]]]


def derive_metrics(
    columns: Sequence[str],
    label_column: str = DEFAULT_LABEL_COLUMN,
    aggregate_column: str = DEFAULT_AGGREGATE_LABEL,
) -> list[str]:
    """Metric columns in header order: everything but the label and aggregate columns."""
    if label_column not in columns:
        raise MissingColumnsError(f"label column {label_column!r} missing from header: {list(columns)}")
    return [c for c in columns if c != label_column and c != aggregate_column]


def _to_number(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", "").replace("$", "")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _to_label(raw: Any) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, float) and math.isnan(raw):
        return None
    label = str(raw).strip()
    return label or None


def coerce_row(
    row_number: int,
    record: Mapping[str, Any],
    metrics: Sequence[str],
    label_column: str = DEFAULT_LABEL_COLUMN,
) -> RawRow:
    """Validate one parsed record against the metric set and type its cells."""
    return RawRow(
        row_number=row_number,
        label=_to_label(record.get(label_column)),
        values={m: _to_number(record.get(m)) for m in metrics},
    )


def _scan(
    known_years: frozenset[str],
    metrics: Sequence[str],
    aggregate_label: str,
):
    def step(state: _ScanState, row: RawRow) -> _ScanState:
        label = row.label
        if label in known_years:
            return _ScanState(year=label, buckets=state.buckets)
        if state.year is None or not label or label == aggregate_label:
            return state
        per_year = state.buckets[state.year]
        for metric in metrics:
            value = row.value(metric)
            if value > 0:
                per_year[metric].append(CustomerEntry(customer=label, value=value))
        return state

    return step


def normalize(
    rows: Sequence[Mapping[str, Any]],
    known_years: Sequence[str],
    *,
    label_column: str = DEFAULT_LABEL_COLUMN,
    aggregate_column: str = DEFAULT_AGGREGATE_LABEL,
    aggregate_label: str = DEFAULT_AGGREGATE_LABEL,
    columns: Sequence[str] | None = None,
) -> NormalizedModel:
    """Build the NormalizedModel from parsed CSV rows.

    Parameters
    ----------
    rows: parsed records (column name -> value) in file order
    known_years: financial-year labels, in display order
    columns: header columns; defaults to the keys of the first row

    Raises
    ------
    EmptyDataError: ``rows`` is empty
    MissingColumnsError: the label column is not in the header
    """
    if not rows:
        raise EmptyDataError("no data rows to normalize")
    header = list(columns) if columns is not None else list(rows[0].keys())
    metrics = derive_metrics(header, label_column, aggregate_column)
    years = list(dict.fromkeys(known_years))

    typed = [coerce_row(i + 2, r, metrics, label_column) for i, r in enumerate(rows)]
    initial = _ScanState(
        year=None,
        buckets={y: {m: [] for m in metrics} for y in years},
    )
    final = reduce(_scan(frozenset(years), metrics, aggregate_label), typed, initial)

    for per_year in final.buckets.values():
        for metric, entries in per_year.items():
            # stable: 同値は CSV 出現順を維持
            per_year[metric] = sorted(entries, key=lambda e: e.value, reverse=True)

    model = NormalizedModel.build(years, metrics, final.buckets)
    logger.debug(
        "normalized rows=%d years=%d metrics=%d entries=%d",
        len(typed), len(years), len(metrics), model.entry_count,
    )
    return model
