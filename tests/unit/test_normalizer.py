from __future__ import annotations

import pytest

from fy_dashboard.csvdata.reader import EmptyDataError, MissingColumnsError, read_csv_text
from fy_dashboard.models.customer_entry import CustomerEntry
from fy_dashboard.services.normalizer import coerce_row, derive_metrics, normalize
from fy_dashboard.services.ranking import top_n

YEARS = ["FY 2022", "FY 2023", "FY 2024"]


def _model_from_text(text: str, years=YEARS):
    table = read_csv_text(text, "Financial Year")
    return normalize(table.rows, years, columns=table.columns)


def test_end_to_end_example(sample_csv_text: str):
    model = _model_from_text(sample_csv_text)
    assert model.metrics == ("MetricA", "MetricB")
    assert top_n(model, "FY 2022", "MetricA", 10) == [
        CustomerEntry("Acme", 500),
        CustomerEntry("Globex", 300),
    ]
    # Acme の MetricB は 0 なので除外
    assert top_n(model, "FY 2022", "MetricB", 10) == [CustomerEntry("Globex", 100)]
    assert top_n(model, "FY 2023", "MetricA", 10) == [CustomerEntry("Acme", 200)]


def test_every_year_metric_pair_present(sample_csv_text: str):
    model = _model_from_text(sample_csv_text)
    for year in YEARS:
        for metric in model.metrics:
            assert metric in model[year]
    assert model["FY 2024"]["MetricA"] == ()
    assert model["FY 2024"]["MetricB"] == ()


def test_metrics_exclude_label_and_aggregate_in_header_order():
    cols = ["Zeta", "Financial Year", "Alpha", "Grand Total", "Mid"]
    assert derive_metrics(cols) == ["Zeta", "Alpha", "Mid"]


def test_missing_label_column_raises():
    rows = [{"Customer": "Acme", "MetricA": 1}]
    with pytest.raises(MissingColumnsError):
        normalize(rows, YEARS)


def test_empty_rows_raise_empty_data_error():
    with pytest.raises(EmptyDataError):
        normalize([], YEARS)


def test_rows_before_first_year_and_aggregate_rows_are_skipped():
    rows = [
        {"Financial Year": "Preamble Co", "m": 999},
        {"Financial Year": "FY 2022", "m": None},
        {"Financial Year": "Acme", "m": 10},
        {"Financial Year": None, "m": 50},
        {"Financial Year": "   ", "m": 60},
        {"Financial Year": "Grand Total", "m": 10},
    ]
    model = normalize(rows, YEARS)
    assert model.entries("FY 2022", "m") == (CustomerEntry("Acme", 10),)


def test_year_label_switches_cursor():
    rows = [
        {"Financial Year": "FY 2023", "m": None},
        {"Financial Year": "Acme", "m": 1},
        {"Financial Year": "FY 2022", "m": None},
        {"Financial Year": "Acme", "m": 2},
    ]
    model = normalize(rows, YEARS)
    assert model.entries("FY 2023", "m") == (CustomerEntry("Acme", 1),)
    assert model.entries("FY 2022", "m") == (CustomerEntry("Acme", 2),)


def test_zero_negative_and_non_numeric_values_are_dropped():
    rows = [
        {"Financial Year": "FY 2022", "m": None},
        {"Financial Year": "Neg", "m": -5},
        {"Financial Year": "Zero", "m": 0},
        {"Financial Year": "Text", "m": "n/a"},
        {"Financial Year": "Commas", "m": "1,250"},
        {"Financial Year": "Dollar", "m": "$75"},
    ]
    model = normalize(rows, YEARS)
    assert model.entries("FY 2022", "m") == (
        CustomerEntry("Commas", 1250),
        CustomerEntry("Dollar", 75),
    )


def test_sort_descending_with_ties_in_encounter_order():
    rows = [
        {"Financial Year": "FY 2022", "m": None},
        {"Financial Year": "First", "m": 10},
        {"Financial Year": "Big", "m": 50},
        {"Financial Year": "Second", "m": 10},
        {"Financial Year": "Third", "m": 10},
    ]
    model = normalize(rows, YEARS)
    assert [e.customer for e in model.entries("FY 2022", "m")] == ["Big", "First", "Second", "Third"]


def test_model_is_read_only(sample_csv_text: str):
    model = _model_from_text(sample_csv_text)
    with pytest.raises(TypeError):
        model.slices["FY 2022"]["MetricA"] = ()  # type: ignore[index]
    with pytest.raises(TypeError):
        model.slices["FY 2025"] = {}  # type: ignore[index]


def test_coerce_row_types_cells():
    row = coerce_row(3, {"Financial Year": " Acme ", "a": "12", "b": None, "c": float("nan")}, ["a", "b", "c"])
    assert row.row_number == 3
    assert row.label == "Acme"
    assert row.values == {"a": 12.0, "b": None, "c": None}
    assert row.value("b") == 0.0


def test_custom_label_and_aggregate_columns():
    rows = [
        {"Label": "Year A", "x": None, "Total": None},
        {"Label": "Acme", "x": 3, "Total": 3},
        {"Label": "Sum", "x": 3, "Total": 3},
    ]
    model = normalize(
        rows,
        ["Year A"],
        label_column="Label",
        aggregate_column="Total",
        aggregate_label="Sum",
    )
    assert model.metrics == ("x",)
    assert model.entries("Year A", "x") == (CustomerEntry("Acme", 3),)
