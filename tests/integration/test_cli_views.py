from __future__ import annotations

from pathlib import Path

import pytest

from fy_dashboard.cli import main as cli_main
from fy_dashboard.logging.init import reset_logging

"""End-to-end CLI runs: config + CSV on disk -> rendered text view."""


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


def test_single_view_default(temp_workdir: Path, write_config, write_csv, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Loading data from:" in out
    assert "INFO view=single rows=2" in out
    assert "[Single Metric View]" in out
    assert "Top Customers by Financial Metric" in out
    # テキスト表は大きい順
    assert out.index("$500") < out.index("$300")
    assert "* Showing top 10 customers for MetricA in FY 2022." in out


def test_single_view_selection(temp_workdir: Path, write_config, write_csv, capsys):
    code = cli_main(["--year", "FY 2023", "--metric", "MetricB", "--top", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO view=single rows=1" in out
    assert "$50" in out


def test_single_view_empty_slice(temp_workdir: Path, write_config, write_csv, capsys):
    code = cli_main(["--year", "FY 2024"])
    out = capsys.readouterr().out
    assert code == 0
    assert "No data available for MetricA in FY 2024" in out


def test_year_comparison_view(temp_workdir: Path, write_config, write_csv, capsys):
    code = cli_main(["--view", "years", "--year", "FY 2022", "--year", "FY 2023"])
    out = capsys.readouterr().out
    assert code == 0
    assert "[Year Comparison]" in out
    assert "Financial Year Comparison" in out
    assert "INFO view=years rows=2" in out
    assert "FY 2022" in out and "FY 2023" in out


def test_metric_comparison_view(temp_workdir: Path, write_config, write_csv, capsys):
    code = cli_main(["--view", "metrics", "--year", "FY 2022"])
    out = capsys.readouterr().out
    assert code == 0
    assert "[Metric Comparison]" in out
    assert "Financial Metrics Comparison" in out
    assert "MetricA" in out and "MetricB" in out


def test_metric_comparison_empty(temp_workdir: Path, write_config, write_csv, capsys):
    code = cli_main(["--view", "metrics", "--year", "FY 2024"])
    out = capsys.readouterr().out
    assert code == 0
    assert "No data available for the selected criteria" in out


def test_top_outside_choices_warns(temp_workdir: Path, write_config, write_csv, capsys):
    code = cli_main(["--top", "7"])
    out = capsys.readouterr().out
    assert code == 0
    assert "WARN top=7 is not one of the offered choices" in out


def test_too_many_metrics_truncated(temp_workdir: Path, write_config, write_csv, capsys):
    args = ["--view", "metrics"]
    for m in ["MetricA", "MetricB", "MetricA", "X1", "X2", "X3", "X4"]:
        args += ["--metric", m]
    code = cli_main(args)
    out = capsys.readouterr().out
    # 重複除去後 6 件 → 先頭 5 件のみ, 未知 metric で exit 2
    assert "WARN only the first 5 metrics are compared" in out
    assert code == 2


@pytest.mark.parametrize(
    "view,message",
    [
        ("single", "No data available for Carbon Credit in FY 2022"),
        ("years", "No data available for the selected criteria"),
        ("metrics", "No data available for the selected criteria"),
    ],
)
def test_csv_without_metric_columns(temp_workdir: Path, write_config, capsys, view, message):
    (temp_workdir / "data" / "customers.csv").write_text(
        "Financial Year,Grand Total\nFY 2022,\nAcme,5\n", encoding="utf-8"
    )
    code = cli_main(["--view", view])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY file=customers.csv status=ready" in out
    assert "WARN dataset has no metric columns" in out
    assert message in out


def test_exact_amount_column_for_single_view(temp_workdir: Path, write_config, capsys):
    (temp_workdir / "data" / "customers.csv").write_text(
        "Financial Year,MetricA,Grand Total\nFY 2022,,\nAcme,2500,2500\nGlobex,1234.5,1234.5\n",
        encoding="utf-8",
    )
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "MetricA (exact)" in out
    assert "$3K" in out
    assert "$2,500" in out
    assert "$1,234.5" in out
