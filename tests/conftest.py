# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from fy_dashboard.services.normalizer import normalize


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("FY_DASHBOARD_CONFIG", raising=False)
        monkeypatch.delenv("FY_DASHBOARD_CSV", raising=False)
        yield p


@pytest.fixture()
def sample_csv_text() -> str:
    return """Financial Year,MetricA,MetricB,Grand Total
FY 2022,,,
Acme,500,0,500
Globex,300,100,400
FY 2023,,,
Acme,200,50,250
Grand Total,700,150,850
"""


@pytest.fixture()
def sample_config_yaml() -> str:
    return """csv_path: ./data/customers.csv
financial_years:
  - FY 2022
  - FY 2023
  - FY 2024
views:
  single:
    top_n_options: [1, 2, 3, 5, 10, 15]
    default_top_n: 10
error_log_dir: ./logs
"""


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    f = temp_workdir / "data" / "customers.csv"
    f.write_text(sample_csv_text, encoding="utf-8")
    return f


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "dashboard.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def ranking_rows() -> list[dict[str, object]]:
    """Two years, two metrics; C ranks low in FY 2022 but high in FY 2023."""
    return [
        {"Financial Year": "FY 2022", "m1": None, "m2": None},
        {"Financial Year": "A", "m1": 100, "m2": 10},
        {"Financial Year": "B", "m1": 90, "m2": 30},
        {"Financial Year": "C", "m1": 80, "m2": 20},
        {"Financial Year": "D", "m1": 70, "m2": 0},
        {"Financial Year": "FY 2023", "m1": None, "m2": None},
        {"Financial Year": "A", "m1": 5, "m2": None},
        {"Financial Year": "C", "m1": 200, "m2": None},
        {"Financial Year": "D", "m1": 150, "m2": None},
        {"Financial Year": "E", "m1": 120, "m2": None},
    ]


@pytest.fixture()
def ranking_model(ranking_rows):
    return normalize(ranking_rows, ["FY 2022", "FY 2023"])
