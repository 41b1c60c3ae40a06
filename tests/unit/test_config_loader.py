from __future__ import annotations

from pathlib import Path

import pytest

from fy_dashboard.config.loader import (
    ENV_CSV_PATH,
    ConfigError,
    apply_env_overrides,
    load_config,
    parse_config,
)
from fy_dashboard.models.config_models import DEFAULT_FINANCIAL_YEARS, DEFAULT_YEAR_COLORS


def test_load_config_minimal(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "dashboard.yml"
    cfg_path.write_text("csv_path: ./data/x.csv\n", encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg.csv_path == Path("./data/x.csv")
    assert cfg.label_column == "Financial Year"
    assert cfg.aggregate_label == "Grand Total"
    assert cfg.financial_years == DEFAULT_FINANCIAL_YEARS
    assert cfg.year_colors == DEFAULT_YEAR_COLORS
    assert cfg.views.single.default_top_n == 10
    assert cfg.views.years.top_n_options == (3, 5, 10, 15)
    assert cfg.views.metrics.max_selected == 5
    assert cfg.views.metrics.default_selected == 3


def test_load_config_full(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.financial_years == ("FY 2022", "FY 2023", "FY 2024")
    assert cfg.views.single.top_n_options == (1, 2, 3, 5, 10, 15)
    assert cfg.error_log_dir == Path("./logs")


def test_year_colors_merge_over_defaults():
    cfg = parse_config({"csv_path": "x.csv", "year_colors": {"FY 2025": "#123abc"}})
    assert cfg.year_colors["FY 2025"] == "#123abc"
    assert cfg.year_colors["FY 2022"] == DEFAULT_YEAR_COLORS["FY 2022"]


def test_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "missing.yml")


def test_invalid_yaml(temp_workdir: Path):
    p = temp_workdir / "config" / "bad.yml"
    p.write_text("csv_path: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(p)


def test_root_must_be_mapping(temp_workdir: Path):
    p = temp_workdir / "config" / "list.yml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(p)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"csv_path": 3},
        {"csv_path": "x.csv", "unknown_key": 1},
        {"csv_path": "x.csv", "financial_years": []},
        {"csv_path": "x.csv", "financial_years": ["FY 2022", "FY 2022"]},
        {"csv_path": "x.csv", "year_colors": {"FY 2022": "blue"}},
        {"csv_path": "x.csv", "views": {"single": {"default_top_n": 0}}},
    ],
)
def test_schema_violations(data):
    with pytest.raises(ConfigError, match="config validation failed"):
        parse_config(data)


def test_default_top_n_must_be_offered():
    with pytest.raises(ConfigError, match="default_top_n"):
        parse_config({"csv_path": "x.csv", "views": {"years": {"top_n_options": [3, 5], "default_top_n": 10}}})


def test_default_selected_within_cap():
    with pytest.raises(ConfigError, match="default_selected"):
        parse_config({"csv_path": "x.csv", "views": {"metrics": {"max_selected": 2, "default_selected": 3}}})


def test_env_override_csv_path():
    cfg = parse_config({"csv_path": "x.csv"})
    assert apply_env_overrides(cfg, {ENV_CSV_PATH: "/tmp/other.csv"}).csv_path == Path("/tmp/other.csv")
    assert apply_env_overrides(cfg, {ENV_CSV_PATH: ""}).csv_path == Path("x.csv")
    assert apply_env_overrides(cfg, {}) is cfg
