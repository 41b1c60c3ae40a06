from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from fy_dashboard.models.config_models import (
    DEFAULT_FINANCIAL_YEARS,
    DEFAULT_METRIC_COLORS,
    DEFAULT_PRIORITY_METRICS,
    DEFAULT_YEAR_COLORS,
    DashboardConfig,
    MetricViewConfig,
    ViewConfig,
    ViewsConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config/dashboard.yml
- Validate against dashboard_schema.json (shipped with the package)
- Apply defaults for every optional key
- Apply environment overrides (FY_DASHBOARD_CSV)
"""

SCHEMA_PATH = Path(__file__).parent / "dashboard_schema.json"
DEFAULT_CONFIG_PATH = Path("config/dashboard.yml")

ENV_CONFIG_PATH = "FY_DASHBOARD_CONFIG"
ENV_CSV_PATH = "FY_DASHBOARD_CSV"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (missing csv_path, wrong types,
            unknown keys, ...).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _view_config(raw: Mapping[str, Any], default: ViewConfig, name: str) -> ViewConfig:
    options = tuple(raw.get("top_n_options", default.top_n_options))
    default_top_n = raw.get("default_top_n", default.default_top_n)
    if default_top_n not in options:
        raise ConfigError(
            f"views.{name}.default_top_n={default_top_n} is not one of top_n_options {list(options)}"
        )
    return ViewConfig(top_n_options=options, default_top_n=default_top_n)


def _metric_view_config(raw: Mapping[str, Any], default: MetricViewConfig) -> MetricViewConfig:
    base = _view_config(raw, default, "metrics")
    max_selected = raw.get("max_selected", default.max_selected)
    default_selected = raw.get("default_selected", default.default_selected)
    if default_selected > max_selected:
        raise ConfigError(
            f"views.metrics.default_selected={default_selected} exceeds max_selected={max_selected}"
        )
    return MetricViewConfig(
        top_n_options=base.top_n_options,
        default_top_n=base.default_top_n,
        max_selected=max_selected,
        default_selected=default_selected,
    )


def _views_config(raw: Mapping[str, Any]) -> ViewsConfig:
    defaults = ViewsConfig()
    return ViewsConfig(
        single=_view_config(raw.get("single", {}), defaults.single, "single"),
        years=_view_config(raw.get("years", {}), defaults.years, "years"),
        metrics=_metric_view_config(raw.get("metrics", {}), defaults.metrics),
    )


def parse_config(data: dict[str, Any]) -> DashboardConfig:
    """Validate a config mapping and build the DashboardConfig."""
    _validate_config_schema(data)

    year_colors = dict(DEFAULT_YEAR_COLORS)
    year_colors.update(data.get("year_colors", {}))
    return DashboardConfig(
        csv_path=Path(data["csv_path"]),
        label_column=data.get("label_column", "Financial Year"),
        aggregate_column=data.get("aggregate_column", "Grand Total"),
        aggregate_label=data.get("aggregate_label", "Grand Total"),
        financial_years=tuple(data.get("financial_years", DEFAULT_FINANCIAL_YEARS)),
        priority_metrics=tuple(data.get("priority_metrics", DEFAULT_PRIORITY_METRICS)),
        year_colors=year_colors,
        metric_colors=tuple(data.get("metric_colors", DEFAULT_METRIC_COLORS)),
        views=_views_config(data.get("views", {})),
        error_log_dir=Path(data.get("error_log_dir", "./logs")),
    )


def load_config(path: Path) -> DashboardConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return parse_config(data)


def apply_env_overrides(
    cfg: DashboardConfig, environ: Mapping[str, str] | None = None
) -> DashboardConfig:
    """Environment values (e.g. loaded from .env) take precedence over the YAML file."""
    env = os.environ if environ is None else environ
    csv_override = env.get(ENV_CSV_PATH)
    if csv_override:
        return replace(cfg, csv_path=Path(csv_override))
    return cfg
