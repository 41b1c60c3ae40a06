from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

"""Config dataclasses for the financial-year dashboard.

These are the typed form of config/dashboard.yml after schema validation and
default application in fy_dashboard.config.loader.
"""

DEFAULT_FINANCIAL_YEARS = ("FY 2022", "FY 2023", "FY 2024")

DEFAULT_PRIORITY_METRICS = (
    "Carbon Credit",
    "Greenhouse Gas",
    "Climate Active",
    "Consulting Fees",
    "NGER Consulting",
    "Net Zero",
    "Emissions Management",
    "Carbon Strategy",
)

DEFAULT_YEAR_COLORS = {
    "FY 2022": "#2563eb",  # blue
    "FY 2023": "#059669",  # green
    "FY 2024": "#dc2626",  # red
}

DEFAULT_METRIC_COLORS = (
    "#2563eb", "#059669", "#dc2626", "#7c3aed", "#db2777",
    "#d97706", "#0891b2", "#4f46e5", "#ea580c", "#65a30d",
)


@dataclass(frozen=True)
class ViewConfig:
    """Top-N choices offered by one view and its initial choice."""
    top_n_options: tuple[int, ...]
    default_top_n: int


@dataclass(frozen=True)
class MetricViewConfig(ViewConfig):
    max_selected: int = 5
    default_selected: int = 3


@dataclass(frozen=True)
class ViewsConfig:
    single: ViewConfig = ViewConfig((1, 2, 3, 5, 10, 15), 10)
    years: ViewConfig = ViewConfig((3, 5, 10, 15), 5)
    metrics: MetricViewConfig = MetricViewConfig((3, 5, 10, 15), 5)


@dataclass(frozen=True)
class DashboardConfig:
    """Root configuration object for the dashboard.

    Column names and the aggregate sentinel describe the CSV layout; the
    remaining settings drive view defaults and series colours.
    """
    csv_path: Path
    label_column: str = "Financial Year"
    aggregate_column: str = "Grand Total"
    aggregate_label: str = "Grand Total"
    financial_years: tuple[str, ...] = DEFAULT_FINANCIAL_YEARS
    priority_metrics: tuple[str, ...] = DEFAULT_PRIORITY_METRICS
    year_colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_YEAR_COLORS))
    metric_colors: tuple[str, ...] = DEFAULT_METRIC_COLORS
    views: ViewsConfig = field(default_factory=ViewsConfig)
    error_log_dir: Path = Path("./logs")
