"""Domain models for the financial-year customer dashboard.

This package contains the domain model classes used throughout the application:
configuration, raw CSV rows, the normalized year/metric model, per-view
selection state and load results.
"""

from .config_models import DashboardConfig, MetricViewConfig, ViewConfig, ViewsConfig
from .customer_entry import CustomerEntry
from .error_record import ErrorRecord
from .load_result import LOAD_FAILED_MESSAGE, LoadResult, LoadStatus
from .normalized_model import NormalizedModel, UnknownSelectionError
from .raw_row import RawRow
from .view_state import (
    MetricComparisonSelection,
    SingleMetricSelection,
    Tab,
    YearComparisonSelection,
)

__all__ = [
    # Configuration models
    "DashboardConfig",
    "ViewConfig",
    "MetricViewConfig",
    "ViewsConfig",
    # Data models
    "RawRow",
    "CustomerEntry",
    "NormalizedModel",
    "UnknownSelectionError",
    # Load / error models
    "LoadStatus",
    "LoadResult",
    "LOAD_FAILED_MESSAGE",
    "ErrorRecord",
    # Selection state
    "Tab",
    "SingleMetricSelection",
    "YearComparisonSelection",
    "MetricComparisonSelection",
]
