from __future__ import annotations

import logging
from collections.abc import Callable

from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import DashboardConfig
from ..models.load_result import LoadResult, LoadStatus
from ..models.normalized_model import NormalizedModel
from ..models.view_state import (
    MetricComparisonSelection,
    SingleMetricSelection,
    Tab,
    YearComparisonSelection,
)
from .loader import load_dataset
from .views import (
    ViewResult,
    metric_comparison_view,
    popular_metrics,
    single_metric_view,
    year_comparison_view,
)

"""Dashboard session: load state, active tab and one selection per view.

A session loads its dataset once. After a successful load each view gets its
default selection; after a failed load the session stays in the FAILED state
and exposes only the error message. Starting over means creating a new session.
"""

__all__ = [
    "GUIDE",
    "Dashboard",
    "DashboardNotReadyError",
]

logger = logging.getLogger(__name__)

GUIDE = {
    Tab.SINGLE: "Analyse one financial metric across top customers for a specific year.",
    Tab.YEARS: "Compare the same financial metric across different years to see trends over time.",
    Tab.METRICS: "Compare multiple financial metrics side by side for a specific year.",
}


class DashboardNotReadyError(RuntimeError):
    """Raised when views are requested before a successful load."""


class Dashboard:
    def __init__(self, config: DashboardConfig) -> None:
        self.config = config
        self.status = LoadStatus.PENDING
        self.load_result: LoadResult | None = None
        self.active_tab = Tab.SINGLE
        self._single: SingleMetricSelection | None = None
        self._years: YearComparisonSelection | None = None
        self._metrics: MetricComparisonSelection | None = None

    # ------------------------------------------------------------------ load
    def load(
        self,
        loader: Callable[..., LoadResult] = load_dataset,
        error_log: ErrorLogBuffer | None = None,
    ) -> LoadResult:
        """Run the load sequence once; a second call returns the first result."""
        if self.load_result is not None:
            return self.load_result
        self.status = LoadStatus.LOADING
        result = loader(self.config, error_log=error_log)
        self.load_result = result
        self.status = result.status
        if result.ok:
            self._init_selections(result.model)
        return result

    def _init_selections(self, model: NormalizedModel) -> None:
        views = self.config.views
        years = model.years
        if model.metrics:
            first_metric = model.metrics[0]
            compared = tuple(model.metrics[: views.metrics.default_selected])
        else:
            # 列なしでも選択状態は作る (ビューは空表示)
            first_metric = next(iter(self.config.priority_metrics), "")
            compared = (first_metric,)
            logger.warning(f"dataset has no metric columns; views will be empty (metric={first_metric!r})")
        first_year = years[0]
        self._single = SingleMetricSelection(
            year=first_year, metric=first_metric, top_n=views.single.default_top_n
        )
        self._years = YearComparisonSelection(
            metric=first_metric, years=tuple(years), top_n=views.years.default_top_n
        )
        self._metrics = MetricComparisonSelection(
            year=first_year,
            metrics=compared,
            top_n=views.metrics.default_top_n,
            max_selected=views.metrics.max_selected,
        )
        logger.debug(f"default selections initialised metric={first_metric!r} year={first_year!r}")

    @property
    def error(self) -> str | None:
        return self.load_result.error if self.load_result else None

    @property
    def model(self) -> NormalizedModel:
        if self.load_result is None or not self.load_result.ok:
            raise DashboardNotReadyError(f"dashboard is not ready (status={self.status.value})")
        return self.load_result.model  # type: ignore[return-value]

    # ------------------------------------------------------------ selections
    def _selection(self, selection):
        self.model  # noqa: B018 (readiness check)
        return selection

    @property
    def single(self) -> SingleMetricSelection:
        return self._selection(self._single)

    @single.setter
    def single(self, selection: SingleMetricSelection) -> None:
        self._single = selection

    @property
    def years(self) -> YearComparisonSelection:
        return self._selection(self._years)

    @years.setter
    def years(self, selection: YearComparisonSelection) -> None:
        self._years = selection

    @property
    def metrics(self) -> MetricComparisonSelection:
        return self._selection(self._metrics)

    @metrics.setter
    def metrics(self, selection: MetricComparisonSelection) -> None:
        self._metrics = selection

    def select_tab(self, tab: Tab | str) -> Tab:
        self.active_tab = Tab(tab)
        return self.active_tab

    def metric_choices(self) -> list[str]:
        """Metric picker order for the comparison view."""
        return popular_metrics(self.model.metrics, self.config.priority_metrics)

    # ---------------------------------------------------------------- render
    def render(self, tab: Tab | str | None = None) -> ViewResult:
        """Build the ViewResult of a tab (the active tab by default)."""
        tab = self.active_tab if tab is None else Tab(tab)
        model = self.model
        if tab is Tab.SINGLE:
            return single_metric_view(model, self.single)
        if tab is Tab.YEARS:
            return year_comparison_view(model, self.years, self.config.year_colors)
        return metric_comparison_view(model, self.metrics, self.config.metric_colors)
