from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from fy_dashboard.config.loader import (
    DEFAULT_CONFIG_PATH,
    ENV_CONFIG_PATH,
    ConfigError,
    apply_env_overrides,
    load_config,
)
from fy_dashboard.csvdata.reader import DataLoadError, read_csv_file
from fy_dashboard.logging.init import log_summary, set_debug, setup_logging
from fy_dashboard.models.normalized_model import UnknownSelectionError
from fy_dashboard.models.view_state import Tab
from fy_dashboard.services.dashboard import GUIDE, Dashboard
from fy_dashboard.services.formatting import format_amount, format_currency
from fy_dashboard.services.summary import render_summary_line
from fy_dashboard.services.views import ViewResult

"""CLI entrypoint.

Flow:
- Load .env, then config/dashboard.yml (path overridable)
- Load and normalize the CSV once
- Log the SUMMARY line
- Render the selected view as a text table

The text table is a plain terminal renderer for the view records; chart
drawing is not part of this tool.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_BAD_SELECTION = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv.

    override=True: .env の値で既存環境変数を上書き
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Financial-year customer metrics dashboard")
    p.add_argument("--config", type=Path, default=None, help="Path to dashboard YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print CSV header & first rows then exit")
    p.add_argument(
        "--view",
        choices=[t.value for t in Tab],
        default=Tab.SINGLE.value,
        help="View to render (default: single)",
    )
    p.add_argument("--year", action="append", default=None, help="Financial year (repeatable)")
    p.add_argument("--metric", action="append", default=None, help="Metric name (repeatable)")
    p.add_argument("--top", type=int, default=None, help="Top-N customer count")
    return p.parse_args(argv)


def _config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(ENV_CONFIG_PATH)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def _inspect_data(cfg) -> int:
    try:
        table = read_csv_file(cfg.csv_path, cfg.label_column)
    except DataLoadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {cfg.csv_path.name}")
    print(f"  columns={table.columns}")
    print(f"  rows={len(table.rows)}")
    print("    sample_rows=", table.preview(5))
    return EXIT_SUCCESS


def _apply_selection(dashboard: Dashboard, args: argparse.Namespace, logger) -> None:
    """Apply --year/--metric/--top to the selection of the requested view."""
    tab = dashboard.select_tab(args.view)
    years = args.year or []
    metrics = args.metric or []

    if tab is Tab.SINGLE:
        sel = dashboard.single
        if years:
            sel = sel.with_year(years[0])
        if metrics:
            sel = sel.with_metric(metrics[0])
        if args.top is not None:
            sel = sel.with_top_n(args.top)
        dashboard.single = sel
        options = dashboard.config.views.single.top_n_options
    elif tab is Tab.YEARS:
        sel = dashboard.years
        if metrics:
            sel = sel.with_metric(metrics[0])
        if years:
            sel = replace(sel, years=tuple(dict.fromkeys(years)))
        if args.top is not None:
            sel = sel.with_top_n(args.top)
        dashboard.years = sel
        options = dashboard.config.views.years.top_n_options
    else:
        sel = dashboard.metrics
        if years:
            sel = sel.with_year(years[0])
        if metrics:
            chosen = tuple(dict.fromkeys(metrics))
            if len(chosen) > sel.max_selected:
                logger.warning(f"only the first {sel.max_selected} metrics are compared")
                chosen = chosen[: sel.max_selected]
            sel = replace(sel, metrics=chosen)
        if args.top is not None:
            sel = sel.with_top_n(args.top)
        dashboard.metrics = sel
        options = dashboard.config.views.metrics.top_n_options

    if sel.top_n not in options:
        logger.warning(f"top={sel.top_n} is not one of the offered choices {list(options)}")


def _render_text(view: ViewResult) -> str:
    lines = [view.title]
    if view.is_empty:
        lines.append(view.empty_message)
    else:
        rows = list(reversed(view.rows)) if view.bottom_up else view.rows
        columns = {s.label: [format_currency(r["values"][s.key]) for r in rows] for s in view.series}
        if len(view.series) == 1:
            # 単一系列はツールチップ相当の正確な金額も表示
            s = view.series[0]
            columns[f"{s.label} (exact)"] = [format_amount(r["values"][s.key]) for r in rows]
        # 顧客名は index に置き、系列名と衝突させない
        df = pd.DataFrame(columns, index=pd.Index([r["short_name"] for r in rows], name="customer"))
        lines.append(df.to_string())
    lines.extend(view.notes)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示指定)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path('.env'), override=True)

    config_path = _config_path(args)
    try:
        cfg = apply_env_overrides(load_config(config_path))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    logger.info(f"Loading data from: {cfg.csv_path}")

    if args.inspect_data:
        return _inspect_data(cfg)

    dashboard = Dashboard(cfg)
    result = dashboard.load()
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    if not result.ok:
        logger.error(result.error)
        return EXIT_FATAL

    try:
        _apply_selection(dashboard, args, logger)
        view = dashboard.render()
    except (UnknownSelectionError, ValueError) as e:
        logger.error(f"selection: {e}")
        return EXIT_BAD_SELECTION

    logger.info(f"view={dashboard.active_tab.value} rows={len(view.rows)}")
    print(f"[{dashboard.active_tab.label}] {GUIDE[dashboard.active_tab]}")
    print(_render_text(view))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
