from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..csvdata.reader import CsvTable, DataLoadError, EmptyDataError, MissingColumnsError, read_csv_file, read_csv_text
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import DashboardConfig
from ..models.load_result import LOAD_FAILED_MESSAGE, LoadResult, LoadStatus
from .normalizer import normalize

"""Load sequence: CSV file -> NormalizedModel, or a terminal failure.

This is the single place where load errors are caught. Any DataLoadError from
the reader or the normalizer becomes a FAILED LoadResult carrying the
user-facing message; the cause is logged and written to the JSON Lines error
log. No partially normalized model ever leaves this module.
"""

__all__ = [
    "load_dataset",
    "load_dataset_text",
]

logger = logging.getLogger(__name__)

_ERROR_TYPES: dict[type[DataLoadError], str] = {
    EmptyDataError: "EMPTY_DATA",
    MissingColumnsError: "MISSING_COLUMN",
}


def _error_type(exc: DataLoadError) -> str:
    for cls, name in _ERROR_TYPES.items():
        if isinstance(exc, cls):
            return name
    return "CSV_READ_ERROR"


def _normalize_table(table: CsvTable, config: DashboardConfig):
    return normalize(
        table.rows,
        config.financial_years,
        label_column=config.label_column,
        aggregate_column=config.aggregate_column,
        aggregate_label=config.aggregate_label,
        columns=table.columns,
    )


def _run(
    path: Path,
    config: DashboardConfig,
    read,
    error_log: ErrorLogBuffer | None,
) -> LoadResult:
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer(config.error_log_dir)
    logger.debug(f"loading {path.name} status={LoadStatus.LOADING.value}")

    try:
        table = read()
        model = _normalize_table(table, config)
    except DataLoadError as e:
        end_time = datetime.now(UTC)
        logger.error(f"load: {e}")
        error_log.append(
            ErrorRecord.create(file=path.name, row=-1, error_type=_error_type(e), message=str(e))
        )
        try:
            written = error_log.flush()
        except OSError as flush_err:
            # ログ書き込み失敗でロード結果は変えない
            logger.warning(f"error log flush failed: {flush_err}")
        else:
            if written is not None:
                logger.debug(f"error log written: {written}")
        return LoadResult(
            path=path,
            status=LoadStatus.FAILED,
            start_time=start_time,
            end_time=end_time,
            error=LOAD_FAILED_MESSAGE,
            detail=str(e),
        )

    end_time = datetime.now(UTC)
    if model.is_empty():
        logger.warning(f"{path.name}: no customer rows under known financial years {list(model.years)}")
    return LoadResult(
        path=path,
        status=LoadStatus.READY,
        model=model,
        start_time=start_time,
        end_time=end_time,
        row_count=len(table.rows),
    )


def load_dataset(config: DashboardConfig, error_log: ErrorLogBuffer | None = None) -> LoadResult:
    """Read config.csv_path and normalize it."""
    path = config.csv_path
    return _run(path, config, lambda: read_csv_file(path, config.label_column), error_log)


def load_dataset_text(
    text: str,
    config: DashboardConfig,
    source: str = "<memory>",
    error_log: ErrorLogBuffer | None = None,
) -> LoadResult:
    """Normalize CSV text already held in memory (e.g. an uploaded file)."""
    return _run(
        Path(source),
        config,
        lambda: read_csv_text(text, config.label_column, source=source),
        error_log,
    )
