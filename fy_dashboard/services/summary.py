from __future__ import annotations

from ..models.load_result import LoadResult

"""Summary line rendering for a completed load.

Format:
SUMMARY file={name} status={status} rows={rows} years={years} metrics={metrics}
customers={customers} entries={entries} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # 指数表記を避ける
        return f"{seconds:.6f}".rstrip('0').rstrip('.')
    return f"{seconds:.3f}".rstrip('0').rstrip('.')


def render_summary_line(result: LoadResult) -> str:
    """Render a SUMMARY line from a LoadResult.

    Failed loads report zero years/metrics/customers/entries.

    Examples:
        >>> from pathlib import Path
        >>> from fy_dashboard.models.load_result import LoadResult, LoadStatus
        >>> render_summary_line(LoadResult(path=Path("x.csv"), status=LoadStatus.FAILED))
        'SUMMARY file=x.csv status=failed rows=0 years=0 metrics=0 customers=0 entries=0 elapsed_sec=0'
    """
    model = result.model
    years = len(model.years) if model else 0
    metrics = len(model.metrics) if model else 0
    customers = len(model.customers) if model else 0
    entries = model.entry_count if model else 0
    return (
        f"SUMMARY file={result.path.name} "
        f"status={result.status.value} "
        f"rows={result.row_count} "
        f"years={years} "
        f"metrics={metrics} "
        f"customers={customers} "
        f"entries={entries} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
