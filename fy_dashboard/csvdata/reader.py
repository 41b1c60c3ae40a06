from __future__ import annotations

import io
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""CSV reader (parser adapter).

Turns raw CSV text into an ordered list of row records (column name -> value),
using the first line as the header. Blank lines are skipped and numeric cells
are typed by pandas; the label column is always kept as text so that labels
such as "2023" are not turned into numbers.

The reader does not interpret rows. Year sections, customer rows and the
aggregate row are handled by fy_dashboard.services.normalizer.
"""

__all__ = [
    "DataLoadError",
    "CsvReadError",
    "EmptyDataError",
    "MissingColumnsError",
    "CsvTable",
    "DEFAULT_KEEP_NA_STRINGS",
    "read_csv_text",
    "read_csv_file",
]


DEFAULT_KEEP_NA_STRINGS = ("NA", "N/A", "n/a", "NULL", "null", "None", "NaN", "nan")


class DataLoadError(Exception):
    """Base class for every failure that prevents the dataset from loading."""


class CsvReadError(DataLoadError):
    """Raised when the CSV cannot be read or tokenized."""


class EmptyDataError(DataLoadError):
    """Raised when the CSV holds no header or no data rows."""


class MissingColumnsError(DataLoadError):
    """Raised when a required column (the label column) is missing from the header."""


@dataclass
class CsvTable:
    source: str
    columns: list[str]
    rows: list[dict[str, Any]]  # 列名→値 (空セルは None)

    def preview(self, n: int = 3) -> list[dict[str, Any]]:
        return self.rows[:n]


def _frame_to_table(df: pd.DataFrame, source: str) -> CsvTable:
    # 末尾カンマ由来の空 "Unnamed: N" 列は除外
    drop = [
        c for c in df.columns
        if str(c).startswith("Unnamed:") and df[c].isna().all()
    ]
    if drop:
        df = df.drop(columns=drop)
    columns = [str(c) for c in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    rows = df.to_dict(orient="records")
    return CsvTable(source=source, columns=columns, rows=rows)


def _na_values(keep_na_strings: Iterable[str]) -> list[str]:
    # pandas 既定の NA 文字列から keep_na_strings を除外 (空セルは常に NA)
    import pandas._libs.parsers as parsers

    return sorted(parsers.STR_NA_VALUES - set(keep_na_strings))


def read_csv_text(
    text: str,
    label_column: str,
    source: str = "<memory>",
    keep_na_strings: Iterable[str] = DEFAULT_KEEP_NA_STRINGS,
) -> CsvTable:
    """Parse CSV text into a CsvTable.

    Parameters
    ----------
    text: CSV 本文 (UTF-8 デコード済)
    label_column: text-typed column holding year labels and customer names
    source: name used in error messages and logs
    keep_na_strings: strings pandas would read as NaN that are kept as text,
        so customers named e.g. "NA" or "None" keep their rows

    Raises
    ------
    EmptyDataError: no header line at all
    CsvReadError: malformed CSV (e.g. ragged rows pandas cannot tokenize)
    """
    if not text or not text.strip():
        raise EmptyDataError(f"{source}: CSV is empty")
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype={label_column: str},
            skip_blank_lines=True,
            thousands=",",
            skipinitialspace=False,
            keep_default_na=False,
            na_values=_na_values(keep_na_strings),
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyDataError(f"{source}: no columns to parse") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise CsvReadError(f"{source}: {e}") from e
    return _frame_to_table(df, source)


def read_csv_file(path: Path, label_column: str) -> CsvTable:
    """Read a UTF-8 CSV file from disk and parse it with read_csv_text."""
    if not path.exists():
        raise CsvReadError(f"data file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CsvReadError(f"{path.name}: {e}") from e
    return read_csv_text(text, label_column, source=path.name)
