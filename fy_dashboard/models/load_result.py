from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .normalized_model import NormalizedModel

"""LoadResult domain model and LoadStatus enum.

LoadResult represents the outcome of the single load sequence that runs when a
dashboard session starts: either a ready model or a terminal failure message.
"""

__all__ = [
    "LoadStatus",
    "LoadResult",
    "LOAD_FAILED_MESSAGE",
]

LOAD_FAILED_MESSAGE = "Failed to load data. Please try again."


class LoadStatus(Enum):
    """Status enum for the load lifecycle.

    State transitions: pending → loading → (ready | failed)

    - PENDING: Session created, nothing read yet
    - LOADING: CSV is being read and normalized
    - READY: Model available for queries
    - FAILED: Load failed; terminal for the session
    """
    PENDING = "pending"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one CSV file.

    ``model`` is set only when status is READY; a failed load never exposes
    partially normalized data.
    """
    path: Path
    status: LoadStatus
    model: NormalizedModel | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    row_count: int = 0        # CSV data lines read
    error: str | None = None  # user-facing message
    detail: str | None = None  # underlying cause, for logs

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.READY and self.model is not None

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
