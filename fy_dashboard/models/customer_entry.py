from __future__ import annotations

from dataclasses import dataclass

"""CustomerEntry model: one customer's value for one (year, metric) slice."""

__all__ = [
    "CustomerEntry",
]


@dataclass(frozen=True)
class CustomerEntry:
    customer: str
    value: float  # 常に > 0 (normalizer で 0 以下は除外)

    def __post_init__(self) -> None:
        if not self.value > 0:
            raise ValueError(f"customer entry value must be positive: {self.customer}={self.value}")
