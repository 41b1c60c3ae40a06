#!/usr/bin/env python3
"""Sample dataset generation script.

Generates a synthetic customer-metrics CSV in the layout the dashboard reads:
- Header row: "Financial Year", one column per metric, "Grand Total"
- Per financial year: a row holding only the year label, then customer rows
- Last row: "Grand Total" with column sums

Roughly a third of the metric cells are left blank, as in real exports where
most customers only use a few services.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

DEFAULT_YEARS = ["FY 2022", "FY 2023", "FY 2024"]

DEFAULT_METRICS = [
    "Carbon Credit",
    "Greenhouse Gas",
    "Climate Active",
    "Consulting Fees",
    "NGER Consulting",
    "Net Zero",
    "Emissions Management",
    "Carbon Strategy",
]

_NAME_PARTS = ["Acme", "Globex", "Initech", "Umbrella", "Stark", "Wayne", "Tyrell", "Soylent", "Hooli", "Vandelay"]
_SUFFIXES = ["Pty Ltd", "Limited", "Pty Ltd t/as Green Solutions", "Holdings Pty Ltd atf Family Trust", ""]


def generate_customers(count: int, rng: np.random.Generator) -> list[str]:
    names: list[str] = []
    for i in range(count):
        base = f"{_NAME_PARTS[i % len(_NAME_PARTS)]} {chr(65 + (i // len(_NAME_PARTS)) % 26)}"
        suffix = _SUFFIXES[int(rng.integers(0, len(_SUFFIXES)))]
        names.append(f"{base} {suffix}".strip())
    return names


def generate_frame(
    customers: int,
    years: list[str],
    metrics: list[str],
    seed: int = 42,
    blank_ratio: float = 0.35,
) -> pd.DataFrame:
    """Build the interleaved year/customer table as a DataFrame."""
    rng = np.random.default_rng(seed)
    names = generate_customers(customers, rng)
    records: list[dict[str, object]] = []
    totals = np.zeros(len(metrics))

    for year in years:
        records.append({"Financial Year": year})
        # 年ごとに一部の顧客のみ出現
        present = rng.random(customers) > 0.2
        for name, is_present in zip(names, present):
            if not is_present:
                continue
            values = np.round(rng.lognormal(mean=9.5, sigma=1.4, size=len(metrics)), 2)
            values[rng.random(len(metrics)) < blank_ratio] = np.nan
            totals += np.nan_to_num(values)
            row: dict[str, object] = {"Financial Year": name}
            row.update({m: (None if np.isnan(v) else float(v)) for m, v in zip(metrics, values)})
            row["Grand Total"] = float(np.nansum(values))
            records.append(row)

    grand = {"Financial Year": "Grand Total"}
    grand.update({m: float(round(t, 2)) for m, t in zip(metrics, totals)})
    grand["Grand Total"] = float(round(totals.sum(), 2))
    records.append(grand)

    return pd.DataFrame(records, columns=["Financial Year", *metrics, "Grand Total"])


def main() -> int:
    """Main CLI interface for dataset generation."""
    parser = argparse.ArgumentParser(
        description="Generate a synthetic customer-metrics CSV for the dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 40 customers, default years and metrics
  %(prog)s data/customers.csv

  # Custom years and seed
  %(prog)s data/custom.csv --customers 100 --years "FY 2023" "FY 2024" --seed 7
        """
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--customers", type=int, default=40, help="Number of customers (default: 40)")
    parser.add_argument("--years", nargs="+", default=DEFAULT_YEARS, help="Financial year labels")
    parser.add_argument("--metrics", nargs="+", default=DEFAULT_METRICS, help="Metric column names")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.customers <= 0:
        print("Error: --customers must be positive", file=sys.stderr)
        return 1

    df = generate_frame(args.customers, args.years, args.metrics, args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index=False)
    print(f"Created CSV file: {args.output}")
    print(f"  Years: {len(args.years)} ({', '.join(args.years)})")
    print(f"  Metrics: {len(args.metrics)}")
    print(f"  Rows: {len(df):,} (+ 1 header row)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
