#!/usr/bin/env python3
"""Write the bulk import template workbook and print the column guide."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, ".")

from app.excel.columns import BIG_FIVE_FACETS, BIG_FIVE_TRAIT_ORDER, template_headers
from app.excel.template import TEMPLATE_FILENAME, TEMPLATE_VERSION, build_template_workbook

COLUMN_GUIDE = [
    ("Email", "Required, unique identifier"),
    ("Name", "Required"),
    ("Team", "Optional"),
    ("Birthday", "Optional (format: YYYY-MM-DD)"),
    ("Chronotype", "Lion, Bear, Wolf, or Dolphin (several allowed, e.g. \"Lion (Bear)\")"),
    ("CoreValue1-5", "Up to 5 core values"),
    ("Strength1-5", "Up to 5 character strengths"),
    ("BigFive_[Trait]_Level", "High, Average, or Low"),
    ("BigFive_[Trait]_Score", "Optional 0-999 score"),
    ("BigFive_[Trait]_[Facet]_Level", "High, Average, or Low (optional, 6 facets per trait)"),
    ("BigFive_[Trait]_[Facet]_Score", "Optional 0-999 score for each facet"),
    ("Goals_Period", 'Goal period (e.g. "Q1 2025", "2025")'),
    ("Goals_Professional", "Professional goals (optional)"),
    ("Goals_Personal", "Personal goals (optional)"),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the user import template.")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path(TEMPLATE_FILENAME),
        help=f"Where to write the workbook (default: ./{TEMPLATE_FILENAME}).",
    )
    args = parser.parse_args()

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(build_template_workbook())

    print(f"Template created: {args.output} (version {TEMPLATE_VERSION})")
    print(f"\nTotal columns: {len(template_headers())}")
    print("\nColumn descriptions:")
    for column, description in COLUMN_GUIDE:
        print(f"- {column}: {description}")
    print("\nBig Five traits (in column order):")
    for index, trait in enumerate(BIG_FIVE_TRAIT_ORDER, start=1):
        facets = ", ".join(key for key, _ in BIG_FIVE_FACETS[trait])
        print(f"  {index}. {trait} (6 facets: {facets})")


if __name__ == "__main__":
    main()
