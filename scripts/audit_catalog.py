"""
Audit a perfume catalog CSV from the command line.

Prints the data-quality summary, the duplicate clusters and the number of
exact duplicate rows. With --collapse, writes a copy without exact
duplicates.

Usage:
    python scripts/audit_catalog.py main.csv
    python scripts/audit_catalog.py main.csv --issues
    python scripts/audit_catalog.py main.csv --collapse main_clean.csv
"""

import argparse
import os
import sys
from pathlib import Path

# Allow imports from the project root when running as a script
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import get_settings
from models.quality import TAG_INFO
from parsers.csv_parser import parse_catalog_csv, serialize_catalog
from services.dedup_service import count_exact_duplicates, remove_exact_duplicates
from services.duplicate_service import assign_cluster_colors
from services.quality_service import analyze_quality, build_quality_summary


def print_summary(perfumes) -> None:
    summary = build_quality_summary(perfumes)

    print("=" * 60)
    print("CATALOG QUALITY")
    print("=" * 60)
    print(f"Records:           {len(perfumes)}")
    print(f"Need attention:    {summary.flagged}")
    print("-" * 60)
    for tag, count in summary.by_tag.items():
        print(f"  {TAG_INFO[tag].label:<22} {count:>6}")


def print_clusters(perfumes, palette=None) -> None:
    colors = assign_cluster_colors(perfumes, palette or get_settings().duplicate_palette)

    print("\nDUPLICATE CLUSTERS")
    print("-" * 60)
    if not colors.cluster_count:
        print("  none")
        return
    for key, color in colors.slug_colors.items():
        print(f"  slug  {color}  {key or '(empty)'}")
    for key, color in colors.title_colors.items():
        print(f"  title {color}  {key or '(empty)'}")


def print_issues(perfumes) -> None:
    print("\nRECORDS WITH ISSUES")
    print("-" * 60)
    for identity, tags in analyze_quality(perfumes).items():
        print(f"  {identity}: {', '.join(TAG_INFO[t].short for t in tags)}")


def main():
    parser = argparse.ArgumentParser(
        description="Report data-quality defects and duplicates in a perfume catalog CSV."
    )
    parser.add_argument("csv", help="Path to the catalog CSV")
    parser.add_argument(
        "--issues",
        action="store_true",
        help="List every flagged record with its tags",
    )
    parser.add_argument(
        "--collapse",
        default="",
        help="Write a copy without exact duplicate rows to this path",
    )
    parser.add_argument("--encoding", default="utf-8")
    args = parser.parse_args()

    result = parse_catalog_csv(Path(args.csv), encoding=args.encoding)
    perfumes = result.perfumes

    print_summary(perfumes)
    print_clusters(perfumes)
    if args.issues:
        print_issues(perfumes)

    exact = count_exact_duplicates(perfumes)
    print(f"\nExact duplicate rows: {exact}")

    if args.collapse:
        if exact == 0:
            print("Nothing to remove; no file written.")
            sys.exit(0)
        kept = remove_exact_duplicates(perfumes)
        Path(args.collapse).write_text(
            serialize_catalog(kept, result.columns),
            encoding=args.encoding,
        )
        print(f"Removed {len(perfumes) - len(kept)} rows, wrote {len(kept)} to {args.collapse}")


if __name__ == "__main__":
    main()
