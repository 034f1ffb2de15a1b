#!/usr/bin/env python3
"""
Main CLI entry point for fetching and reporting PEI 2019 election results.

Orchestrates the full pipeline:
1. Get districts to process (registry lookup)
2. Fetch each district page (or read a saved copy)
3. Map header columns to parties and decode the poll rows
4. Validate the combined results
5. Write the JSON dump and the winner, runner-up and Green reports

Usage:
    # Fetch all 27 districts
    python scripts/fetch_results.py --all

    # Fetch specific districts
    python scripts/fetch_results.py --district 1 --district 2

    # Parse saved pages instead of fetching
    python scripts/fetch_results.py --all --source-dir data/html

    # Rebuild the CSV reports from an existing JSON dump
    python scripts/fetch_results.py --from-json data/pei-election-results.json

    # Validate only (write nothing)
    python scripts/fetch_results.py --all --validate-only

    # Dry run (show what would be done)
    python scripts/fetch_results.py --all --dry-run
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.extractors.aggregator import collect_results
from scripts.extractors.config import DATA_DIR
from scripts.extractors.errors import ExtractionError
from scripts.extractors.parsers import DistrictPageParser
from scripts.extractors.registry import DistrictConfig, get_district, list_districts
from scripts.extractors.reports import print_summary, write_all_reports
from scripts.extractors.results import PollResult, ResultStore
from scripts.extractors.validators import validate_results


def print_district(district_config: DistrictConfig, polls: list[PollResult]) -> None:
    """Progress line for one decoded district."""
    reporting = sum(1 for result in polls if result.total > 0)
    parties = ", ".join(polls[0].parties) if polls else "no polls"
    print(f"  ✓ {district_config['id']:>2} {district_config['name']:<32} "
          f"{len(polls):>3} polls ({reporting} reporting) [{parties}]")


def load_store(args: argparse.Namespace, districts: list[int]) -> Optional[ResultStore]:
    """Extract the requested districts, or load an existing dump."""
    if args.from_json:
        print(f"Loading results from {args.from_json}...")
        try:
            return ResultStore.load_json(args.from_json)
        except (OSError, ValueError, ExtractionError) as e:
            print(f"✗ Failed: could not load {args.from_json}: {e}")
            return None

    print(f"Processing {len(districts)} districts")
    try:
        return collect_results(
            districts,
            parser=DistrictPageParser(),
            source_dir=args.source_dir,
            on_district=print_district,
        )
    except ExtractionError as e:
        print(f"✗ Failed: {type(e).__name__}: {e}")
        return None


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Fetch and report PEI 2019 provincial election poll results",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fetch all districts
  %(prog)s --all

  # Fetch specific districts
  %(prog)s --district 1 --district 2

  # Rebuild reports from an existing dump
  %(prog)s --from-json data/pei-election-results.json
        """
    )

    # District selection
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--all",
        action="store_true",
        help="Process all 27 districts (default)"
    )
    source_group.add_argument(
        "--district",
        type=int,
        action="append",
        help="Process a specific district (repeatable)"
    )
    source_group.add_argument(
        "--from-json",
        type=str,
        help="Skip extraction and report on an existing JSON dump"
    )

    # Options
    parser.add_argument(
        "--source-dir",
        type=str,
        help="Read saved district{N}.html pages from this directory"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=DATA_DIR,
        help=f"Directory for the JSON and CSV outputs (default: {DATA_DIR})"
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Validate extraction without writing any output"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without executing"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Write outputs despite validation issues"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    districts = sorted(set(args.district)) if args.district else list_districts()
    unknown = [district for district in districts if district not in list_districts()]
    if unknown:
        print(f"✗ Failed: unknown district(s) {unknown}")
        return 1

    if args.dry_run:
        page_parser = DistrictPageParser()
        for district in districts:
            district_config = get_district(district, source_dir=args.source_dir)
            print(f"[DRY RUN] Would process district {district}: {page_parser.source_for(district_config)}")
        print(f"[DRY RUN] Would write reports to {args.output_dir}")
        return 0

    store = load_store(args, districts)
    if store is None:
        return 1

    print(f"✓ Extracted {len(store.districts())} districts, {len(store)} polls")

    # Validate extraction
    print("Validating results...")
    expected = store.districts() if args.from_json else districts
    issues = validate_results(store, expected_districts=expected)

    if issues:
        print(f"\n⚠️  Found {len(issues)} validation issues:")
        for issue in issues[:10]:  # Show first 10
            print(f"  - {issue}")
        if len(issues) > 10:
            print(f"  ... and {len(issues) - 10} more")

        if not args.force:
            print("✗ Failed: Validation errors (use --force to override)")
            return 1
        print("⚠️  Continuing with validation errors (--force)")
    else:
        print("✓ Validation passed")

    if args.validate_only:
        return 0

    written = write_all_reports(store, args.output_dir)
    for name, path in written.items():
        print(f"✓ Saved {name} to {path}")

    print()
    print_summary(store)
    return 0


if __name__ == "__main__":
    sys.exit(main())
