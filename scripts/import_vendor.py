#!/usr/bin/env python3
"""
Vendor Catalog Import Script

Imports a vendor product sheet (CSV or Excel) into a Shopify product CSV
using a vendor profile from config/vendors/.

Features:
- Windowed batches, each appended and flushed before the next starts
- Resume from the last committed window after an interrupted run
- Duplicate SKU detection against the existing catalog file
- Keyword rules for category, type, tags and publish state

Usage:
    python3 scripts/import_vendor.py --profile crystal_jewelry
    python3 scripts/import_vendor.py --profile crystal_jewelry --source data/crystal.xlsx --sheet Sheet1
    python3 scripts/import_vendor.py --profile crystal_jewelry --batch-size 25 --resume
    python3 scripts/import_vendor.py --profile config/vendors/my_vendor.yaml --single-pass
"""

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_import.common import list_vendor_profiles, load_vendor_profile, setup_logging
from catalog_import.exceptions import BatchWriteError, ConfigError, SourceNotFoundError
from catalog_import.models import ImportConfig
from catalog_import.pipeline import BatchCoordinator, CheckpointStore
from catalog_import.shopify import CsvCatalogSink
from catalog_import.sources import open_source

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "output/shopify_products.csv"
DEFAULT_CHECKPOINT = "output/.import_checkpoint.json"


def apply_overrides(config: ImportConfig, args: argparse.Namespace) -> ImportConfig:
    """Apply command line overrides on top of the vendor profile."""
    overrides = {}
    if args.source:
        overrides["source"] = args.source
    if args.sheet:
        overrides["source_sheet"] = args.sheet
    if args.target:
        overrides["target"] = args.target
    if args.batch_size:
        overrides["batch_size"] = args.batch_size
    if args.resume:
        overrides["resume"] = True
    if args.checkpoint:
        overrides["checkpoint_file"] = args.checkpoint

    if not overrides:
        return config
    return dataclasses.replace(config, **overrides)


def run_import(config: ImportConfig, single_pass: bool = False) -> int:
    """
    Run one import and print its summary.

    Args:
        config: Import configuration (with command line overrides applied)
        single_pass: Read the whole sheet at once instead of in windows

    Returns:
        Process exit code (0 on success)
    """
    coordinator = BatchCoordinator(config)
    tracker = coordinator.tracker
    target = config.target or DEFAULT_TARGET
    store = CheckpointStore(config.checkpoint_file or DEFAULT_CHECKPOINT)

    # Nothing is opened for writing when the source is missing
    try:
        source = open_source(config.source, config.source_sheet)
    except SourceNotFoundError as e:
        logger.error("%s", e.message)
        tracker.record_source_missing(e.source)
        print(tracker.summary_message())
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    cursor = store.load(config.source) if config.resume else None
    if cursor is None and not config.resume:
        store.clear()

    replace_existing = (
        config.duplicate_handling.enabled and config.duplicate_handling.action == "replace"
    )

    with source, CsvCatalogSink(target, replace_existing=replace_existing) as sink:
        duplicate_index = sink.existing_skus() if config.duplicate_handling.enabled else frozenset()

        try:
            if single_pass:
                rows = source.read_rows(1, source.row_count() + 1)
                total = coordinator.run_single_pass(rows, sink, duplicate_index)
            else:
                total = coordinator.run(
                    source.row_count(),
                    source,
                    sink,
                    duplicate_index=duplicate_index,
                    cursor=cursor,
                    on_commit=lambda c: store.save(c, config.source),
                )
        except BatchWriteError as e:
            logger.error("%s", e.message)
            if not single_pass:
                store.save(e.cursor, config.source)
            tracker.print_final_report()
            return 1

    store.clear()
    tracker.print_final_report()
    print(f"\nCatalog written to: {target}")
    if cursor is not None:
        print(tracker.summary_message(total_imported=total))
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Import a vendor product sheet into a Shopify product CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Import using the profile's source and target
  python3 scripts/import_vendor.py --profile crystal_jewelry

  # Import an Excel sheet in smaller batches
  python3 scripts/import_vendor.py --profile crystal_jewelry --source data/order.xlsx --sheet Sheet1 --batch-size 25

  # Continue an interrupted import
  python3 scripts/import_vendor.py --profile crystal_jewelry --resume

  # List available profiles
  python3 scripts/import_vendor.py --list
"""
    )
    parser.add_argument("--profile", "-p",
                        help="Vendor profile name or path to a profile YAML file")
    parser.add_argument("--list", "-l", action="store_true",
                        help="List available vendor profiles")
    parser.add_argument("--source", "-s",
                        help="Source file (.csv, .xlsx, .xlsm); overrides the profile")
    parser.add_argument("--sheet",
                        help="Worksheet name for Excel sources")
    parser.add_argument("--target", "-o",
                        help=f"Output catalog CSV (default: profile target or {DEFAULT_TARGET})")
    parser.add_argument("--batch-size", "-b", type=int,
                        help="Rows per batch (default: profile batch_size)")
    parser.add_argument("--resume", action="store_true",
                        help="Resume from the last committed batch")
    parser.add_argument("--checkpoint",
                        help=f"Checkpoint file (default: profile checkpoint_file or {DEFAULT_CHECKPOINT})")
    parser.add_argument("--single-pass", action="store_true",
                        help="Process the whole sheet in one pass (small sources only)")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable verbose (debug) logging")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress info messages, show only warnings and errors")
    parser.add_argument("--log-file",
                        help="Also write a debug log (every skipped row) to this file")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    if args.list:
        for name in list_vendor_profiles():
            print(name)
        return

    if not args.profile:
        parser.error("--profile is required (use --list to see available profiles)")

    try:
        config = apply_overrides(load_vendor_profile(args.profile), args)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except (ConfigError, ValueError) as e:
        print(f"Error: invalid profile {args.profile}: {e}")
        sys.exit(1)

    print("=" * 60)
    print("Vendor Catalog Import")
    print("=" * 60)
    print(f"  Vendor:           {config.vendor}")
    print(f"  Source:           {config.source}"
          + (f" [{config.source_sheet}]" if config.source_sheet else ""))
    print(f"  Target:           {config.target or DEFAULT_TARGET}")
    print(f"  Batch size:       {config.batch_size}")
    print(f"  Resume mode:      {config.resume}")
    print("=" * 60)

    sys.exit(run_import(config, single_pass=args.single_pass))


if __name__ == "__main__":
    main()
