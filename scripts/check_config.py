#!/usr/bin/env python3
"""
Check a vendor profile before importing.

Prints the configuration report (vendor, batching, where each mapped
field lives in the sheet) and peeks at the source: row count, header
and the first data row read through the column mapping.

Usage:
    python3 scripts/check_config.py --profile crystal_jewelry
    python3 scripts/check_config.py --profile config/vendors/my_vendor.yaml --source data/order.csv
"""

import argparse
import dataclasses
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_import.common import describe_config, load_vendor_profile, setup_logging
from catalog_import.exceptions import CatalogImportError, SourceNotFoundError
from catalog_import.extraction import column_letter, column_value
from catalog_import.sources import open_source

load_dotenv(Path(__file__).parent.parent / ".env")


def main():
    parser = argparse.ArgumentParser(description="Show a vendor profile and check its source")
    parser.add_argument("--profile", "-p", required=True,
                        help="Vendor profile name or path to a profile YAML file")
    parser.add_argument("--source", "-s",
                        help="Source file to check instead of the profile's source")
    parser.add_argument("--sheet",
                        help="Worksheet name for Excel sources")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable verbose (debug) logging")
    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=not args.verbose)

    try:
        config = load_vendor_profile(args.profile)
    except (FileNotFoundError, CatalogImportError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    overrides = {}
    if args.source:
        overrides["source"] = args.source
    if args.sheet:
        overrides["source_sheet"] = args.sheet
    if overrides:
        config = dataclasses.replace(config, **overrides)

    print(describe_config(config))
    print()

    try:
        source = open_source(config.source, config.source_sheet)
    except SourceNotFoundError as e:
        print(f"Source check: {e.message}")
        sys.exit(1)
    except ValueError as e:
        print(f"Source check: {e}")
        sys.exit(1)

    with source:
        total = source.row_count()
        header = source.read_rows(1, 1)
        first = source.read_rows(2, 1)

    print(f"Source check: {total} data rows")
    if header:
        print("\nHeader:")
        for index, label in enumerate(header[0]):
            print(f"  {column_letter(index):<4} {label}")
    if first:
        print("\nFirst data row:")
        for name, index in config.column_mapping.items():
            if index >= 0:
                print(f"  {name:<14} {column_value(first[0], index)!r}")


if __name__ == "__main__":
    main()
