"""
CSV Utilities

Common functions for reading CSV files with proper configuration.
Handles large field sizes (long HTML descriptions in vendor exports).
"""

import csv
from pathlib import Path
from typing import Iterator, List

DEFAULT_ENCODING = 'utf-8-sig'


def configure_csv(field_size_limit: int = 10 * 1024 * 1024) -> None:
    """
    Configure CSV module for large fields.

    Args:
        field_size_limit: Maximum field size in bytes (default: 10MB)
    """
    csv.field_size_limit(field_size_limit)


def iter_csv_rows(file_path: str | Path, encoding: str = DEFAULT_ENCODING) -> Iterator[List[str]]:
    """
    Read a CSV file and yield rows as lists of cell values.

    The header row is included; row 1 of the sheet is the first item.

    Args:
        file_path: Path to CSV file
        encoding: File encoding (default: utf-8 with optional BOM)

    Yields:
        List of cell values for each row
    """
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        yield from csv.reader(f)


def count_rows(file_path: str | Path, encoding: str = DEFAULT_ENCODING) -> int:
    """
    Count rows in CSV file (excluding header).

    Args:
        file_path: Path to CSV file

    Returns:
        Number of data rows
    """
    count = -1
    for count, _ in enumerate(iter_csv_rows(file_path, encoding)):
        pass
    return max(count, 0)


# Initialize CSV configuration on module import
configure_csv()
