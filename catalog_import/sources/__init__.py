"""
Source readers for vendor product data.

Modules:
    base - RowSource / CatalogSink interfaces
    csv_source - CsvRowSource for CSV exports
    xlsx_source - XlsxRowSource for Excel workbooks
"""

import os
from typing import Optional

from ..exceptions import SourceNotFoundError
from .base import CatalogSink, RowSource
from .csv_source import CsvRowSource
from .xlsx_source import XlsxRowSource

# File extension to source class mapping
SOURCE_READERS = {
    '.csv': CsvRowSource,
    '.xlsx': XlsxRowSource,
    '.xlsm': XlsxRowSource,
}


def open_source(path: str, sheet: Optional[str] = None):
    """
    Open the appropriate row source for a file.

    Args:
        path: Source file path (.csv, .xlsx or .xlsm)
        sheet: Worksheet name for workbooks (ignored for CSV)

    Returns:
        Row source instance

    Raises:
        SourceNotFoundError: If the file (or sheet) does not exist
        ValueError: If the file type is not supported
    """
    if not path or not os.path.isfile(path):
        raise SourceNotFoundError(path or '<unset>')

    extension = os.path.splitext(path)[1].lower()
    source_class = SOURCE_READERS.get(extension)
    if source_class is None:
        supported = ', '.join(SOURCE_READERS)
        raise ValueError(f"Unsupported source type: {extension or path}. Supported: {supported}")

    if source_class is XlsxRowSource:
        return XlsxRowSource(path, sheet=sheet)
    return source_class(path)


__all__ = [
    'RowSource',
    'CatalogSink',
    'CsvRowSource',
    'XlsxRowSource',
    'SOURCE_READERS',
    'open_source',
]
