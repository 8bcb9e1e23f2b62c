"""Shared test fixtures."""

import csv
from decimal import Decimal
from pathlib import Path

import pytest

from catalog_import.models import (
    CatalogDefaults,
    ColumnMapping,
    ContentStrategy,
    DuplicateHandling,
    ImportConfig,
    KeywordRule,
    Product,
    RuleKind,
)

PROJECT_ROOT = Path(__file__).parent.parent
VENDORS_DIR = PROJECT_ROOT / "config" / "vendors"

# Layout of the crystal vendor sheet (12 columns, A-L)
CRYSTAL_HEADER = [
    "Title", "Description", "Stone", "Size", "Finish", "Price Wholesale",
    "Price Retail", "Supplier", "Origin", "Notes", "SKU", "Quantity",
]


def crystal_row(title, sku, retail="12.00", wholesale="5.00", quantity="10", description=""):
    """Build a 12-column crystal vendor row."""
    row = [""] * len(CRYSTAL_HEADER)
    row[0] = title
    row[1] = description
    row[5] = wholesale
    row[6] = retail
    row[10] = sku
    row[11] = quantity
    return row


def write_csv(path, rows):
    """Write rows (header included) to a CSV file."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerows(rows)
    return str(path)


@pytest.fixture
def crystal_config():
    """Crystal jewelry vendor configuration."""
    return ImportConfig(
        vendor="Crystal Healing Co",
        source="CrystalVendorData",
        target="shopify_products",
        column_mapping=ColumnMapping(
            title=0, description=1, cost=5, price=6, sku=10, quantity=11,
        ),
        content_strategy=ContentStrategy(mode="source", html_wrap=True),
        category_rules=(
            KeywordRule(RuleKind.CATEGORY, ("pendant", "necklace"),
                        "Apparel & Accessories > Jewelry", priority=10),
            KeywordRule(RuleKind.CATEGORY, ("bracelet", "earrings"),
                        "Apparel & Accessories > Jewelry", priority=9),
            KeywordRule(RuleKind.CATEGORY, ("crystal", "quartz", "amethyst", "healing"),
                        "Arts & Entertainment > Hobbies & Creative Arts > Arts & Crafts",
                        priority=8),
        ),
        type_rules=(
            KeywordRule(RuleKind.TYPE, ("pendant",), "Pendant"),
            KeywordRule(RuleKind.TYPE, ("bracelet",), "Bracelet"),
            KeywordRule(RuleKind.TYPE, ("necklace",), "Necklace"),
            KeywordRule(RuleKind.TYPE, ("crystal",), "Crystal"),
            KeywordRule(RuleKind.TYPE, ("wand",), "Crystal Wand"),
        ),
        tag_rules=(
            KeywordRule(RuleKind.TAG, ("amethyst",), ("Amethyst", "Purple Crystal")),
            KeywordRule(RuleKind.TAG, ("rose quartz",), ("Rose Quartz", "Love Stone")),
            KeywordRule(RuleKind.TAG, ("natural",), ("Natural", "Authentic")),
        ),
        publish_exclude_keywords=("sample",),
        duplicate_handling=DuplicateHandling(enabled=True, action="skip"),
        defaults=CatalogDefaults(
            category="Arts & Entertainment > Hobbies & Creative Arts > Arts & Crafts",
            type="Product",
            tags=("Spiritual", "Natural", "Handmade"),
        ),
        batch_size=2,
    )


@pytest.fixture
def crystal_rows():
    """Five data rows, one of each kind the extractor cares about."""
    return [
        crystal_row("Amethyst Pendant", "AP-001", retail="12.00", description="Deep purple"),
        crystal_row("Rose Quartz Bracelet", "RQB-002", retail="18.50"),
        crystal_row("", "NO-TITLE"),
        crystal_row("Clear Quartz Point", "CQP-004", retail="0"),
        crystal_row("Selenite Wand", "SW-005", retail="9.99", quantity=""),
    ]


@pytest.fixture
def amethyst_pendant():
    return Product(
        sku="AP-001",
        title="Amethyst Pendant",
        price=Decimal("12.00"),
        cost=Decimal("5.00"),
        quantity=10,
        description="Deep purple",
    )


@pytest.fixture
def crystal_csv(tmp_path, crystal_rows):
    """Crystal vendor CSV with a header and the five sample rows."""
    return write_csv(tmp_path / "crystal_vendor.csv", [CRYSTAL_HEADER] + crystal_rows)


@pytest.fixture
def make_row():
    """Factory for 12-column crystal vendor rows."""
    return crystal_row


@pytest.fixture
def make_csv():
    """Factory writing rows to a CSV file and returning its path."""
    return write_csv


@pytest.fixture
def crystal_header():
    return list(CRYSTAL_HEADER)
