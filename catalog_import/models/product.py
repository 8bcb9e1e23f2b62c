"""
Product data model.

Pure data class for a validated vendor product.
No business logic - only data structure definition and invariants.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    """
    One vendor product extracted from a source row.

    Keyed by its trimmed SKU. A Product always has a non-empty title
    and SKU and a positive price; anything else is rejected at
    construction time.
    """

    sku: str
    title: str
    price: Decimal
    cost: Decimal = Decimal("0")
    quantity: int = 0
    weight: Decimal = Decimal("0")
    description: str = ""

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.sku or not self.sku.strip():
            raise ValueError("Product SKU is required")
        if not self.title or not self.title.strip():
            raise ValueError("Product title is required")
        if self.price is None or self.price <= 0:
            raise ValueError(f"Product price must be > 0 (got {self.price})")
