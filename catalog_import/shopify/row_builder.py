"""
Catalog Row Builder

Maps a Product plus the run configuration to a 39-column Shopify
catalog row (standard product CSV format).
"""

from typing import List, Mapping

from ..common.text_utils import generate_handle, wrap_paragraph
from ..extraction.rules import RuleEngine
from ..models import CATALOG_COLUMNS, CatalogRow, ImportConfig, Product

# Single-variant products use Shopify's default option
DEFAULT_OPTION_NAME = 'Title'
DEFAULT_OPTION_VALUE = 'Default Title'
INVENTORY_TRACKER = 'shopify'

_EMPTY_ROW = dict.fromkeys(CATALOG_COLUMNS, '')


def format_bool(value: bool) -> str:
    """Serialize a flag the way the catalog CSV expects it."""
    return 'TRUE' if value else 'FALSE'


class CatalogRowBuilder:
    """
    Builds catalog rows from products.

    Usage:
        builder = CatalogRowBuilder(config)
        row = builder.build(product)
        rows = builder.build_all(extraction_result.products)
    """

    def __init__(self, config: ImportConfig, rule_engine: RuleEngine = None):
        """
        Initialize the builder.

        Args:
            config: Import configuration (vendor, content strategy, defaults)
            rule_engine: Classification rules (built from config if None)
        """
        self.vendor = config.vendor
        self.content = config.content_strategy
        self.defaults = config.defaults
        self.rules = rule_engine or RuleEngine(config)

    def describe(self, product: Product) -> str:
        """
        Build the Body (HTML) value for a product.

        Modes:
            empty  - always ''
            static - the configured static content
            source - the product's own description

        Unknown modes produce ''.
        """
        mode = self.content.mode
        if mode == 'static':
            text = self.content.static_content
        elif mode == 'source':
            text = product.description
        else:
            return ''

        return wrap_paragraph(text) if self.content.html_wrap else text

    def build(self, product: Product) -> CatalogRow:
        """
        Convert a product to a catalog row.

        Args:
            product: Validated product

        Returns:
            CatalogRow with all 39 fields set (unused fields are '')
        """
        title = product.title
        published = self.rules.published(title)
        defaults = self.defaults

        fields = dict(_EMPTY_ROW)
        fields.update({
            'handle': generate_handle(title),
            'title': title,
            'body': self.describe(product),
            'vendor': self.vendor,
            'product_category': self.rules.category(title),
            'type': self.rules.product_type(title),
            'tags': ', '.join(self.rules.tags(title)),
            'published': format_bool(published),
            'option1_name': DEFAULT_OPTION_NAME,
            'option1_value': DEFAULT_OPTION_VALUE,
            'variant_sku': product.sku,
            'variant_grams': product.weight,
            'variant_inventory_tracker': INVENTORY_TRACKER,
            'variant_inventory_qty': product.quantity,
            'variant_inventory_policy': defaults.inventory_policy,
            'variant_fulfillment_service': defaults.fulfillment_service,
            'variant_price': product.price,
            'variant_requires_shipping': format_bool(defaults.requires_shipping),
            'variant_taxable': format_bool(defaults.taxable),
            'gift_card': format_bool(False),
            'variant_weight_unit': defaults.weight_unit,
            'cost_per_item': product.cost,
            'status': 'active' if published else 'draft',
        })

        return CatalogRow(**fields)

    def build_all(self, products: Mapping[str, Product]) -> List[CatalogRow]:
        """Convert products (keyed by SKU) to rows, keeping mapping order."""
        return [self.build(product) for product in products.values()]
