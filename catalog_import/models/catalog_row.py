"""
Catalog row model.

Fixed 39-column layout of the standard Shopify product CSV. A row is an
immutable named tuple, so it can be read by position or by field name
and is never partially filled.
"""

from collections import namedtuple

# Logical column names, in output order (index = position in the row)
CATALOG_COLUMNS = (
    'handle', 'title', 'body', 'vendor', 'product_category', 'type', 'tags',
    'published', 'option1_name', 'option1_value', 'option1_linked_to',
    'option2_name', 'option2_value', 'option2_linked_to',
    'option3_name', 'option3_value', 'option3_linked_to',
    'variant_sku', 'variant_grams', 'variant_inventory_tracker',
    'variant_inventory_qty', 'variant_inventory_policy',
    'variant_fulfillment_service', 'variant_price', 'variant_compare_at_price',
    'variant_requires_shipping', 'variant_taxable', 'variant_barcode',
    'image_src', 'image_position', 'image_alt_text', 'gift_card',
    'seo_title', 'seo_description', 'variant_image', 'variant_weight_unit',
    'variant_tax_code', 'cost_per_item', 'status',
)

# Header labels for a freshly initialized target (same order)
SHOPIFY_FIELDNAMES = [
    'Handle', 'Title', 'Body (HTML)', 'Vendor', 'Product Category', 'Type', 'Tags',
    'Published', 'Option1 Name', 'Option1 Value', 'Option1 Linked To',
    'Option2 Name', 'Option2 Value', 'Option2 Linked To',
    'Option3 Name', 'Option3 Value', 'Option3 Linked To',
    'Variant SKU', 'Variant Grams', 'Variant Inventory Tracker',
    'Variant Inventory Qty', 'Variant Inventory Policy',
    'Variant Fulfillment Service', 'Variant Price', 'Variant Compare At Price',
    'Variant Requires Shipping', 'Variant Taxable', 'Variant Barcode',
    'Image Src', 'Image Position', 'Image Alt Text', 'Gift Card',
    'SEO Title', 'SEO Description', 'Variant Image', 'Variant Weight Unit',
    'Variant Tax Code', 'Cost per item', 'Status',
]

CATALOG_ROW_WIDTH = len(CATALOG_COLUMNS)

VARIANT_SKU_INDEX = CATALOG_COLUMNS.index('variant_sku')

CatalogRow = namedtuple('CatalogRow', CATALOG_COLUMNS)
CatalogRow.__doc__ = "One product-variant record in the 39-column catalog layout."
