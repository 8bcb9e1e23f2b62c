"""
Vendor Catalog Import Tool

Modules:
    models      - Data models (Product, CatalogRow, ImportConfig, BatchCursor)
    common      - Shared utilities (config loader, logging, CSV utils, handles)
    extraction  - Row to product extraction and keyword rules
    shopify     - Catalog row building and CSV catalog target
    sources     - Vendor data readers (CSV, Excel)
    pipeline    - Batch coordinator and checkpoints
    validation  - Run tracking and summaries
"""
