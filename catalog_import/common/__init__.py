# Common utilities
from .config_loader import (
    build_import_config,
    describe_config,
    list_vendor_profiles,
    load_config,
    load_vendor_profile,
)
from .csv_utils import configure_csv, count_rows, iter_csv_rows
from .log_config import setup_logging
from .text_utils import generate_handle, wrap_paragraph
