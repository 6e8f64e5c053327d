"""Product lookup against the Open Food Facts API."""

from .client import (
    PRODUCT_FIELDS,
    InvalidBarcodeError,
    OpenFoodFactsClient,
    ProductLookupError,
    clean_barcode,
    normalize_query,
)

__all__ = [
    "OpenFoodFactsClient",
    "ProductLookupError",
    "InvalidBarcodeError",
    "PRODUCT_FIELDS",
    "clean_barcode",
    "normalize_query",
]
