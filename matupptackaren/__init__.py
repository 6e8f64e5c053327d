"""Grocery product lookup, normalization, classification and point scoring."""

from .classify import (
    Category,
    CategoryClassification,
    CategoryClassifier,
    Measurements,
    SliceKind,
    classify_product,
)
from .config import (
    AppConfig,
    ExportConfig,
    LocaleConfig,
    LookupConfig,
    MeasurementConfig,
    load_config,
)
from .export import export_products_csv, products_to_csv, write_products_csv
from .history import ProductHistory
from .lookup import (
    InvalidBarcodeError,
    OpenFoodFactsClient,
    ProductLookupError,
    clean_barcode,
)
from .pipeline import ProductPipeline, ProductRecord, build_record
from .products import (
    MissingIdentityError,
    NormalizedProduct,
    Nutrients,
    ProductDataError,
    normalize_product,
)
from .scoring import PortionScore, PortionScoreCalculator, UnitScore, calculate_points

__all__ = [
    "NormalizedProduct",
    "Nutrients",
    "ProductDataError",
    "MissingIdentityError",
    "normalize_product",
    "Category",
    "SliceKind",
    "Measurements",
    "CategoryClassification",
    "CategoryClassifier",
    "classify_product",
    "PortionScore",
    "PortionScoreCalculator",
    "UnitScore",
    "calculate_points",
    "ProductPipeline",
    "ProductRecord",
    "build_record",
    "OpenFoodFactsClient",
    "ProductLookupError",
    "InvalidBarcodeError",
    "clean_barcode",
    "ProductHistory",
    "export_products_csv",
    "products_to_csv",
    "write_products_csv",
    "AppConfig",
    "LookupConfig",
    "LocaleConfig",
    "MeasurementConfig",
    "ExportConfig",
    "load_config",
]
