"""Product payload normalization."""

from .extract import (
    extract_package_weight,
    extract_pieces_per_package,
    extract_serving_size,
    parse_grams,
    parse_kilograms,
    parse_piece_count,
)
from .models import MissingIdentityError, NormalizedProduct, Nutrients, ProductDataError
from .normalizer import normalize_nutrients, normalize_product

__all__ = [
    "NormalizedProduct",
    "Nutrients",
    "ProductDataError",
    "MissingIdentityError",
    "normalize_product",
    "normalize_nutrients",
    "extract_package_weight",
    "extract_serving_size",
    "extract_pieces_per_package",
    "parse_grams",
    "parse_kilograms",
    "parse_piece_count",
]
