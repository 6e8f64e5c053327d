"""Usage category classification."""

from .classifier import (
    CategoryClassification,
    CategoryClassifier,
    Measurements,
    classify_product,
    first_ingredient,
    fold_text,
)
from .rules import DEFAULT_RULES, Category, CategoryRule, CookedGood, SliceKind
from .shelf import SHELF_CATEGORIES, ShelfCategory, detect_shelf_category, shelf_category

__all__ = [
    "Category",
    "SliceKind",
    "CategoryRule",
    "CookedGood",
    "DEFAULT_RULES",
    "CategoryClassifier",
    "CategoryClassification",
    "Measurements",
    "classify_product",
    "first_ingredient",
    "fold_text",
    "ShelfCategory",
    "SHELF_CATEGORIES",
    "detect_shelf_category",
    "shelf_category",
]
