"""Normalize → classify → score, bundled into one record per product."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .classify.classifier import CategoryClassification, CategoryClassifier
from .classify.shelf import UNCATEGORIZED, shelf_category
from .config import AppConfig
from .products.models import NormalizedProduct
from .products.normalizer import normalize_product
from .scoring.points import PortionScore, PortionScoreCalculator


@dataclass(frozen=True)
class ProductRecord:
    product: NormalizedProduct
    classification: CategoryClassification
    score: PortionScore | None  # None when the product has no energy value
    shelf: str = UNCATEGORIZED

    @property
    def id(self) -> str:
        return self.product.id


class ProductPipeline:
    """Turns raw payloads into finished ProductRecords.

    Holds only immutable configuration; safe to share between lookups.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        config = config or AppConfig()
        self._language = config.locale.language
        self._unknown_name = config.locale.unknown_name
        m = config.measurements
        self._classifier = CategoryClassifier(
            teaspoon_g=m.teaspoon_g,
            tablespoon_g=m.tablespoon_g,
            glass_ml=m.glass_ml,
        )
        self._calculator = PortionScoreCalculator(
            spoonable_volume_ml=m.spoonable_volume_ml,
            cooked_volume_ml=m.cooked_volume_ml,
            dry_volume_ml=m.dry_volume_ml,
        )

    @property
    def classifier(self) -> CategoryClassifier:
        return self._classifier

    def build(self, raw: Any) -> ProductRecord:
        """Build a record from one raw product payload.

        Raises:
            MissingIdentityError: If the payload has no identity.
        """
        product = normalize_product(
            raw, language=self._language, unknown_name=self._unknown_name
        )
        return self.from_product(product)

    def from_product(self, product: NormalizedProduct) -> ProductRecord:
        classification = self._classifier.classify(product)
        return ProductRecord(
            product=product,
            classification=classification,
            score=self._calculator.calculate(product, classification),
            shelf=shelf_category(product),
        )


def build_record(raw: Any, config: AppConfig | None = None) -> ProductRecord:
    """Build a ProductRecord with a fresh pipeline."""
    return ProductPipeline(config).build(raw)
