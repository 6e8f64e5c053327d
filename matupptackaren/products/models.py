"""Data models for normalized product records."""

from __future__ import annotations

from dataclasses import dataclass, field

UNKNOWN_COUNTRIES = "Unknown"


class ProductDataError(ValueError):
    """A raw product payload cannot be represented as a product."""


class MissingIdentityError(ProductDataError):
    """The payload has no code, id or _id to identify it by."""


@dataclass(frozen=True)
class Nutrients:
    """Nutrient values per 100 g. ``None`` means unknown, not zero."""

    energy: float | None = None
    energy_unit: str = "kJ"  # "kJ" or "kcal", depending on the source key
    fat: float | None = None
    saturated_fat: float | None = None
    carbohydrates: float | None = None
    sugars: float | None = None
    salt: float | None = None
    fiber: float | None = None
    proteins: float | None = None

    @property
    def energy_kcal(self) -> float | None:
        """Energy per 100 g converted to kcal."""
        if self.energy is None:
            return None
        if self.energy_unit == "kcal":
            return self.energy
        return self.energy / 4.184


@dataclass(frozen=True)
class NormalizedProduct:
    """Canonical product record built once from a raw payload."""

    id: str  # EAN/barcode, dedup key
    name: str  # Locale-preferred display name, never empty
    names: tuple[str, ...] = ()  # Every distinct name field, for text matching
    brands: str | None = None
    image_url: str | None = None
    nutriscore_grade: str | None = None
    ecoscore_grade: str | None = None
    nova_group: int | None = None
    categories: str | None = None
    categories_tags: tuple[str, ...] = ()
    ingredients_text: str | None = None
    nutrients: Nutrients = field(default_factory=Nutrients)
    package_weight: float | None = None  # grams
    serving_size: float | None = None  # grams
    pieces_per_package: int = 1
    countries: str = UNKNOWN_COUNTRIES
    packaging: str | None = None
    quantity: str | None = None

    @property
    def piece_weight(self) -> float | None:
        """Weight of one piece in grams, if the package weight is known."""
        if self.package_weight is None or self.pieces_per_package < 1:
            return None
        return self.package_weight / self.pieces_per_package
