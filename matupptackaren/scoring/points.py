"""Energy point scores per 100 g and per portion."""

from __future__ import annotations

from dataclasses import dataclass

from ..classify.classifier import CategoryClassification
from ..classify.rules import Category
from ..products.extract import round_half_up
from ..products.models import NormalizedProduct, Nutrients

KCAL_PER_POINT = 33.0
SATURATED_FAT_FACTOR = 0.12
SUGAR_FACTOR = 0.12
PROTEIN_FACTOR = 0.098
PROTEIN_CAP = 0.35  # share of calorie points protein may offset

SPOONABLE_VOLUME_ML = 100.0
COOKED_VOLUME_ML = 200.0
DRY_VOLUME_ML = 100.0


def calculate_points(
    kcal: float,
    saturated_fat: float = 0.0,
    sugar: float = 0.0,
    protein: float = 0.0,
) -> int:
    """Point score for an amount of food given its kcal and macros in grams.

    The protein deduction is capped at 35% of the calorie points, and the
    result is a whole number never below zero.
    """
    calorie_points = kcal / KCAL_PER_POINT
    fat_points = saturated_fat * SATURATED_FAT_FACTOR
    sugar_points = sugar * SUGAR_FACTOR
    protein_deduction = min(protein * PROTEIN_FACTOR, calorie_points * PROTEIN_CAP)
    total = calorie_points + fat_points + sugar_points - protein_deduction
    return max(0, round_half_up(total))


def points_for_grams(nutrients: Nutrients, grams: float) -> int | None:
    """Point score for ``grams`` of a food, or None without an energy value.

    The macros are scaled first and the formula applied to the scaled
    values, so 300 g is not simply three times the 100 g score.
    """
    kcal = nutrients.energy_kcal
    if kcal is None:
        return None
    factor = grams / 100.0
    return calculate_points(
        kcal * factor,
        (nutrients.saturated_fat or 0.0) * factor,
        (nutrients.sugars or 0.0) * factor,
        (nutrients.proteins or 0.0) * factor,
    )


@dataclass(frozen=True)
class UnitScore:
    unit: str  # "slice", "teaspoon", "tablespoon", "100ml", "glass", "2dl_cooked"
    grams: float
    points: int


@dataclass(frozen=True)
class PortionScore:
    per_100g: int
    per_package: int | None = None
    per_serving: int | None = None
    per_piece: int | None = None
    units: tuple[UnitScore, ...] = ()

    def unit(self, name: str) -> UnitScore | None:
        for unit_score in self.units:
            if unit_score.unit == name:
                return unit_score
        return None


def category_portions(
    classification: CategoryClassification,
    spoonable_volume_ml: float = SPOONABLE_VOLUME_ML,
    cooked_volume_ml: float = COOKED_VOLUME_ML,
    dry_volume_ml: float = DRY_VOLUME_ML,
) -> list[tuple[str, float]]:
    """Gram weight of each category-specific unit of measure."""
    m = classification.measurements
    if m is None:
        return []

    portions: list[tuple[str, float]] = []
    match classification.category:
        case Category.SLICEABLE:
            if m.slice_weight:
                portions.append(("slice", m.slice_weight))
        case Category.SPOONABLE:
            if m.teaspoon_g:
                portions.append(("teaspoon", m.teaspoon_g))
            if m.tablespoon_g:
                portions.append(("tablespoon", m.tablespoon_g))
            if m.density:
                portions.append(("100ml", spoonable_volume_ml * m.density / 100))
        case Category.BEVERAGE:
            if m.glass_ml and m.density:
                portions.append(("glass", m.glass_ml * m.density / 100))
        case Category.COOKED_DRY_GOOD:
            if m.cooked_density and m.swelling_factor:
                cooked_grams = cooked_volume_ml * m.cooked_density / 100
                portions.append(("2dl_cooked", cooked_grams / m.swelling_factor))
        case Category.VOLUME_DRY_GOOD:
            if m.density:
                portions.append(("100ml", dry_volume_ml * m.density / 100))
    return portions


class PortionScoreCalculator:
    """Computes the standard set of portion scores for a product."""

    def __init__(
        self,
        spoonable_volume_ml: float = SPOONABLE_VOLUME_ML,
        cooked_volume_ml: float = COOKED_VOLUME_ML,
        dry_volume_ml: float = DRY_VOLUME_ML,
    ) -> None:
        self._spoonable_volume_ml = spoonable_volume_ml
        self._cooked_volume_ml = cooked_volume_ml
        self._dry_volume_ml = dry_volume_ml

    def calculate(
        self,
        product: NormalizedProduct,
        classification: CategoryClassification | None = None,
    ) -> PortionScore | None:
        """Return None when the product has no energy value."""
        nutrients = product.nutrients
        per_100g = points_for_grams(nutrients, 100.0)
        if per_100g is None:
            return None

        def scored(grams: float | None) -> int | None:
            if not grams or grams <= 0:
                return None
            return points_for_grams(nutrients, grams)

        units: tuple[UnitScore, ...] = ()
        if classification is not None:
            units = tuple(
                UnitScore(unit=name, grams=grams, points=points_for_grams(nutrients, grams))
                for name, grams in category_portions(
                    classification,
                    self._spoonable_volume_ml,
                    self._cooked_volume_ml,
                    self._dry_volume_ml,
                )
                if grams > 0
            )

        return PortionScore(
            per_100g=per_100g,
            per_package=scored(product.package_weight),
            per_serving=scored(product.serving_size),
            per_piece=scored(product.piece_weight),
            units=units,
        )
