"""Energy point scoring."""

from .points import (
    PortionScore,
    PortionScoreCalculator,
    UnitScore,
    calculate_points,
    category_portions,
    points_for_grams,
)

__all__ = [
    "PortionScore",
    "PortionScoreCalculator",
    "UnitScore",
    "calculate_points",
    "category_portions",
    "points_for_grams",
]
