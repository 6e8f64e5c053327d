"""Rule-based scoring classifier for usage categories.

Each rule is scored independently against the product text:

- an exclusion term anywhere in name, brand or categories disqualifies it
- +10 for a keyword in the name, +20 more for a core keyword in the name
- +5 for a tag term in the categories, +1 for a keyword in the brand
- an ingredient bonus when the first listed ingredient is the expected base

Rules with ``requires_tag`` cannot win without a tag match. The highest
score wins; ties go to the rule listed first. A product where no rule
scores above zero is Standard.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..products.models import NormalizedProduct
from .rules import (
    BRAND_KEYWORD_SCORE,
    COOKED_GOODS,
    CORE_KEYWORD_SCORE,
    DEFAULT_COOKED_KEYWORD,
    DEFAULT_DRY_DENSITY,
    DEFAULT_RULES,
    DRY_DENSITIES,
    GENERIC_TAGS,
    GLASS_ML,
    NAME_KEYWORD_SCORE,
    TABLESPOON_G,
    TAG_SCORE,
    TEASPOON_G,
    Category,
    CategoryRule,
    SliceKind,
)

logger = logging.getLogger(__name__)

DISQUALIFIED = -1

_INGREDIENT_PREFIX = re.compile(r"^\s*(?:ingredienser|ingredients|ingrediens)\s*:\s*")
_INGREDIENT_SPLIT = re.compile(r"[,;:(\[.]")
_INGREDIENT_NOISE = re.compile(r"[\d%*_]+")


def fold_text(text: str | None) -> str:
    """Lowercase and strip diacritics: "Rågbröd" → "ragbrod"."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.lower()


def first_ingredient(ingredients_text: str | None) -> str:
    """Folded first listed ingredient, without percentages or markers."""
    text = fold_text(ingredients_text)
    if not text:
        return ""
    text = _INGREDIENT_PREFIX.sub("", text)
    head = _INGREDIENT_SPLIT.split(text, maxsplit=1)[0]
    head = _INGREDIENT_NOISE.sub(" ", head)
    return " ".join(head.split())


def _word_pattern(term: str) -> re.Pattern[str]:
    return re.compile(r"\b" + re.escape(fold_text(term)) + r"\b")


@dataclass(frozen=True)
class Measurements:
    """Category-specific conversion constants."""

    slice_weight: float | None = None  # g per slice
    teaspoon_g: float | None = None
    tablespoon_g: float | None = None
    glass_ml: float | None = None
    density: float | None = None  # g per 100 ml
    swelling_factor: float | None = None  # cooked weight / dry weight
    cooked_density: float | None = None  # g per 100 ml cooked
    keyword: str | None = None  # table entry the constants came from


@dataclass(frozen=True)
class CategoryClassification:
    category: Category = Category.STANDARD
    subcategory: SliceKind | None = None
    measurements: Measurements | None = None
    rule: str | None = None
    score: int = 0


@dataclass(frozen=True)
class _ProductText:
    name: str
    brand: str
    categories: str
    ingredient: str

    @property
    def searchable(self) -> str:
        return " ".join(part for part in (self.name, self.brand, self.categories) if part)


class _CompiledRule:
    """A CategoryRule with its terms folded and compiled once."""

    def __init__(self, rule: CategoryRule) -> None:
        self.rule = rule
        self.keywords = [_word_pattern(k) for k in rule.keywords]
        self.core_keywords = [_word_pattern(k) for k in rule.core_keywords]
        self.exclusions = [_word_pattern(k) for k in rule.exclusions]
        self.base_ingredients = [_word_pattern(k) for k in rule.base_ingredients]
        self.tag_terms = [fold_text(t) for t in rule.tag_terms]

    @staticmethod
    def _any(patterns: list[re.Pattern[str]], text: str) -> bool:
        return bool(text) and any(p.search(text) for p in patterns)

    def is_excluded(self, text: _ProductText) -> bool:
        return self._any(self.exclusions, text.searchable)

    def has_tag(self, text: _ProductText) -> bool:
        return bool(text.categories) and any(t in text.categories for t in self.tag_terms)

    def score(self, text: _ProductText) -> int:
        if self.is_excluded(text):
            return DISQUALIFIED

        has_tag = self.has_tag(text)
        if self.rule.requires_tag and not has_tag:
            return DISQUALIFIED

        score = 0
        if self._any(self.keywords, text.name):
            score += NAME_KEYWORD_SCORE
            if self._any(self.core_keywords, text.name):
                score += CORE_KEYWORD_SCORE
        if has_tag:
            score += TAG_SCORE
        if self._any(self.keywords, text.brand):
            score += BRAND_KEYWORD_SCORE
        # Ingredients only back up evidence found elsewhere
        if score > 0 and self._any(self.base_ingredients, text.ingredient):
            score += self.rule.ingredient_bonus
        return score


class CategoryClassifier:
    """Assigns one usage category and its measurements to a product.

    Rules are given in tie-break priority order, highest first. The
    instance holds only compiled, read-only data and can be shared.
    """

    def __init__(
        self,
        rules: Sequence[CategoryRule] = DEFAULT_RULES,
        generic_tags: Sequence[str] = GENERIC_TAGS,
        teaspoon_g: float = TEASPOON_G,
        tablespoon_g: float = TABLESPOON_G,
        glass_ml: float = GLASS_ML,
    ) -> None:
        self._rules = [_CompiledRule(r) for r in rules]
        # Longest first so "plant-based foods and beverages" goes before "plant-based foods"
        self._generic_tags = sorted((fold_text(t) for t in generic_tags), key=len, reverse=True)
        self._teaspoon_g = teaspoon_g
        self._tablespoon_g = tablespoon_g
        self._glass_ml = glass_ml

    def _product_text(self, product: NormalizedProduct) -> _ProductText:
        categories = " ".join(
            fold_text(part)
            for part in (product.categories, " ".join(product.categories_tags))
            if part
        )
        for generic in self._generic_tags:
            categories = categories.replace(generic, " ")
        return _ProductText(
            name=" ".join(fold_text(n) for n in (product.names or (product.name,))),
            brand=fold_text(product.brands),
            categories=" ".join(categories.split()),
            ingredient=first_ingredient(product.ingredients_text),
        )

    def scores(self, product: NormalizedProduct) -> dict[str, int]:
        """Score of every rule, -1 for disqualified ones."""
        text = self._product_text(product)
        return {compiled.rule.name: compiled.score(text) for compiled in self._rules}

    def classify(self, product: NormalizedProduct) -> CategoryClassification:
        text = self._product_text(product)

        best: _CompiledRule | None = None
        best_score = 0
        for compiled in self._rules:
            score = compiled.score(text)
            if score > best_score:
                best, best_score = compiled, score

        if best is None:
            logger.debug("%s: no category evidence, standard", product.id)
            return CategoryClassification()

        logger.debug("%s: classified %s (score %d)", product.id, best.rule.name, best_score)
        return CategoryClassification(
            category=best.rule.category,
            subcategory=best.rule.slice_kind,
            measurements=self._measurements(best.rule, text),
            rule=best.rule.name,
            score=best_score,
        )

    def _measurements(self, rule: CategoryRule, text: _ProductText) -> Measurements:
        match rule.category:
            case Category.SLICEABLE:
                return Measurements(slice_weight=rule.slice_weight)
            case Category.SPOONABLE:
                return Measurements(
                    teaspoon_g=self._teaspoon_g,
                    tablespoon_g=self._tablespoon_g,
                    density=rule.density,
                )
            case Category.BEVERAGE:
                return Measurements(glass_ml=self._glass_ml, density=rule.density)
            case Category.COOKED_DRY_GOOD:
                keyword = _table_keyword(COOKED_GOODS, text.name)
                if keyword is None:
                    keyword = next(
                        (kw for tag, kw in rule.tag_keywords.items() if tag in text.categories),
                        DEFAULT_COOKED_KEYWORD,
                    )
                cooked = COOKED_GOODS[keyword]
                return Measurements(
                    swelling_factor=cooked.swelling_factor,
                    cooked_density=cooked.cooked_density,
                    keyword=keyword,
                )
            case Category.VOLUME_DRY_GOOD:
                keyword = _table_keyword(DRY_DENSITIES, text.name)
                density = DRY_DENSITIES[keyword] if keyword else DEFAULT_DRY_DENSITY
                return Measurements(density=density, keyword=keyword)
            case _:
                return Measurements()


def _table_keyword(table: Mapping[str, object], name: str) -> str | None:
    """Most specific (longest) table key found as a word in the name."""
    for key in sorted(table, key=len, reverse=True):
        if _word_pattern(key).search(name):
            return key
    return None


# Holds only compiled read-only data, shared by classify_product
DEFAULT_CLASSIFIER = CategoryClassifier()


def classify_product(product: NormalizedProduct) -> CategoryClassification:
    """Classify with the default rule set and kitchen measures."""
    return DEFAULT_CLASSIFIER.classify(product)
