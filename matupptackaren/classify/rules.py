"""Category rule tables and measurement constants.

All keyword and tag terms are written in their natural spelling; the
classifier folds diacritics and case before matching. The constants are
heuristic kitchen measures, not values from any authoritative source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Category(str, Enum):
    SLICEABLE = "sliceable"
    SPOONABLE = "spoonable"
    BEVERAGE = "beverage"
    COOKED_DRY_GOOD = "cooked_dry_good"
    VOLUME_DRY_GOOD = "volume_dry_good"
    STANDARD = "standard"


class SliceKind(str, Enum):
    BREAD = "bread"
    CHEESE = "cheese"
    COLD_CUTS = "cold_cuts"


@dataclass(frozen=True)
class CookedGood:
    """Dry-to-cooked weight multiplier and cooked density (g per 100 ml)."""

    swelling_factor: float
    cooked_density: float


@dataclass(frozen=True)
class CategoryRule:
    """Evidence definition for one candidate category."""

    name: str
    category: Category
    keywords: tuple[str, ...]
    core_keywords: tuple[str, ...] = ()
    tag_terms: tuple[str, ...] = ()
    exclusions: tuple[str, ...] = ()
    requires_tag: bool = False
    base_ingredients: tuple[str, ...] = ()
    ingredient_bonus: int = 0
    slice_kind: SliceKind | None = None
    slice_weight: float | None = None
    density: float | None = None  # g per 100 ml
    tag_keywords: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


# Score weights
NAME_KEYWORD_SCORE = 10
CORE_KEYWORD_SCORE = 20
TAG_SCORE = 5
BRAND_KEYWORD_SCORE = 1

# Kitchen measures
TEASPOON_G = 5.0
TABLESPOON_G = 15.0
GLASS_ML = 250.0
WATER_DENSITY = 100.0  # g per 100 ml, used for drinks and spoonable foods

SLICE_WEIGHTS: Mapping[SliceKind, float] = MappingProxyType({
    SliceKind.BREAD: 30.0,
    SliceKind.CHEESE: 10.0,
    SliceKind.COLD_CUTS: 8.0,
})

DEFAULT_COOKED_KEYWORD = "pasta"

COOKED_GOODS: Mapping[str, CookedGood] = MappingProxyType({
    "pasta": CookedGood(2.5, 60.0),
    "spaghetti": CookedGood(2.5, 55.0),
    "makaroner": CookedGood(2.5, 60.0),
    "macaroni": CookedGood(2.5, 60.0),
    "penne": CookedGood(2.5, 55.0),
    "fusilli": CookedGood(2.5, 55.0),
    "farfalle": CookedGood(2.5, 55.0),
    "tagliatelle": CookedGood(2.5, 50.0),
    "lasagneplattor": CookedGood(2.5, 60.0),
    "nudlar": CookedGood(3.0, 55.0),
    "äggnudlar": CookedGood(3.0, 55.0),
    "noodles": CookedGood(3.0, 55.0),
    "ris": CookedGood(3.0, 80.0),
    "jasminris": CookedGood(3.0, 80.0),
    "basmatiris": CookedGood(3.0, 80.0),
    "fullkornsris": CookedGood(2.8, 80.0),
    "rice": CookedGood(3.0, 80.0),
    "couscous": CookedGood(2.5, 70.0),
    "bulgur": CookedGood(2.8, 75.0),
    "quinoa": CookedGood(2.8, 75.0),
    "matvete": CookedGood(2.5, 75.0),
})

DEFAULT_DRY_DENSITY = 60.0

DRY_DENSITIES: Mapping[str, float] = MappingProxyType({
    "vetemjöl": 60.0,
    "mjöl": 60.0,
    "grahamsmjöl": 55.0,
    "rågmjöl": 55.0,
    "dinkelmjöl": 55.0,
    "potatismjöl": 80.0,
    "majsstärkelse": 65.0,
    "mannagryn": 80.0,
    "flour": 60.0,
    "socker": 85.0,
    "strösocker": 85.0,
    "rörsocker": 85.0,
    "farinsocker": 75.0,
    "florsocker": 55.0,
    "sugar": 85.0,
    "havregryn": 35.0,
    "oats": 35.0,
    "müsli": 40.0,
    "muesli": 40.0,
    "granola": 45.0,
    "flingor": 15.0,
    "cornflakes": 15.0,
    "kakao": 40.0,
    "salt": 120.0,
})

# Tags that name a whole aisle; they would satisfy several categories at once
GENERIC_TAGS: tuple[str, ...] = (
    "en:plant-based-foods-and-beverages",
    "en:beverages-and-beverages-preparations",
    "en:plant-based-foods",
    "en:foods-and-beverages",
    "plant-based foods and beverages",
    "beverages and beverages preparations",
    "plant-based foods",
    "växtbaserade livsmedel och drycker",
    "växtbaserade livsmedel",
    "drycker och dryckesberedningar",
)

COOKED_DRY_GOOD_RULE = CategoryRule(
    name="cooked_dry_good",
    category=Category.COOKED_DRY_GOOD,
    keywords=tuple(COOKED_GOODS) + ("långkornigt ris", "pärlcouscous"),
    core_keywords=(
        "pasta", "spaghetti", "makaroner", "nudlar", "noodles", "ris", "rice",
        "couscous", "bulgur", "quinoa", "matvete",
    ),
    tag_terms=(
        "en:pastas", "en:dry-pastas", "en:noodles", "en:rices", "en:couscous",
        "en:bulgurs", "en:quinoa",
    ),
    exclusions=(
        "pastasås", "pasta sauce", "sås", "sauce", "pastasallad", "sallad",
        "salad", "färdigrätt", "ready meal", "soppa", "soup", "risgrynsgröt",
        "riskaka", "riskakor", "rice cakes", "rismjöl", "rice flour",
        "risdryck", "rice drink", "lasagne",
    ),
    base_ingredients=(
        "durumvete", "durumvetemjöl", "durumvetemannagryn", "durum wheat semolina",
        "durum wheat", "ris", "rice", "couscous", "bulgur", "quinoa",
    ),
    ingredient_bonus=15,
    tag_keywords=MappingProxyType({
        "en:rices": "ris",
        "en:noodles": "nudlar",
        "en:couscous": "couscous",
        "en:bulgurs": "bulgur",
        "en:quinoa": "quinoa",
    }),
)

BEVERAGE_RULE = CategoryRule(
    name="beverage",
    category=Category.BEVERAGE,
    keywords=(
        "dryck", "drycker", "läsk", "läskedryck", "juice", "saft", "mjölk",
        "vatten", "mineralvatten", "kolsyrat vatten", "sodavatten", "sportdryck",
        "energidryck", "havredryck", "sojadryck", "mandeldryck", "risdryck",
        "växtdryck", "apelsinjuice", "äppeljuice", "smoothie", "lemonad", "must",
        "julmust", "cider", "tonic", "nektar", "coca-cola", "pepsi", "fanta",
        "sprite", "pucko", "ramlösa", "loka", "zingo", "trocadero", "festis",
        "beverage", "drink", "soda", "milk", "water", "mineral water",
        "sparkling water", "oat drink", "soy drink", "almond drink",
    ),
    core_keywords=(
        "dryck", "läsk", "juice", "saft", "mjölk", "vatten", "drink", "milk",
        "water",
    ),
    tag_terms=(
        "en:beverages", "en:plant-based-beverages", "en:carbonated-drinks",
        "en:juices", "en:fruit-juices", "en:waters", "en:plant-milks",
        "en:milks", "en:sodas", "en:soft-drinks", "en:energy-drinks",
        "beverages", "drycker", "läskedrycker",
    ),
    exclusions=(
        "olja", "vinäger", "sås", "buljong", "fond", "soppa", "oil", "vinegar",
        "sauce", "broth", "stock", "soup", "yoghurt", "yogurt", "kvarg",
        "filmjölk", "pulver", "powder",
    ),
    base_ingredients=(
        "vatten", "kolsyrat vatten", "water", "carbonated water", "mjölk",
        "milk", "apelsinjuice", "äppeljuice",
    ),
    ingredient_bonus=15,
    density=WATER_DENSITY,
)

VOLUME_DRY_GOOD_RULE = CategoryRule(
    name="volume_dry_good",
    category=Category.VOLUME_DRY_GOOD,
    keywords=tuple(DRY_DENSITIES) + ("frukostflingor", "cereal", "cereals"),
    core_keywords=("mjöl", "vetemjöl", "socker", "havregryn", "müsli", "flour", "sugar"),
    tag_terms=(
        "en:flours", "en:sugars", "en:breakfast-cereals", "en:cereal-flakes",
        "en:rolled-oats", "en:mueslis", "en:cocoa-powders", "en:starches",
        "en:salts",
    ),
    exclusions=(
        "dryck", "drink", "bar", "bars", "kaka", "kakor", "kex", "cookies",
        "godis", "candy", "bröd", "bread",
    ),
    requires_tag=True,
    base_ingredients=(
        "vetemjöl", "socker", "havregryn", "havre", "wheat flour", "sugar",
        "oats", "rågmjöl",
    ),
    ingredient_bonus=10,
)

BREAD_RULE = CategoryRule(
    name="bread",
    category=Category.SLICEABLE,
    keywords=(
        "bröd", "knäckebröd", "tunnbröd", "limpa", "formfranska", "rågbröd",
        "fullkornsbröd", "vörtbröd", "surdegsbröd", "rostbröd", "toast",
        "bread", "crispbread", "flatbread", "loaf", "rye bread",
        "sourdough bread", "toast bread", "sandwich bread",
    ),
    core_keywords=("bröd", "bread", "limpa", "rågbröd", "formfranska", "toast"),
    tag_terms=(
        "en:breads", "en:sliced-breads", "en:rye-breads", "en:sandwich-breads",
        "en:crispbreads", "en:flatbreads",
    ),
    exclusions=(
        "ströbröd", "brödsmulor", "breadcrumbs", "brödmix", "bakmix",
        "bread mix",
    ),
    base_ingredients=(
        "vetemjöl", "rågmjöl", "rågsikt", "fullkornsvetemjöl", "fullkornsrågmjöl",
        "wheat flour", "rye flour",
    ),
    ingredient_bonus=12,
    slice_kind=SliceKind.BREAD,
    slice_weight=SLICE_WEIGHTS[SliceKind.BREAD],
)

CHEESE_RULE = CategoryRule(
    name="cheese",
    category=Category.SLICEABLE,
    keywords=(
        "ost", "hårdost", "prästost", "grevé", "herrgård", "västerbotten",
        "hushållsost", "gräddost", "mellanost", "lagrad ost", "skivad ost",
        "cheddar", "gouda", "edamer", "emmentaler", "jarlsberg", "cheese",
    ),
    core_keywords=("ost", "hårdost", "cheese"),
    tag_terms=(
        "en:cheeses", "en:hard-cheeses", "en:semi-hard-cheeses",
        "en:sliced-cheeses", "en:swedish-cheeses",
    ),
    exclusions=(
        "färskost", "keso", "cottage cheese", "cream cheese", "philadelphia",
        "ostbågar", "ostkaka", "riven", "grated", "smältost", "mjukost",
        "ostsås", "cheese sauce", "ostkex",
    ),
    base_ingredients=("mjölk", "pastöriserad mjölk", "komjölk", "milk"),
    ingredient_bonus=8,
    slice_kind=SliceKind.CHEESE,
    slice_weight=SLICE_WEIGHTS[SliceKind.CHEESE],
)

COLD_CUTS_RULE = CategoryRule(
    name="cold_cuts",
    category=Category.SLICEABLE,
    keywords=(
        "pålägg", "skinka", "kokt skinka", "rökt skinka", "salami", "kassler",
        "rostbiff", "pastrami", "medwurst", "kalkonbröst", "prosciutto",
        "serrano", "ham", "cold cuts", "sliced ham", "turkey breast",
    ),
    core_keywords=("pålägg", "skinka", "salami", "ham", "cold cuts"),
    tag_terms=(
        "en:cold-cuts", "en:hams", "en:salamis", "en:sliced-meats", "pålägg",
    ),
    exclusions=(
        "leverpastej", "pastej", "pizza", "paj", "pie", "sallad", "salad",
    ),
    base_ingredients=(
        "fläskkött", "griskött", "nötkött", "kalkonbröst", "kycklingbröst",
        "pork", "beef", "chicken", "turkey",
    ),
    ingredient_bonus=10,
    slice_kind=SliceKind.COLD_CUTS,
    slice_weight=SLICE_WEIGHTS[SliceKind.COLD_CUTS],
)

SPOONABLE_RULE = CategoryRule(
    name="spoonable",
    category=Category.SPOONABLE,
    keywords=(
        "yoghurt", "yogurt", "kvarg", "filmjölk", "gräddfil", "crème fraiche",
        "smör", "bregott", "margarin", "färskost", "keso", "cottage cheese",
        "jordnötssmör", "peanut butter", "majonnäs", "mayonnaise", "sylt",
        "marmelad", "honung", "honey", "jam", "hummus", "quark", "butter",
    ),
    core_keywords=(
        "yoghurt", "kvarg", "smör", "margarin", "färskost", "majonnäs", "sylt",
        "honung",
    ),
    tag_terms=(
        "en:yogurts", "en:creams", "en:sour-creams", "en:cream-cheeses",
        "en:cottage-cheeses", "en:quarks", "en:butters", "en:margarines",
        "en:peanut-butters", "en:mayonnaises", "en:jams", "en:honeys",
        "en:sweet-spreads",
    ),
    exclusions=("dryck", "drink", "drickyoghurt", "smoothie"),
    requires_tag=True,
    base_ingredients=(
        "mjölk", "pastöriserad mjölk", "skummjölk", "grädde", "milk", "cream",
    ),
    ingredient_bonus=8,
    density=WATER_DENSITY,
)

# Tie-break priority, highest first
DEFAULT_RULES: tuple[CategoryRule, ...] = (
    COOKED_DRY_GOOD_RULE,
    BEVERAGE_RULE,
    VOLUME_DRY_GOOD_RULE,
    BREAD_RULE,
    CHEESE_RULE,
    COLD_CUTS_RULE,
    SPOONABLE_RULE,
)
