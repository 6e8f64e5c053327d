"""Shelf labels: the grocery aisle a product would be found in.

Unlike the usage categories, shelf labels are first-match on lowercased
text (diacritics kept, so "sås" does not match "sas"): the first
shelf whose keywords or category strings hit wins, so the table order is
the priority order. A shelf's exclusions only skip that shelf.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..products.models import NormalizedProduct
from .rules import GENERIC_TAGS

UNCATEGORIZED = "Okategoriserad"
FOOD_AND_DRINK = "Mat & Dryck"

# Plural and derivation endings dropped to widen a keyword match
_ENDING = re.compile(r"(?:s|er|or)$")
_MIN_STEM = 4


def _lower(text: str | None) -> str:
    return text.lower() if text else ""


@dataclass(frozen=True)
class ShelfCategory:
    name: str
    keywords: tuple[str, ...]
    category_strings: tuple[str, ...]
    exclusions: tuple[str, ...] = ()


SHELF_CATEGORIES: tuple[ShelfCategory, ...] = (
    ShelfCategory(
        name="Dryck",
        keywords=(
            "dryck", "drycker", "läsk", "läskedryck", "juice", "saft", "mjölk",
            "vatten", "mineralvatten", "kolsyrat vatten", "sodavatten",
            "sportdryck", "energidryck", "energi-dryck", "havredryck",
            "havre-dryck", "sojadryck", "soja-dryck", "mandeldryck",
            "mandel-dryck", "risdryck", "ris-dryck", "växtdryck", "växt-dryck",
            "växtbaserad dryck", "växtbaserade drycker", "apelsinjuice",
            "äppeljuice", "smoothie", "smoothies", "lemonad", "must", "julmust",
            "cider", "tonic", "nektar", "fruktsoppa", "coca-cola", "cocacola",
            "pepsi", "fanta", "sprite", "pucko", "ramlösa", "loka", "zingo",
            "trocadero", "festis", "mer", "beverage", "beverages", "drink",
            "drinks", "soda", "milk", "water", "mineral water",
            "sparkling water", "carbonated water", "sports drink",
            "energy drink", "plant milk", "oat drink", "soy drink",
            "almond drink", "rice drink", "plant-based drink",
        ),
        category_strings=(
            "beverages", "boissons", "drinks", "plant-based beverages",
            "en:beverages", "en:plant-based beverages", "en:carbonated drinks",
            "en:juices", "en:waters", "en:plant-milks", "drycker",
            "läskedrycker",
        ),
        exclusions=(
            "olja", "oljer", "vinäger", "sås", "såser", "buljong", "fond",
            "soppa", "soppor", "oil", "oils", "vinegar", "sauce", "sauces",
            "broth", "stock", "soup", "soups",
        ),
    ),
    ShelfCategory(
        name="Kaffe",
        keywords=(
            "kaffe", "bryggkaffe", "snabbkaffe", "instantkaffe", "espresso",
            "cappuccino", "latte", "kaffebönor", "kaffepulver", "kaffekapsel",
            "kaffekapslar", "kaffepads", "ikaffe", "coffee", "instant coffee",
            "ground coffee", "coffee beans", "coffee powder", "coffee capsule",
            "coffee capsules", "coffee pods",
        ),
        category_strings=("en:coffees", "en:coffee", "cafés", "kaffi", "kahvi", "kaffe"),
    ),
    ShelfCategory(
        name="Mejeri",
        keywords=(
            "mjölk", "yoghurt", "yogurt", "fil", "filmjölk", "gräddfil",
            "crème fraiche", "creme fraiche", "grädde", "kvarg", "keso",
            "cottage cheese", "kesocottage", "smör", "margarin", "färskost",
            "cream cheese", "philadelphia", "bregott", "messmör",
            "smörgåsmargarin", "ost", "ostar", "hårdost", "mozzarella",
            "cheddar", "gouda", "parmesan", "grevé", "hushållsost", "prästost",
            "herrgård", "västerbotten", "gräddost", "milk", "sour cream",
            "cream", "quark", "butter", "margarine", "cheese", "hard cheese",
            "soft cheese",
        ),
        category_strings=(
            "en:dairies", "dairy", "en:fermented-milk-products", "en:cheeses",
            "en:butters", "mejeriprodukter", "mejeri", "mjölkprodukter",
        ),
    ),
    ShelfCategory(
        name="Spannmål",
        keywords=(
            "vetemjöl", "mjöl", "grahammjöl", "rågmjöl", "kornmjöl",
            "dinkelmjöl", "majsmjöl", "flour", "wheat flour",
            "whole wheat flour", "rye flour", "barley flour", "corn flour",
            "havregryn", "gryn", "flingor", "müsli", "musli", "muesli", "ris",
            "couscous", "bulgur", "quinoa", "oats", "rolled oats", "flakes",
            "breakfast cereals", "frukostflingor", "rice",
        ),
        category_strings=(
            "en:cereals-and-potatoes", "en:cereals-and-their-products",
            "en:flours", "en:breakfast-cereals", "spannmål", "flingor", "gryn",
        ),
    ),
    ShelfCategory(
        name="Bröd",
        keywords=(
            "bröd", "knäckebröd", "tunnbröd", "limpa", "formfranska", "rågbröd",
            "fullkornsbröd", "vörtbröd", "surdegsbröd", "fralla", "bullar",
            "bulle", "bread", "crispbread", "flatbread", "loaf", "rye bread",
            "whole grain bread", "sourdough bread", "roll", "bun",
        ),
        category_strings=("en:breads", "en:crispbreads", "en:flatbreads", "brød", "leipä", "bröd"),
    ),
    ShelfCategory(
        name="Kakor",
        keywords=(
            "kaka", "kakor", "kex", "småkaka", "småkakor", "cookie", "cookies",
            "digestive", "havreflarn", "drömmar", "pepparkakor", "biskvi",
            "muffins", "muffin", "biscuit", "biscuits", "gingerbread", "cake",
        ),
        category_strings=(
            "en:biscuits-and-cakes", "en:cookies", "en:biscuits", "kex",
            "småkakor", "kakor",
        ),
    ),
    ShelfCategory(
        name="Choklad",
        keywords=(
            "choklad", "mjölkchoklad", "mörk choklad", "vit choklad", "pralin",
            "chokladkaka", "godis", "konfekt", "chocolate", "milk chocolate",
            "dark chocolate", "white chocolate", "praline", "chocolate bar",
            "candy", "confectionery", "marabou", "lindt", "fazer", "toblerone",
            "kinder",
        ),
        category_strings=(
            "en:chocolates", "en:chocolate-candies", "en:chocolate-bars",
            "chokolade", "suklaa", "choklad",
        ),
    ),
    ShelfCategory(
        name="Pasta",
        keywords=(
            "pasta", "spaghetti", "tagliatelle", "penne", "fusilli", "farfalle",
            "lasagne", "lasagneplattor", "makaroner", "nudlar", "noodles",
            "lasagna", "lasagna sheets", "macaroni",
        ),
        category_strings=("en:pastas", "en:noodles", "pasta", "nudlar"),
    ),
    ShelfCategory(
        name="Mat",
        keywords=(
            "fiskpinnar", "nuggets", "kycklingnuggets", "köttbullar",
            "färdigmat", "fryst mat", "fish fingers", "fish sticks",
            "chicken nuggets", "meatballs", "ready meal", "frozen meal",
            "soppa", "soppor", "gryta", "grytor", "lasagne", "pizza", "pizzor",
            "paj", "pajer", "soup", "soups", "stew", "stews", "lasagna", "pie",
            "pies",
        ),
        category_strings=(
            "en:prepared-foods", "en:meals", "en:frozen-foods", "en:soups",
            "färdigmat", "fryst mat", "måltider",
        ),
    ),
    ShelfCategory(
        name="Pålägg",
        keywords=(
            "pålägg", "leverpastej", "pastej", "skinka", "korv", "korvar",
            "salami", "sylta", "bredbar", "spread", "spreads", "liver pate",
            "pate", "ham", "sausage", "sausages", "spreadable", "chark",
            "charkuterier",
        ),
        category_strings=("en:spreads", "en:pates", "en:cold-cuts", "pålägg", "bredbart", "chark"),
    ),
)


class _CompiledShelf:
    def __init__(self, shelf: ShelfCategory) -> None:
        self.name = shelf.name
        self.exclusions = [_lower(t) for t in shelf.exclusions]
        self.category_strings = [_lower(t) for t in shelf.category_strings]
        self.keywords = [
            re.compile(r"\b" + re.escape(term)) for term in _keyword_terms(shelf.keywords)
        ]

    def matches(self, text: str) -> bool:
        if any(t in text for t in self.exclusions):
            return False
        if any(t in text for t in self.category_strings):
            return True
        return any(p.search(text) for p in self.keywords)


def _keyword_terms(keywords: tuple[str, ...]) -> list[str]:
    """Lowercased keywords plus their stems, "pepparkakor" → "pepparkak"."""
    terms: list[str] = []
    for keyword in keywords:
        lowered = _lower(keyword)
        candidates = [lowered]
        stem = _ENDING.sub("", lowered)
        if stem != lowered and len(stem) >= _MIN_STEM:
            candidates.append(stem)
        for term in candidates:
            if term not in terms:
                terms.append(term)
    return terms


_COMPILED_SHELVES = tuple(_CompiledShelf(s) for s in SHELF_CATEGORIES)
# Longest first, as in the usage classifier
_GENERIC_TAGS = sorted((_lower(t) for t in GENERIC_TAGS), key=len, reverse=True)


def detect_shelf_category(
    name: str | None,
    categories: str | None,
    brands: str | None = None,
) -> str:
    """First shelf whose terms appear in name, categories or brand.

    Keywords must start a word and may drop a plural ending; exclusions
    and category strings match anywhere. Aisle-wide tags such as
    "plant-based foods and beverages" are ignored.

    Returns:
        The shelf name, "Okategoriserad" with neither name nor categories,
        or "Mat & Dryck" when no shelf matches.
    """
    if not name and not categories:
        return UNCATEGORIZED
    lowered_categories = _lower(categories)
    for generic in _GENERIC_TAGS:
        lowered_categories = lowered_categories.replace(generic, " ")
    text = " ".join(
        part for part in (_lower(name), lowered_categories, _lower(brands)) if part
    )
    for shelf in _COMPILED_SHELVES:
        if shelf.matches(text):
            return shelf.name
    return FOOD_AND_DRINK


def shelf_category(product: NormalizedProduct) -> str:
    """Shelf label from a product's real names, categories and tags."""
    categories = " ".join(
        part for part in (product.categories, " ".join(product.categories_tags)) if part
    )
    name = " ".join(product.names) or None
    return detect_shelf_category(name, categories or None, product.brands)
