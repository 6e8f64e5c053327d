"""Raw Open Food Facts payload → NormalizedProduct."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .extract import (
    extract_package_weight,
    extract_pieces_per_package,
    extract_serving_size,
    to_number,
)
from .models import (
    UNKNOWN_COUNTRIES,
    MissingIdentityError,
    NormalizedProduct,
    Nutrients,
)

DEFAULT_LANGUAGE = "sv"
UNKNOWN_PRODUCT_NAME = "Okänd produkt"

# Source key spellings per nutrient, first present wins
NUTRIENT_ALIASES: dict[str, tuple[str, ...]] = {
    "energy": ("energy_100g", "energy-kcal_100g", "energy"),
    "fat": ("fat_100g", "fat"),
    "saturated_fat": ("saturated-fat_100g", "saturated_fat_100g", "saturated-fat"),
    "carbohydrates": ("carbohydrates_100g", "carbohydrates"),
    "sugars": ("sugars_100g", "sugars"),
    "salt": ("salt_100g", "salt"),
    "fiber": ("fiber_100g", "fiber"),
    "proteins": ("proteins_100g", "proteins"),
}

_KCAL_KEYS = frozenset({"energy-kcal_100g"})

_IDENTITY_KEYS = ("code", "id", "_id")


def _text(value: Any) -> str | None:
    """Non-empty stripped string, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _grade(value: Any) -> str | None:
    text = _text(value)
    return text.lower() if text else None


def _nova_group(value: Any) -> int | None:
    number = to_number(value)
    if number is None or number != int(number):
        return None
    return int(number)


def _identity(raw: Mapping[str, Any]) -> str:
    for key in _IDENTITY_KEYS:
        value = raw.get(key)
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        ident = _text(value)
        if ident:
            return ident
    raise MissingIdentityError("product payload has no code, id or _id")


def _names(raw: Mapping[str, Any], language: str) -> tuple[str, ...]:
    keys = (
        f"product_name_{language}",
        "product_name",
        "product_name_en",
        f"generic_name_{language}",
        "generic_name",
    )
    names: list[str] = []
    for key in keys:
        name = _text(raw.get(key))
        if name and name not in names:
            names.append(name)
    return tuple(names)


def _categories_tags(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return ()
    tags = (_text(tag) for tag in value)
    return tuple(tag for tag in tags if tag)


def normalize_nutrients(nutriments: Any) -> Nutrients:
    """Resolve nutrient aliases into a Nutrients record.

    Values that are missing, unparseable or negative stay None.
    """
    if not isinstance(nutriments, Mapping):
        return Nutrients()

    values: dict[str, Any] = {}
    for nutrient, keys in NUTRIENT_ALIASES.items():
        for key in keys:
            number = to_number(nutriments.get(key))
            if number is None or number < 0:
                continue
            values[nutrient] = number
            if nutrient == "energy":
                values["energy_unit"] = "kcal" if key in _KCAL_KEYS else "kJ"
            break
    return Nutrients(**values)


def normalize_product(
    raw: Any,
    language: str = DEFAULT_LANGUAGE,
    unknown_name: str = UNKNOWN_PRODUCT_NAME,
) -> NormalizedProduct:
    """Build a NormalizedProduct from one raw Open Food Facts product.

    Every field degrades to absent on bad data; the payload itself is never
    modified.

    Args:
        raw: The ``product`` object of an API response.
        language: Preferred language code for names and ingredients.
        unknown_name: Display name used when the payload has no name at all.

    Raises:
        MissingIdentityError: If no code, id or _id is present.
    """
    if not isinstance(raw, Mapping):
        raise MissingIdentityError(f"product payload is not an object: {type(raw).__name__}")

    product_id = _identity(raw)
    names = _names(raw, language)

    package_weight = extract_package_weight(raw)
    serving_size = extract_serving_size(raw)
    pieces = extract_pieces_per_package(raw, package_weight, serving_size)

    return NormalizedProduct(
        id=product_id,
        name=names[0] if names else unknown_name,
        names=names,
        brands=_text(raw.get("brands")),
        image_url=_text(raw.get("image_front_url")) or _text(raw.get("image_url")),
        nutriscore_grade=_grade(raw.get("nutriscore_grade")),
        ecoscore_grade=_grade(raw.get("ecoscore_grade")),
        nova_group=_nova_group(raw.get("nova_group")),
        categories=_text(raw.get("categories")),
        categories_tags=_categories_tags(raw.get("categories_tags")),
        ingredients_text=(
            _text(raw.get(f"ingredients_text_{language}"))
            or _text(raw.get("ingredients_text"))
        ),
        nutrients=normalize_nutrients(raw.get("nutriments")),
        package_weight=package_weight,
        serving_size=serving_size,
        pieces_per_package=pieces,
        countries=_text(raw.get("countries")) or UNKNOWN_COUNTRIES,
        packaging=_text(raw.get("packaging")),
        quantity=_text(raw.get("quantity")),
    )
