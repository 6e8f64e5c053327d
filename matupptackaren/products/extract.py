"""Package weight, serving size and piece count extraction.

Open Food Facts has no single reliable field for any of these three
quantities, so each one is recovered through a fallback chain over the
free-text and loosely typed fields of a raw product payload. None of the
functions here raise on malformed input.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

# "3 oz (85 g)" → 85
_PAREN_GRAMS = re.compile(r"\((\d+(?:[,.]?\d+)?)\s*g\)", re.IGNORECASE)
# "185 g", "240g"
_BARE_GRAMS = re.compile(r"(\d+(?:[,.]?\d+)?)\s*g(?:\b|$)", re.IGNORECASE)
# "1.5 kg", "1,5kg"
_KILOGRAMS = re.compile(r"(\d+(?:[,.]?\d+)?)\s*kg(?:\b|$)", re.IGNORECASE)
# "6 st", "6-pack", "6 x 40g", "12 pieces", "4 styck"
_PIECES = re.compile(
    r"(\d+)\s*-?\s*(?:x\s*\d+|(?:st|styck|stycken|pack|pieces?)\b)",
    re.IGNORECASE,
)
# Leading number after stripping: "1.5.3" → 1.5
_LEADING_NUMBER = re.compile(r"^\d+(?:\.\d+)?|^\.\d+")

# Energy key pairs used to infer serving size from the per-serving ratio
_ENERGY_RATIO_KEYS: tuple[tuple[str, str], ...] = (
    ("energy_serving", "energy_100g"),
    ("energy-kcal_serving", "energy-kcal_100g"),
)


def to_number(value: Any) -> float | None:
    """Coerce a loosely typed JSON value to a finite float.

    Strings may use a comma as decimal separator. Booleans, empty strings,
    NaN and infinities are treated as absent.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _positive(value: float | None) -> float | None:
    if value is None or value <= 0:
        return None
    return value


def _decimal(text: str) -> float | None:
    return to_number(text.replace(",", "."))


def _strip_to_number(text: str) -> float | None:
    """Drop everything but digits and dots, then read the leading number."""
    cleaned = re.sub(r"[^\d.]", "", text)
    m = _LEADING_NUMBER.match(cleaned)
    if not m:
        return None
    return to_number(m.group(0))


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def parse_grams(text: str) -> float | None:
    """Parse a gram amount out of free text.

    A parenthesised gram value wins over a bare one, so "3 oz (85 g)"
    yields 85. Comma and dot are both accepted as decimal separator.

    Returns:
        Grams, or None if no gram pattern is present.
    """
    if not text:
        return None
    m = _PAREN_GRAMS.search(text) or _BARE_GRAMS.search(text)
    if m:
        return _positive(_decimal(m.group(1)))
    return None


def parse_kilograms(text: str) -> float | None:
    """Parse a kilogram amount out of free text and convert it to grams."""
    if not text:
        return None
    m = _KILOGRAMS.search(text)
    if m:
        kg = _decimal(m.group(1))
        if kg is not None:
            return _positive(kg * 1000)
    return None


def parse_piece_count(text: str) -> int | None:
    """Parse a piece count such as "6 st", "4-pack" or "6 x 40g"."""
    if not text:
        return None
    m = _PIECES.search(text)
    if not m:
        return None
    count = int(m.group(1))
    return count if count >= 1 else None


def extract_package_weight(raw: Mapping[str, Any]) -> float | None:
    """Package weight in grams, or None when nothing usable is present.

    Order: grams in ``quantity``, kilograms in ``quantity``,
    ``net_weight_value`` when ``net_weight_unit`` is "g",
    ``product_quantity``, grams in ``packaging``.
    """
    quantity = _as_text(raw.get("quantity"))
    if quantity:
        grams = parse_grams(quantity)
        if grams is not None:
            logger.debug("package weight %sg from quantity %r", grams, quantity)
            return grams
        grams = parse_kilograms(quantity)
        if grams is not None:
            logger.debug("package weight %sg from kg in quantity %r", grams, quantity)
            return grams

    unit = _as_text(raw.get("net_weight_unit")).strip().lower()
    if unit == "g":
        grams = _positive(to_number(raw.get("net_weight_value")))
        if grams is not None:
            logger.debug("package weight %sg from net_weight_value", grams)
            return grams

    grams = _positive(to_number(raw.get("product_quantity")))
    if grams is not None:
        logger.debug("package weight %sg from product_quantity", grams)
        return grams

    grams = parse_grams(_as_text(raw.get("packaging")))
    if grams is not None:
        logger.debug("package weight %sg from packaging", grams)
        return grams

    return None


def extract_serving_size(raw: Mapping[str, Any]) -> float | None:
    """Serving size in grams, or None when it cannot be determined.

    Order: ``serving_quantity``, ``nutriments.serving_size``, the
    ``serving_size`` text, then the ratio of per-serving to per-100g energy.
    """
    nutriments = raw.get("nutriments")
    if not isinstance(nutriments, Mapping):
        nutriments = {}

    serving = _positive(to_number(raw.get("serving_quantity")))
    if serving is not None:
        return serving

    text = _as_text(nutriments.get("serving_size"))
    if text:
        serving = _positive(_strip_to_number(text))
        if serving is not None:
            return serving

    text = _as_text(raw.get("serving_size"))
    if text:
        serving = parse_grams(text)
        if serving is None:
            serving = _positive(_strip_to_number(text.replace(",", ".")))
        if serving is not None:
            return serving

    for serving_key, base_key in _ENERGY_RATIO_KEYS:
        per_serving = _positive(to_number(nutriments.get(serving_key)))
        per_100g = _positive(to_number(nutriments.get(base_key)))
        if per_serving is None or per_100g is None:
            continue
        serving = _positive(float(round_half_up(100 * per_serving / per_100g)))
        if serving is not None:
            logger.debug("serving size %sg inferred from %s", serving, serving_key)
            return serving

    return None


def extract_pieces_per_package(
    raw: Mapping[str, Any],
    package_weight: float | None,
    serving_size: float | None,
) -> int:
    """Number of pieces in the package, defaulting to 1.

    A count in ``quantity`` wins. Otherwise a package holding more than one
    serving is taken to hold one piece per serving. Failing that, the
    ``packaging`` text and the name fields are scanned for a count.
    """
    count = parse_piece_count(_as_text(raw.get("quantity")))
    if count is not None and count != 1:
        return count

    if package_weight and serving_size and package_weight > 0 and serving_size > 0:
        calculated = math.floor(package_weight / serving_size)
        if calculated > 1:
            return calculated

    for key in ("packaging", "product_name", "product_name_sv", "product_name_en"):
        count = parse_piece_count(_as_text(raw.get(key)))
        if count is not None:
            return count

    return 1
