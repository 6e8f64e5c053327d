"""CSV export of product records."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from .pipeline import ProductRecord

CSV_COLUMNS: tuple[str, ...] = (
    "EAN",
    "Product Name",
    "Manufacturer",
    "Category",
    "Shelf",
    "Categories",
    "Ingredients",
    "Nutri-Score",
    "Eco-Score",
    "NOVA",
    "Energy 100g",
    "Fat 100g",
    "Saturated Fat 100g",
    "Carbohydrates 100g",
    "Sugars 100g",
    "Salt 100g",
    "Fiber 100g",
    "Proteins 100g",
    "Package Weight (g)",
    "Serving Size (g)",
    "Pieces per Package",
    "Countries",
    "Packaging",
    "Quantity",
)


def _cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def record_row(record: ProductRecord) -> list[str]:
    """One CSV row in CSV_COLUMNS order."""
    p = record.product
    n = p.nutrients
    category = record.classification.category.value
    if record.classification.subcategory is not None:
        category = f"{category}/{record.classification.subcategory.value}"
    values = (
        p.id,
        p.name,
        p.brands,
        category,
        record.shelf,
        p.categories,
        p.ingredients_text,
        p.nutriscore_grade,
        p.ecoscore_grade,
        p.nova_group,
        n.energy,
        n.fat,
        n.saturated_fat,
        n.carbohydrates,
        n.sugars,
        n.salt,
        n.fiber,
        n.proteins,
        p.package_weight,
        p.serving_size,
        p.pieces_per_package,
        p.countries,
        p.packaging,
        p.quantity,
    )
    return [_cell(v) for v in values]


def write_products_csv(
    records: Iterable[ProductRecord],
    fp: IO[str],
    delimiter: str = ",",
) -> int:
    """Write a header and one row per record; return the row count.

    Every field is quoted and embedded double quotes are doubled.
    """
    writer = csv.writer(
        fp, delimiter=delimiter, quoting=csv.QUOTE_ALL, lineterminator="\n"
    )
    writer.writerow(CSV_COLUMNS)
    count = 0
    for record in records:
        writer.writerow(record_row(record))
        count += 1
    return count


def products_to_csv(records: Iterable[ProductRecord], delimiter: str = ",") -> str:
    buf = io.StringIO()
    write_products_csv(records, buf, delimiter=delimiter)
    return buf.getvalue()


def export_products_csv(
    records: Iterable[ProductRecord],
    path: str | Path,
    delimiter: str = ",",
) -> Path:
    """Write records to a UTF-8 CSV file.

    Raises:
        ValueError: If there are no records to export.
    """
    records = list(records)
    if not records:
        raise ValueError("Inga produkter att exportera!")
    out = Path(path)
    with open(out, "w", encoding="utf-8", newline="") as f:
        write_products_csv(records, f, delimiter=delimiter)
    return out
