"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from .config import AppConfig, load_config
from .export import export_products_csv
from .history import ProductHistory
from .lookup import (
    InvalidBarcodeError,
    OpenFoodFactsClient,
    ProductLookupError,
    clean_barcode,
)
from .pipeline import ProductPipeline, ProductRecord

_UNIT_LABELS: dict[str, str] = {
    "slice": "per skiva",
    "teaspoon": "per tesked",
    "tablespoon": "per matsked",
    "100ml": "per 100 ml",
    "glass": "per glas",
    "2dl_cooked": "per 2 dl kokt",
}

_CATEGORY_LABELS: dict[str, str] = {
    "sliceable": "Skivbar",
    "spoonable": "Bredbar/sked",
    "beverage": "Dryck",
    "cooked_dry_good": "Kokas (torrvara)",
    "volume_dry_good": "Mäts i volym (torrvara)",
    "standard": "Standard",
}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="matupptackaren",
        description="Matupptäckaren: slå upp livsmedel via EAN eller fritext",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Sökväg till konfigurationsfil (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Visa debugloggning"
    )

    sub = parser.add_subparsers(dest="command")

    barcode_parser = sub.add_parser("barcode", help="Slå upp produkter via EAN")
    barcode_parser.add_argument("barcodes", nargs="+", metavar="EAN")
    barcode_parser.add_argument("--json", action="store_true", help="Skriv ut som JSON")
    barcode_parser.add_argument(
        "--csv", type=str, default=None, metavar="FILE", help="Exportera till CSV"
    )

    search_parser = sub.add_parser("search", help="Fritextsökning")
    search_parser.add_argument("query", nargs="+")
    search_parser.add_argument("--page-size", type=int, default=None)
    search_parser.add_argument("--page", type=int, default=1)
    search_parser.add_argument("--json", action="store_true", help="Skriv ut som JSON")
    search_parser.add_argument(
        "--csv", type=str, default=None, metavar="FILE", help="Exportera till CSV"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    match args.command:
        case "barcode":
            codes = _clean_barcodes(args.barcodes)
            if not codes:
                sys.exit(1)
            records = asyncio.run(_cmd_barcode(config, codes))
        case "search":
            try:
                records = asyncio.run(_cmd_search(config, args))
            except ProductLookupError as e:
                print(f"Sökfel: {e}", file=sys.stderr)
                sys.exit(1)
        case _:
            parser.print_help()
            sys.exit(1)

    history = ProductHistory()
    for record in records:
        history.add(record)
    # History is newest first; print in lookup and ranking order
    records = history.records[::-1]

    if args.json:
        print(json.dumps([record_to_dict(r) for r in records], ensure_ascii=False, indent=2))
    else:
        if not records:
            print("Inga produkter hittades.")
        for record in records:
            print(format_record(record))
            print()

    if args.csv:
        try:
            path = export_products_csv(records, args.csv, delimiter=config.export.delimiter)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
        print(f"📄 CSV sparad: {path}")


def _clean_barcodes(barcodes: list[str]) -> list[str]:
    codes = []
    for barcode in barcodes:
        try:
            codes.append(clean_barcode(barcode))
        except InvalidBarcodeError as e:
            print(str(e), file=sys.stderr)
    return codes


async def _cmd_barcode(config: AppConfig, codes: list[str]) -> list[ProductRecord]:
    pipeline = ProductPipeline(config)
    async with OpenFoodFactsClient(config.lookup, pipeline=pipeline) as client:
        print(f"🔍 Söker {len(codes)} EAN-kod(er)...", file=sys.stderr)
        return await client.get_products(codes)


async def _cmd_search(config: AppConfig, args) -> list[ProductRecord]:
    text = " ".join(args.query)
    pipeline = ProductPipeline(config)
    async with OpenFoodFactsClient(config.lookup, pipeline=pipeline) as client:
        print(f"🔎 Söker efter \"{text}\"...", file=sys.stderr)
        return await client.search(text, page_size=args.page_size, page=args.page)


def record_to_dict(record: ProductRecord) -> dict:
    """Return a JSON-serializable dict for a record."""
    data = {
        "product": asdict(record.product),
        "classification": asdict(record.classification),
        "score": asdict(record.score) if record.score is not None else None,
        "shelf": record.shelf,
    }
    data["classification"]["category"] = record.classification.category.value
    if record.classification.subcategory is not None:
        data["classification"]["subcategory"] = record.classification.subcategory.value
    return data


def format_record(record: ProductRecord) -> str:
    """Human-readable multi-line summary of a record."""
    p = record.product
    c = record.classification
    lines = [f"🛒 {p.name}" + (f" ({p.brands})" if p.brands else ""), f"   EAN: {p.id}"]

    category = _CATEGORY_LABELS.get(c.category.value, c.category.value)
    if c.subcategory is not None:
        category += f" / {c.subcategory.value}"
    lines.append(f"   Kategori: {category}")
    lines.append(f"   Hylla: {record.shelf}")

    facts = []
    if p.package_weight is not None:
        facts.append(f"{p.package_weight:g} g")
    if p.serving_size is not None:
        facts.append(f"portion {p.serving_size:g} g")
    if p.pieces_per_package > 1:
        facts.append(f"{p.pieces_per_package} st")
    if facts:
        lines.append("   Förpackning: " + ", ".join(facts))

    s = record.score
    if s is None:
        lines.append("   Poäng: saknas (inget energivärde)")
        return "\n".join(lines)

    scores = [f"{s.per_100g} per 100 g"]
    if s.per_package is not None:
        scores.append(f"{s.per_package} per förpackning")
    if s.per_serving is not None:
        scores.append(f"{s.per_serving} per portion")
    if s.per_piece is not None and p.pieces_per_package > 1:
        scores.append(f"{s.per_piece} per styck")
    for unit in s.units:
        scores.append(f"{unit.points} {_UNIT_LABELS.get(unit.unit, unit.unit)}")
    lines.append("   Poäng: " + ", ".join(scores))
    return "\n".join(lines)
