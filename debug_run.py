#!/usr/bin/env python3
"""Debug script: EAN lookup → normalize → classify → score, printed step by step."""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from matupptackaren.config import load_config
from matupptackaren.lookup import InvalidBarcodeError, OpenFoodFactsClient, clean_barcode
from matupptackaren.pipeline import ProductPipeline

load_dotenv()


async def main():
    # ── Step 0: read environment ──
    barcodes = os.getenv("DEBUG_EANS", "7310130004409").strip('"').split(",")
    search_text = os.getenv("DEBUG_SEARCH", "").strip('"')
    config_path = os.getenv("MATUPPTACKAREN_CONFIG") or None

    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    config = load_config(config_path)

    print("=" * 60)
    print("  Matupptäckaren debugkörning")
    print("=" * 60)
    print(f"[DEBUG] API: {config.lookup.base_url}")
    print(f"[DEBUG] User-Agent: {config.lookup.user_agent}")
    print(f"[DEBUG] Språk: {config.locale.language}")
    print()

    pipeline = ProductPipeline(config)

    async with OpenFoodFactsClient(config.lookup, pipeline=pipeline) as client:
        # ── Step 1: barcode lookups ──
        for raw_code in barcodes:
            try:
                code = clean_barcode(raw_code)
            except InvalidBarcodeError as e:
                print(f"[SKIP] {e}")
                continue

            print(f"▶ EAN {code}")
            record = await client.get_product(code)
            if record is None:
                print("  ✗ Ingen produkt hittad")
                continue

            p = record.product
            print(f"  namn:         {p.name}")
            print(f"  varumärke:    {p.brands}")
            print(f"  quantity:     {p.quantity!r}")
            print(f"  vikt:         {p.package_weight}")
            print(f"  portion:      {p.serving_size}")
            print(f"  styck:        {p.pieces_per_package}")
            print(f"  energi:       {p.nutrients.energy} {p.nutrients.energy_unit}")

            # ── Step 2: classification evidence ──
            print(f"  regelpoäng:   {pipeline.classifier.scores(p)}")
            c = record.classification
            print(f"  kategori:     {c.category.value} {c.subcategory.value if c.subcategory else ''}")
            print(f"  mått:         {c.measurements}")

            # ── Step 3: portion scores ──
            print(f"  poäng:        {record.score}")
            print()

        # ── Step 4: free-text search ──
        if search_text:
            print(f"▶ Fritext: {search_text!r}")
            records = await client.search(search_text, page_size=10)
            for r in records:
                per_100g = r.score.per_100g if r.score else "-"
                print(f"  {r.id:<14} {r.product.name[:40]:<40} {r.classification.category.value:<16} {per_100g}")
            print(f"  {len(records)} träffar")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(130)
