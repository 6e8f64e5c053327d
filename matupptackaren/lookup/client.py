"""Open Food Facts barcode and free-text lookup."""

from __future__ import annotations

import asyncio
import logging
import re
import unicodedata
from collections.abc import Sequence
from typing import Any

import httpx

from ..config import LookupConfig
from ..pipeline import ProductPipeline, ProductRecord
from ..products.models import MissingIdentityError

logger = logging.getLogger(__name__)

PRODUCT_FIELDS: tuple[str, ...] = (
    "code", "product_name", "product_name_en", "product_name_sv", "brands",
    "image_url", "image_front_url",
    "nutriscore_grade", "ecoscore_grade", "nova_group",
    "categories", "categories_tags", "ingredients_text", "ingredients_text_sv",
    "nutriments", "quantity", "serving_size", "serving_quantity",
    "net_weight_unit", "net_weight_value", "packaging", "product_quantity",
    "countries",
)

# Frequent misspellings in free-text searches
_QUERY_SYNONYMS: dict[str, str] = {
    "choclate": "chocolate",
    "chocolat": "chocolate",
    "choccolate": "chocolate",
    "choklad": "chocolate",
    "biscuits": "cookies",
}

_MIN_EAN_DIGITS = 8
_MAX_EAN_DIGITS = 14


class ProductLookupError(Exception):
    """The product database could not be queried."""


class InvalidBarcodeError(ValueError):
    """A barcode does not have 8-14 digits."""


def clean_barcode(barcode: str) -> str:
    """Strip non-digits and check the EAN length.

    Raises:
        InvalidBarcodeError: If fewer than 8 or more than 14 digits remain.
    """
    digits = re.sub(r"\D", "", barcode or "")
    if not _MIN_EAN_DIGITS <= len(digits) <= _MAX_EAN_DIGITS:
        raise InvalidBarcodeError(
            f"EAN-koden måste vara mellan {_MIN_EAN_DIGITS}-{_MAX_EAN_DIGITS} siffror: {barcode!r}"
        )
    return digits


def normalize_query(query: str) -> str:
    """Trim, lowercase, strip accents and fix common misspellings."""
    base = unicodedata.normalize("NFD", query.strip().lower())
    base = "".join(c for c in base if not unicodedata.combining(c))
    return _QUERY_SYNONYMS.get(base, base)


def _is_single_token(query: str) -> bool:
    return len(query.split()) == 1


class OpenFoodFactsClient:
    """Async client that returns finished ProductRecords.

    Usage:
        async with OpenFoodFactsClient() as client:
            record = await client.get_product("7310130004409")
    """

    def __init__(
        self,
        config: LookupConfig | None = None,
        pipeline: ProductPipeline | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or LookupConfig()
        self._pipeline = pipeline or ProductPipeline()
        self._http = http_client
        self._owns_http = http_client is None

    async def __aenter__(self) -> OpenFoodFactsClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self._config.user_agent,
                },
            )
            self._owns_http = True
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("OpenFoodFactsClient must be used as an async context manager")
        return self._http

    async def get_product(self, barcode: str) -> ProductRecord | None:
        """Look up one product by EAN.

        Returns None when the product is unknown, has no identity, or the
        request fails.

        Raises:
            InvalidBarcodeError: If the barcode is not 8-14 digits.
        """
        code = clean_barcode(barcode)
        fields = ",".join(PRODUCT_FIELDS)
        try:
            resp = await self._client().get(
                f"/api/v2/product/{code}", params={"fields": fields}
            )
            if resp.status_code == 404:
                logger.info("No product found for EAN %s", code)
                return None
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError):
            logger.warning("Lookup of EAN %s failed", code, exc_info=True)
            return None

        if not isinstance(data, dict) or data.get("status") != 1:
            logger.info("No product found for EAN %s", code)
            return None
        product = data.get("product")
        if not isinstance(product, dict):
            return None

        try:
            return self._pipeline.build(product)
        except MissingIdentityError:
            logger.info("EAN %s returned a product without identity", code)
            return None

    async def get_products(self, barcodes: Sequence[str]) -> list[ProductRecord]:
        """Look up several EANs in small concurrent chunks.

        Unknown products, invalid barcodes and failed lookups are skipped;
        the result keeps input order.
        """
        records: list[ProductRecord] = []
        size = self._config.batch_size
        for start in range(0, len(barcodes), size):
            chunk = barcodes[start:start + size]
            results = await asyncio.gather(
                *(self.get_product(code) for code in chunk),
                return_exceptions=True,
            )
            for code, result in zip(chunk, results):
                if isinstance(result, BaseException):
                    logger.warning("Skipping %r: %s", code, result)
                elif result is not None:
                    records.append(result)
            if start + size < len(barcodes):
                await asyncio.sleep(self._config.batch_delay)
        return records

    async def search(
        self,
        text: str,
        page_size: int | None = None,
        page: int = 1,
    ) -> list[ProductRecord]:
        """Free-text search.

        A single-word query with no hits is retried once as a category
        filter, so "chocolate" also finds products tagged as chocolates.

        Raises:
            ProductLookupError: If the primary search request fails.
        """
        query = normalize_query(text)
        base_params = {
            "sort_by": "unique_scans_n",
            "page_size": str(page_size or self._config.page_size),
            "page": str(page),
            "fields": ",".join(PRODUCT_FIELDS),
        }

        data = await self._search_request(
            {"search_terms": query, "search_simple": "1", **base_params}
        )
        records = self._process_search_results(data, text)

        if not records and _is_single_token(query):
            params = {
                **base_params,
                "tagtype_0": "categories",
                "tag_contains_0": "contains",
                "tag_0": query,
            }
            try:
                data = await self._search_request(params)
            except ProductLookupError:
                logger.warning("Fallback tag search for %r failed", query, exc_info=True)
            else:
                records = self._process_search_results(data, f"{text} (fallback)")

        return records

    async def _search_request(self, params: dict[str, str]) -> dict:
        logger.info("Search %s params=%s", "/api/v2/search", params)
        try:
            resp = await self._client().get("/api/v2/search", params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise ProductLookupError(f"HTTP error! status: {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProductLookupError(f"Search request failed: {e}") from e
        return data if isinstance(data, dict) else {}

    def _process_search_results(self, data: dict, label: str) -> list[ProductRecord]:
        products = data.get("products") or []
        if not isinstance(products, list) or not products:
            logger.info("No products found for %r", label)
            return []

        records: list[ProductRecord] = []
        for product in products:
            if not isinstance(product, dict):
                continue
            has_name = (
                product.get("product_name")
                or product.get("product_name_en")
                or product.get("product_name_sv")
            )
            has_image = product.get("image_front_url") or product.get("image_url")
            if not (has_name and has_image):
                continue
            try:
                records.append(self._pipeline.build(product))
            except MissingIdentityError:
                continue

        logger.info(
            "Kept %d of %d products for %r", len(records), len(products), label
        )
        return records
