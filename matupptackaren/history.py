"""In-memory lookup history, deduplicated by product id."""

from __future__ import annotations

from collections.abc import Iterator

from .pipeline import ProductRecord


class ProductHistory:
    """Most-recent-first list of looked-up products.

    A product whose id is already present is not added again.
    """

    def __init__(self, max_items: int | None = None) -> None:
        self._records: list[ProductRecord] = []
        self._max_items = max_items

    def add(self, record: ProductRecord) -> bool:
        """Add a record; return False if its id is already in the history."""
        if record.id in self:
            return False
        self._records.insert(0, record)
        if self._max_items is not None:
            del self._records[self._max_items:]
        return True

    def clear(self) -> None:
        self._records.clear()

    @property
    def records(self) -> list[ProductRecord]:
        return list(self._records)

    def __contains__(self, product_id: object) -> bool:
        return any(r.id == product_id for r in self._records)

    def __iter__(self) -> Iterator[ProductRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)
