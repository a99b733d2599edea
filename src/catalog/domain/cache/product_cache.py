"""Abstract cache for Product snapshots.

The cache is an accelerator only. Entries are the JSON form of a
Product keyed by its id. Every method returns an Outcome whose error is
``EntityNotFoundError`` or ``InternalCacheError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.outcome import Outcome
from catalog.domain.model.product import Product


class ProductCache(ABC):

    @abstractmethod
    def get_json_by_id(self, product_id: int) -> Outcome[bytes]:
        """Return the cached JSON bytes, or a not-found failure on a miss."""

    @abstractmethod
    def set(self, product: Product) -> Outcome[None]:
        """Store (or overwrite) the product snapshot."""

    @abstractmethod
    def delete_by_id(self, product_id: int) -> Outcome[None]:
        """Drop the entry. Not-found when there was nothing to drop."""

    @abstractmethod
    def clear(self) -> Outcome[None]:
        """Drop every entry."""
