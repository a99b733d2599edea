"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The store is the source of truth: it assigns ids and
decides whether a product exists. Every method returns an Outcome whose
error is ``EntityNotFoundError`` or ``InternalStoreError``; none of them
raise for backend failures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.outcome import Outcome
from catalog.domain.model.product import NewProduct, Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Outcome[Product]:
        """Return the product, or a not-found failure."""

    @abstractmethod
    def list_all(self) -> Outcome[list[Product]]:
        """Return every product, ordered by id."""

    @abstractmethod
    def list_paged(self, limit: int, offset: int) -> Outcome[list[Product]]:
        """Return at most ``limit`` products after skipping ``offset``.

        A page past the end is a shorter or empty list, never an error.
        """

    @abstractmethod
    def insert(self, new_product: NewProduct) -> Outcome[int]:
        """Persist a new product and return the id assigned to it."""

    @abstractmethod
    def update_by_id(self, product_id: int, new_product: NewProduct) -> Outcome[Product]:
        """Overwrite a product and return its pre-update snapshot."""

    @abstractmethod
    def delete_by_id(self, product_id: int) -> Outcome[Product]:
        """Remove a product and return the deleted snapshot."""

    @abstractmethod
    def delete_all_returning_count(self) -> Outcome[int]:
        """Remove every product and return how many rows went.

        Counting and deleting commit as one unit: if the commit fails,
        nothing is considered deleted.
        """
