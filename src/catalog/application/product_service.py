"""Application service: cache-consistent product lifecycle.

Coordinates the durable store and the cache behind one surface.

- Reads are cache-aside: the cache is consulted first and refilled from
  the store on a miss.
- Create is a partial write-through: the store write is mandatory, the
  cache write best-effort.
- Update and delete invalidate the cache entry *before* touching the
  store. A cache entry that was never there is reported but tolerated;
  any other cache failure aborts before the store is touched.
- Delete-all clears the cache first and aborts on any cache failure.

Every operation returns ``(value, ServiceError | None)``. The error is
None on unqualified success. When it carries a critical error, the value
is None (or 0 for counts).
"""

from __future__ import annotations

import logging

from catalog.domain.cache.product_cache import ProductCache
from catalog.domain.exceptions import DomainException, ServiceError
from catalog.domain.model.outcome import Outcome
from catalog.domain.model.product import NewProduct, Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, product_repo: ProductRepository, product_cache: ProductCache) -> None:
        self._product_repo = product_repo
        self._product_cache = product_cache

    # --- Queries --------------------------------------------------------------

    def get_product_by_id(self, product_id: int) -> tuple[bytes | None, ServiceError | None]:
        """Return the product's JSON bytes, from the cache when possible.

        A cache hit is returned as-is without asking the store. A plain
        cache miss is not reported; a cache failure is, as non-critical.
        Store errors are always critical because there is nothing else to
        fall back on.
        """
        non_critical: list[DomainException] = []

        cached = self._product_cache.get_json_by_id(product_id)
        if cached.ok:
            logger.debug("Cache hit for product %d", product_id)
            return cached.value, None
        if not cached.not_found:
            non_critical.append(cached.error)

        stored = self._product_repo.get_by_id(product_id)
        if not stored.ok:
            return None, ServiceError(critical=stored.error, non_critical=non_critical)

        product = stored.value
        refilled = self._product_cache.set(product)
        if not refilled.ok:
            non_critical.append(refilled.error)

        return product.to_json(), _non_critical_only(non_critical)

    def get_all_products(self) -> tuple[list[Product] | None, ServiceError | None]:
        """Return every product. Listing never goes through the cache."""
        listed = self._product_repo.list_all()
        if not listed.ok:
            return None, ServiceError(critical=listed.error)
        return listed.value, None

    def get_products_paged(
        self, limit: int, offset: int
    ) -> tuple[list[Product] | None, ServiceError | None]:
        """Return one page of products, straight from the store."""
        listed = self._product_repo.list_paged(limit, offset)
        if not listed.ok:
            return None, ServiceError(critical=listed.error)
        return listed.value, None

    # --- Commands -------------------------------------------------------------

    def create_product(self, new_product: NewProduct) -> tuple[int, ServiceError | None]:
        """Insert the product, then cache it.

        The id is returned whenever the store accepted the insert, even if
        caching the new entry failed.
        """
        inserted = self._product_repo.insert(new_product)
        if not inserted.ok:
            return 0, ServiceError(critical=inserted.error)

        product_id = inserted.value
        cached = self._product_cache.set(Product.from_new(product_id, new_product))
        if not cached.ok:
            return product_id, ServiceError(non_critical=[cached.error])
        return product_id, None

    def update_product_by_id(
        self, product_id: int, new_product: NewProduct
    ) -> tuple[Product | None, ServiceError | None]:
        """Invalidate the cached entry, then update the store.

        Returns the product as it was before the update.
        """
        non_critical, abort = self._invalidate(product_id)
        if abort is not None:
            return None, abort

        updated = self._product_repo.update_by_id(product_id, new_product)
        return _merge(updated, non_critical)

    def delete_product_by_id(self, product_id: int) -> tuple[Product | None, ServiceError | None]:
        """Invalidate the cached entry, then delete from the store.

        Returns the deleted product.
        """
        non_critical, abort = self._invalidate(product_id)
        if abort is not None:
            return None, abort

        deleted = self._product_repo.delete_by_id(product_id)
        return _merge(deleted, non_critical)

    def delete_all_products(self) -> tuple[int, ServiceError | None]:
        """Clear the cache, then every stored product.

        A cache that cannot be cleared aborts before the store is touched.
        A store failure after the cache was cleared is still critical;
        the cache is then empty while the store is not.
        """
        cleared = self._product_cache.clear()
        if not cleared.ok:
            return 0, ServiceError(critical=cleared.error)

        deleted = self._product_repo.delete_all_returning_count()
        if not deleted.ok:
            return 0, ServiceError(critical=deleted.error)
        return deleted.value, None

    # --- Internal helpers -----------------------------------------------------

    def _invalidate(
        self, product_id: int
    ) -> tuple[list[DomainException], ServiceError | None]:
        """Drop the cache entry ahead of a store mutation.

        A missing entry is demoted to non-critical. Anything else aborts.
        """
        invalidated = self._product_cache.delete_by_id(product_id)
        if invalidated.ok:
            return [], None
        if invalidated.not_found:
            return [invalidated.error], None
        logger.debug("Aborting mutation of product %d: cache invalidation failed", product_id)
        return [], ServiceError(critical=invalidated.error)


def _non_critical_only(errors: list[DomainException]) -> ServiceError | None:
    if not errors:
        return None
    return ServiceError(non_critical=errors)


def _merge(
    stored: Outcome[Product], non_critical: list[DomainException]
) -> tuple[Product | None, ServiceError | None]:
    if not stored.ok:
        return None, ServiceError(critical=stored.error, non_critical=non_critical)
    return stored.value, _non_critical_only(non_critical)
