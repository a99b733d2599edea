"""Redis-backed implementation of ProductCache.

Entries live under ``product:<id>`` and hold the product's JSON bytes.
The client must be created with ``decode_responses=False`` so reads
return bytes. Any ``redis.RedisError`` (connection refused, timeout,
READONLY replica...) is returned as an ``InternalCacheError``.
"""

from __future__ import annotations

import logging

import redis

from catalog.domain.cache.product_cache import ProductCache
from catalog.domain.exceptions import EntityNotFoundError, InternalCacheError
from catalog.domain.model.outcome import Outcome
from catalog.domain.model.product import Product

logger = logging.getLogger(__name__)

KEY_PREFIX = "product:"


def cache_key(product_id: int) -> str:
    return f"{KEY_PREFIX}{product_id}"


class RedisProductCache(ProductCache):

    def __init__(self, client: redis.Redis, ttl_seconds: int = 0) -> None:
        self._client = client
        self._ttl_seconds = ttl_seconds

    # --- ProductCache interface -----------------------------------------------

    def get_json_by_id(self, product_id: int) -> Outcome[bytes]:
        try:
            data = self._client.get(cache_key(product_id))
        except redis.RedisError as exc:
            return _internal(f"failed to get product {product_id} from cache: {exc}")
        if data is None:
            return Outcome.failure(
                EntityNotFoundError(f"failed to find product {product_id} in cache")
            )
        return Outcome.success(data)

    def set(self, product: Product) -> Outcome[None]:
        try:
            self._client.set(
                cache_key(product.id),
                product.to_json(),
                ex=self._ttl_seconds or None,
            )
        except redis.RedisError as exc:
            return _internal(f"failed to store product to cache: {exc}")
        return Outcome.success()

    def delete_by_id(self, product_id: int) -> Outcome[None]:
        try:
            removed = self._client.delete(cache_key(product_id))
        except redis.RedisError as exc:
            return _internal(f"failed to delete product {product_id} from cache: {exc}")
        if removed == 0:
            return Outcome.failure(
                EntityNotFoundError(f"product with id={product_id} not found in cache")
            )
        return Outcome.success()

    def clear(self) -> Outcome[None]:
        try:
            self._client.flushdb()
        except redis.RedisError as exc:
            return _internal(f"failed to clear cache: {exc}")
        return Outcome.success()


def configure_eviction(client: redis.Redis, maxmemory: str, policy: str) -> bool:
    """Bound the cache's memory and pick its eviction policy.

    Best-effort: managed Redis offerings often forbid CONFIG SET, in which
    case the server's own settings stay in force and a warning is logged.
    """
    try:
        client.config_set("maxmemory", maxmemory)
        client.config_set("maxmemory-policy", policy)
    except redis.RedisError as exc:
        logger.warning("Could not configure cache eviction: %s", exc)
        return False
    logger.info("Cache eviction set to %s with maxmemory=%s", policy, maxmemory)
    return True


def _internal(detail: str) -> Outcome:
    logger.warning("Cache failure: %s", detail)
    return Outcome.failure(InternalCacheError(detail))
