"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import redis

from catalog.application.product_service import ProductService
from catalog.infrastructure.cache.redis_product_cache import (
    RedisProductCache,
    configure_eviction,
)
from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)


def product_repository(settings: Settings) -> SqliteProductRepository:
    return SqliteProductRepository(
        settings.database_path, timeout=settings.database_timeout
    )


def redis_client(settings: Settings) -> redis.Redis:
    # Connections are opened lazily, on the first command.
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password or None,
        db=settings.redis_db,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
        decode_responses=False,
    )


def product_cache(settings: Settings) -> RedisProductCache:
    client = redis_client(settings)
    configure_eviction(
        client, settings.cache_maxmemory, settings.cache_maxmemory_policy
    )
    return RedisProductCache(client, ttl_seconds=settings.cache_ttl_seconds)


def product_service(settings: Settings) -> ProductService:
    return ProductService(
        product_repo=product_repository(settings),
        product_cache=product_cache(settings),
    )
