"""Process-wide configuration.

``Settings`` is read from environment variables once, by the entry
point, and then passed explicitly to the composition root. Nothing else
reads the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


@dataclass(frozen=True)
class Settings:
    """Connection and logging settings. Defaults suit a local setup."""

    database_path: Path = Path("catalog.db")
    database_timeout: float = 5.0

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str = ""
    redis_db: int = 0
    redis_socket_timeout: float = 5.0

    # 0 keeps cache entries until evicted.
    cache_ttl_seconds: int = 0
    cache_maxmemory: str = "10mb"
    cache_maxmemory_policy: str = "allkeys-lru"

    log_level: str = "INFO"
    log_file: str = "app.log"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return Settings(
            database_path=Path(env.get("DATABASE_PATH", "catalog.db")),
            database_timeout=float(env.get("DATABASE_TIMEOUT", "5.0")),
            redis_host=env.get("REDIS_HOST", "localhost"),
            redis_port=int(env.get("REDIS_PORT", "6379")),
            redis_password=env.get("REDIS_PASSWORD", ""),
            redis_db=int(env.get("REDIS_DB", "0")),
            redis_socket_timeout=float(env.get("REDIS_SOCKET_TIMEOUT", "5.0")),
            cache_ttl_seconds=int(env.get("CACHE_TTL_SECONDS", "0")),
            cache_maxmemory=env.get("CACHE_MAXMEMORY", "10mb"),
            cache_maxmemory_policy=env.get("CACHE_MAXMEMORY_POLICY", "allkeys-lru"),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE", "app.log"),
        )
