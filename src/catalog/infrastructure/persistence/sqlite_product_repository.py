"""SQLite-backed implementation of ProductRepository.

Each call opens its own short-lived connection, so one repository can be
shared by concurrent callers. Mutations that need the previous row run
inside ``BEGIN IMMEDIATE`` so the read and the write see the same state.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from catalog.domain.exceptions import EntityNotFoundError, InternalStoreError
from catalog.domain.model.outcome import Outcome
from catalog.domain.model.product import NewProduct, Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    additional_info TEXT NOT NULL
)
"""

_COLUMNS = "id, name, additional_info"


class SqliteProductRepository(ProductRepository):

    def __init__(self, db_path: Path, timeout: float = 5.0) -> None:
        self._db_path = db_path
        self._timeout = timeout
        self._ensure_schema()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Outcome[Product]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT {_COLUMNS} FROM products WHERE id = ?", (product_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            return _internal(f"failed to get product {product_id}. {exc}")
        if row is None:
            return _not_found(product_id)
        return Outcome.success(_to_domain(row))

    def list_all(self) -> Outcome[list[Product]]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM products ORDER BY id"
                ).fetchall()
        except sqlite3.Error as exc:
            return _internal(f"failed to get all products. {exc}")
        return Outcome.success([_to_domain(row) for row in rows])

    def list_paged(self, limit: int, offset: int) -> Outcome[list[Product]]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM products ORDER BY id LIMIT ? OFFSET ?",
                    (limit, offset),
                ).fetchall()
        except sqlite3.Error as exc:
            return _internal(f"failed to get paginated products. {exc}")
        return Outcome.success([_to_domain(row) for row in rows])

    def insert(self, new_product: NewProduct) -> Outcome[int]:
        try:
            with self._transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO products (name, additional_info) VALUES (?, ?)",
                    (new_product.name, new_product.additional_info),
                )
                product_id = cursor.lastrowid
        except sqlite3.Error as exc:
            return _internal(f"failed to store product. {exc}")
        return Outcome.success(product_id)

    def update_by_id(self, product_id: int, new_product: NewProduct) -> Outcome[Product]:
        try:
            with self._transaction() as conn:
                row = conn.execute(
                    f"SELECT {_COLUMNS} FROM products WHERE id = ?", (product_id,)
                ).fetchone()
                if row is None:
                    return _not_found(product_id)
                conn.execute(
                    "UPDATE products SET name = ?, additional_info = ? WHERE id = ?",
                    (new_product.name, new_product.additional_info, product_id),
                )
        except sqlite3.Error as exc:
            return _internal(f"failed to update product {product_id}. {exc}")
        return Outcome.success(_to_domain(row))

    def delete_by_id(self, product_id: int) -> Outcome[Product]:
        try:
            with self._transaction() as conn:
                row = conn.execute(
                    f"SELECT {_COLUMNS} FROM products WHERE id = ?", (product_id,)
                ).fetchone()
                if row is None:
                    return _not_found(product_id)
                conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
        except sqlite3.Error as exc:
            return _internal(f"failed to delete product {product_id}. {exc}")
        return Outcome.success(_to_domain(row))

    def delete_all_returning_count(self) -> Outcome[int]:
        stage = "start transaction"
        try:
            with self._transaction() as conn:
                stage = "count rows"
                (count,) = conn.execute("SELECT COUNT(*) FROM products").fetchone()
                stage = "truncate table"
                conn.execute("DELETE FROM products")
                stage = "commit transaction"
        except sqlite3.Error as exc:
            return _internal(f"failed to {stage}. {exc}")
        return Outcome.success(count)

    # --- Connection helpers ---------------------------------------------------

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Explicit transaction: committed on normal exit, rolled back otherwise."""
        with self._connect() as conn:
            conn.isolation_level = None
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def _ensure_schema(self) -> None:
        if self._db_path != Path(":memory:"):
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(_SCHEMA)
            conn.commit()


# --- Row mapping / outcome helpers -------------------------------------------


def _to_domain(row: tuple) -> Product:
    return Product(id=row[0], name=row[1], additional_info=row[2])


def _not_found(product_id: int) -> Outcome:
    return Outcome.failure(
        EntityNotFoundError(f"failed to find product {product_id} in DB")
    )


def _internal(detail: str) -> Outcome:
    logger.error("Store failure: %s", detail)
    return Outcome.failure(InternalStoreError(detail))
