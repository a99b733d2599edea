"""Product aggregate.

The store assigns identity on insert and is the only authority on
whether a product exists. The cache keeps a denormalized JSON copy keyed
by id and never decides anything on its own.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from catalog.domain.exceptions import ValidationError


def _require_text(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"product {field_name} is empty")


@dataclass(frozen=True)
class NewProduct:
    """An unsaved product payload submitted by a caller."""

    name: str
    additional_info: str

    def __post_init__(self) -> None:
        _require_text(self.name, "name")
        _require_text(self.additional_info, "additional info")

    @staticmethod
    def from_dict(raw: dict) -> NewProduct:
        """Build from a ``{"name", "additionalInfo"}`` mapping.

        Unknown keys are rejected, as are missing or blank values.
        """
        unknown = set(raw) - {"name", "additionalInfo"}
        if unknown:
            raise ValidationError(f"unknown field(s): {', '.join(sorted(unknown))}")
        return NewProduct(
            name=raw.get("name", ""),
            additional_info=raw.get("additionalInfo", ""),
        )


@dataclass(frozen=True)
class Product:
    """A stored product. Immutable: an update produces a new snapshot."""

    id: int
    name: str
    additional_info: str

    @staticmethod
    def from_new(product_id: int, new_product: NewProduct) -> Product:
        return Product(
            id=product_id,
            name=new_product.name,
            additional_info=new_product.additional_info,
        )

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "additionalInfo": self.additional_info,
        }

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @staticmethod
    def from_json(data: bytes | str) -> Product:
        raw = json.loads(data)
        return Product(
            id=raw["id"],
            name=raw["name"],
            additional_info=raw["additionalInfo"],
        )
