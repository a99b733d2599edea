"""Outcome of a single backend call.

Both ports return an Outcome instead of raising, so the service can
reason about partial failure without try/except around every call.
An Outcome is either ``ok`` (carrying a value, possibly None) or a
failure carrying one of the domain error kinds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from catalog.domain.exceptions import DomainException, EntityNotFoundError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):

    value: T | None = None
    error: DomainException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, EntityNotFoundError)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def success(value: T | None = None) -> Outcome[T]:
        return Outcome(value=value)

    @staticmethod
    def failure(error: DomainException) -> Outcome[T]:
        return Outcome(error=error)
