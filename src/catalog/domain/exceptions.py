"""Domain-level error kinds and the aggregated service result.

Every error kind is a subclass of DomainException so the CLI layer can
catch them uniformly. Backend adapters do not raise these for backend
failures: they *return* them inside an ``Outcome`` and the service folds
them into a ``ServiceError``. Only input validation raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class DomainException(Exception):
    """Base class for all domain errors."""

    prefix = "domain error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        if not self.detail:
            return self.prefix
        return f"{self.prefix}: {self.detail}"


class ValidationError(DomainException):
    """Input was rejected before reaching the store or the cache."""

    prefix = "invalid input"


class EntityNotFoundError(DomainException):
    """The product is absent in the queried backend."""

    prefix = "product not found"


class InternalStoreError(DomainException):
    """The durable store failed to serve the request."""

    prefix = "internal database error"


class InternalCacheError(DomainException):
    """The cache failed to serve the request."""

    prefix = "internal cache error"


@dataclass
class ServiceError:
    """Aggregated outcome of one service call.

    Holds at most one critical error (the call produced no usable value)
    and any number of non-critical ones (the value is usable but a backend
    degraded). Order of detection is preserved.
    """

    critical: DomainException | None = None
    non_critical: list[DomainException] = field(default_factory=list)

    @property
    def is_critical(self) -> bool:
        return self.critical is not None

    @property
    def errors(self) -> list[DomainException]:
        """Non-critical errors followed by the critical one, if any."""
        result = list(self.non_critical)
        if self.critical is not None:
            result.append(self.critical)
        return result

    def __str__(self) -> str:
        return "".join(f"{err}\n" for err in self.errors)


class ErrorCollector:
    """Request-scoped bag of errors, filled by the boundary layer.

    One collector is created per request and passed explicitly to
    whatever needs to record errors; the request logger prints it
    once the request is done.
    """

    def __init__(self) -> None:
        self._errors: list[Exception] = []

    def add(self, *errors: Exception) -> None:
        self._errors.extend(errors)

    def add_service_error(self, service_error: ServiceError) -> None:
        # Critical first, then non-critical in detection order.
        if service_error.critical is not None:
            self._errors.append(service_error.critical)
        self._errors.extend(service_error.non_critical)

    @property
    def errors(self) -> list[Exception]:
        return list(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __str__(self) -> str:
        return "".join(f"{err};\n" for err in self._errors)
