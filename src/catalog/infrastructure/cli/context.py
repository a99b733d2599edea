"""State shared by every CLI command of one process."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from catalog.application.product_service import ProductService
from catalog.infrastructure import bootstrap
from catalog.infrastructure.config import Settings
from catalog.infrastructure.request_log import RequestLogger


@dataclass
class AppContext:
    """Settings plus a lazily-built ProductService.

    The service is only wired on first use so that ``--help`` never
    touches the database or Redis.
    """

    settings: Settings
    service_factory: Callable[[Settings], ProductService] = bootstrap.product_service
    request_log: RequestLogger = field(default_factory=RequestLogger)
    _service: ProductService | None = field(default=None, init=False, repr=False)

    def service(self) -> ProductService:
        if self._service is None:
            self._service = self.service_factory(self.settings)
        return self._service
