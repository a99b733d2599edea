"""Per-request summary logging.

Each request gets a sequential id and a fresh ``ErrorCollector``. When
the request finishes, successfully or not, one summary line is logged;
if anything was collected, the line is marked ERROR and followed by one
numbered line per error.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Iterator

from catalog.domain.exceptions import ErrorCollector


class RequestLogger:

    def __init__(self, starting_request_id: int = 0, logger_name: str = "catalog.requests") -> None:
        self._next_id = starting_request_id
        self._lock = threading.Lock()
        self._logger = logging.getLogger(logger_name)

    def new_request_id(self) -> int:
        with self._lock:
            request_id = self._next_id
            self._next_id += 1
            return request_id

    @contextmanager
    def request(self, command: str, args: dict | None = None) -> Iterator[ErrorCollector]:
        request_id = self.new_request_id()
        errors = ErrorCollector()
        started = time.perf_counter()
        try:
            yield errors
        finally:
            duration = time.perf_counter() - started
            self._write(request_id, command, args or {}, duration, errors)

    def _write(
        self,
        request_id: int,
        command: str,
        args: dict,
        duration: float,
        errors: ErrorCollector,
    ) -> None:
        rendered_args = ", ".join(f"{k}={v!r}" for k, v in args.items()) or "none"
        if not errors:
            self._logger.info(
                "Request: %d | OK | Command: %s | Args: %s | Duration: %.3fs",
                request_id, command, rendered_args, duration,
            )
            return

        self._logger.error(
            "Request: %d | ERROR | Command: %s | Args: %s | Duration: %.3fs | Error(s):",
            request_id, command, rendered_args, duration,
        )
        for i, error in enumerate(errors.errors, start=1):
            self._logger.error(" %d. %s", i, error)
