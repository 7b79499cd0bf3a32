# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""Process-wide registry of error categories and codes for svcmap."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svcmap.errors.base import ErrorCategory, ErrorCode


class ErrorRegistry:
    """Singleton store of categories and codes, each keyed by its name.

    Code names are unique across categories.
    """

    _instance: ErrorRegistry | None = None
    _lock = threading.RLock()

    _categories: dict[str, ErrorCategory]
    _codes: dict[str, ErrorCode]

    def __new__(cls) -> ErrorRegistry:
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def category(
        self, name: str, factory: Callable[[], ErrorCategory]
    ) -> ErrorCategory:
        """Return the category registered as ``name``, registering ``factory()`` first if absent."""
        with self._lock:
            if name not in self._categories:
                self._categories[name] = factory()
            return self._categories[name]

    def code(self, code: str, factory: Callable[[], ErrorCode]) -> ErrorCode:
        """Return the code registered as ``code``, registering ``factory()`` first if absent."""
        with self._lock:
            if code not in self._codes:
                self._codes[code] = factory()
            return self._codes[code]

    def lookup_code(self, code: str) -> ErrorCode | None:
        with self._lock:
            return self._codes.get(code)


registry = ErrorRegistry()
