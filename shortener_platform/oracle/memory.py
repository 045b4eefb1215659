"""
In-memory existence oracle.

Each instance owns its own set, so several shortening services can run side
by side in one process without seeing each other's codes.
"""

import threading
from typing import Iterable, Optional, Set

from .base import BaseExistenceOracle


class InMemoryExistenceOracle(BaseExistenceOracle):
    def __init__(self, codes: Optional[Iterable[str]] = None):
        """
        Args:
            codes (Optional[Iterable[str]]): Codes to pre-register as used.
        """
        self._codes: Set[str] = set(codes or ())
        self._lock = threading.Lock()

    def exists(self, code: str) -> bool:
        with self._lock:
            return code in self._codes

    def save(self, code: str) -> None:
        with self._lock:
            self._codes.add(code)

    def claim(self, code: str) -> bool:
        with self._lock:
            if code in self._codes:
                return False
            self._codes.add(code)
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._codes)

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._codes
