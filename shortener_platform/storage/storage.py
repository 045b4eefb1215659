"""
Mapping store for the URL Shortener Platform (in-memory implementation).

Responsibilities:
    - Hold the forward (long URL -> code) and reverse (code -> long URL) maps
    - Keep both maps in sync: every write touches both or neither
    - Refuse writes that would bind a code or URL to a second partner

Design:
    - In-memory reference implementation of the BaseMappingStore contract.
    - A lock guards each read and write so the store can be shared by threads.
    - For production, replace with a DB-backed implementation (see db_storage.py).
"""

import threading
from typing import Dict, Optional

from .base import BaseMappingStore


class MappingStore(BaseMappingStore):
    def __init__(self):
        """
        Initialize empty forward and reverse maps.

        Internal schema:
            self._forward = {long_url: short_code}
            self._reverse = {short_code: long_url}
        """
        self._forward: Dict[str, str] = {}
        self._reverse: Dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, long_url: str, short_code: str) -> bool:
        """
        Insert a mapping in both directions.

        Rules:
            - Same pair stored again -> True, nothing changes (idempotent).
            - `short_code` already mapped to a different URL -> False.
            - `long_url` already mapped to a different code -> False (mappings
              are never mutated once created).
        """
        with self._lock:
            existing_url = self._reverse.get(short_code)
            existing_code = self._forward.get(long_url)
            if existing_url is not None or existing_code is not None:
                return existing_url == long_url and existing_code == short_code
            self._forward[long_url] = short_code
            self._reverse[short_code] = long_url
            return True

    def get_short(self, long_url: str) -> Optional[str]:
        with self._lock:
            return self._forward.get(long_url)

    def get_long(self, short_code: str) -> Optional[str]:
        with self._lock:
            return self._reverse.get(short_code)

    def __len__(self) -> int:
        with self._lock:
            return len(self._forward)
