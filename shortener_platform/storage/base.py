"""
Base mapping-store interface for the URL Shortener Platform.

Purpose:
    Define a small, stable contract for the bidirectional long-URL <-> short-code
    index that multiple backends (in-memory, SQL, KV) can implement without
    requiring changes to the shortening service.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseMappingStore(ABC):
    """Abstract base class for mapping-store backends."""

    @abstractmethod  # pragma: no cover
    def put(self, long_url: str, short_code: str) -> bool:
        """
        Record a mapping in both directions.

        Returns:
            bool: True if the pair is stored (newly or already identical),
                  False if either side is already bound to something else.

        Notes:
            Code uniqueness is the generator's job; the store only refuses
            writes that would leave the forward and reverse maps out of sync.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_short(self, long_url: str) -> Optional[str]:
        """Return the short code for `long_url`, or None."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_long(self, short_code: str) -> Optional[str]:
        """Return the long URL for `short_code`, or None."""
        raise NotImplementedError
