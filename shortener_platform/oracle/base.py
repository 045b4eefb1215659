"""
Base existence-oracle interface for the URL Shortener Platform.

Purpose:
    The content-hash strategy needs to know which short codes are already in
    use before it hands one out. The oracle is the narrow collaborator that
    answers "does this code exist" and "record this code as used", so the
    backing (in-memory set, Postgres table, cache) can be swapped freely.

Testing & Coverage:
    Abstract methods are annotated with `# pragma: no cover` since they are
    never executed directly.
"""

from abc import ABC, abstractmethod

__all__ = ["BaseExistenceOracle"]


class BaseExistenceOracle(ABC):
    """Abstract base for short-code existence backends."""

    @abstractmethod  # pragma: no cover
    def exists(self, code: str) -> bool:
        """Return True if `code` has already been recorded as used."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def save(self, code: str) -> None:
        """Record `code` as used. Saving an existing code is a no-op."""
        raise NotImplementedError

    def claim(self, code: str) -> bool:
        """
        Check-and-set: record `code` if it is free.

        Returns:
            bool: True if this call registered the code, False if it already existed.

        Notes:
            This default composes exists() and save() and is only atomic when the
            caller serializes access. Backends shared between threads or processes
            override it with a native check-and-set (a lock, or an
            `INSERT ... ON CONFLICT DO NOTHING`).
        """
        if self.exists(code):
            return False
        self.save(code)
        return True
