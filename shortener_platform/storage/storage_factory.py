"""
Backend factory – pick mapping store and existence oracle from config
=====================================================================

Centralizes selection of the storage backend (in-memory vs Postgres) so the
rest of the app can stay ignorant of where data lives.

- Reads environment **at call time** to avoid stale values in tests.
- Imports DB backends **only if** the selected backend is "postgres".

Environment variables
---------------------
- SHORTENER_STORAGE_BACKEND: "memory" (default) or "postgres"
- SHORTENER_DB_DSN:          DSN string if backend=="postgres"
"""

from typing import Optional
import logging
import os

from shortener_platform.config import settings
from shortener_platform.generator.strategies import AtomicCounter
from shortener_platform.oracle.base import BaseExistenceOracle
from shortener_platform.oracle.memory import InMemoryExistenceOracle
from shortener_platform.storage.base import BaseMappingStore
from shortener_platform.storage.storage import MappingStore

log = logging.getLogger(__name__)


def _resolve_backend(backend: Optional[str]) -> str:
    return (backend or os.getenv("SHORTENER_STORAGE_BACKEND", "memory")).strip().lower()


def _resolve_dsn(**kwargs) -> str:
    dsn = kwargs.get("dsn") or os.getenv("SHORTENER_DB_DSN", "")
    if not dsn:
        raise ValueError("DB_DSN is required for postgres backend (env SHORTENER_DB_DSN)")
    return dsn


def get_storage(backend: Optional[str] = None, **kwargs) -> BaseMappingStore:
    """
    Return a mapping store based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default) or "postgres". If omitted, reads SHORTENER_STORAGE_BACKEND.
    kwargs : dict
        Extra args for the backend constructor. For postgres, use dsn="...".
    """
    be = _resolve_backend(backend)
    log.debug("Selected storage backend: %r", be)

    if be == "memory":
        return MappingStore()

    if be == "postgres":
        dsn = _resolve_dsn(**kwargs)
        from shortener_platform.storage.db_storage import DBMappingStore
        return DBMappingStore(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")


def get_oracle(backend: Optional[str] = None, **kwargs) -> BaseExistenceOracle:
    """
    Return an existence oracle for the same backend choices as get_storage().
    """
    be = _resolve_backend(backend)
    log.debug("Selected oracle backend: %r", be)

    if be == "memory":
        return InMemoryExistenceOracle()

    if be == "postgres":
        dsn = _resolve_dsn(**kwargs)
        from shortener_platform.oracle.db_oracle import DBExistenceOracle
        return DBExistenceOracle(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")


def get_counter(backend: Optional[str] = None, **kwargs) -> Optional[AtomicCounter]:
    """
    Return the counter the counter strategy should draw from.

    For "memory" this is None: the strategy owns a process-local counter,
    which is safe because the store dies with the process. For "postgres"
    the mappings outlive the process, so the counter is the shared database
    sequence; a fresh process-local counter would re-issue stored codes.
    """
    be = _resolve_backend(backend)

    if be == "memory":
        return None

    if be == "postgres":
        dsn = _resolve_dsn(**kwargs)
        start = kwargs.get("start", settings.COUNTER_START)
        from shortener_platform.storage.db_storage import DBSequenceCounter
        return DBSequenceCounter(dsn=dsn, start=start)

    raise ValueError(f"Unknown storage backend: {be!r}")
