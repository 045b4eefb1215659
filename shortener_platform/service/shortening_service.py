"""
ShorteningService module for the URL Shortener Platform.

Responsibilities:
    - Shorten long URLs, returning the existing code when one is stored
    - Expand short codes (or full short URLs) back to the long URL
    - Orchestrate the code strategy and the mapping store

Design notes:
    - Dedupe by long URL: shortening the exact same string again returns the
      stored code, so the result is stable for the lifetime of the store.
    - The check -> generate -> store sequence runs under a per-URL lock, so
      two concurrent calls for the same unseen URL cannot mint two codes,
      while calls for unrelated URLs proceed in parallel.
    - A generated code the store already holds for another URL (a counter
      behind rows written by an earlier process, or a window claimed by a
      racing process) is abandoned and a new one generated, a bounded number
      of times.
    - Strategy and store are injected; when omitted they come from config.
    - No normalization: URLs are compared as exact strings. Validation
      (http/https + host) is opt-in.
"""

import logging
import threading
from typing import Optional
from urllib.parse import urlparse

from ..config import settings
from ..errors import GenerationExhausted, InvalidURL, StorageError
from ..generator.strategies import BaseStrategy, get_strategy_from_config
from ..storage.base import BaseMappingStore
from ..storage.storage_factory import get_counter, get_oracle, get_storage

log = logging.getLogger(__name__)


class ShorteningService:
    """
    Coordinates creation and lookup of short codes.

    Example:
        >>> service = ShorteningService(MappingStore(), CounterStrategy())
        >>> service.shorten("https://www.example.com/a")
        '015FTGg'
        >>> service.expand("015FTGg")
        'https://www.example.com/a'
    """

    def __init__(
        self,
        storage: Optional[BaseMappingStore] = None,
        strategy: Optional[BaseStrategy] = None,
        base_url: Optional[str] = None,
        validate_urls: Optional[bool] = None,
        max_attempts: int = 8,
        lock_stripes: int = 64,
    ):
        """
        Args:
            storage (Optional[BaseMappingStore]): Mapping store; from config when omitted.
            strategy (Optional[BaseStrategy]): Code strategy; from config when omitted,
                wired to a config-selected existence oracle.
            base_url (Optional[str]): Prefix used by short_url() and accepted by expand().
            validate_urls (Optional[bool]): Require http/https URLs with a host.
            max_attempts (int): Codes generated per shorten() before giving up on
                collisions with stored mappings.
            lock_stripes (int): Number of locks URLs are hashed onto. Calls for
                the same URL always share a lock; different URLs rarely do.
        """
        self.storage = storage if storage is not None else get_storage()
        self.strategy = strategy if strategy is not None else get_strategy_from_config(
            oracle=get_oracle(), counter=get_counter()
        )
        self.base_url = settings.BASE_URL if base_url is None else base_url
        self.validate_urls = settings.VALIDATE_URLS if validate_urls is None else validate_urls
        self.max_attempts = max(1, int(max_attempts))
        self._locks = [threading.Lock() for _ in range(max(1, int(lock_stripes)))]

    def _lock_for(self, long_url: str) -> threading.Lock:
        return self._locks[hash(long_url) % len(self._locks)]

    # ---------------------------------------------------------------------
    # Validation Helpers
    # ---------------------------------------------------------------------
    def _validate_url(self, url: str) -> None:
        """
        Validate that a URL has an http/https scheme and a netloc.

        Raises:
            InvalidURL: If the URL is malformed.
        """
        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise InvalidURL("Invalid URL format")

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def shorten(self, long_url: str) -> str:
        """
        Return the short code for `long_url`, creating one if needed.

        Rules:
            - If a mapping exists, return its code (idempotent).
            - Otherwise ask the strategy for a code and store the pair.
            - If the store refuses the pair and now holds a code for this URL
              (another writer won a race on a shared backend), return that code.
            - If the refused code belongs to another URL, abandon it and
              generate again, up to `max_attempts` codes in total.

        Raises:
            InvalidURL: When validation is enabled and the URL is malformed.
            GenerationExhausted: The strategy has no free code for this URL.
            StorageError: Every generated code was refused and the store holds
                no code for the URL.
        """
        if self.validate_urls:
            self._validate_url(long_url)

        with self._lock_for(long_url):
            existing = self.storage.get_short(long_url)
            if existing is not None:
                return existing

            code = None
            for _ in range(self.max_attempts):
                try:
                    code = self.strategy.generate(long_url)
                except GenerationExhausted as exc:
                    log.warning("Code space exhausted for %r after %d attempts", long_url, exc.attempts)
                    raise

                if self.storage.put(long_url, code):
                    log.debug("Stored mapping %s -> %s", code, long_url)
                    return code

                winner = self.storage.get_short(long_url)
                if winner is not None:
                    log.debug("Abandoned code %s; %r already stored as %s", code, long_url, winner)
                    return winner
                # The code stays registered with the oracle (hash strategy) but is never used.
                log.debug("Abandoned code %s for %r: already bound to another URL", code, long_url)

            raise StorageError(
                f"Failed to store mapping for {long_url!r} after {self.max_attempts} attempts (last code {code!r})"
            )

    def expand(self, short_code: str) -> Optional[str]:
        """
        Return the long URL for a short code, or None when it was never issued.

        Accepts either the bare code or a full short URL that starts with
        `base_url`.
        """
        if self.base_url and short_code.startswith(self.base_url):
            short_code = short_code[len(self.base_url):]
        return self.storage.get_long(short_code)

    def short_url(self, short_code: str) -> str:
        """Render the public short URL for a code."""
        return f"{self.base_url}{short_code}"
