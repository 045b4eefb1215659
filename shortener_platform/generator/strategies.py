"""
Strategies for short-code generation in shortener_platform.

Provided strategies:
- CounterStrategy: monotonically increasing integer -> Base62, left-padded to
  a minimum length. Ignores the URL entirely.
- ContentHashStrategy: hex digest of the URL (md5 by default), probing
  consecutive fixed-length windows against an existence oracle.

Common helpers:
- _base62_encode / _base62_decode: integer <-> Base62 string over 0-9a-zA-Z
- AtomicCounter: explicitly owned counter with fetch-and-add as its only mutation

Configuration (via shortener_platform.config.settings):
- CODE_STRATEGY: "counter" (default) or "hash"
- CODE_LENGTH: minimum length (counter) / window length (hash), default 7
- COUNTER_START: counter seed, default 1_000_000_000
- HASH_ALGORITHM: hashlib name, default "md5"
- REHASH_ATTEMPTS: salted re-digests before giving up, default 0

Notes:
- Strategies hold their state explicitly (a counter object, an oracle
  object); nothing is shared through module globals, so independent
  services never interfere.
- The counter never hands out the same value twice, so CounterStrategy never
  needs an oracle.
"""

import hashlib
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterator, Optional, Type

from ..config import settings, clamp_length, DEFAULT_CODE_LENGTH, DEFAULT_COUNTER_START
from ..errors import AlgorithmUnavailable, GenerationExhausted
from ..oracle.base import BaseExistenceOracle
from ..oracle.memory import InMemoryExistenceOracle

log = logging.getLogger(__name__)

_BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
_BASE62_BASE = len(_BASE62_ALPHABET)
_BASE62_INDEX = {ch: i for i, ch in enumerate(_BASE62_ALPHABET)}


def _base62_encode(num: int) -> str:
    """
    Convert a non-negative integer to a Base62 string, most-significant digit first.
    0 -> "0", 61 -> "Z", 62 -> "10"
    """
    if num < 0:
        raise ValueError("num must be non-negative")
    if num == 0:
        return _BASE62_ALPHABET[0]
    out = []
    while num > 0:
        num, rem = divmod(num, _BASE62_BASE)
        out.append(_BASE62_ALPHABET[rem])
    return "".join(reversed(out))


def _base62_decode(code: str) -> int:
    """Inverse of _base62_encode; leading "0" padding decodes to nothing."""
    num = 0
    for ch in code:
        try:
            num = num * _BASE62_BASE + _BASE62_INDEX[ch]
        except KeyError:
            raise ValueError(f"Not a Base62 character: {ch!r}") from None
    return num


class AtomicCounter:
    """
    Process-local monotonically increasing counter.

    `next()` is a single fetch-and-add: it returns the current value and
    advances by one, under a lock, so no two callers ever observe the same
    value.
    """

    def __init__(self, start: int = DEFAULT_COUNTER_START):
        if start < 0:
            raise ValueError("start must be non-negative")
        self._lock = threading.Lock()
        self._next_value = start

    def next(self) -> int:
        with self._lock:
            n = self._next_value
            self._next_value += 1
            return n

    @property
    def value(self) -> int:
        """The value the next call to next() will return."""
        with self._lock:
            return self._next_value


class BaseStrategy(ABC):
    """Abstract base for code generation strategies."""

    @abstractmethod
    def generate(self, url: str) -> str:
        """Produce a candidate short code for the given long URL."""
        raise NotImplementedError


class CounterStrategy(BaseStrategy):
    """
    Sequential strategy:
    - Owns (or is handed) an AtomicCounter
    - Encodes the pre-increment value to Base62
    - Enforces a minimum visible length via left-padding (e.g., "015FTGg")

    Properties:
    - Collision-free for as long as the counter is not reset or shared
      between independent stores
    - Codes grow by natural Base62 expansion once 62^min_length is passed
    - Stateless across restarts unless handed a persistent counter (see
      storage.db_storage.DBSequenceCounter)
    """

    def __init__(
        self,
        start: int = DEFAULT_COUNTER_START,
        min_length: int = DEFAULT_CODE_LENGTH,
        counter: Optional[AtomicCounter] = None,
    ):
        self.counter = counter if counter is not None else AtomicCounter(start)
        self.min_length = min_length

    def generate(self, url: str) -> str:
        # url is intentionally ignored
        code = _base62_encode(self.counter.next())
        if len(code) < self.min_length:
            code = code.rjust(self.min_length, _BASE62_ALPHABET[0])
        return code


class ContentHashStrategy(BaseStrategy):
    """
    Digest-window strategy.

    The URL's hex digest is scanned with a fixed-size window from offset 0,
    one character at a time. The first window the oracle has not seen is
    claimed and returned. With md5 (32 hex chars) and length 7 that is 26
    candidates per digest.

    When every window is taken the strategy raises GenerationExhausted,
    unless `rehash_attempts` > 0, in which case it digests "{url}|1",
    "{url}|2", ... and tries those windows too before giving up.
    """

    def __init__(
        self,
        oracle: Optional[BaseExistenceOracle] = None,
        length: int = DEFAULT_CODE_LENGTH,
        algorithm: str = "md5",
        rehash_attempts: int = 0,
    ):
        self.oracle = oracle if oracle is not None else InMemoryExistenceOracle()
        self.algorithm = algorithm
        self.rehash_attempts = max(0, int(rehash_attempts))
        # Resolve the digest size once; unknown algorithms raise here, not per call.
        try:
            digest_len = len(hashlib.new(algorithm).hexdigest())
        except (ValueError, TypeError):
            # TypeError: variable-length digests (shake_*) have no fixed hex form
            raise AlgorithmUnavailable(algorithm) from None
        if not 1 <= length <= digest_len:
            raise ValueError(f"length must be between 1 and {digest_len} for {algorithm}")
        self.length = length
        self.digest_length = digest_len

    @property
    def windows_per_digest(self) -> int:
        return self.digest_length - self.length + 1

    def digest(self, url: str, salt: int = 0) -> str:
        """Lowercase hex digest of the URL (salted as "url|salt" when salt > 0)."""
        payload = url if salt == 0 else f"{url}|{salt}"
        return hashlib.new(self.algorithm, payload.encode("utf-8")).hexdigest()

    def candidates(self, url: str, salt: int = 0) -> Iterator[str]:
        h = self.digest(url, salt)
        for i in range(self.windows_per_digest):
            yield h[i:i + self.length]

    def generate(self, url: str) -> str:
        attempts = 0
        for salt in range(self.rehash_attempts + 1):
            for candidate in self.candidates(url, salt):
                attempts += 1
                if self.oracle.claim(candidate):
                    return candidate
            if salt < self.rehash_attempts:
                log.info("All %d windows taken for %r; rehashing with salt %d",
                         self.windows_per_digest, url, salt + 1)
        raise GenerationExhausted(url, attempts)


# Strategy registry and factory
STRATEGY_REGISTRY: Dict[str, Type[BaseStrategy]] = {
    "counter": CounterStrategy,
    "sequential": CounterStrategy,
    "base62": CounterStrategy,
    "hash": ContentHashStrategy,
    "content-hash": ContentHashStrategy,
    "digest": ContentHashStrategy,
}


def get_strategy_from_config(
    name: Optional[str] = None,
    oracle: Optional[BaseExistenceOracle] = None,
    counter: Optional[AtomicCounter] = None,
) -> BaseStrategy:
    """
    Resolve the active strategy from parameter or settings.CODE_STRATEGY and
    construct it with the configured knobs. `counter` replaces the
    process-local counter, e.g. with a database sequence shared by workers.

    Raises:
        ValueError: On an unknown strategy name.
        AlgorithmUnavailable: If the configured digest algorithm is missing.
    """
    key = (name or settings.CODE_STRATEGY or "counter").strip().lower()
    cls = STRATEGY_REGISTRY.get(key)
    if cls is None:
        raise ValueError(f"Unknown code strategy: {key!r}")
    log.info("Using code strategy: %s -> %s", key, cls.__name__)

    length = clamp_length(settings.CODE_LENGTH)
    if cls is ContentHashStrategy:
        return ContentHashStrategy(
            oracle=oracle,
            length=length,
            algorithm=settings.HASH_ALGORITHM,
            rehash_attempts=settings.REHASH_ATTEMPTS,
        )
    return CounterStrategy(start=settings.COUNTER_START, min_length=length, counter=counter)
