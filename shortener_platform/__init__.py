"""
shortener_platform package initializer.
"""

from . import generator
from . import oracle
from . import service
from . import storage
from .errors import (
    AlgorithmUnavailable,
    GenerationExhausted,
    InvalidURL,
    ShortenerError,
    StorageError,
)

__all__ = [
    "generator",
    "oracle",
    "service",
    "storage",
    "ShortenerError",
    "GenerationExhausted",
    "AlgorithmUnavailable",
    "InvalidURL",
    "StorageError",
]
