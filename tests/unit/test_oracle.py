"""
Unit tests for the in-memory existence oracle and the base claim() contract.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from shortener_platform.oracle.base import BaseExistenceOracle
from shortener_platform.oracle.memory import InMemoryExistenceOracle


class _SetOracle(BaseExistenceOracle):
    """Minimal oracle that only implements the two required operations."""

    def __init__(self):
        self.codes = set()

    def exists(self, code):
        return code in self.codes

    def save(self, code):
        self.codes.add(code)


def test_exists_and_save(oracle):
    assert oracle.exists("abc1234") is False
    oracle.save("abc1234")
    assert oracle.exists("abc1234") is True
    assert "abc1234" in oracle


def test_save_is_idempotent(oracle):
    oracle.save("abc1234")
    oracle.save("abc1234")
    assert len(oracle) == 1


def test_claim_registers_once(oracle):
    assert oracle.claim("abc1234") is True
    assert oracle.claim("abc1234") is False
    assert oracle.exists("abc1234")


def test_preloaded_codes():
    o = InMemoryExistenceOracle(["a", "b"])
    assert o.exists("a") and o.exists("b")
    assert not o.exists("c")


def test_instances_are_independent():
    a = InMemoryExistenceOracle()
    b = InMemoryExistenceOracle()
    a.save("x")
    assert not b.exists("x")


def test_default_claim_uses_exists_and_save():
    o = _SetOracle()
    assert o.claim("q") is True
    assert o.claim("q") is False
    assert o.codes == {"q"}


def test_concurrent_claims_single_winner():
    o = InMemoryExistenceOracle()
    barrier = threading.Barrier(16)

    def worker():
        barrier.wait()
        return o.claim("contested")

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = [f.result() for f in [pool.submit(worker) for _ in range(16)]]
    assert results.count(True) == 1
