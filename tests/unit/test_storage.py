"""
Unit tests for the in-memory MappingStore.

Covers:
    - put (insert, idempotent re-put, reject code and URL collisions)
    - get_short / get_long (found & not found)
    - forward and reverse maps stay in sync
"""

from shortener_platform.storage.storage import MappingStore


def test_put_and_get_both_directions(store):
    assert store.put("https://example.com", "abc1234") is True
    assert store.get_short("https://example.com") == "abc1234"
    assert store.get_long("abc1234") == "https://example.com"
    assert len(store) == 1


def test_put_same_pair_idempotent(store):
    assert store.put("https://one.com", "abc1234") is True
    assert store.put("https://one.com", "abc1234") is True
    assert len(store) == 1


def test_put_rejects_code_bound_to_other_url(store):
    assert store.put("https://one.com", "abc1234") is True
    assert store.put("https://two.com", "abc1234") is False
    assert store.get_long("abc1234") == "https://one.com"
    assert store.get_short("https://two.com") is None


def test_put_rejects_remapping_url(store):
    """A URL's code is stable once created."""
    assert store.put("https://one.com", "abc1234") is True
    assert store.put("https://one.com", "zzz9999") is False
    assert store.get_short("https://one.com") == "abc1234"
    assert store.get_long("zzz9999") is None


def test_lookups_miss(store):
    assert store.get_short("https://notfound.com") is None
    assert store.get_long("missing") is None


def test_no_normalization(store):
    store.put("https://example.com/a", "c1")
    assert store.get_short("https://EXAMPLE.com/a") is None
    assert store.get_short("https://example.com/a/") is None


def test_multiple_mappings_independent(store):
    store.put("https://a.com", "a1")
    store.put("https://b.com", "b2")
    assert store.get_long("a1") == "https://a.com"
    assert store.get_long("b2") == "https://b.com"
    assert len(store) == 2


def test_fresh_stores_do_not_share_state():
    a, b = MappingStore(), MappingStore()
    a.put("https://a.com", "a1")
    assert b.get_long("a1") is None
    assert len(b) == 0
