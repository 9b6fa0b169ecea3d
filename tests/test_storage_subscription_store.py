"""Tests for the in-memory subscription store."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from ethwatch.storage.subscription_store import MemorySubscriptionStore, SubscriptionStore


def test_store_and_check() -> None:
    store = MemorySubscriptionStore()
    assert store.is_subscribed("0x123") is False
    store.store_subscription("0x123")
    assert store.is_subscribed("0x123") is True
    assert store.is_subscribed("0x456") is False


def test_insert_is_idempotent() -> None:
    store = MemorySubscriptionStore()
    store.store_subscription("0x123")
    store.store_subscription("0x123")
    assert len(store) == 1


def test_addresses_are_case_sensitive() -> None:
    store = MemorySubscriptionStore()
    store.store_subscription("0xAbC")
    assert store.is_subscribed("0xabc") is False


def test_concurrent_inserts_are_not_lost() -> None:
    store = MemorySubscriptionStore()
    addresses = [f"0x{i:040x}" for i in range(200)]

    def worker(offset: int) -> None:
        for address in addresses[offset::10]:
            store.store_subscription(address)
            assert store.is_subscribed(address)

    with ThreadPoolExecutor(max_workers=10) as pool:
        list(pool.map(worker, range(10)))

    assert len(store) == len(addresses)
    assert all(store.is_subscribed(a) for a in addresses)


def test_memory_store_satisfies_protocol() -> None:
    assert isinstance(MemorySubscriptionStore(), SubscriptionStore)
