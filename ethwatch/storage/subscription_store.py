"""In-memory set of watched addresses."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable


@runtime_checkable
class SubscriptionStore(Protocol):
    """Where the parser records and checks watched addresses."""

    def store_subscription(self, address: str) -> None:
        ...

    def is_subscribed(self, address: str) -> bool:
        ...


class MemorySubscriptionStore:
    """
    Process-lifetime subscription set.

    Inserts are idempotent and there is no removal. Addresses are stored as
    given, so ``0xAbC`` and ``0xabc`` are different entries. Safe to share
    between the event loop and worker threads.
    """

    def __init__(self) -> None:
        self._addresses: set[str] = set()
        self._lock = threading.Lock()

    def store_subscription(self, address: str) -> None:
        with self._lock:
            self._addresses.add(address)

    def is_subscribed(self, address: str) -> bool:
        with self._lock:
            return address in self._addresses

    def __len__(self) -> int:
        with self._lock:
            return len(self._addresses)
