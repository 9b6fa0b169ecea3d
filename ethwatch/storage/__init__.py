"""Subscription storage for ethwatch."""

from ethwatch.storage.subscription_store import MemorySubscriptionStore, SubscriptionStore

__all__ = ["MemorySubscriptionStore", "SubscriptionStore"]
