"""Type-routed synchronous message bus."""

from magicbus.bus.magic_bus import MagicBus, MagicBusStats, subscribe_to, unsubscribe_from
from magicbus.bus.registry import SubscriptionRegistry

__all__ = [
    "MagicBus",
    "MagicBusStats",
    "SubscriptionRegistry",
    "subscribe_to",
    "unsubscribe_from",
]
