#!/usr/bin/env python3
"""
Example: Order Events Demo

Demonstrates:
- Causal delivery: supertype mailboxes before subtype mailboxes
- Observing UndeliveredMessage and FailedMessage
- Failure isolation: later mailboxes still run after one fails

Run with DEBUG=1 in the environment to see the bus's structured logs.
"""

import logging
import os
from dataclasses import dataclass

from magicbus import FailedMessage, MagicBus, UndeliveredMessage
from magicbus.runtime import configure_logging


@dataclass
class Event:
    source: str


@dataclass
class OrderPlaced(Event):
    order_id: int
    total: float


@dataclass
class Heartbeat:
    sequence: int


class ShopBus(MagicBus):
    """A bus that reports its own routing problems."""

    def __init__(self) -> None:
        super().__init__()
        self.subscribe(UndeliveredMessage, self.on_undelivered)
        self.subscribe(FailedMessage, self.on_failed)

    def on_undelivered(self, undelivered: UndeliveredMessage) -> None:
        print(f"  [undelivered] {undelivered.message!r}")

    def on_failed(self, failed: FailedMessage) -> None:
        print(f"  [failed] {failed.mailbox.__name__}: {failed.failure!r}")


def main() -> None:
    configure_logging(logging.DEBUG if os.environ.get("DEBUG") else logging.WARNING)

    print("=" * 60)
    print("Order Events Demo")
    print("=" * 60)
    print()

    bus = ShopBus()

    def audit(event: Event) -> None:
        print(f"  audit: {type(event).__name__} from {event.source}")

    def bill(order: OrderPlaced) -> None:
        print(f"  bill: order {order.order_id} for {order.total:.2f}")

    def reserve_stock(order: OrderPlaced) -> None:
        if order.total > 1000:
            raise ValueError(f"order {order.order_id} exceeds stock limit")
        print(f"  reserve: order {order.order_id}")

    def notify(order: OrderPlaced) -> None:
        print(f"  notify: customer of order {order.order_id}")

    # Subscribed subtype-first on purpose: audit still runs first
    bus += bill
    bus += reserve_stock
    bus += notify
    bus += audit

    print("Step 1: Posting a small order")
    print("-" * 40)
    bus.post(OrderPlaced(source="web", order_id=1, total=42.0))
    print()

    print("Step 2: Posting a large order (stock reservation fails)")
    print("-" * 40)
    bus.post(OrderPlaced(source="web", order_id=2, total=5000.0))
    print()

    print("Step 3: Posting a message nobody receives")
    print("-" * 40)
    bus.post(Heartbeat(sequence=1))
    print()

    print("Step 4: Subscriptions")
    print("-" * 40)
    for message_type, mailboxes in bus.subscriptions.items():
        names = ", ".join(getattr(m, "__name__", str(m)) for m in mailboxes)
        print(f"  {message_type.__name__}: {names}")
    print()

    stats = bus.stats
    print(
        f"Posted {stats.total_posted}, delivered {stats.total_deliveries}, "
        f"undelivered {stats.total_undelivered}, failed {stats.total_failed}"
    )


if __name__ == "__main__":
    main()
