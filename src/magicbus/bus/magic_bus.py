"""
Synchronous, type-routed message bus.

A message goes to every mailbox subscribed to its class or any superclass.
Mailboxes run one after another on the posting thread, supertype mailboxes
before subtype ones, and in subscription order within a type.  Mailbox
failures and messages nobody receives become bus messages themselves
(FailedMessage and UndeliveredMessage) instead of exceptions.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from magicbus.bus.registry import SubscriptionRegistry
from magicbus.core.config import BusConfig
from magicbus.core.mailbox import Mailbox, discard, mailbox_type
from magicbus.core.messages import FailedMessage, UndeliveredMessage

# Routed through stdlib logging: silent until the application configures it
logger = structlog.wrap_logger(logging.getLogger(__name__))

M = TypeVar("M", bound=Callable[..., Any])


@dataclass
class MagicBusStats:
    """Statistics for the magic bus."""

    total_posted: int = 0
    total_deliveries: int = 0
    total_undelivered: int = 0
    total_failed: int = 0


class MagicBus:
    """
    In-process publish/subscribe bus routed by message class.

    Guarantees:
    - Causal order: mailboxes for a superclass receive a message before
      mailboxes for its subclasses, then subscription order
    - FailedMessage notifications are posted in the order mailboxes fail,
      interleaved with the remaining mailboxes for the original message

    Limitations:
    - Not thread safe; use from one thread or serialize access
    - Mailboxes run in sequence on the caller's stack, never in parallel
    - No loop detection: mailboxes that keep posting can storm the bus
      until Python's recursion limit raises RecursionError

    Unhandled UndeliveredMessage and FailedMessage are silently discarded
    by fallback mailboxes installed at construction.  Subscribe to them to
    see routing problems:

        bus = MagicBus()
        failed: list[FailedMessage] = []
        bus.subscribe(FailedMessage, failed.append)

    Designed for extension: subclasses may subscribe their own mailboxes in
    ``__init__`` after calling ``super().__init__()``.
    """

    def __init__(self, config: BusConfig | None = None) -> None:
        self._config = config or BusConfig()
        self._registry = SubscriptionRegistry(is_subtype=self._config.is_subtype)
        self._stats = MagicBusStats()
        self._log = logger.bind(component="magic_bus")
        self._install_fallback_mailboxes()

    @property
    def config(self) -> BusConfig:
        return self._config

    @property
    def stats(self) -> MagicBusStats:
        return self._stats

    @property
    def subscriptions(self) -> Mapping[type, tuple[Mailbox[Any], ...]]:
        """Read-only view of every message type and its mailboxes."""
        return self._registry.snapshot()

    def subscribers_to(self, message_type: type) -> list[Mailbox[Any]]:
        """Mailboxes a message of ``message_type`` would be delivered to, in order."""
        return self._registry.resolve(message_type)

    def subscribe(self, message_type: type, mailbox: Mailbox[Any]) -> None:
        """
        Subscribe a mailbox to messages of ``message_type`` and its subclasses.

        Raises:
            TypeError: If message_type is not a class the subtype check accepts,
                or mailbox is not callable
        """
        self._registry.subscribe(message_type, mailbox)

    def unsubscribe(self, message_type: type, mailbox: Mailbox[Any]) -> None:
        """
        Remove a mailbox subscription.

        Raises:
            MailboxNotFoundError: If the mailbox is not subscribed to the type
        """
        self._registry.unsubscribe(message_type, mailbox)

    def subscriber(self, message_type: type) -> Callable[[M], M]:
        """
        Decorator subscribing a function to ``message_type``.

            @bus.subscriber(OrderPlaced)
            def audit(message: OrderPlaced) -> None: ...
        """

        def decorate(mailbox: M) -> M:
            self.subscribe(message_type, mailbox)
            return mailbox

        return decorate

    def __iadd__(self, mailbox: Mailbox[Any]) -> "MagicBus":
        """Subscribe with the message type inferred from the mailbox."""
        self.subscribe(mailbox_type(mailbox), mailbox)
        return self

    def __isub__(self, mailbox: Mailbox[Any]) -> "MagicBus":
        """Unsubscribe with the message type inferred from the mailbox."""
        self.unsubscribe(mailbox_type(mailbox), mailbox)
        return self

    def post(self, message: Any) -> None:
        """
        Deliver a message to every mailbox subscribed to its class.

        With no matching mailbox, an UndeliveredMessage is posted instead.
        A mailbox raising an Exception causes a FailedMessage to be posted
        right away, then delivery continues with the next mailbox.  Fatal
        errors (see BusConfig) propagate to the caller.
        """
        self._stats.total_posted += 1
        mailboxes = self._registry.resolve(type(message))

        if not mailboxes:
            self._stats.total_undelivered += 1
            self._log.debug("message_undelivered", message_type=type(message).__qualname__)
            self.post(UndeliveredMessage(bus=self, message=message))
            return

        self._log.debug(
            "posted",
            message_type=type(message).__qualname__,
            mailboxes=len(mailboxes),
        )

        for mailbox in mailboxes:
            self._deliver(mailbox, message)

    def _deliver(self, mailbox: Mailbox[Any], message: Any) -> None:
        try:
            mailbox(message)
        except Exception as e:
            if self._config.is_fatal(e):
                raise
            self._stats.total_failed += 1
            self._log.debug(
                "mailbox_failed",
                message_type=type(message).__qualname__,
                mailbox=repr(mailbox),
                error=repr(e),
            )
            self.post(FailedMessage(bus=self, mailbox=mailbox, message=message, failure=e))
        else:
            self._stats.total_deliveries += 1

    def _install_fallback_mailboxes(self) -> None:
        """
        Subscribe do-nothing mailboxes for UndeliveredMessage and FailedMessage.

        Without them an unreceived UndeliveredMessage would itself be
        undelivered, reposting forever.  They also stop the chain when user
        mailboxes for these types fail or repost.
        """
        self.subscribe(UndeliveredMessage, discard(UndeliveredMessage))
        self.subscribe(FailedMessage, discard(FailedMessage))
        self._log.debug("fallback_mailboxes_installed")

    def __repr__(self) -> str:
        return (
            f"MagicBus(message_types={len(self._registry)}, "
            f"subscriptions={self._registry.subscriber_count})"
        )


def subscribe_to(bus: MagicBus, mailbox: M) -> M:
    """Subscribe ``mailbox`` with its inferred message type and return it."""
    bus += mailbox
    return mailbox


def unsubscribe_from(bus: MagicBus, mailbox: M) -> M:
    """Unsubscribe ``mailbox`` with its inferred message type and return it."""
    bus -= mailbox
    return mailbox
