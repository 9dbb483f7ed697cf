"""
Registry of mailboxes keyed by message type.

The registry keeps, for each message type, the mailboxes subscribed to it in
subscription order.  Resolving a concrete message type collects the
mailboxes of every registered supertype, ancestors first.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import structlog

from magicbus.core.errors import MailboxNotFoundError
from magicbus.core.hierarchy import SubtypeCheck, order_by_hierarchy
from magicbus.core.mailbox import Mailbox

# Routed through stdlib logging: silent until the application configures it
logger = structlog.wrap_logger(logging.getLogger(__name__))


class SubscriptionRegistry:
    """
    Mapping from message type to its ordered mailboxes.

    Invariants:
    - one entry per message type
    - no entry has an empty mailbox list
    - mailboxes within a type stay in subscription order

    Not thread safe; confine a registry to one thread.
    """

    def __init__(self, is_subtype: SubtypeCheck = issubclass) -> None:
        self._subscriptions: dict[type, list[Mailbox[Any]]] = {}
        self._is_subtype = is_subtype
        self._log = logger.bind(component="subscription_registry")

    @property
    def message_types(self) -> list[type]:
        """Registered message types in first-subscription order."""
        return list(self._subscriptions)

    @property
    def subscriber_count(self) -> int:
        """Total number of subscriptions across all types."""
        return sum(len(mailboxes) for mailboxes in self._subscriptions.values())

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._subscriptions

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, message_type: type, mailbox: Mailbox[Any]) -> None:
        """
        Append a mailbox to those receiving ``message_type``.

        Subscribing the same mailbox twice delivers each message to it twice.

        Raises:
            TypeError: If message_type is not a class the subtype check accepts,
                or mailbox is not callable
        """
        if not isinstance(message_type, type):
            raise TypeError(f"Message type must be a class, got {message_type!r}")
        if not callable(mailbox):
            raise TypeError(f"Mailbox must be callable, got {mailbox!r}")
        try:
            self._is_subtype(object, message_type)
        except TypeError as e:
            # Non-runtime-checkable or data protocols fail on every later resolve
            raise TypeError(
                f"Message type must be a class usable in subtype checks, got {message_type!r}"
            ) from e

        self._subscriptions.setdefault(message_type, []).append(mailbox)

        self._log.debug(
            "subscribed",
            message_type=message_type.__qualname__,
            mailbox=repr(mailbox),
        )

    def unsubscribe(self, message_type: type, mailbox: Mailbox[Any]) -> None:
        """
        Remove the first subscription of ``mailbox`` to ``message_type``.

        The type is dropped from the registry once its last mailbox goes.

        Raises:
            MailboxNotFoundError: If the mailbox is not subscribed to the type
        """
        mailboxes = self._subscriptions.get(message_type)
        if mailboxes is None:
            raise MailboxNotFoundError(message_type, mailbox)

        try:
            mailboxes.remove(mailbox)
        except ValueError:
            raise MailboxNotFoundError(message_type, mailbox) from None

        self._log.debug(
            "unsubscribed",
            message_type=message_type.__qualname__,
            mailbox=repr(mailbox),
        )

        if not mailboxes:
            del self._subscriptions[message_type]
            self._log.debug("message_type_removed", message_type=message_type.__qualname__)

    def resolve(self, message_type: type) -> list[Mailbox[Any]]:
        """
        Get every mailbox that should receive a message of ``message_type``.

        Mailboxes of supertypes come before those of subtypes; unrelated
        types keep registration order; mailboxes of one type keep
        subscription order.

        Returns:
            Ordered mailboxes, empty if none match
        """
        # Filter before ordering: unrelated registered types are never compared
        compatible = [
            registered
            for registered in self._subscriptions
            if self._is_subtype(message_type, registered)
        ]
        return [
            mailbox
            for registered in order_by_hierarchy(compatible, self._is_subtype)
            for mailbox in self._subscriptions[registered]
        ]

    def snapshot(self) -> Mapping[type, tuple[Mailbox[Any], ...]]:
        """Read-only copy of all subscriptions."""
        return MappingProxyType(
            {message_type: tuple(mailboxes) for message_type, mailboxes in self._subscriptions.items()}
        )

