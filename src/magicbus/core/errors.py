"""Exceptions raised by the magic bus at its call sites."""

from typing import Any


class MagicBusError(Exception):
    """Base class for magic bus errors."""


class MailboxNotFoundError(MagicBusError, LookupError):
    """Unsubscribing a mailbox that is not registered for a message type."""

    def __init__(self, message_type: type, mailbox: Any) -> None:
        super().__init__(
            f"Mailbox {mailbox!r} is not subscribed to "
            f"{getattr(message_type, '__qualname__', message_type)}"
        )
        self.message_type = message_type
        self.mailbox = mailbox
