"""Core types: mailboxes, routing messages, type ordering, config, errors."""

from magicbus.core.config import BusConfig
from magicbus.core.errors import MagicBusError, MailboxNotFoundError
from magicbus.core.hierarchy import compare_types, order_by_hierarchy
from magicbus.core.mailbox import Mailbox, NamedMailbox, discard, mailbox_type, named_mailbox
from magicbus.core.messages import FailedMessage, UndeliveredMessage

__all__ = [
    "BusConfig",
    "FailedMessage",
    "Mailbox",
    "MagicBusError",
    "MailboxNotFoundError",
    "NamedMailbox",
    "UndeliveredMessage",
    "compare_types",
    "discard",
    "mailbox_type",
    "named_mailbox",
    "order_by_hierarchy",
]
