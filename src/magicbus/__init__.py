"""
magicbus

An in-process, synchronous publish/subscribe bus routed by message class.

- MagicBus → post, subscribe, unsubscribe
- Mailbox → any one-argument callable; matched by ``==`` when unsubscribing
- UndeliveredMessage, FailedMessage → routing problems, posted as messages

A message reaches mailboxes for its class and every superclass, superclass
mailboxes first.  Nothing subscribed to UndeliveredMessage or FailedMessage
means those are silently dropped: subscribe to them to notice.
"""

__version__ = "0.1.0"

from magicbus.bus.magic_bus import MagicBus, MagicBusStats, subscribe_to, unsubscribe_from
from magicbus.bus.registry import SubscriptionRegistry
from magicbus.core.config import BusConfig
from magicbus.core.errors import MagicBusError, MailboxNotFoundError
from magicbus.core.mailbox import Mailbox, NamedMailbox, discard, mailbox_type, named_mailbox
from magicbus.core.messages import FailedMessage, UndeliveredMessage

__all__ = [
    "__version__",
    "BusConfig",
    "FailedMessage",
    "MagicBus",
    "MagicBusError",
    "MagicBusStats",
    "Mailbox",
    "MailboxNotFoundError",
    "NamedMailbox",
    "SubscriptionRegistry",
    "UndeliveredMessage",
    "discard",
    "mailbox_type",
    "named_mailbox",
    "subscribe_to",
    "unsubscribe_from",
]
