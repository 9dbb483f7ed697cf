"""
Well-known messages the bus posts about its own routing.

UndeliveredMessage is posted when nothing is subscribed to a message's type
or any of its supertypes.  FailedMessage is posted when a mailbox raises.
Both are ordinary messages: subscribe to them like any other type.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID


class UndeliveredMessage(BaseModel):
    """A message no mailbox was subscribed to receive."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(ULID()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    bus: Any  # The posting MagicBus
    message: Any

    def __str__(self) -> str:
        return f"UndeliveredMessage(message={self.message!r})"


class FailedMessage(BaseModel):
    """A mailbox raised while receiving a message."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    id: str = Field(default_factory=lambda: str(ULID()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    bus: Any  # The posting MagicBus
    mailbox: Callable[[Any], None]
    message: Any
    failure: Exception

    def __str__(self) -> str:
        return (
            f"FailedMessage(mailbox={self.mailbox!r}, "
            f"message={self.message!r}, failure={self.failure!r})"
        )
