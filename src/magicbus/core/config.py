"""Configuration for the magic bus."""

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field


class BusConfig(BaseModel):
    """
    Tunable behavior of a MagicBus.

    fatal_errors are exception classes never wrapped in a FailedMessage;
    they propagate out of ``post``.  Anything that is not an ``Exception``
    (KeyboardInterrupt, SystemExit) always propagates regardless.

    is_subtype(subtype, supertype) decides whether a message of one type
    may be routed to mailboxes registered for another.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    fatal_errors: tuple[type[BaseException], ...] = Field(
        default=(MemoryError, RecursionError),
    )
    is_subtype: Callable[[type, type], bool] = issubclass

    def is_fatal(self, error: BaseException) -> bool:
        """Check if an error must propagate instead of being wrapped."""
        return not isinstance(error, Exception) or isinstance(error, self.fatal_errors)
