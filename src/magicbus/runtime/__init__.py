"""Runtime helpers for applications embedding the bus."""

from magicbus.runtime.logging_config import configure_logging

__all__ = ["configure_logging"]
