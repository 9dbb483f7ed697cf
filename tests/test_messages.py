"""Tests for routing messages and bus configuration."""

import pytest
from pydantic import ValidationError

from magicbus import BusConfig, FailedMessage, MagicBus, UndeliveredMessage


class TestUndeliveredMessage:
    def test_create(self) -> None:
        bus = MagicBus()
        undelivered = UndeliveredMessage(bus=bus, message="hello")

        assert undelivered.bus is bus
        assert undelivered.message == "hello"
        assert undelivered.id is not None
        assert str(undelivered) == "UndeliveredMessage(message='hello')"

    def test_frozen(self) -> None:
        undelivered = UndeliveredMessage(bus=MagicBus(), message=1)

        with pytest.raises(ValidationError):
            undelivered.message = 2  # type: ignore[misc]

    def test_requires_message(self) -> None:
        with pytest.raises(ValidationError):
            UndeliveredMessage(bus=MagicBus())  # type: ignore[call-arg]


class TestFailedMessage:
    def test_create(self) -> None:
        bus = MagicBus()
        error = ValueError("bad")

        def mailbox(message: str) -> None:
            raise error

        failed = FailedMessage(bus=bus, mailbox=mailbox, message="m", failure=error)

        assert failed.mailbox == mailbox
        assert failed.failure is error
        assert "failure=ValueError('bad')" in str(failed)

    def test_mailbox_must_be_callable(self) -> None:
        with pytest.raises(ValidationError):
            FailedMessage(bus=MagicBus(), mailbox="nope", message="m", failure=ValueError())

    def test_failure_must_be_exception(self) -> None:
        with pytest.raises(ValidationError):
            FailedMessage(bus=MagicBus(), mailbox=print, message="m", failure="oops")


class TestBusConfig:
    def test_defaults_classify_fatal(self) -> None:
        config = BusConfig()

        assert config.is_fatal(MemoryError())
        assert config.is_fatal(RecursionError())
        assert config.is_fatal(KeyboardInterrupt())
        assert config.is_fatal(SystemExit())
        assert not config.is_fatal(ValueError())
        assert not config.is_fatal(RuntimeError())

    def test_custom_fatal_errors(self) -> None:
        config = BusConfig(fatal_errors=(LookupError,))

        assert config.is_fatal(KeyError())
        assert not config.is_fatal(MemoryError())

    def test_frozen(self) -> None:
        config = BusConfig()

        with pytest.raises(ValidationError):
            config.fatal_errors = ()  # type: ignore[misc]

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            BusConfig(max_depth=10)  # type: ignore[call-arg]
