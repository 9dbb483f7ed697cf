"""
Mailboxes: the receiving end of the bus.

A mailbox is any one-argument callable.  Its return value is ignored.
Unsubscribing finds a mailbox with ``==``, so keep a reference to the
callable you subscribed: two equal-looking lambdas are different mailboxes,
while two bound methods of the same object and function are the same one.
"""

import inspect
from collections.abc import Callable
from typing import Any, TypeVar, get_type_hints

T = TypeVar("T")

Mailbox = Callable[[T], None]


class NamedMailbox:
    """A mailbox with a readable name, optionally tagged with its message type."""

    __slots__ = ("name", "receive", "message_type")

    def __init__(
        self,
        name: str,
        receive: Mailbox[Any],
        message_type: type | None = None,
    ) -> None:
        self.name = name
        self.receive = receive
        self.message_type = message_type

    def __call__(self, message: Any) -> None:
        self.receive(message)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return self.name


def named_mailbox(
    name: str,
    receive: Mailbox[Any],
    message_type: type | None = None,
) -> NamedMailbox:
    """Wrap ``receive`` so it prints as ``name``."""
    return NamedMailbox(name, receive, message_type)


def discard(message_type: type) -> NamedMailbox:
    """A mailbox which throws away messages of ``message_type``."""
    return NamedMailbox(
        f"DISCARD-MAILBOX<{message_type.__name__}>",
        lambda _message: None,
        message_type,
    )


def mailbox_type(mailbox: Mailbox[Any]) -> type:
    """
    Infer the message type a mailbox receives.

    Looks for a ``message_type`` attribute first (named and discard
    mailboxes carry one), then for a class annotation on the first
    positional parameter.

    Raises:
        TypeError: If no message type can be inferred
    """
    message_type = getattr(mailbox, "message_type", None)
    if isinstance(message_type, type):
        return message_type

    try:
        signature = inspect.signature(mailbox)
    except (TypeError, ValueError) as e:
        raise TypeError(f"Cannot inspect mailbox {mailbox!r}") from e

    params = [
        p
        for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if not params:
        raise TypeError(f"Mailbox {mailbox!r} takes no message argument")

    target = mailbox if inspect.isroutine(mailbox) else type(mailbox).__call__
    try:
        hints = get_type_hints(target)
    except NameError as e:
        raise TypeError(f"Cannot resolve annotations of {mailbox!r}") from e

    annotation = hints.get(params[0].name)
    if annotation is Any or not isinstance(annotation, type):
        raise TypeError(
            f"Mailbox {mailbox!r} needs a class annotation on '{params[0].name}' "
            "to infer its message type"
        )
    return annotation
