"""
Ordering of message types by their class hierarchy.

Mailboxes for a supertype receive a message before mailboxes for its
subtypes ("causal" order), so general handlers see a message before the
specialized ones.  Types with no subtype relation keep the order in which
they were first subscribed.
"""

from collections.abc import Callable, Iterable

SubtypeCheck = Callable[[type, type], bool]


def is_strict_subtype(a: type, b: type, is_subtype: SubtypeCheck = issubclass) -> bool:
    """Check if ``a`` is a subtype of ``b`` but not the other way round."""
    return is_subtype(a, b) and not is_subtype(b, a)


def compare_types(a: type, b: type, is_subtype: SubtypeCheck = issubclass) -> int:
    """
    Compare two types for causal ordering.

    Returns 1 when ``a`` is a subtype of ``b`` (a sorts after b), -1 when
    ``a`` is a supertype of ``b``, and 0 when neither (or both) hold.
    """
    return int(is_subtype(a, b)) - int(is_subtype(b, a))


def order_by_hierarchy(
    types: Iterable[type],
    is_subtype: SubtypeCheck = issubclass,
) -> list[type]:
    """
    Order types so that every supertype precedes its subtypes.

    Only pass types that are all compatible with one message type; comparing
    unrelated types carries no meaning.  Ties keep input order.  This is a
    stable topological sort rather than ``sorted`` with ``compare_types``:
    "incomparable" is not transitive, so a comparison sort may leave an
    ancestor behind an unrelated sibling.
    """
    remaining = list(types)
    ordered: list[type] = []

    while remaining:
        for index, candidate in enumerate(remaining):
            if not any(
                is_strict_subtype(candidate, other, is_subtype)
                for other in remaining
                if other is not candidate
            ):
                break
        else:
            # Cyclic subtype relation; fall back to input order
            index = 0
        ordered.append(remaining.pop(index))

    return ordered
