"""Tests for causal ordering of message types."""

from magicbus.core.hierarchy import compare_types, is_strict_subtype, order_by_hierarchy

from sample_messages import Auditable, AuditedOrderPlaced, BaseEvent, OrderEvent, OrderPlaced


class TestCompareTypes:
    def test_subtype_sorts_after_supertype(self) -> None:
        assert compare_types(OrderPlaced, BaseEvent) == 1
        assert compare_types(BaseEvent, OrderPlaced) == -1

    def test_same_type_ties(self) -> None:
        assert compare_types(OrderEvent, OrderEvent) == 0

    def test_unrelated_types_tie(self) -> None:
        assert compare_types(Auditable, OrderPlaced) == 0
        assert compare_types(OrderPlaced, Auditable) == 0

    def test_strict_subtype(self) -> None:
        assert is_strict_subtype(OrderPlaced, OrderEvent)
        assert not is_strict_subtype(OrderEvent, OrderEvent)
        assert not is_strict_subtype(OrderEvent, OrderPlaced)


class TestOrderByHierarchy:
    def test_chain_is_ancestors_first(self) -> None:
        ordered = order_by_hierarchy([OrderPlaced, BaseEvent, OrderEvent])
        assert ordered == [BaseEvent, OrderEvent, OrderPlaced]

    def test_already_ordered_is_unchanged(self) -> None:
        ordered = order_by_hierarchy([BaseEvent, OrderEvent, OrderPlaced])
        assert ordered == [BaseEvent, OrderEvent, OrderPlaced]

    def test_unrelated_types_keep_input_order(self) -> None:
        assert order_by_hierarchy([Auditable, BaseEvent]) == [Auditable, BaseEvent]
        assert order_by_hierarchy([BaseEvent, Auditable]) == [BaseEvent, Auditable]

    def test_ancestor_not_stranded_behind_unrelated_type(self) -> None:
        """A comparison sort would leave BaseEvent after OrderPlaced here."""
        ordered = order_by_hierarchy([OrderPlaced, Auditable, BaseEvent])

        assert ordered.index(BaseEvent) < ordered.index(OrderPlaced)
        assert set(ordered) == {OrderPlaced, Auditable, BaseEvent}

    def test_mixed_hierarchies(self) -> None:
        ordered = order_by_hierarchy(
            [AuditedOrderPlaced, OrderEvent, Auditable, BaseEvent, OrderPlaced]
        )

        assert ordered.index(BaseEvent) < ordered.index(OrderEvent)
        assert ordered.index(OrderEvent) < ordered.index(OrderPlaced)
        assert ordered.index(OrderPlaced) < ordered.index(AuditedOrderPlaced)
        assert ordered.index(Auditable) < ordered.index(AuditedOrderPlaced)

    def test_custom_subtype_check(self) -> None:
        # Reverse the hierarchy: subclasses now count as supertypes
        ordered = order_by_hierarchy(
            [BaseEvent, OrderPlaced],
            is_subtype=lambda a, b: issubclass(b, a),
        )
        assert ordered == [OrderPlaced, BaseEvent]

    def test_cyclic_subtype_check_terminates(self) -> None:
        cycle = {(BaseEvent, OrderEvent), (OrderEvent, Auditable), (Auditable, BaseEvent)}
        ordered = order_by_hierarchy(
            [BaseEvent, OrderEvent, Auditable],
            is_subtype=lambda a, b: a is b or (a, b) in cycle,
        )
        assert ordered == [BaseEvent, Auditable, OrderEvent]

    def test_empty(self) -> None:
        assert order_by_hierarchy([]) == []
