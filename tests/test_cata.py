"""Tests for catamorphisms (cata / cata_m)."""

from __future__ import annotations

import pytest

from cofree import (
    MAYBE_TRAVERSE,
    NOTHING,
    SEQUENCE_TRAVERSE,
    TRAMPOLINE_MAYBE,
    Cofree,
    Some,
    Trampoline,
    lift_trampoline,
    unfold,
)
from tests.conftest import counting_chain


def prepend_head(head, rest):
    return Trampoline.now((head,) + rest.unwrap_or(()))


def binary_tree(size: int) -> Cofree[int]:
    return unfold(
        0,
        lambda i: (2 * i + 1, 2 * i + 2) if 2 * i + 2 < size else (),
        SEQUENCE_TRAVERSE,
    )


class TestCata:
    def test_cata_collects_heads_in_order(self, start_hundred):
        result = start_hundred.cata(prepend_head, MAYBE_TRAVERSE).value()
        assert result == tuple(range(101))

    def test_cata_is_lazy_until_forced(self, side_effect):
        tree = counting_chain(side_effect, 5)
        folded = tree.cata(prepend_head, MAYBE_TRAVERSE)
        assert side_effect.counter == 0
        assert folded.value() == (0, 1, 2, 3, 4, 5)
        assert side_effect.counter == 6

    def test_cata_applies_algebra_once_per_node_bottom_up(self):
        applied = []

        def algebra(head, children):
            applied.append(head)
            return Trampoline.now(head + sum(children))

        total = binary_tree(7).cata(algebra, SEQUENCE_TRAVERSE).value()
        assert total == sum(range(7))
        assert applied == [3, 4, 1, 5, 6, 2, 0]

    def test_cata_over_sequence_preserves_child_order(self):
        def algebra(head, children):
            flattened = tuple(item for child in children for item in child)
            return Trampoline.now((head,) + flattened)

        assert binary_tree(7).cata(algebra, SEQUENCE_TRAVERSE).value() == (0, 1, 3, 4, 2, 5, 6)

    def test_cata_is_stack_safe(self):
        depth = 10_000
        tree = unfold(0, lambda i: NOTHING if i == depth else Some(i + 1), MAYBE_TRAVERSE)

        count = tree.cata(
            lambda head, rest: Trampoline.now(1 + rest.unwrap_or(0)),
            MAYBE_TRAVERSE,
        ).value()
        assert count == depth + 1

    def test_cata_propagates_algebra_errors(self, start_hundred):
        def algebra(head, rest):
            if head == 50:
                raise ValueError("bad node")
            return prepend_head(head, rest)

        with pytest.raises(ValueError, match="bad node"):
            start_hundred.cata(algebra, MAYBE_TRAVERSE).value()


def bounded_folder(limit: int, calls: list | None = None):
    def folder(head, rest):
        if calls is not None:
            calls.append(head)
        if head <= limit:
            return TRAMPOLINE_MAYBE.pure((head,) + rest.unwrap_or(()))
        return TRAMPOLINE_MAYBE.none()

    return folder


class TestCataM:
    def test_cata_m_succeeds_when_every_node_succeeds(self, start_hundred):
        result = start_hundred.cata_m(
            bounded_folder(100), lift_trampoline, MAYBE_TRAVERSE, TRAMPOLINE_MAYBE
        ).value()
        assert result == Some(tuple(range(101)))

    def test_cata_m_absent_at_root(self, start_hundred):
        extended = Cofree(MAYBE_TRAVERSE, 101, Trampoline.now(Some(start_hundred)))
        result = extended.cata_m(
            bounded_folder(100), lift_trampoline, MAYBE_TRAVERSE, TRAMPOLINE_MAYBE
        ).value()
        assert result is NOTHING

    def test_cata_m_short_circuits_algebra_above_absent_node(self):
        calls: list[int] = []
        tree = unfold(0, lambda i: NOTHING if i == 200 else Some(i + 1), MAYBE_TRAVERSE)

        def folder(head, rest):
            calls.append(head)
            if head == 150:
                return TRAMPOLINE_MAYBE.none()
            return TRAMPOLINE_MAYBE.pure(head)

        result = tree.cata_m(folder, lift_trampoline, MAYBE_TRAVERSE, TRAMPOLINE_MAYBE).value()
        assert result is NOTHING
        assert calls == list(range(200, 149, -1))

    def test_cata_m_is_stack_safe(self):
        depth = 10_000
        tree = unfold(0, lambda i: NOTHING if i == depth else Some(i + 1), MAYBE_TRAVERSE)

        result = tree.cata_m(
            lambda head, rest: TRAMPOLINE_MAYBE.pure(1 + rest.unwrap_or(0)),
            lift_trampoline,
            MAYBE_TRAVERSE,
            TRAMPOLINE_MAYBE,
        ).value()
        assert result == Some(depth + 1)

    def test_cata_m_over_sequence_shape(self):
        result = binary_tree(7).cata_m(
            lambda head, children: TRAMPOLINE_MAYBE.pure(head + sum(children)),
            lift_trampoline,
            SEQUENCE_TRAVERSE,
            TRAMPOLINE_MAYBE,
        ).value()
        assert result == Some(21)
