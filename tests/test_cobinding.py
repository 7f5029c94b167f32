"""Tests for cobinding blocks and the Cofree comonad capability."""

from __future__ import annotations

import pytest

from cofree import (
    MAYBE_TRAVERSE,
    NOTHING,
    CobindingError,
    CofreeComonad,
    FrozenDict,
    Some,
    Trampoline,
    cobinding,
    pull_sequence,
    unfold,
)
from tests.conftest import counting_chain, heads


def test_cofree_should_cobind_correctly(side_effect):
    offset = 0
    limit = 10

    @cobinding
    def stack_safe_program(loops):
        def generator(i):
            loops.increment()
            return NOTHING if i == limit else Some(i + 1)

        program = unfold(offset, generator, MAYBE_TRAVERSE)
        value = yield program.run()
        tail = yield program.run_tail()
        return value + tail

    assert stack_safe_program(side_effect) == 0
    assert side_effect.counter == limit + 1


def test_pulls_happen_in_program_order():
    order = []

    def tracked(tag):
        def thunk():
            order.append(tag)
            return tag
        return Trampoline.always(thunk)

    @cobinding
    def program():
        first = yield tracked("a")
        order.append(f"after {first}")
        second = yield tracked("b")
        return first + second

    assert program() == "ab"
    assert order == ["a", "after a", "b"]


def test_pull_forces_only_what_is_yielded(side_effect):
    @cobinding
    def program():
        tree = counting_chain(side_effect, 5)
        head = yield tree.run_tail()
        return head

    assert program() == 0
    assert side_effect.counter == 1


def test_deep_tree_pull_is_stack_safe(side_effect):
    @cobinding
    def program():
        tree = counting_chain(side_effect, 10_000)
        return (yield tree.run())

    assert program() == 0
    assert side_effect.counter == 10_001


def test_cobinding_rejects_unpullable_values():
    @cobinding
    def program():
        yield 42

    with pytest.raises(CobindingError) as exc_info:
        program()
    assert exc_info.value.pulled == 42
    assert exc_info.value.step == 0


def test_plain_function_result_is_returned():
    @cobinding
    def not_a_generator(x):
        return x * 2

    assert not_a_generator(4) == 8


def test_cobinding_preserves_metadata():
    @cobinding
    def documented():
        """Docs."""
        return (yield Trampoline.now(1))

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docs."


def test_cobinding_as_method():
    class Holder:
        def __init__(self, start):
            self.start = start

        @cobinding
        def doubled_head(self):
            head = yield unfold(self.start, lambda i: NOTHING, MAYBE_TRAVERSE)
            return head * 2

    assert Holder(21).doubled_head() == 42
    assert Holder(21).doubled_head.__name__ == "doubled_head"
    assert Holder.doubled_head.__name__ == "doubled_head"


class TestPullSequence:
    def test_values_are_threaded_through_environment(self, start_hundred):
        seen = []

        def combine(env):
            seen.append(env)
            return env["root"] + env["next"] + env["sum"]

        result = pull_sequence(
            [
                ("root", lambda env: start_hundred.run()),
                ("next", lambda env: start_hundred.tail_forced().value),
                ("sum", lambda env: Trampoline.later(lambda: env["root"] + env["next"] + 10)),
            ],
            combine,
        )
        assert result == 0 + 1 + 11
        assert isinstance(seen[0], FrozenDict)
        assert list(seen[0]) == ["root", "next", "sum"]

    def test_step_name_reported_on_error(self):
        with pytest.raises(CobindingError) as exc_info:
            pull_sequence([("bad", lambda env: "nope")], lambda env: env)
        assert exc_info.value.step == "bad"


class TestCofreeComonad:
    comonad = CofreeComonad(MAYBE_TRAVERSE)

    def test_unfold_uses_functor(self):
        tree = self.comonad.unfold(0, lambda i: NOTHING if i == 3 else Some(i + 1))
        assert tree.functor is MAYBE_TRAVERSE
        assert heads(tree) == [0, 1, 2, 3]

    def test_extract_map_coflat_map(self, start_hundred):
        assert self.comonad.extract(start_hundred) == 0
        assert self.comonad.extract(self.comonad.map(start_hundred, lambda x: x + 1)) == 1
        depth = self.comonad.coflat_map(start_hundred, lambda node: node.head * 10)
        assert heads(depth)[:3] == [0, 10, 20]

    def test_cobinding_through_capability(self, start_hundred):
        @self.comonad.cobinding
        def program():
            a = yield start_hundred
            b = yield start_hundred.tail_forced().value
            return a + b

        assert program() == 1
