"""
Reference capability instances.

These cover the shapes most trees need (optional child, sequence of
children, lazily produced child), the "absent or present, evaluated by a
trampoline" effect used with ``cata_m``, and folding ``Either``. Any other
container can be plugged in by implementing the interfaces in
``cofree.typeclasses``.
"""

from __future__ import annotations

from cofree._vendor import NOTHING, Either, Maybe, Some
from cofree.trampoline import TRAMPOLINE_MONAD, Trampoline, TrampolineMonad
from cofree.typeclasses import Bifoldable, Monad, Monoid, Traverse, natural


class MaybeTraverse(Traverse):
    """``Maybe`` as the branching shape: zero or one child."""

    def map(self, fa: Maybe, f):
        return fa.map(f)

    def traverse(self, fa: Maybe, f, applicative: Monad):
        if isinstance(fa, Some):
            return applicative.map(f(fa.value), Some)
        return applicative.pure(NOTHING)

    def __repr__(self) -> str:
        return "MaybeTraverse()"


class SequenceTraverse(Traverse):
    """Any finite sequence as the branching shape; results are tuples."""

    def map(self, fa, f):
        return tuple(f(item) for item in fa)

    def traverse(self, fa, f, applicative: Monad):
        # Results are consed as (rest, value) pairs and unwound once at the end.
        collected = applicative.pure(None)
        for item in fa:
            collected = applicative.map2(collected, f(item), lambda rest, value: (rest, value))
        return applicative.map(collected, _unwind)

    def __repr__(self) -> str:
        return "SequenceTraverse()"


def _unwind(consed) -> tuple:
    values = []
    while consed is not None:
        consed, value = consed
        values.append(value)
    values.reverse()
    return tuple(values)


class TrampolineMaybeMonad(Monad):
    """
    ``Maybe`` layered over ``Trampoline``: values are ``Trampoline[Maybe[A]]``.

    Binding an absent value skips the continuation entirely, so an absent
    result short-circuits every later step.
    """

    def pure(self, value):
        return Trampoline.now(Some(value))

    def none(self):
        return Trampoline.now(NOTHING)

    def flat_map(self, ma, f):
        def bind(opt):
            if isinstance(opt, Some):
                return f(opt.value)
            return Trampoline.now(NOTHING)

        return ma.flat_map(bind)

    def map(self, fa, f):
        return fa.map(lambda opt: opt.map(f))

    def __repr__(self) -> str:
        return "TrampolineMaybeMonad()"


class EitherBifoldable(Bifoldable):
    def bifold_left(self, fab: Either, c, f, g):
        return fab.fold(lambda a: f(c, a), lambda b: g(c, b))

    def bifold_right(self, fab: Either, lc, f, g):
        return fab.fold(lambda a: f(a, lc), lambda b: g(b, lc))

    def __repr__(self) -> str:
        return "EitherBifoldable()"


class TupleMonoid(Monoid):
    def empty(self):
        return ()

    def combine(self, x, y):
        return tuple(x) + tuple(y)


MAYBE_TRAVERSE = MaybeTraverse()
SEQUENCE_TRAVERSE = SequenceTraverse()
TRAMPOLINE_MAYBE = TrampolineMaybeMonad()
EITHER_BIFOLDABLE = EitherBifoldable()
TUPLE_MONOID = TupleMonoid()

# Trampoline[A] -> Trampoline[Maybe[A]], the inclusion used by cata_m.
lift_trampoline = natural(lambda fa: fa.map(Some))

# Maybe[A] -> tuple[A, ...]
maybe_to_sequence = natural(lambda fa: fa.fold(tuple, lambda value: (value,)))


__all__ = [
    "EITHER_BIFOLDABLE",
    "EitherBifoldable",
    "MAYBE_TRAVERSE",
    "MaybeTraverse",
    "SEQUENCE_TRAVERSE",
    "SequenceTraverse",
    "TRAMPOLINE_MAYBE",
    "TRAMPOLINE_MONAD",
    "TUPLE_MONOID",
    "TrampolineMaybeMonad",
    "TrampolineMonad",
    "TupleMonoid",
    "lift_trampoline",
    "maybe_to_sequence",
]
