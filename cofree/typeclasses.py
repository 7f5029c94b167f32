"""
Capability interfaces for the cofree system.

Python has no higher-kinded types, so every container-polymorphic operation
takes the capability it needs as an explicit argument: a stateless object
bundling the operations for one concrete container type. ``Cofree`` stores
its ``Functor``; folds receive a ``Traverse`` and, for ``cata_m``, a
``Monad`` plus a ``NaturalTransformation`` lifting trampolines into it.

Instances must be pure: they never mutate their arguments and return equal
results for equal inputs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from cofree.utils import identity

if TYPE_CHECKING:
    from cofree.trampoline import Trampoline

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


class Functor(ABC):
    """Structure-preserving ``map`` for a container type ``F``."""

    @abstractmethod
    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        """Apply ``f`` to every element of ``fa``, returning a new ``F``."""


class Monad(Functor):
    """
    ``pure`` and ``flat_map`` for an effect type ``M``.

    ``map``, ``map2`` and ``flatten`` are derived and may be overridden with
    cheaper versions.
    """

    @abstractmethod
    def pure(self, value: Any) -> Any:
        """Lift a plain value into ``M``."""

    @abstractmethod
    def flat_map(self, ma: Any, f: Callable[[Any], Any]) -> Any:
        """Sequence ``ma`` with a function producing the next ``M``."""

    def map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        return self.flat_map(fa, lambda a: self.pure(f(a)))

    def map2(self, fa: Any, fb: Any, f: Callable[[Any, Any], Any]) -> Any:
        """Combine two effects left to right."""
        return self.flat_map(fa, lambda a: self.map(fb, lambda b: f(a, b)))

    def flatten(self, mma: Any) -> Any:
        return self.flat_map(mma, identity)


class Traverse(Functor):
    """A ``Functor`` whose elements can be visited inside an applicative effect."""

    @abstractmethod
    def traverse(self, fa: Any, f: Callable[[Any], Any], applicative: Monad) -> Any:
        """
        Map each element of ``fa`` to an effect and collect the results.

        Turns ``F[A]`` and ``A -> G[B]`` into ``G[F[B]]``. Elements must be
        visited exactly once, in the container's own order.
        """

    def sequence(self, fga: Any, applicative: Monad) -> Any:
        """Turn ``F[G[A]]`` into ``G[F[A]]``."""
        return self.traverse(fga, identity, applicative)


class Monoid(ABC):
    """Associative ``combine`` with an identity ``empty``."""

    @abstractmethod
    def empty(self) -> Any: ...

    @abstractmethod
    def combine(self, x: Any, y: Any) -> Any: ...


class Bifoldable(ABC):
    """Folds over a container with two element types (``P[A, B]``)."""

    @abstractmethod
    def bifold_left(
        self,
        fab: Any,
        c: C,
        f: Callable[[C, Any], C],
        g: Callable[[C, Any], C],
    ) -> C:
        """Strict left fold; ``f`` handles ``A`` elements, ``g`` handles ``B`` elements."""

    @abstractmethod
    def bifold_right(
        self,
        fab: Any,
        lc: Trampoline[C],
        f: Callable[[Any, Trampoline[C]], Trampoline[C]],
        g: Callable[[Any, Trampoline[C]], Trampoline[C]],
    ) -> Trampoline[C]:
        """Lazy right fold with a trampolined accumulator."""

    def bifold_map(
        self,
        fab: Any,
        f: Callable[[Any], Any],
        g: Callable[[Any], Any],
        monoid: Monoid,
    ) -> Any:
        return self.bifold_left(
            fab,
            monoid.empty(),
            lambda c, a: monoid.combine(c, f(a)),
            lambda c, b: monoid.combine(c, g(b)),
        )

    def compose(self, inner: Bifoldable) -> ComposedBifoldable:
        """Fold ``P[Q[A, B], Q[A, B]]`` where ``inner`` folds ``Q``."""
        return ComposedBifoldable(self, inner)


@dataclass(frozen=True)
class ComposedBifoldable(Bifoldable):
    """Bifoldable over an outer shape whose both sides hold an inner shape."""

    outer: Bifoldable
    inner: Bifoldable

    def bifold_left(self, fab, c, f, g):
        def fold_inner(acc, gab):
            return self.inner.bifold_left(gab, acc, f, g)

        return self.outer.bifold_left(fab, c, fold_inner, fold_inner)

    def bifold_right(self, fab, lc, f, g):
        def fold_inner(gab, lacc):
            return self.inner.bifold_right(gab, lacc, f, g)

        return self.outer.bifold_right(fab, lc, fold_inner, fold_inner)


class NaturalTransformation(ABC, Generic[A]):
    """
    Conversion ``F[A] -> G[A]`` that behaves the same for every ``A``.

    Implementations must not inspect or alter the elements, only the shape
    around them.
    """

    @abstractmethod
    def __call__(self, fa: Any) -> Any: ...

    def and_then(self, other: NaturalTransformation) -> NaturalTransformation:
        """Apply ``self`` first, then ``other``."""
        return _Composed(self, other)


@dataclass(frozen=True)
class _Composed(NaturalTransformation):
    first: NaturalTransformation
    second: NaturalTransformation

    def __call__(self, fa):
        return self.second(self.first(fa))


@dataclass(frozen=True)
class _FunctionNaturalTransformation(NaturalTransformation):
    func: Callable[[Any], Any]

    def __call__(self, fa):
        return self.func(fa)


def natural(func: Callable[[Any], Any]) -> NaturalTransformation:
    """Wrap a shape-only function as a ``NaturalTransformation``."""
    return _FunctionNaturalTransformation(func)


__all__ = [
    "Bifoldable",
    "ComposedBifoldable",
    "Functor",
    "Monad",
    "Monoid",
    "NaturalTransformation",
    "Traverse",
    "natural",
]
