"""
Cofree: corecursive trees over a pluggable branching shape.

A ``Cofree`` node holds a ``head`` value and a trampolined ``tail`` that
produces the node's children wrapped in the branching shape ``F`` (for
example ``Maybe`` for a single optional child, a tuple for any number of
children, or ``Trampoline`` for a lazily produced single child). The
``functor`` stored on each node is the capability used to reach into ``F``.

Trees may be infinite. Only ``head`` and tails that have been forced are ever
materialized, and every whole-structure operation (``run``, ``walk``,
``cata``, ``cata_m``) is driven by a loop or by trampoline evaluation, so
depth never translates into Python stack frames.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from cofree.trampoline import TRAMPOLINE_MONAD, Trampoline
from cofree.typeclasses import Functor, Monad, NaturalTransformation, Traverse

A = TypeVar("A")
B = TypeVar("B")

logger = logging.getLogger(__name__)


def _children_of(functor: Functor, fa: Any) -> list[Cofree[Any]]:
    """Collect the nodes inside ``fa`` in the shape's own order."""
    found: list[Cofree[Any]] = []
    functor.map(fa, found.append)
    return found


@dataclass(frozen=True, eq=False)
class Cofree(Generic[A]):
    """
    A node of a corecursive tree.

    Attributes:
        functor: Branching capability for the shape of ``tail``'s result.
        head: The value stored at this node.
        tail: Trampoline producing ``F[Cofree[A]]``, the direct children.
    """

    functor: Functor
    head: A
    tail: Trampoline[Any]

    @classmethod
    def unfold(
        cls, seed: A, generator: Callable[[A], Any], functor: Functor
    ) -> Cofree[A]:
        return unfold(seed, generator, functor)

    # ------------------------------------------------------------------
    # Comonad
    # ------------------------------------------------------------------

    def extract(self) -> A:
        return self.head

    def map(self, f: Callable[[A], B]) -> Cofree[B]:
        """Apply ``f`` to every head, lazily below the root."""
        functor = self.functor
        return Cofree(
            functor,
            f(self.head),
            self.tail.map(lambda fa: functor.map(fa, lambda child: child.map(f))).memoize(),
        )

    def coflat_map(self, f: Callable[[Cofree[A]], B]) -> Cofree[B]:
        """Replace every head with ``f`` applied to the subtree rooted there."""
        functor = self.functor
        return Cofree(
            functor,
            f(self),
            self.tail.map(
                lambda fa: functor.map(fa, lambda child: child.coflat_map(f))
            ).memoize(),
        )

    def transform(
        self, f: Callable[[A], B], g: Callable[[Cofree[A]], Cofree[B]]
    ) -> Cofree[B]:
        """Map the head with ``f`` and each direct child with ``g``."""
        functor = self.functor
        return Cofree(functor, f(self.head), self.tail.map(lambda fa: functor.map(fa, g)))

    # ------------------------------------------------------------------
    # Descent
    # ------------------------------------------------------------------

    def tail_forced(self) -> Any:
        """Force one step and return the children, without going deeper."""
        return self.tail.value()

    def run_tail(self) -> Cofree[A]:
        """Same node, with its children already resolved."""
        return Cofree(self.functor, self.head, Trampoline.now(self.tail_forced()))

    def run(self) -> Cofree[A]:
        """
        Force every reachable tail and return this node fully resolved.

        Children are enumerated through the branching functor's ``map``. A
        lazy shape such as ``Trampoline`` never invokes the mapping function
        on force-free ``map``, so descent stops at the first such level.
        Strict shapes are walked to exhaustion; infinite strict trees do not
        terminate.
        """
        children = self.tail_forced()
        pending = _children_of(self.functor, children)
        visited = 1
        while pending:
            node = pending.pop()
            pending.extend(_children_of(node.functor, node.tail_forced()))
            visited += 1
        logger.debug("Cofree.run forced %d node(s) below head %r", visited, self.head)
        return Cofree(self.functor, self.head, Trampoline.now(children))

    def walk(self) -> Iterator[Cofree[A]]:
        """
        Yield nodes in pre-order, left to right.

        Each tail is forced only when the walk moves past its node.
        """
        pending: list[Cofree[Any]] = [self]
        while pending:
            node = pending.pop()
            yield node
            children = _children_of(node.functor, node.tail_forced())
            pending.extend(reversed(children))

    # ------------------------------------------------------------------
    # Branching-shape rewrites
    # ------------------------------------------------------------------

    def map_branching_root(self, nt: NaturalTransformation) -> Cofree[A]:
        """Rewrite the root's children shape; deeper levels are untouched."""
        return Cofree(self.functor, self.head, self.tail.map(nt))

    def map_branching_s(
        self, nt: NaturalTransformation, target: Functor
    ) -> Cofree[A]:
        """
        Rewrite every level from ``S`` to ``T``, recursing under the source shape.

        Children are rewritten with the source functor first, then ``nt``
        converts the shape.
        """
        source = self.functor

        def rewrite(fa):
            return nt(source.map(fa, lambda child: child.map_branching_s(nt, target)))

        return Cofree(target, self.head, self.tail.map(rewrite).memoize())

    def map_branching_t(
        self, nt: NaturalTransformation, target: Functor
    ) -> Cofree[A]:
        """
        Rewrite every level from ``S`` to ``T``, recursing under the target shape.

        ``nt`` converts the shape first, then children are rewritten with the
        target functor.
        """

        def rewrite(fa):
            return target.map(nt(fa), lambda child: child.map_branching_t(nt, target))

        return Cofree(target, self.head, self.tail.map(rewrite).memoize())

    # ------------------------------------------------------------------
    # Folds
    # ------------------------------------------------------------------

    def cata(
        self,
        algebra: Callable[[A, Any], Trampoline[B]],
        traverse: Traverse,
    ) -> Trampoline[B]:
        """
        Fold the tree bottom-up.

        For every node the children are folded first, ``traverse`` collects
        their results into ``F[B]`` inside a single trampoline, and
        ``algebra(head, F[B])`` produces the node's result. Each node is
        visited once and the algebra runs once per node, children before
        parents and siblings in the order ``traverse`` visits them.
        """

        def fold(node: Cofree[Any]) -> Trampoline[B]:
            folded_children = Trampoline.defer(
                lambda: traverse.traverse(
                    node.tail_forced(),
                    lambda child: Trampoline.defer(lambda: fold(child)),
                    TRAMPOLINE_MONAD,
                )
            )
            return folded_children.flat_map(lambda fb: algebra(node.head, fb))

        return fold(self)

    def cata_m(
        self,
        algebra: Callable[[A, Any], Any],
        inclusion: NaturalTransformation,
        traverse: Traverse,
        monad: Monad,
    ) -> Any:
        """
        Fold the tree bottom-up inside the effect ``M``.

        ``algebra(head, F[B])`` returns ``M[B]``; ``inclusion`` lifts a
        ``Trampoline[X]`` into ``M[X]`` so child folds can stay suspended.
        Sequencing goes through ``monad.flat_map``: when a node's algebra
        yields an absent/failed ``M``, no algebra above it is applied.
        Stack safety follows from ``M`` being evaluated by a trampoline.
        """

        def fold_child(child: Cofree[Any]) -> Any:
            return monad.flatten(inclusion(Trampoline.defer(lambda: loop(child))))

        def loop(node: Cofree[Any]) -> Trampoline[Any]:
            looped = traverse.traverse(node.tail_forced(), fold_child, monad)
            return Trampoline.now(monad.flat_map(looped, lambda fb: algebra(node.head, fb)))

        return monad.flatten(inclusion(Trampoline.defer(lambda: loop(self))))

    def __repr__(self) -> str:
        return f"Cofree(head={self.head!r}, tail={self.tail!r})"


def unfold(seed: A, generator: Callable[[A], Any], functor: Functor) -> Cofree[A]:
    """
    Build a tree from ``seed``.

    ``generator(seed)`` returns the next seeds in the branching shape; it is
    not called until the node's tail is forced, and at most once per node.
    """
    return Cofree(
        functor,
        seed,
        Trampoline.later(
            lambda: functor.map(generator(seed), lambda next_seed: unfold(next_seed, generator, functor))
        ),
    )


__all__ = ["Cofree", "unfold"]
