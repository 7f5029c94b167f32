"""
cofree - Stack-safe corecursive structures and recursion schemes for Python.

Trees are built lazily with ``unfold`` over a pluggable branching shape and
consumed with ``run``, ``cata`` or ``cata_m``. Every whole-structure
operation is driven by a trampoline or an explicit loop, so depth never
exhausts the Python stack. Capabilities (Functor, Traverse, Monad, ...) are
passed as ordinary arguments.

Example:
    >>> from cofree import MAYBE_TRAVERSE, NOTHING, Some, Trampoline, unfold
    >>>
    >>> tree = unfold(0, lambda i: NOTHING if i == 3 else Some(i + 1), MAYBE_TRAVERSE)
    >>> tree.cata(
    ...     lambda head, rest: Trampoline.now((head,) + rest.unwrap_or(())),
    ...     MAYBE_TRAVERSE,
    ... ).value()
    (0, 1, 2, 3)
"""

from cofree._vendor import (
    NOTHING,
    Either,
    FrozenDict,
    Left,
    Maybe,
    Nothing,
    Right,
    Some,
)
from cofree.cobinding import (
    CobindingFunction,
    CofreeComonad,
    cobinding,
    pull_sequence,
)
from cofree.cofree import Cofree, unfold
from cofree.errors import CobindingError, CofreeError, TrampolineContractError
from cofree.instances import (
    EITHER_BIFOLDABLE,
    MAYBE_TRAVERSE,
    SEQUENCE_TRAVERSE,
    TRAMPOLINE_MAYBE,
    TUPLE_MONOID,
    EitherBifoldable,
    MaybeTraverse,
    SequenceTraverse,
    TrampolineMaybeMonad,
    TupleMonoid,
    lift_trampoline,
    maybe_to_sequence,
)
from cofree.trampoline import (
    TRAMPOLINE_MONAD,
    EvaluationStats,
    Trampoline,
    TrampolineMonad,
)
from cofree.typeclasses import (
    Bifoldable,
    ComposedBifoldable,
    Functor,
    Monad,
    Monoid,
    NaturalTransformation,
    Traverse,
    natural,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Cofree",
    "unfold",
    "Trampoline",
    "EvaluationStats",
    # Capabilities
    "Bifoldable",
    "ComposedBifoldable",
    "Functor",
    "Monad",
    "Monoid",
    "NaturalTransformation",
    "Traverse",
    "natural",
    # Cobinding
    "CobindingFunction",
    "CofreeComonad",
    "cobinding",
    "pull_sequence",
    # Instances
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
    # Vendored types
    "NOTHING",
    "Either",
    "FrozenDict",
    "Left",
    "Maybe",
    "Nothing",
    "Right",
    "Some",
    # Errors
    "CobindingError",
    "CofreeError",
    "TrampolineContractError",
]
