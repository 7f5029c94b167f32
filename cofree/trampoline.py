"""
Trampoline: lazy, stack-safe computation values.

A ``Trampoline`` describes a computation without running it. ``map`` and
``flat_map`` only build new descriptions; ``value()`` drives evaluation in a
single loop with an explicit continuation list, so evaluating a chain of any
length (or any nesting of ``defer``) uses a constant number of Python frames.

Node types:
    Now      already resolved value
    Later    thunk run on first force, result cached
    Always   thunk re-run on every force
    Defer    thunk producing another Trampoline
    FlatMap  source trampoline plus continuation
    Memoize  source trampoline whose result is cached on first force
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from cofree.errors import TrampolineContractError
from cofree.typeclasses import Monad
from cofree.utils import DEBUG_TRAMPOLINE

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass
class EvaluationStats:
    """
    Counters collected while forcing a trampoline.

    All updates are O(1) increments inside the evaluation loop.
    """

    # One per loop iteration
    steps: int = 0

    # Thunks executed (Later, Always and Defer)
    thunks_run: int = 0

    # High-water mark of the continuation list
    max_pending_continuations: int = 0


class Trampoline(ABC, Generic[T]):
    """A deferred computation whose evaluation never grows the call stack."""

    __slots__ = ()

    @staticmethod
    def now(value: T) -> Trampoline[T]:
        """An already evaluated trampoline."""
        return Now(value)

    @staticmethod
    def later(thunk: Callable[[], T]) -> Trampoline[T]:
        """Run ``thunk`` on first force and cache its result."""
        return Later(thunk)

    @staticmethod
    def always(thunk: Callable[[], T]) -> Trampoline[T]:
        """Run ``thunk`` on every force."""
        return Always(thunk)

    @staticmethod
    def defer(thunk: Callable[[], Trampoline[T]]) -> Trampoline[T]:
        """Suspend the construction of a trampoline until it is forced."""
        return Defer(thunk)

    @staticmethod
    def unit() -> Trampoline[None]:
        return _UNIT

    def map(self, f: Callable[[T], U]) -> Trampoline[U]:
        return FlatMap(self, lambda value: Now(f(value)))

    def flat_map(self, f: Callable[[T], Trampoline[U]]) -> Trampoline[U]:
        return FlatMap(self, f)

    def map2(self, other: Trampoline[U], f: Callable[[T, U], V]) -> Trampoline[V]:
        return self.flat_map(lambda a: other.map(lambda b: f(a, b)))

    def memoize(self) -> Trampoline[T]:
        """Return a trampoline that evaluates ``self`` at most once."""
        if isinstance(self, (Now, Later, Memoize)):
            return self
        return Memoize(self)

    def value(self, stats: EvaluationStats | None = None) -> T:
        """
        Evaluate the computation.

        Exceptions raised by thunks or continuations propagate unchanged.
        Pass ``stats`` to collect evaluation counters; with ``COFREE_DEBUG``
        set, counters are always collected and logged.
        """
        log_stats = False
        if stats is None and DEBUG_TRAMPOLINE:
            stats = EvaluationStats()
            log_stats = True

        current: Trampoline[Any] = self
        continuations: list[Callable[[Any], Trampoline[Any]]] = []
        while True:
            if stats is not None:
                stats.steps += 1

            if isinstance(current, FlatMap):
                continuations.append(current.continuation)
                if stats is not None and len(continuations) > stats.max_pending_continuations:
                    stats.max_pending_continuations = len(continuations)
                current = current.source
                continue

            if isinstance(current, Defer):
                if stats is not None:
                    stats.thunks_run += 1
                current = _expect_trampoline(current.thunk(), "Trampoline.defer thunk")
                continue

            if isinstance(current, Memoize):
                if not current.is_evaluated:
                    continuations.append(current._store)
                    if stats is not None and len(continuations) > stats.max_pending_continuations:
                        stats.max_pending_continuations = len(continuations)
                    current = current._source
                    continue
                result = current._result
            else:
                if stats is not None and not isinstance(current, Now):
                    stats.thunks_run += 1
                result = current._resolve()

            if not continuations:
                if log_stats:
                    logger.debug("Trampoline evaluated: %s", stats)
                return result
            current = _expect_trampoline(
                continuations.pop()(result), "Trampoline.flat_map continuation"
            )

    force = value


def _expect_trampoline(produced: Any, origin: str) -> Trampoline[Any]:
    if not isinstance(produced, Trampoline):
        raise TrampolineContractError(produced, origin)
    return produced


class _Leaf(Trampoline[T]):
    """A node the evaluation loop resolves directly to a value."""

    __slots__ = ()

    @abstractmethod
    def _resolve(self) -> T: ...


@dataclass(frozen=True)
class Now(_Leaf[T]):
    result: T

    def _resolve(self) -> T:
        return self.result


class Later(_Leaf[T]):
    """Memoizing leaf: the thunk is released once its result is cached."""

    __slots__ = ("_thunk", "_result")

    def __init__(self, thunk: Callable[[], T]) -> None:
        self._thunk: Callable[[], T] | None = thunk
        self._result: Any = _UNSET

    @property
    def is_evaluated(self) -> bool:
        return self._result is not _UNSET

    def _resolve(self) -> T:
        if self._result is _UNSET:
            thunk = self._thunk
            self._result = thunk()
            self._thunk = None
        return self._result

    def __repr__(self) -> str:
        if self.is_evaluated:
            return f"Later(evaluated={self._result!r})"
        return "Later(<pending>)"


@dataclass(frozen=True, eq=False)
class Always(_Leaf[T]):
    thunk: Callable[[], T]

    def _resolve(self) -> T:
        return self.thunk()


class Memoize(Trampoline[T]):
    """
    Caches the result of ``source`` the first time it is forced.

    The evaluation loop pushes ``_store`` as a continuation and carries on
    with ``source``; ``source`` is released once the result is cached.
    """

    __slots__ = ("_source", "_result")

    def __init__(self, source: Trampoline[T]) -> None:
        self._source: Trampoline[T] | None = source
        self._result: Any = _UNSET

    @property
    def is_evaluated(self) -> bool:
        return self._result is not _UNSET

    def _store(self, result: T) -> Trampoline[T]:
        self._result = result
        self._source = None
        return Now(result)

    def __repr__(self) -> str:
        if self.is_evaluated:
            return f"Memoize(evaluated={self._result!r})"
        return "Memoize(<pending>)"


@dataclass(frozen=True, eq=False)
class Defer(Trampoline[T]):
    thunk: Callable[[], Trampoline[T]]


@dataclass(frozen=True, eq=False)
class FlatMap(Trampoline[U]):
    source: Trampoline[Any]
    continuation: Callable[[Any], Trampoline[U]]


_UNIT = Now(None)


class TrampolineMonad(Monad):
    """``Trampoline`` as a Monad; also usable as a lazy branching shape."""

    def pure(self, value):
        return Now(value)

    def flat_map(self, ma, f):
        return ma.flat_map(f)

    def map(self, fa, f):
        return fa.map(f)

    def map2(self, fa, fb, f):
        return fa.map2(fb, f)

    def __repr__(self) -> str:
        return "TrampolineMonad()"


TRAMPOLINE_MONAD = TrampolineMonad()


__all__ = [
    "Always",
    "Defer",
    "EvaluationStats",
    "FlatMap",
    "Later",
    "Memoize",
    "Now",
    "TRAMPOLINE_MONAD",
    "Trampoline",
    "TrampolineMonad",
]
