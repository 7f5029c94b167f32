"""
Comonadic binding for the cofree system.

``cobinding`` turns a generator function into a block where
``value = yield tree`` pulls the head of a ``Cofree`` (or the value of a
``Trampoline``). Pulls happen in program order, synchronously, and force
exactly what the yielded expression asks for (``tree.run()``,
``tree.run_tail()``, ...). The generator's return value is the result.

``pull_sequence`` is the same thing without generator syntax: an ordered
list of named pulls, each seeing the values pulled before it.
"""

from __future__ import annotations

import inspect
import logging
import types
from collections.abc import Callable, Generator, Mapping, Sequence
from functools import wraps
from typing import Any, Generic, ParamSpec, TypeVar

from cofree._vendor import FrozenDict
from cofree.cofree import Cofree, unfold
from cofree.errors import CobindingError
from cofree.trampoline import Trampoline
from cofree.typeclasses import Functor

P = ParamSpec("P")
T = TypeVar("T")

logger = logging.getLogger(__name__)

CobindingGenerator = Generator[Any, Any, T]


def _pull(source: Any, step: str | int) -> Any:
    if isinstance(source, Cofree):
        return source.extract()
    if isinstance(source, Trampoline):
        return source.value()
    raise CobindingError(source, step)


class CobindingFunction(Generic[P, T]):
    """Callable wrapper driving a generator-based cobinding block."""

    def __init__(self, func: Callable[P, CobindingGenerator[T]]) -> None:
        self.original_func = func
        wraps(func)(self)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> T:
        gen_or_value = self.original_func(*args, **kwargs)
        if not inspect.isgenerator(gen_or_value):
            return gen_or_value

        gen = gen_or_value
        try:
            current = next(gen)
        except StopIteration as stop_exc:
            return stop_exc.value

        step = 0
        while True:
            pulled = _pull(current, step)
            step += 1
            try:
                current = gen.send(pulled)
            except StopIteration as stop_exc:
                logger.debug(
                    "Cobinding %s finished after %d pull(s)",
                    getattr(self, "__name__", "<cobinding>"),
                    step,
                )
                return stop_exc.value

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)


def cobinding(func: Callable[P, CobindingGenerator[T]]) -> CobindingFunction[P, T]:
    """
    Decorator that runs a generator function as a cobinding block.

    Usage:
        @cobinding
        def program(limit: int):
            tree = unfold(0, lambda i: NOTHING if i == limit else Some(i + 1), MAYBE_TRAVERSE)
            value = yield tree.run()
            tail = yield tree.run_tail()
            return value + tail

        program(10)  # 0

    Yielding anything other than a ``Cofree`` or a ``Trampoline`` raises
    ``CobindingError``.
    """
    return CobindingFunction(func)


def pull_sequence(
    steps: Sequence[tuple[str, Callable[[Mapping[str, Any]], Any]]],
    combine: Callable[[Mapping[str, Any]], T],
) -> T:
    """
    Run named pulls in order, then combine.

    Each step receives an immutable mapping of the values pulled so far and
    returns a ``Cofree`` (its head is pulled) or a ``Trampoline`` (its value
    is pulled). ``combine`` receives the final mapping.
    """
    env: FrozenDict = FrozenDict()
    for name, step in steps:
        env = env.set(name, _pull(step(env), name))
    return combine(env)


class CofreeComonad(Functor):
    """Comonad capability for ``Cofree`` trees over one branching functor."""

    def __init__(self, functor: Functor) -> None:
        self.functor = functor

    def unfold(self, seed: Any, generator: Callable[[Any], Any]) -> Cofree[Any]:
        return unfold(seed, generator, self.functor)

    def extract(self, wa: Cofree[T]) -> T:
        return wa.extract()

    def map(self, fa: Cofree[Any], f: Callable[[Any], Any]) -> Cofree[Any]:
        return fa.map(f)

    def coflat_map(self, wa: Cofree[Any], f: Callable[[Cofree[Any]], Any]) -> Cofree[Any]:
        return wa.coflat_map(f)

    def cobinding(self, func: Callable[P, CobindingGenerator[T]]) -> CobindingFunction[P, T]:
        return cobinding(func)

    def __repr__(self) -> str:
        return f"CofreeComonad({self.functor!r})"


__all__ = [
    "CobindingFunction",
    "CobindingGenerator",
    "CofreeComonad",
    "cobinding",
    "pull_sequence",
]
