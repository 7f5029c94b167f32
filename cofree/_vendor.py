"""
Vendored minimal data types used by the reference capability instances.

``Maybe`` is the optional-child branching shape and the absence effect for
``cata_m``; ``Either`` is the two-parameter shape folded by ``Bifoldable``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, NoReturn, TypeVar

from frozendict import frozendict

# =========================================================
# Type Vars
# =========================================================
T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")
L = TypeVar("L")
R = TypeVar("R")


class Maybe(Generic[T_co]):
    """Optional value that may contain ``Some`` data or ``Nothing``."""

    __slots__ = ()

    def is_some(self) -> bool:
        """Return ``True`` when the value is present."""

        return isinstance(self, Some)

    def is_none(self) -> bool:
        """Return ``True`` when no value is present."""

        return isinstance(self, Nothing)

    def unwrap(self) -> T_co:
        """Return the contained value or raise ``RuntimeError``."""

        if isinstance(self, Some):
            return self.value
        raise RuntimeError("Called unwrap on Nothing value")

    def unwrap_or(self, default: U) -> T_co | U:
        """Return the value if present, otherwise ``default``."""

        if isinstance(self, Some):
            return self.value
        return default

    def map(self, func: Callable[[T_co], U]) -> Maybe[U]:
        """Apply ``func`` to the contained value when present."""

        if isinstance(self, Some):
            return Some(func(self.value))
        return NOTHING

    def flat_map(self, func: Callable[[T_co], Maybe[U]]) -> Maybe[U]:
        """Chain computations that themselves return ``Maybe``."""

        if isinstance(self, Some):
            result = func(self.value)
            if not isinstance(result, Maybe):
                raise TypeError("flat_map must return a Maybe instance")
            return result
        return NOTHING

    def fold(self, if_empty: Callable[[], U], if_some: Callable[[T_co], U]) -> U:
        """Collapse both cases into a single value."""

        if isinstance(self, Some):
            return if_some(self.value)
        return if_empty()

    @classmethod
    def from_optional(cls, value: T_co | None) -> Maybe[T_co]:
        """Create a ``Maybe`` from an optional Python value."""

        if value is None:
            return NOTHING
        return Some(value)

    def __bool__(self) -> bool:
        """Truthiness matches :meth:`is_some`."""

        return self.is_some()


@dataclass(frozen=True)
class Some(Maybe[T], Generic[T]):
    """Presence of a value."""

    value: T


class Nothing(Maybe[NoReturn]):
    """Singleton representing the absence of a value."""

    __slots__ = ()
    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nothing()"


NOTHING: Final[Maybe[NoReturn]] = Nothing()


# =========================================================
# Either
# =========================================================
class Either(Generic[L, R]):
    """Disjoint union of a ``Left`` and a ``Right`` value."""

    __slots__ = ()

    def is_left(self) -> bool:
        return isinstance(self, Left)

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def fold(self, if_left: Callable[[L], U], if_right: Callable[[R], U]) -> U:
        """Apply the function matching the populated side."""

        if isinstance(self, Left):
            return if_left(self.value)
        return if_right(self.value)


@dataclass(frozen=True)
class Left(Either[L, NoReturn], Generic[L]):
    value: L


@dataclass(frozen=True)
class Right(Either[NoReturn, R], Generic[R]):
    value: R


# =========================================================
# Frozen Dict
# =========================================================
FrozenDict = frozendict

__all__ = [
    "NOTHING",
    "Either",
    "FrozenDict",
    "Left",
    "Maybe",
    "Nothing",
    "Right",
    "Some",
]
