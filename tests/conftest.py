"""
Pytest configuration for cofree tests.

Provides a side-effect counter for observing how often generators run and a
shared 0..100 single-path tree.
"""

import pytest

from cofree import MAYBE_TRAVERSE, NOTHING, Cofree, Some, unfold


class SideEffect:
    """Mutable counter incremented by generators under test."""

    def __init__(self) -> None:
        self.counter = 0

    def increment(self) -> None:
        self.counter += 1


def counting_chain(side_effect: SideEffect, limit: int) -> Cofree[int]:
    """Single-path tree 0..limit whose generator bumps ``side_effect``."""

    def generator(i: int):
        side_effect.increment()
        return NOTHING if i == limit else Some(i + 1)

    return unfold(0, generator, MAYBE_TRAVERSE)


def heads(tree: Cofree) -> list:
    return [node.head for node in tree.walk()]


@pytest.fixture
def side_effect() -> SideEffect:
    return SideEffect()


@pytest.fixture
def start_hundred() -> Cofree[int]:
    return unfold(0, lambda i: NOTHING if i == 100 else Some(i + 1), MAYBE_TRAVERSE)
