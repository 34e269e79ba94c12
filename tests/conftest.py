"""
Shared pytest fixtures for blackjack EV solver tests.

Provides convenience wrappers around str_to_card / card_from_value for building
known hands and compositions, and a seeded random generator.
"""

from __future__ import annotations

import numpy as np
import pytest

from src.engine.cards import Card, cards_from_values, str_to_card


def hand(*card_strs: str) -> tuple[Card, ...]:
    """Build a hand tuple from human-readable card strings.

    Examples:
        >>> [c.value for c in hand('AS', 'KH')]
        [11, 10]
    """
    return tuple(str_to_card(s) for s in card_strs)


def vals(*values: int) -> tuple[Card, ...]:
    """Build a hand tuple from bare point values."""
    return cards_from_values(*values)


def comp(**by_value: int) -> tuple[int, ...]:
    """Build a composition from keyword counts, e.g. comp(v2=1, v10=3)."""
    counts = [0] * 12
    for key, count in by_value.items():
        counts[int(key[1:])] = count
    return tuple(counts)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)

