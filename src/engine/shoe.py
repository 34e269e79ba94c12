"""
Shoe construction and shuffling for literal hand simulation.

A shoe is a list of Card in dealing order. build_shoe() is deterministic:
for each deck, ranks in the order A, J, Q, K, 2..10, each in all four suits.
Randomness always comes from a numpy Generator supplied by the caller; this
module never seeds or owns one.

The EV solver does not need shoe order. It works on compositions, which can
be read off any shoe with shoe_composition().
"""

from __future__ import annotations

import numpy as np

from .cards import RANK_NAMES, RANK_VALUES, SUIT_NAMES, Card
from .composition import NUM_SLOTS

CARDS_PER_DECK: int = 52


def build_shoe(num_decks: int) -> list[Card]:
    """Create an unshuffled shoe of num_decks standard decks.

    Returns:
        list[Card] of length 52 * num_decks in canonical order.

    Raises:
        ValueError: If num_decks < 1.

    Examples:
        >>> shoe = build_shoe(1)
        >>> len(shoe)
        52
        >>> shoe[0]
        Card(rank='A', suit='♠', value=11)
    """
    if num_decks < 1:
        raise ValueError(f"A shoe needs at least one deck, got {num_decks}.")
    shoe: list[Card] = []
    for _ in range(num_decks):
        for rank in RANK_NAMES:
            value = RANK_VALUES[rank]
            for suit in SUIT_NAMES:
                shoe.append(Card(rank, suit, value))
    return shoe


def shuffle_shoe(shoe: list[Card], rng: np.random.Generator) -> list[Card]:
    """Return a uniformly random permutation of shoe.

    Args:
        shoe: Cards to shuffle; left untouched.
        rng:  Caller-owned random source, e.g. np.random.default_rng(seed).

    Examples:
        >>> shuffled = shuffle_shoe(build_shoe(1), np.random.default_rng(0))
        >>> len(shuffled)
        52
    """
    order = rng.permutation(len(shoe))
    return [shoe[i] for i in order]


def create_shoe(num_decks: int, rng: np.random.Generator) -> list[Card]:
    """Build and shuffle a shoe of num_decks decks."""
    return shuffle_shoe(build_shoe(num_decks), rng)


def shoe_composition(shoe) -> tuple[int, ...]:
    """Count the cards of a shoe (or any card sequence) by point value.

    Examples:
        >>> shoe_composition(build_shoe(2))[10]
        32
    """
    values = np.fromiter((card.value for card in shoe), dtype=np.int64)
    counts = np.bincount(values, minlength=NUM_SLOTS)
    return tuple(int(c) for c in counts[:NUM_SLOTS])
