"""
Remaining-shoe composition by blackjack point value.

A composition is a 12-slot tuple indexed by point value:
    slot 0, 1   -> unused, always 0
    slot 2..9   -> numerals
    slot 10     -> ten, jack, queen and king together
    slot 11     -> aces

Tuples are immutable and hashable: every recursive branch gets its own value
and the whole vector can be used directly as a memo key. Host-side arrays
(lists, numpy) are accepted at the boundary through as_composition().
"""

from __future__ import annotations

import numpy as np

from .cards import TEN_VALUE, check_value

NUM_SLOTS: int = 12
CARD_VALUES: range = range(2, 12)

CARDS_PER_VALUE_PER_DECK: int = 4
TEN_VALUE_CARDS_PER_DECK: int = 16


class CompositionExhaustedError(ValueError):
    """Raised when a draw is required but no cards remain."""


def full_composition(num_decks: int) -> tuple[int, ...]:
    """Return the composition of a fresh shoe of num_decks decks.

    Examples:
        >>> full_composition(1)
        (0, 0, 4, 4, 4, 4, 4, 4, 4, 4, 16, 4)
    """
    if num_decks < 1:
        raise ValueError(f"A shoe needs at least one deck, got {num_decks}.")
    counts = [0] * NUM_SLOTS
    for value in CARD_VALUES:
        per_deck = TEN_VALUE_CARDS_PER_DECK if value == TEN_VALUE else CARDS_PER_VALUE_PER_DECK
        counts[value] = per_deck * num_decks
    return tuple(counts)


def as_composition(counts) -> tuple[int, ...]:
    """Validate a host-supplied count vector and return the canonical tuple.

    Args:
        counts: Any length-12 sequence or numpy array of non-negative integers
                with slots 0 and 1 equal to zero.

    Raises:
        ValueError: On wrong length, negative or non-integral counts, or
                    non-zero unused slots.
    """
    arr = np.asarray(counts)
    if arr.shape != (NUM_SLOTS,):
        raise ValueError(f"Composition must have {NUM_SLOTS} slots, got shape {arr.shape}.")
    if arr.dtype.kind not in 'iu':
        if arr.dtype.kind != 'f' or not np.all(np.mod(arr, 1) == 0):
            raise ValueError("Composition counts must be integers.")
    if np.any(arr < 0):
        raise ValueError("Composition counts must be non-negative.")
    if arr[0] != 0 or arr[1] != 0:
        raise ValueError("Composition slots 0 and 1 are unused and must be zero.")
    return tuple(int(c) for c in arr)


def composition_from_cards(cards) -> tuple[int, ...]:
    """Count a collection of cards by point value.

    Examples:
        >>> composition_from_cards(cards_from_values(11, 10, 10))
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 2, 1)
    """
    counts = [0] * NUM_SLOTS
    for card in cards:
        counts[check_value(card.value)] += 1
    return tuple(counts)


def remove_cards(counts, cards) -> tuple[int, ...]:
    """Return counts with the given dealt cards taken out.

    Raises:
        ValueError: If a card's value is already exhausted.

    Examples:
        >>> remove_cards(full_composition(1), cards_from_values(11))[11]
        3
    """
    remaining = list(as_composition(counts))
    for card in cards:
        value = check_value(card.value)
        if remaining[value] == 0:
            raise ValueError(f"No cards of value {value} left to remove.")
        remaining[value] -= 1
    return tuple(remaining)


def cards_remaining(counts) -> int:
    """Return the number of cards left (sum of slots 2..11)."""
    return sum(counts[v] for v in CARD_VALUES)


def draw_value(counts: tuple[int, ...], value: int) -> tuple[int, ...]:
    """Return a new composition with one card of value removed.

    Examples:
        >>> draw_value(full_composition(1), 10)[10]
        15
    """
    if counts[value] <= 0:
        raise ValueError(f"No cards of value {value} left to draw.")
    return counts[:value] + (counts[value] - 1,) + counts[value + 1:]


def draw_probabilities(counts) -> list[tuple[int, float]]:
    """Return (value, probability) for every value that can be drawn next.

    Values with zero remaining count are omitted, so the probabilities always
    sum to 1.

    Raises:
        CompositionExhaustedError: If no cards remain.

    Examples:
        >>> draw_probabilities((0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 3, 0))
        [(2, 0.25), (10, 0.75)]
    """
    total = cards_remaining(counts)
    if total == 0:
        raise CompositionExhaustedError("Cannot draw from an exhausted composition.")
    return [(v, counts[v] / total) for v in CARD_VALUES if counts[v] > 0]


def ten_fraction(counts) -> float:
    """Return the probability that the next card is ten-valued.

    Raises:
        CompositionExhaustedError: If no cards remain.
    """
    total = cards_remaining(counts)
    if total == 0:
        raise CompositionExhaustedError("Cannot draw from an exhausted composition.")
    return counts[TEN_VALUE] / total
