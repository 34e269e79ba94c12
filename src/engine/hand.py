"""
Hand evaluation: total calculation and ace resolution.

Every ace starts at 11. While the total exceeds 21 and some ace is still
counted at 11, that ace drops to 1 (subtract 10). A hand is soft when an ace
still counts as 11 afterwards, so a soft hand can never be over 21.

The solver does not carry card lists through its recursion. It carries the
pair (total, soft), which is a complete state for blackjack valuation: at most
one ace can ever be counted at 11 without busting. add_value() advances that
pair by one card and always agrees with evaluate_hand() on the extended hand.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from .cards import ACE_VALUE, check_value

BLACKJACK_TOTAL: int = 21


@dataclass(frozen=True)
class HandValuation:
    """Evaluated value of a hand.

    Attributes:
        total: Best total after ace reduction (may exceed 21 when bust).
        soft:  True if an ace is still counted as 11.
        code:  Display code, 'S' or 'H' followed by the total, e.g. 'S17'.
    """

    total: int
    soft: bool
    code: str


def _code(total: int, soft: bool) -> str:
    return ('S' if soft else 'H') + str(total)


def evaluate_hand(hand) -> HandValuation:
    """Evaluate a hand of any size, including an empty one.

    Examples:
        >>> evaluate_hand(cards_from_values(11, 5))
        HandValuation(total=16, soft=True, code='S16')
        >>> evaluate_hand(cards_from_values(11, 11, 9)).code
        'S21'
        >>> evaluate_hand(()).code
        'H0'
    """
    total = 0
    num_aces = 0
    for card in hand:
        if card.value == ACE_VALUE:
            num_aces += 1
        total += card.value

    reduced = 0
    while total > BLACKJACK_TOTAL and reduced < num_aces:
        total -= 10
        reduced += 1

    soft = reduced < num_aces
    return HandValuation(total, soft, _code(total, soft))


def is_blackjack(hand) -> bool:
    """Return True for a natural: exactly two cards, one ace, total 21.

    Examples:
        >>> is_blackjack(cards_from_values(11, 10))
        True
        >>> is_blackjack(cards_from_values(11, 10, 2))
        False
    """
    if len(hand) != 2:
        return False
    num_aces = sum(1 for card in hand if card.value == ACE_VALUE)
    return num_aces == 1 and sum(card.value for card in hand) == BLACKJACK_TOTAL


def is_bust(total: int) -> bool:
    """Return True if a total exceeds 21."""
    return total > BLACKJACK_TOTAL


@functools.cache
def add_value(total: int, soft: bool, value: int) -> tuple[int, bool]:
    """Apply one card draw to a (total, soft) hand state.

    Args:
        total: Current hand total (must not be bust).
        soft:  True if the current hand holds an ace counted as 11.
        value: Point value of the drawn card (2–11).

    Returns:
        New (total, soft) after the draw.

    Examples:
        >>> add_value(16, True, 9)     # A-5 + 9 -> hard 15
        (15, False)
        >>> add_value(10, False, 11)   # 10 + A -> soft 21
        (21, True)
        >>> add_value(12, True, 11)    # A-A + A -> soft 13
        (13, True)
    """
    check_value(value)
    high_aces = 1 if soft else 0
    if value == ACE_VALUE:
        high_aces += 1
    total += value
    while total > BLACKJACK_TOTAL and high_aces > 0:
        total -= 10
        high_aces -= 1
    return total, high_aces > 0
