"""
Dealer play: the single stopping rule and literal play from a shoe.

Dealer rule:
    draw while total < 17
    draw on soft 17 unless the table has the dealer stand on soft 17
    otherwise stand

dealer_must_draw() is the only place this rule is written down. The EV solver
calls it at every dealer node, and dealer_play() calls it while advancing
through an ordered shoe, so analytic and literal play can never disagree.
"""

from __future__ import annotations

from enum import Enum, auto

from .hand import evaluate_hand, is_bust

DEALER_STAND_TOTAL: int = 17


class DealerResult(Enum):
    STAND = auto()
    BUST = auto()


def dealer_must_draw(total: int, soft: bool, stands_soft_17: bool) -> bool:
    """Return True if the dealer has to take another card.

    Examples:
        >>> dealer_must_draw(16, False, True)
        True
        >>> dealer_must_draw(17, True, True)    # S17 table
        False
        >>> dealer_must_draw(17, True, False)   # H17 table
        True
        >>> dealer_must_draw(17, False, False)
        False
    """
    if total < DEALER_STAND_TOTAL:
        return True
    return total == DEALER_STAND_TOTAL and soft and not stands_soft_17


def dealer_play(
    shoe,
    hand: list,
    stands_soft_17: bool,
    counts,
    pos: int,
) -> int:
    """Play out the dealer's hand from an ordered shoe.

    Args:
        shoe:           Shuffled shoe (read-only).
        hand:           Dealer's hand. Cards are appended as the dealer draws.
        stands_soft_17: True for S17 tables, False for H17.
        counts:         Mutable remaining-count vector indexed by value
                        (list or numpy array); decremented per drawn card.
        pos:            Index in shoe of the next card to draw.

    Returns:
        Updated shoe position after the dealer stops.

    Raises:
        ValueError: If the dealer needs a card past the end of the shoe.
    """
    valuation = evaluate_hand(hand)
    while dealer_must_draw(valuation.total, valuation.soft, stands_soft_17):
        if pos >= len(shoe):
            raise ValueError("Cannot draw from an exhausted shoe.")
        card = shoe[pos]
        pos += 1
        counts[card.value] -= 1
        hand.append(card)
        valuation = evaluate_hand(hand)
    return pos


def dealer_result(hand) -> DealerResult:
    """Classify a finished dealer hand as STAND or BUST."""
    return DealerResult.BUST if is_bust(evaluate_hand(hand).total) else DealerResult.STAND
