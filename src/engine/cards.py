"""
Card type, rank/suit constants, and human-readable I/O helpers.

A card carries a display rank, a display suit and a blackjack point value:
    ace = 11, J/Q/K/10 = 10, numerals 2–9 = face value.

Only the point value matters to the solver. Rank and suit exist so that hands
can be shown to people and so literal shoes look like real shoes.
"""

from __future__ import annotations

from dataclasses import dataclass

RANK_NAMES: list[str] = ['A', 'J', 'Q', 'K', '2', '3', '4', '5', '6', '7', '8', '9', '10']
SUIT_NAMES: list[str] = ['♠', '♥', '♦', '♣']

RANK_VALUES: dict[str, int] = {
    'A': 11,
    'J': 10,
    'Q': 10,
    'K': 10,
    '2': 2,
    '3': 3,
    '4': 4,
    '5': 5,
    '6': 6,
    '7': 7,
    '8': 8,
    '9': 9,
    '10': 10,
}

# ASCII aliases accepted by str_to_card, e.g. 'AS' for the ace of spades.
SUIT_ALIASES: dict[str, str] = {'S': '♠', 'H': '♥', 'D': '♦', 'C': '♣'}

ACE_VALUE: int = 11
TEN_VALUE: int = 10
MIN_VALUE: int = 2
MAX_VALUE: int = 11

PLACEHOLDER_SUIT: str = '♠'


@dataclass(frozen=True)
class Card:
    """A single playing card.

    Attributes:
        rank:  Display rank ('A', '2'–'10', 'J', 'Q', 'K').
        suit:  Display suit (one of SUIT_NAMES).
        value: Blackjack point value, 2–11 (11 = ace).
    """

    rank: str
    suit: str
    value: int

    @property
    def is_ace(self) -> bool:
        return self.value == ACE_VALUE

    def __str__(self) -> str:
        return self.rank + self.suit


def check_value(value: int) -> int:
    """Return value unchanged if it is a legal point value, else raise ValueError.

    Examples:
        >>> check_value(11)
        11
    """
    if not MIN_VALUE <= value <= MAX_VALUE:
        raise ValueError(f"Card value must be in {MIN_VALUE}..{MAX_VALUE}, got {value}.")
    return value


def card_from_value(value: int) -> Card:
    """Build a card carrying only a point value.

    Used wherever the suit and the exact ten-value rank are irrelevant. A
    placeholder suit is assigned; the rank is 'A' for 11, else the numeral.

    Examples:
        >>> card_from_value(11)
        Card(rank='A', suit='♠', value=11)
        >>> card_from_value(10).rank
        '10'
    """
    check_value(value)
    rank = 'A' if value == ACE_VALUE else str(value)
    return Card(rank, PLACEHOLDER_SUIT, value)


def cards_from_values(*values: int) -> tuple[Card, ...]:
    """Build a hand from bare point values.

    Examples:
        >>> [c.value for c in cards_from_values(11, 5)]
        [11, 5]
    """
    return tuple(card_from_value(v) for v in values)


def str_to_card(s: str) -> Card:
    """Parse a human-readable card string.

    The format is <rank><suit> where suit is the last character. Rank can be
    '2'-'10', 'J', 'Q', 'K', or 'A'. Suit can be a suit symbol or one of the
    ASCII letters 'S', 'H', 'D', 'C'.

    Examples:
        >>> str_to_card('AS')
        Card(rank='A', suit='♠', value=11)
        >>> str_to_card('10♦').value
        10
    """
    if len(s) < 2:
        raise ValueError(f"Cannot parse card {s!r}.")
    rank, suit = s[:-1].upper(), s[-1]
    suit = SUIT_ALIASES.get(suit.upper(), suit)
    if rank not in RANK_VALUES:
        raise ValueError(f"Unknown rank {rank!r} in card {s!r}.")
    if suit not in SUIT_NAMES:
        raise ValueError(f"Unknown suit {suit!r} in card {s!r}.")
    return Card(rank, suit, RANK_VALUES[rank])


def hand_from_str(s: str) -> tuple[Card, ...]:
    """Parse a whitespace-separated list of card strings.

    Examples:
        >>> [c.value for c in hand_from_str('AS KH')]
        [11, 10]
    """
    return tuple(str_to_card(part) for part in s.split())


def hand_to_str(cards) -> str:
    """Convert a hand to a human-readable string.

    Examples:
        >>> hand_to_str(hand_from_str('AS KH'))
        'A♠ K♥'
    """
    return ' '.join(str(c) for c in cards)
