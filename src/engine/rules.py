"""
Table rules, action legality, and settlement.

BlackjackRules is built once per evaluation request and is read-only after
that. Hosts that hold rules as plain mappings go through rules_from_mapping(),
which rejects unknown keys and unrecognised double-down rules instead of
falling back to the most permissive table.

Settlement convention (from the player's perspective, one unit wagered):
    +1  = player wins
    -1  = player loses
     0  = push
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum, auto

from .hand import evaluate_hand, is_bust


class RulesConfigError(ValueError):
    """Raised when a rules configuration is malformed."""


class DoubleRule(Enum):
    """Which two-card hands may double down."""

    ANY = "any"
    HARD_9_10_11 = "9,10,11"
    HARD_10_11 = "10,11"


class Outcome(Enum):
    WIN = auto()
    LOSS = auto()
    PUSH = auto()


# ─── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BlackjackRules:
    """Table rules for one evaluation request.

    Attributes:
        dealer_stands_soft_17: True for S17, False for H17.
        num_decks:             Decks in the shoe.
        allow_insurance:       Insurance is offered against a dealer ace.
        dealer_peeks:          Dealer checks for blackjack before play.
        double_on:             Which hands may double.
        double_after_split:    Doubling allowed on split hands.
        max_splits:            Maximum number of splits per round.
        resplit_aces:          Aces may be split again.
        hit_split_aces:        Split aces may take more than one card.
    """

    dealer_stands_soft_17: bool = True
    num_decks: int = 6
    allow_insurance: bool = True
    dealer_peeks: bool = True
    double_on: DoubleRule = DoubleRule.ANY
    double_after_split: bool = True
    max_splits: int = 3
    resplit_aces: bool = False
    hit_split_aces: bool = False

    def __post_init__(self) -> None:
        for name in (
            "dealer_stands_soft_17",
            "allow_insurance",
            "dealer_peeks",
            "double_after_split",
            "resplit_aces",
            "hit_split_aces",
        ):
            if not isinstance(getattr(self, name), bool):
                raise RulesConfigError(f"{name} must be a bool, got {getattr(self, name)!r}.")
        for name in ("num_decks", "max_splits"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise RulesConfigError(f"{name} must be an int, got {value!r}.")
        if self.num_decks < 1:
            raise RulesConfigError(f"num_decks must be at least 1, got {self.num_decks}.")
        if self.max_splits < 0:
            raise RulesConfigError(f"max_splits must be non-negative, got {self.max_splits}.")
        if not isinstance(self.double_on, DoubleRule):
            raise RulesConfigError(f"double_on must be a DoubleRule, got {self.double_on!r}.")


RULE_KEYS: frozenset[str] = frozenset(f.name for f in fields(BlackjackRules))


def parse_double_rule(value) -> DoubleRule:
    """Resolve a double-down rule from its enum, value string, or member name.

    Raises:
        RulesConfigError: If value names no known rule.

    Examples:
        >>> parse_double_rule("9,10,11")
        <DoubleRule.HARD_9_10_11: '9,10,11'>
        >>> parse_double_rule("HARD_10_11")
        <DoubleRule.HARD_10_11: '10,11'>
    """
    if isinstance(value, DoubleRule):
        return value
    if isinstance(value, str):
        text = value.strip()
        for rule in DoubleRule:
            if text == rule.value or text.upper() == rule.name:
                return rule
    raise RulesConfigError(
        f"Unrecognised double rule {value!r}; expected one of "
        f"{[rule.value for rule in DoubleRule]}."
    )


def rules_from_mapping(mapping) -> BlackjackRules:
    """Build BlackjackRules from a plain mapping of host values.

    Missing keys take their defaults. Unknown keys are rejected so that a
    misspelt rule cannot silently fall back to a default.

    Examples:
        >>> rules_from_mapping({"dealer_stands_soft_17": False, "double_on": "10,11"}).double_on
        <DoubleRule.HARD_10_11: '10,11'>
    """
    unknown = set(mapping) - RULE_KEYS
    if unknown:
        raise RulesConfigError(f"Unknown rule keys: {sorted(unknown)}.")
    kwargs = dict(mapping)
    if "double_on" in kwargs:
        kwargs["double_on"] = parse_double_rule(kwargs["double_on"])
    return BlackjackRules(**kwargs)


# ─── Legality ─────────────────────────────────────────────────────────────────


def can_double(hand, rules: BlackjackRules, split_hand: bool = False) -> bool:
    """Return True if the player may double down on hand.

    Args:
        hand:       Player's current hand.
        rules:      Table rules.
        split_hand: True if hand came from a split.
    """
    if len(hand) != 2:
        return False
    if split_hand and not rules.double_after_split:
        return False

    valuation = evaluate_hand(hand)
    if rules.double_on is DoubleRule.ANY:
        return True
    if valuation.soft:
        return False
    if rules.double_on is DoubleRule.HARD_9_10_11:
        return 9 <= valuation.total <= 11
    return valuation.total in (10, 11)


def can_hit(hand, rules: BlackjackRules, split_aces: bool = False) -> bool:
    """Return True if the player may take another card.

    A hand from split aces is stuck with its one card unless the table allows
    hitting split aces.
    """
    if split_aces and not rules.hit_split_aces:
        return False
    return True


# ─── Settlement ───────────────────────────────────────────────────────────────


def settle_totals(player_total: int, dealer_total: int) -> tuple[Outcome, float]:
    """Settle two final (non-natural) totals.

    Priority:
        1. Player bust → loss, even if the dealer also busts
        2. Dealer bust → win
        3. Higher total wins; equal totals push

    Examples:
        >>> settle_totals(20, 18)
        (<Outcome.WIN: 1>, 1.0)
        >>> settle_totals(22, 25)
        (<Outcome.LOSS: 2>, -1.0)
        >>> settle_totals(19, 19)
        (<Outcome.PUSH: 3>, 0.0)
    """
    if is_bust(player_total):
        return Outcome.LOSS, -1.0
    if is_bust(dealer_total):
        return Outcome.WIN, 1.0
    if player_total > dealer_total:
        return Outcome.WIN, 1.0
    if dealer_total > player_total:
        return Outcome.LOSS, -1.0
    return Outcome.PUSH, 0.0

