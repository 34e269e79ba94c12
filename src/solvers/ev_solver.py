"""
Exact composition-dependent EV solver for a single blackjack decision.

Every future draw sequence is enumerated, each branch weighted by the exact
probability of drawing that point value from the remaining composition:

    p(v) = counts[v] / sum(counts[2..11])

Branches end at a player bust, a forced stand on 21, or a dealer who has
stopped drawing (dealer_must_draw() is False), where the hand is settled.

State abstracted as (total, soft) per hand plus the composition tuple, so a
branch is a set of plain immutable values: nothing is pushed onto or popped
from a shared hand, and siblings can never see each other's draws.

Memoization: each public call gets a fresh memo dict unless the caller passes
one in (evaluate_actions() shares one across the actions of a request). Keys
carry the complete state, so cached values are exactly the floats the plain
recursion would produce.

EV ranges (one unit wagered):
    stand, hit  ∈ [-1, 1]
    double      ∈ [-2, 2]
    surrender   = -0.5
    insurance   = 2p - (1 - p), p = P(hole card is ten-valued)
"""

from __future__ import annotations

from src.engine.composition import (
    as_composition,
    draw_probabilities,
    draw_value,
    ten_fraction,
)
from src.engine.dealer import dealer_must_draw
from src.engine.hand import BLACKJACK_TOTAL, add_value, evaluate_hand, is_bust
from src.engine.rules import BlackjackRules, settle_totals

SURRENDER_EV: float = -0.5
INSURANCE_PAYOUT: float = 2.0
DOUBLE_MULTIPLIER: float = 2.0

BUST = "bust"


# ─── Recursion on abstract states ─────────────────────────────────────────────


def _stand_ev(
    dealer_total: int,
    dealer_soft: bool,
    player_total: int,
    counts: tuple[int, ...],
    stands_soft_17: bool,
    memo: dict,
) -> float:
    """EV of a standing player total while the dealer plays out.

    Args:
        dealer_total:   Dealer's current total.
        dealer_soft:    True if the dealer holds an ace counted as 11.
        player_total:   Player's final total (≤ 21).
        counts:         Remaining composition.
        stands_soft_17: Table's soft-17 rule.
        memo:           Memo dict for this evaluation.
    """
    if is_bust(dealer_total):
        return 1.0
    if not dealer_must_draw(dealer_total, dealer_soft, stands_soft_17):
        return settle_totals(player_total, dealer_total)[1]

    key = ("stand", dealer_total, dealer_soft, player_total, stands_soft_17, counts)
    if key in memo:
        return memo[key]

    ev = 0.0
    for value, prob in draw_probabilities(counts):
        new_total, new_soft = add_value(dealer_total, dealer_soft, value)
        ev += prob * _stand_ev(
            new_total, new_soft, player_total, draw_value(counts, value), stands_soft_17, memo
        )

    memo[key] = ev
    return ev


def _hit_ev(
    dealer_total: int,
    dealer_soft: bool,
    player_total: int,
    player_soft: bool,
    counts: tuple[int, ...],
    stands_soft_17: bool,
    memo: dict,
) -> float:
    """EV of hitting once, then playing on optimally.

    After each draw:
        - bust                 → -1
        - 21                   → forced stand
        - otherwise            → max(stand, hit again)
    """
    key = ("hit", dealer_total, dealer_soft, player_total, player_soft, stands_soft_17, counts)
    if key in memo:
        return memo[key]

    ev = 0.0
    for value, prob in draw_probabilities(counts):
        new_total, new_soft = add_value(player_total, player_soft, value)
        next_counts = draw_value(counts, value)

        if is_bust(new_total):
            ev += prob * -1.0
        elif new_total == BLACKJACK_TOTAL:
            ev += prob * _stand_ev(
                dealer_total, dealer_soft, new_total, next_counts, stands_soft_17, memo
            )
        else:
            ev_stand = _stand_ev(
                dealer_total, dealer_soft, new_total, next_counts, stands_soft_17, memo
            )
            ev_hit = _hit_ev(
                dealer_total, dealer_soft, new_total, new_soft, next_counts, stands_soft_17, memo
            )
            ev += prob * max(ev_stand, ev_hit)

    memo[key] = ev
    return ev


def _double_ev(
    dealer_total: int,
    dealer_soft: bool,
    player_total: int,
    player_soft: bool,
    counts: tuple[int, ...],
    stands_soft_17: bool,
    memo: dict,
) -> float:
    """EV of doubling: one forced draw at twice the stake, then stand."""
    ev = 0.0
    for value, prob in draw_probabilities(counts):
        new_total, _ = add_value(player_total, player_soft, value)
        if is_bust(new_total):
            ev += prob * -DOUBLE_MULTIPLIER
        else:
            ev += prob * DOUBLE_MULTIPLIER * _stand_ev(
                dealer_total,
                dealer_soft,
                new_total,
                draw_value(counts, value),
                stands_soft_17,
                memo,
            )
    return ev


def _dealer_dist(
    dealer_total: int,
    dealer_soft: bool,
    counts: tuple[int, ...],
    stands_soft_17: bool,
    memo: dict,
) -> dict:
    key = ("dealer", dealer_total, dealer_soft, stands_soft_17, counts)
    if key in memo:
        return memo[key]

    if is_bust(dealer_total):
        result: dict = {BUST: 1.0}
    elif not dealer_must_draw(dealer_total, dealer_soft, stands_soft_17):
        result = {dealer_total: 1.0}
    else:
        result = {}
        for value, prob in draw_probabilities(counts):
            new_total, new_soft = add_value(dealer_total, dealer_soft, value)
            sub_dist = _dealer_dist(
                new_total, new_soft, draw_value(counts, value), stands_soft_17, memo
            )
            for outcome, sub_prob in sub_dist.items():
                result[outcome] = result.get(outcome, 0.0) + prob * sub_prob

    memo[key] = result
    return result


# ─── Public API ───────────────────────────────────────────────────────────────


def eval_stand(
    dealer_hand,
    player_total: int,
    counts,
    rules: BlackjackRules,
    memo: dict | None = None,
) -> float:
    """EV of standing on player_total against the dealer's visible hand.

    Args:
        dealer_hand:  Dealer's cards so far (usually just the upcard).
        player_total: Player's total (≤ 21).
        counts:       Remaining composition (12 slots, indexed by value).
        rules:        Table rules.
        memo:         Optional memo dict to share across calls on one request.

    Returns:
        EV in [-1, 1].

    Raises:
        CompositionExhaustedError: If the dealer must draw but no cards remain.
    """
    dealer = evaluate_hand(dealer_hand)
    return _stand_ev(
        dealer.total,
        dealer.soft,
        player_total,
        as_composition(counts),
        rules.dealer_stands_soft_17,
        {} if memo is None else memo,
    )


def eval_hit(
    dealer_hand,
    player_hand,
    counts,
    rules: BlackjackRules,
    memo: dict | None = None,
) -> float:
    """EV of hitting now and playing every later decision optimally.

    Returns:
        EV in [-1, 1].
    """
    dealer = evaluate_hand(dealer_hand)
    player = evaluate_hand(player_hand)
    return _hit_ev(
        dealer.total,
        dealer.soft,
        player.total,
        player.soft,
        as_composition(counts),
        rules.dealer_stands_soft_17,
        {} if memo is None else memo,
    )


def eval_double(
    dealer_hand,
    player_hand,
    counts,
    rules: BlackjackRules,
    memo: dict | None = None,
) -> float:
    """EV of doubling down: exactly one more card, stake doubled.

    Returns:
        EV in [-2, 2].
    """
    dealer = evaluate_hand(dealer_hand)
    player = evaluate_hand(player_hand)
    return _double_ev(
        dealer.total,
        dealer.soft,
        player.total,
        player.soft,
        as_composition(counts),
        rules.dealer_stands_soft_17,
        {} if memo is None else memo,
    )


def eval_surrender() -> float:
    """EV of surrendering: half the wager is always lost."""
    return SURRENDER_EV


def eval_insurance(counts) -> float:
    """EV of an insurance side bet (pays 2:1 if the hole card is ten-valued).

    The ten bucket holds tens, jacks, queens and kings together.

    Examples:
        >>> round(eval_insurance((0, 0, 4, 4, 4, 4, 4, 4, 4, 4, 16, 1)), 4)   # 49 cards, 16 tens
        -0.0204
    """
    p_ten = ten_fraction(as_composition(counts))
    return p_ten * INSURANCE_PAYOUT - (1.0 - p_ten) * 1.0


def dealer_distribution(
    dealer_hand,
    counts,
    rules: BlackjackRules,
) -> dict:
    """Distribution of the dealer's final result from the given hand.

    Returns:
        Dict mapping final totals (17–21) and ``'bust'`` to probabilities
        summing to 1.0.
    """
    dealer = evaluate_hand(dealer_hand)
    return dict(
        _dealer_dist(
            dealer.total,
            dealer.soft,
            as_composition(counts),
            rules.dealer_stands_soft_17,
            {},
        )
    )
