"""
Action dispatch: evaluate only the actions a caller asks for.

evaluate_actions() is the entry point for hosts. It validates the composition
once, values the player's hand once, and calls only the solver functions for
recognised, requested actions. Unknown action identifiers are skipped without
error. One memo dict is shared by stand, hit and double for the request, so
dealer subtrees computed for one action are reused by the others.
"""

from __future__ import annotations

from enum import Enum

from src.engine.cards import ACE_VALUE
from src.engine.composition import as_composition
from src.engine.hand import BLACKJACK_TOTAL, evaluate_hand
from src.engine.rules import BlackjackRules, can_double, can_hit
from src.solvers.ev_solver import (
    eval_double,
    eval_hit,
    eval_insurance,
    eval_stand,
    eval_surrender,
)


class Action(Enum):
    """Player actions the solver can value."""

    STAND = "stand"
    HIT = "hit"
    DOUBLE = "double"
    SURRENDER = "surrender"
    INSURE = "insure"


def _to_action(identifier) -> Action | None:
    """Resolve an Action or its string identifier; None if unrecognised."""
    if isinstance(identifier, Action):
        return identifier
    try:
        return Action(identifier)
    except ValueError:
        return None


def evaluate_actions(
    actions,
    player_hand,
    dealer_hand,
    counts,
    rules: BlackjackRules,
) -> dict[str, float]:
    """Compute the EV of each requested action.

    Args:
        actions:     Iterable of action identifiers ('stand', 'hit', 'double',
                     'surrender', 'insure') or Action members.
        player_hand: Player's cards.
        dealer_hand: Dealer's visible cards.
        counts:      Remaining composition (12 slots, indexed by value).
        rules:       Table rules.

    Returns:
        Mapping from each requested, recognised action identifier to its EV.
        Unrecognised identifiers produce no entry.

    Examples:
        >>> from src.engine.cards import hand_from_str
        >>> evaluate_actions(
        ...     ['surrender', 'fold'],
        ...     hand_from_str('10S 6H'),
        ...     hand_from_str('KD'),
        ...     (0, 0, 4, 4, 4, 4, 4, 4, 4, 4, 16, 4),
        ...     BlackjackRules(num_decks=1),
        ... )
        {'surrender': -0.5}
    """
    composition = as_composition(counts)
    player = evaluate_hand(player_hand)
    memo: dict = {}
    results: dict[str, float] = {}

    for identifier in actions:
        action = _to_action(identifier)
        if action is None or action.value in results:
            continue

        if action is Action.STAND:
            ev = eval_stand(dealer_hand, player.total, composition, rules, memo)
        elif action is Action.HIT:
            ev = eval_hit(dealer_hand, player_hand, composition, rules, memo)
        elif action is Action.DOUBLE:
            ev = eval_double(dealer_hand, player_hand, composition, rules, memo)
        elif action is Action.SURRENDER:
            ev = eval_surrender()
        else:
            ev = eval_insurance(composition)

        results[action.value] = ev

    return results


def available_actions(
    player_hand,
    dealer_hand,
    rules: BlackjackRules,
    *,
    split_hand: bool = False,
    split_aces: bool = False,
) -> list[Action]:
    """Return the actions the table allows at this decision point.

    Rules applied:
        - STAND:     always
        - HIT:       total below 21 and not stuck on split aces
        - DOUBLE:    per can_double() (two cards, double rule, DAS)
        - SURRENDER: two-card hand that is not a split hand
        - INSURE:    insurance offered, dealer shows an ace, initial two-card
                     hand (never a split hand)
    """
    player = evaluate_hand(player_hand)
    legal = [Action.STAND]

    if player.total < BLACKJACK_TOTAL and can_hit(player_hand, rules, split_aces):
        legal.append(Action.HIT)
        if can_double(player_hand, rules, split_hand):
            legal.append(Action.DOUBLE)

    initial_hand = len(player_hand) == 2 and not split_hand
    if initial_hand:
        legal.append(Action.SURRENDER)

    dealer_shows_ace = len(dealer_hand) == 1 and dealer_hand[0].value == ACE_VALUE
    if rules.allow_insurance and initial_hand and dealer_shows_ace:
        legal.append(Action.INSURE)

    return legal


def evaluate_available_actions(
    player_hand,
    dealer_hand,
    counts,
    rules: BlackjackRules,
    *,
    split_hand: bool = False,
    split_aces: bool = False,
) -> dict[str, float]:
    """Evaluate every action the table allows at this decision point."""
    legal = available_actions(
        player_hand, dealer_hand, rules, split_hand=split_hand, split_aces=split_aces
    )
    return evaluate_actions(legal, player_hand, dealer_hand, counts, rules)


def best_action(results: dict[str, float]) -> tuple[Action, float]:
    """Return the highest-EV action in a result mapping.

    Insurance is a side bet, not a way of playing the hand, so it is never
    chosen. Ties go to the action listed first in Action.

    Raises:
        ValueError: If results holds no playable action.
    """
    best: tuple[Action, float] | None = None
    for action in Action:
        if action is Action.INSURE or action.value not in results:
            continue
        ev = results[action.value]
        if best is None or ev > best[1]:
            best = (action, ev)
    if best is None:
        raise ValueError("No playable action in results.")
    return best


def format_results(results: dict[str, float]) -> str:
    """Render a result mapping as one 'action  ev' line per action."""
    return "\n".join(f"{name:<10}{ev:+.6f}" for name, ev in results.items())


# ─── __main__ ─────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    from src.engine.cards import hand_from_str
    from src.engine.composition import full_composition, remove_cards

    rules = BlackjackRules(num_decks=1)
    player = hand_from_str("10S 6H")
    dealer = hand_from_str("AC")
    counts = remove_cards(full_composition(rules.num_decks), player + dealer)

    print("Single deck, S17: player 10-6 vs dealer ace")
    results = evaluate_available_actions(player, dealer, counts, rules)
    print(format_results(results))
    action, ev = best_action(results)
    print(f"\nBest: {action.value} ({ev:+.6f})")
