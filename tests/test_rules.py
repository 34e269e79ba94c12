"""Tests for src/engine/rules.py — configuration, legality, and settlement."""

from __future__ import annotations

import pytest

from src.engine.rules import (
    BlackjackRules,
    DoubleRule,
    Outcome,
    RulesConfigError,
    can_double,
    can_hit,
    parse_double_rule,
    rules_from_mapping,
    settle_totals,
)
from tests.conftest import hand, vals


class TestBlackjackRules:
    def test_defaults(self):
        rules = BlackjackRules()
        assert rules.dealer_stands_soft_17 is True
        assert rules.num_decks == 6
        assert rules.double_on is DoubleRule.ANY

    def test_frozen(self):
        rules = BlackjackRules()
        with pytest.raises(AttributeError):
            rules.num_decks = 2  # type: ignore[misc]

    def test_zero_decks_rejected(self):
        with pytest.raises(RulesConfigError):
            BlackjackRules(num_decks=0)

    def test_negative_splits_rejected(self):
        with pytest.raises(RulesConfigError):
            BlackjackRules(max_splits=-1)

    def test_non_bool_flag_rejected(self):
        with pytest.raises(RulesConfigError):
            BlackjackRules(dealer_stands_soft_17="yes")  # type: ignore[arg-type]

    def test_bool_deck_count_rejected(self):
        with pytest.raises(RulesConfigError):
            BlackjackRules(num_decks=True)

    def test_string_double_rule_rejected_by_constructor(self):
        with pytest.raises(RulesConfigError):
            BlackjackRules(double_on="any")  # type: ignore[arg-type]

    def test_config_error_is_value_error(self):
        assert issubclass(RulesConfigError, ValueError)


class TestParseDoubleRule:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("any", DoubleRule.ANY),
            ("9,10,11", DoubleRule.HARD_9_10_11),
            ("10,11", DoubleRule.HARD_10_11),
            ("HARD_10_11", DoubleRule.HARD_10_11),
            ("any ", DoubleRule.ANY),
        ],
    )
    def test_recognised(self, text, expected):
        assert parse_double_rule(text) is expected

    def test_enum_passthrough(self):
        assert parse_double_rule(DoubleRule.HARD_9_10_11) is DoubleRule.HARD_9_10_11

    @pytest.mark.parametrize("bad", ["9-11", "", "anything", None, 11])
    def test_unrecognised_raises(self, bad):
        with pytest.raises(RulesConfigError):
            parse_double_rule(bad)


class TestRulesFromMapping:
    def test_host_mapping(self):
        rules = rules_from_mapping(
            {
                "dealer_stands_soft_17": False,
                "num_decks": 8,
                "allow_insurance": False,
                "dealer_peeks": True,
                "double_on": "9,10,11",
                "double_after_split": False,
                "max_splits": 1,
                "resplit_aces": False,
                "hit_split_aces": True,
            }
        )
        assert rules.dealer_stands_soft_17 is False
        assert rules.num_decks == 8
        assert rules.double_on is DoubleRule.HARD_9_10_11
        assert rules.hit_split_aces is True

    def test_missing_keys_default(self):
        assert rules_from_mapping({}) == BlackjackRules()

    def test_unknown_key_rejected(self):
        with pytest.raises(RulesConfigError):
            rules_from_mapping({"dealer_hits_soft_17": True})

    def test_unrecognised_double_rule_rejected(self):
        with pytest.raises(RulesConfigError):
            rules_from_mapping({"double_on": "8,9,10,11"})


class TestCanDouble:
    def test_any_allows_soft(self):
        assert can_double(vals(11, 7), BlackjackRules(double_on=DoubleRule.ANY))

    def test_three_cards_never(self):
        assert not can_double(vals(2, 3, 5), BlackjackRules())

    def test_split_hand_without_das(self):
        rules = BlackjackRules(double_after_split=False)
        assert not can_double(vals(8, 3), rules, split_hand=True)
        assert can_double(vals(8, 3), rules, split_hand=False)

    def test_split_hand_with_das(self):
        assert can_double(vals(8, 3), BlackjackRules(double_after_split=True), split_hand=True)

    @pytest.mark.parametrize(
        "values, allowed",
        [((5, 4), True), ((6, 4), True), ((6, 5), True), ((5, 3), False), ((10, 2), False)],
    )
    def test_hard_9_10_11(self, values, allowed):
        rules = BlackjackRules(double_on=DoubleRule.HARD_9_10_11)
        assert can_double(vals(*values), rules) is allowed

    @pytest.mark.parametrize(
        "values, allowed",
        [((5, 4), False), ((6, 4), True), ((6, 5), True), ((10, 2), False)],
    )
    def test_hard_10_11(self, values, allowed):
        rules = BlackjackRules(double_on=DoubleRule.HARD_10_11)
        assert can_double(vals(*values), rules) is allowed

    def test_soft_totals_blocked_under_restriction(self):
        # A-9 is soft 20, A-A is soft 12: neither is a hard 9-11
        rules = BlackjackRules(double_on=DoubleRule.HARD_9_10_11)
        assert not can_double(vals(11, 9), rules)
        assert not can_double(hand('AS', 'AD'), rules)


class TestCanHit:
    def test_regular_hand(self):
        assert can_hit(vals(10, 2), BlackjackRules())

    def test_split_aces_blocked(self):
        assert not can_hit(vals(11, 5), BlackjackRules(hit_split_aces=False), split_aces=True)

    def test_split_aces_allowed(self):
        assert can_hit(vals(11, 5), BlackjackRules(hit_split_aces=True), split_aces=True)


class TestSettleTotals:
    def test_player_wins(self):
        assert settle_totals(20, 18) == (Outcome.WIN, 1.0)

    def test_player_loses(self):
        assert settle_totals(17, 19) == (Outcome.LOSS, -1.0)

    def test_push(self):
        assert settle_totals(19, 19) == (Outcome.PUSH, 0.0)

    def test_dealer_bust(self):
        assert settle_totals(12, 24) == (Outcome.WIN, 1.0)

    def test_player_bust_loses_even_on_dealer_bust(self):
        assert settle_totals(22, 25) == (Outcome.LOSS, -1.0)
