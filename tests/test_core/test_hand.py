"""
Tests for hand evaluation.
"""

import random
from itertools import combinations

import pytest
from holdem.core.card import Card, Rank, Suit, standard_deck, parse_cards
from holdem.core.hand import (
    HandCategory, HandRank, evaluate, get_best_hand, compare, describe_hand,
)


class TestHandRanking:
    """Tests for hand ranking."""

    def test_royal_flush(self, royal_flush):
        rank = evaluate(royal_flush)
        assert rank.category == HandCategory.ROYAL_FLUSH
        assert rank.tiebreak == (14,)

    def test_straight_flush(self, straight_flush):
        rank = evaluate(straight_flush)
        assert rank.category == HandCategory.STRAIGHT_FLUSH
        assert rank.tiebreak == (9,)

    def test_wheel_is_five_high(self, wheel_straight):
        rank = evaluate(wheel_straight)
        assert rank.category == HandCategory.STRAIGHT
        assert rank.tiebreak == (5,)

    def test_wheel_straight_flush_is_not_royal(self):
        rank = evaluate(parse_cards("Ah 2h 3h 4h 5h"))
        assert rank.category == HandCategory.STRAIGHT_FLUSH
        assert rank.tiebreak == (5,)

    @pytest.mark.parametrize("cards, category", [
        ("As Ah Ad Ac Ks", HandCategory.FOUR_OF_A_KIND),
        ("As Ah Ad Kc Ks", HandCategory.FULL_HOUSE),
        ("As Ks Js 9s 2s", HandCategory.FLUSH),
        ("Ts 9h 8d 7c 6s", HandCategory.STRAIGHT),
        ("As Ah Ad Kc Qs", HandCategory.THREE_OF_A_KIND),
        ("As Ah Kd Kc Qs", HandCategory.TWO_PAIR),
        ("As Ah Kd Qc Js", HandCategory.ONE_PAIR),
        ("As Kh Jd 9c 7s", HandCategory.HIGH_CARD),
    ])
    def test_categories(self, cards, category):
        assert evaluate(parse_cards(cards)).category == category

    def test_ace_king_queen_jack_nine_is_not_straight(self):
        assert evaluate(parse_cards("As Kh Qd Jc 9s")).category == HandCategory.HIGH_CARD

    def test_no_wraparound_straight(self):
        assert evaluate(parse_cards("Qs Kh Ad 2c 3s")).category == HandCategory.HIGH_CARD

    def test_requires_five_cards(self):
        with pytest.raises(ValueError):
            evaluate(parse_cards("As Ah Kd Kc"))


class TestHandComparison:
    """Tests for comparing hands."""

    def test_category_ordering(self):
        ranks = [
            evaluate(parse_cards(s)) for s in (
                "As Kh Jd 9c 7s", "As Ah Kd Qc Js", "As Ah Kd Kc Qs",
                "As Ah Ad Kc Qs", "Ts 9h 8d 7c 6s", "As Ks Js 9s 2s",
                "As Ah Ad Kc Ks", "As Ah Ad Ac Ks", "9h 8h 7h 6h 5h",
                "Ah Kh Qh Jh Th",
            )
        ]
        assert ranks == sorted(ranks)

    def test_wheel_loses_to_six_high_straight(self, wheel_straight):
        six_high = evaluate(parse_cards("6s 5h 4d 3c 2s"))
        assert six_high > evaluate(wheel_straight)

    def test_kicker_decides(self):
        a = evaluate(parse_cards("As Ah Kd Qc Js"))
        b = evaluate(parse_cards("Ac Ad Kh Qs Ts"))
        assert compare(a, b) == 1
        assert compare(b, a) == -1

    def test_full_house_trips_first(self):
        kings_full = evaluate(parse_cards("Ks Kh Kd 2c 2s"))
        queens_full = evaluate(parse_cards("Qs Qh Qd Ac As"))
        assert kings_full > queens_full

    def test_suits_do_not_break_ties(self):
        a = evaluate(parse_cards("As Ah Kd Qc Js"))
        b = evaluate(parse_cards("Ad Ac Kh Qs Jh"))
        assert a == b
        assert compare(a, b) == 0


class TestBestHand:
    """Tests for get_best_hand."""

    def test_finds_flush_in_seven_cards(self):
        hole = parse_cards("Ah 2h")
        board = parse_cards("Kh 9h 4h Ks Kd")
        assert get_best_hand(hole, board).category == HandCategory.FLUSH

    def test_board_plays(self, royal_flush):
        hole = parse_cards("2c 3d")
        assert get_best_hand(hole, royal_flush).category == HandCategory.ROYAL_FLUSH

    def test_needs_five_cards(self):
        with pytest.raises(ValueError):
            get_best_hand(parse_cards("As Kd"), parse_cards("Qh Jc"))

    @pytest.mark.parametrize("seed", range(25))
    def test_best_hand_is_maximum_of_subsets(self, seed):
        cards = random.Random(seed).sample(standard_deck(), 7)
        best = get_best_hand(cards[:2], cards[2:])
        subsets = [evaluate(combo) for combo in combinations(cards, 5)]
        assert best in subsets
        assert all(compare(best, other) >= 0 for other in subsets)


class TestHandDescription:
    """Tests for hand descriptions."""

    @pytest.mark.parametrize("cards, text", [
        ("Ah Kh Qh Jh Th", "Royal Flush"),
        ("Ks Kh Kd 2c 2s", "Full House, Kings full of Twos"),
        ("As 2h 3d 4c 5s", "Straight, Five high (Wheel)"),
        ("As Ah Kd Qc Js", "Pair of Aces"),
        ("6s 6h 6d Kc Qs", "Three of a Kind, Sixes"),
        ("As Kh Jd 9c 7s", "High Card, Ace"),
    ])
    def test_describe(self, cards, text):
        assert describe_hand(evaluate(parse_cards(cards))) == text

    def test_name(self):
        assert evaluate(parse_cards("As Ah Kd Kc Qs")).name == "Two Pair"
