"""
Hand Evaluation for Texas Hold'em.

``evaluate`` scores exactly five cards; ``get_best_hand`` picks the best
five-card hand out of hole cards plus board. A ``HandRank`` orders by
category first and then by its tiebreak key, so plain comparison operators
decide showdowns.

Hand Rankings (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ T♠
9. Straight Flush: 5 consecutive cards of same suit
8. Four of a Kind: 4 cards of same rank
7. Full House: 3 of a kind + pair
6. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
4. Three of a Kind: 3 cards of same rank
3. Two Pair: 2 different pairs
2. One Pair: 2 cards of same rank
1. High Card: No made hand

Note: Ace counts high (14) everywhere except the wheel (A-2-3-4-5), which
is a five-high straight.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass
from itertools import combinations
from enum import IntEnum
from collections import Counter

from holdem.core.card import Card, ACE_HIGH


class HandCategory(IntEnum):
    """Hand categories, higher value = better hand."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


HAND_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

WHEEL = [ACE_HIGH, 5, 4, 3, 2]
HAND_SIZE = 5


@dataclass(frozen=True, order=True)
class HandRank:
    """
    Score of a five-card hand.

    Attributes:
        category: The hand category
        tiebreak: Deciding rank values, most significant first (Ace = 14,
            except a wheel straight whose key is (5,))
    """
    category: HandCategory
    tiebreak: Tuple[int, ...] = ()

    @property
    def name(self) -> str:
        return HAND_NAMES[self.category]

    def __str__(self) -> str:
        return describe_hand(self)


def evaluate(cards: Sequence[Card]) -> HandRank:
    """
    Evaluate exactly five cards.

    Raises:
        ValueError: If not exactly 5 cards are given
    """
    if len(cards) != HAND_SIZE:
        raise ValueError(f"Need exactly {HAND_SIZE} cards, got {len(cards)}")

    values = sorted((c.high_value for c in cards), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(values)

    counts = Counter(values)
    # Rank groups ordered by size, then by rank: e.g. full house -> trips, pair
    groups = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    shape = [count for _, count in groups]
    ordered = tuple(value for value, _ in groups)

    if is_flush and straight_high is not None:
        if straight_high == ACE_HIGH and 10 in values:
            return HandRank(HandCategory.ROYAL_FLUSH, (ACE_HIGH,))
        return HandRank(HandCategory.STRAIGHT_FLUSH, (straight_high,))

    if shape == [4, 1]:
        return HandRank(HandCategory.FOUR_OF_A_KIND, ordered)

    if shape == [3, 2]:
        return HandRank(HandCategory.FULL_HOUSE, ordered)

    if is_flush:
        return HandRank(HandCategory.FLUSH, tuple(values))

    if straight_high is not None:
        return HandRank(HandCategory.STRAIGHT, (straight_high,))

    if shape == [3, 1, 1]:
        return HandRank(HandCategory.THREE_OF_A_KIND, ordered)

    if shape == [2, 2, 1]:
        return HandRank(HandCategory.TWO_PAIR, ordered)

    if shape == [2, 1, 1, 1]:
        return HandRank(HandCategory.ONE_PAIR, ordered)

    return HandRank(HandCategory.HIGH_CARD, tuple(values))


def _straight_high(values: List[int]) -> Optional[int]:
    """
    Return the high card of a straight, or None.

    ``values`` are rank values sorted descending with the Ace as 14.
    """
    distinct = sorted(set(values), reverse=True)
    if len(distinct) < HAND_SIZE:
        return None

    for i in range(len(distinct) - HAND_SIZE + 1):
        if distinct[i] - distinct[i + HAND_SIZE - 1] == HAND_SIZE - 1:
            return distinct[i]

    if distinct == WHEEL:
        return 5

    return None


def get_best_hand(hole: Sequence[Card], community: Sequence[Card]) -> HandRank:
    """
    Find the best five-card hand from hole cards plus community cards.

    Every 5-card subset is scored and the maximum kept, so two subsets
    scoring the same simply tie.

    Raises:
        ValueError: If fewer than 5 cards are available
    """
    cards = list(hole) + list(community)
    if len(cards) < HAND_SIZE:
        raise ValueError(f"Need at least {HAND_SIZE} cards, got {len(cards)}")

    return max(evaluate(combo) for combo in combinations(cards, HAND_SIZE))


def compare(a: HandRank, b: HandRank) -> int:
    """
    Compare two hand ranks.

    Returns:
        1 if a wins, -1 if b wins, 0 if tie
    """
    if a.category != b.category:
        return 1 if a.category > b.category else -1
    for x, y in zip(a.tiebreak, b.tiebreak):
        if x != y:
            return 1 if x > y else -1
    return 0


RANK_NAMES = {
    2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
    8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen", 13: "King",
    14: "Ace",
}


def describe_hand(rank: HandRank) -> str:
    """Get a human-readable description of a hand rank."""
    category = rank.category
    key = rank.tiebreak

    if category == HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    if category == HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {RANK_NAMES[key[0]]} high"
    if category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(key[0])}"
    if category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(key[0])} full of {_plural(key[1])}"
    if category == HandCategory.FLUSH:
        return f"Flush, {RANK_NAMES[key[0]]} high"
    if category == HandCategory.STRAIGHT:
        if key[0] == 5:
            return "Straight, Five high (Wheel)"
        return f"Straight, {RANK_NAMES[key[0]]} high"
    if category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(key[0])}"
    if category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(key[0])} and {_plural(key[1])}"
    if category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(key[0])}"
    return f"High Card, {RANK_NAMES[key[0]]}"


def _plural(value: int) -> str:
    name = RANK_NAMES[value]
    return name + "es" if name.endswith("x") else name + "s"
