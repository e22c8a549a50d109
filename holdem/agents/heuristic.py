"""
Heuristic AI opponent.

A single scalar hand strength drives every decision:
- postflop: hand category / 10
- preflop: a rough score from pairs, high cards, suitedness and gaps

The difficulty tier scales aggression and bluffing; the master tier also
discounts hands that don't justify the pot odds.
"""

import random
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from holdem.agents.base import BaseAgent, Decision, DecisionContext
from holdem.core.card import Card
from holdem.core.hand import get_best_hand
from holdem.core.rules import ActionType, Difficulty


logger = logging.getLogger(__name__)

STRONG_HAND = 0.7
MEDIUM_HAND = 0.4


@dataclass(frozen=True)
class DifficultyProfile:
    """Tuning for one difficulty tier."""
    aggression: float
    bluff_chance: float
    strength_scale: float = 1.0
    uses_pot_odds: bool = False


PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(aggression=0.3, bluff_chance=0.05, strength_scale=0.8),
    Difficulty.MEDIUM: DifficultyProfile(aggression=0.5, bluff_chance=0.15),
    Difficulty.HARD: DifficultyProfile(aggression=0.6, bluff_chance=0.2),
    Difficulty.MASTER: DifficultyProfile(aggression=0.7, bluff_chance=0.25, uses_pot_odds=True),
}


def preflop_strength(hole_cards: List[Card]) -> float:
    """Score two hole cards between 0.2 and 1.0."""
    high, low = sorted((c.high_value for c in hole_cards), reverse=True)
    suited = hole_cards[0].suit == hole_cards[1].suit

    if high == low:
        return 0.5 + high / 28
    if high >= 12 and low >= 10:
        return 0.6
    if suited and high - low <= 4:
        return 0.4
    if high == 14:
        return 0.35
    return 0.2


def hand_strength(context: DecisionContext) -> float:
    """Raw strength estimate before difficulty adjustments."""
    if len(context.community_cards) >= 3:
        rank = get_best_hand(context.player.hole_cards, context.community_cards)
        return int(rank.category) / 10
    return preflop_strength(context.player.hole_cards)


class AIPolicy(BaseAgent):
    """
    Difficulty-aware heuristic policy shared by all AI seats.

    Decision order:
    1. bluff roll, independent of the cards
    2. strong hands raise (pot-scaled), or call/check when short-stacked
    3. medium hands check or raise small when free, call cheap bets
    4. weak hands check when free, otherwise mostly fold
    """

    def __init__(self, rng: Optional[random.Random] = None, name: str = "Heuristic"):
        super().__init__(name)
        self.rng = rng or random.Random()

    def act(self, context: DecisionContext) -> Decision:
        decision = self._decide(context)
        logger.debug(
            f"{context.player.name} ({context.difficulty.value}) decides "
            f"{decision.action.value} {decision.amount}"
        )
        return decision

    def _decide(self, context: DecisionContext) -> Decision:
        player = context.player
        profile = PROFILES[context.difficulty]
        to_call = context.to_call
        table_bet = context.table_bet

        strength = hand_strength(context) * profile.strength_scale
        if profile.uses_pot_odds and context.pot + to_call > 0:
            pot_odds = to_call / (context.pot + to_call)
            if strength < pot_odds * 0.8:
                strength *= 0.7

        can_raise = player.chips > table_bet * 2
        roll = self.rng.random()

        if roll < profile.bluff_chance and can_raise:
            if self.rng.random() < profile.aggression:
                return self._raise(context, context.pot * 0.5)

        if strength > STRONG_HAND:
            if can_raise:
                return self._raise(context, context.pot * (0.5 + strength * 0.5))
            return Decision(ActionType.CALL) if to_call > 0 else Decision(ActionType.CHECK)

        if strength > MEDIUM_HAND:
            if to_call == 0:
                if roll < profile.aggression * 0.5 and can_raise:
                    return self._raise(context, context.pot * 0.3)
                return Decision(ActionType.CHECK)
            if to_call < player.chips * 0.3:
                return Decision(ActionType.CALL)
            return Decision(ActionType.CALL) if roll < 0.3 else Decision(ActionType.FOLD)

        if to_call == 0:
            return Decision(ActionType.CHECK)
        if to_call < player.chips * 0.1 and roll < 0.3:
            return Decision(ActionType.CALL)
        return Decision(ActionType.FOLD)

    def _raise(self, context: DecisionContext, size: float) -> Decision:
        """Raise by ``size`` clamped to the minimum raise and the stack."""
        player = context.player
        max_raise = player.current_bet + player.chips - context.table_bet
        amount = max(int(size), context.min_raise, 1)
        if amount >= max_raise:
            return Decision(ActionType.ALL_IN)
        return Decision(ActionType.RAISE, amount)
