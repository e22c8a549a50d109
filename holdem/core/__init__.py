"""
Hold'em Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from holdem.core.card import Card, Deck, Rank, Suit, DeckExhaustedError
from holdem.core.player import Player, PlayerStatus
from holdem.core.hand import HandCategory, HandRank, evaluate, get_best_hand, compare
from holdem.core.pot import Settlement, settle_pots
from holdem.core.rules import GamePhase, ActionType, Difficulty, GameConfig
from holdem.core.betting import RoundState, ActionResult, apply_action, advance
from holdem.core.game import HoldemGame, PendingTurn, AITurnScheduler

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "DeckExhaustedError",
    "Player",
    "PlayerStatus",
    "HandCategory",
    "HandRank",
    "evaluate",
    "get_best_hand",
    "compare",
    "Settlement",
    "settle_pots",
    "GamePhase",
    "ActionType",
    "Difficulty",
    "GameConfig",
    "RoundState",
    "ActionResult",
    "apply_action",
    "advance",
    "HoldemGame",
    "PendingTurn",
    "AITurnScheduler",
]
