"""
Hold'em Arbiter - Texas Hold'em Engine

A single-table no-limit Texas Hold'em engine with:
- Pure Python game core logic (hand evaluation, betting, side pots)
- Heuristic AI opponents with difficulty tiers
- A small FastAPI server exposing the table to a UI

Usage:
    from holdem.core import HoldemGame, Difficulty
    from holdem.agents import AIPolicy
"""

__version__ = "0.2.0"

from holdem.core.card import Card, Deck
from holdem.core.player import Player
from holdem.core.game import HoldemGame
from holdem.core.hand import HandRank, evaluate, get_best_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HoldemGame",
    "HandRank",
    "evaluate",
    "get_best_hand",
    "__version__",
]
