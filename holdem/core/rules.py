"""
Texas Hold'em Rules, Constants and Table Configuration.

Table conventions used by the engine:

1. Heads-up (2 players): Dealer posts small blind, non-dealer posts big blind.
   Preflop the dealer acts first; postflop the non-dealer acts first.

2. Blinds are capped at the blinded player's stack; a blind that empties
   the stack puts that player all-in.

3. Any bet above the table bet re-opens the action for every other player
   still able to act.

4. Each time a player busts, both blinds double.
"""

from __future__ import annotations
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from holdem.core.player import Player


class GamePhase(Enum):
    """Phases of a Texas Hold'em round."""
    IDLE = "idle"              # No round in progress (before start / game over)
    PREFLOP = "preflop"        # After hole cards dealt, before flop
    FLOP = "flop"              # After 3 community cards
    TURN = "turn"              # After 4th community card
    RIVER = "river"            # After 5th community card
    SHOWDOWN = "showdown"      # Determine winners
    ROUND_END = "roundEnd"     # Outcome recorded


BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)

# Phase after a completed betting round, with the community cards it deals
NEXT_PHASE = {
    GamePhase.PREFLOP: (GamePhase.FLOP, 3),
    GamePhase.FLOP: (GamePhase.TURN, 1),
    GamePhase.TURN: (GamePhase.RIVER, 1),
    GamePhase.RIVER: (GamePhase.SHOWDOWN, 0),
}


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


class Difficulty(Enum):
    """AI opponent difficulty tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    MASTER = "master"


# Default game settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_STARTING_CHIPS = 1000
DEFAULT_THINK_DELAY = 0.8  # seconds
MIN_PLAYERS = 2
MAX_PLAYERS = 6

AI_NAMES = ["Alex", "Sam", "Jordan", "Casey", "Riley"]
HUMAN_NAME = "You"
HUMAN_PLAYER_ID = 0

# Cards per phase
HOLE_CARDS = 2
TOTAL_COMMUNITY_CARDS = 5


@dataclass
class GameConfig:
    """Table configuration handed to the orchestrator."""
    starting_chips: int = DEFAULT_STARTING_CHIPS
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    think_delay: float = DEFAULT_THINK_DELAY
    ai_names: List[str] = field(default_factory=lambda: list(AI_NAMES))
    max_players: int = MAX_PLAYERS


def next_seat(players: Sequence[Player], start: int, predicate) -> Optional[int]:
    """
    Find the first seat after ``start`` (clockwise, wrapping) matching
    ``predicate``. ``start`` itself is checked last.

    Returns:
        Seat index, or None if no seat matches
    """
    n = len(players)
    for offset in range(1, n + 1):
        idx = (start + offset) % n
        if predicate(players[idx]):
            return idx
    return None


def has_chips(player: Player) -> bool:
    return player.chips > 0


def get_blind_positions(players: Sequence[Player], dealer_index: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind seats, skipping seats without chips.

    Heads-up: the dealer posts the small blind.

    Args:
        players: All seats at the table
        dealer_index: Seat of the dealer button

    Returns:
        Tuple of (small_blind_index, big_blind_index)
    """
    seated = sum(1 for p in players if has_chips(p))
    if seated < MIN_PLAYERS:
        raise ValueError("Need at least 2 players with chips")

    if seated == 2:
        sb_index = dealer_index
    else:
        sb_index = next_seat(players, dealer_index, has_chips)
    bb_index = next_seat(players, sb_index, has_chips)
    return sb_index, bb_index
