"""
Base Agent Interface for the Hold'em table.

Every non-human seat is driven by an agent. The orchestrator builds a
``DecisionContext`` from public table state plus the seat's own cards and
asks the agent for one ``Decision``.

Usage:
    class MyAgent(BaseAgent):
        def act(self, context):
            return Decision(ActionType.CALL)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any

from holdem.core.card import Card
from holdem.core.player import Player
from holdem.core.rules import ActionType, Difficulty, GamePhase


@dataclass
class DecisionContext:
    """
    What an agent may look at when deciding.

    Attributes:
        player: The deciding seat (its own hole cards included)
        community_cards: The board so far
        table_bet: Highest bet of the current betting round
        pot: Chips committed this hand
        difficulty: Difficulty tier of the table
        phase: Current betting phase
        min_raise: Smallest legal raise increment
    """
    player: Player
    community_cards: List[Card] = field(default_factory=list)
    table_bet: int = 0
    pot: int = 0
    difficulty: Difficulty = Difficulty.MEDIUM
    phase: GamePhase = GamePhase.PREFLOP
    min_raise: int = 0

    @property
    def to_call(self) -> int:
        return max(0, self.table_bet - self.player.current_bet)


@dataclass
class Decision:
    """
    One betting decision.

    ``amount`` is only used by RAISE: chips to raise by over the table bet.
    """
    action: ActionType
    amount: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"action": self.action.value, "amount": self.amount}


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: str = "Agent"):
        self.name = name

    @abstractmethod
    def act(self, context: DecisionContext) -> Decision:
        """
        Choose an action for the seat described by ``context``.

        Returns:
            A Decision. Agents should return legal actions; the
            orchestrator falls back to check/call/fold otherwise.
        """

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """
        Called when a hand ends.

        Args:
            result: Settlement dict with ``winners`` and ``refunds``
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"
