"""
Player class for Texas Hold'em.

Manages player state including:
- Chip stack
- Hole cards
- Bets committed this betting round and this hand
- Status (active, folded, all-in) and seat roles
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum, auto

from holdem.core.card import Card


class PlayerStatus(Enum):
    """Player status during a hand."""
    ACTIVE = auto()   # Still in the hand, can act
    FOLDED = auto()   # Has folded (or sat the hand out with no chips)
    ALL_IN = auto()   # All-in, no more actions


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name
        chips: Current chip stack
        is_human: True for the seat driven by the UI
        hole_cards: The player's private cards (2 cards, empty before the deal)
        current_bet: Chips committed in the current betting round
        total_bet: Chips committed over the whole hand (for side pots)
        status: Current player status
        acted: Whether the player has acted in the current betting round
    """
    player_id: int
    name: str
    chips: int
    is_human: bool = False
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_bet: int = 0
    status: PlayerStatus = PlayerStatus.ACTIVE
    acted: bool = False

    dealer: bool = False
    small_blind: bool = False
    big_blind: bool = False

    # Track last action for display
    last_action: Optional[str] = None

    def reset_for_new_hand(self) -> None:
        """Clear cards, bets and flags; players without chips sit the hand out."""
        self.hole_cards = []
        self.current_bet = 0
        self.total_bet = 0
        self.acted = False
        self.last_action = None
        self.dealer = self.small_blind = self.big_blind = False
        self.status = PlayerStatus.ACTIVE if self.chips > 0 else PlayerStatus.FOLDED

    def reset_for_new_round(self) -> None:
        """Reset for a new betting round (flop, turn, river)."""
        self.current_bet = 0
        # Folded and all-in players don't act again
        self.acted = self.status != PlayerStatus.ACTIVE

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the bet.

        Args:
            amount: Chips requested

        Returns:
            Actual chips moved (less than requested if the stack runs out)
        """
        if amount <= 0 or self.status != PlayerStatus.ACTIVE:
            return 0

        actual = min(amount, self.chips)
        self.chips -= actual
        self.current_bet += actual
        self.total_bet += actual

        if self.chips == 0:
            self.status = PlayerStatus.ALL_IN

        return actual

    @property
    def folded(self) -> bool:
        return self.status == PlayerStatus.FOLDED

    @property
    def all_in(self) -> bool:
        return self.status == PlayerStatus.ALL_IN

    @property
    def can_act(self) -> bool:
        """Check if player can still take actions this hand."""
        return self.status == PlayerStatus.ACTIVE

    @property
    def in_hand(self) -> bool:
        """Check if player is still contesting the pot."""
        return self.status != PlayerStatus.FOLDED

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "chips": self.chips,
            "bet": self.current_bet,
            "total_bet": self.total_bet,
            "state": self.status.name,
            "is_human": self.is_human,
            "dealer": self.dealer,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "last_action": self.last_action,
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def to_public_dict(self) -> Dict[str, Any]:
        """Get public information (visible to all players)."""
        return self.to_dict(hide_cards=True)

    def to_private_dict(self) -> Dict[str, Any]:
        """Get private information (only for this player)."""
        return self.to_dict(hide_cards=False)

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.current_bet}, state={self.status.name})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
