"""
Card and Deck classes for Texas Hold'em.

Ranks follow the table convention of the game UI: Ace is stored as 1 and
promoted to 14 whenever cards are compared at the high end (see
``Card.high_value``). The deck is consumed from the tail and is never
reshuffled during a round.
"""

from __future__ import annotations
import random
from typing import Callable, List, Optional
from enum import IntEnum


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks, Ace low (1) through King (13)."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


ACE_HIGH = 14

SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["10"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


class DeckExhaustedError(ValueError):
    """Raised when a deck is asked for more cards than it holds."""


class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As") or Card.from_string("10♥")

    ``face_up`` only matters to whoever renders the card; equality and
    hashing look at rank and suit alone.
    """

    __slots__ = ("_rank", "_suit", "_face_up")

    def __init__(self, rank: Rank, suit: Suit, face_up: bool = False):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))
        object.__setattr__(self, "_face_up", bool(face_up))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __reduce__(self):
        return (Card, (self._rank, self._suit, self._face_up))

    def __deepcopy__(self, memo) -> Card:
        return self

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def face_up(self) -> bool:
        return self._face_up

    @property
    def high_value(self) -> int:
        """Rank value with the Ace promoted to 14."""
        return ACE_HIGH if self._rank == Rank.ACE else int(self._rank)

    def turned(self, face_up: bool = True) -> Card:
        """Return the same card with a different visibility."""
        return Card(self._rank, self._suit, face_up)

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "2c" (rank + suit char)
        - "A♠", "10♥" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        if s[:2] == "10":
            rank_part, suit_part = "10", s[2:]
        else:
            rank_part, suit_part = s[0].upper(), s[1:]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return False

    def __hash__(self) -> int:
        return int(self._rank) * 4 + int(self._suit)

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self._suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self._rank],
            "suit": SUIT_SYMBOLS[self._suit],
            "text": str(self),
            "color": self.color,
            "face_up": self._face_up,
        }


# A deck supplier hands the engine a freshly shuffled, ordered list of
# unique cards at the start of every round.
DeckSupplier = Callable[[], List[Card]]


def standard_deck() -> List[Card]:
    """Return the 52 cards of a standard deck in suit/rank order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffled_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Default deck supplier: a standard deck shuffled with ``rng``."""
    cards = standard_deck()
    (rng or random).shuffle(cards)
    return cards


class Deck:
    """
    The remaining cards of a round, drawn from the tail.

    Usage:
        deck = Deck(shuffled_deck())
        hole_cards = deck.draw(2)
        flop = deck.draw(3)
    """

    def __init__(self, cards: List[Card]):
        self._cards: List[Card] = list(cards)

    def draw(self, n: int = 1) -> List[Card]:
        """
        Draw n cards from the end of the deck.

        Raises:
            DeckExhaustedError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckExhaustedError(
                f"Cannot draw {n} cards, only {len(self._cards)} remain"
            )
        return [self._cards.pop() for _ in range(n)]

    def draw_one(self) -> Card:
        """Draw a single card."""
        return self.draw(1)[0]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    """
    cards_str = cards_str.strip()

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    result = []
    i = 0
    while i < len(cards_str):
        chunk = cards_str[i:i + 2]
        if len(chunk) == 2 and (chunk[1].lower() in CHAR_TO_SUIT or chunk[1] in SYMBOL_TO_SUIT):
            result.append(Card.from_string(chunk))
            i += 2
        else:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")

    return result
