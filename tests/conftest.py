"""
Pytest configuration and shared fixtures for Hold'em tests.
"""

import random

import pytest
from holdem.agents.base import BaseAgent, Decision
from holdem.core.card import Card, Rank, Suit, standard_deck, parse_cards
from holdem.core.game import HoldemGame
from holdem.core.rules import ActionType, GameConfig


class CallingStation(BaseAgent):
    """Checks when it can, calls otherwise."""

    def __init__(self):
        super().__init__("CallingStation")

    def act(self, context):
        if context.to_call > 0:
            return Decision(ActionType.CALL)
        return Decision(ActionType.CHECK)


@pytest.fixture
def calling_station():
    return CallingStation()


@pytest.fixture
def stacked_deck():
    """
    Build a deck supplier that deals ``cards`` in the given order.

    Hole cards go two at a time in seat order, then flop, turn and river.
    The rest of the deck is filled with the unused cards.
    """
    def build(cards):
        if isinstance(cards, str):
            cards = parse_cards(cards)
        order = list(cards) + [c for c in standard_deck() if c not in cards]
        # The deck draws from the tail
        return lambda: list(reversed(order))
    return build


@pytest.fixture
def make_game(calling_station):
    """Start a table with deterministic seating and a calling-station AI."""
    def build(player_count=3, deck_supplier=None, policy=None, seed=7, **config):
        game = HoldemGame(
            config=GameConfig(think_delay=0, **config),
            deck_supplier=deck_supplier,
            policy=policy or calling_station,
            rng=random.Random(seed),
        )
        game.start_game("medium", player_count)
        return game
    return build


@pytest.fixture
def heads_up_game(make_game):
    """A 2-player game (heads-up)."""
    return make_game(2)


@pytest.fixture
def three_player_game(make_game):
    """A 3-player game."""
    return make_game(3)


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
