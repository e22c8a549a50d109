"""
Betting Engine - Round State Machine.

The betting engine is a reducer: ``apply_action(state, player_id, action)``
returns a new ``RoundState`` and never mutates the one it was given. Turn
advancement and phase changes run inside the same call, so one accepted
action moves the round exactly once.

Phases: preflop -> flop -> turn -> river -> showdown -> roundEnd, with two
shortcuts:
- only one player left in the hand: straight to roundEnd, they take the pot
- nobody left to make a decision (everyone else folded or all-in): the
  board is dealt out and the round goes to showdown
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field
import copy
import logging

from holdem.core.card import Card, Deck
from holdem.core.player import Player, PlayerStatus
from holdem.core.pot import Settlement, award_uncontested, settle_pots
from holdem.core.rules import (
    GamePhase, ActionType, BETTING_PHASES, NEXT_PHASE,
    TOTAL_COMMUNITY_CARDS, next_seat,
)


logger = logging.getLogger(__name__)


@dataclass
class RoundState:
    """
    Everything about one round (hand) of play.

    ``version`` goes up on every accepted transition. ``advanced_version``
    remembers the last version checked for turn/phase advancement, which
    makes ``advance`` a no-op when nothing changed.
    """
    players: List[Player]
    deck: Deck
    big_blind: int
    dealer_index: int = 0
    community_cards: List[Card] = field(default_factory=list)
    pot: int = 0
    table_bet: int = 0
    min_raise: int = 0
    phase: GamePhase = GamePhase.PREFLOP
    current_index: int = 0
    hand_number: int = 0
    version: int = 0
    advanced_version: int = 0
    history: List[Dict[str, Any]] = field(default_factory=list)
    outcome: Optional[Settlement] = None
    paid: bool = False
    message: str = ""

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is, if a betting round is running."""
        if self.phase not in BETTING_PHASES:
            return None
        return self.players[self.current_index]

    @property
    def contenders(self) -> List[Player]:
        """Players still in the hand (not folded)."""
        return [p for p in self.players if p.in_hand]

    @property
    def actors(self) -> List[Player]:
        """Players who can still make betting decisions."""
        return [p for p in self.players if p.can_act]

    @property
    def is_betting(self) -> bool:
        return self.phase in BETTING_PHASES

    def get_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def log(self, action: str, **details: Any) -> None:
        """Append an event to the round history."""
        self.history.append({"action": action, "phase": self.phase.value, **details})


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    state: Optional[RoundState]
    action_type: Optional[ActionType] = None
    amount: int = 0


class _Rejected(Exception):
    """Internal signal for an action that doesn't apply to the state."""


def apply_action(
    state: RoundState,
    player_id: int,
    action_type: ActionType,
    amount: int = 0,
) -> ActionResult:
    """
    Apply one player action.

    Args:
        state: Current round state (left untouched)
        player_id: Player attempting the action
        action_type: FOLD, CHECK, CALL, RAISE or ALL_IN
        amount: For RAISE, chips to raise by on top of the table bet

    Returns:
        ActionResult with the new state on success, or the original state
        and the reason on rejection
    """
    if not state.is_betting:
        return ActionResult(False, "No betting round in progress", state)

    player = state.players[state.current_index]
    if player.player_id != player_id:
        return ActionResult(False, "Not your turn", state)
    if not player.can_act or player.acted:
        return ActionResult(False, "Player cannot act", state)

    new_state = copy.deepcopy(state)
    actor = new_state.players[new_state.current_index]

    try:
        moved, message = _execute(new_state, actor, action_type, amount)
    except _Rejected as e:
        return ActionResult(False, str(e), state)

    actor.acted = True
    new_state.pot += moved
    new_state.version += 1
    new_state.message = f"{actor.name}: {message}"
    new_state.log(action_type.value, player=actor.player_id, amount=moved)
    logger.debug(f"Player {actor.player_id} {action_type.value} ({moved}) in {new_state.phase.value}")

    _advance(new_state)
    return ActionResult(True, message, new_state, action_type, moved)


def _execute(state: RoundState, player: Player, action_type: ActionType, amount: int):
    """Apply the action to ``player``; return (chips moved, message)."""
    to_call = state.table_bet - player.current_bet

    if action_type == ActionType.FOLD:
        player.status = PlayerStatus.FOLDED
        player.last_action = "fold"
        return 0, "Folded"

    if action_type == ActionType.CHECK:
        if to_call > 0:
            raise _Rejected(f"Cannot check, must call ${to_call}")
        player.last_action = "check"
        return 0, "Checked"

    if action_type == ActionType.CALL:
        if to_call <= 0:
            raise _Rejected("Nothing to call, use CHECK")
        moved = player.commit(to_call)
        player.last_action = "allin" if player.all_in else "call"
        return moved, f"Called ${moved}"

    if action_type == ActionType.RAISE:
        if amount <= 0:
            raise _Rejected("Raise amount must be positive")
        if player.chips <= to_call:
            raise _Rejected("Not enough chips to raise, call or go all-in")

        target = state.table_bet + amount
        if target >= player.current_bet + player.chips:
            return _go_all_in(state, player)
        if amount < state.min_raise:
            raise _Rejected(f"Minimum raise is ${state.min_raise}")

        moved = player.commit(target - player.current_bet)
        _reopen(state, player, player.current_bet)
        player.last_action = "raise"
        return moved, f"Raised to ${player.current_bet}"

    if action_type == ActionType.ALL_IN:
        if player.chips == 0:
            raise _Rejected("Already all-in")
        return _go_all_in(state, player)

    raise _Rejected(f"Unknown action: {action_type}")


def _go_all_in(state: RoundState, player: Player):
    moved = player.commit(player.chips)
    if player.current_bet > state.table_bet:
        _reopen(state, player, player.current_bet)
    player.last_action = "allin"
    return moved, f"All-in for ${player.current_bet}"


def _reopen(state: RoundState, raiser: Player, new_total: int) -> None:
    """Raise the table bet and give everyone else still acting another turn."""
    increment = new_total - state.table_bet
    if increment >= state.min_raise:
        state.min_raise = increment
    state.table_bet = new_total

    for player in state.players:
        if player is not raiser and player.can_act:
            player.acted = False


def advance(state: RoundState) -> RoundState:
    """
    Move the turn pointer or the phase forward after an accepted change.

    Calling it again on a state it already advanced returns that state
    unchanged.
    """
    if state.advanced_version == state.version:
        return state
    new_state = copy.deepcopy(state)
    _advance(new_state)
    return new_state


def _advance(state: RoundState) -> None:
    state.advanced_version = state.version

    if not state.is_betting:
        return

    contenders = state.contenders
    if len(contenders) == 1:
        _award_by_fold(state, contenders[0])
        return

    if is_betting_round_complete(state):
        _end_betting_round(state)
        return

    actors = state.actors
    if len(actors) <= 1 and all(p.current_bet >= state.table_bet for p in actors):
        _run_out_board(state)
        return

    state.current_index = next_seat(state.players, state.current_index, lambda p: p.can_act)


def is_betting_round_complete(state: RoundState) -> bool:
    """Every player still able to act has acted and matched the table bet."""
    return all(
        p.acted and p.current_bet == state.table_bet
        for p in state.actors
    )


def _end_betting_round(state: RoundState) -> None:
    """Close the betting round and deal the next street."""
    _reset_betting(state)

    next_phase, count = NEXT_PHASE[state.phase]
    if next_phase != GamePhase.SHOWDOWN and len(state.actors) <= 1:
        _run_out_board(state)
        return

    if count:
        _deal_community(state, count)
    state.phase = next_phase
    logger.debug(f"Hand #{state.hand_number} moves to {next_phase.value}")

    if next_phase == GamePhase.SHOWDOWN:
        return

    state.log(next_phase.name, cards=[str(c) for c in state.community_cards])
    state.current_index = next_seat(state.players, state.dealer_index, lambda p: p.can_act)


def _reset_betting(state: RoundState) -> None:
    for player in state.players:
        player.reset_for_new_round()
    state.table_bet = 0
    state.min_raise = state.big_blind


def _run_out_board(state: RoundState) -> None:
    """Deal every remaining community card and go to showdown."""
    _reset_betting(state)
    while len(state.community_cards) < TOTAL_COMMUNITY_CARDS:
        next_phase, count = NEXT_PHASE[state.phase]
        _deal_community(state, count)
        state.phase = next_phase
        state.log(next_phase.name, cards=[str(c) for c in state.community_cards])
    state.phase = GamePhase.SHOWDOWN
    logger.debug(f"Hand #{state.hand_number} runs out the board to showdown")


def _deal_community(state: RoundState, count: int) -> None:
    state.community_cards.extend(card.turned(True) for card in state.deck.draw(count))


def _award_by_fold(state: RoundState, winner: Player) -> None:
    state.outcome = award_uncontested(winner, state.pot)
    state.phase = GamePhase.ROUND_END
    state.message = f"{winner.name} wins ${state.pot}!"
    state.log("WIN_BY_FOLD", winner=winner.player_id, amount=state.pot)
    logger.info(f"Hand #{state.hand_number}: player {winner.player_id} wins {state.pot} uncontested")


def settle_showdown(state: RoundState) -> RoundState:
    """
    Resolve a showdown state into roundEnd.

    Remaining hands are revealed and the pot is split with side pots and
    uncalled-bet refunds. Any other state is returned as is.
    """
    if state.phase != GamePhase.SHOWDOWN:
        return state

    new_state = copy.deepcopy(state)
    n = len(new_state.players)
    # Odd chips go to winners clockwise from the dealer
    ordered = [new_state.players[(new_state.dealer_index + 1 + i) % n] for i in range(n)]
    settlement = settle_pots(ordered, new_state.community_cards)

    for player in new_state.contenders:
        player.hole_cards = [card.turned(True) for card in player.hole_cards]

    new_state.outcome = settlement
    new_state.phase = GamePhase.ROUND_END
    new_state.version += 1
    new_state.advanced_version = new_state.version
    new_state.message = _showdown_message(new_state, settlement)
    new_state.log("SHOWDOWN", winners=settlement.to_dict()["winners"])
    logger.info(f"Hand #{new_state.hand_number} showdown: {settlement.to_dict()}")
    return new_state


def _showdown_message(state: RoundState, settlement: Settlement) -> str:
    main_pot = [a for a in settlement.awards if a.pot_index == 0]
    if not main_pot:
        return "Hand over"
    names = [state.get_player(a.player_id).name for a in main_pot]
    if len(names) == 1:
        return f"{names[0]} wins with {main_pot[0].hand_name}!"
    return f"Split pot! {' and '.join(names)} win with {main_pot[0].hand_name}"


def legal_actions(state: RoundState, player_id: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Get legal actions for the player whose turn it is.

    Returns:
        List of action dicts with type and constraints. RAISE ``min``/``max``
        are raise increments over the table bet.
    """
    player = state.current_player
    if player is None or not player.can_act or player.acted:
        return []
    if player_id is not None and player.player_id != player_id:
        return []

    actions = [{"type": ActionType.FOLD.value}]
    to_call = max(0, state.table_bet - player.current_bet)

    if to_call == 0:
        actions.append({"type": ActionType.CHECK.value})
    else:
        actions.append({
            "type": ActionType.CALL.value,
            "amount": min(to_call, player.chips),
        })

    if player.chips > to_call:
        max_raise = player.current_bet + player.chips - state.table_bet
        actions.append({
            "type": ActionType.RAISE.value,
            "min": min(state.min_raise, max_raise),
            "max": max_raise,
        })

    if player.chips > 0:
        actions.append({
            "type": ActionType.ALL_IN.value,
            "amount": player.current_bet + player.chips,
        })

    return actions
