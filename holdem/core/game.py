"""
Texas Hold'em Game Orchestrator.

Runs a table of one human and several AI opponents round after round:
- seating, dealer button rotation and blind posting
- dealing hole cards from an injected deck supplier
- feeding actions through the betting engine reducer
- asking the AI policy for decisions on computer turns
- settling showdowns, paying out and eliminating busted players
  (blinds double on every elimination)
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any, Union
from dataclasses import dataclass
import asyncio
import logging
import random
import threading

from holdem.agents.base import BaseAgent, DecisionContext
from holdem.agents.heuristic import AIPolicy
from holdem.core.betting import (
    RoundState, ActionResult, apply_action, advance, settle_showdown, legal_actions,
)
from holdem.core.card import Deck, DeckSupplier, shuffled_deck
from holdem.core.player import Player
from holdem.core.pot import EVERYONE_FOLDED
from holdem.core.rules import (
    GamePhase, ActionType, Difficulty, GameConfig,
    get_blind_positions, has_chips, next_seat,
    HOLE_CARDS, HUMAN_NAME, HUMAN_PLAYER_ID, MIN_PLAYERS,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingTurn:
    """An AI turn waiting to be decided, pinned to the state it was read from."""
    hand_number: int
    version: int
    player_id: int


class HoldemGame:
    """
    Single-table game orchestrator.

    Usage:
        game = HoldemGame()
        game.start_game(Difficulty.MEDIUM, player_count=4)

        while not game.game_over:
            game.play_ai_turns()
            if game.is_human_turn:
                game.call()          # or fold/check/raise_/all_in from the UI
            elif game.phase == GamePhase.ROUND_END:
                game.start_new_round()
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        deck_supplier: Optional[DeckSupplier] = None,
        policy: Optional[BaseAgent] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            config: Table settings (defaults from ``rules``)
            deck_supplier: Returns a freshly shuffled list of cards per round
            policy: Agent deciding for every non-human seat
            rng: Random source for seating, dealer choice and default deck
        """
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.deck_supplier = deck_supplier or (lambda: shuffled_deck(self.rng))
        self.policy = policy or AIPolicy(self.rng)
        self.scheduler = AITurnScheduler(self)

        self.players: List[Player] = []
        self.state: Optional[RoundState] = None
        self.difficulty = Difficulty.MEDIUM
        self.small_blind = self.config.small_blind
        self.big_blind = self.config.big_blind
        self.dealer_index = 0
        self.hand_number = 0
        self.game_over = False
        self.message = ""

        self._eliminated: set = set()
        # Serializes transitions: no two actions interleave
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        if self.state is None or self.game_over:
            return GamePhase.IDLE
        return self.state.phase

    @property
    def pot(self) -> int:
        return self.state.pot if self.state else 0

    @property
    def community_cards(self):
        return list(self.state.community_cards) if self.state else []

    @property
    def current_player(self) -> Optional[Player]:
        return self.state.current_player if self.state and not self.game_over else None

    @property
    def human(self) -> Optional[Player]:
        return next((p for p in self.players if p.is_human), None)

    @property
    def is_human_turn(self) -> bool:
        player = self.current_player
        return player is not None and player.is_human and player.can_act

    def start_game(self, difficulty: Union[Difficulty, str], player_count: int) -> RoundState:
        """
        Seat a new table and deal its first round.

        Raises:
            ValueError: On an unknown difficulty or unsupported player count
        """
        difficulty = Difficulty(difficulty)
        max_players = min(self.config.max_players, len(self.config.ai_names) + 1)
        if not MIN_PLAYERS <= player_count <= max_players:
            raise ValueError(f"Number of players must be {MIN_PLAYERS}-{max_players}")

        with self._lock:
            self.scheduler.cancel()
            names = list(self.config.ai_names)
            self.rng.shuffle(names)

            self.players = [Player(HUMAN_PLAYER_ID, HUMAN_NAME, self.config.starting_chips, is_human=True)]
            for i in range(1, player_count):
                self.players.append(Player(i, names[i - 1], self.config.starting_chips))

            self.difficulty = difficulty
            self.small_blind = self.config.small_blind
            self.big_blind = self.config.big_blind
            self.hand_number = 0
            self.game_over = False
            self.message = ""
            self._eliminated = set()
            self.dealer_index = self.rng.randrange(player_count)

            logger.info(f"New game: {player_count} players, difficulty {difficulty.value}")
            self._deal_round()
            return self.state

    def start_new_round(self) -> bool:
        """
        Clear the finished round and deal the next one.

        Busted AI players leave the table (the human stays seated), blinds
        double once per newly eliminated player and the button moves to the
        next seat with chips.

        Returns:
            True if a round was dealt, False if the game is over or the
            current round hasn't finished
        """
        with self._lock:
            if self.state is None or self.game_over:
                return False
            if self.state.phase != GamePhase.ROUND_END:
                logger.warning("Cannot start a new round before the current one ends")
                return False

            self.scheduler.cancel()

            newly_out = [p for p in self.players if p.chips == 0 and p.player_id not in self._eliminated]
            for player in newly_out:
                self._eliminated.add(player.player_id)
                self.small_blind *= 2
                self.big_blind *= 2
                logger.info(
                    f"{player.name} eliminated, blinds now {self.small_blind}/{self.big_blind}"
                )

            remaining = [p for p in self.players if p.chips > 0]
            if len(remaining) <= 1:
                self._end_game(remaining[0] if remaining else None)
                return False

            dealer_seat = next_seat(self.players, self.dealer_index, has_chips)
            dealer_id = self.players[dealer_seat].player_id

            self.players = [p for p in self.players if p.chips > 0 or p.is_human]
            self.dealer_index = next(
                i for i, p in enumerate(self.players) if p.player_id == dealer_id
            )

            self._deal_round()
            return True

    def _end_game(self, winner: Optional[Player]) -> None:
        self.game_over = True
        if winner is not None and winner.is_human:
            self.message = "Congratulations! You win!"
        else:
            self.message = f"Game Over! {winner.name if winner else 'AI'} wins!"
        logger.info(self.message)

    def _deal_round(self) -> None:
        """Reset seats, post blinds, deal hole cards and open preflop betting."""
        self.hand_number += 1
        for player in self.players:
            player.reset_for_new_hand()

        deck = Deck(self.deck_supplier())
        sb_index, bb_index = get_blind_positions(self.players, self.dealer_index)

        dealer = self.players[self.dealer_index]
        sb_player = self.players[sb_index]
        bb_player = self.players[bb_index]
        dealer.dealer = True
        sb_player.small_blind = True
        bb_player.big_blind = True

        for player in self.players:
            if player.in_hand:
                player.hole_cards = [c.turned(player.is_human) for c in deck.draw(HOLE_CARDS)]

        sb_amount = sb_player.commit(self.small_blind)
        sb_player.last_action = f"SB ${sb_amount}"
        bb_amount = bb_player.commit(self.big_blind)
        bb_player.last_action = f"BB ${bb_amount}"

        state = RoundState(
            players=self.players,
            deck=deck,
            big_blind=self.big_blind,
            dealer_index=self.dealer_index,
            pot=sb_amount + bb_amount,
            table_bet=max(p.current_bet for p in self.players),
            min_raise=self.big_blind,
            phase=GamePhase.PREFLOP,
            current_index=bb_index,
            hand_number=self.hand_number,
            version=1,
        )
        state.log(
            "HAND_START",
            hand_number=self.hand_number,
            dealer=self.dealer_index,
            small_blind=sb_index,
            big_blind=bb_index,
        )
        logger.info(
            f"Starting hand #{self.hand_number} (dealer {dealer.name}, "
            f"blinds {self.small_blind}/{self.big_blind})"
        )

        self.policy.on_hand_start(self.hand_number)
        # First actor is the seat after the big blind
        self._commit(advance(state))

    def _commit(self, state: RoundState) -> None:
        """Install a new round state, settling and paying out when it ends."""
        if state.phase == GamePhase.SHOWDOWN:
            state = settle_showdown(state)

        if state.phase == GamePhase.ROUND_END and not state.paid:
            for player in state.players:
                player.chips += state.outcome.total_for(player.player_id)
            state.paid = True
            self.policy.on_hand_end(state.outcome.to_dict())

        self.state = state
        self.players = state.players
        self.message = state.message

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def act(self, player_id: int, action_type: Union[ActionType, str], amount: int = 0) -> ActionResult:
        """
        Apply an action for ``player_id``.

        Out-of-turn or illegal actions leave the game untouched and come
        back with ``success=False``.
        """
        with self._lock:
            if self.state is None or self.game_over:
                return ActionResult(False, "No round in progress", self.state)
            try:
                action_type = ActionType(action_type)
            except ValueError:
                return ActionResult(False, f"Invalid action type: {action_type}", self.state)

            result = apply_action(self.state, player_id, action_type, amount)
            if result.success:
                self._commit(result.state)
                result.state = self.state
            return result

    def fold(self) -> ActionResult:
        return self.act(HUMAN_PLAYER_ID, ActionType.FOLD)

    def check(self) -> ActionResult:
        return self.act(HUMAN_PLAYER_ID, ActionType.CHECK)

    def call(self) -> ActionResult:
        return self.act(HUMAN_PLAYER_ID, ActionType.CALL)

    def raise_(self, amount: int) -> ActionResult:
        """Raise by ``amount`` over the table bet."""
        return self.act(HUMAN_PLAYER_ID, ActionType.RAISE, amount)

    def all_in(self) -> ActionResult:
        return self.act(HUMAN_PLAYER_ID, ActionType.ALL_IN)

    def get_legal_actions(self, player_id: Optional[int] = None) -> List[Dict[str, Any]]:
        if self.state is None or self.game_over:
            return []
        return legal_actions(self.state, player_id)

    # ------------------------------------------------------------------
    # AI turns
    # ------------------------------------------------------------------

    def pending_ai_turn(self) -> Optional[PendingTurn]:
        """The AI turn the table is waiting on, if any."""
        player = self.current_player
        if player is None or player.is_human or not player.can_act:
            return None
        return PendingTurn(self.state.hand_number, self.state.version, player.player_id)

    def resolve_ai_turn(self, turn: PendingTurn) -> Optional[ActionResult]:
        """
        Decide and apply a pending AI turn.

        A turn read from an older state (the table moved on or was reset
        in the meantime) is discarded.
        """
        with self._lock:
            if self.pending_ai_turn() != turn:
                logger.warning(f"Discarding stale AI turn {turn}")
                return None

            player = self.state.current_player
            context = DecisionContext(
                player=player,
                community_cards=list(self.state.community_cards),
                table_bet=self.state.table_bet,
                pot=self.state.pot,
                difficulty=self.difficulty,
                phase=self.state.phase,
                min_raise=self.state.min_raise,
            )
            decision = self.policy.act(context)
            result = self.act(player.player_id, decision.action, decision.amount)

            if not result.success:
                logger.warning(
                    f"{player.name} made an illegal decision {decision.to_dict()}: {result.message}"
                )
                for fallback in (ActionType.CHECK, ActionType.CALL, ActionType.FOLD):
                    result = self.act(player.player_id, fallback)
                    if result.success:
                        break
            return result

    def play_ai_turns(self, limit: int = 1000) -> int:
        """
        Resolve AI turns back to back, without the think delay, until a
        human decision or the end of the round is reached.

        Returns:
            Number of AI turns played
        """
        played = 0
        turn = self.pending_ai_turn()
        while turn is not None and played < limit:
            self.resolve_ai_turn(turn)
            played += 1
            turn = self.pending_ai_turn()
        return played

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def _showdown_reached(self) -> bool:
        return self.state is not None and any(
            entry["action"] == "SHOWDOWN" for entry in self.state.history
        )

    def get_state(self, for_player_id: Optional[int] = HUMAN_PLAYER_ID) -> Dict[str, Any]:
        """
        Get a read-only snapshot of the table.

        Hole cards are included for ``for_player_id`` and, after a
        showdown, for every player who reached it.
        """
        state = self.state
        reveal = self._showdown_reached()
        current = self.current_player

        players = []
        for p in self.players:
            show = p.player_id == for_player_id or (reveal and p.in_hand)
            players.append(p.to_dict(hide_cards=not show))

        public_info = {
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "table_bet": state.table_bet if state else 0,
            "min_raise": state.min_raise if state else self.big_blind,
            "board": [c.to_dict() for c in self.community_cards],
            "dealer_position": self.dealer_index,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "difficulty": self.difficulty.value,
            "current_player": current.player_id if current else None,
            "players": players,
            "message": self.message,
            "game_over": self.game_over,
            "outcome": self.outcome(),
        }

        private_info: Dict[str, Any] = {}
        player = state.get_player(for_player_id) if state and for_player_id is not None else None
        if player is not None:
            private_info = {
                "hand": [c.to_dict() for c in player.hole_cards],
                "available_moves": self.get_legal_actions(for_player_id),
                "chips_to_call": max(0, state.table_bet - player.current_bet),
                "current_bet": player.current_bet,
            }

        return {
            "public_info": public_info,
            "private_info": private_info,
        }

    def outcome(self) -> Optional[Dict[str, Any]]:
        """Winners and refunds of the finished round, or None mid-round."""
        if self.state is None or self.state.phase != GamePhase.ROUND_END:
            return None

        result = self.state.outcome.to_dict()
        for entry in result["winners"] + result["refunds"]:
            player = self.state.get_player(entry["player_id"])
            entry["name"] = player.name if player else None
        result["showdown"] = self._showdown_reached()
        result["by_fold"] = any(
            a.hand_name == EVERYONE_FOLDED for a in self.state.outcome.awards
        )
        return result


class AITurnScheduler:
    """
    Runs AI turns as cancelable asyncio tasks after a "thinking" delay.

    Only one task is pending at a time. A task whose turn went stale while
    it slept is dropped by ``HoldemGame.resolve_ai_turn``.
    """

    def __init__(self, game: HoldemGame, delay: Optional[float] = None):
        self.game = game
        self.delay = delay
        self._task: Optional[asyncio.Task] = None

    @property
    def think_delay(self) -> float:
        return self.game.config.think_delay if self.delay is None else self.delay

    def schedule(self) -> Optional[asyncio.Task]:
        """
        Schedule the pending AI turn, if any. Must be called from a running
        event loop.
        """
        turn = self.game.pending_ai_turn()
        if turn is None:
            return None
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(turn))
        return self._task

    async def _run(self, turn: PendingTurn) -> Optional[ActionResult]:
        await asyncio.sleep(self.think_delay)
        return self.game.resolve_ai_turn(turn)

    def cancel(self) -> None:
        """Drop the pending task, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def run_until_human(self) -> int:
        """
        Play consecutive AI turns with the think delay between them.

        Returns:
            Number of AI turns played
        """
        played = 0
        while True:
            task = self.schedule()
            if task is None:
                return played
            try:
                result = await task
            except asyncio.CancelledError:
                return played
            if result is None:
                return played
            played += 1
