"""
Tests for the betting engine: turn order, validation and phase changes.
"""

import pytest
from holdem.core.betting import apply_action, advance, legal_actions
from holdem.core.rules import ActionType, GamePhase


def act(game, action, amount=0):
    """Act for whoever's turn it is."""
    return game.act(game.current_player.player_id, action, amount)


def chips_on_table(game):
    return sum(p.chips for p in game.players) + (0 if game.state.paid else game.pot)


class TestWinByFold:
    """Tests for rounds ending by folds."""

    def test_heads_up_small_blind_folds(self, heads_up_game):
        game = heads_up_game
        sb = game.current_player
        assert sb.dealer and sb.small_blind
        bb_id = next(p.player_id for p in game.players if p.big_blind)

        result = game.act(sb.player_id, ActionType.FOLD)

        assert result.success
        assert game.phase == GamePhase.ROUND_END
        assert game.state.get_player(bb_id).chips == 1010
        assert game.state.get_player(sb.player_id).chips == 990
        assert game.outcome()["by_fold"]

    def test_everyone_folds_to_big_blind(self, three_player_game):
        game = three_player_game
        bb_id = next(p.player_id for p in game.players if p.big_blind)

        act(game, "FOLD")
        act(game, "FOLD")

        assert game.phase == GamePhase.ROUND_END
        assert game.state.get_player(bb_id).chips == 1010
        assert chips_on_table(game) == 3000


class TestTurnOrder:
    """Tests for who acts when."""

    def test_heads_up_dealer_acts_first_preflop_and_last_postflop(self, heads_up_game):
        game = heads_up_game
        dealer_id = game.current_player.player_id
        assert game.current_player.dealer

        act(game, "CALL")
        act(game, "CHECK")

        assert game.phase == GamePhase.FLOP
        assert game.current_player.player_id != dealer_id

    def test_first_actor_preflop_is_after_big_blind(self, make_game):
        game = make_game(4)
        bb_index = next(i for i, p in enumerate(game.players) if p.big_blind)
        assert game.state.current_index == (bb_index + 1) % 4

    def test_check_through_every_street(self, three_player_game):
        game = three_player_game
        act(game, "CALL")
        act(game, "CALL")
        act(game, "CHECK")

        assert game.phase == GamePhase.FLOP
        assert len(game.community_cards) == 3
        assert game.pot == 60
        assert game.state.current_index == (game.dealer_index + 1) % 3
        assert all(c.face_up for c in game.community_cards)

        for phase, cards in ((GamePhase.TURN, 4), (GamePhase.RIVER, 5)):
            for _ in range(3):
                act(game, "CHECK")
            assert game.phase == phase
            assert len(game.community_cards) == cards

        for _ in range(3):
            act(game, "CHECK")

        assert game.phase == GamePhase.ROUND_END
        assert game.outcome()["showdown"]
        assert chips_on_table(game) == 3000


class TestValidation:
    """Tests for rejected actions."""

    def test_out_of_turn_action_changes_nothing(self, three_player_game):
        game = three_player_game
        state = game.state
        other = next(p for p in game.players if p is not game.current_player)

        result = game.act(other.player_id, ActionType.CALL)

        assert not result.success
        assert result.message == "Not your turn"
        assert game.state is state

    def test_check_facing_bet_rejected(self, three_player_game):
        result = act(three_player_game, "CHECK")
        assert not result.success
        assert "must call" in result.message

    def test_call_with_nothing_to_call_rejected(self, three_player_game):
        game = three_player_game
        act(game, "CALL")
        act(game, "CALL")
        assert game.current_player.big_blind

        result = act(game, "CALL")

        assert not result.success
        assert game.phase == GamePhase.PREFLOP

    def test_minimum_raise_enforced(self, three_player_game):
        game = three_player_game
        version = game.state.version

        result = act(game, "RAISE", 10)

        assert not result.success
        assert result.message == "Minimum raise is $20"
        assert game.state.version == version

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_raise_rejected(self, three_player_game, amount):
        assert not act(three_player_game, "RAISE", amount).success

    def test_unknown_action_type_rejected(self, three_player_game):
        result = act(three_player_game, "DANCE")
        assert not result.success
        assert "Invalid action type" in result.message

    def test_raise_above_stack_is_all_in(self, three_player_game):
        game = three_player_game
        player_id = game.current_player.player_id

        result = act(game, "RAISE", 5000)

        assert result.success
        assert result.amount == 1000
        assert game.state.get_player(player_id).all_in
        assert game.state.table_bet == 1000


class TestRaises:
    """Tests for raises re-opening the action."""

    def test_reraise_reopens_action(self, three_player_game):
        game = three_player_game
        utg_id = game.current_player.player_id

        act(game, "RAISE", 40)
        assert game.state.table_bet == 60
        assert game.state.min_raise == 40

        act(game, "CALL")
        act(game, "RAISE", 40)

        assert game.state.table_bet == 100
        assert game.current_player.player_id == utg_id
        call = next(a for a in game.get_legal_actions() if a["type"] == "CALL")
        assert call["amount"] == 40

        act(game, "CALL")
        act(game, "CALL")
        assert game.phase == GamePhase.FLOP
        assert game.pot == 300

    def test_short_all_in_keeps_minimum_raise(self, three_player_game):
        game = three_player_game
        act(game, "RAISE", 40)

        sb = game.current_player
        assert sb.small_blind
        sb.chips = 70

        result = act(game, "ALL_IN")

        assert result.success
        assert game.state.table_bet == 80
        assert game.state.min_raise == 40


class TestReducer:
    """Tests for the pure reducer functions."""

    def test_apply_action_leaves_input_untouched(self, three_player_game):
        state = three_player_game.state
        player = state.current_player
        chips, pot, version = player.chips, state.pot, state.version

        result = apply_action(state, player.player_id, ActionType.CALL)

        assert result.success
        assert result.state is not state
        assert (player.chips, state.pot, state.version) == (chips, pot, version)
        assert result.state.pot == pot + 20

    def test_advance_is_idempotent(self, three_player_game):
        state = three_player_game.state
        result = apply_action(state, state.current_player.player_id, ActionType.CALL)

        assert advance(result.state) is result.state
        assert advance(advance(result.state)) is result.state

    def test_rejected_action_returns_original_state(self, three_player_game):
        state = three_player_game.state
        result = apply_action(state, state.current_player.player_id, ActionType.CHECK)
        assert not result.success
        assert result.state is state

    def test_legal_actions_preflop(self, three_player_game):
        state = three_player_game.state
        assert legal_actions(state) == [
            {"type": "FOLD"},
            {"type": "CALL", "amount": 20},
            {"type": "RAISE", "min": 20, "max": 980},
            {"type": "ALL_IN", "amount": 1000},
        ]

    def test_legal_actions_for_other_player_empty(self, three_player_game):
        state = three_player_game.state
        other = next(p for p in state.players if p is not state.current_player)
        assert legal_actions(state, other.player_id) == []


class TestAllIn:
    """Tests for all-in run-outs."""

    def test_heads_up_all_in_runs_out_board(self, make_game, stacked_deck):
        game = make_game(2, deck_supplier=stacked_deck("As Ah 7c 2d Kc 9d 5h 3s Jc"))

        act(game, "ALL_IN")
        act(game, "CALL")

        assert game.phase == GamePhase.ROUND_END
        assert [c.short_str for c in game.community_cards] == ["Kc", "9d", "5h", "3s", "Jc"]
        assert game.state.get_player(0).chips == 2000
        assert game.state.get_player(1).chips == 0
        outcome = game.outcome()
        assert outcome["showdown"]
        assert outcome["winners"][0]["hand_name"] == "One Pair"

    def test_call_all_in_for_less_gets_refund(self, make_game, stacked_deck):
        game = make_game(2, deck_supplier=stacked_deck("7c 2d As Ah Kc 9d 5h 3s Jc"))
        short = game.state.get_player(0)
        short.chips = 300 - short.current_bet

        # First to act shoves, the other calls
        act(game, "ALL_IN")
        act(game, "CALL")

        assert game.phase == GamePhase.ROUND_END
        assert game.state.get_player(0).chips == 0
        assert game.state.get_player(1).chips == 1300
        assert sum(p.chips for p in game.players) == 1300
