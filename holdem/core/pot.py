"""
Pot settlement: main pot, side pots and uncalled-bet refunds.

Pots are built from contribution levels, the distinct ``total_bet`` values
of players still in the hand. Each level caps a layer of chips; a layer is
contested by everyone who reached its level. A layer only one player
reached is that player's uncalled bet and goes back to them.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field
import logging

from holdem.core.card import Card
from holdem.core.hand import HandRank, get_best_hand
from holdem.core.player import Player


logger = logging.getLogger(__name__)

UNCONTESTED = "Uncontested"
EVERYONE_FOLDED = "Everyone folded"


@dataclass
class PotAward:
    """Chips won from one pot."""
    player_id: int
    amount: int
    hand_name: str
    pot_index: int = 0


@dataclass
class Refund:
    """Uncalled chips returned to the bettor."""
    player_id: int
    amount: int


@dataclass
class Settlement:
    """Outcome of a round: pot awards plus uncalled-bet refunds."""
    awards: List[PotAward] = field(default_factory=list)
    refunds: List[Refund] = field(default_factory=list)

    def total_for(self, player_id: int) -> int:
        """Chips going back to a player (winnings and refunds)."""
        won = sum(a.amount for a in self.awards if a.player_id == player_id)
        refunded = sum(r.amount for r in self.refunds if r.player_id == player_id)
        return won + refunded

    @property
    def total_distributed(self) -> int:
        return sum(a.amount for a in self.awards) + sum(r.amount for r in self.refunds)

    @property
    def winner_ids(self) -> List[int]:
        seen: List[int] = []
        for award in self.awards:
            if award.player_id not in seen:
                seen.append(award.player_id)
        return seen

    def to_dict(self) -> Dict[str, List[Dict]]:
        return {
            "winners": [
                {
                    "player_id": a.player_id,
                    "amount": a.amount,
                    "hand_name": a.hand_name,
                    "pot_index": a.pot_index,
                }
                for a in self.awards
            ],
            "refunds": [
                {"player_id": r.player_id, "amount": r.amount}
                for r in self.refunds
            ],
        }


def award_uncontested(winner: Player, pot: int) -> Settlement:
    """Settle a round won because every other player folded."""
    return Settlement(awards=[PotAward(winner.player_id, pot, EVERYONE_FOLDED)])


def settle_pots(players: Sequence[Player], community: Sequence[Card]) -> Settlement:
    """
    Split the chips committed this hand into awards and refunds.

    Args:
        players: Every player dealt into the hand, folded ones included, in
            the order odd chips should be handed out
        community: The board (5 cards at a real showdown)

    Returns:
        Settlement whose total equals the sum of all ``total_bet`` values
    """
    live = [p for p in players if not p.folded]
    ranks: Dict[int, Optional[HandRank]] = {p.player_id: _rank_of(p, community) for p in live}

    levels = sorted({p.total_bet for p in live if p.total_bet > 0})
    settlement = Settlement()
    previous = 0
    pot_index = 0

    for i, level in enumerate(levels):
        is_top = i == len(levels) - 1
        layer = {}
        for p in players:
            chips = min(p.total_bet, level) - min(p.total_bet, previous)
            if is_top and p.folded and p.total_bet > level:
                chips += p.total_bet - level
            if chips > 0:
                layer[p.player_id] = chips
        layer_total = sum(layer.values())

        eligible = [p for p in live if p.total_bet >= level]

        if len(eligible) == 1:
            sole = eligible[0]
            own = layer.get(sole.player_id, 0)
            matched = max(
                (chips for pid, chips in layer.items() if pid != sole.player_id),
                default=0,
            )
            refund = own - matched
            if refund > 0:
                settlement.refunds.append(Refund(sole.player_id, refund))
                logger.debug(f"Refunding uncalled {refund} to player {sole.player_id}")
            contested = layer_total - refund
            if contested > 0:
                rank = ranks[sole.player_id]
                settlement.awards.append(PotAward(
                    sole.player_id, contested, rank.name if rank else UNCONTESTED, pot_index,
                ))
                pot_index += 1
        else:
            _split_layer(settlement, eligible, ranks, layer_total, pot_index)
            pot_index += 1

        previous = level

    return settlement


def _split_layer(
    settlement: Settlement,
    eligible: List[Player],
    ranks: Dict[int, Optional[HandRank]],
    amount: int,
    pot_index: int,
) -> None:
    """Award one pot to the best hand(s) among ``eligible``."""
    best = max(ranks[p.player_id] for p in eligible)
    winners = [p for p in eligible if ranks[p.player_id] == best]

    share, remainder = divmod(amount, len(winners))
    for n, winner in enumerate(winners):
        won = share + (remainder if n == 0 else 0)
        settlement.awards.append(PotAward(winner.player_id, won, best.name, pot_index))

    logger.debug(
        f"Pot {pot_index} ({amount}) to {[w.player_id for w in winners]} with {best.name}"
    )


def _rank_of(player: Player, community: Sequence[Card]) -> Optional[HandRank]:
    if len(player.hole_cards) + len(community) < 5:
        return None
    return get_best_hand(player.hole_cards, community)
