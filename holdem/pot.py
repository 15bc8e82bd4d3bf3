"""Chip accounting for one hand: contributions, side-pot layers and payouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Mapping, Set

from .evaluator import EvaluatedHand


@dataclass(frozen=True)
class PotLayer:
    # Cumulative contribution a player needs to have funded this layer in full.
    level: int
    amount_per_player: int
    amount: int
    eligible: FrozenSet[int]


@dataclass(frozen=True)
class Award:
    seat: int
    amount: int
    pot_index: int


class PotManager:
    def __init__(self) -> None:
        self._contributions: Dict[int, int] = {}
        self._folded: Set[int] = set()

    @property
    def total(self) -> int:
        return sum(self._contributions.values())

    def contributions(self) -> Dict[int, int]:
        return dict(self._contributions)

    def add(self, seat: int, amount: int) -> None:
        assert amount >= 0, "negative contribution"
        if amount:
            self._contributions[seat] = self._contributions.get(seat, 0) + amount

    def mark_folded(self, seat: int) -> None:
        self._folded.add(seat)

    def layers(self) -> List[PotLayer]:
        """Main pot first, then one layer per higher contribution level.

        A layer whose funders all folded has no eligible seats; it goes to
        whoever wins the layer below it.
        """
        levels = sorted({amount for amount in self._contributions.values() if amount > 0})
        layers: List[PotLayer] = []
        previous = 0
        for level in levels:
            funders = [seat for seat, amount in self._contributions.items() if amount >= level]
            step = level - previous
            previous = level
            layers.append(
                PotLayer(
                    level=level,
                    amount_per_player=step,
                    amount=step * len(funders),
                    eligible=frozenset(seat for seat in funders if seat not in self._folded),
                )
            )
        assert sum(layer.amount for layer in layers) == self.total, "pot layers do not sum to contributions"
        return layers

    def award_uncontested(self, seat: int) -> List[Award]:
        return [Award(seat=seat, amount=layer.amount, pot_index=idx) for idx, layer in enumerate(self.layers())]

    def award_showdown(
        self,
        hands: Mapping[int, EvaluatedHand],
        dealer: int,
        seat_count: int,
    ) -> List[Award]:
        """Split each layer among its best eligible hands.

        Odd chips go one at a time to the tied winners in clockwise order
        starting from the first seat left of the dealer.
        """
        clockwise = [(dealer + offset) % seat_count for offset in range(1, seat_count + 1)]
        awards: List[Award] = []
        winners: List[int] = []
        for idx, layer in enumerate(self.layers()):
            contenders = [seat for seat in clockwise if seat in layer.eligible and seat in hands]
            if contenders:
                best = max(hands[seat] for seat in contenders)
                winners = [seat for seat in contenders if hands[seat] == best]
            assert winners, "no evaluated hand for pot layer"
            share, remainder = divmod(layer.amount, len(winners))
            for position, seat in enumerate(winners):
                payout = share + (1 if position < remainder else 0)
                awards.append(Award(seat=seat, amount=payout, pot_index=idx))
        assert sum(award.amount for award in awards) == self.total, "payouts do not match pot"
        return awards

    def clear(self) -> None:
        self._contributions.clear()
        self._folded.clear()
