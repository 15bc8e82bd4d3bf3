from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set

from .errors import InsufficientChips, InvalidAction, InvalidRaiseAmount, OutOfTurn
from .models import Action, ActionType, LegalActions, Player, PlayerStatus, Street
from .pot import PotManager


class BettingRound:
    """No-limit betting for one street.

    The round is awaiting ``to_act`` until every active player has matched
    ``bet_to_call`` and acted since the last full raise, or until at most one
    player is left in the hand. ``to_act`` is None once the round is complete.
    """

    def __init__(
        self,
        street: Street,
        players: Sequence[Optional[Player]],
        pot: PotManager,
        start_seat: int,
        min_raise: int,
        bet_to_call: Optional[int] = None,
    ) -> None:
        self.street = street
        self.players = players
        self.pot = pot
        if bet_to_call is None:
            bet_to_call = max((p.contribution for p in players if p and p.in_hand), default=0)
        self.bet_to_call = bet_to_call
        self.min_raise = min_raise
        self.acted: Set[int] = set()
        self.last_aggressor: Optional[int] = None
        self.to_act: Optional[int] = self._first_to_act(start_seat)

    @property
    def is_complete(self) -> bool:
        return self.to_act is None

    # Turn order -------------------------------------------------------

    def _seats_from(self, start: int) -> List[int]:
        count = len(self.players)
        return [(start + offset) % count for offset in range(count)]

    def _in_hand_count(self) -> int:
        return sum(1 for p in self.players if p and p.in_hand)

    def _needs_action(self, seat: int) -> bool:
        player = self.players[seat]
        if player is None or player.status is not PlayerStatus.ACTIVE:
            return False
        if player.contribution < self.bet_to_call:
            return True
        if seat in self.acted:
            return False
        # A lone player with chips has nobody left to bet against.
        return sum(1 for p in self.players if p and p.can_act) > 1

    def _first_to_act(self, start: int) -> Optional[int]:
        if self._in_hand_count() <= 1:
            return None
        return next((seat for seat in self._seats_from(start) if self._needs_action(seat)), None)

    # Actions ----------------------------------------------------------

    def legal_actions(self, seat: int) -> LegalActions:
        if self.to_act is None or seat != self.to_act:
            return LegalActions(pot=self.pot.total)
        player = self.players[seat]
        assert player is not None
        to_call = max(self.bet_to_call - player.contribution, 0)

        actions = [ActionType.FOLD, ActionType.CHECK if to_call == 0 else ActionType.CALL]
        can_raise = seat not in self.acted and player.chips > to_call
        min_raise = max_raise = None
        if can_raise:
            max_raise = player.chips - to_call
            min_raise = min(self.min_raise, max_raise)
            actions.append(ActionType.RAISE)
        if can_raise or player.chips <= to_call:
            actions.append(ActionType.ALL_IN)
        return LegalActions(
            actions=tuple(actions),
            call_amount=min(to_call, player.chips),
            min_raise=min_raise,
            max_raise=max_raise,
            pot=self.pot.total,
        )

    def apply(self, seat: int, action: Action) -> List[Dict[str, object]]:
        """Validate and apply one action. Raises without mutating on rejection."""
        if self.to_act is None:
            raise InvalidAction("Betting round is complete")
        if seat != self.to_act:
            raise OutOfTurn(f"Seat {seat} acted out of turn; waiting on seat {self.to_act}")
        player = self.players[seat]
        assert player is not None and player.can_act
        to_call = max(self.bet_to_call - player.contribution, 0)

        if action.type is ActionType.FOLD:
            player.fold()
            self.pot.mark_folded(seat)
            event: Dict[str, object] = {"ev": "FOLD", "seat": seat}
        elif action.type is ActionType.CHECK:
            if to_call > 0:
                raise InvalidAction("Cannot check when a bet is pending")
            self.acted.add(seat)
            event = {"ev": "CHECK", "seat": seat}
        elif action.type is ActionType.CALL:
            if to_call == 0:
                raise InvalidAction("Nothing to call")
            event = self._call(player, to_call)
        elif action.type is ActionType.RAISE:
            event = self._raise(player, action.amount, to_call)
        elif action.type is ActionType.ALL_IN:
            if player.chips <= to_call:
                event = self._call(player, to_call)
            else:
                event = self._raise(player, player.chips - to_call, to_call)
        else:
            raise InvalidAction(f"Unsupported action {action.type}")

        self.to_act = self._first_to_act(seat + 1)
        return [event]

    def _commit(self, player: Player, amount: int) -> None:
        player.commit(amount)
        self.pot.add(player.seat, amount)

    def _call(self, player: Player, to_call: int) -> Dict[str, object]:
        # Short stacks call for whatever they have left.
        amount = min(to_call, player.chips)
        self._commit(player, amount)
        self.acted.add(player.seat)
        return {
            "ev": "CALL",
            "seat": player.seat,
            "amount": amount,
            "all_in": player.status is PlayerStatus.ALL_IN,
        }

    def _raise(self, player: Player, amount: Optional[int], to_call: int) -> Dict[str, object]:
        if player.seat in self.acted:
            raise InvalidAction("Betting has not been reopened; call or fold")
        if amount is None or amount <= 0:
            raise InvalidRaiseAmount("Raise amount must be positive")
        cost = to_call + amount
        if cost > player.chips:
            raise InsufficientChips(f"Raise costs {cost} but seat {player.seat} has {player.chips}")
        all_in = cost == player.chips
        if amount < self.min_raise and not all_in:
            raise InvalidRaiseAmount(f"Raise of {amount} is below the minimum of {self.min_raise}")

        opened = self.bet_to_call == 0
        self._commit(player, cost)
        self.bet_to_call = player.contribution
        full_raise = amount >= self.min_raise
        if full_raise:
            self.min_raise = amount
            self.acted = {player.seat}
            self.last_aggressor = player.seat
        else:
            # All-in for less than a full raise does not reopen the action.
            self.acted.add(player.seat)
        return {
            "ev": "BET" if opened else "RAISE",
            "seat": player.seat,
            "amount": cost,
            "raise_to": self.bet_to_call,
            "all_in": all_in,
            "full_raise": full_raise,
        }
