from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Union

from .betting import BettingRound
from .cards import Card, Deck, build_deck, cards_to_labels
from .errors import InvalidAction
from .evaluator import EvaluatedHand, describe_rank, evaluate
from .models import (
    NEXT_STREET,
    STREET_CARDS,
    Action,
    ActionType,
    LegalActions,
    Player,
    PlayerStatus,
    PotView,
    RoundOutcome,
    SeatView,
    ShowdownResult,
    Street,
    TableConfig,
    TableSnapshot,
)
from .pot import Award, PotManager

LOGGER = logging.getLogger("holdem.engine")

# GameEngine keeps all table state in memory. No presentation code lives
# here; a UI calls apply_action/start_hand and renders snapshot() values.


@dataclass
class HandContext:
    # All mutable info about the current hand (deck, pot, betting round, etc.).
    hand_id: str
    seed: Optional[int]
    button: int
    deck: Deck
    pot: PotManager = field(default_factory=PotManager)
    community: List[Card] = field(default_factory=list)
    street: Street = Street.PRE_FLOP
    betting: Optional[BettingRound] = None
    sb_seat: Optional[int] = None
    bb_seat: Optional[int] = None
    chips_in_play: int = 0
    complete: bool = False
    revealed: Set[int] = field(default_factory=set)
    results: List[ShowdownResult] = field(default_factory=list)
    pre_events: List[Dict[str, object]] = field(default_factory=list)


class GameEngine:
    """No-Limit Texas Hold'em engine for a single table."""

    def __init__(self, config: Optional[TableConfig] = None) -> None:
        self.config = config or TableConfig()
        self.seats: List[Optional[Player]] = [None] * self.config.seats
        self.button: Optional[int] = None
        self.hand_counter = 0
        self.hand: Optional[HandContext] = None

    # Seat management -------------------------------------------------

    def assign_seat(self, name: str, stack: Optional[int] = None) -> Player:
        display = name.strip()
        if not display:
            raise ValueError("Player name required")

        key = display.casefold()
        for player in self.seats:
            if player and player.name.casefold() == key:
                return player

        for idx in range(self.config.seats):
            if self.seats[idx] is None:
                chips = self.config.starting_stack if stack is None else stack
                player = Player(seat=idx, name=display, chips=chips)
                player.reset_for_hand()
                if self.hand_in_progress():
                    # Joins from the next hand.
                    player.status = PlayerStatus.SITTING_OUT
                    assert self.hand is not None
                    self.hand.chips_in_play += chips
                self.seats[idx] = player
                return player

        raise RuntimeError("Table is full")

    def sit_out(self, seat_idx: int) -> None:
        self._set_sitting_out(seat_idx, True)

    def sit_in(self, seat_idx: int) -> None:
        self._set_sitting_out(seat_idx, False)

    def _set_sitting_out(self, seat_idx: int, sitting_out: bool) -> None:
        player = self._player(seat_idx)
        player.wants_to_sit_out = sitting_out
        # Takes effect from the next hand when one is running.
        if not self.hand_in_progress():
            player.reset_for_hand()

    def _player(self, seat_idx: int) -> Player:
        if not 0 <= seat_idx < len(self.seats) or self.seats[seat_idx] is None:
            raise RuntimeError("Seat empty")
        player = self.seats[seat_idx]
        assert player is not None
        return player

    def _players(self) -> List[Player]:
        return [player for player in self.seats if player is not None]

    def _dealt_in(self) -> List[Player]:
        return [p for p in self._players() if p.status is not PlayerStatus.SITTING_OUT]

    def _next_dealt_in(self, start: int) -> int:
        count = len(self.seats)
        for offset in range(1, count + 1):
            idx = (start + offset) % count
            player = self.seats[idx]
            if player and player.status is not PlayerStatus.SITTING_OUT:
                return idx
        raise RuntimeError("No players dealt in")

    # Hand lifecycle --------------------------------------------------

    def can_start_hand(self) -> bool:
        ready = [p for p in self._players() if p.chips > 0 and not p.wants_to_sit_out]
        return len(ready) >= 2

    def hand_in_progress(self) -> bool:
        return self.hand is not None and not self.hand.complete

    def is_hand_complete(self) -> bool:
        return bool(self.hand and self.hand.complete)

    def start_hand(self, seed: Optional[int] = None) -> HandContext:
        if self.hand_in_progress():
            raise InvalidAction("Hand already in progress")
        if not self.can_start_hand():
            raise RuntimeError("Not enough active players to start a hand")

        for player in self._players():
            player.reset_for_hand()

        if self.button is None:
            self.button = self._dealt_in()[0].seat
        else:
            self.button = self._next_dealt_in(self.button)

        ctx = HandContext(
            hand_id=f"H-{self.hand_counter:05d}",
            seed=seed,
            button=self.button,
            deck=build_deck(seed),
            chips_in_play=sum(p.chips for p in self._players()),
        )
        self.hand_counter += 1
        self.hand = ctx

        self._post_blinds(ctx)
        self._deal_hole_cards(ctx)

        heads_up = len(self._dealt_in()) == 2
        assert ctx.bb_seat is not None and ctx.sb_seat is not None
        start_seat = ctx.sb_seat if heads_up else (ctx.bb_seat + 1) % len(self.seats)
        ctx.betting = BettingRound(
            Street.PRE_FLOP,
            self.seats,
            ctx.pot,
            start_seat=start_seat,
            min_raise=self.config.bb,
            bet_to_call=self.config.bb,
        )
        LOGGER.info(
            "Hand %s started: button=%s sb=%s bb=%s players=%s",
            ctx.hand_id,
            ctx.button,
            ctx.sb_seat,
            ctx.bb_seat,
            len(self._dealt_in()),
        )
        if ctx.betting.is_complete:
            # Blinds alone put everyone all-in.
            ctx.pre_events.extend(self._advance(ctx))
        return ctx

    def _post_blinds(self, ctx: HandContext) -> None:
        if len(self._dealt_in()) == 2:
            sb_seat = ctx.button
        else:
            sb_seat = self._next_dealt_in(ctx.button)
        bb_seat = self._next_dealt_in(sb_seat)
        for seat_idx, blind in ((sb_seat, self.config.sb), (bb_seat, self.config.bb)):
            player = self._player(seat_idx)
            amount = min(player.chips, blind)
            player.commit(amount)
            ctx.pot.add(seat_idx, amount)

        ctx.sb_seat = sb_seat
        ctx.bb_seat = bb_seat
        ctx.pre_events.append(
            {
                "ev": "POST_BLINDS",
                "sb_seat": sb_seat,
                "bb_seat": bb_seat,
                "sb": self.config.sb,
                "bb": self.config.bb,
            }
        )

    def _deal_hole_cards(self, ctx: HandContext) -> None:
        # One card at a time, starting left of the button.
        order = []
        seat_idx = ctx.button
        for _ in range(len(self._dealt_in())):
            seat_idx = self._next_dealt_in(seat_idx)
            order.append(seat_idx)
        for _ in range(2):
            for seat_idx in order:
                self._player(seat_idx).receive(ctx.deck.draw(1))

    def consume_pre_events(self) -> List[Dict[str, object]]:
        if not self.hand:
            return []
        events = list(self.hand.pre_events)
        self.hand.pre_events.clear()
        return events

    # Action handling -------------------------------------------------

    def next_actor(self) -> Optional[int]:
        if not self.hand_in_progress():
            return None
        assert self.hand is not None and self.hand.betting is not None
        return self.hand.betting.to_act

    def legal_actions(self, seat_idx: int) -> LegalActions:
        if not self.hand_in_progress():
            return LegalActions()
        assert self.hand is not None and self.hand.betting is not None
        return self.hand.betting.legal_actions(seat_idx)

    def apply_action(
        self,
        seat_idx: int,
        action: Union[Action, ActionType],
        amount: Optional[int] = None,
    ) -> RoundOutcome:
        if self.hand is None:
            raise RuntimeError("Hand not in progress")
        ctx = self.hand
        if ctx.complete:
            raise InvalidAction("Hand is complete")
        if isinstance(action, ActionType):
            action = Action(action, amount)
        elif not isinstance(action, Action):
            raise InvalidAction(f"Unsupported action {action}")

        assert ctx.betting is not None
        street = ctx.street
        events = ctx.betting.apply(seat_idx, action)
        LOGGER.debug("Hand %s %s: seat %s %s", ctx.hand_id, street.value, seat_idx, events[-1])

        round_complete = ctx.betting.is_complete
        if round_complete:
            events.extend(self._advance(ctx))
        return RoundOutcome(
            street=ctx.street,
            events=events,
            round_complete=round_complete,
            hand_complete=ctx.complete,
            next_seat=self.next_actor(),
        )

    def _in_hand(self) -> List[Player]:
        return [p for p in self._players() if p.in_hand]

    def _advance(self, ctx: HandContext) -> List[Dict[str, object]]:
        """Move past a completed betting round: next street, showdown or fold-out."""
        contenders = self._in_hand()
        if len(contenders) == 1:
            winner = contenders[0]
            return self._pay(ctx, ctx.pot.award_uncontested(winner.seat))

        events: List[Dict[str, object]] = []
        while True:
            for player in self._players():
                player.reset_for_street()
            street = NEXT_STREET[ctx.street]
            if street is Street.SHOWDOWN:
                ctx.street = street
                events.extend(self._showdown(ctx))
                return events

            ctx.deck.burn()
            cards = ctx.deck.draw(STREET_CARDS[street])
            ctx.community.extend(cards)
            ctx.street = street
            events.append({"ev": street.value, "cards": cards_to_labels(cards)})
            LOGGER.debug("Hand %s dealt %s: %s", ctx.hand_id, street.value, cards_to_labels(cards))

            ctx.betting = BettingRound(
                street,
                self.seats,
                ctx.pot,
                start_seat=(ctx.button + 1) % len(self.seats),
                min_raise=self.config.bb,
                bet_to_call=0,
            )
            if not ctx.betting.is_complete:
                return events
            # Nobody can bet any more; keep running out the board.

    def _showdown(self, ctx: HandContext) -> List[Dict[str, object]]:
        events: List[Dict[str, object]] = []
        board = cards_to_labels(ctx.community)
        hands: Dict[int, EvaluatedHand] = {}
        for player in self._in_hand():
            hands[player.seat] = evaluate(player.hole_cards + ctx.community)
            ctx.revealed.add(player.seat)
            events.append(
                {
                    "ev": "SHOWDOWN",
                    "seat": player.seat,
                    "hand": cards_to_labels(player.hole_cards),
                    "board": board,
                    "rank": describe_rank(hands[player.seat]),
                }
            )
        awards = ctx.pot.award_showdown(hands, ctx.button, len(self.seats))
        events.extend(self._pay(ctx, awards, hands))
        return events

    def _pay(
        self,
        ctx: HandContext,
        awards: List[Award],
        hands: Optional[Dict[int, EvaluatedHand]] = None,
    ) -> List[Dict[str, object]]:
        hands = hands or {}
        events: List[Dict[str, object]] = []
        won: Dict[int, int] = {}
        for award in awards:
            self._player(award.seat).collect(award.amount)
            won[award.seat] = won.get(award.seat, 0) + award.amount
            events.append({"ev": "POT_AWARD", "seat": award.seat, "amount": award.amount, "pot": award.pot_index})
            LOGGER.info("Hand %s: seat %s wins %s from pot %s", ctx.hand_id, award.seat, award.amount, award.pot_index)

        ctx.results = [
            ShowdownResult(
                seat=player.seat,
                hole_cards=tuple(cards_to_labels(player.hole_cards)) if player.seat in ctx.revealed else (),
                rank=describe_rank(hands[player.seat]) if player.seat in hands else None,
                won=won.get(player.seat, 0),
            )
            for player in self._in_hand()
        ]
        ctx.pot.clear()
        ctx.complete = True
        for player in self._players():
            player.reset_for_street()
            if player.chips == 0 and player.status is not PlayerStatus.SITTING_OUT:
                events.append({"ev": "ELIMINATED", "seat": player.seat})
        assert sum(p.chips for p in self._players()) == ctx.chips_in_play, "chips created or destroyed"
        return events

    # Snapshot --------------------------------------------------------

    def snapshot(self, viewer: Optional[int] = None) -> TableSnapshot:
        ctx = self.hand
        revealed = ctx.revealed if ctx else set()
        seats = tuple(
            SeatView(
                seat=player.seat,
                name=player.name,
                chips=player.chips,
                contribution=player.contribution,
                total_contributed=player.total_contributed,
                status=player.status,
                hole_cards=(
                    tuple(cards_to_labels(player.hole_cards))
                    if player.hole_cards and (player.seat == viewer or player.seat in revealed)
                    else None
                ),
                is_dealer=player.seat == self.button,
            )
            for player in self._players()
        )
        if ctx is None:
            return TableSnapshot(
                hand_id=None,
                street=None,
                dealer=self.button,
                community=(),
                seats=seats,
                pots=(),
                pot_total=0,
                bet_to_call=0,
                to_act=None,
                hand_complete=False,
            )
        pots = tuple(PotView(amount=layer.amount, eligible=tuple(sorted(layer.eligible))) for layer in ctx.pot.layers())
        return TableSnapshot(
            hand_id=ctx.hand_id,
            street=ctx.street,
            dealer=ctx.button,
            community=tuple(cards_to_labels(ctx.community)),
            seats=seats,
            pots=pots,
            pot_total=ctx.pot.total,
            bet_to_call=ctx.betting.bet_to_call if ctx.betting and not ctx.complete else 0,
            to_act=self.next_actor(),
            hand_complete=ctx.complete,
            results=tuple(ctx.results),
        )
