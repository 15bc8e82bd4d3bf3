from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .cards import Card
from .errors import InsufficientChips, InvalidRaiseAmount


class Street(str, Enum):
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"


# Community cards dealt when entering each street.
STREET_CARDS = {Street.FLOP: 3, Street.TURN: 1, Street.RIVER: 1}
NEXT_STREET = {
    Street.PRE_FLOP: Street.FLOP,
    Street.FLOP: Street.TURN,
    Street.TURN: Street.RIVER,
    Street.RIVER: Street.SHOWDOWN,
}


class ActionType(str, Enum):
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


@dataclass(frozen=True)
class Action:
    """A player decision. Only RAISE carries an amount: the increment over the bet to call."""

    type: ActionType
    amount: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, ActionType):
            raise ValueError(f"Unsupported action {self.type}")
        if self.type is ActionType.RAISE:
            if self.amount is None:
                raise InvalidRaiseAmount("Raise requires amount")
        elif self.amount is not None:
            raise ValueError(f"{self.type.value} does not take an amount")

    @classmethod
    def fold(cls) -> "Action":
        return cls(ActionType.FOLD)

    @classmethod
    def check(cls) -> "Action":
        return cls(ActionType.CHECK)

    @classmethod
    def call(cls) -> "Action":
        return cls(ActionType.CALL)

    @classmethod
    def raise_by(cls, amount: int) -> "Action":
        return cls(ActionType.RAISE, amount)

    @classmethod
    def all_in(cls) -> "Action":
        return cls(ActionType.ALL_IN)


class PlayerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    FOLDED = "FOLDED"
    ALL_IN = "ALL_IN"
    SITTING_OUT = "SITTING_OUT"


@dataclass
class TableConfig:
    seats: int = 6
    starting_stack: int = 10_000
    sb: int = 10
    bb: int = 20

    def __post_init__(self) -> None:
        if not 2 <= self.seats <= 10:
            raise ValueError("Table must have between 2 and 10 seats")
        if self.starting_stack <= 0:
            raise ValueError("Starting stack must be positive")
        if self.sb <= 0 or self.bb < self.sb:
            raise ValueError("Blinds must satisfy 0 < sb <= bb")


@dataclass
class Player:
    seat: int
    name: str
    chips: int
    contribution: int = 0
    total_contributed: int = 0
    status: PlayerStatus = PlayerStatus.ACTIVE
    hole_cards: List[Card] = field(default_factory=list)
    wants_to_sit_out: bool = False

    @property
    def in_hand(self) -> bool:
        return self.status in (PlayerStatus.ACTIVE, PlayerStatus.ALL_IN)

    @property
    def can_act(self) -> bool:
        return self.status is PlayerStatus.ACTIVE

    def commit(self, amount: int) -> int:
        """Move chips from the stack into this street's contribution."""
        if amount < 0:
            raise ValueError("Cannot commit a negative amount")
        if amount > self.chips:
            raise InsufficientChips(f"Seat {self.seat} has {self.chips} chips, cannot commit {amount}")
        self.chips -= amount
        self.contribution += amount
        self.total_contributed += amount
        if self.chips == 0 and self.status is PlayerStatus.ACTIVE:
            self.status = PlayerStatus.ALL_IN
        return amount

    def fold(self) -> None:
        self.status = PlayerStatus.FOLDED

    def receive(self, cards: List[Card]) -> None:
        self.hole_cards.extend(cards)

    def collect(self, amount: int) -> None:
        assert amount >= 0, "negative payout"
        self.chips += amount

    def reset_for_hand(self) -> None:
        self.contribution = 0
        self.total_contributed = 0
        self.hole_cards.clear()
        if self.wants_to_sit_out or self.chips == 0:
            self.status = PlayerStatus.SITTING_OUT
        else:
            self.status = PlayerStatus.ACTIVE

    def reset_for_street(self) -> None:
        self.contribution = 0


@dataclass(frozen=True)
class LegalActions:
    actions: Tuple[ActionType, ...] = ()
    call_amount: int = 0
    min_raise: Optional[int] = None
    max_raise: Optional[int] = None
    pot: int = 0

    def __contains__(self, action: ActionType) -> bool:
        return action in self.actions

    @property
    def pot_odds(self) -> float:
        if self.call_amount <= 0:
            return 0.0
        return self.call_amount / (self.pot + self.call_amount)


@dataclass
class RoundOutcome:
    street: Street
    events: List[Dict[str, object]] = field(default_factory=list)
    round_complete: bool = False
    hand_complete: bool = False
    next_seat: Optional[int] = None


@dataclass(frozen=True)
class SeatView:
    seat: int
    name: str
    chips: int
    contribution: int
    total_contributed: int
    status: PlayerStatus
    hole_cards: Optional[Tuple[str, ...]]
    is_dealer: bool


@dataclass(frozen=True)
class PotView:
    amount: int
    eligible: Tuple[int, ...]


@dataclass(frozen=True)
class ShowdownResult:
    seat: int
    hole_cards: Tuple[str, ...]
    rank: Optional[str]
    won: int


@dataclass(frozen=True)
class TableSnapshot:
    hand_id: Optional[str]
    street: Optional[Street]
    dealer: Optional[int]
    community: Tuple[str, ...]
    seats: Tuple[SeatView, ...]
    pots: Tuple[PotView, ...]
    pot_total: int
    bet_to_call: int
    to_act: Optional[int]
    hand_complete: bool
    results: Tuple[ShowdownResult, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)
