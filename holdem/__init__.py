"""No-limit Texas Hold'em engine: cards, hand evaluation, betting and pots."""

from .betting import BettingRound
from .cards import Card, Deck, Suit, build_deck, parse_cards, parse_label
from .errors import (
    InsufficientCards,
    InsufficientChips,
    InvalidAction,
    InvalidRaiseAmount,
    OutOfTurn,
    PokerError,
)
from .evaluator import EvaluatedHand, HandCategory, describe_rank, evaluate
from .game import GameEngine, HandContext
from .models import (
    Action,
    ActionType,
    LegalActions,
    Player,
    PlayerStatus,
    RoundOutcome,
    Street,
    TableConfig,
    TableSnapshot,
)
from .pot import PotLayer, PotManager

__all__ = [
    "BettingRound",
    "Card",
    "Deck",
    "Suit",
    "build_deck",
    "parse_cards",
    "parse_label",
    "InsufficientCards",
    "InsufficientChips",
    "InvalidAction",
    "InvalidRaiseAmount",
    "OutOfTurn",
    "PokerError",
    "EvaluatedHand",
    "HandCategory",
    "describe_rank",
    "evaluate",
    "GameEngine",
    "HandContext",
    "Action",
    "ActionType",
    "LegalActions",
    "Player",
    "PlayerStatus",
    "RoundOutcome",
    "Street",
    "TableConfig",
    "TableSnapshot",
    "PotLayer",
    "PotManager",
]
