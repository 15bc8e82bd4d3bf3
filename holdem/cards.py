from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .errors import InsufficientCards

RANK_LABELS = {14: "A", 13: "K", 12: "Q", 11: "J", 10: "T"}
LABEL_RANKS = {label: rank for rank, label in RANK_LABELS.items()}
RANKS = tuple(range(2, 15))


class Suit(str, Enum):
    SPADES = "s"
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)


_SUIT_SYMBOLS = {Suit.SPADES: "♠", Suit.HEARTS: "♥", Suit.DIAMONDS: "♦", Suit.CLUBS: "♣"}
_SYMBOL_SUITS = {symbol: suit for suit, symbol in _SUIT_SYMBOLS.items()}


@dataclass(frozen=True, order=True)
class Card:
    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, int) or self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            try:
                object.__setattr__(self, "suit", Suit(self.suit))
            except ValueError:
                raise ValueError(f"Invalid suit: {self.suit}") from None

    @property
    def label(self) -> str:
        return f"{RANK_LABELS.get(self.rank, str(self.rank))}{self.suit.value}"

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    def __str__(self) -> str:
        rank = "10" if self.rank == 10 else RANK_LABELS.get(self.rank, str(self.rank))
        return f"{rank}{self.suit.symbol}"


class Deck:
    """The 52 distinct cards of one hand, drawn from the top without replacement."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._cards: List[Card] = [Card(rank, suit) for suit in Suit for rank in RANKS]

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Deck":
        """Build a stacked deck that deals ``cards`` in the given order."""
        deck = cls()
        deck._cards = list(cards)
        assert len(set(deck._cards)) == len(deck._cards), "duplicate card in deck"
        return deck

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def remaining(self) -> int:
        return len(self._cards)

    def shuffle(self) -> None:
        # random.shuffle is an in-place Fisher-Yates.
        self._rng.shuffle(self._cards)

    def draw(self, count: int = 1) -> List[Card]:
        if count < 0:
            raise ValueError("Cannot draw a negative number of cards")
        if count > len(self._cards):
            raise InsufficientCards(f"Not enough cards left in deck ({len(self._cards)} < {count})")
        cards = self._cards[:count]
        del self._cards[:count]
        return cards

    def burn(self) -> Card:
        return self.draw(1)[0]


def build_deck(seed: Optional[int] = None) -> Deck:
    deck = Deck(random.Random(seed))
    deck.shuffle()
    return deck


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    """Parse ``"As"``, ``"Th"``, ``"10h"`` or display forms such as ``"A♠"``."""
    if len(label) not in (2, 3):
        raise ValueError(f"Invalid card label: {label}")
    rank_part, suit_part = label[:-1], label[-1]
    suit = _SYMBOL_SUITS.get(suit_part)
    if suit is None:
        try:
            suit = Suit(suit_part.lower())
        except ValueError:
            raise ValueError(f"Invalid suit: {suit_part}") from None
    rank_part = rank_part.upper()
    if rank_part in LABEL_RANKS:
        rank = LABEL_RANKS[rank_part]
    elif rank_part.isdigit():
        rank = int(rank_part)
    else:
        raise ValueError(f"Invalid rank: {rank_part}")
    return Card(rank, suit)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
