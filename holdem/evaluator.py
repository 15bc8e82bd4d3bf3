from __future__ import annotations

import itertools
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .cards import Card
from .errors import InsufficientCards


class HandCategory(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


@dataclass(frozen=True, order=True)
class EvaluatedHand:
    """Best five-card result. Compares by category, then ranks lexicographically."""

    category: HandCategory
    ranks: Tuple[int, ...]

    @property
    def name(self) -> str:
        return describe_rank(self)


def evaluate(cards: Iterable[Card]) -> EvaluatedHand:
    """Return the best five-card hand out of 5 to 7 cards. Higher is better."""
    cards = list(cards)
    if len(cards) < 5:
        raise InsufficientCards(f"Need at least 5 cards to evaluate, got {len(cards)}")
    if len(cards) > 7:
        raise ValueError(f"Cannot evaluate more than 7 cards, got {len(cards)}")
    assert len(set(cards)) == len(cards), "duplicate card in hand"

    by_suit: Dict[object, List[int]] = {}
    for card in cards:
        by_suit.setdefault(card.suit, []).append(card.rank)
    flush_ranks = next(
        (sorted(ranks, reverse=True) for ranks in by_suit.values() if len(ranks) >= 5),
        None,
    )
    if flush_ranks:
        straight = _straight_ranks(flush_ranks)
        if straight:
            if straight[0] == 14:
                return EvaluatedHand(HandCategory.ROYAL_FLUSH, straight)
            return EvaluatedHand(HandCategory.STRAIGHT_FLUSH, straight)

    ranks = sorted((card.rank for card in cards), reverse=True)
    counts = Counter(ranks)
    groups = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    top_rank, top_count = groups[0]

    if top_count == 4:
        kicker = max(rank for rank in ranks if rank != top_rank)
        return EvaluatedHand(HandCategory.FOUR_OF_A_KIND, (top_rank, kicker))
    if top_count == 3 and groups[1][1] >= 2:
        return EvaluatedHand(HandCategory.FULL_HOUSE, (top_rank, groups[1][0]))
    if flush_ranks:
        return EvaluatedHand(HandCategory.FLUSH, tuple(flush_ranks[:5]))

    straight = _straight_ranks(ranks)
    if straight:
        return EvaluatedHand(HandCategory.STRAIGHT, straight)

    if top_count == 3:
        kickers = [rank for rank in ranks if rank != top_rank][:2]
        return EvaluatedHand(HandCategory.THREE_OF_A_KIND, (top_rank, *kickers))
    if top_count == 2 and groups[1][1] == 2:
        high_pair, low_pair = top_rank, groups[1][0]
        kicker = max(rank for rank in ranks if rank not in (high_pair, low_pair))
        return EvaluatedHand(HandCategory.TWO_PAIR, (high_pair, low_pair, kicker))
    if top_count == 2:
        kickers = [rank for rank in ranks if rank != top_rank][:3]
        return EvaluatedHand(HandCategory.PAIR, (top_rank, *kickers))
    return EvaluatedHand(HandCategory.HIGH_CARD, tuple(ranks[:5]))


def _straight_ranks(ranks: Iterable[int]) -> Optional[Tuple[int, ...]]:
    distinct = set(ranks)
    if 14 in distinct:  # Ace low
        distinct.add(1)
    for high in range(14, 4, -1):
        window = tuple(range(high, high - 5, -1))
        if distinct.issuperset(window):
            return window
    return None


def evaluate_exhaustive(cards: Sequence[Card]) -> EvaluatedHand:
    """Reference evaluator: score every 5-card subset and keep the best."""
    if len(cards) < 5:
        raise InsufficientCards(f"Need at least 5 cards to evaluate, got {len(cards)}")
    if len(cards) > 7:
        raise ValueError(f"Cannot evaluate more than 7 cards, got {len(cards)}")
    best: Optional[EvaluatedHand] = None
    for combo in itertools.combinations(cards, 5):
        score = _evaluate_five(combo)
        if best is None or score > best:
            best = score
    assert best is not None
    return best


def _evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    ranks = sorted((card.rank for card in cards), reverse=True)
    is_flush = len({card.suit for card in cards}) == 1
    straight = _straight_ranks(ranks)

    counts: Dict[int, int] = {}
    for rank in ranks:
        counts.setdefault(rank, 0)
        counts[rank] += 1
    ordered_counts = sorted(counts.items(), key=lambda x: (x[1], x[0]), reverse=True)
    count_values = [count for _, count in ordered_counts]
    by_count = tuple(rank for rank, _ in ordered_counts)

    if straight and is_flush:
        category = HandCategory.ROYAL_FLUSH if straight[0] == 14 else HandCategory.STRAIGHT_FLUSH
        return EvaluatedHand(category, straight)
    if count_values[0] == 4:
        return EvaluatedHand(HandCategory.FOUR_OF_A_KIND, by_count)
    if count_values[:2] == [3, 2]:
        return EvaluatedHand(HandCategory.FULL_HOUSE, by_count)
    if is_flush:
        return EvaluatedHand(HandCategory.FLUSH, tuple(ranks))
    if straight:
        return EvaluatedHand(HandCategory.STRAIGHT, straight)
    if count_values[0] == 3:
        return EvaluatedHand(HandCategory.THREE_OF_A_KIND, by_count)
    if count_values[:2] == [2, 2]:
        return EvaluatedHand(HandCategory.TWO_PAIR, by_count)
    if count_values[0] == 2:
        return EvaluatedHand(HandCategory.PAIR, by_count)
    return EvaluatedHand(HandCategory.HIGH_CARD, tuple(ranks))


def describe_rank(hand: EvaluatedHand) -> str:
    return hand.category.name.lower()
