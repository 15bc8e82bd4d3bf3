from __future__ import annotations

import random
from typing import List, Optional

from holdem.cards import Card
from holdem.game import GameEngine
from holdem.models import Action, ActionType, Street


_RNG = random.Random()


def _rough_hand_strength(hole: List[Card]) -> int:
    """Very rough proxy for hand quality used to drive aggression choices."""
    if len(hole) < 2:
        return 0

    values = [card.rank for card in hole]
    score = sum(values)
    if values[0] == values[1]:
        score += 14  # pairs are quite strong pre-flop
    else:
        gap = abs(values[0] - values[1])
        if gap == 1:
            score += 4
        elif gap == 2:
            score += 2
    if hole[0].suit == hole[1].suit:
        score += 3
    if min(values) >= 11:
        score += 2

    return score


def _should_raise(strength: int, street: Street, facing_bet: bool, rng: random.Random) -> bool:
    base = 0.2 if facing_bet else 0.35
    street_bonus = {
        Street.PRE_FLOP: 0.0,
        Street.FLOP: 0.05,
        Street.TURN: 0.1,
        Street.RIVER: 0.12,
    }.get(street, 0.0)
    scaled_strength = min(strength / 45.0, 0.45)
    probability = min(0.85, base + street_bonus + scaled_strength)

    # Always attack with premium holdings.
    if strength >= 36:
        return True
    return rng.random() < probability


def _choose_raise_amount(min_raise: int, max_raise: int, facing_bet: bool, rng: random.Random) -> int:
    if max_raise <= min_raise:
        return min_raise

    span = max_raise - min_raise
    roll = rng.random()

    # Facing a bet -> weight toward stronger responses, otherwise mix in more probes.
    if facing_bet:
        if roll < 0.2:
            return min_raise
        if roll > 0.85:
            return max_raise
    else:
        if roll < 0.35:
            return min_raise
        if roll > 0.9:
            return max_raise

    return min_raise + int(span * rng.random())


def baseline_strategy(engine: GameEngine, seat_idx: int, rng: Optional[random.Random] = None) -> Action:
    """Aggressive demo bot: mixes in random raises with a bias toward stronger holdings."""
    rng = rng or _RNG
    legal = engine.legal_actions(seat_idx)
    if not legal.actions:
        raise RuntimeError(f"Seat {seat_idx} has no legal actions")

    player = engine.seats[seat_idx]
    hole = player.hole_cards if player else []
    strength = _rough_hand_strength(hole)
    street = engine.hand.street if engine.hand else Street.PRE_FLOP
    facing_bet = legal.call_amount > 0

    if ActionType.RAISE in legal and hole and _should_raise(strength, street, facing_bet, rng):
        assert legal.min_raise is not None and legal.max_raise is not None
        return Action.raise_by(_choose_raise_amount(legal.min_raise, legal.max_raise, facing_bet, rng))

    if ActionType.CALL in legal:
        # Don't pay off big bets with junk.
        if legal.pot_odds > 0.4 and strength < 20:
            return Action.fold()
        return Action.call()

    # Prefer checking when no chips are at risk.
    if ActionType.CHECK in legal:
        return Action.check()

    return Action.fold()
