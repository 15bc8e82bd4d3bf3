from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from holdem.cards import Card, Deck, RANKS, Suit, parse_cards
from holdem.game import GameEngine, HandContext
from holdem.models import ActionType, TableConfig


def create_engine(
    *,
    seats: int = 4,
    starting_stack: int = 1_000,
    sb: int = 10,
    bb: int = 20,
) -> GameEngine:
    """Instantiate a game engine with a populated table."""
    engine = GameEngine(TableConfig(seats=seats, starting_stack=starting_stack, sb=sb, bb=bb))
    for idx in range(seats):
        engine.assign_seat(f"Player{idx}")
    return engine


def start_hand(engine: GameEngine, seed: int = 42) -> HandContext:
    ctx = engine.start_hand(seed=seed)
    assert ctx is not None
    return ctx


def perform_actions(engine: GameEngine, actions: Iterable[Tuple[int, ActionType, Optional[int]]]) -> None:
    """Apply a scripted sequence of actions (seat, action, amount)."""
    for seat_idx, action, amount in actions:
        engine.apply_action(seat_idx, action, amount)


def passive_action(engine: GameEngine, seat_idx: int) -> ActionType:
    legal = engine.legal_actions(seat_idx)
    if ActionType.CHECK in legal:
        return ActionType.CHECK
    if ActionType.CALL in legal:
        return ActionType.CALL
    return ActionType.FOLD


def auto_complete_hand(engine: GameEngine) -> None:
    """Advance the current hand with straightforward actions until completion."""
    while engine.hand_in_progress():
        actor = engine.next_actor()
        assert actor is not None
        engine.apply_action(actor, passive_action(engine, actor))


def stacked_deck(holes: Sequence[Sequence[str]], board: Sequence[str], button: int = 0) -> Deck:
    """Deck that deals ``holes[seat]`` to every seat and ``board`` as the community cards.

    Assumes every seat is dealt in. Hole cards go out one at a time starting
    left of the button, and one card is burned before each community street.
    """
    seats = len(holes)
    order = [(button + offset) % seats for offset in range(1, seats + 1)]
    dealt = [holes[seat][0] for seat in order] + [holes[seat][1] for seat in order]
    used = set(parse_cards(dealt) + parse_cards(board))
    spare = [Card(rank, suit) for suit in Suit for rank in RANKS if Card(rank, suit) not in used]

    community = parse_cards(board)
    sequence = parse_cards(dealt)
    sequence += [spare.pop(), *community[:3], spare.pop(), community[3], spare.pop(), community[4]]
    sequence += spare
    return Deck.from_cards(sequence)


def chips_on_table(engine: GameEngine) -> int:
    """Chips in stacks plus chips committed to the current pot."""
    stacks = sum(player.chips for player in engine.seats if player)
    pot = engine.hand.pot.total if engine.hand else 0
    return stacks + pot
