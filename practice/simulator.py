"""Headless multi-hand simulation with baseline bots in every seat.

Example:
    python -m practice --players 4 --hands 200 --seed 7
"""

from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence

from holdem.game import GameEngine
from holdem.models import TableConfig

from .bots import baseline_strategy

LOGGER = logging.getLogger("holdem.simulator")


@dataclass
class SessionSummary:
    hands_played: int
    total_chips: int
    final_stacks: Dict[str, int]

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def run_session(
    config: TableConfig,
    hands: int,
    seed: int = 42,
    names: Optional[Sequence[str]] = None,
) -> SessionSummary:
    engine = GameEngine(config)
    for idx in range(config.seats):
        engine.assign_seat(names[idx] if names else f"Bot{idx}")

    rng = random.Random(seed)
    total_chips = sum(player.chips for player in engine.seats if player)
    played = 0
    for hand_no in range(hands):
        if not engine.can_start_hand():
            LOGGER.info("One player holds every chip after %s hands", played)
            break
        engine.start_hand(seed=seed + hand_no)
        while engine.hand_in_progress():
            actor = engine.next_actor()
            assert actor is not None
            engine.apply_action(actor, baseline_strategy(engine, actor, rng))
        played += 1
        if played % 100 == 0:
            LOGGER.info("Simulated %s hands", played)

    stacks = {player.name: player.chips for player in engine.seats if player}
    assert sum(stacks.values()) == total_chips
    return SessionSummary(hands_played=played, total_chips=total_chips, final_stacks=stacks)
