"""
Scenario - The starting colony of a new game.

A new game starts with:
- The starting resource stock
- One Solar Panel and one Greenhouse at level 1
- Three healthy, unassigned colonists (Engineer, Scientist, Farmer)
- The standard events in their standard order
"""

from __future__ import annotations
from dataclasses import dataclass
import random

from .engine_core.buildings import BuildingKind, create_building
from .engine_core.colonists import Colonist, ColonistRoster, Specialization
from .engine_core.events import EventResolver, default_events
from .engine_core.resources import ResourceLedger
from .engine_core.state import Colony, GameState

STARTING_COLONISTS: list[tuple[str, Specialization]] = [
    ("Alex Chen", Specialization.ENGINEER),
    ("Maria Santos", Specialization.SCIENTIST),
    ("James Wilson", Specialization.FARMER),
]

STARTING_BUILDINGS: list[BuildingKind] = [
    BuildingKind.SOLAR_PANEL,
    BuildingKind.GREENHOUSE,
]


@dataclass
class NewGame:
    """Everything needed to start a game loop."""
    state: GameState
    colony: Colony
    resolver: EventResolver


def create_colony() -> Colony:
    roster = ColonistRoster()
    for name, specialization in STARTING_COLONISTS:
        roster.add(Colonist(name=name, specialization=specialization))

    return Colony(
        ledger=ResourceLedger(),
        buildings=[create_building(kind) for kind in STARTING_BUILDINGS],
        roster=roster,
    )


def create_game(seed: int | None = None) -> NewGame:
    """
    Create a fresh game.

    seed fixes the event rolls; None seeds from system entropy.
    """
    colony = create_colony()
    state = GameState(colonist_count=len(colony.roster))
    resolver = EventResolver(default_events(), rng=random.Random(seed))
    return NewGame(state=state, colony=colony, resolver=resolver)
