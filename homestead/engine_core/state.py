"""
Game State - Phase state machine and the colony it drives.

Design principles:
- GameState is only mutated through next_phase() and end_game()
- END is terminal and is entered only through end_game();
  next_phase() never leads there
- The Colony owns its ledger, buildings and roster exclusively
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .buildings import Building
from .colonists import ColonistRoster
from .resources import ResourceLedger


class GamePhase(Enum):
    """Phases a turn cycles through. Values are the save-file codes."""
    SETUP = 0
    PRODUCTION = 1
    EVENT = 2
    MANAGEMENT = 3
    END = 4

    @property
    def label(self) -> str:
        return _PHASE_LABELS[self]


_PHASE_LABELS: dict[GamePhase, str] = {
    GamePhase.SETUP: "Setup",
    GamePhase.PRODUCTION: "Production",
    GamePhase.EVENT: "Event",
    GamePhase.MANAGEMENT: "Management",
    GamePhase.END: "Game Over",
}

_TRANSITIONS: dict[GamePhase, GamePhase] = {
    GamePhase.SETUP: GamePhase.PRODUCTION,
    GamePhase.PRODUCTION: GamePhase.EVENT,
    GamePhase.EVENT: GamePhase.MANAGEMENT,
    GamePhase.MANAGEMENT: GamePhase.PRODUCTION,
}


@dataclass
class GameState:
    """
    Phase, turn counter and running flag.

    colonist_count is a stored scalar for the save file; it is refreshed
    from the roster by the orchestrator, not kept live.
    """
    phase: GamePhase = GamePhase.SETUP
    turn: int = 1
    colonist_count: int = 0
    running: bool = True

    def next_phase(self):
        """Advance one phase. Management -> Production starts a new turn."""
        if self.phase == GamePhase.END:
            self.running = False
            return

        if self.phase == GamePhase.MANAGEMENT:
            self.turn += 1
        self.phase = _TRANSITIONS[self.phase]

    def end_game(self):
        self.phase = GamePhase.END
        self.running = False

    @property
    def phase_label(self) -> str:
        return self.phase.label


@dataclass
class Colony:
    """
    Everything the colony owns.

    This is the aggregate the phase handlers and the reducer mutate.
    """
    ledger: ResourceLedger = field(default_factory=ResourceLedger)
    buildings: list[Building] = field(default_factory=list)
    roster: ColonistRoster = field(default_factory=ColonistRoster)

    def consumption(self) -> ResourceLedger:
        """Upkeep deducted after every production phase."""
        colonists = len(self.roster)
        return ResourceLedger.of(
            food=colonists * 3,
            oxygen=colonists * 2,
            energy=len(self.buildings) * 2,
        )

    def describe(self) -> list[str]:
        """Status lines for display."""
        lines = [f"Resources: {self.ledger.describe()}"]
        lines.append(f"Buildings ({len(self.buildings)}):")
        for building in self.buildings:
            status = "Operational" if building.operational else "Offline"
            lines.append(f"  {building.name} Level {building.level} ({status})")
        lines.append(f"Colonists ({len(self.roster)}):")
        for colonist in self.roster:
            lines.append(f"  {colonist.describe()}")
        return lines
