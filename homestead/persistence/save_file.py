"""
Save File - Text persistence of a running game.

Layout (UTF-8, one record per line, fields separated by TAB):

    phase turn colonist_count running
    <ledger count>
    name<TAB>amount
    <building count>
    name<TAB>level<TAB>operational
    <colonist count>
    name<TAB>specialization<TAB>experience<TAB>health<TAB>assigned

Booleans are written as 1/0. Building and colonist records are rebuilt
into typed objects on load through the engine factories.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging

from ..engine_core.buildings import Building, create_building
from ..engine_core.colonists import MAX_HEALTH, Colonist, ColonistRoster, Specialization
from ..engine_core.errors import SaveFormatError
from ..engine_core.resources import ResourceLedger
from ..engine_core.state import Colony, GamePhase, GameState

logger = logging.getLogger(__name__)

DEFAULT_SAVE_FILE = "stellar_homestead_save.txt"
SEP = "\t"


@dataclass
class SavedGame:
    """A game read back from disk."""
    state: GameState
    colony: Colony


# =============================================================================
# Writing
# =============================================================================

def _flag(value: bool) -> str:
    return "1" if value else "0"


def dump_game(state: GameState, colony: Colony) -> str:
    """Serialize state and colony into the save text."""
    lines = [
        f"{state.phase.value} {state.turn} {state.colonist_count} {_flag(state.running)}",
        str(len(colony.ledger)),
    ]
    for name, amount in colony.ledger.items():
        lines.append(SEP.join([name, str(amount)]))

    lines.append(str(len(colony.buildings)))
    for building in colony.buildings:
        lines.append(SEP.join([building.name, str(building.level), _flag(building.operational)]))

    lines.append(str(len(colony.roster)))
    for colonist in colony.roster:
        lines.append(SEP.join([
            colonist.name,
            colonist.specialization.value,
            str(colonist.experience),
            str(colonist.health),
            _flag(colonist.assigned),
        ]))
    return "\n".join(lines) + "\n"


def save_game(path: str | Path, state: GameState, colony: Colony) -> Path:
    """
    Write the save file.

    OSError propagates to the caller, which reports it without retrying.
    """
    path = Path(path)
    path.write_text(dump_game(state, colony), encoding="utf-8")
    logger.info("Game saved to %s", path)
    return path


# =============================================================================
# Reading
# =============================================================================

class _Reader:
    """Line cursor that reports line numbers in errors."""

    def __init__(self, text: str):
        self.lines = text.splitlines()
        self.position = 0

    def next_line(self, what: str) -> str:
        if self.position >= len(self.lines):
            raise SaveFormatError(f"unexpected end of file, expected {what}")
        line = self.lines[self.position]
        self.position += 1
        return line

    def fields(self, what: str, count: int, sep: str | None = SEP) -> list[str]:
        line = self.next_line(what)
        parts = line.split(sep) if sep else line.split()
        if len(parts) != count:
            raise SaveFormatError(
                f"expected {count} fields for {what}, got {len(parts)}",
                line_number=self.position,
            )
        return parts

    def integer(self, value: str, what: str) -> int:
        try:
            return int(value)
        except ValueError:
            raise SaveFormatError(f"{what} is not an integer: {value!r}", line_number=self.position)

    def flag(self, value: str, what: str) -> bool:
        if value not in ("0", "1"):
            raise SaveFormatError(f"{what} must be 0 or 1: {value!r}", line_number=self.position)
        return value == "1"

    def bounded(self, value: str, what: str, low: int, high: int | None = None) -> int:
        number = self.integer(value, what)
        if number < low or (high is not None and number > high):
            limit = f"between {low} and {high}" if high is not None else f"at least {low}"
            raise SaveFormatError(f"{what} must be {limit}: {number}", line_number=self.position)
        return number

    def count(self, what: str) -> int:
        value = self.integer(self.next_line(what).strip(), what)
        if value < 0:
            raise SaveFormatError(f"{what} cannot be negative", line_number=self.position)
        return value


def _read_state(reader: _Reader) -> GameState:
    phase, turn, colonists, running = reader.fields("game state", 4, sep=None)
    phase_code = reader.integer(phase, "phase")
    try:
        game_phase = GamePhase(phase_code)
    except ValueError:
        raise SaveFormatError(f"unknown phase code {phase_code}", line_number=reader.position)
    return GameState(
        phase=game_phase,
        turn=reader.integer(turn, "turn"),
        colonist_count=reader.integer(colonists, "colonist count"),
        running=reader.flag(running, "running"),
    )


def _read_ledger(reader: _Reader) -> ResourceLedger:
    ledger = ResourceLedger.empty()
    for _ in range(reader.count("resource count")):
        name, amount = reader.fields("resource", 2)
        ledger[name] = reader.integer(amount, f"amount of {name}")
    return ledger


def _read_buildings(reader: _Reader) -> list[Building]:
    buildings = []
    for _ in range(reader.count("building count")):
        name, level, operational = reader.fields("building", 3)
        try:
            building = create_building(
                name,
                level=reader.integer(level, "building level"),
                operational=reader.flag(operational, "operational"),
            )
        except ValueError as e:
            raise SaveFormatError(str(e), line_number=reader.position)
        buildings.append(building)
    return buildings


def _read_roster(reader: _Reader) -> ColonistRoster:
    roster = ColonistRoster()
    for _ in range(reader.count("colonist count")):
        name, specialization, experience, health, assigned = reader.fields("colonist", 5)
        roster.add(Colonist(
            name=name,
            specialization=Specialization.parse(specialization),
            experience=reader.bounded(experience, "experience", 0),
            health=reader.bounded(health, "health", 0, MAX_HEALTH),
            assigned=reader.flag(assigned, "assigned"),
        ))
    return roster


def parse_game(text: str) -> SavedGame:
    """Parse save text. Raises SaveFormatError on malformed input."""
    reader = _Reader(text)
    state = _read_state(reader)
    ledger = _read_ledger(reader)
    buildings = _read_buildings(reader)
    roster = _read_roster(reader)
    return SavedGame(
        state=state,
        colony=Colony(ledger=ledger, buildings=buildings, roster=roster),
    )


def load_game(path: str | Path) -> SavedGame:
    """
    Read a save file from disk.

    Raises SaveFormatError for malformed or non-UTF-8 files; OSError propagates.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SaveFormatError(f"{path} is not UTF-8 text: {e.reason}") from e
    saved = parse_game(text)
    logger.info(
        "Game loaded from %s (turn %d, %d buildings, %d colonists)",
        path, saved.state.turn, len(saved.colony.buildings), len(saved.colony.roster),
    )
    return saved
