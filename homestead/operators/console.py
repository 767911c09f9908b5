"""
Console Operator - Numeric menus on stdin/stdout.

Menus:
    Management: 1=build, 2=assign, 3=rest, 4=save, 5=continue
    Build catalog: 1-4 in catalog order
    Assign: 1-N colonist, 0 cancels

Anything unreadable in the management menu means continue.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable

from ..engine_core.action import Action, ActionType
from ..engine_core.buildings import BUILDING_CATALOG, resolve_building_kind
from .policy import ColonyOperator

if TYPE_CHECKING:
    from ..engine_core.state import Colony, GameState

BANNER_WIDTH = 50


def _format_cost(cost: dict[str, int]) -> str:
    return ", ".join(f"{name.capitalize()}: {amount}" for name, amount in cost.items())


class ConsoleOperator(ColonyOperator):
    """Interactive operator. I/O functions are injectable for tests."""

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
    ):
        self.input = input_fn or input
        self.output = output_fn or print

    def _read_int(self, prompt: str) -> int | None:
        try:
            return int(self.input(prompt).strip())
        except (ValueError, EOFError):
            return None

    def acknowledge_setup(self, colony: Colony):
        self.output("\n=== Setup Phase ===")
        try:
            self.input("Colony initialization complete. Press Enter to continue...")
        except EOFError:
            pass

    def show_status(self, turn: int, phase_label: str, lines: list[str]):
        self.output("\n" + "=" * BANNER_WIDTH)
        self.output(f"STELLAR HOMESTEAD - Turn {turn}")
        self.output(f"Phase: {phase_label}")
        self.output("=" * BANNER_WIDTH)
        for line in lines:
            self.output(line)

    def notify(self, messages: list[str], errors: list[str]):
        for message in messages:
            self.output(message)
        for error in errors:
            self.output(f"Error: {error}")

    def choose_action(self, colony: Colony, state: GameState) -> Action:
        self.output("\n=== Management Phase ===")
        self.output("1. Build Structure")
        self.output("2. Assign Colonists")
        self.output("3. Rest Colonists")
        self.output("4. Save Game")
        self.output("5. Continue to next turn")

        choice = self._read_int("Choose action: ")
        action_type = ActionType.from_menu(choice) if choice is not None else ActionType.CONTINUE

        if action_type == ActionType.BUILD:
            return self._choose_building()
        if action_type == ActionType.ASSIGN:
            return self._choose_colonist(colony)
        if action_type == ActionType.REST:
            return Action.rest()
        if action_type == ActionType.SAVE:
            return Action.save()
        return Action.proceed()

    def _choose_building(self) -> Action:
        self.output("Available structures:")
        for spec in BUILDING_CATALOG.values():
            self.output(f"{spec.menu_number}. {spec.name} ({_format_cost(spec.cost)})")

        choice = self._read_int("")
        try:
            kind = resolve_building_kind(choice) if choice is not None else None
        except ValueError:
            kind = None
        # A BUILD with no kind is rejected by the reducer as an invalid choice
        return Action(ActionType.BUILD) if kind is None else Action.build(kind)

    def _choose_colonist(self, colony: Colony) -> Action:
        self.output("Available colonists:")
        for position, colonist in enumerate(colony.roster, start=1):
            self.output(f"{position}. {colonist.describe()}")

        choice = self._read_int("Select colonist to assign (0 to cancel): ")
        if choice is None or not 0 < choice <= len(colony.roster):
            return Action(ActionType.ASSIGN)
        return Action.assign(choice - 1)
