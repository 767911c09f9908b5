"""
Reducer - Applies management actions to the colony.

The reducer is the single point of management-phase mutation.
All operator choices go through apply().

Design principles:
- Validates before applying
- Returns ActionResult with success/failure
- Build is all-or-nothing: either the cost is paid and the building
  exists, or nothing changes
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .action import Action, ActionType, ActionResult
from .buildings import create_building
from .state import Colony, GamePhase, GameState

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies management actions to a colony.

    save_path is where SAVE actions write when the action names no path.
    """
    colony: Colony
    state: GameState
    save_path: str | None = None

    def apply(self, action: Action) -> ActionResult:
        """
        Apply an action to the colony.

        Returns ActionResult with changes or error.
        """
        if self.state.phase != GamePhase.MANAGEMENT:
            return ActionResult.failure(
                f"Management actions are not allowed during the {self.state.phase_label} phase",
                error_code="INVALID_PHASE",
            )

        handler = self._get_handler(action.action_type)
        result = handler(action)
        if result.success:
            logger.info("Action %s applied", action.action_type.name)
        else:
            logger.warning("Action %s failed: %s", action.action_type.name, result.error)
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.BUILD: self._handle_build,
            ActionType.ASSIGN: self._handle_assign,
            ActionType.REST: self._handle_rest,
            ActionType.SAVE: self._handle_save,
            ActionType.CONTINUE: self._handle_continue,
        }
        return handlers[action_type]

    def _handle_build(self, action: Action) -> ActionResult:
        kind = action.payload.building_kind
        if kind is None:
            return ActionResult.failure("Invalid choice.", error_code="INVALID_BUILDING")

        building = create_building(kind)
        cost = building.cost
        if not self.colony.ledger.can_afford(cost):
            return ActionResult.failure(
                f"Insufficient resources to build {building.name}",
                error_code="INSUFFICIENT_RESOURCE",
            )

        paid = self.colony.ledger.subtract(cost)
        if not paid.success:
            return ActionResult.failure(str(paid.error), error_code=paid.error_code)

        self.colony.buildings.append(building)
        return ActionResult.done(f"Built {building.name}!")

    def _handle_assign(self, action: Action) -> ActionResult:
        index = action.payload.colonist_index
        if index is None:
            return ActionResult.done("No colonist assigned.")
        try:
            colonist = self.colony.roster.assign(index)
        except IndexError as e:
            return ActionResult.failure(str(e), error_code="INVALID_COLONIST")
        return ActionResult.done(f"{colonist.name} has been assigned to work.")

    def _handle_rest(self, action: Action) -> ActionResult:
        self.colony.roster.rest_all()
        return ActionResult.done("All colonists have rested and recovered health.")

    def _handle_save(self, action: Action) -> ActionResult:
        from ..persistence import DEFAULT_SAVE_FILE, save_game

        path = action.payload.save_path or self.save_path or DEFAULT_SAVE_FILE
        self.state.colonist_count = len(self.colony.roster)
        try:
            save_game(path, self.state, self.colony)
        except OSError as e:
            return ActionResult.failure(f"Failed to save game: {e}", error_code="SAVE_FAILED")
        return ActionResult.done("Game saved successfully!")

    def _handle_continue(self, action: Action) -> ActionResult:
        return ActionResult.done("Continuing to next turn...")
