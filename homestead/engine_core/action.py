"""
Action System - Management actions, payloads, and results.

Actions represent the operator's choice during the management phase:
1. Build a structure from the catalog
2. Assign a colonist
3. Rest all colonists
4. Save the game
5. Continue to the next turn

All management changes flow through actions and the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .buildings import BuildingKind


class ActionType(Enum):
    """Management actions, valued by their menu number."""
    BUILD = 1
    ASSIGN = 2
    REST = 3
    SAVE = 4
    CONTINUE = 5

    @classmethod
    def from_menu(cls, choice: int) -> ActionType:
        """Menu numbers outside 1-4 mean continue."""
        try:
            return cls(choice)
        except ValueError:
            return cls.CONTINUE


@dataclass
class ActionPayload:
    """
    Parameters of an action.

    Different action types use different fields; validation happens
    in the reducer.
    """
    building_kind: BuildingKind | None = None
    colonist_index: int | None = None  # 0-based roster position
    save_path: str | None = None


@dataclass
class Action:
    """A management action to be applied to the colony."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def build(cls, kind: BuildingKind) -> Action:
        return cls(ActionType.BUILD, ActionPayload(building_kind=kind))

    @classmethod
    def assign(cls, colonist_index: int) -> Action:
        return cls(ActionType.ASSIGN, ActionPayload(colonist_index=colonist_index))

    @classmethod
    def rest(cls) -> Action:
        return cls(ActionType.REST)

    @classmethod
    def save(cls, path: str | None = None) -> Action:
        return cls(ActionType.SAVE, ActionPayload(save_path=path))

    @classmethod
    def proceed(cls) -> Action:
        return cls(ActionType.CONTINUE)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - Human-readable changes (for the operator)
    - Error and error code on failure
    """
    success: bool
    error: str | None = None
    error_code: str | None = None
    changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def done(cls, *changes: str) -> ActionResult:
        """Create a success result."""
        return cls(success=True, changes=list(changes))
