"""
Operator Policy - Interface for whoever manages the colony.

An operator:
- Sees status reports and phase messages
- Acknowledges the setup phase
- Chooses one management action per management phase

The console player, scripted test runs and API sessions are all operators.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Iterable

from ..engine_core.action import Action

if TYPE_CHECKING:
    from ..engine_core.state import Colony, GameState


class ColonyOperator(ABC):
    """
    Abstract base class for colony operators.

    Only choose_action() is required; display hooks default to no-ops.
    """

    @abstractmethod
    def choose_action(self, colony: Colony, state: GameState) -> Action:
        """
        Select the management action for this turn.

        Args:
            colony: The colony being managed
            state: Current phase/turn state

        Returns:
            The Action to apply
        """
        pass

    def acknowledge_setup(self, colony: Colony):
        """Called once during the setup phase."""

    def show_status(self, turn: int, phase_label: str, lines: list[str]):
        """Called before every phase with the colony status."""

    def notify(self, messages: list[str], errors: list[str]):
        """Called after every phase with what happened."""

    def get_name(self) -> str:
        return self.__class__.__name__


class ContinueOperator(ColonyOperator):
    """
    Always continues to the next turn.

    Used for:
    - Deterministic testing
    - Unattended simulation runs
    """

    def choose_action(self, colony: Colony, state: GameState) -> Action:
        return Action.proceed()


class ScriptedOperator(ColonyOperator):
    """
    Plays a fixed list of actions in order, then continues.

    Also records everything it was told, which makes it handy in tests.
    """

    def __init__(self, actions: Iterable[Action] = ()):
        self.pending: deque[Action] = deque(actions)
        self.messages: list[str] = []
        self.errors: list[str] = []
        self.status_reports: list[tuple[int, str]] = []

    def queue(self, action: Action):
        self.pending.append(action)

    def choose_action(self, colony: Colony, state: GameState) -> Action:
        if self.pending:
            return self.pending.popleft()
        return Action.proceed()

    def show_status(self, turn: int, phase_label: str, lines: list[str]):
        self.status_reports.append((turn, phase_label))

    def notify(self, messages: list[str], errors: list[str]):
        self.messages.extend(messages)
        self.errors.extend(errors)
