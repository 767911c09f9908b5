"""
Game Loop - The turn orchestrator.

One step:
1. Show colony status to the operator
2. Run the current phase (errors are caught, logged and reported)
3. Advance the phase
4. Check win/lose conditions
5. Pause for the pacing delay

Phase order within a turn is fixed: buildings produce, colonists work,
upkeep is deducted, then the next phase rolls an event, then the
operator manages the colony.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import time

from ..config import GameConfig
from ..engine_core.action import Action, ActionResult, ActionType
from ..engine_core.errors import UnknownResourceType
from ..engine_core.events import EventOutcome, EventResolver
from ..engine_core.reducer import Reducer
from ..engine_core.resources import ResourceLedger, FOOD, OXYGEN
from ..engine_core.state import Colony, GamePhase, GameState
from ..operators.policy import ColonyOperator, ContinueOperator

logger = logging.getLogger(__name__)

WIN_TURN = 10
WIN_MIN_COLONISTS = 3


class GameOutcome(Enum):
    """How a game ended."""
    WON = "won"
    OUT_OF_RESOURCES = "out_of_resources"
    COLONY_LOST = "colony_lost"


_OUTCOME_MESSAGES: dict[GameOutcome, str] = {
    GameOutcome.WON: "Congratulations! Your colony has thrived for 10 turns!",
    GameOutcome.OUT_OF_RESOURCES: "Game Over! Your colony has run out of essential resources.",
    GameOutcome.COLONY_LOST: "Game Over! All colonists have perished.",
}


class ConditionEvaluator:
    """
    Win/lose checks, in priority order:

    1. Win: turn >= 10 and at least 3 colonists
    2. Lose: food <= 0 or oxygen <= 0
    3. Lose: no colonists left

    The first match wins; later checks are skipped.
    """

    def check(self, state: GameState, colony: Colony) -> GameOutcome | None:
        if state.turn >= WIN_TURN and len(colony.roster) >= WIN_MIN_COLONISTS:
            return GameOutcome.WON
        if colony.ledger[FOOD] <= 0 or colony.ledger[OXYGEN] <= 0:
            return GameOutcome.OUT_OF_RESOURCES
        if colony.roster.is_empty:
            return GameOutcome.COLONY_LOST
        return None

    def apply(self, state: GameState, colony: Colony) -> GameOutcome | None:
        """Check, and end the game on a match."""
        outcome = self.check(state, colony)
        if outcome is not None:
            state.end_game()
        return outcome


@dataclass
class TurnResult:
    """
    Result of one step of the loop.

    A step always counts as attempted; errors are informational.
    """
    phase: GamePhase
    turn: int
    success: bool = True

    messages: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    # Phase details
    event: EventOutcome | None = None
    action_result: ActionResult | None = None

    # Set when this step ended the game
    outcome: GameOutcome | None = None

    def fail(self, error: str):
        self.success = False
        self.errors.append(error)


class GameLoop:
    """
    The main game loop driver.

    Usage:
        game = create_game(seed=42)
        loop = GameLoop(game.colony, game.state, game.resolver,
                        operator=ConsoleOperator())
        outcome = loop.run()

    API sessions call step() directly, passing the management action.
    """

    def __init__(
        self,
        colony: Colony,
        state: GameState,
        resolver: EventResolver,
        operator: ColonyOperator | None = None,
        config: GameConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.colony = colony
        self.state = state
        self.resolver = resolver
        self.operator = operator or ContinueOperator()
        self.config = config or GameConfig()
        self.sleep = sleep
        self.evaluator = ConditionEvaluator()
        self.reducer = Reducer(colony=colony, state=state, save_path=self.config.save_file)
        self.outcome: GameOutcome | None = None

        self._handlers = {
            GamePhase.SETUP: self._handle_setup,
            GamePhase.PRODUCTION: self._handle_production,
            GamePhase.EVENT: self._handle_event,
            GamePhase.MANAGEMENT: self._handle_management,
            GamePhase.END: self._handle_end,
        }

    def step(self, action: Action | None = None) -> TurnResult:
        """
        Run the current phase and advance.

        action is used by the management phase instead of asking the
        operator; other phases ignore it.
        """
        result = TurnResult(phase=self.state.phase, turn=self.state.turn)
        if not self.state.running:
            result.fail("Game is over")
            return result

        self.operator.show_status(self.state.turn, self.state.phase_label, self.colony.describe())

        logger.info("Turn %d: %s phase", self.state.turn, self.state.phase_label)
        try:
            self._handlers[self.state.phase](result, action)
        except UnknownResourceType:
            raise
        except Exception as e:
            logger.exception("%s phase failed (continuing)", self.state.phase_label)
            result.fail(str(e))
            result.messages.append("An error occurred. Attempting to continue...")

        self.state.next_phase()
        self.state.colonist_count = len(self.colony.roster)

        outcome = self.evaluator.apply(self.state, self.colony)
        if outcome is not None:
            logger.info("Game ended on turn %d: %s", self.state.turn, outcome.value)
            self.outcome = outcome
            result.outcome = outcome
            result.messages.append(_OUTCOME_MESSAGES[outcome])

        self.operator.notify(result.messages, result.errors)

        delay = self.config.turn_delay
        if self.state.running and delay > 0:
            self.sleep(delay)
        return result

    def run(self, max_turns: int | None = None) -> GameOutcome | None:
        """
        Step until the game stops running.

        max_turns stops early once the turn counter passes it, leaving
        the game resumable.
        """
        while self.state.running:
            if max_turns is not None and self.state.turn > max_turns:
                break
            self.step()
        return self.outcome

    # =========================================================================
    # Phase handlers
    # =========================================================================

    def _handle_setup(self, result: TurnResult, action: Action | None):
        self.operator.acknowledge_setup(self.colony)
        result.messages.append("Colony initialization complete.")

    def _handle_production(self, result: TurnResult, action: Action | None):
        total = ResourceLedger.empty()

        for building in self.colony.buildings:
            if building.operational:
                total.add(building.produce())
                result.messages.append(building.describe())

        for colonist in self.colony.roster:
            if not colonist.can_work:
                continue
            worked = colonist.work()
            if worked.success:
                total.add(worked.value)
                result.messages.append(f"{colonist.name} worked and produced resources.")
            else:
                logger.warning("%s", worked.error)
                result.fail(str(worked.error))

        self.colony.ledger.add(total)

        consumed = self.colony.ledger.subtract(self.colony.consumption())
        if not consumed.success:
            logger.warning("Upkeep not deducted: %s", consumed.error)
            result.fail(f"Resource Error: {consumed.error}")
            return
        result.messages.append("Total production applied. Resource consumption deducted.")

    def _handle_event(self, result: TurnResult, action: Action | None):
        outcome = self.resolver.resolve(self.colony.ledger, self.colony.roster)
        result.event = outcome
        result.messages.extend(outcome.messages)

    def _handle_management(self, result: TurnResult, action: Action | None):
        if action is None:
            action = self.operator.choose_action(self.colony, self.state)

        applied = self.reducer.apply(action)
        result.action_result = applied
        result.messages.extend(applied.changes)
        if not applied.success:
            result.fail(applied.error)

        if self.config.auto_save and self.config.save_file and action.action_type != ActionType.SAVE:
            self._auto_save(result)

    def _auto_save(self, result: TurnResult):
        from ..persistence import save_game

        self.state.colonist_count = len(self.colony.roster)
        try:
            save_game(self.config.save_file, self.state, self.colony)
        except OSError as e:
            logger.warning("Auto-save failed: %s", e)
            result.fail(f"Failed to save game: {e}")

    def _handle_end(self, result: TurnResult, action: Action | None):
        result.messages.append(f"Game ended after {self.state.turn} turns.")
        result.messages.append("Final colony status:")
        result.messages.append(f"Resources: {self.colony.ledger.describe()}")
        result.messages.append("Thank you for playing Stellar Homestead!")
