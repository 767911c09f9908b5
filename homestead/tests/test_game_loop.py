"""
Tests for the phase state machine and the turn orchestrator.

Tests:
- Phase transitions and turn counting
- Production phase arithmetic
- Win/lose checks and their priority
- Error handling inside phases
"""

import pytest

from ..config import GameConfig
from ..engine_core.action import Action
from ..engine_core.buildings import BuildingKind
from ..engine_core.colonists import Colonist, ColonistRoster, Specialization
from ..engine_core.errors import UnknownResourceType
from ..engine_core.events import EventKind, EventResolver, default_events
from ..engine_core.resources import ResourceLedger
from ..engine_core.state import Colony, GamePhase, GameState
from ..operators.policy import ContinueOperator, ScriptedOperator
from ..session.game_loop import ConditionEvaluator, GameLoop, GameOutcome
from .fakes import FixedRandom


class TestPhaseStateMachine:
    """Tests for GameState transitions."""

    def test_full_cycle(self):
        state = GameState()
        seen = []
        for _ in range(5):
            seen.append(state.phase)
            state.next_phase()
        assert seen == [
            GamePhase.SETUP,
            GamePhase.PRODUCTION,
            GamePhase.EVENT,
            GamePhase.MANAGEMENT,
            GamePhase.PRODUCTION,
        ]

    def test_turn_increments_only_after_management(self):
        state = GameState()
        turns = []
        for _ in range(8):
            state.next_phase()
            turns.append(state.turn)
        assert turns == [1, 1, 1, 2, 2, 2, 3, 3]

    def test_end_only_via_end_game(self):
        """next_phase() never reaches END."""
        state = GameState()
        for _ in range(50):
            state.next_phase()
            assert state.phase != GamePhase.END
        assert state.running

    def test_end_game(self):
        state = GameState(phase=GamePhase.EVENT)
        state.end_game()
        assert state.phase == GamePhase.END
        assert not state.running

    def test_next_phase_in_end_is_idempotent(self):
        state = GameState(phase=GamePhase.END, running=True, turn=4)
        state.next_phase()
        assert state.phase == GamePhase.END
        assert not state.running
        state.next_phase()
        assert state.phase == GamePhase.END
        assert state.turn == 4

    def test_phase_labels(self):
        assert GameState(phase=GamePhase.END).phase_label == "Game Over"
        assert GameState(phase=GamePhase.MANAGEMENT).phase_label == "Management"


class TestProductionPhase:
    """Tests for the production phase."""

    def test_one_production_phase_on_default_colony(self, loop):
        """Buildings and colonists produce, then upkeep is paid."""
        loop.state.phase = GamePhase.PRODUCTION

        result = loop.step()

        assert result.success
        assert loop.colony.ledger.to_dict() == {
            "food": 119,
            "energy": 114,
            "materials": 55,
            "oxygen": 96,
        }
        assert loop.state.phase == GamePhase.EVENT

    def test_production_messages(self, loop):
        loop.state.phase = GamePhase.PRODUCTION
        result = loop.step()
        assert result.messages[:2] == [
            "Solar Panel Level 1 produces 15 energy",
            "Greenhouse Level 1 produces 20 food",
        ]
        assert "Alex Chen worked and produced resources." in result.messages

    def test_ineligible_colonists_skipped(self, loop):
        loop.state.phase = GamePhase.PRODUCTION
        loop.colony.roster[0].assigned = True       # engineer
        loop.colony.roster[1].health = 50           # scientist, at the threshold

        loop.step()

        assert loop.colony.roster[0].experience == 0
        assert loop.colony.roster[1].experience == 0
        assert loop.colony.roster[2].experience == 1
        assert loop.colony.ledger["materials"] == 50

    def test_offline_building_still_costs_upkeep(self, loop):
        loop.state.phase = GamePhase.PRODUCTION
        loop.colony.buildings[0].operational = False

        result = loop.step()

        assert "Solar Panel Level 1 produces 15 energy" not in result.messages
        assert loop.colony.ledger["energy"] == 100 + 3 - 4

    def test_unpaid_upkeep_is_reported_and_production_kept(self, operator, quiet_config, peaceful_resolver):
        """Upkeep failure is non-fatal and leaves the produced resources."""
        colony = Colony(
            ledger=ResourceLedger({"food": 0, "energy": 100, "materials": 0, "oxygen": 100}),
            buildings=[],
            roster=ColonistRoster([Colonist("Gen", Specialization.GENERALIST) for _ in range(2)]),
        )
        state = GameState(phase=GamePhase.PRODUCTION)
        loop = GameLoop(colony, state, peaceful_resolver, operator=operator, config=quiet_config)

        result = loop.step()

        assert not result.success
        assert result.errors == ["Resource Error: Insufficient food"]
        assert colony.ledger.to_dict() == {"food": 4, "energy": 100, "materials": 4, "oxygen": 100}
        assert state.phase == GamePhase.EVENT


class TestEventPhase:
    """Tests for the event phase inside the loop."""

    def test_event_phase_uses_resolver(self, colony, operator, quiet_config):
        resolver = EventResolver(default_events(), rng=FixedRandom([20]))
        state = GameState(phase=GamePhase.EVENT)
        loop = GameLoop(colony, state, resolver, operator=operator, config=quiet_config)

        result = loop.step()

        assert result.event.event.kind == EventKind.TRADE_SHIP
        assert "Event: Trade Ship Arrival" in result.messages
        assert colony.ledger["food"] == 115
        assert state.phase == GamePhase.MANAGEMENT


class TestManagementPhase:
    """Tests for the management phase inside the loop."""

    def test_operator_action_applied(self, colony, management_state, peaceful_resolver, quiet_config):
        operator = ScriptedOperator([Action.build(BuildingKind.SOLAR_PANEL)])
        loop = GameLoop(colony, management_state, peaceful_resolver, operator=operator, config=quiet_config)

        result = loop.step()

        assert result.action_result.success
        assert len(colony.buildings) == 3
        assert management_state.turn == 2
        assert management_state.phase == GamePhase.PRODUCTION

    def test_explicit_action_overrides_operator(self, colony, management_state, peaceful_resolver, quiet_config):
        operator = ScriptedOperator([Action.rest()])
        loop = GameLoop(colony, management_state, peaceful_resolver, operator=operator, config=quiet_config)

        loop.step(Action.assign(1))

        assert colony.roster[1].assigned
        assert len(operator.pending) == 1

    def test_auto_save(self, colony, management_state, peaceful_resolver, tmp_path):
        save_file = tmp_path / "auto.txt"
        config = GameConfig(turn_delay=0.0, auto_save=True, save_file=str(save_file))
        loop = GameLoop(colony, management_state, peaceful_resolver, config=config)

        loop.step()

        assert save_file.exists()
        assert save_file.read_text(encoding="utf-8").startswith("3 1 3 1\n")

    def test_no_auto_save_when_disabled(self, colony, management_state, peaceful_resolver, tmp_path):
        save_file = tmp_path / "auto.txt"
        config = GameConfig(turn_delay=0.0, auto_save=False, save_file=str(save_file))
        GameLoop(colony, management_state, peaceful_resolver, config=config).step()
        assert not save_file.exists()


class TestConditions:
    """Tests for win/lose evaluation."""

    @pytest.fixture
    def evaluator(self):
        return ConditionEvaluator()

    def test_win(self, evaluator, colony):
        state = GameState(phase=GamePhase.PRODUCTION, turn=10)
        assert evaluator.apply(state, colony) == GameOutcome.WON
        assert state.phase == GamePhase.END
        assert not state.running

    def test_no_win_before_turn_ten(self, evaluator, colony):
        state = GameState(phase=GamePhase.PRODUCTION, turn=9)
        assert evaluator.apply(state, colony) is None
        assert state.running

    def test_no_win_with_small_roster(self, evaluator, colony):
        colony.roster.colonists.pop()
        state = GameState(turn=12)
        assert evaluator.check(state, colony) is None

    @pytest.mark.parametrize("resource", ["food", "oxygen"])
    def test_lose_on_empty_essential(self, evaluator, colony, resource):
        colony.ledger[resource] = 0
        assert evaluator.check(GameState(), colony) == GameOutcome.OUT_OF_RESOURCES

    def test_lose_on_empty_roster(self, evaluator, colony):
        colony.roster.colonists.clear()
        assert evaluator.check(GameState(), colony) == GameOutcome.COLONY_LOST

    def test_win_takes_priority_over_starvation(self, evaluator, colony):
        colony.ledger["food"] = 0
        assert evaluator.check(GameState(turn=10), colony) == GameOutcome.WON

    def test_starvation_takes_priority_over_empty_roster(self, evaluator, colony):
        colony.roster.colonists.clear()
        colony.ledger["oxygen"] = -5
        assert evaluator.check(GameState(turn=10), colony) == GameOutcome.OUT_OF_RESOURCES


class TestGameLoop:
    """Tests for running whole games."""

    def test_win_after_turn_nine_management(self, loop):
        """The win fires on the Management -> Production transition into turn 10."""
        loop.state.phase = GamePhase.MANAGEMENT
        loop.state.turn = 9

        result = loop.step()

        assert result.outcome == GameOutcome.WON
        assert loop.state.turn == 10
        assert loop.state.phase == GamePhase.END
        assert "Congratulations! Your colony has thrived for 10 turns!" in result.messages

    def test_peaceful_game_is_won(self, loop, operator):
        outcome = loop.run()

        assert outcome == GameOutcome.WON
        assert loop.state.turn == 10
        assert not loop.state.running
        assert operator.status_reports[0] == (1, "Setup")

    def test_step_after_game_over(self, loop):
        loop.state.end_game()
        result = loop.step()
        assert not result.success
        assert result.errors == ["Game is over"]

    def test_run_stops_at_max_turns(self, loop):
        assert loop.run(max_turns=2) is None
        assert loop.state.turn == 3
        assert loop.state.running

    def test_pacing_delay(self, colony, state, peaceful_resolver):
        sleeps = []
        loop = GameLoop(
            colony, state, peaceful_resolver,
            operator=ContinueOperator(),
            config=GameConfig(turn_delay=0.5, auto_save=False),
            sleep=sleeps.append,
        )
        loop.step()
        assert sleeps == [0.5]

    def test_phase_exception_is_caught(self, loop, operator, monkeypatch):
        """An unexpected error in a phase is reported and the loop advances."""
        def broken(*args, **kwargs):
            raise RuntimeError("reactor offline")

        monkeypatch.setattr(loop.resolver, "resolve", broken)
        loop.state.phase = GamePhase.EVENT

        result = loop.step()

        assert not result.success
        assert "reactor offline" in result.errors
        assert loop.state.phase == GamePhase.MANAGEMENT
        assert "reactor offline" in operator.errors

    def test_end_phase_report(self, loop):
        loop.state.phase = GamePhase.END
        loop.state.turn = 7
        result = loop.step()
        assert result.messages[0] == "Game ended after 7 turns."
        assert not loop.state.running

    def test_colonist_count_refreshed(self, loop):
        loop.state.colonist_count = 0
        loop.step()
        assert loop.state.colonist_count == 3

    def test_unknown_resource_is_fatal(self, loop, monkeypatch):
        def broken(*args, **kwargs):
            raise UnknownResourceType("water")

        monkeypatch.setattr(loop.resolver, "resolve", broken)
        loop.state.phase = GamePhase.EVENT

        with pytest.raises(UnknownResourceType):
            loop.step()
