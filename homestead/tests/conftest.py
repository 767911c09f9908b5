"""
Pytest fixtures for homestead tests.
"""

import pytest

from ..config import GameConfig
from ..engine_core.events import EventResolver, default_events
from ..engine_core.state import Colony, GamePhase, GameState
from ..operators.policy import ScriptedOperator
from ..scenario import create_colony
from ..session.game_loop import GameLoop
from .fakes import FixedRandom


@pytest.fixture
def colony() -> Colony:
    """The default starting colony."""
    return create_colony()


@pytest.fixture
def state() -> GameState:
    """A fresh game state in the setup phase."""
    return GameState(colonist_count=3)


@pytest.fixture
def peaceful_resolver() -> EventResolver:
    """Resolver that always rolls above every event weight."""
    return EventResolver(default_events(), rng=FixedRandom([100] * 1000))


@pytest.fixture
def operator() -> ScriptedOperator:
    return ScriptedOperator()


@pytest.fixture
def quiet_config() -> GameConfig:
    """No pacing delay and no auto-save."""
    return GameConfig(turn_delay=0.0, auto_save=False)


@pytest.fixture
def loop(colony, state, peaceful_resolver, operator, quiet_config) -> GameLoop:
    """Game loop on the default colony with no events."""
    return GameLoop(colony, state, peaceful_resolver, operator=operator, config=quiet_config)


@pytest.fixture
def management_state() -> GameState:
    """A game state sitting in the management phase."""
    return GameState(phase=GamePhase.MANAGEMENT, turn=1, colonist_count=3)
