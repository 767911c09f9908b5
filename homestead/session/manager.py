"""
Session Manager - Creates and manages in-memory colony sessions.

LIFECYCLE:
1. Client creates a session -> a new colony and game loop
2. Client steps the loop, submitting an action in management phases
3. Game ends or client ends the session -> session removed

Sessions are not persisted; the save file is the only way to keep a game.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import time
import uuid

from ..config import GameConfig
from ..operators.policy import ScriptedOperator
from ..scenario import create_game
from .game_loop import GameLoop

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a colony session."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    An ephemeral colony session.

    The operator records messages between steps; remote clients pass
    their management action straight to GameLoop.step().
    """
    session_id: str
    loop: GameLoop
    operator: ScriptedOperator
    created_at: float
    seed: int | None = None

    state: SessionState = SessionState.ACTIVE

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def refresh_state(self):
        """Mark the session over once its game has stopped."""
        if self.state == SessionState.ACTIVE and not self.loop.state.running:
            self.state = SessionState.GAME_OVER


class SessionManager:
    """
    Manages colony sessions.

    Responsibilities:
    - Create sessions with a fresh colony
    - Track active sessions
    - Clean up completed sessions
    """

    def __init__(self, config: GameConfig | None = None):
        # API sessions never block on the pacing delay or write auto-saves
        base = config or GameConfig()
        self.config = base.model_copy(update={"turn_delay": 0.0, "save_file": None})
        self._sessions: dict[str, Session] = {}

    def create_session(self, seed: int | None = None) -> Session:
        """
        Create a new colony session.

        Args:
            seed: Optional seed for event rolls (deterministic sessions)

        Returns:
            New Session in the setup phase
        """
        session_id = str(uuid.uuid4())
        game = create_game(seed=seed)
        operator = ScriptedOperator()
        loop = GameLoop(
            game.colony,
            game.state,
            game.resolver,
            operator=operator,
            config=self.config,
        )

        session = Session(
            session_id=session_id,
            loop=loop,
            operator=operator,
            created_at=time.time(),
            seed=seed,
        )
        self._sessions[session_id] = session
        logger.info("Session %s created (seed=%s)", session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        if reason == "completed":
            session.state = SessionState.GAME_OVER
        else:
            session.state = SessionState.ABANDONED
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
            and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
