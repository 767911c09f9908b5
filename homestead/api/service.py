"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats responses

This layer is framework-agnostic; the FastAPI app only wires routes to it.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    ActionName,
    BuildingInfo,
    ColonistInfo,
    ColonyResponse,
    CreateColonyRequest,
    ErrorCode,
    ErrorResponse,
    EventInfo,
    ManagementActionRequest,
    SessionStatus,
    StepResponse,
)
from ..engine_core.action import Action
from ..engine_core.buildings import BuildingKind
from ..engine_core.state import GamePhase
from ..session import Session, SessionManager


def request_to_action(request: ManagementActionRequest) -> Action:
    """
    Convert a management request into an engine Action.

    Saving is not offered: API sessions live in memory only.

    Raises ValueError if a required field is missing.
    """
    if request.action == ActionName.BUILD:
        if request.building is None:
            raise ValueError("build requires a building")
        return Action.build(BuildingKind(request.building.value))
    if request.action == ActionName.ASSIGN:
        if request.colonist_index is None:
            raise ValueError("assign requires a colonist_index")
        return Action.assign(request.colonist_index)
    if request.action == ActionName.REST:
        return Action.rest()
    return Action.proceed()


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        colony = service.create_colony(CreateColonyRequest(seed=7))
        step = service.step(colony.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_colony(self, request: CreateColonyRequest) -> ColonyResponse:
        session = self.session_manager.create_session(seed=request.seed)
        return self._session_to_response(session)

    def get_colony(self, session_id: str) -> ColonyResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def step(
        self,
        session_id: str,
        request: ManagementActionRequest | None = None,
    ) -> StepResponse | ErrorResponse:
        """Run the session's current phase, then report the new status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        if not session.loop.state.running:
            return ErrorResponse(
                error=f"Game in session {session_id} is over",
                error_code=ErrorCode.GAME_OVER,
            )

        # Bodies sent outside the management phase are ignored
        action = None
        if request is not None and session.loop.state.phase == GamePhase.MANAGEMENT:
            try:
                action = request_to_action(request)
            except ValueError as e:
                return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_ACTION)

        result = session.loop.step(action)
        session.refresh_state()

        event = None
        if result.event is not None:
            event = EventInfo(
                roll=result.event.roll,
                event_name=result.event.event.name if result.event.event else None,
                effect_applied=result.event.effect_applied,
                failure=result.event.failure,
            )

        return StepResponse(
            session_id=session_id,
            phase_run=result.phase.label,
            success=result.success,
            messages=result.messages,
            errors=result.errors,
            event=event,
            colony=self._session_to_response(session),
        )

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> ColonyResponse:
        loop = session.loop
        colony = loop.colony
        return ColonyResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            turn=loop.state.turn,
            phase=loop.state.phase_label,
            running=loop.state.running,
            outcome=loop.outcome.value if loop.outcome else None,
            resources=colony.ledger.to_dict(),
            buildings=[
                BuildingInfo(
                    kind=building.kind.value,
                    name=building.name,
                    level=building.level,
                    operational=building.operational,
                    production=building.describe(),
                )
                for building in colony.buildings
            ],
            colonists=[
                ColonistInfo(
                    name=colonist.name,
                    specialization=colonist.specialization.value,
                    experience=colonist.experience,
                    health=colonist.health,
                    assigned=colonist.assigned,
                )
                for colonist in colony.roster
            ],
            created_at=session.created_at,
        )
