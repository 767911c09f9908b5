"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- GAME_OVER: The session's game has already ended
- INVALID_ACTION: The submitted management action is malformed
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class ActionName(str, Enum):
    """Management actions."""
    BUILD = "build"
    ASSIGN = "assign"
    REST = "rest"
    CONTINUE = "continue"


class BuildingName(str, Enum):
    """Buildings in the catalog."""
    SOLAR_PANEL = "solar_panel"
    GREENHOUSE = "greenhouse"
    OXYGEN_GENERATOR = "oxygen_generator"
    MATERIAL_FACTORY = "material_factory"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    INVALID_ACTION = "INVALID_ACTION"


# =============================================================================
# Shared Models
# =============================================================================

class BuildingInfo(BaseModel):
    """Building information for display."""
    kind: BuildingName
    name: str
    level: int = Field(..., ge=1)
    operational: bool = True
    production: str = Field(description="Human-readable output, e.g. 'Solar Panel Level 1 produces 15 energy'")


class ColonistInfo(BaseModel):
    """Colonist information for display."""
    name: str
    specialization: str
    experience: int = Field(..., ge=0)
    health: int = Field(..., ge=0, le=100)
    assigned: bool = False


class EventInfo(BaseModel):
    """What the event phase rolled."""
    roll: int = Field(..., ge=1, le=100)
    event_name: Optional[str] = Field(None, description="None means a peaceful turn")
    effect_applied: bool = False
    failure: Optional[str] = None


# =============================================================================
# Requests
# =============================================================================

class CreateColonyRequest(BaseModel):
    """Request to start a new colony session."""
    seed: Optional[int] = Field(None, description="Seed for event rolls (deterministic games)")


class ManagementActionRequest(BaseModel):
    """
    Management action for the step that runs the management phase.

    Ignored when the session is in any other phase.
    """
    action: ActionName = ActionName.CONTINUE
    building: Optional[BuildingName] = Field(None, description="Required for build")
    colonist_index: Optional[int] = Field(
        None, ge=0, description="0-based roster position, required for assign"
    )


# =============================================================================
# Responses
# =============================================================================

class ColonyResponse(BaseModel):
    """Complete colony status."""
    session_id: str
    status: SessionStatus
    turn: int
    phase: str
    running: bool
    outcome: Optional[str] = Field(None, description="won, out_of_resources or colony_lost")

    resources: dict[str, int] = Field(default_factory=dict)
    buildings: list[BuildingInfo] = Field(default_factory=list)
    colonists: list[ColonistInfo] = Field(default_factory=list)

    created_at: float
    api_version: str = "v1"


class StepResponse(BaseModel):
    """Result of running one phase."""
    session_id: str
    phase_run: str
    success: bool
    messages: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    event: Optional[EventInfo] = None
    colony: ColonyResponse

    api_version: str = "v1"


class ErrorResponse(BaseModel):
    """Structured error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
