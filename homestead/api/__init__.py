"""
API Module - HTTP interface for colony sessions.

Exposes the engine via REST API:
1. Create a colony session
2. Step it phase by phase
3. Submit management actions
4. End the session

All state is session-scoped and in memory.
"""

from .schemas import (
    ColonyResponse,
    CreateColonyRequest,
    ErrorResponse,
    ManagementActionRequest,
    StepResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    "ColonyResponse",
    "CreateColonyRequest",
    "ErrorResponse",
    "ManagementActionRequest",
    "StepResponse",
    "APIService",
    "create_app",
]
