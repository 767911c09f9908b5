"""
Engine Core - Colony state, production and event resolution.

The engine is the runtime that:
1. Holds the resource ledger, buildings and roster (Colony)
2. Sequences phases (GameState)
3. Produces resources from buildings and colonists
4. Resolves world events
5. Applies management actions via the reducer
"""

from .errors import (
    ColonyError,
    InsufficientResource,
    UnknownResourceType,
    ColonistUnwell,
    ColonistDeceased,
    SaveFormatError,
    ConfigError,
    Outcome,
)
from .resources import ResourceLedger, STARTING_STOCK
from .buildings import Building, BuildingKind, BUILDING_CATALOG, create_building
from .colonists import Colonist, ColonistRoster, Specialization
from .events import EventKind, EventOutcome, EventResolver, WorldEvent, default_events
from .state import Colony, GamePhase, GameState
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer

__all__ = [
    "ColonyError",
    "InsufficientResource",
    "UnknownResourceType",
    "ColonistUnwell",
    "ColonistDeceased",
    "SaveFormatError",
    "ConfigError",
    "Outcome",
    "ResourceLedger",
    "STARTING_STOCK",
    "Building",
    "BuildingKind",
    "BUILDING_CATALOG",
    "create_building",
    "Colonist",
    "ColonistRoster",
    "Specialization",
    "EventKind",
    "EventOutcome",
    "EventResolver",
    "WorldEvent",
    "default_events",
    "Colony",
    "GamePhase",
    "GameState",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
]
