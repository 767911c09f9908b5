"""
Session Module - Drives colony games.

A session represents one play-through:
- Created with a fresh colony
- Stepped phase by phase through the GameLoop
- Destroyed when the game ends or the client leaves

Sessions are EPHEMERAL; only explicit saves reach the disk.
"""

from .game_loop import ConditionEvaluator, GameLoop, GameOutcome, TurnResult
from .manager import SessionManager, Session, SessionState

__all__ = [
    "ConditionEvaluator",
    "GameLoop",
    "GameOutcome",
    "TurnResult",
    "SessionManager",
    "Session",
    "SessionState",
]
