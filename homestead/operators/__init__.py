"""
Operators module - Who makes management decisions.

Provides:
- ColonyOperator: Interface for management decisions and display hooks
- ContinueOperator: Always continues (unattended runs)
- ScriptedOperator: Plays a fixed action list (tests)
- ConsoleOperator: Interactive numeric menus
"""

from .policy import ColonyOperator, ContinueOperator, ScriptedOperator
from .console import ConsoleOperator

__all__ = [
    "ColonyOperator",
    "ContinueOperator",
    "ScriptedOperator",
    "ConsoleOperator",
]
