"""
Persistence - Text save files for a running colony.

The save file is the only on-disk game state; API sessions stay in memory.
"""

from .save_file import (
    DEFAULT_SAVE_FILE,
    SavedGame,
    dump_game,
    load_game,
    parse_game,
    save_game,
)

__all__ = [
    "DEFAULT_SAVE_FILE",
    "SavedGame",
    "dump_game",
    "load_game",
    "parse_game",
    "save_game",
]
