"""
Game engine for acegame.

This package wraps the pure state transitions in a stateful engine that
accepts inbound commands.
"""

from acegame.engine.base import GameEngine
from acegame.engine.ace import AceEngine
from acegame.engine.commands import AddPlayer, Command, StartGame, PlayCard, ResetGame

__all__ = [
    "GameEngine",
    "AceEngine",
    "AddPlayer",
    "Command",
    "StartGame",
    "PlayCard",
    "ResetGame",
]
