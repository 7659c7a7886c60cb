"""
ACE card game module.

This module provides the implementation for the ACE card game,
including state models, state transitions, and trick resolution.
"""

from acegame.ace.state import (
    GameState as GameState,
    PlayerState as PlayerState,
    PoolEntry as PoolEntry,
    GameStage as GameStage,
    AceRules as AceRules,
)
from acegame.ace.transitions import StateTransitionEngine as StateTransitionEngine
from acegame.ace.trick import TrickResolver as TrickResolver

__all__ = [
    "GameState",
    "PlayerState",
    "PoolEntry",
    "GameStage",
    "AceRules",
    "StateTransitionEngine",
    "TrickResolver",
]
