"""
Room management for acegame.
"""

from acegame.rooms.registry import RoomRegistry

__all__ = ["RoomRegistry"]
