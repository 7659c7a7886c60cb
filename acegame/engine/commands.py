"""
Inbound commands accepted by the ACE engine.

Commands are plain immutable records produced by a session or transport
layer. The engine answers each one with a full state snapshot.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AddPlayer:
    name: str


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class PlayCard:
    player_index: int
    card_index: int


@dataclass(frozen=True)
class ResetGame:
    pass


Command = Union[AddPlayer, StartGame, PlayCard, ResetGame]
