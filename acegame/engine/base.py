"""
Base engine class for acegame.

This module provides the abstract base class for game engines. An engine
owns the authoritative state of one game and turns inbound commands into
new state snapshots.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from acegame.engine.commands import Command


class GameEngine(ABC):
    """
    Abstract base class for all game engines.

    Attributes:
        config: Configuration options for the game
        state: Current state snapshot
        version: Number of accepted commands applied to this engine
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the engine.

        Args:
            config: Configuration options for the game
        """
        self.config = config or {}
        self.state = None
        self.version = 0

    @abstractmethod
    def add_player(self, name: str):
        """
        Add a player to the game.

        Args:
            name: Name of the player
        """

    @abstractmethod
    def start_game(self):
        """
        Deal and start a new game.
        """

    @abstractmethod
    def play_card(self, player_index: int, card_index: int):
        """
        Play a card for a player.

        Args:
            player_index: Index of the player
            card_index: Index of the card in the player's hand
        """

    @abstractmethod
    def reset(self):
        """
        Reset the game to an empty lobby.
        """

    @abstractmethod
    def apply(self, command: Command):
        """
        Apply an inbound command and return the resulting state.

        Args:
            command: Command object to apply
        """
