"""
ACE card game engine implementation.

This module provides the AceEngine class, which implements the GameEngine
interface for ACE. The engine holds the current snapshot of one game and
replaces it with the result of each accepted transition.
"""

import logging
import random
from typing import Dict, Any, Optional

from acegame.ace.state import AceRules, GameState
from acegame.ace.transitions import StateTransitionEngine
from acegame.engine.base import GameEngine
from acegame.engine.commands import (
    AddPlayer,
    Command,
    PlayCard,
    ResetGame,
    StartGame,
)
from acegame.exceptions import UnknownCommand

logger = logging.getLogger(__name__)


class AceEngine(GameEngine):
    """
    Engine implementation for the ACE card game.

    Example:
        ```python
        engine = AceEngine({"seed": 7})
        engine.add_player("Alice")
        engine.add_player("Bob")
        state = engine.start_game()
        state = engine.play_card(state.current_player, 0)
        ```
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        game_id: Optional[str] = None,
        state: Optional[GameState] = None,
    ):
        """
        Initialize the ACE engine.

        Args:
            config: Configuration options ("rules", "seed")
            game_id: Identifier for a new game (ignored if state is given)
            state: Existing snapshot to continue from
        """
        super().__init__(config)

        default_config = {
            "rules": AceRules(),
            "seed": None,
        }
        if config:
            default_config.update(config)
        self.config = default_config

        self.rng = random.Random(self.config["seed"])
        if state is not None:
            self.state = state
        else:
            self.state = StateTransitionEngine.create_game(
                game_id, self.config["rules"]
            )

    def _commit(self, new_state: GameState) -> GameState:
        # Transitions return the very same object when they reject a command
        if new_state is not self.state:
            self.state = new_state
            self.version += 1
        return self.state

    def add_player(self, name: str) -> GameState:
        return self._commit(StateTransitionEngine.add_player(self.state, name))

    def start_game(self) -> GameState:
        return self._commit(StateTransitionEngine.start_game(self.state, rng=self.rng))

    def play_card(self, player_index: int, card_index: int) -> GameState:
        return self._commit(
            StateTransitionEngine.play_card(self.state, player_index, card_index)
        )

    def reset(self) -> GameState:
        return self._commit(StateTransitionEngine.reset_game(self.state))

    def apply(self, command: Command) -> GameState:
        """
        Dispatch an inbound command.

        Args:
            command: AddPlayer, StartGame, PlayCard or ResetGame

        Returns:
            The new state, or the unchanged state if the command was rejected

        Raises:
            UnknownCommand: If the object is not a supported command
        """
        if isinstance(command, AddPlayer):
            return self.add_player(command.name)
        if isinstance(command, StartGame):
            return self.start_game()
        if isinstance(command, PlayCard):
            return self.play_card(command.player_index, command.card_index)
        if isinstance(command, ResetGame):
            return self.reset()
        raise UnknownCommand(command)

    def legal_moves(self, player_index: Optional[int] = None):
        """
        Hand indices the player (current player by default) may play.
        """
        if player_index is None:
            player_index = self.state.current_player
        return StateTransitionEngine.legal_card_indices(self.state, player_index)
