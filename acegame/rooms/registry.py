"""
Room registry: serializes commands per game room.

Each room holds one AceEngine. Writers must name the version their command
was based on; a command against an outdated version is refused so the
caller can reload and retry. This is the optimistic compare-and-swap
contract a multi-client deployment needs, since two commands applied to
the same snapshot would otherwise overwrite each other.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Set, Tuple

from acegame.ace.state import GameState
from acegame.engine.ace import AceEngine
from acegame.engine.commands import Command
from acegame.exceptions import RoomAlreadyExists, RoomNotFound, StaleStateVersion

logger = logging.getLogger(__name__)


class RoomRegistry:
    """
    In-memory, thread-safe registry of ACE games keyed by room id.

    Attributes:
        config: Engine configuration applied to every new room
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self._rooms: Dict[str, AceEngine] = {}
        self._lock = threading.RLock()
        self._applying: Set[str] = set()

    def create(self, room_id: str) -> Tuple[int, GameState]:
        """
        Register an empty game under `room_id`.

        Raises:
            RoomAlreadyExists: If the room id is taken
        """
        with self._lock:
            if room_id in self._rooms:
                raise RoomAlreadyExists(room_id)
            engine = AceEngine(dict(self.config), game_id=room_id)
            self._rooms[room_id] = engine
            logger.info(f"Created room {room_id}")
            return engine.version, engine.state

    def get_or_create(self, room_id: str) -> Tuple[int, GameState]:
        with self._lock:
            if room_id in self._rooms:
                return self.get(room_id)
            return self.create(room_id)

    def get(self, room_id: str) -> Tuple[int, GameState]:
        """
        Current version and state of a room.

        Raises:
            RoomNotFound: If the room does not exist
        """
        with self._lock:
            engine = self._engine(room_id)
            return engine.version, engine.state

    def submit(
        self, room_id: str, command: Command, base_version: int
    ) -> Tuple[int, GameState]:
        """
        Apply a command if it was based on the room's current version.

        A rejected gameplay command leaves both the state and the version
        untouched. Event handlers run while the command is applied; a
        command they submit to the same room is refused as stale.

        Args:
            room_id: Room to apply the command to
            command: AddPlayer, StartGame, PlayCard or ResetGame
            base_version: Version the caller last observed

        Returns:
            (version, state) after the command

        Raises:
            RoomNotFound: If the room does not exist
            StaleStateVersion: If base_version is not the current version, or
                the room is still applying an earlier command
            UnknownCommand: If the command type is not supported
        """
        with self._lock:
            engine = self._engine(room_id)
            if room_id in self._applying:
                # Issued from an event handler while this room's previous
                # command has not been committed yet
                logger.warning(
                    f"Nested command for room {room_id} refused while "
                    f"version {engine.version} is being applied"
                )
                raise StaleStateVersion(room_id, base_version, engine.version)
            if base_version != engine.version:
                logger.warning(
                    f"Stale command for room {room_id}: "
                    f"based on {base_version}, current {engine.version}"
                )
                raise StaleStateVersion(room_id, base_version, engine.version)

            self._applying.add(room_id)
            try:
                engine.apply(command)
            finally:
                self._applying.discard(room_id)
            return engine.version, engine.state

    def snapshot(self, room_id: str) -> Dict[str, Any]:
        """Serializable snapshot of a room, tagged with its version."""
        with self._lock:
            engine = self._engine(room_id)
            data = engine.state.to_dict()
            data["version"] = engine.version
            return data

    def restore(self, data: Dict[str, Any]) -> Tuple[int, GameState]:
        """
        Load a room from a snapshot produced by `snapshot`.

        An existing room with the same id is replaced.
        """
        state = GameState.from_dict(data)
        with self._lock:
            engine = AceEngine(dict(self.config), state=state)
            engine.version = data.get("version", 0)
            self._rooms[state.id] = engine
            logger.info(f"Restored room {state.id} at version {engine.version}")
            return engine.version, engine.state

    def delete(self, room_id: str) -> None:
        with self._lock:
            self._engine(room_id)
            del self._rooms[room_id]
            logger.info(f"Deleted room {room_id}")

    def room_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._rooms)

    def _engine(self, room_id: str) -> AceEngine:
        engine = self._rooms.get(room_id)
        if engine is None:
            raise RoomNotFound(room_id)
        return engine
