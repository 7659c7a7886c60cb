"""
Exceptions raised outside of gameplay.

Gameplay rejections (wrong turn, illegal card, game not started) are never
raised; the transition simply returns the unchanged state. These exceptions
cover caller mistakes around the engine instead.
"""


class AceGameException(Exception):
    """Base class for all acegame exceptions."""
    pass


class RoomNotFound(AceGameException):
    """No game is registered under the room id."""
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class RoomAlreadyExists(AceGameException):
    """A game is already registered under the room id."""
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} already exists")


class StaleStateVersion(AceGameException):
    """The caller's base version no longer matches the stored version."""
    def __init__(self, room_id, expected_version, current_version):
        self.room_id = room_id
        self.expected_version = expected_version
        self.current_version = current_version
        super().__init__(
            f"Room {room_id} is at version {current_version}, "
            f"command was based on version {expected_version}"
        )


class UnknownCommand(AceGameException):
    """The object passed to the engine is not a supported command."""
    def __init__(self, command):
        self.command = command
        super().__init__(f"Unsupported command: {command!r}")
