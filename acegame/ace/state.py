"""
Immutable state models for the ACE card game.

This module provides dataclasses for representing the state of an ACE game
in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones. Sequences are stored as tuples so that a snapshot can be
shared freely between callers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from enum import Enum, auto
import uuid
import time

from acegame.common.card import Card, Suit
from acegame.ace.constants import (
    LEADER_CARD,
    MIN_PLAYERS,
    TRICK_SIZE_FIXED,
    TRICK_SIZE_POLICIES,
)


class GameStage(Enum):
    """Observable stages of an ACE game."""

    LOBBY = auto()
    IN_TRICK = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class AceRules:
    """
    Immutable representation of the rules for an ACE game.

    Attributes:
        min_players: Minimum number of players required to start
        trick_size_policy: "fixed" counts the players alive when a trick's
            first card is played; "recount" recounts the players holding
            cards after every play
        leader_card: Card whose holder leads the first trick
    """

    min_players: int = MIN_PLAYERS
    trick_size_policy: str = TRICK_SIZE_FIXED
    leader_card: Card = LEADER_CARD

    def __post_init__(self):
        if self.min_players < MIN_PLAYERS:
            raise ValueError(f"min_players must be at least {MIN_PLAYERS}")
        if self.trick_size_policy not in TRICK_SIZE_POLICIES:
            raise ValueError(
                f"trick_size_policy must be one of {TRICK_SIZE_POLICIES}, "
                f"got {self.trick_size_policy!r}"
            )


@dataclass(frozen=True)
class PoolEntry:
    """
    A card played into the current trick.

    Attributes:
        player_index: Index of the player who played the card
        card: The card played
        exempt: True when the player held no card of the pool suit at the
            moment of play and was therefore free to play any suit
    """

    player_index: int
    card: Card
    exempt: bool = False


@dataclass(frozen=True)
class PlayerState:
    """
    Immutable representation of a player's state in ACE.

    Attributes:
        name: Display name of the player
        hand: Cards in the player's hand, in order
        elimination_order: 1-based position in which the player ran out of
            cards, or None while still playing
    """

    name: str = "Player"
    hand: Tuple[Card, ...] = ()
    elimination_order: Optional[int] = None

    @property
    def card_count(self) -> int:
        return len(self.hand)

    @property
    def is_alive(self) -> bool:
        """A player is alive while they hold at least one card."""
        return len(self.hand) > 0

    def has_suit(self, suit: Suit) -> bool:
        """Check if the player holds any card of the given suit."""
        return any(card.suit == suit for card in self.hand)


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the ACE card game state.

    Attributes:
        id: Unique identifier for this game (the room id)
        players: Players in seating order; the index is the player's identity
        started: Whether a game is in progress
        pool: Cards played so far in the current trick
        pool_suit: Suit of the first card of the current trick
        current_player: Index of the player whose turn it is
        plays_this_trick: Number of cards played in the current trick
        trick_size: Plays needed to complete the current trick (0 when the
            pool is empty and the policy is "fixed")
        elimination_order: Player indices in the order they ran out of cards
        tricks_played: Number of resolved tricks in this game
        rules: Rules for this game
        timestamp: Time when this state was created
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    players: Tuple[PlayerState, ...] = ()
    started: bool = False
    pool: Tuple[PoolEntry, ...] = ()
    pool_suit: Optional[Suit] = None
    current_player: int = 0
    plays_this_trick: int = 0
    trick_size: int = 0
    elimination_order: Tuple[int, ...] = ()
    tricks_played: int = 0
    rules: AceRules = field(default_factory=AceRules)
    timestamp: float = field(default_factory=lambda: time.time())

    @property
    def stage(self) -> GameStage:
        if self.started:
            return GameStage.IN_TRICK
        if self.elimination_order:
            return GameStage.GAME_OVER
        return GameStage.LOBBY

    @property
    def alive_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.players) if p.is_alive)

    @property
    def current(self) -> Optional[PlayerState]:
        if 0 <= self.current_player < len(self.players):
            return self.players[self.current_player]
        return None

    @property
    def loser_index(self) -> Optional[int]:
        """Index of the last player still holding cards once the game is over."""
        if self.stage != GameStage.GAME_OVER:
            return None
        alive = self.alive_indices
        return alive[0] if len(alive) == 1 else None

    @property
    def cards_in_play(self) -> int:
        """Cards held in hands plus cards sitting in the pool."""
        return sum(p.card_count for p in self.players) + len(self.pool)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "id": self.id,
            "started": self.started,
            "stage": self.stage.name,
            "current_player": self.current_player,
            "pool_suit": self.pool_suit.value if self.pool_suit else None,
            "plays_this_trick": self.plays_this_trick,
            "trick_size": self.trick_size,
            "tricks_played": self.tricks_played,
            "elimination_order": list(self.elimination_order),
            "pool": [
                {
                    "player_index": entry.player_index,
                    "card": entry.card.to_dict(),
                    "exempt": entry.exempt,
                }
                for entry in self.pool
            ],
            "players": [
                {
                    "name": player.name,
                    "hand": [card.to_dict() for card in player.hand],
                    "elimination_order": player.elimination_order,
                }
                for player in self.players
            ],
            "rules": {
                "min_players": self.rules.min_players,
                "trick_size_policy": self.rules.trick_size_policy,
                "leader_card": self.rules.leader_card.to_dict(),
            },
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """
        Rebuild a game state from the output of `to_dict`.

        Args:
            data: Dictionary produced by `to_dict`

        Returns:
            The equivalent game state
        """
        rules_data = data.get("rules") or {}
        rules = AceRules(
            min_players=rules_data.get("min_players", MIN_PLAYERS),
            trick_size_policy=rules_data.get("trick_size_policy", TRICK_SIZE_FIXED),
            leader_card=(
                Card.from_dict(rules_data["leader_card"])
                if "leader_card" in rules_data
                else LEADER_CARD
            ),
        )
        players = tuple(
            PlayerState(
                name=p["name"],
                hand=tuple(Card.from_dict(c) for c in p["hand"]),
                elimination_order=p.get("elimination_order"),
            )
            for p in data.get("players", [])
        )
        pool = tuple(
            PoolEntry(
                player_index=e["player_index"],
                card=Card.from_dict(e["card"]),
                exempt=e.get("exempt", False),
            )
            for e in data.get("pool", [])
        )
        pool_suit = data.get("pool_suit")
        return cls(
            id=data["id"],
            players=players,
            started=data.get("started", False),
            pool=pool,
            pool_suit=Suit(pool_suit) if pool_suit else None,
            current_player=data.get("current_player", 0),
            plays_this_trick=data.get("plays_this_trick", 0),
            trick_size=data.get("trick_size", 0),
            elimination_order=tuple(data.get("elimination_order", [])),
            tricks_played=data.get("tricks_played", 0),
            rules=rules,
            timestamp=data.get("timestamp", time.time()),
        )
