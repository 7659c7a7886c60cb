"""
State transition functions for the ACE card game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. A command that is not legal in
the given state is rejected by returning the input state unchanged; the
reason is only logged.
"""

import logging
import random
from dataclasses import replace
from typing import List, Optional, Sequence

from acegame.common.card import Card
from acegame.common.deck import build_shuffled_deck
from acegame.events import EventBus, EngineEventType
from acegame.ace.constants import TRICK_SIZE_FIXED
from acegame.ace.state import AceRules, GameState, PlayerState, PoolEntry
from acegame.ace.trick import TrickResolver

logger = logging.getLogger(__name__)


class StateTransitionEngine:
    """
    Pure functions for state transitions in ACE.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def create_game(
        game_id: Optional[str] = None, rules: Optional[AceRules] = None
    ) -> GameState:
        """
        Create an empty game in the lobby.

        Args:
            game_id: Identifier for the game (a uuid is generated if None)
            rules: Rules for the game (defaults if None)

        Returns:
            New, empty game state
        """
        kwargs = {"rules": rules or AceRules()}
        if game_id is not None:
            kwargs["id"] = game_id
        state = GameState(**kwargs)

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_CREATED,
            {
                "game_id": state.id,
                "rules": {
                    "min_players": state.rules.min_players,
                    "trick_size_policy": state.rules.trick_size_policy,
                },
                "timestamp": state.timestamp,
            },
        )

        return state

    @staticmethod
    def add_player(state: GameState, name: str) -> GameState:
        """
        Add a player to the game.

        Names need not be unique; the player's index is their identity. An
        empty name is ignored.

        Args:
            state: Current game state
            name: Name of the player to add

        Returns:
            New game state with the player added, or the same state if the
            name is empty or the game has already started
        """
        if state.started:
            logger.debug("Rejected add_player(%r): game already started", name)
            return state

        if not name:
            logger.debug("Rejected add_player: empty name")
            return state

        new_player = PlayerState(name=name)
        new_state = replace(state, players=state.players + (new_player,))

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.PLAYER_JOINED,
            {
                "game_id": state.id,
                "player_index": len(new_state.players) - 1,
                "player_name": new_player.name,
                "timestamp": new_state.timestamp,
            },
        )

        return new_state

    @staticmethod
    def start_game(
        state: GameState,
        rng: Optional[random.Random] = None,
        deck: Optional[Sequence[Card]] = None,
    ) -> GameState:
        """
        Deal a fresh deck and start play.

        Cards are dealt one at a time, round-robin from player 0, until the
        deck runs out. The holder of the leader card (Ace of Spade) leads the
        first trick; player 0 leads if nobody holds it.

        Args:
            state: Current game state
            rng: Random generator used to shuffle the deck
            deck: Explicit card sequence to deal instead of a shuffled deck;
                must be non-empty and free of duplicates

        Returns:
            New game state ready for the first trick, or the same state if
            there are not enough players or the deck is unusable. Players
            left empty-handed by a short deck are eliminated at once.
        """
        player_count = len(state.players)
        if player_count < state.rules.min_players:
            logger.debug(
                "Rejected start_game: %d players, %d required",
                player_count,
                state.rules.min_players,
            )
            return state

        cards = list(deck) if deck is not None else build_shuffled_deck(rng)
        if not cards or len(set(cards)) != len(cards):
            logger.debug(
                "Rejected start_game: deck of %d cards is empty or has duplicates",
                len(cards),
            )
            return state

        hands: List[List[Card]] = [[] for _ in range(player_count)]
        for i, card in enumerate(cards):
            hands[i % player_count].append(card)

        new_players = tuple(
            replace(player, hand=tuple(hands[i]), elimination_order=None)
            for i, player in enumerate(state.players)
        )

        leader = next(
            (
                i
                for i, player in enumerate(new_players)
                if state.rules.leader_card in player.hand
            ),
            0,
        )

        new_state = replace(
            state,
            players=new_players,
            started=True,
            pool=(),
            pool_suit=None,
            current_player=leader,
            plays_this_trick=0,
            trick_size=0,
            elimination_order=(),
            tricks_played=0,
        )

        logger.info(
            "Game %s started with %d players; player %d leads",
            state.id,
            player_count,
            leader,
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_STARTED,
            {
                "game_id": state.id,
                "player_count": player_count,
                "hand_sizes": [p.card_count for p in new_players],
                "leader_index": leader,
                "leader_name": new_players[leader].name,
                "timestamp": new_state.timestamp,
            },
        )

        # A short deck can leave players without cards
        new_state = TrickResolver.record_eliminations(new_state)
        return TrickResolver.check_game_end(new_state)

    @staticmethod
    def legal_card_indices(state: GameState, player_index: int) -> List[int]:
        """
        Indices of the cards the player may play right now.

        Args:
            state: Current game state
            player_index: Player to check

        Returns:
            Playable hand indices; empty when it is not the player's turn
        """
        if not state.started or player_index != state.current_player:
            return []
        if not 0 <= player_index < len(state.players):
            return []

        hand = state.players[player_index].hand
        suit = state.pool_suit
        if suit is None or not any(card.suit == suit for card in hand):
            return list(range(len(hand)))
        return [i for i, card in enumerate(hand) if card.suit == suit]

    @staticmethod
    def play_card(state: GameState, player_index: int, card_index: int) -> GameState:
        """
        Play a card from the current player's hand into the pool.

        Args:
            state: Current game state
            player_index: Index of the player making the play
            card_index: Index of the card in the player's hand

        Returns:
            New game state with the card played (and the trick resolved if
            it is complete), or the same state if the play is illegal
        """
        if not state.started:
            logger.debug("Rejected play_card: game not started")
            return state

        if player_index != state.current_player:
            logger.debug(
                "Rejected play_card: player %s played out of turn (current %d)",
                player_index,
                state.current_player,
            )
            return state

        player = state.players[player_index]
        if not 0 <= card_index < len(player.hand):
            logger.debug(
                "Rejected play_card: card index %s out of range for player %d",
                card_index,
                player_index,
            )
            return state

        card = player.hand[card_index]
        pool_suit = state.pool_suit
        can_follow = pool_suit is not None and player.has_suit(pool_suit)

        if can_follow and card.suit != pool_suit:
            logger.debug(
                "Rejected play_card: player %d must follow %s, tried %s",
                player_index,
                pool_suit,
                card,
            )
            return state

        new_players = list(state.players)
        new_players[player_index] = replace(
            player, hand=player.hand[:card_index] + player.hand[card_index + 1 :]
        )
        new_players = tuple(new_players)

        entry = PoolEntry(
            player_index=player_index,
            card=card,
            exempt=pool_suit is not None and not can_follow,
        )
        plays = state.plays_this_trick + 1
        trick_size = StateTransitionEngine._trick_size(state, new_players)

        new_state = replace(
            state,
            players=new_players,
            pool=state.pool + (entry,),
            pool_suit=pool_suit or card.suit,
            plays_this_trick=plays,
            trick_size=trick_size,
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.CARD_PLAYED,
            {
                "game_id": state.id,
                "player_index": player_index,
                "player_name": player.name,
                "card": str(card),
                "exempt": entry.exempt,
                "plays_this_trick": plays,
                "trick_size": trick_size,
                "timestamp": new_state.timestamp,
            },
        )

        if plays >= trick_size:
            return TrickResolver.resolve(new_state)

        next_player = TrickResolver.next_alive_after(new_players, player_index)
        new_state = replace(new_state, current_player=next_player)

        event_bus.emit(
            EngineEventType.TURN_CHANGED,
            {
                "game_id": state.id,
                "player_index": next_player,
                "player_name": new_players[next_player].name,
                "timestamp": new_state.timestamp,
            },
        )

        return new_state

    @staticmethod
    def _trick_size(state: GameState, players_after_play: Sequence[PlayerState]) -> int:
        if state.rules.trick_size_policy == TRICK_SIZE_FIXED:
            if state.pool and state.trick_size > 0:
                return state.trick_size
            # First card of the trick: everyone alive right now must play
            return len(state.alive_indices)

        alive = sum(1 for p in players_after_play if p.is_alive)
        return alive if alive > 0 else len(players_after_play)

    @staticmethod
    def reset_game(state: GameState) -> GameState:
        """
        Clear the game back to an empty lobby.

        The game id and rules are kept so the room can be reused.

        Args:
            state: Current game state

        Returns:
            New, empty game state
        """
        new_state = GameState(id=state.id, rules=state.rules)

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_RESET,
            {
                "game_id": state.id,
                "player_count": len(state.players),
                "timestamp": new_state.timestamp,
            },
        )

        return new_state
