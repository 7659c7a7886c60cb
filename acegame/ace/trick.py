"""
Trick resolution for the ACE card game.

Once every player in a trick has played, the trick is resolved in one of two
ways:

- Punishment: someone who could not follow the pool suit played another
  suit. The player who played the heaviest card of the pool suit (the
  victim) picks up every card in the pool.
- Normal: everybody followed suit. The heaviest card of the pool suit wins
  and the pool is discarded.

In both cases the next trick is led by the first alive player after the
victim or winner. Afterwards players who ran out of cards are recorded in
elimination order and the game ends once at most one player holds cards.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from acegame.common.card import Suit
from acegame.events import EventBus, EngineEventType
from acegame.ace.state import GameState, PlayerState, PoolEntry

logger = logging.getLogger(__name__)


class TrickResolver:
    """
    Pure functions resolving a completed trick.

    Like the transition engine, every method takes a state and returns a new
    one without modifying its input.
    """

    @staticmethod
    def is_punishment(pool: Sequence[PoolEntry], pool_suit: Optional[Suit]) -> bool:
        """True if an exempt player sloughed a card off the pool suit."""
        return any(
            entry.card.suit != pool_suit and entry.exempt for entry in pool
        )

    @staticmethod
    def heaviest_entry(
        pool: Sequence[PoolEntry], pool_suit: Optional[Suit]
    ) -> Optional[PoolEntry]:
        """
        Find the heaviest card of the pool suit.

        Falls back to the first entry of the trick when no card of the pool
        suit was played. Returns None only for an empty pool.
        """
        if not pool:
            return None
        matching = [entry for entry in pool if entry.card.suit == pool_suit]
        if not matching:
            return pool[0]
        return min(matching, key=lambda entry: entry.card.weight)

    @staticmethod
    def next_alive_after(players: Sequence[PlayerState], index: int) -> int:
        """
        First alive player strictly after `index` in cyclic order.

        The scan wraps around to `index` itself last. When nobody is alive
        the seat right after `index` is returned.
        """
        count = len(players)
        for step in range(1, count + 1):
            candidate = (index + step) % count
            if players[candidate].is_alive:
                return candidate
        return (index + 1) % count

    @staticmethod
    def record_eliminations(state: GameState) -> GameState:
        """
        Append newly empty-handed players to the elimination order.

        Players are scanned in ascending index order. Running this twice on
        the same state changes nothing the second time.
        """
        order = list(state.elimination_order)
        players = list(state.players)
        newly_out = []

        for i, player in enumerate(players):
            if player.is_alive or i in order:
                continue
            order.append(i)
            players[i] = replace(player, elimination_order=len(order))
            newly_out.append(i)

        if not newly_out:
            return state

        new_state = replace(
            state, players=tuple(players), elimination_order=tuple(order)
        )

        event_bus = EventBus.get_instance()
        for i in newly_out:
            logger.info(
                "Player %d (%s) eliminated in position %d",
                i,
                players[i].name,
                players[i].elimination_order,
            )
            event_bus.emit(
                EngineEventType.PLAYER_ELIMINATED,
                {
                    "game_id": state.id,
                    "player_index": i,
                    "player_name": players[i].name,
                    "elimination_order": players[i].elimination_order,
                    "timestamp": new_state.timestamp,
                },
            )

        return new_state

    @staticmethod
    def check_game_end(state: GameState) -> GameState:
        """
        Stop the game when at most one player still holds cards.

        Args:
            state: State after elimination bookkeeping

        Returns:
            The same state, or a copy with `started` cleared
        """
        if not state.started or len(state.alive_indices) > 1:
            return state

        new_state = replace(state, started=False)
        loser_index = new_state.loser_index

        logger.info(
            "Game %s over after %d tricks; elimination order %s",
            state.id,
            state.tricks_played,
            list(state.elimination_order),
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_ENDED,
            {
                "game_id": state.id,
                "elimination_order": list(new_state.elimination_order),
                "loser_index": loser_index,
                "loser_name": (
                    new_state.players[loser_index].name
                    if loser_index is not None
                    else None
                ),
                "trick_count": new_state.tricks_played,
                "timestamp": new_state.timestamp,
            },
        )

        return new_state

    @staticmethod
    def resolve(state: GameState) -> GameState:
        """
        Resolve the completed trick held in `state.pool`.

        Args:
            state: State whose pool holds a complete trick

        Returns:
            New game state with the trick resolved, eliminations recorded
            and the game-end condition applied
        """
        pool = state.pool
        pool_suit = state.pool_suit
        if not pool:
            return state

        punished = TrickResolver.is_punishment(pool, pool_suit)
        taker = TrickResolver.heaviest_entry(pool, pool_suit).player_index

        players = list(state.players)
        if punished:
            # The victim picks up the whole pool
            collected = tuple(entry.card for entry in pool)
            victim = players[taker]
            players[taker] = replace(victim, hand=victim.hand + collected)

        next_leader = TrickResolver.next_alive_after(players, taker)

        new_state = replace(
            state,
            players=tuple(players),
            pool=(),
            pool_suit=None,
            plays_this_trick=0,
            trick_size=0,
            current_player=next_leader,
            tricks_played=state.tricks_played + 1,
        )

        if punished:
            logger.info(
                "Trick %d punished: player %d collects %d cards",
                new_state.tricks_played,
                taker,
                len(pool),
            )
        else:
            logger.info(
                "Trick %d won by player %d; %d cards discarded",
                new_state.tricks_played,
                taker,
                len(pool),
            )

        event_bus = EventBus.get_instance()
        if punished:
            event_bus.emit(
                EngineEventType.PUNISHMENT,
                {
                    "game_id": state.id,
                    "victim_index": taker,
                    "victim_name": players[taker].name,
                    "cards": [str(entry.card) for entry in pool],
                    "timestamp": new_state.timestamp,
                },
            )
        event_bus.emit(
            EngineEventType.TRICK_ENDED,
            {
                "game_id": state.id,
                "trick_number": new_state.tricks_played,
                "punished": punished,
                "taker_index": taker,
                "pool_suit": str(pool_suit) if pool_suit else None,
                "next_leader": next_leader,
                "timestamp": new_state.timestamp,
            },
        )

        new_state = TrickResolver.record_eliminations(new_state)
        return TrickResolver.check_game_end(new_state)
