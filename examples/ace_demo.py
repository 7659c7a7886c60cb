#!/usr/bin/env python3
"""
Example playing a full game of ACE through the room registry.

Every player plays the first legal card. Events published by the engine are
printed as they happen, and the final elimination order is shown at the end.
"""

import argparse
import logging

from acegame.engine.commands import AddPlayer, PlayCard, StartGame
from acegame.events import EventBus, EngineEventType
from acegame.ace.transitions import StateTransitionEngine
from acegame.rooms import RoomRegistry


def print_trick(event):
    outcome = "punished" if event["punished"] else "won"
    print(
        f"Trick {event['trick_number']}: player {event['taker_index']} {outcome}, "
        f"player {event['next_leader']} leads next"
    )


def print_elimination(event):
    print(
        f"  {event['player_name']} is out in position {event['elimination_order']}"
    )


def main():
    parser = argparse.ArgumentParser(description="Play a game of ACE")
    parser.add_argument("players", nargs="*", default=["Alice", "Bob", "Carol"])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-plays", type=int, default=5000)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    event_bus = EventBus.get_instance()
    event_bus.on(EngineEventType.TRICK_ENDED, print_trick)
    event_bus.on(EngineEventType.PLAYER_ELIMINATED, print_elimination)

    registry = RoomRegistry({"seed": args.seed})
    version, state = registry.create("demo")
    for name in args.players:
        version, state = registry.submit("demo", AddPlayer(name), version)
    version, state = registry.submit("demo", StartGame(), version)

    if not state.started:
        print("Need at least two players to start.")
        return

    print(f"{state.players[state.current_player].name} holds the Ace of Spade")

    for _ in range(args.max_plays):
        if not state.started:
            break
        player = state.current_player
        card_index = StateTransitionEngine.legal_card_indices(state, player)[0]
        version, state = registry.submit("demo", PlayCard(player, card_index), version)

    if state.started:
        print(f"Stopped after {args.max_plays} plays")
        return

    print()
    print("Elimination order:")
    for position, index in enumerate(state.elimination_order, start=1):
        print(f"  {position}. {state.players[index].name}")
    if state.loser_index is not None:
        loser = state.players[state.loser_index]
        print(f"{loser.name} is left holding {loser.card_count} cards")


if __name__ == "__main__":
    main()
