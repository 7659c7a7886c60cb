"""ACE-specific constants."""

from acegame.common.card import Card, Rank, Suit

DECK_SIZE = 52
MIN_PLAYERS = 2

# Whoever holds this card leads the first trick
LEADER_CARD = Card(Suit.SPADE, Rank.ACE)

# Trick size policies
TRICK_SIZE_FIXED = "fixed"
TRICK_SIZE_RECOUNT = "recount"
TRICK_SIZE_POLICIES = (TRICK_SIZE_FIXED, TRICK_SIZE_RECOUNT)
