"""Type hints used in Court Draw."""

from typing import FrozenSet, List, Literal, Sequence, Tuple

# Side of the net
TEAM_A = "A"
TEAM_B = "B"
Side = Literal["A", "B"]

# Game mode identifiers (values of GameMode)
GameModeValue = Literal[
    "any_doubles",
    "mixed_doubles",
    "mens_doubles",
    "womens_doubles",
    "mens_singles",
    "womens_singles",
    "any_singles",
]

# One side of a match
Team = Tuple["Player", ...]
# Any ordered collection of players
PlayerPool = Sequence["Player"]
# Players in roster order
Roster = Tuple["Player", ...]
# Selected player ids
Selection = FrozenSet[str]
# Matches proposed by one draw, in court order
Draw = List["Match"]
