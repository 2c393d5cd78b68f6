"""Match data class."""

# Court Draw
# Copyright (C) 2025  Court Draw developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from courtdraw.models.player import Player
from courtdraw.type_hints import Team


@dataclass(frozen=True)
class Match:
    """A proposed match on one court.

    A match is only a proposal: building one never changes the play count
    of its players. Play counts move when the draw is confirmed.

    Attributes:
        court: Court number, 1-indexed, in the order the draw produced them
        team_a: One player for singles, two for doubles
        team_b: Same size as ``team_a``
    """

    court: int
    team_a: Team
    team_b: Team

    @property
    def players(self) -> Tuple[Player, ...]:
        """All players on court, team A first."""
        return tuple(self.team_a) + tuple(self.team_b)

    @property
    def player_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.players)

    @property
    def is_singles(self) -> bool:
        return len(self.team_a) == 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary of player ids."""
        return {
            "court": self.court,
            "teamA": [p.id for p in self.team_a],
            "teamB": [p.id for p in self.team_b],
        }
