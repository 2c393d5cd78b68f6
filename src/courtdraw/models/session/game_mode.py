"""Game modes and the team shape each of them requires."""

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

from enum import Enum
from typing import Any, Optional

from courtdraw.constants import DOUBLES_TEAM_SIZE, SINGLES_TEAM_SIZE
from courtdraw.exceptions import InvalidConfigurationException
from courtdraw.models.player import Gender


class GameMode(Enum):
    """The seven ways a court can be filled."""

    ANY_DOUBLES = "any_doubles"
    MIXED_DOUBLES = "mixed_doubles"
    MENS_DOUBLES = "mens_doubles"
    WOMENS_DOUBLES = "womens_doubles"
    MENS_SINGLES = "mens_singles"
    WOMENS_SINGLES = "womens_singles"
    ANY_SINGLES = "any_singles"

    @classmethod
    def parse(cls, value: Any) -> "GameMode":
        """Read a mode from its value, enum name or display label.

        Matching ignores case, and ``-`` or spaces stand in for ``_``, so
        ``"mixed-doubles"``, ``"MIXED_DOUBLES"`` and ``"Mixed Doubles"``
        all resolve to ``MIXED_DOUBLES``.

        Raises:
            InvalidConfigurationException: If no mode matches
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for mode in cls:
            if key in (mode.value, mode.label.lower().replace(" ", "_")):
                return mode
        raise InvalidConfigurationException(f"Unknown game mode: {value!r}")

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_singles(self) -> bool:
        return self in (GameMode.MENS_SINGLES, GameMode.WOMENS_SINGLES, GameMode.ANY_SINGLES)

    @property
    def is_mixed(self) -> bool:
        return self is GameMode.MIXED_DOUBLES

    @property
    def team_size(self) -> int:
        return SINGLES_TEAM_SIZE if self.is_singles else DOUBLES_TEAM_SIZE

    @property
    def players_per_match(self) -> int:
        """2 for singles, 4 for doubles."""
        return 2 * self.team_size

    @property
    def required_gender(self) -> Optional[Gender]:
        """Gender every player must have, or None when genders are not restricted.

        Mixed doubles returns None: it restricts the gender split per team,
        not the pool.
        """
        if self in (GameMode.MENS_DOUBLES, GameMode.MENS_SINGLES):
            return Gender.MALE
        if self in (GameMode.WOMENS_DOUBLES, GameMode.WOMENS_SINGLES):
            return Gender.FEMALE
        return None


_LABELS = {
    GameMode.ANY_DOUBLES: "Any Doubles",
    GameMode.MIXED_DOUBLES: "Mixed Doubles",
    GameMode.MENS_DOUBLES: "Mens Doubles",
    GameMode.WOMENS_DOUBLES: "Womens Doubles",
    GameMode.MENS_SINGLES: "Mens Singles",
    GameMode.WOMENS_SINGLES: "Womens Singles",
    GameMode.ANY_SINGLES: "Any Singles",
}
