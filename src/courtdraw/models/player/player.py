"""A player on the roster."""

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

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict

from courtdraw.constants import FEMALE_ICON, MALE_ICON
from courtdraw.exceptions import InvalidPlayerDataException
from courtdraw.utils import generate_id, setup_logger
from courtdraw.utils.validation import validate_player_name_strict

logger = setup_logger(__name__)


class Gender(Enum):
    """Binary gender used by the gender constrained game modes."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: Any) -> "Gender":
        """Read a gender from its value, its name or a common short label.

        Accepts ``"male"``, ``"MALE"``, ``"m"``, ``"男"`` and the female
        equivalents.

        Raises:
            InvalidPlayerDataException: If the value is not recognised
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in _GENDER_ALIASES:
            return _GENDER_ALIASES[key]
        raise InvalidPlayerDataException(f"Unknown gender: {value!r}")

    @property
    def icon(self) -> str:
        return MALE_ICON if self is Gender.MALE else FEMALE_ICON


_GENDER_ALIASES = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "男": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
    "女": Gender.FEMALE,
}


@dataclass(frozen=True)
class Player:
    """A player that can be drawn onto a court.

    Players are immutable; every change produces a new instance through
    ``dataclasses.replace`` so a roster snapshot is never modified in place.

    Attributes:
        id: Opaque unique identifier
        name: Display name
        gender: Used by mixed and single-gender modes
        play_count: Number of confirmed matches the player took part in
        is_priority: Must be included in the next generated draw
    """

    id: str
    name: str
    gender: Gender
    play_count: int = 0
    is_priority: bool = False

    def __post_init__(self) -> None:
        if self.play_count < 0:
            raise InvalidPlayerDataException(
                f"Play count cannot be negative for {self.name}: {self.play_count}"
            )

    @classmethod
    def create(cls, name: str, gender: Gender) -> "Player":
        """Create a new roster entry with a fresh id and no games played."""
        name = validate_player_name_strict(name)
        player = cls(id=generate_id(cls.__name__), name=name, gender=Gender.parse(gender))
        logger.debug("Created player %s (%s)", player.name, player.gender.value)
        return player

    @property
    def is_male(self) -> bool:
        return self.gender is Gender.MALE

    @property
    def is_female(self) -> bool:
        return self.gender is Gender.FEMALE

    def with_priority(self, is_priority: bool) -> "Player":
        return replace(self, is_priority=is_priority)

    def with_played_match(self) -> "Player":
        """Return a copy with one more confirmed match."""
        return replace(self, play_count=self.play_count + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender.value,
            "playCount": self.play_count,
            "isPriority": self.is_priority,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize a player from dictionary.

        Both ``playCount``/``isPriority`` and ``play_count``/``is_priority``
        keys are understood.

        Raises:
            InvalidPlayerDataException: If required fields are missing or invalid
        """
        try:
            player_id = str(data["id"])
            name = data["name"]
            gender = Gender.parse(data["gender"])
        except KeyError as e:
            raise InvalidPlayerDataException(f"Player record is missing {e}") from e

        if not isinstance(name, str):
            raise InvalidPlayerDataException(f"Player name must be text: {name!r}")

        return cls(
            id=player_id,
            name=validate_player_name_strict(name),
            gender=gender,
            play_count=_read_play_count(
                name, data.get("playCount", data.get("play_count", 0))
            ),
            is_priority=_read_flag(
                name, data.get("isPriority", data.get("is_priority", False))
            ),
        )

    def __str__(self) -> str:
        return self.name


def _read_play_count(name: str, value: Any) -> int:
    """Play count from a stored record: a whole number, never a fraction."""
    if isinstance(value, bool):
        raise InvalidPlayerDataException(f"Invalid play count for {name}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        raise InvalidPlayerDataException(f"Invalid play count for {name}: {value!r}")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise InvalidPlayerDataException(
                f"Invalid play count for {name}: {value!r}"
            ) from e
    raise InvalidPlayerDataException(f"Invalid play count for {name}: {value!r}")


def _read_flag(name: str, value: Any) -> bool:
    """Must-play flag from a stored record: a boolean or ``"true"``/``"false"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise InvalidPlayerDataException(f"Invalid must-play flag for {name}: {value!r}")
