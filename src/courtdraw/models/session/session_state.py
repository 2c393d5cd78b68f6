"""Immutable snapshot of a draw session."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from courtdraw.constants import (
    DEFAULT_GAME_MODE,
    DEFAULT_NUMBER_OF_COURTS,
    STORE_KEY_PLAYERS,
    STORE_KEY_SELECTED,
)
from courtdraw.exceptions import InvalidPlayerDataException
from courtdraw.models.player import Player
from courtdraw.models.session.game_mode import GameMode
from courtdraw.models.session.match import Match
from courtdraw.type_hints import Roster, Selection
from courtdraw.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class SessionState:
    """Everything the session commands read and write.

    Commands never modify a ``SessionState``; they return a new one.

    Attributes:
        players: The roster, in the order players were added
        selected_ids: Ids of the players available for the next draw
        game_mode: Mode used by the next draw
        number_of_courts: Courts to fill in the next draw, at least 1
        pending_matches: Last generated draw, waiting for confirmation.
            Empty when nothing is pending.
    """

    players: Roster = ()
    selected_ids: Selection = frozenset()
    game_mode: GameMode = GameMode(DEFAULT_GAME_MODE)
    number_of_courts: int = DEFAULT_NUMBER_OF_COURTS
    pending_matches: Tuple[Match, ...] = field(default_factory=tuple)

    @property
    def available_players(self) -> List[Player]:
        """Selected players, in roster order."""
        return [p for p in self.players if p.id in self.selected_ids]

    @property
    def has_pending_matches(self) -> bool:
        return bool(self.pending_matches)

    def player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def is_selected(self, player_id: str) -> bool:
        return player_id in self.selected_ids

    def evolve(self, **changes: Any) -> "SessionState":
        """Return a copy with ``changes`` applied."""
        if "players" in changes:
            changes["players"] = tuple(changes["players"])
        if "selected_ids" in changes:
            changes["selected_ids"] = frozenset(changes["selected_ids"])
        if "pending_matches" in changes:
            changes["pending_matches"] = tuple(changes["pending_matches"])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the persisted part of the session: roster and selection."""
        return {
            STORE_KEY_PLAYERS: [p.to_dict() for p in self.players],
            STORE_KEY_SELECTED: [p.id for p in self.players if p.id in self.selected_ids],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionState":
        """Deserialize a session from its persisted record.

        Unreadable player records are skipped with a warning. Selected ids
        that do not name a roster player are dropped.

        Raises:
            InvalidPlayerDataException: If the record is not a mapping
        """
        if not isinstance(data, dict):
            raise InvalidPlayerDataException(
                f"Session record must be an object, got {type(data).__name__}"
            )

        raw_players = data.get(STORE_KEY_PLAYERS) or []
        if not isinstance(raw_players, list):
            logger.warning("Ignoring malformed player list: %r", raw_players)
            raw_players = []

        players: List[Player] = []
        seen = set()
        for raw in raw_players:
            try:
                player = Player.from_dict(raw)
            except (InvalidPlayerDataException, TypeError) as e:
                logger.warning("Skipping unreadable player record %r: %s", raw, e)
                continue
            if player.id in seen:
                logger.warning("Skipping duplicate player id %s", player.id)
                continue
            seen.add(player.id)
            players.append(player)

        raw_selected = data.get(STORE_KEY_SELECTED)
        if not isinstance(raw_selected, list):
            raw_selected = []
        selected = frozenset(str(pid) for pid in raw_selected) & seen

        return cls(players=tuple(players), selected_ids=selected)
