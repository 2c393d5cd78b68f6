"""Session commands.

Every user action on a draw session is a function that takes the current
``SessionState`` and returns a ``CommandResult``: the next state and,
when the action failed, the error to show. The input state is never
modified, and a failed command returns its input state unchanged apart
from what the failure itself clears.
"""

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

import random
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from courtdraw.exceptions import (
    CourtDrawException,
    InvalidPlayerDataException,
    PlayerNotFoundException,
)
from courtdraw.models.player import Gender, Player
from courtdraw.models.session import GameMode, Match, SessionState
from courtdraw.pairing.court_draw import MatchGenerator
from courtdraw.type_hints import Roster
from courtdraw.utils import setup_logger
from courtdraw.utils.validation import (
    parse_player_names,
    validate_number_of_courts_strict,
)

logger = setup_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a session command.

    Attributes:
        state: The state after the command
        error: Why the command failed, or None. ``str(error)`` is the
            message for the user.
    """

    state: SessionState
    error: Optional[CourtDrawException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


def _require_player(state: SessionState, player_id: str) -> Player:
    player = state.player(player_id)
    if player is None:
        raise PlayerNotFoundException(f"No player with id {player_id!r}")
    return player


# ========== Roster ==========


def add_player(state: SessionState, name: str, gender: Gender) -> CommandResult:
    """Add a new player and select them for the next draw."""
    try:
        player = Player.create(name, gender)
    except InvalidPlayerDataException as e:
        logger.warning("Cannot add player: %s", e)
        return CommandResult(state, e)

    logger.info("Added player %s", player.name)
    return CommandResult(
        state.evolve(
            players=state.players + (player,),
            selected_ids=state.selected_ids | {player.id},
            pending_matches=(),
        )
    )


def add_players(state: SessionState, text: str, gender: Gender) -> CommandResult:
    """Add every name found in ``text``, all with the same gender.

    Names are separated by commas, the ideographic comma or whitespace.
    Nothing is added when any name is invalid.
    """
    names = parse_player_names(text)
    if not names:
        e = InvalidPlayerDataException("Enter at least one player name")
        return CommandResult(state, e)

    try:
        new_players = tuple(Player.create(name, gender) for name in names)
    except InvalidPlayerDataException as e:
        logger.warning("Cannot add players: %s", e)
        return CommandResult(state, e)

    logger.info("Added %s player(s)", len(new_players))
    return CommandResult(
        state.evolve(
            players=state.players + new_players,
            selected_ids=state.selected_ids | {p.id for p in new_players},
            pending_matches=(),
        )
    )


def delete_player(state: SessionState, player_id: str) -> CommandResult:
    """Remove a player from the roster and from the selection."""
    try:
        player = _require_player(state, player_id)
    except PlayerNotFoundException as e:
        logger.warning("Cannot delete player: %s", e)
        return CommandResult(state, e)

    logger.info("Deleted player %s", player.name)
    return CommandResult(
        state.evolve(
            players=[p for p in state.players if p.id != player_id],
            selected_ids=state.selected_ids - {player_id},
            pending_matches=(),
        )
    )


def clear_all(state: SessionState) -> CommandResult:
    """Remove every player."""
    logger.info("Cleared %s player(s)", len(state.players))
    return CommandResult(state.evolve(players=(), selected_ids=(), pending_matches=()))


# ========== Selection and priority ==========


def toggle_selection(state: SessionState, player_id: str) -> CommandResult:
    """Select an unselected player, or unselect a selected one."""
    try:
        _require_player(state, player_id)
    except PlayerNotFoundException as e:
        return CommandResult(state, e)

    if player_id in state.selected_ids:
        selected = state.selected_ids - {player_id}
    else:
        selected = state.selected_ids | {player_id}
    return CommandResult(state.evolve(selected_ids=selected, pending_matches=()))


def set_all_selected(state: SessionState, select: bool) -> CommandResult:
    """Select every player, or none of them."""
    selected = {p.id for p in state.players} if select else set()
    return CommandResult(state.evolve(selected_ids=selected, pending_matches=()))


def toggle_priority(state: SessionState, player_id: str) -> CommandResult:
    """Flip the must-play flag of a player.

    Pending matches are kept: the flag only affects the next draw.
    """
    try:
        player = _require_player(state, player_id)
    except PlayerNotFoundException as e:
        return CommandResult(state, e)

    flipped = player.with_priority(not player.is_priority)
    logger.debug("%s must-play: %s", flipped.name, flipped.is_priority)
    return CommandResult(
        state.evolve(
            players=[flipped if p.id == player_id else p for p in state.players]
        )
    )


# ========== Settings ==========


def set_mode(state: SessionState, mode: Any) -> CommandResult:
    """Change the game mode of the next draw."""
    try:
        game_mode = GameMode.parse(mode)
    except CourtDrawException as e:
        return CommandResult(state, e)
    return CommandResult(state.evolve(game_mode=game_mode, pending_matches=()))


def set_courts(state: SessionState, courts: Any) -> CommandResult:
    """Change the number of courts of the next draw (at least 1)."""
    try:
        number_of_courts = validate_number_of_courts_strict(courts)
    except CourtDrawException as e:
        return CommandResult(state, e)
    return CommandResult(
        state.evolve(number_of_courts=number_of_courts, pending_matches=())
    )


# ========== Draw ==========


def generate(state: SessionState, rng: Optional[random.Random] = None) -> CommandResult:
    """Draw matches for the current selection, mode and court count.

    On success the draw replaces any pending matches. On failure the
    pending matches are cleared and player data is left as it was.
    """
    generator = MatchGenerator(rng)
    try:
        matches = generator.generate(
            state.available_players, state.game_mode, state.number_of_courts
        )
    except CourtDrawException as e:
        return CommandResult(state.evolve(pending_matches=()), e)
    return CommandResult(state.evolve(pending_matches=matches))


def confirm_matches(players: Iterable[Player], matches: Iterable[Match]) -> Roster:
    """Return ``players`` with one more play for everyone in ``matches``.

    Each participant is counted once, however many matches name them.
    """
    participant_ids = {pid for match in matches for pid in match.player_ids}
    return tuple(
        p.with_played_match() if p.id in participant_ids else p for p in players
    )


def confirm(state: SessionState) -> CommandResult:
    """Commit the pending matches and clear them.

    A no-op when nothing is pending, so a second confirm never counts
    the same draw twice.
    """
    if not state.pending_matches:
        logger.debug("Nothing to confirm")
        return CommandResult(state)

    players = confirm_matches(state.players, state.pending_matches)
    logger.info("Confirmed %s match(es)", len(state.pending_matches))
    return CommandResult(state.evolve(players=players, pending_matches=()))

