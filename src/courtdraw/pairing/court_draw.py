"""Court draw: feasibility checks and team composition.

This module turns the selected players into one proposed match per court.
It handles:
- Resolving how many players a mode and court count need
- Rejecting infeasible draws with a specific reason
- Filling the open slots by fairness selection around must-play players
- Composing teams, with gender balanced pairs for mixed doubles
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
from typing import List, Optional, Tuple

from courtdraw.constants import MIXED_PAIRING_PROBABILITY, MIXED_PLAYERS_PER_GENDER
from courtdraw.exceptions import (
    CourtDrawException,
    GenderShortageException,
    InsufficientTotalPlayersException,
    InternalShortfallException,
    PriorityOverflowException,
)
from courtdraw.models.player import Gender, Player
from courtdraw.models.session import GameMode, Match
from courtdraw.pairing.fairness import select_players, shuffled
from courtdraw.type_hints import Draw, PlayerPool
from courtdraw.utils import setup_logger
from courtdraw.utils.validation import validate_number_of_courts_strict

logger = setup_logger(__name__)


@dataclass(frozen=True)
class DrawRequirements:
    """How many players a draw needs.

    Attributes:
        game_mode: Mode of the draw
        number_of_courts: Courts to fill
        players_per_match: 2 for singles, 4 for doubles
        total_needed: ``players_per_match * number_of_courts``
        needed_per_gender: Players of each gender a mixed doubles draw
            needs. Zero for other modes.
    """

    game_mode: GameMode
    number_of_courts: int
    players_per_match: int
    total_needed: int
    needed_per_gender: int


def resolve_requirements(game_mode: GameMode, number_of_courts: int) -> DrawRequirements:
    """Derive player counts for ``game_mode`` on ``number_of_courts`` courts.

    Raises:
        InvalidConfigurationException: If ``number_of_courts`` is below 1
    """
    game_mode = GameMode.parse(game_mode)
    number_of_courts = validate_number_of_courts_strict(number_of_courts)
    players_per_match = game_mode.players_per_match
    needed_per_gender = (
        MIXED_PLAYERS_PER_GENDER * number_of_courts if game_mode.is_mixed else 0
    )
    return DrawRequirements(
        game_mode=game_mode,
        number_of_courts=number_of_courts,
        players_per_match=players_per_match,
        total_needed=players_per_match * number_of_courts,
        needed_per_gender=needed_per_gender,
    )


def filter_pool(available: PlayerPool, game_mode: GameMode) -> List[Player]:
    """Keep the players ``game_mode`` allows on court."""
    gender = game_mode.required_gender
    if gender is None:
        return list(available)
    return [p for p in available if p.gender is gender]


def split_priority(pool: PlayerPool) -> Tuple[List[Player], List[Player]]:
    """Split ``pool`` into (priority players, regular players)."""
    priority = [p for p in pool if p.is_priority]
    regular = [p for p in pool if not p.is_priority]
    return priority, regular


def validate_draw(
    available: PlayerPool, game_mode: GameMode, number_of_courts: int
) -> DrawRequirements:
    """Check that a draw can be produced, stopping at the first failure.

    Args:
        available: The selected players
        game_mode: Mode of the draw
        number_of_courts: Courts to fill

    Returns:
        The resolved requirements when the draw is feasible

    Raises:
        InsufficientTotalPlayersException: Fewer players selected than needed
        PriorityOverflowException: More must-play players than slots, overall
            or for one gender in mixed doubles
        GenderShortageException: Not enough regular players of the required
            gender(s) to fill the remaining slots
        InvalidConfigurationException: ``number_of_courts`` is below 1
    """
    req = resolve_requirements(game_mode, number_of_courts)

    if len(available) < req.total_needed:
        raise InsufficientTotalPlayersException(
            f"Not enough players: {req.game_mode.label} on {req.number_of_courts} "
            f"court(s) needs {req.total_needed} players, "
            f"but only {len(available)} are selected.",
            needed=req.total_needed,
            available=len(available),
        )

    priority, _ = split_priority(available)
    if len(priority) > req.total_needed:
        raise PriorityOverflowException(
            f"Too many must-play players: {len(priority)} are flagged "
            f"but this draw only has {req.total_needed} slots.",
            needed=req.total_needed,
            available=len(priority),
        )

    if req.game_mode.is_mixed:
        _validate_mixed(available, req)
    else:
        _validate_single_pool(available, req)

    return req


def _validate_mixed(available: PlayerPool, req: DrawRequirements) -> None:
    shortages = []
    for gender in (Gender.MALE, Gender.FEMALE):
        priority = [p for p in available if p.gender is gender and p.is_priority]
        if len(priority) > req.needed_per_gender:
            raise PriorityOverflowException(
                f"Too many must-play {gender.value} players: "
                f"{len(priority)} are flagged but mixed doubles on "
                f"{req.number_of_courts} court(s) takes {req.needed_per_gender}.",
                needed=req.needed_per_gender,
                available=len(priority),
                gender=gender.value,
            )

    for gender in (Gender.MALE, Gender.FEMALE):
        pool = [p for p in available if p.gender is gender]
        priority, regular = split_priority(pool)
        remaining = req.needed_per_gender - len(priority)
        if len(regular) < remaining:
            shortages.append((gender, remaining, len(regular)))

    if shortages:
        details = ", ".join(
            f"{remaining} more {gender.value} needed but {have} available"
            for gender, remaining, have in shortages
        )
        raise GenderShortageException(
            f"Not enough male/female players for mixed doubles: {details}.",
            needed=shortages[0][1],
            available=shortages[0][2],
            gender=shortages[0][0].value if len(shortages) == 1 else None,
        )


def _validate_single_pool(available: PlayerPool, req: DrawRequirements) -> None:
    pool = filter_pool(available, req.game_mode)
    priority, regular = split_priority(pool)
    gender = req.game_mode.required_gender

    if len(priority) > req.total_needed:
        raise PriorityOverflowException(
            f"Too many must-play players: {len(priority)} are flagged "
            f"but this draw only has {req.total_needed} slots.",
            needed=req.total_needed,
            available=len(priority),
            gender=gender.value if gender else None,
        )

    remaining = req.total_needed - len(priority)
    if len(regular) < remaining:
        who = f"{gender.value} players" if gender else "eligible players"
        raise GenderShortageException(
            f"Not enough {who}: {req.game_mode.label} needs {req.total_needed}, "
            f"but only {len(pool)} are selected.",
            needed=req.total_needed,
            available=len(pool),
            gender=gender.value if gender else None,
        )


class MatchGenerator:
    """Produces one proposed match per court from the selected players.

    The generator keeps no state between draws apart from its random
    source, so two generators seeded alike produce the same draws.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize the generator.

        Args:
            rng: Random source for every shuffle and coin flip. A fresh
                unseeded ``random.Random`` when omitted.
        """
        self.rng = rng or random.Random()

    def generate(
        self, available: PlayerPool, game_mode: GameMode, number_of_courts: int
    ) -> Draw:
        """Validate and draw matches.

        Args:
            available: The selected players
            game_mode: Mode of the draw
            number_of_courts: Courts to fill

        Returns:
            One match per court, in court order

        Raises:
            DrawException: The draw is infeasible, see ``validate_draw``
            InternalShortfallException: Fewer matches came out than courts
                were requested
        """
        try:
            req = validate_draw(available, game_mode, number_of_courts)
        except CourtDrawException as e:
            logger.warning("Draw rejected: %s", e)
            raise

        logger.info(
            "Drawing %s on %s court(s) from %s selected players",
            req.game_mode.label,
            req.number_of_courts,
            len(available),
        )

        if req.game_mode.is_mixed:
            matches = self._draw_mixed_doubles(available, req)
        else:
            matches = self._draw_open(available, req)

        if len(matches) < req.number_of_courts:
            logger.error(
                "Draw produced %s match(es) for %s court(s) after validation passed",
                len(matches),
                req.number_of_courts,
            )
            raise InternalShortfallException(
                "An unexpected error occurred and not enough matches could be drawn.",
                needed=req.number_of_courts,
                available=len(matches),
            )

        logger.info("Drew %s match(es)", len(matches))
        return matches

    def _draw_mixed_doubles(self, available: PlayerPool, req: DrawRequirements) -> Draw:
        """Each team gets one male and one female."""
        males = [p for p in available if p.is_male]
        females = [p for p in available if p.is_female]
        selected_males = self._fill_slots(males, req.needed_per_gender)
        selected_females = self._fill_slots(females, req.needed_per_gender)

        matches = []
        for i in range(req.number_of_courts):
            pair_males = selected_males[2 * i : 2 * i + 2]
            pair_females = selected_females[2 * i : 2 * i + 2]
            if len(pair_males) < 2 or len(pair_females) < 2:
                continue
            m1, m2 = pair_males
            f1, f2 = pair_females

            if self.rng.random() < MIXED_PAIRING_PROBABILITY:
                team_a, team_b = (m1, f1), (m2, f2)
            else:
                team_a, team_b = (m1, f2), (m2, f1)
            matches.append(Match(court=len(matches) + 1, team_a=team_a, team_b=team_b))

        return matches

    def _draw_open(self, available: PlayerPool, req: DrawRequirements) -> Draw:
        """Singles and same-pool doubles: slice one shuffled list into courts."""
        pool = filter_pool(available, req.game_mode)
        excluded = [p for p in available if p.is_priority and p not in pool]
        if excluded:
            logger.info(
                "Must-play players outside %s are left out: %s",
                req.game_mode.label,
                ", ".join(p.name for p in excluded),
            )

        on_court = self._fill_slots(pool, req.total_needed)
        size = req.players_per_match
        half = req.game_mode.team_size

        matches = []
        for i in range(req.number_of_courts):
            chunk = on_court[i * size : (i + 1) * size]
            if len(chunk) < size:
                continue
            matches.append(
                Match(
                    court=len(matches) + 1,
                    team_a=tuple(chunk[:half]),
                    team_b=tuple(chunk[half:]),
                )
            )

        return matches

    def _fill_slots(self, pool: PlayerPool, slots: int) -> List[Player]:
        """Must-play players plus fairness picks for the rest, shuffled together."""
        priority, regular = split_priority(pool)
        picked = select_players(
            regular, slots - len(priority), prioritize_fairness=True, rng=self.rng
        )
        return shuffled(priority + picked, self.rng)


def draw_matches(
    available: PlayerPool,
    game_mode: GameMode,
    number_of_courts: int,
    rng: Optional[random.Random] = None,
) -> Draw:
    """Convenience wrapper around ``MatchGenerator(rng).generate``."""
    return MatchGenerator(rng).generate(available, game_mode, number_of_courts)
