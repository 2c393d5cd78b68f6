"""Fairness-weighted player selection.

Players who have played fewer confirmed matches are drawn first. Players
with the same play count form a tier, and each tier is shuffled so ties
are broken uniformly at random on every call.
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
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, TypeVar

from courtdraw.models.player import Player
from courtdraw.type_hints import PlayerPool
from courtdraw.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of ``items``.

    Fisher-Yates: walking from the last index down to 1, swap each
    element with one at a uniformly random index in ``[0, i]``.
    The input is left untouched.
    """
    rng = rng or random.Random()
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def group_by_play_count(pool: PlayerPool) -> List[List[Player]]:
    """Split ``pool`` into tiers of equal play count, lowest first.

    Players keep their pool order inside a tier.
    """
    tiers: Dict[int, List[Player]] = defaultdict(list)
    for player in pool:
        tiers[player.play_count].append(player)
    return [tiers[count] for count in sorted(tiers)]


def select_players(
    pool: PlayerPool,
    count: int,
    prioritize_fairness: bool = True,
    rng: Optional[random.Random] = None,
) -> List[Player]:
    """Pick ``count`` players out of ``pool``.

    Args:
        pool: Candidates to pick from
        count: How many players to pick
        prioritize_fairness: Prefer players with lower play counts. When
            False, every candidate is equally likely.
        rng: Random source, a fresh ``random.Random`` when omitted

    Returns:
        The picked players, or an empty list when the pool holds fewer
        than ``count`` players
    """
    if len(pool) < count:
        logger.debug("Cannot select %s players from a pool of %s", count, len(pool))
        return []
    if count <= 0:
        return []

    rng = rng or random.Random()

    if not prioritize_fairness:
        return shuffled(pool, rng)[:count]

    selected: List[Player] = []
    for tier in group_by_play_count(pool):
        needed = count - len(selected)
        selected.extend(shuffled(tier, rng)[:needed])
        if len(selected) == count:
            break

    return selected
