"""Player selection and court draw algorithms."""

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

from courtdraw.pairing.court_draw import (
    DrawRequirements,
    MatchGenerator,
    draw_matches,
    filter_pool,
    resolve_requirements,
    split_priority,
    validate_draw,
)
from courtdraw.pairing.fairness import group_by_play_count, select_players, shuffled

__all__ = [
    "DrawRequirements",
    "MatchGenerator",
    "draw_matches",
    "filter_pool",
    "group_by_play_count",
    "resolve_requirements",
    "select_players",
    "shuffled",
    "split_priority",
    "validate_draw",
]
