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

# --- Logging ---
APP_LOGGER_NAME = "courtdraw"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "COURTDRAW_LOG_LEVEL"

# --- Storage ---
DATA_FILE_ENV = "COURTDRAW_DATA_FILE"
DEFAULT_DATA_DIR = "~/.courtdraw"
DEFAULT_DATA_FILE_NAME = "roster.json"

# Keys of the persisted record
STORE_KEY_PLAYERS = "players"
STORE_KEY_SELECTED = "selectedPlayerIds"

# --- Session defaults ---
DEFAULT_GAME_MODE = "mixed_doubles"
DEFAULT_NUMBER_OF_COURTS = 1
MIN_NUMBER_OF_COURTS = 1

# Team sizes
SINGLES_TEAM_SIZE = 1
DOUBLES_TEAM_SIZE = 2

# Players of one gender needed per mixed doubles court
MIXED_PLAYERS_PER_GENDER = 2

# Chance that a mixed court pairs (m1, f1) vs (m2, f2)
MIXED_PAIRING_PROBABILITY = 0.5

# --- Player entry ---
MAX_NAME_LENGTH = 50
# Commas (ASCII and full width), ideographic comma and any whitespace
NAME_SEPARATOR_PATTERN = r"[,，、\s]+"

# --- Display ---
MALE_ICON = "♂"
FEMALE_ICON = "♀"
PRIORITY_ICON = "★"
