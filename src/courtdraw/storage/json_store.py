"""JSON file storage for the roster and selection."""

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

import json
import os
from pathlib import Path
from typing import Optional, Union

from courtdraw.constants import DATA_FILE_ENV, DEFAULT_DATA_DIR, DEFAULT_DATA_FILE_NAME
from courtdraw.exceptions import FileLoadException, FileSaveException, PlayerException
from courtdraw.models.session import SessionState
from courtdraw.utils import setup_logger

logger = setup_logger(__name__)


def default_data_file() -> Path:
    """Storage path from ``COURTDRAW_DATA_FILE``, else ``~/.courtdraw/roster.json``."""
    env_path = os.environ.get(DATA_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_DATA_DIR).expanduser() / DEFAULT_DATA_FILE_NAME


class JsonSessionStore:
    """Keeps the roster and selection of a session in one JSON file.

    Only the players and the selected ids are stored. The game mode, the
    number of courts and any pending draw belong to the running session.
    Every save overwrites the whole file.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path).expanduser() if path else default_data_file()

    def load(self) -> SessionState:
        """Read the stored session.

        Returns:
            The stored roster and selection, or an empty session when the
            file is missing or cannot be read
        """
        try:
            return self.load_strict()
        except FileNotFoundError:
            logger.debug("No saved roster at %s", self.path)
        except FileLoadException:
            logger.exception("Failed to load roster from %s", self.path)
        return SessionState()

    def load_strict(self) -> SessionState:
        """Read the stored session, raising on any problem.

        Raises:
            FileNotFoundError: If there is no file yet
            FileLoadException: If the file is unreadable or malformed
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise
        except (OSError, ValueError) as e:
            raise FileLoadException(f"Cannot read {self.path}: {e}") from e

        try:
            state = SessionState.from_dict(data)
        except PlayerException as e:
            raise FileLoadException(f"Malformed roster in {self.path}: {e}") from e

        logger.info("Loaded %s player(s) from %s", len(state.players), self.path)
        return state

    def save(self, state: SessionState) -> None:
        """Overwrite the stored session with ``state``.

        Raises:
            FileSaveException: If the file cannot be written
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, indent=4, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.exception("Error saving roster:")
            raise FileSaveException(f"Cannot write {self.path}: {e}") from e
        logger.debug("Saved %s player(s) to %s", len(state.players), self.path)

    def clear(self) -> None:
        """Delete the stored session, if any."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise FileSaveException(f"Cannot remove {self.path}: {e}") from e
        logger.info("Removed %s", self.path)
