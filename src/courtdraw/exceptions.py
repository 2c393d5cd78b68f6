"""Exceptions for use in Court Draw"""

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

from typing import Optional


# ========== Base Application Exception ==========


class CourtDrawException(Exception):
    """Base exception for all Court Draw errors.

    All custom exceptions in the application should inherit from this class.
    The message of an instance is meant to be shown to the user as is.
    """

    pass


# ========== Draw Exceptions ==========


class DrawException(CourtDrawException):
    """Base exception for a match draw that cannot be produced.

    Attributes:
        needed: Number of players the draw required, when known
        available: Number of players that could be used, when known
        gender: Gender the failure is about, for gender specific checks
    """

    def __init__(
        self,
        message: str,
        needed: Optional[int] = None,
        available: Optional[int] = None,
        gender: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.needed = needed
        self.available = available
        self.gender = gender


class InsufficientTotalPlayersException(DrawException):
    """Raised when fewer players are selected than the mode and courts need."""

    pass


class PriorityOverflowException(DrawException):
    """Raised when more must-play players are flagged than there are slots."""

    pass


class GenderShortageException(DrawException):
    """Raised when regular players of a required gender cannot fill the slots left."""

    pass


class InternalShortfallException(DrawException):
    """Raised when a draw produced fewer courts than requested after validation passed."""

    pass


# ========== Player Exceptions ==========


class PlayerException(CourtDrawException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtDrawException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when a session setting (mode, number of courts) is invalid."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(CourtDrawException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass
