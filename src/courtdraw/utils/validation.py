"""Input validation utilities.

Validation of what a user types in: player names, bulk name lists and
the number of courts. Each validator returns a ``ValidationResult``; the
``*_strict`` variants raise instead.
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

import re
from typing import Any, List, Optional

from courtdraw.constants import (
    MAX_NAME_LENGTH,
    MIN_NUMBER_OF_COURTS,
    NAME_SEPARATOR_PATTERN,
)
from courtdraw.exceptions import (
    InvalidConfigurationException,
    InvalidPlayerDataException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_player_name(name: Optional[str]) -> ValidationResult:
    """Validate a single player name.

    Surrounding whitespace is stripped. Empty names and names longer than
    ``MAX_NAME_LENGTH`` characters are rejected.

    Example:
        >>> validate_player_name("  Amy ").sanitized_value
        'Amy'
    """
    if name is not None and not isinstance(name, str):
        return ValidationResult(
            is_valid=False,
            error_message=f"Player name must be text: {name!r}",
        )
    if name is None or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Player name is required",
        )

    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        return ValidationResult(
            is_valid=False,
            error_message=f"Player name must be at most {MAX_NAME_LENGTH} characters: {name}",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_player_name_strict(name: Optional[str]) -> str:
    """Validate a player name and return it stripped.

    Raises:
        InvalidPlayerDataException: If the name is empty or too long
    """
    result = validate_player_name(name)
    if not result.is_valid:
        raise InvalidPlayerDataException(result.error_message)
    return result.sanitized_value


def parse_player_names(text: Optional[str]) -> List[str]:
    """Split bulk name entry into separate names.

    Names may be separated by commas (ASCII or full width), the
    ideographic comma or whitespace. Empty fragments are dropped.

    Example:
        >>> parse_player_names("Amy, Ben、Cat  Dan")
        ['Amy', 'Ben', 'Cat', 'Dan']
    """
    if not text or not text.strip():
        return []
    return [name for name in re.split(NAME_SEPARATOR_PATTERN, text.strip()) if name]


# ========== Court Validation ==========


def validate_number_of_courts(courts: Any) -> ValidationResult:
    """Validate a number of courts, accepting ints or numeric strings."""
    if isinstance(courts, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"Number of courts must be a whole number: {courts}",
        )
    try:
        courts_int = int(courts)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Number of courts must be a whole number: {courts}",
        )

    if isinstance(courts, float) and courts != courts_int:
        return ValidationResult(
            is_valid=False,
            error_message=f"Number of courts must be a whole number: {courts}",
        )

    if courts_int < MIN_NUMBER_OF_COURTS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Number of courts must be at least {MIN_NUMBER_OF_COURTS}: {courts_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=courts_int)


def validate_number_of_courts_strict(courts: Any) -> int:
    """Validate a number of courts and return it as an int.

    Raises:
        InvalidConfigurationException: If the value is not an integer >= 1
    """
    result = validate_number_of_courts(courts)
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)
    return result.sanitized_value
