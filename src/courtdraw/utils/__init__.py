"""Shared helpers: logger setup and id generation."""

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

import logging
import os
import uuid
from typing import Optional, Union

from courtdraw.constants import APP_LOGGER_NAME, LOG_FORMAT, LOG_LEVEL_ENV

_root_configured = False


def _configure_root_logger() -> logging.Logger:
    """Attach the single stream handler to the package logger once."""
    global _root_configured
    root = logging.getLogger(APP_LOGGER_NAME)
    if not _root_configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get(LOG_LEVEL_ENV, "WARNING").upper())
        root.propagate = False
        _root_configured = True
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a logger living under the ``courtdraw`` hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger whose records go through the package handler
    """
    _configure_root_logger()
    if name != APP_LOGGER_NAME and not name.startswith(APP_LOGGER_NAME + "."):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: Union[int, str]) -> None:
    """Change the level of every courtdraw logger at once."""
    root = _configure_root_logger()
    if isinstance(level, str):
        level = level.upper()
    root.setLevel(level)


def generate_id(prefix: Optional[str] = None) -> str:
    """Generate an opaque unique identifier.

    Args:
        prefix: Optional tag, e.g. the class name of the owner

    Returns:
        ``"<prefix>_<hex>"`` or a bare uuid4 hex string
    """
    token = uuid.uuid4().hex
    if prefix:
        return f"{prefix.lower()}_{token}"
    return token


__all__ = ["generate_id", "set_log_level", "setup_logger"]
