"""
File: ./formpost/logger/__init__.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
from os import environ
from typing import Optional
from logging import Logger, StreamHandler
from pathlib import Path
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

# Project
from ._json_formatter import JSONFormatter
from ._console_formatter import ConsoleFormatter

_PACKAGE = __name__.rpartition(".")[0]
_MAX_LOG_FILE_SIZE = 10 * 1024 * 1024
_MAX_LOG_FILE_COUNT = 10

_package_logger = Logger.root.getChild(_PACKAGE)
_package_logger.setLevel(environ.get("FORMPOST_LOG_LEVEL", "WARNING").upper())
_stderr_stream_handler = StreamHandler()
_stderr_stream_handler.setFormatter(ConsoleFormatter())
_package_logger.addHandler(_stderr_stream_handler)


def enable_file_logging(log_path: Path) -> RotatingFileHandler:
    """Also write every formpost record to a rotating JSON lines file

    Arguments:
        log_path: Directory where the log file is created.

    Raises:
        NotADirectoryError: log_path exists and isn't a directory

    Returns:
        Handler attached to the formpost logger, remove it to stop file logging

    """
    if log_path.exists() and not log_path.is_dir():
        raise NotADirectoryError("log_path must point to a directory")
    log_path.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=log_path / f"{datetime.now(timezone.utc):%Y-%m-%d_%H-%M-%S_%f}.jsonl",
        encoding="utf8",
        maxBytes=_MAX_LOG_FILE_SIZE,
        backupCount=_MAX_LOG_FILE_COUNT,
    )
    handler.setFormatter(JSONFormatter())
    _package_logger.addHandler(handler)

    return handler


def get_logger(name: str) -> Logger:
    """Retrieve a formpost logger, records are handled by the package logger"""
    if name != _PACKAGE and not name.startswith(f"{_PACKAGE}."):
        name = f"{_PACKAGE}.{name}"
    return Logger.root.getChild(name)


_log_path: Optional[str] = environ.get("FORMPOST_LOG_PATH")
if _log_path:
    enable_file_logging(Path(_log_path))


__all__ = ("get_logger", "enable_file_logging")
