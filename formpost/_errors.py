"""
File: ./formpost/_errors.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
from typing import Any, Tuple, Optional, Sequence


class MultipartError(Exception):
    """Base class for every error raised while building a multipart entity"""


class ContentRequiredError(MultipartError, ValueError):
    def __init__(self, message: str = "Multipart content cannot be None") -> None:
        super().__init__(message)


class UnsupportedContentKindError(MultipartError, TypeError):
    def __init__(self, kind: Any) -> None:
        super().__init__(f"Unsupported type for multipart content: {kind}")
        self.kind = kind


class MissingFieldsError(MultipartError, ValueError):
    def __init__(self, description: str, fields: Sequence[str]) -> None:
        self.fields: Tuple[str, ...] = tuple(fields)
        super().__init__(f"{description} must contain at least: {', '.join(self.fields)}")


class UnknownEncodingError(MultipartError, LookupError):
    def __init__(self, encoding: Any) -> None:
        super().__init__(f"Unknown encoding: {encoding!r}")
        self.encoding = encoding


class PartConstructionError(MultipartError):
    """Failure to build one part of a multipart entity

    The original error is always available as __cause__.

    """

    def __init__(self, index: int, name: Optional[str], cause: BaseException) -> None:
        super().__init__(f"Failed to build multipart part #{index} ({name!r}): {cause}")
        self.index = index
        self.name = name


class ContentTooLongError(MultipartError, OSError):
    pass


__all__ = (
    "MultipartError",
    "ContentRequiredError",
    "UnsupportedContentKindError",
    "MissingFieldsError",
    "UnknownEncodingError",
    "PartConstructionError",
    "ContentTooLongError",
)
