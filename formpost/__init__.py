"""
File: ./formpost/__init__.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
from importlib.metadata import metadata

# Project
from ._body import (
    FileBody,
    StringBody,
    ContentBody,
    ContentType,
    ByteArrayBody,
    FixedLengthBody,
    InputStreamBody,
)
from ._entity import MAX_CONTENT_LENGTH, FormBodyPart, MultipartMode, MultipartEntity
from ._errors import (
    MultipartError,
    MissingFieldsError,
    ContentTooLongError,
    ContentRequiredError,
    UnknownEncodingError,
    PartConstructionError,
    UnsupportedContentKindError,
)
from ._charset import DEFAULT_CHARSET, resolve_charset
from ._factory import Part, ContentKind, make_multipart_body
from ._buffered import BufferedEntity
from ._assembler import AssemblyConfig, assemble, create_multipart_entity

try:
    _metadata = metadata(__name__)
    __author__: str = _metadata["Author"]
    __version__: str = _metadata["Version"]
    __summary__: str = _metadata["Summary"]
except Exception:  # pragma: no cover
    # Internal
    import traceback
    from warnings import warn

    warn(
        f"Failed to gather package {__name__} metadata, due to:\n{traceback.format_exc()}",
        ImportWarning,
    )

    __author__ = "unknown"
    __version__ = "0.0a0"
    __summary__ = ""

__all__ = (
    "__author__",
    "__version__",
    "__summary__",
    "Part",
    "ContentKind",
    "AssemblyConfig",
    "MultipartMode",
    "assemble",
    "create_multipart_entity",
    "make_multipart_body",
    "resolve_charset",
    "DEFAULT_CHARSET",
    "MAX_CONTENT_LENGTH",
    "MultipartEntity",
    "BufferedEntity",
    "FormBodyPart",
    "ContentType",
    "ContentBody",
    "StringBody",
    "ByteArrayBody",
    "FileBody",
    "InputStreamBody",
    "FixedLengthBody",
    "MultipartError",
    "ContentRequiredError",
    "UnsupportedContentKindError",
    "MissingFieldsError",
    "UnknownEncodingError",
    "PartConstructionError",
    "ContentTooLongError",
)
