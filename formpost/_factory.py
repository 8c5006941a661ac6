"""
File: ./formpost/_factory.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
import os
from enum import Enum
from codecs import CodecInfo
from typing import Any, Dict, Union, Mapping, Callable, Optional, NamedTuple

# Project
from ._body import (
    TEXT_PLAIN,
    FileBody,
    StringBody,
    ContentBody,
    ContentType,
    ByteArrayBody,
    FixedLengthBody,
    InputStreamBody,
)
from ._errors import MissingFieldsError, ContentRequiredError, UnsupportedContentKindError
from ._charset import DEFAULT_CHARSET


class ContentKind(Enum):
    TEXT = "text"
    BYTES = "bytes"
    FILE = "file"
    STREAM = "stream"
    PREBUILT = "prebuilt"


class Part(NamedTuple):
    """Description of one multipart part

    Attributes:
        name: Field name, also used as filename for bytes and stream content
        content: Payload, its type must match kind
        kind: Content kind, inferred from the content type when None
        part_name: Field name that takes priority over name
        mime_type: MIME type of the content
        encoding: Charset name or codec
        length: Explicit content length, only used for stream content

    """

    name: Optional[str]
    content: Any
    kind: Union[None, str, ContentKind] = None
    part_name: Optional[str] = None
    mime_type: Optional[str] = None
    encoding: Union[None, str, CodecInfo] = None
    length: Optional[int] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Part":
        """Create a Part from a mapping, keys can be spelled with dashes or underscores"""
        fields = {key.replace("-", "_"): value for key, value in mapping.items()}
        return cls(
            fields.get("name"),
            fields.get("content"),
            **{field: fields[field] for field in cls._fields[2:] if field in fields},
        )


def _is_stream(content: Any) -> bool:
    return callable(getattr(content, "read", None))


_KIND_CHECKS: Dict[ContentKind, Callable[[Any], bool]] = {
    ContentKind.TEXT: lambda content: isinstance(content, str),
    ContentKind.BYTES: lambda content: isinstance(content, (bytes, bytearray, memoryview)),
    ContentKind.FILE: lambda content: isinstance(content, (str, os.PathLike)),
    ContentKind.STREAM: _is_stream,
    ContentKind.PREBUILT: lambda content: isinstance(content, ContentBody),
}


def content_kind(part: Part) -> ContentKind:
    """Resolve the content kind of a part, inferring it from the content when not given

    Raises:
        UnsupportedContentKindError: Unknown kind, or content that doesn't match the kind

    """
    if part.kind is None:
        # Order matters, str is also accepted as FILE content and a ContentBody could be readable
        for kind in (
            ContentKind.PREBUILT,
            ContentKind.TEXT,
            ContentKind.BYTES,
            ContentKind.FILE,
            ContentKind.STREAM,
        ):
            if _KIND_CHECKS[kind](part.content):
                return kind

        raise UnsupportedContentKindError(type(part.content).__name__)

    try:
        kind = ContentKind(part.kind)
    except ValueError:
        raise UnsupportedContentKindError(part.kind) from None

    if not _KIND_CHECKS[kind](part.content):
        raise UnsupportedContentKindError(f"{kind.value} ({type(part.content).__name__})")

    return kind


def _text_body(part: Part) -> ContentBody:
    if part.mime_type and part.encoding:
        content_type = ContentType.create(part.mime_type, part.encoding)
    elif part.encoding:
        content_type = ContentType.create(TEXT_PLAIN, part.encoding)
    elif part.mime_type:
        content_type = ContentType.create(part.mime_type, DEFAULT_CHARSET)
    else:
        content_type = ContentType(TEXT_PLAIN, DEFAULT_CHARSET)

    return StringBody(part.content, content_type)


def _bytes_body(part: Part) -> ContentBody:
    if not part.name:
        raise MissingFieldsError("Multipart byte array body", ("content", "name"))

    if part.mime_type:
        return ByteArrayBody(part.content, ContentType.create(part.mime_type), part.name)

    return ByteArrayBody(part.content, filename=part.name)


def _file_body(part: Part) -> ContentBody:
    name, mime_type, encoding = part.name, part.mime_type, part.encoding

    if name and mime_type and encoding:
        return FileBody(part.content, ContentType.create(mime_type, encoding), name)
    elif mime_type and encoding:
        return FileBody(part.content, ContentType.create(mime_type, encoding))
    elif name and mime_type:
        return FileBody(part.content, ContentType.create(mime_type), name)
    elif mime_type:
        return FileBody(part.content, ContentType.create(mime_type))

    return FileBody(part.content)


def _stream_body(part: Part) -> ContentBody:
    if not part.name:
        raise MissingFieldsError("Multipart input stream body", ("content", "name"))

    if part.mime_type:
        body = InputStreamBody(part.content, ContentType.create(part.mime_type), part.name)
    else:
        body = InputStreamBody(part.content, filename=part.name)

    # Known length avoids chunked transfer-encoding, even though the stream can't report it
    return body if part.length is None else FixedLengthBody(body, part.length)


def _prebuilt_body(part: Part) -> ContentBody:
    body: ContentBody = part.content
    return body


_BODY_BUILDERS: Dict[ContentKind, Callable[[Part], ContentBody]] = {
    ContentKind.TEXT: _text_body,
    ContentKind.BYTES: _bytes_body,
    ContentKind.FILE: _file_body,
    ContentKind.STREAM: _stream_body,
    ContentKind.PREBUILT: _prebuilt_body,
}


def make_multipart_body(part: Part) -> ContentBody:
    """Create the body for a part, according to its content kind

    Supported content kinds:
        - TEXT: str
        - BYTES: bytes, bytearray or memoryview (requires name)
        - FILE: path to a file, as str or os.PathLike
        - STREAM: binary file-like object (requires name)
        - PREBUILT: ContentBody, returned as is

    Args:
        part: Part description

    Raises:
        ContentRequiredError: Part content is None
        UnsupportedContentKindError: Unknown kind, or content that doesn't match the kind
        MissingFieldsError: A field required by the content kind is missing
        UnknownEncodingError: Part encoding is an unknown charset
        ValueError: Invalid MIME type or negative length

    Returns:
        Body for the part content

    """
    if part.content is None:
        raise ContentRequiredError()

    return _BODY_BUILDERS[content_kind(part)](part)


__all__ = ("Part", "ContentKind", "content_kind", "make_multipart_body")
