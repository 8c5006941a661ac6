"""
File: ./formpost/_body.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
import os
import re
from abc import ABC, abstractmethod
from codecs import CodecInfo
from typing import Any, Union, BinaryIO, Optional, NamedTuple
from pathlib import PurePath

# Project
from ._header import format_header
from ._charset import CHARSET_TYPE, DEFAULT_CHARSET, charset_name, resolve_charset

STREAM_CHUNK_SIZE = 4096

# RFC 7230 token, on both sides of the slash
MIME_TYPE_REGEX = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+/[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class ContentType(NamedTuple):
    mime_type: str
    charset: Optional[CodecInfo] = None

    @classmethod
    def create(cls, mime_type: str, charset: CHARSET_TYPE = None) -> "ContentType":
        """Validate a MIME type and resolve its charset

        Raises:
            ValueError: mime_type is not in the type/subtype form
            UnknownEncodingError: charset name is unknown

        """
        mime_type = mime_type.strip().lower()
        if not MIME_TYPE_REGEX.match(mime_type):
            raise ValueError(f"Invalid MIME type: {mime_type!r}")

        return cls(mime_type, resolve_charset(charset))

    def __str__(self) -> str:
        if self.charset is None:
            return self.mime_type
        return format_header(self.mime_type, quote=False, charset=charset_name(self.charset))


TEXT_PLAIN = "text/plain"
APPLICATION_OCTET_STREAM = ContentType(mime_type="application/octet-stream")
DEFAULT_TEXT = ContentType(TEXT_PLAIN, DEFAULT_CHARSET)


class ContentBody(ABC):
    """Content of one multipart part"""

    def __init__(self, content_type: ContentType) -> None:
        self._content_type = content_type

    @property
    def content_type(self) -> ContentType:
        return self._content_type

    @property
    def mime_type(self) -> str:
        return self._content_type.mime_type

    @property
    def charset(self) -> Optional[CodecInfo]:
        return self._content_type.charset

    @property
    def filename(self) -> Optional[str]:
        return None

    @property
    @abstractmethod
    def content_length(self) -> int:
        """Size of the content in bytes, -1 when it can't be known in advance"""

    @abstractmethod
    def write_to(self, sink: BinaryIO) -> None:
        """Write content bytes to sink"""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._content_type} filename={self.filename!r}>"


class StringBody(ContentBody):
    def __init__(self, text: str, content_type: ContentType = DEFAULT_TEXT) -> None:
        super().__init__(content_type)
        self._data = text.encode((content_type.charset or DEFAULT_CHARSET).name)

    @property
    def content_length(self) -> int:
        return len(self._data)

    def write_to(self, sink: BinaryIO) -> None:
        sink.write(self._data)


class ByteArrayBody(ContentBody):
    def __init__(
        self,
        data: Union[bytes, bytearray, memoryview],
        content_type: ContentType = APPLICATION_OCTET_STREAM,
        filename: Optional[str] = None,
    ) -> None:
        super().__init__(content_type)
        self._data = bytes(data)
        self._filename = filename

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def content_length(self) -> int:
        return len(self._data)

    def write_to(self, sink: BinaryIO) -> None:
        sink.write(self._data)


class FileBody(ContentBody):
    """File content, only opened while being written"""

    def __init__(
        self,
        path: Union[str, "os.PathLike[str]"],
        content_type: ContentType = APPLICATION_OCTET_STREAM,
        filename: Optional[str] = None,
    ) -> None:
        super().__init__(content_type)
        self._path = os.fspath(path)
        self._filename = PurePath(self._path).name if filename is None else filename

    @property
    def path(self) -> str:
        return self._path

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def content_length(self) -> int:
        """File size, -1 while the file can't be stat'ed, errors are raised by write_to"""
        try:
            return os.path.getsize(self._path)
        except OSError:
            return -1

    def write_to(self, sink: BinaryIO) -> None:
        with open(self._path, "rb") as file:
            while chunk := file.read(STREAM_CHUNK_SIZE):
                sink.write(chunk)


class InputStreamBody(ContentBody):
    """Content read from a binary stream, which is closed after being written

    Streams can only be consumed once, so its length is always unknown.

    """

    def __init__(
        self,
        stream: Any,
        content_type: ContentType = APPLICATION_OCTET_STREAM,
        filename: Optional[str] = None,
    ) -> None:
        super().__init__(content_type)
        self._stream = stream
        self._filename = filename

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def content_length(self) -> int:
        return -1

    def write_to(self, sink: BinaryIO) -> None:
        try:
            while chunk := self._stream.read(STREAM_CHUNK_SIZE):
                sink.write(chunk)
        finally:
            self._stream.close()


class FixedLengthBody(ContentBody):
    """Report a known length for a body that can't compute it, e.g. a stream

    Everything but content_length is delegated to the wrapped body.

    """

    def __init__(self, body: ContentBody, length: int) -> None:
        if length < 0:
            raise ValueError(f"length must not be negative, got: {length}")

        super().__init__(body.content_type)
        self._body = body
        self._length = length

    @property
    def body(self) -> ContentBody:
        return self._body

    @property
    def filename(self) -> Optional[str]:
        return self._body.filename

    @property
    def content_length(self) -> int:
        return self._length

    def write_to(self, sink: BinaryIO) -> None:
        self._body.write_to(sink)


__all__ = (
    "TEXT_PLAIN",
    "DEFAULT_TEXT",
    "APPLICATION_OCTET_STREAM",
    "ContentType",
    "ContentBody",
    "StringBody",
    "ByteArrayBody",
    "FileBody",
    "InputStreamBody",
    "FixedLengthBody",
)
