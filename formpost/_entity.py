"""
File: ./formpost/_entity.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
import re
import secrets
from io import BytesIO
from enum import Enum
from codecs import CodecInfo
from typing import Dict, List, Tuple, Union, BinaryIO, Iterable, Optional, NamedTuple

# Project
from ._body import ContentBody
from ._errors import ContentTooLongError
from ._header import format_header
from ._charset import CHARSET_TYPE, DEFAULT_CHARSET, charset_name, resolve_charset

CRLF = b"\r\n"
TWO_DASHES = b"--"
BOUNDARY_CHARS = "-_1234567890abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
# https://www.rfc-editor.org/rfc/rfc2046#section-5.1.1
BOUNDARY_REGEX = re.compile(r"[0-9A-Za-z'()+_,\-./:=? ]{0,69}[0-9A-Za-z'()+_,\-./:=?]")
# Largest content that MultipartEntity.get_content agrees to buffer
MAX_CONTENT_LENGTH = 25 * 1024


class MultipartMode(Enum):
    STRICT = "strict"
    BROWSER_COMPATIBLE = "browser-compatible"
    RFC6532 = "rfc6532"

    @classmethod
    def parse(cls, mode: Union[str, "MultipartMode"]) -> "MultipartMode":
        if isinstance(mode, cls):
            return mode

        try:
            return cls(str(mode).lower().replace("_", "-"))
        except ValueError:
            raise ValueError(f"Unknown multipart mode: {mode!r}") from None


class FormBodyPart(NamedTuple):
    name: str
    body: ContentBody


def generate_boundary() -> str:
    """Random boundary with 30 to 40 characters"""
    return "".join(secrets.choice(BOUNDARY_CHARS) for _ in range(30 + secrets.randbelow(11)))


def validate_boundary(boundary: str) -> str:
    if not BOUNDARY_REGEX.fullmatch(boundary):
        raise ValueError(f"Invalid multipart boundary: {boundary!r}")
    return boundary


class MultipartEntity:
    """Immutable multipart body, with its parts in insertion order

    Args:
        parts: Named part bodies
        mime_subtype: Multipart subtype
        mode: Part headers formatting mode
        charset: Envelope charset, added to the Content-Type and used to encode part headers in
                 BROWSER_COMPATIBLE mode
        boundary: Boundary delimiter, randomly generated when None

    """

    def __init__(
        self,
        parts: Iterable[FormBodyPart],
        *,
        mime_subtype: str = "form-data",
        mode: Union[str, MultipartMode] = MultipartMode.STRICT,
        charset: CHARSET_TYPE = None,
        boundary: Optional[str] = None,
    ) -> None:
        self._parts: Tuple[FormBodyPart, ...] = tuple(parts)
        self._mode = MultipartMode.parse(mode)
        self._charset = resolve_charset(charset)
        self._boundary = generate_boundary() if boundary is None else validate_boundary(boundary)
        self._mime_subtype = mime_subtype

        params: Dict[str, Optional[str]] = {"boundary": self._boundary}
        if self._charset is not None:
            params["charset"] = charset_name(self._charset)
        self._content_type = format_header(f"multipart/{mime_subtype}", quote=False, **params)

    @property
    def parts(self) -> Tuple[FormBodyPart, ...]:
        return self._parts

    @property
    def mode(self) -> MultipartMode:
        return self._mode

    @property
    def charset(self) -> Optional[CodecInfo]:
        return self._charset

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def mime_subtype(self) -> str:
        return self._mime_subtype

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def content_encoding(self) -> Optional[str]:
        return None

    @property
    def content_length(self) -> int:
        lengths = [part.body.content_length for part in self._parts]
        if any(length < 0 for length in lengths):
            return -1

        envelope = BytesIO()
        self._write(envelope, write_bodies=False)
        return envelope.tell() + sum(lengths)

    @property
    def is_repeatable(self) -> bool:
        return self.content_length != -1

    @property
    def is_chunked(self) -> bool:
        return not self.is_repeatable

    @property
    def is_streaming(self) -> bool:
        return not self.is_repeatable

    def _part_headers(self, part: FormBodyPart) -> List[Tuple[str, str]]:
        rfc2231 = self._mode is MultipartMode.STRICT

        params: Dict[str, Optional[str]] = {"name": part.name}
        if part.body.filename is not None:
            params["filename"] = part.body.filename

        headers = [("Content-Disposition", format_header("form-data", rfc2231=rfc2231, **params))]
        if self._mode is not MultipartMode.BROWSER_COMPATIBLE or part.body.filename is not None:
            headers.append(("Content-Type", str(part.body.content_type)))

        return headers

    def _header_encoding(self) -> str:
        if self._mode is MultipartMode.STRICT:
            return "ascii"
        elif self._mode is MultipartMode.BROWSER_COMPATIBLE:
            return (self._charset or DEFAULT_CHARSET).name
        return DEFAULT_CHARSET.name

    def _write(self, sink: BinaryIO, *, write_bodies: bool) -> None:
        encoding = self._header_encoding()
        boundary = self._boundary.encode("ascii")

        for part in self._parts:
            sink.write(TWO_DASHES + boundary + CRLF)
            for header, value in self._part_headers(part):
                sink.write(f"{header}: {value}".encode(encoding, "replace") + CRLF)
            sink.write(CRLF)
            if write_bodies:
                part.body.write_to(sink)
            sink.write(CRLF)

        sink.write(TWO_DASHES + boundary + TWO_DASHES + CRLF)

    def write_to(self, sink: BinaryIO) -> None:
        """Serialize the multipart body into sink"""
        self._write(sink, write_bodies=True)

    def get_content(self) -> BinaryIO:
        """Serialized body, for small entities with known length

        Raises:
            ContentTooLongError: Content length is unknown or larger than MAX_CONTENT_LENGTH

        """
        length = self.content_length
        if length < 0:
            raise ContentTooLongError("Content length is unknown")
        if length > MAX_CONTENT_LENGTH:
            raise ContentTooLongError(f"Content length is too long: {length}")

        content = BytesIO()
        self.write_to(content)
        content.seek(0)
        return content

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._content_type!r} parts={len(self._parts)}>"


__all__ = (
    "MAX_CONTENT_LENGTH",
    "FormBodyPart",
    "MultipartMode",
    "MultipartEntity",
    "generate_boundary",
    "validate_boundary",
)
