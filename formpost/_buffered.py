"""
File: ./formpost/_buffered.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
from io import BytesIO
from codecs import CodecInfo
from typing import Tuple, BinaryIO, Optional

# Project
from .logger import get_logger
from ._entity import FormBodyPart, MultipartEntity

logger = get_logger(__name__)


class BufferedEntity:
    """Multipart entity whose content is buffered in memory when retrieved

    MultipartEntity.get_content refuses to load large or unknown length bodies, which breaks
    consumers that read request bodies through it. Everything is delegated to the wrapped entity,
    except get_content, which serializes the whole entity in memory.

    """

    def __init__(self, entity: MultipartEntity) -> None:
        self._entity = entity
        self._content: Optional[bytes] = None

    @property
    def entity(self) -> MultipartEntity:
        return self._entity

    @property
    def parts(self) -> Tuple[FormBodyPart, ...]:
        return self._entity.parts

    @property
    def boundary(self) -> str:
        return self._entity.boundary

    @property
    def charset(self) -> Optional[CodecInfo]:
        return self._entity.charset

    @property
    def is_repeatable(self) -> bool:
        return self._entity.is_repeatable

    @property
    def is_chunked(self) -> bool:
        return self._entity.is_chunked

    @property
    def is_streaming(self) -> bool:
        return self._entity.is_streaming

    @property
    def content_length(self) -> int:
        return self._entity.content_length

    @property
    def content_type(self) -> str:
        return self._entity.content_type

    @property
    def content_encoding(self) -> Optional[str]:
        return self._entity.content_encoding

    def get_content(self) -> BinaryIO:
        """Full serialized body, as a new stream on each call

        The entity is drained only once, streamed parts can't be read twice.

        Raises:
            OSError: Failure to read part content

        """
        if self._content is None:
            buffer = BytesIO()
            self._entity.write_to(buffer)
            buffer.flush()
            self._content = buffer.getvalue()
            logger.debug("Buffered %d bytes of %r", len(self._content), self._entity)

        return BytesIO(self._content)

    def write_to(self, sink: BinaryIO) -> None:
        self._entity.write_to(sink)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} of {self._entity!r}>"


__all__ = ("BufferedEntity",)
