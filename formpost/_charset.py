"""
File: ./formpost/_charset.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
import re
import codecs
from typing import Any, Union, Optional
from codecs import CodecInfo
from email.charset import Charset

# Project
from ._errors import UnknownEncodingError

DEFAULT_CHARSET = codecs.lookup("utf-8")

CHARSET_TYPE = Union[None, str, CodecInfo]

# Python codec names that differ from their IANA registered name
_IANA_NAMES = (
    (re.compile(r"^iso8859-(\d+)$"), r"iso-8859-\1"),
    (re.compile(r"^utf-(16|32)-(be|le)$"), r"utf-\1\2"),
    (re.compile(r"^cp(125\d)$"), r"windows-\1"),
)


def resolve_charset(encoding: Any) -> Optional[CodecInfo]:
    """Normalize an encoding specifier into a codec

    Args:
        encoding: None, a codec returned by codecs.lookup or a charset name

    Raises:
        UnknownEncodingError: encoding is not a known charset

    Returns:
        Resolved codec, or None when the caller should use DEFAULT_CHARSET

    """
    if encoding is None or isinstance(encoding, CodecInfo):
        return encoding

    if isinstance(encoding, str):
        try:
            return codecs.lookup(encoding)
        except LookupError as exc:
            raise UnknownEncodingError(encoding) from exc

    raise UnknownEncodingError(encoding)


def charset_name(charset: CodecInfo) -> str:
    """IANA name used for a charset in header parameters, e.g. UTF-8 or ISO-8859-1"""
    name = charset.name
    for pattern, replacement in _IANA_NAMES:
        name = pattern.sub(replacement, name)

    # email aliases cover the remaining differences, e.g. ascii -> us-ascii
    return Charset(name).input_charset.upper()


__all__ = ("CHARSET_TYPE", "DEFAULT_CHARSET", "resolve_charset", "charset_name")
