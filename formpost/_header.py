"""
File: ./formpost/_header.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
import re
from email import utils
from typing import List, Optional

SEMISPACE = "; "

# Regular expression that matches `special' characters in parameters, the
# existence of which force quoting of the parameter value.
tspecials = re.compile(r'[ \(\)<>@,;:\\"/\[\]\?=]')


def _formatparam(param: str, value: Optional[str], *, quote: bool, rfc2231: bool) -> str:
    """Format a key=value header parameter.

    Non-ASCII values are encoded according to RFC 2231 (utf-8 charset, null language) when
    rfc2231 is set, otherwise they are kept as is and left for the caller to encode.

    """
    if value is None:
        return param

    if rfc2231:
        try:
            value.encode("ascii")
        except UnicodeEncodeError:
            return f"{param}*={utils.encode_rfc2231(value, 'utf-8', '')}"

    if quote or not value or tspecials.search(value):
        return f'{param}="{utils.quote(value)}"'

    return f"{param}={value}"


def format_header(
    value: str, *, quote: bool = True, rfc2231: bool = True, **params: Optional[str]
) -> str:
    """Build a header value with parameters

    Keyword arguments are appended as parameters, in the given order, with underscores converted
    to dashes. A parameter whose value is None is rendered as a bare key.

    Examples:

    format_header('form-data', name='file', filename='bud.gif')
    -> 'form-data; name="file"; filename="bud.gif"'
    format_header('text/plain', quote=False, charset='UTF-8')
    -> 'text/plain; charset=UTF-8'

    Args:
        value: Main header value
        quote: Always quote parameter values, instead of only when required
        rfc2231: Encode non-ASCII parameter values according to RFC 2231
        params: Header parameters

    Returns:
        Formatted header value

    """
    parts: List[str] = [value]
    for k, v in params.items():
        parts.append(_formatparam(k.replace("_", "-"), v, quote=quote, rfc2231=rfc2231))
    return SEMISPACE.join(parts)


__all__ = ("format_header",)
