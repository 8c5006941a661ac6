"""
File: ./formpost/_assembler.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: formpost

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
from typing import Any, List, Union, Mapping, Iterable, Optional, NamedTuple

# Project
from .logger import get_logger
from ._body import ContentBody
from ._entity import FormBodyPart, MultipartMode, MultipartEntity
from ._errors import MissingFieldsError, PartConstructionError
from ._charset import CHARSET_TYPE, resolve_charset
from ._factory import Part, make_multipart_body
from ._buffered import BufferedEntity

logger = get_logger(__name__)


class AssemblyConfig(NamedTuple):
    mime_subtype: str = "form-data"
    multipart_mode: Union[str, MultipartMode] = MultipartMode.STRICT
    multipart_charset: CHARSET_TYPE = None
    boundary: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AssemblyConfig":
        """Create config from an option map, e.g. {"mime-subtype": "mixed"}

        Keys can be spelled with dashes or underscores, unknown keys are ignored.

        """
        options = {key.replace("-", "_"): value for key, value in mapping.items()}
        return cls(**{field: options[field] for field in cls._fields if field in options})


def _part_name(part: Part, body: ContentBody) -> str:
    name = part.part_name or part.name or body.filename
    if name is None:
        raise MissingFieldsError("Multipart part", ("name",))
    return name


def assemble(
    parts: Iterable[Union[Part, Mapping[str, Any]]], config: AssemblyConfig = AssemblyConfig()
) -> MultipartEntity:
    """Build a multipart entity, adding each part according to the type of its content

    Args:
        parts: Parts to be added, in order. Mappings are converted with Part.from_mapping
        config: Multipart envelope configuration

    Raises:
        PartConstructionError: Failure to build one of the parts, assembly is aborted
        UnknownEncodingError: multipart_charset is an unknown charset
        ValueError: Invalid multipart_mode or boundary

    Returns:
        Immutable multipart entity

    """
    mode = MultipartMode.parse(config.multipart_mode)
    charset = resolve_charset(config.multipart_charset)

    form_parts: List[FormBodyPart] = []
    for index, part in enumerate(parts):
        name: Optional[str] = None
        try:
            if not isinstance(part, Part):
                part = Part.from_mapping(part)
            name = part.part_name or part.name
            body = make_multipart_body(part)
            field = FormBodyPart(_part_name(part, body), body)
        except Exception as exc:
            raise PartConstructionError(index, name, exc) from exc

        logger.debug("Adding multipart part #%d (%s): %r", index, field.name, body)
        form_parts.append(field)

    entity = MultipartEntity(
        form_parts,
        mime_subtype=config.mime_subtype,
        mode=mode,
        charset=charset,
        boundary=config.boundary,
    )
    logger.debug("Assembled multipart entity: %r", entity)

    return entity


def create_multipart_entity(
    parts: Iterable[Union[Part, Mapping[str, Any]]],
    config: Union[None, AssemblyConfig, Mapping[str, Any]] = None,
) -> BufferedEntity:
    """Build a multipart entity whose content can always be read in full

    Args:
        parts: Parts to be added, in order
        config: AssemblyConfig or option map accepted by AssemblyConfig.from_mapping

    Returns:
        Multipart entity wrapped by BufferedEntity

    """
    if config is None:
        config = AssemblyConfig()
    elif not isinstance(config, AssemblyConfig):
        config = AssemblyConfig.from_mapping(config)

    return BufferedEntity(assemble(parts, config))


__all__ = ("AssemblyConfig", "assemble", "create_multipart_entity")
