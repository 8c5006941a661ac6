from __future__ import annotations

import io
from pathlib import Path

import pytest

from formpost import (
    MAX_CONTENT_LENGTH,
    Part,
    MultipartEntity,
    ContentTooLongError,
    create_multipart_entity,
)


def test_capabilities_are_delegated() -> None:
    entity = create_multipart_entity(
        [Part("a", "b"), Part("clip", io.BytesIO(b"data"))],
        {"boundary": "delegated", "multipart-charset": "utf-8"},
    )
    wrapped = entity.entity

    assert isinstance(wrapped, MultipartEntity)
    assert entity.parts == wrapped.parts
    assert entity.boundary == "delegated"
    assert entity.charset == wrapped.charset
    assert entity.content_type == wrapped.content_type
    assert entity.content_encoding is None
    assert entity.content_length == -1
    assert entity.is_chunked and entity.is_streaming
    assert not entity.is_repeatable


def test_content_is_read_in_full_twice() -> None:
    payload = b"0" * (2 * MAX_CONTENT_LENGTH)
    entity = create_multipart_entity([Part("big", payload)])

    with pytest.raises(ContentTooLongError):
        entity.entity.get_content()

    first = entity.get_content()
    second = entity.get_content()

    assert first is not second
    assert first.read() == second.read()
    assert payload in entity.get_content().read()


def test_content_with_unknown_length() -> None:
    stream = io.BytesIO(b"streamed")
    entity = create_multipart_entity([Part("clip", stream)], {"boundary": "s"})

    first = entity.get_content().read()

    assert stream.closed
    assert b"streamed" in first
    assert entity.get_content().read() == first
    assert len(first) == len(
        b"--s\r\n"
        b'Content-Disposition: form-data; name="clip"; filename="clip"\r\n'
        b"Content-Type: application/octet-stream\r\n"
        b"\r\n"
        b"streamed\r\n"
        b"--s--\r\n"
    )


def test_write_to_is_passed_through() -> None:
    entity = create_multipart_entity([Part("a", "b")], {"boundary": "w"})
    direct = io.BytesIO()
    entity.entity.write_to(direct)
    wrapped = io.BytesIO()
    entity.write_to(wrapped)

    assert wrapped.getvalue() == direct.getvalue()
    assert entity.get_content().read() == direct.getvalue()


def test_drain_errors_propagate(tmp_path: Path) -> None:
    entity = create_multipart_entity([Part("missing", tmp_path / "missing.bin")])

    with pytest.raises(FileNotFoundError):
        entity.get_content()



def test_missing_file_only_fails_when_drained(tmp_path: Path) -> None:
    entity = create_multipart_entity([Part("missing", tmp_path / "missing.bin")])

    assert entity.content_length == -1
    assert entity.is_chunked and entity.is_streaming
    assert not entity.is_repeatable
    with pytest.raises(FileNotFoundError):
        entity.write_to(io.BytesIO())
