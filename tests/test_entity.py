from __future__ import annotations

import io

import pytest

from formpost import (
    MAX_CONTENT_LENGTH,
    StringBody,
    ContentType,
    FormBodyPart,
    ByteArrayBody,
    MultipartMode,
    FixedLengthBody,
    InputStreamBody,
    MultipartEntity,
    ContentTooLongError,
)
from formpost._entity import BOUNDARY_CHARS, generate_boundary


def _serialize(entity: MultipartEntity) -> bytes:
    sink = io.BytesIO()
    entity.write_to(sink)
    return sink.getvalue()


def test_wire_format() -> None:
    entity = MultipartEntity(
        [
            FormBodyPart("field1", StringBody("value1")),
            FormBodyPart("file1", ByteArrayBody(b"PNG", ContentType.create("image/png"), "a.png")),
        ],
        boundary="simple",
    )

    assert _serialize(entity) == (
        b"--simple\r\n"
        b'Content-Disposition: form-data; name="field1"\r\n'
        b"Content-Type: text/plain; charset=UTF-8\r\n"
        b"\r\n"
        b"value1\r\n"
        b"--simple\r\n"
        b'Content-Disposition: form-data; name="file1"; filename="a.png"\r\n'
        b"Content-Type: image/png\r\n"
        b"\r\n"
        b"PNG\r\n"
        b"--simple--\r\n"
    )
    assert entity.content_type == "multipart/form-data; boundary=simple"


def test_empty_entity() -> None:
    entity = MultipartEntity([], boundary="empty")

    assert _serialize(entity) == b"--empty--\r\n"
    assert entity.content_length == len(b"--empty--\r\n")


def test_content_type_with_subtype_and_charset() -> None:
    entity = MultipartEntity([], mime_subtype="mixed", charset="utf-8", boundary="xyz")

    assert entity.content_type == "multipart/mixed; boundary=xyz; charset=UTF-8"


def test_known_length() -> None:
    entity = MultipartEntity(
        [
            FormBodyPart("a", StringBody("b")),
            FormBodyPart("c", ByteArrayBody(b"d" * 100, filename="c")),
        ]
    )

    assert entity.content_length == len(_serialize(entity))
    assert entity.is_repeatable
    assert not entity.is_chunked
    assert not entity.is_streaming
    assert entity.content_encoding is None


def test_unknown_length_is_chunked() -> None:
    entity = MultipartEntity(
        [FormBodyPart("a", StringBody("b")), FormBodyPart("s", InputStreamBody(io.BytesIO(b"s")))]
    )

    assert entity.content_length == -1
    assert not entity.is_repeatable
    assert entity.is_chunked
    assert entity.is_streaming


def test_fixed_length_stream_reports_given_length() -> None:
    stream_body = FixedLengthBody(InputStreamBody(io.BytesIO(b"12345"), filename="s"), 5)
    entity = MultipartEntity([FormBodyPart("s", stream_body)])

    assert entity.is_repeatable
    assert entity.content_length == len(_serialize(entity))


def test_generated_boundary() -> None:
    boundary = generate_boundary()

    assert 30 <= len(boundary) <= 40
    assert set(boundary) <= set(BOUNDARY_CHARS)
    assert MultipartEntity([]).boundary != MultipartEntity([]).boundary


@pytest.mark.parametrize("boundary", ["", "a" * 71, "ends with space ", "new\nline", "ação"])
def test_invalid_boundary(boundary: str) -> None:
    with pytest.raises(ValueError):
        MultipartEntity([], boundary=boundary)


def test_boundary_with_specials_is_quoted() -> None:
    assert MultipartEntity([], boundary="a:b").content_type == (
        'multipart/form-data; boundary="a:b"'
    )


@pytest.mark.parametrize(
    "value, mode",
    [
        ("strict", MultipartMode.STRICT),
        ("BROWSER_COMPATIBLE", MultipartMode.BROWSER_COMPATIBLE),
        ("browser-compatible", MultipartMode.BROWSER_COMPATIBLE),
        (MultipartMode.RFC6532, MultipartMode.RFC6532),
    ],
)
def test_mode_parsing(value: str | MultipartMode, mode: MultipartMode) -> None:
    assert MultipartMode.parse(value) is mode


def test_unknown_mode() -> None:
    with pytest.raises(ValueError):
        MultipartEntity([], mode="lenient")


def test_strict_mode_encodes_non_ascii_params() -> None:
    entity = MultipartEntity(
        [FormBodyPart("ação", ByteArrayBody(b"x", filename="ação.txt"))], boundary="b"
    )

    assert (
        b"Content-Disposition: form-data; name*=utf-8''a%C3%A7%C3%A3o; "
        b"filename*=utf-8''a%C3%A7%C3%A3o.txt\r\n"
    ) in _serialize(entity)


def test_rfc6532_mode_writes_utf8_headers() -> None:
    entity = MultipartEntity(
        [FormBodyPart("ação", StringBody("x"))], mode=MultipartMode.RFC6532, boundary="b"
    )
    data = _serialize(entity)

    assert 'Content-Disposition: form-data; name="ação"\r\n'.encode("utf-8") in data
    assert b"Content-Type: text/plain; charset=UTF-8\r\n" in data


def test_browser_compatible_mode() -> None:
    entity = MultipartEntity(
        [
            FormBodyPart("ação", StringBody("x")),
            FormBodyPart("file", ByteArrayBody(b"y", filename="ção.bin")),
        ],
        mode="browser-compatible",
        charset="latin-1",
        boundary="b",
    )
    data = _serialize(entity)

    assert data == (
        b"--b\r\n"
        + 'Content-Disposition: form-data; name="ação"\r\n'.encode("latin-1")
        + b"\r\n"
        b"x\r\n"
        b"--b\r\n"
        + 'Content-Disposition: form-data; name="file"; filename="ção.bin"\r\n'.encode("latin-1")
        + b"Content-Type: application/octet-stream\r\n"
        b"\r\n"
        b"y\r\n"
        b"--b--\r\n"
    )
    assert entity.content_length == len(data)


def test_parts_are_immutable() -> None:
    parts = [FormBodyPart("a", StringBody("b"))]
    entity = MultipartEntity(parts)
    parts.append(FormBodyPart("c", StringBody("d")))

    assert len(entity.parts) == 1
    assert isinstance(entity.parts, tuple)


def test_get_content_of_small_entity() -> None:
    entity = MultipartEntity([FormBodyPart("a", StringBody("b"))], boundary="b")

    assert entity.get_content().read() == _serialize(entity)


def test_get_content_refuses_large_entity() -> None:
    entity = MultipartEntity(
        [FormBodyPart("big", ByteArrayBody(b"0" * MAX_CONTENT_LENGTH, filename="big"))]
    )

    with pytest.raises(ContentTooLongError, match="too long"):
        entity.get_content()


def test_get_content_refuses_unknown_length() -> None:
    entity = MultipartEntity([FormBodyPart("s", InputStreamBody(io.BytesIO(b"s")))])

    with pytest.raises(ContentTooLongError, match="unknown"):
        entity.get_content()
