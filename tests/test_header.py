from __future__ import annotations

from formpost._header import format_header


def test_quoted_params_in_order() -> None:
    assert (
        format_header("form-data", name="file", filename="bud.gif")
        == 'form-data; name="file"; filename="bud.gif"'
    )


def test_unquoted_params() -> None:
    assert format_header("text/plain", quote=False, charset="UTF-8") == "text/plain; charset=UTF-8"


def test_special_chars_force_quotes() -> None:
    assert format_header("multipart/form-data", quote=False, boundary="a b") == (
        'multipart/form-data; boundary="a b"'
    )


def test_empty_and_none_values() -> None:
    assert format_header("form-data", name="") == 'form-data; name=""'
    assert format_header("form-data", inline=None) == "form-data; inline"


def test_quotes_are_escaped() -> None:
    assert format_header("form-data", name='a"b') == 'form-data; name="a\\"b"'


def test_non_ascii_values() -> None:
    assert format_header("form-data", filename="ação.txt") == (
        "form-data; filename*=utf-8''a%C3%A7%C3%A3o.txt"
    )
    assert format_header("form-data", rfc2231=False, filename="ação.txt") == (
        'form-data; filename="ação.txt"'
    )


def test_underscores_become_dashes() -> None:
    assert format_header("x", quote=False, some_param="1") == "x; some-param=1"
