"""
Module: tests/unit/test_quoted.py

What:
    Validate quoted pairs, quoted content runs and complete quoted strings.

Why:
    Quoted strings carry the local-parts and display names that cannot be
    written as atoms. Their semantic value (no quotes, no escaping
    backslashes, folded whitespace) is what callers compare and store.

How:
    Feed literal buffers through the parsers, asserting on consumed length,
    written bytes, and the error kind/position on malformed input.
"""

import pytest

from imfparse.core import (
    ByteSink,
    Cursor,
    EofError,
    SinkError,
    Token,
    TokenError,
    parse_bare_quoted_string,
    parse_qcontent,
    parse_quoted_pair,
    parse_quoted_string,
    skip_qcontent,
    skip_quoted_pair,
    skip_quoted_string,
)


def _parse(function, data):
    sink = ByteSink()
    consumed = function(Cursor(data), sink)
    return consumed, sink.getvalue()


def test_quoted_pair():
    assert _parse(parse_quoted_pair, b"\\a") == (2, b"a")
    assert _parse(parse_quoted_pair, b"\\\\rest") == (2, b"\\")
    assert skip_quoted_pair(Cursor(b"\\\x00")) == 2

    with pytest.raises(EofError):
        skip_quoted_pair(Cursor(b"\\"))
    with pytest.raises(EofError):
        skip_quoted_pair(Cursor(b""))
    with pytest.raises(TokenError) as excinfo:
        skip_quoted_pair(Cursor(b"a"))
    assert excinfo.value.token is Token.QUOTED_STRING
    with pytest.raises(TokenError) as excinfo:
        skip_quoted_pair(Cursor(b"\\\xe9"))
    assert (excinfo.value.token, excinfo.value.byte, excinfo.value.position) == (
        Token.QUOTED_STRING,
        0xE9,
        1,
    )


def test_qcontent_runs():
    """
    What:
        A run stops at whitespace or the closing quote and drops every
        escaping backslash.
    """

    assert _parse(parse_qcontent, b'simple string"') == (6, b"simple")
    assert _parse(parse_qcontent, b'\\"q\\\\x\\"" tail') == (8, b'"q\\x"')
    assert skip_qcontent(Cursor(b"abc\x01def ")) == 7


def test_qcontent_errors():
    with pytest.raises(EofError):
        skip_qcontent(Cursor(b""))
    with pytest.raises(EofError) as excinfo:
        skip_qcontent(Cursor(b"abc\\"))
    assert excinfo.value.position == 4

    with pytest.raises(TokenError) as excinfo:
        skip_qcontent(Cursor(b"ab\\\xff"))
    assert (excinfo.value.token, excinfo.value.byte, excinfo.value.position) == (
        Token.QUOTED_STRING,
        0xFF,
        3,
    )

    with pytest.raises(TokenError) as excinfo:
        skip_qcontent(Cursor(b' "'))
    assert excinfo.value.token is Token.QUOTED_TEXT


def test_quoted_string_cases():
    """
    What:
        Whole quoted strings produce their semantic content.

    Why:
        These are the shapes met in real headers: plain, wrapped in comments
        and folding, with escaped quotes, folded inside the quotes, and with
        an escaped control character.

    How:
        Each case checks the written content and that the entire input was
        consumed.
    """

    cases = [
        (b'"simple string"', b"simple string"),
        (b' \t\r\n \r\n "simple string" (comment)\t ', b"simple string"),
        (b'"\\"simple\\" string"', b'"simple" string'),
        (b'"\\"simple\\"\r\n string"', b'"simple" string'),
        (b'"simple\\\nstring"', b"simple\nstring"),
        (b'""', b""),
        (b'"  padded  "', b" padded "),
    ]
    for data, expected in cases:
        assert _parse(parse_quoted_string, data) == (len(data), expected), data


def test_quoted_string_leaves_following_bytes():
    consumed, content = _parse(parse_quoted_string, b'"john" <j@x>')
    assert (consumed, content) == (7, b"john")
    assert skip_quoted_string(Cursor(b'"a"@b')) == 3


def test_bare_quoted_string_does_not_take_cfws():
    assert _parse(parse_bare_quoted_string, b'"x" (c)') == (3, b"x")
    with pytest.raises(TokenError):
        parse_bare_quoted_string(Cursor(b' "x"'))


def test_quoted_string_errors():
    with pytest.raises(EofError):
        skip_quoted_string(Cursor(b'"never closed'))
    with pytest.raises(EofError):
        skip_quoted_string(Cursor(b"  (only cfws) "))

    with pytest.raises(TokenError) as excinfo:
        skip_quoted_string(Cursor(b"plain"))
    assert (excinfo.value.token, excinfo.value.position) == (Token.QUOTED_STRING, 0)

    with pytest.raises(TokenError) as excinfo:
        skip_quoted_string(Cursor(b'"caf\xc3\xa9"'))
    assert (excinfo.value.token, excinfo.value.byte, excinfo.value.position) == (
        Token.QUOTED_STRING,
        0xC3,
        4,
    )


def test_failed_quoted_string_writes_nothing(recording_sink):
    with pytest.raises(EofError):
        parse_quoted_string(Cursor(b'"partial content'), recording_sink)
    assert recording_sink.chunks == []


def test_quoted_string_sink_failure(failing_sink):
    with pytest.raises(SinkError):
        parse_quoted_string(Cursor(b'"x"'), failing_sink)
