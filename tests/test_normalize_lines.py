from hypothesis import given
from hypothesis import strategies as st

from pgpkit.normalize_lines import LineBreak, normalized

INPUT = "This is a string \n with \r some \n\r\n random newlines\r\r\n\n".encode()


def run(data: bytes, line_break: LineBreak) -> bytes:
    return bytes(normalized(data, line_break))


def test_normalized_lf():
    assert run(INPUT, LineBreak.LF) == b"This is a string \n with \n some \n\n random newlines\n\n\n"


def test_normalized_cr():
    assert run(INPUT, LineBreak.CR) == b"This is a string \r with \r some \r\r random newlines\r\r\r"


def test_normalized_crlf():
    assert (
        run(INPUT, LineBreak.CRLF)
        == b"This is a string \r\n with \r\n some \r\n\r\n random newlines\r\n\r\n\r\n"
    )


def test_empty_input():
    assert run(b"", LineBreak.CRLF) == b""


def test_trailing_cr_becomes_crlf():
    assert run(b"a\r", LineBreak.CRLF) == b"a\r\n"


@given(st.binary().filter(lambda b: b"\r" not in b and b"\n" not in b))
def test_text_without_breaks_is_unchanged(data):
    for style in LineBreak:
        assert run(data, style) == data


@given(st.binary())
def test_lf_output_has_no_cr(data):
    assert b"\r" not in run(data, LineBreak.LF)


@given(st.binary())
def test_cr_output_has_no_lf(data):
    assert b"\n" not in run(data, LineBreak.CR)


@given(st.text(alphabet="ab\r\n"))
def test_crlf_is_idempotent(text):
    once = run(text.encode(), LineBreak.CRLF)
    assert run(once, LineBreak.CRLF) == once