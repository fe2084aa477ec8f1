"""Normalization of line endings in byte streams."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator

_LF = 0x0A
_CR = 0x0D


class LineBreak(enum.Enum):
    """The supported line break styles."""

    LF = b"\n"
    CR = b"\r"
    CRLF = b"\r\n"


def normalized(data: Iterable[int], line_break: LineBreak) -> Iterator[int]:
    """Yield the bytes of ``data`` with every line ending rewritten to ``line_break``."""
    source = iter(data)
    head = next(source, None)
    prev_was_cr = False

    while True:
        out: int | None
        if head == _LF:
            if line_break is LineBreak.LF:
                if prev_was_cr:
                    # A newline was already emitted for the preceding \r.
                    head = next(source, None)
                out, head = head, next(source, None)
            elif line_break is LineBreak.CR:
                head = next(source, None)
                if prev_was_cr:
                    prev_was_cr = False
                    continue
                out = _CR
            elif prev_was_cr:
                prev_was_cr = False
                out, head = head, next(source, None)
            else:
                prev_was_cr = True
                out = _CR
        elif head == _CR:
            if line_break is LineBreak.LF:
                prev_was_cr = True
                head = next(source, None)
                out = _LF
            elif line_break is LineBreak.CR:
                prev_was_cr = True
                out, head = head, next(source, None)
            elif prev_was_cr:
                prev_was_cr = False
                out = _LF
            else:
                prev_was_cr = True
                out, head = head, next(source, None)
        elif line_break is LineBreak.CRLF:
            if prev_was_cr:
                out = _LF
            else:
                out, head = head, next(source, None)
            prev_was_cr = False
        else:
            prev_was_cr = False
            out, head = head, next(source, None)

        if out is None:
            return
        yield out