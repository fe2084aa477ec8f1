"""A reader that drops line breaks from a seekable byte stream."""

from __future__ import annotations

import io
import os
from typing import BinaryIO

_LINE_BREAKS = b"\r\n"


class LineReader:
    """Reads bytes from a seekable stream, skipping every ``\\r`` and ``\\n``.

    Positions of discovered line breaks in the underlying stream are kept in
    ``lines`` so that relative seeks can be mapped back onto the stream.
    """

    def __init__(self, inner: BinaryIO) -> None:
        self._inner = inner
        self.lines: list[int] = []
        self._last_stored_pos = 0

    def into_inner(self) -> BinaryIO:
        """Return the wrapped stream."""
        return self._inner

    def _record_breaks(self, chunk: bytes, start: int) -> None:
        for index, byte in enumerate(chunk):
            if byte in _LINE_BREAKS:
                position = start + index
                # Only record line breaks not seen before, as reading may go
                # back and forth over the same region.
                if position > self._last_stored_pos:
                    self.lines.append(position)
                    self._last_stored_pos = position

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes with line breaks removed; all if negative."""
        result = bytearray()
        while size < 0 or len(result) < size:
            chunk = self._inner.read(-1 if size < 0 else size - len(result))
            if not chunk:
                break
            start = self._inner.tell() - len(chunk)
            self._record_breaks(chunk, start)
            result += chunk.translate(None, _LINE_BREAKS)
            if size < 0:
                break
        return bytes(result)

    def seek(self, offset: int, whence: int = os.SEEK_CUR) -> int:
        """Move by ``offset`` bytes of line-break free data from the current position."""
        if whence != os.SEEK_CUR:
            raise io.UnsupportedOperation("only relative seeking is supported")

        current = self._inner.tell()
        target = current + offset
        if target < 0:
            raise ValueError("new position is negative")

        if offset < 0:
            for position in reversed(self.lines):
                if position < target:
                    break
                if position < current:
                    target -= 1
        else:
            for position in self.lines:
                if position > target:
                    break
                if position > current:
                    target += 1

        return self._inner.seek(target, os.SEEK_SET)