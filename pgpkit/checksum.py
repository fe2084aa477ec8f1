"""Checksums used by the packet formats."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import BinaryIO

from .errors import ensure_eq


class SimpleChecksum:
    """Two octet checksum: sum of all octets modulo 65536."""

    def __init__(self) -> None:
        self._sum = 0

    def update(self, data: bytes) -> None:
        """Add the octets of ``data`` to the checksum."""
        self._sum = (self._sum + sum(data)) & 0xFFFF

    def write(self, data: bytes) -> int:
        """Add ``data`` to the checksum and return the number of bytes taken."""
        self.update(data)
        return len(data)

    def finish(self) -> int:
        """Return the checksum as an integer."""
        return self._sum

    def finalize(self) -> bytes:
        """Return the checksum as two big-endian octets."""
        return self._sum.to_bytes(2, "big")

    def to_writer(self, writer: BinaryIO) -> None:
        """Write the checksum as two big-endian octets."""
        writer.write(self.finalize())


def calculate_simple(data: bytes) -> int:
    """Return the simple checksum of ``data``."""
    checksum = SimpleChecksum()
    checksum.update(data)
    return checksum.finish()


def simple(actual: bytes, data: bytes) -> None:
    """Check that the first two octets of ``actual`` are the checksum of ``data``."""
    expected = calculate_simple(data).to_bytes(2, "big")
    ensure_eq(bytes(actual[:2]), expected, "invalid simple checksum")


def simple_to_writer(data: bytes, writer: BinaryIO) -> None:
    """Write the simple checksum of ``data`` to ``writer``."""
    checksum = SimpleChecksum()
    checksum.update(data)
    checksum.to_writer(writer)


def calculate_sha1(chunks: Iterable[bytes]) -> bytes:
    """Return the SHA-1 digest of the concatenated ``chunks``."""
    digest = hashlib.sha1()
    for chunk in chunks:
        digest.update(chunk)
    return digest.digest()[:20]