"""Hash algorithm identifiers and hashing helpers."""

from __future__ import annotations

import enum
import hashlib
from typing import Any, Callable

from Crypto.Hash import RIPEMD160

from .errors import Unimplemented, Unsupported


class Hasher:
    """An incremental hash computation."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner

    def update(self, data: bytes) -> None:
        """Feed ``data`` into the hash."""
        self._inner.update(data)

    def write(self, data: bytes) -> int:
        """Feed ``data`` into the hash and return the number of bytes taken."""
        self.update(data)
        return len(data)

    def finish(self) -> bytes:
        """Return the digest of everything fed so far."""
        return self._inner.digest()


class HashAlgorithm(enum.IntEnum):
    """Hash algorithms; ``SHA2_256`` is the default."""

    NONE = 0
    MD5 = 1
    SHA1 = 2
    RIPEMD160 = 3
    SHA2_256 = 8
    SHA2_384 = 9
    SHA2_512 = 10
    SHA2_224 = 11
    SHA3_256 = 12
    SHA3_512 = 14
    # Only for compatibility with GnuPG; never to be used.
    PRIVATE10 = 110

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF:
            member = int.__new__(cls, value)
            member._name_ = f"OTHER_{value}"
            member._value_ = value
            return cls._value2member_map_.setdefault(value, member)
        return None

    @classmethod
    def from_byte(cls, value: int) -> "HashAlgorithm":
        """Return the algorithm for an octet value, known or not."""
        return cls(value)

    def _factory(self) -> Callable[[], Any] | None:
        return _FACTORIES.get(int(self))

    def new_hasher(self) -> Hasher:
        """Create a new incremental hasher for this algorithm."""
        factory = self._factory()
        if factory is None:
            raise Unimplemented(f"hasher {self.name}")
        return Hasher(factory())

    def digest(self, data: bytes) -> bytes:
        """Return the digest of ``data``."""
        if self is HashAlgorithm.PRIVATE10:
            raise Unsupported("Private10 should not be used")
        factory = self._factory()
        if factory is None:
            raise Unimplemented(f"hasher: {self.name}")
        inner = factory()
        inner.update(data)
        return inner.digest()

    def digest_size(self) -> int:
        """Return the digest length in bytes, or 0 for unsupported algorithms."""
        factory = self._factory()
        return 0 if factory is None else factory().digest_size


_FACTORIES: dict[int, Callable[[], Any]] = {
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.RIPEMD160: RIPEMD160.new,
    HashAlgorithm.SHA2_256: hashlib.sha256,
    HashAlgorithm.SHA2_384: hashlib.sha384,
    HashAlgorithm.SHA2_512: hashlib.sha512,
    HashAlgorithm.SHA2_224: hashlib.sha224,
    HashAlgorithm.SHA3_256: hashlib.sha3_256,
    HashAlgorithm.SHA3_512: hashlib.sha3_512,
}