"""DSA signatures with deterministic nonces (RFC 6979) over prehashed data."""

from __future__ import annotations

import hashlib
import hmac
from typing import Any, Callable

from Crypto.Hash import RIPEMD160

from .errors import SignatureError, Unimplemented
from .hash import HashAlgorithm

_DIGESTS: dict[HashAlgorithm, Callable[..., Any]] = {
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


def _check_components(p: int, q: int, g: int) -> None:
    if p < 2 or q < 2 or g == 0 or g > p:
        raise SignatureError("invalid domain parameters")


def _check_public(p: int, q: int, y: int) -> None:
    if y < 2 or pow(y, q, p) != 1:
        raise SignatureError("invalid public key")


def _message_int(q: int, hashed: bytes) -> int:
    """Leftmost bytes of the hash, as many as fit in the size of ``q``."""
    size = min(q.bit_length() // 8, len(hashed))
    return int.from_bytes(hashed[:size], "big")


def _bits2int(data: bytes, qlen: int) -> int:
    value = int.from_bytes(data, "big")
    excess = len(data) * 8 - qlen
    return value >> excess if excess > 0 else value


def _rfc6979_nonce(digest: Callable[..., Any], q: int, x: int, hashed: bytes) -> int:
    qlen = q.bit_length()
    rolen = (qlen + 7) // 8

    def mac(key: bytes, data: bytes) -> bytes:
        return hmac.new(key, data, digest).digest()

    seed = x.to_bytes(rolen, "big") + (_bits2int(hashed, qlen) % q).to_bytes(rolen, "big")
    hlen = digest().digest_size
    v = b"\x01" * hlen
    k = b"\x00" * hlen
    k = mac(k, v + b"\x00" + seed)
    v = mac(k, v)
    k = mac(k, v + b"\x01" + seed)
    v = mac(k, v)

    while True:
        stream = b""
        while len(stream) < rolen:
            v = mac(k, v)
            stream += v
        candidate = _bits2int(stream, qlen)
        if 1 <= candidate < q:
            return candidate
        k = mac(k, v + b"\x00")
        v = mac(k, v)


def sign(
    p: int,
    q: int,
    g: int,
    x: int,
    y: int,
    hash_algorithm: HashAlgorithm,
    hashed: bytes,
) -> tuple[int, int]:
    """Sign the digest ``hashed`` and return the signature pair ``(r, s)``."""
    _check_components(p, q, g)
    _check_public(p, q, y)
    if x == 0 or x >= q:
        raise SignatureError("invalid secret key")

    digest = _DIGESTS.get(hash_algorithm)
    if digest is None:
        raise Unimplemented(f"hasher {hash_algorithm.name}")

    hashed = bytes(hashed)
    k = _rfc6979_nonce(digest, q, x, hashed)
    r = pow(g, k, p) % q
    s = pow(k, -1, q) * (_message_int(q, hashed) + x * r) % q
    if r == 0 or s == 0:
        raise SignatureError("degenerate signature")
    return r, s


def verify(p: int, q: int, g: int, y: int, hashed: bytes, r: int, s: int) -> None:
    """Check the signature ``(r, s)`` over the digest ``hashed``; raise on failure."""
    _check_components(p, q, g)
    _check_public(p, q, y)
    if r == 0 or s == 0:
        raise SignatureError("invalid signature components")
    if r >= q or s >= q:
        raise SignatureError("signature out of range")

    w = pow(s, -1, q)
    u1 = _message_int(q, bytes(hashed)) * w % q
    u2 = r * w % q
    v = pow(g, u1, p) * pow(y, u2, p) % p % q
    if v != r:
        raise SignatureError("signature verification failed")