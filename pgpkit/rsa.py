"""RSA encryption and signatures with PKCS#1 v1.5 padding."""

from __future__ import annotations

import hmac
import secrets

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from .ecc_curve import asn1_der_object_id_val_enc
from .errors import Message, RSAError, SignatureError, Unsupported
from .hash import HashAlgorithm

MAX_KEY_SIZE = 16384
_MIN_PUB_EXPONENT = 2
_MAX_PUB_EXPONENT = (1 << 33) - 1

_DIGEST_OIDS: dict[HashAlgorithm, str] = {
    HashAlgorithm.MD5: "1.2.840.113549.2.5",
    HashAlgorithm.SHA1: "1.3.14.3.2.26",
    HashAlgorithm.RIPEMD160: "1.3.36.3.2.1",
    HashAlgorithm.SHA2_224: "2.16.840.1.101.3.4.2.4",
    HashAlgorithm.SHA2_256: "2.16.840.1.101.3.4.2.1",
    HashAlgorithm.SHA2_384: "2.16.840.1.101.3.4.2.2",
    HashAlgorithm.SHA2_512: "2.16.840.1.101.3.4.2.3",
    HashAlgorithm.SHA3_256: "2.16.840.1.101.3.4.2.8",
    HashAlgorithm.SHA3_512: "2.16.840.1.101.3.4.2.10",
}


def _oid_bytes(dotted: str) -> bytes:
    arcs = [int(part) for part in dotted.split(".")]
    combined = [arcs[0] * 40 + arcs[1], *arcs[2:]]
    return b"".join(asn1_der_object_id_val_enc(arc) for arc in combined)


def _digest_info_prefix(hash_algorithm: HashAlgorithm) -> tuple[bytes, int]:
    """Return the DER DigestInfo prefix and the digest length for an algorithm."""
    if hash_algorithm is HashAlgorithm.NONE:
        raise Message("none")
    if hash_algorithm is HashAlgorithm.PRIVATE10:
        raise Unsupported("Private10 should not be used")
    dotted = _DIGEST_OIDS.get(hash_algorithm)
    if dotted is None:
        raise Unsupported(f"Hash algorithm {int(hash_algorithm)} is unsupported")

    size = hash_algorithm.digest_size()
    oid = _oid_bytes(dotted)
    algorithm_id = bytes([0x30, len(oid) + 4, 0x06, len(oid)]) + oid + b"\x05\x00"
    prefix = bytes([0x30, len(algorithm_id) + 2 + size]) + algorithm_id + bytes([0x04, size])
    return prefix, size


def _public_key(n: bytes, e: bytes) -> tuple[int, int]:
    modulus = int.from_bytes(bytes(n), "big")
    exponent = int.from_bytes(bytes(e), "big")
    if modulus.bit_length() > MAX_KEY_SIZE:
        raise RSAError("modulus too large")
    if exponent < _MIN_PUB_EXPONENT:
        raise RSAError("public exponent too small")
    if exponent > _MAX_PUB_EXPONENT:
        raise RSAError("public exponent too large")
    return modulus, exponent


def _key_size(modulus: int) -> int:
    return (modulus.bit_length() + 7) // 8


def _signature_encoding(hash_algorithm: HashAlgorithm, hashed: bytes, size: int) -> bytes:
    prefix, digest_len = _digest_info_prefix(hash_algorithm)
    if len(hashed) != digest_len:
        raise SignatureError("input must be hashed")
    t = prefix + hashed
    if size < len(t) + 11:
        raise SignatureError("message too long")
    return b"\x00\x01" + b"\xff" * (size - len(t) - 3) + b"\x00" + t


def _nonzero_random(length: int) -> bytes:
    out = bytearray()
    while len(out) < length:
        out += secrets.token_bytes(length - len(out)).replace(b"\x00", b"")
    return bytes(out)


def encrypt(n: bytes, e: bytes, plaintext: bytes) -> list[bytes]:
    """Encrypt ``plaintext`` for the public key ``(n, e)``; returns one ciphertext."""
    modulus, exponent = _public_key(n, e)
    plaintext = bytes(plaintext)
    size = _key_size(modulus)
    if len(plaintext) > size - 11:
        raise RSAError("message too long")

    padding = _nonzero_random(size - len(plaintext) - 3)
    encoded = b"\x00\x02" + padding + b"\x00" + plaintext
    value = pow(int.from_bytes(encoded, "big"), exponent, modulus)
    return [value.to_bytes(size, "big")]


def verify(
    n: bytes,
    e: bytes,
    hash_algorithm: HashAlgorithm,
    hashed: bytes,
    signature: bytes,
) -> None:
    """Check a PKCS#1 v1.5 ``signature`` over the digest ``hashed``; raise on failure."""
    modulus, exponent = _public_key(n, e)
    size = _key_size(modulus)
    signature = bytes(signature)
    if len(signature) < size:
        # Short signatures are allowed by OpenPGP; pad them out to the key size.
        signature = signature.rjust(size, b"\x00")

    expected = _signature_encoding(hash_algorithm, bytes(hashed), size)
    if len(signature) != size:
        raise SignatureError("signature verification failed")
    value = int.from_bytes(signature, "big")
    if value >= modulus:
        raise SignatureError("signature verification failed")

    recovered = pow(value, exponent, modulus).to_bytes(size, "big")
    if not hmac.compare_digest(recovered, expected):
        raise SignatureError("signature verification failed")


def sign(key: RSAPrivateKey, hash_algorithm: HashAlgorithm, digest: bytes) -> list[bytes]:
    """Sign the digest ``digest`` with PKCS#1 v1.5 padding; returns one signature."""
    numbers = key.private_numbers()
    modulus = numbers.public_numbers.n
    size = _key_size(modulus)
    encoded = _signature_encoding(hash_algorithm, bytes(digest), size)

    message = int.from_bytes(encoded, "big")
    m1 = pow(message, numbers.dmp1, numbers.p)
    m2 = pow(message, numbers.dmq1, numbers.q)
    h = numbers.iqmp * (m1 - m2) % numbers.p
    value = m2 + h * numbers.q
    if pow(value, numbers.public_numbers.e, modulus) != message:
        raise SignatureError("signing failed")
    return [value.to_bytes(size, "big")]