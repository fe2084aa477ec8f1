"""Symmetric key algorithms and the OpenPGP CFB mode."""

from __future__ import annotations

import enum
import logging
import secrets
import struct
from dataclasses import dataclass
from typing import Callable, Collection

from Crypto.Cipher import AES, CAST, DES, Blowfish
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .checksum import calculate_sha1
from .errors import CfbInvalidKeyIvLength, MdcError, Message, Unimplemented, ensure
from .twofish import Twofish

log = logging.getLogger(__name__)

Rng = Callable[[int], bytes]
_BlockFunction = Callable[[bytes], bytes]

# MDC is 1 byte packet tag, 1 byte length prefix and 20 bytes SHA1 hash.
_MDC_LEN = 22
_MDC_HEADER = b"\xd3\x14"


class SymmetricKeyAlgorithm(enum.IntEnum):
    """Symmetric key algorithms; any other octet value maps to an ``OTHER_<n>`` member."""

    PLAINTEXT = 0
    IDEA = 1
    TRIPLE_DES = 2
    CAST5 = 3
    BLOWFISH = 4
    AES128 = 7
    AES192 = 8
    AES256 = 9
    TWOFISH = 10
    CAMELLIA128 = 11
    CAMELLIA192 = 12
    CAMELLIA256 = 13
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
    def from_byte(cls, value: int) -> "SymmetricKeyAlgorithm":
        """Return the algorithm for an octet value, known or not."""
        return cls(value)

    def block_size(self) -> int:
        """The size of a single block in bytes; 0 for plaintext and unknown algorithms."""
        spec = _SPECS.get(self)
        return 0 if spec is None else spec.block_size

    def key_size(self) -> int:
        """The size of a key in bytes; 0 for plaintext and unknown algorithms."""
        spec = _SPECS.get(self)
        return 0 if spec is None else spec.key_size

    def _block_function(self, key: bytes, iv: bytes) -> _BlockFunction:
        spec = _SPECS[self]
        if len(key) not in spec.key_lengths or len(iv) != spec.block_size:
            raise CfbInvalidKeyIvLength()
        return spec.factory(bytes(key))

    def _unsupported(self) -> str:
        return f"SymmetricKeyAlgorithm {int(self)} is unsupported"

    def decrypt(self, key: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in OpenPGP CFB mode with a zero IV and resynchronization."""
        log.debug("unprotected decrypt")
        return self.decrypt_with_iv(key, bytes(self.block_size()), ciphertext, True)[1]

    def decrypt_protected(self, key: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in OpenPGP CFB mode with a zero IV and check the trailing MDC."""
        log.debug("protected decrypt")
        prefix, res = self.decrypt_with_iv(key, bytes(self.block_size()), ciphertext, False)
        if len(res) < _MDC_LEN:
            raise MdcError()
        data, mdc = res[:-_MDC_LEN], res[-_MDC_LEN:]
        sha1 = calculate_sha1([prefix, data, mdc[:2]])
        if mdc[:2] != _MDC_HEADER or mdc[2:] != sha1:
            raise MdcError()
        return data

    def decrypt_with_iv(
        self, key: bytes, iv: bytes, ciphertext: bytes, resync: bool
    ) -> tuple[bytes, bytes]:
        """Decrypt in OpenPGP CFB mode and return ``(prefix, data)``.

        The prefix is the block size plus two octets of random data, the last
        two of which repeat the two before them.
        """
        bs = self.block_size()
        ciphertext = bytes(ciphertext)
        ensure(bs + 2 < len(ciphertext), "invalid ciphertext")

        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            plain = ciphertext
        elif self not in _SPECS:
            raise Unimplemented(self._unsupported())
        else:
            block = self._block_function(key, iv)
            if resync:
                raise Unimplemented("CFB resync is not here")
            plain = _cfb(block, bs, bytes(iv), ciphertext, decrypting=True)
        return plain[: bs + 2], plain[bs + 2 :]

    def decrypt_with_iv_regular(self, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in regular CFB mode, without padding."""
        ciphertext = bytes(ciphertext)
        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return ciphertext
        if self not in _SPECS:
            raise Unimplemented(self._unsupported())
        block = self._block_function(key, iv)
        return _cfb(block, self.block_size(), bytes(iv), ciphertext, decrypting=True)

    def _random_prefix(self, rng: Rng) -> bytes:
        bs = self.block_size()
        ensure(bs >= 2, self._unsupported())
        prefix = bytes(rng(bs))
        # Quick check: the last two octets are repeated.
        return prefix + prefix[bs - 2 : bs]

    def encrypt_with_rng(self, rng: Rng, key: bytes, plaintext: bytes) -> bytes:
        """Encrypt in OpenPGP CFB mode with a zero IV and resynchronization.

        ``rng`` is called with a byte count and returns that many random bytes.
        """
        log.debug("encrypt unprotected")
        prefix = self._random_prefix(rng)
        return self.encrypt_with_iv(
            key, bytes(self.block_size()), prefix + bytes(plaintext), True
        )

    def encrypt(self, key: bytes, plaintext: bytes) -> bytes:
        """Same as :meth:`encrypt_with_rng`, using the system's secure random source."""
        return self.encrypt_with_rng(secrets.token_bytes, key, plaintext)

    def encrypt_protected_with_rng(self, rng: Rng, key: bytes, plaintext: bytes) -> bytes:
        """Encrypt in OpenPGP CFB mode with a zero IV, appending an MDC.

        ``rng`` is called with a byte count and returns that many random bytes.
        """
        log.debug("protected encrypt")
        body = self._random_prefix(rng) + bytes(plaintext) + _MDC_HEADER
        body += calculate_sha1([body])
        return self.encrypt_with_iv(key, bytes(self.block_size()), body, False)

    def encrypt_protected(self, key: bytes, plaintext: bytes) -> bytes:
        """Same as :meth:`encrypt_protected_with_rng`, using the system's secure random source."""
        return self.encrypt_protected_with_rng(secrets.token_bytes, key, plaintext)

    def encrypt_with_iv(self, key: bytes, iv: bytes, plaintext: bytes, resync: bool) -> bytes:
        """Encrypt prefix and data in OpenPGP CFB mode, without padding."""
        bs = self.block_size()
        plaintext = bytes(plaintext)
        ensure(len(plaintext) >= bs + 2, "invalid plaintext")

        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return plaintext
        if self not in _SPECS:
            raise Message(self._unsupported())
        block = self._block_function(key, iv)
        if resync:
            raise Unimplemented("CFB resync is not here")
        return _cfb(block, bs, bytes(iv), plaintext, decrypting=False)

    def encrypt_with_iv_regular(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        """Encrypt in regular CFB mode, without padding."""
        plaintext = bytes(plaintext)
        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return plaintext
        if self not in _SPECS:
            raise Unimplemented(self._unsupported())
        block = self._block_function(key, iv)
        return _cfb(block, self.block_size(), bytes(iv), plaintext, decrypting=False)

    def new_session_key(self, rng: Rng) -> bytes:
        """Generate a new random session key of this algorithm's key size."""
        return bytes(rng(self.key_size()))


def _cfb(
    block: _BlockFunction, bs: int, iv: bytes, data: bytes, *, decrypting: bool
) -> bytes:
    out = bytearray()
    feedback = iv
    for start in range(0, len(data), bs):
        chunk = data[start : start + bs]
        keystream = block(feedback)[: len(chunk)]
        mixed = (int.from_bytes(chunk, "big") ^ int.from_bytes(keystream, "big")).to_bytes(
            len(chunk), "big"
        )
        out += mixed
        feedback = chunk if decrypting else mixed
    return bytes(out)


def _aes(key: bytes) -> _BlockFunction:
    return AES.new(key, AES.MODE_ECB).encrypt


def _triple_des(key: bytes) -> _BlockFunction:
    first, second, third = (DES.new(key[start : start + 8], DES.MODE_ECB) for start in (0, 8, 16))
    return lambda data: third.encrypt(second.decrypt(first.encrypt(data)))


def _cast5(key: bytes) -> _BlockFunction:
    return CAST.new(key, CAST.MODE_ECB).encrypt


def _blowfish(key: bytes) -> _BlockFunction:
    return Blowfish.new(key, Blowfish.MODE_ECB).encrypt


def _camellia(key: bytes) -> _BlockFunction:
    return Cipher(algorithms.Camellia(key), modes.ECB()).encryptor().update


def _twofish(key: bytes) -> _BlockFunction:
    return Twofish(key).encrypt_block


_IDEA_WORDS = struct.Struct(">4H")
_MASK128 = (1 << 128) - 1


def _idea_mul(a: int, b: int) -> int:
    return ((a or 0x10000) * (b or 0x10000) % 0x10001) & 0xFFFF


def _idea(key: bytes) -> _BlockFunction:
    value = int.from_bytes(key, "big")
    subkeys: list[int] = []
    while len(subkeys) < 52:
        subkeys.extend((value >> (112 - 16 * i)) & 0xFFFF for i in range(8))
        value = ((value << 25) | (value >> 103)) & _MASK128
    del subkeys[52:]

    def encrypt_block(data: bytes) -> bytes:
        x1, x2, x3, x4 = _IDEA_WORDS.unpack(data)
        for round_start in range(0, 48, 6):
            k1, k2, k3, k4, k5, k6 = subkeys[round_start : round_start + 6]
            x1 = _idea_mul(x1, k1)
            x2 = (x2 + k2) & 0xFFFF
            x3 = (x3 + k3) & 0xFFFF
            x4 = _idea_mul(x4, k4)
            t0 = _idea_mul(x1 ^ x3, k5)
            t1 = _idea_mul((t0 + (x2 ^ x4)) & 0xFFFF, k6)
            t0 = (t0 + t1) & 0xFFFF
            x1 ^= t1
            x4 ^= t0
            x2, x3 = x3 ^ t1, x2 ^ t0
        return _IDEA_WORDS.pack(
            _idea_mul(x1, subkeys[48]),
            (x3 + subkeys[49]) & 0xFFFF,
            (x2 + subkeys[50]) & 0xFFFF,
            _idea_mul(x4, subkeys[51]),
        )

    return encrypt_block


@dataclass(frozen=True)
class _CipherSpec:
    block_size: int
    key_size: int
    key_lengths: Collection[int]
    factory: Callable[[bytes], _BlockFunction]


_SPECS: dict[SymmetricKeyAlgorithm, _CipherSpec] = {
    SymmetricKeyAlgorithm.IDEA: _CipherSpec(8, 16, (16,), _idea),
    SymmetricKeyAlgorithm.TRIPLE_DES: _CipherSpec(8, 24, (24,), _triple_des),
    SymmetricKeyAlgorithm.CAST5: _CipherSpec(8, 16, range(5, 17), _cast5),
    SymmetricKeyAlgorithm.BLOWFISH: _CipherSpec(8, 16, range(4, 57), _blowfish),
    SymmetricKeyAlgorithm.AES128: _CipherSpec(16, 16, (16,), _aes),
    SymmetricKeyAlgorithm.AES192: _CipherSpec(16, 24, (24,), _aes),
    SymmetricKeyAlgorithm.AES256: _CipherSpec(16, 32, (32,), _aes),
    SymmetricKeyAlgorithm.TWOFISH: _CipherSpec(16, 32, (16, 24, 32), _twofish),
    SymmetricKeyAlgorithm.CAMELLIA128: _CipherSpec(16, 16, (16,), _camellia),
    SymmetricKeyAlgorithm.CAMELLIA192: _CipherSpec(16, 24, (24,), _camellia),
    SymmetricKeyAlgorithm.CAMELLIA256: _CipherSpec(16, 32, (32,), _camellia),
}