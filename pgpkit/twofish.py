"""The Twofish block cipher."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF
_RHO = 0x01010101
_ROUNDS = 16
_KEY_LENGTHS = (16, 24, 32)

_MDS = (
    (0x01, 0xEF, 0x5B, 0x5B),
    (0x5B, 0xEF, 0xEF, 0x01),
    (0xEF, 0x5B, 0x01, 0xEF),
    (0xEF, 0x01, 0xEF, 0x5B),
)
_MDS_POLY = 0x169

_RS = (
    (0x01, 0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E),
    (0xA4, 0x56, 0x82, 0xF3, 0x1E, 0xC6, 0x68, 0xE5),
    (0x02, 0xA1, 0xFC, 0xC1, 0x47, 0xAE, 0x3D, 0x19),
    (0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E, 0x03),
)
_RS_POLY = 0x14D

_WORDS = struct.Struct("<4I")


def _rol(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _ror(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _gf_mul(a: int, b: int, poly: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= poly
        b >>= 1
    return result


def _build_q(t0, t1, t2, t3) -> bytes:
    def ror4(v: int) -> int:
        return ((v >> 1) | (v << 3)) & 0xF

    out = bytearray(256)
    for x in range(256):
        a0, b0 = x >> 4, x & 0xF
        a1 = a0 ^ b0
        b1 = (a0 ^ ror4(b0) ^ (a0 << 3)) & 0xF
        a2, b2 = t0[a1], t1[b1]
        a3 = a2 ^ b2
        b3 = (a2 ^ ror4(b2) ^ (a2 << 3)) & 0xF
        out[x] = (t3[b3] << 4) | t2[a3]
    return bytes(out)


_Q0 = _build_q(
    (8, 1, 7, 13, 6, 15, 3, 2, 0, 11, 5, 9, 14, 12, 10, 4),
    (14, 12, 11, 8, 1, 2, 3, 5, 15, 4, 10, 6, 7, 0, 9, 13),
    (11, 10, 5, 14, 6, 13, 9, 0, 12, 8, 15, 3, 2, 4, 7, 1),
    (13, 7, 15, 4, 1, 2, 6, 14, 9, 11, 3, 0, 8, 5, 12, 10),
)
_Q1 = _build_q(
    (2, 8, 11, 13, 15, 7, 6, 14, 3, 1, 9, 4, 0, 10, 12, 5),
    (1, 14, 2, 11, 4, 12, 3, 7, 6, 13, 10, 5, 15, 9, 0, 8),
    (4, 12, 7, 5, 1, 6, 9, 10, 0, 14, 13, 8, 2, 11, 3, 15),
    (11, 9, 5, 1, 12, 3, 13, 14, 6, 4, 7, 15, 2, 0, 8, 10),
)

# Permutation applied to each byte position before mixing in key word ``level``.
_STAGES = (
    (_Q0, _Q0, _Q1, _Q1),
    (_Q0, _Q1, _Q0, _Q1),
    (_Q1, _Q1, _Q0, _Q0),
    (_Q1, _Q0, _Q0, _Q1),
)
_FINAL = (_Q1, _Q0, _Q1, _Q0)

_MDS_COLUMNS = tuple(
    tuple(
        sum(_gf_mul(_MDS[row][column], value, _MDS_POLY) << (8 * row) for row in range(4))
        for value in range(256)
    )
    for column in range(4)
)


def _h_byte(position: int, value: int, key_bytes: list[int]) -> int:
    for level in reversed(range(len(key_bytes))):
        value = _STAGES[level][position][value] ^ key_bytes[level]
    return _FINAL[position][value]


def _byte_column(words: list[int], position: int) -> list[int]:
    return [(word >> (8 * position)) & 0xFF for word in words]


def _h(value: int, key_words: list[int]) -> int:
    result = 0
    for position in range(4):
        byte = (value >> (8 * position)) & 0xFF
        mixed = _h_byte(position, byte, _byte_column(key_words, position))
        result ^= _MDS_COLUMNS[position][mixed]
    return result


def _rs_word(chunk: bytes) -> int:
    octets = bytearray(4)
    for row, coefficients in enumerate(_RS):
        for coefficient, byte in zip(coefficients, chunk):
            octets[row] ^= _gf_mul(coefficient, byte, _RS_POLY)
    return int.from_bytes(octets, "little")


class Twofish:
    """Twofish with a 128, 192 or 256 bit key, operating on 16 byte blocks."""

    block_size = 16

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) not in _KEY_LENGTHS:
            raise ValueError(f"invalid twofish key length: {len(key)}")
        k = len(key) // 8
        words = [int.from_bytes(key[start : start + 4], "little") for start in range(0, len(key), 4)]
        even, odd = words[0::2], words[1::2]

        sbox_words = [_rs_word(key[start : start + 8]) for start in range(0, len(key), 8)]
        sbox_words.reverse()

        subkeys: list[int] = []
        for index in range(20):
            a = _h(2 * index * _RHO, even)
            b = _rol(_h((2 * index + 1) * _RHO, odd), 8)
            subkeys.append((a + b) & _MASK)
            subkeys.append(_rol((a + 2 * b) & _MASK, 9))
        self._subkeys = subkeys

        self._tables = []
        for position in range(4):
            key_bytes = _byte_column(sbox_words, position)
            column = _MDS_COLUMNS[position]
            self._tables.append(
                [column[_h_byte(position, value, key_bytes)] for value in range(256)]
            )
        assert len(sbox_words) == k

    def _g(self, value: int) -> int:
        t0, t1, t2, t3 = self._tables
        return (
            t0[value & 0xFF]
            ^ t1[(value >> 8) & 0xFF]
            ^ t2[(value >> 16) & 0xFF]
            ^ t3[value >> 24]
        )

    def _f(self, r0: int, r1: int, round_index: int) -> tuple[int, int]:
        t0 = self._g(r0)
        t1 = self._g(_rol(r1, 8))
        f0 = (t0 + t1 + self._subkeys[2 * round_index + 8]) & _MASK
        f1 = (t0 + 2 * t1 + self._subkeys[2 * round_index + 9]) & _MASK
        return f0, f1

    @staticmethod
    def _check_block(block: bytes) -> bytes:
        block = bytes(block)
        if len(block) != 16:
            raise ValueError(f"twofish blocks are 16 bytes, got {len(block)}")
        return block

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt one 16 byte block."""
        k = self._subkeys
        p0, p1, p2, p3 = _WORDS.unpack(self._check_block(block))
        r0, r1, r2, r3 = p0 ^ k[0], p1 ^ k[1], p2 ^ k[2], p3 ^ k[3]
        for round_index in range(_ROUNDS):
            f0, f1 = self._f(r0, r1, round_index)
            new2 = _ror(r2 ^ f0, 1)
            new3 = _rol(r3, 1) ^ f1
            r0, r1, r2, r3 = new2, new3, r0, r1
        return _WORDS.pack(r2 ^ k[4], r3 ^ k[5], r0 ^ k[6], r1 ^ k[7])

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt one 16 byte block."""
        k = self._subkeys
        c0, c1, c2, c3 = _WORDS.unpack(self._check_block(block))
        r0, r1, r2, r3 = c2 ^ k[6], c3 ^ k[7], c0 ^ k[4], c1 ^ k[5]
        for round_index in reversed(range(_ROUNDS)):
            f0, f1 = self._f(r2, r3, round_index)
            old2 = _rol(r0, 1) ^ f0
            old3 = _ror(r1 ^ f1, 1)
            r0, r1, r2, r3 = r2, r3, old2, old3
        return _WORDS.pack(r0 ^ k[0], r1 ^ k[1], r2 ^ k[2], r3 ^ k[3])