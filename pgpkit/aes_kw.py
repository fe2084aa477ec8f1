"""AES Key Wrap and Unwrap as defined in RFC 3394."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import Message, ensure, ensure_eq

_IV = b"\xa6" * 8
_ROUNDS = 6
_KEY_BITS = (128, 192, 256)


def _check_inputs(key: bytes, data: bytes) -> None:
    ensure_eq(len(data) % 8, 0, "data must be a multiple of 64bit")
    aes_size = len(key) * 8
    if aes_size not in _KEY_BITS:
        raise Message(f"invalid aes key size: {aes_size}")


def _xor_counter(block: bytes, counter: int) -> bytes:
    return (int.from_bytes(block, "big") ^ counter).to_bytes(8, "big")


def _blocks(data: bytes) -> list[bytes]:
    return [data[start : start + 8] for start in range(0, len(data), 8)]


def wrap(key: bytes, data: bytes) -> bytes:
    """Wrap ``data`` (a multiple of 8 bytes) with the AES key ``key``."""
    key = bytes(key)
    data = bytes(data)
    _check_inputs(key, data)

    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    blocks = _blocks(data)
    count = len(blocks)
    a = _IV

    for round_index in range(_ROUNDS):
        for position, block in enumerate(blocks):
            counter = count * round_index + position + 1
            b = encryptor.update(a + block)
            a = _xor_counter(b[:8], counter)
            blocks[position] = b[8:]

    return a + b"".join(blocks)


def unwrap(key: bytes, data: bytes) -> bytes:
    """Unwrap ``data`` with the AES key ``key``, checking its integrity."""
    key = bytes(key)
    data = bytes(data)
    _check_inputs(key, data)
    ensure(len(data) >= 8, "data too short")

    decryptor = Cipher(algorithms.AES(key), modes.ECB()).decryptor()
    a, *blocks = _blocks(data)
    count = len(blocks)

    for round_index in reversed(range(_ROUNDS)):
        for position in reversed(range(count)):
            counter = count * round_index + position + 1
            b = decryptor.update(_xor_counter(a, counter) + blocks[position])
            a = b[:8]
            blocks[position] = b[8:]

    if a != _IV:
        raise Message("failed integrity check")
    return b"".join(blocks)