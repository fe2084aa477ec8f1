"""AEAD algorithm identifiers."""

from __future__ import annotations

import enum


class AeadAlgorithm(enum.IntEnum):
    """Available AEAD algorithms; ``NONE`` is the default."""

    NONE = 0
    EAX = 1
    OCB = 2