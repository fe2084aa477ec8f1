"""Public key algorithm identifiers."""

from __future__ import annotations

import enum


class PublicKeyAlgorithm(enum.IntEnum):
    """Public key algorithms; any other octet value maps to an ``UNKNOWN_<n>`` member."""

    RSA = 1
    RSA_ENCRYPT = 2
    RSA_SIGN = 3
    ELGAMAL_SIGN = 16
    DSA = 17
    ECDH = 18
    ECDSA = 19
    ELGAMAL = 20
    DIFFIE_HELLMAN = 21
    EDDSA = 22
    PRIVATE100 = 100
    PRIVATE101 = 101
    PRIVATE102 = 102
    PRIVATE103 = 103
    PRIVATE104 = 104
    PRIVATE105 = 105
    PRIVATE106 = 106
    PRIVATE107 = 107
    PRIVATE108 = 108
    PRIVATE109 = 109
    PRIVATE110 = 110

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF:
            member = int.__new__(cls, value)
            member._name_ = f"UNKNOWN_{value}"
            member._value_ = value
            return cls._value2member_map_.setdefault(value, member)
        return None

    @classmethod
    def from_byte(cls, value: int) -> "PublicKeyAlgorithm":
        """Return the algorithm for an octet value, known or not."""
        return cls(value)