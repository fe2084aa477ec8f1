"""Elliptic curves and their object identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .public_key import PublicKeyAlgorithm

_MAX_ARC = 0xFFFFFFFF


@dataclass(frozen=True)
class ECCCurve:
    """An elliptic curve, known by its object identifier."""

    ident: str
    dotted: str
    bits: int = 0
    short_name: str | None = None
    algorithm: PublicKeyAlgorithm | None = None

    CURVE25519: ClassVar["ECCCurve"]
    ED25519: ClassVar["ECCCurve"]
    P256: ClassVar["ECCCurve"]
    P384: ClassVar["ECCCurve"]
    P521: ClassVar["ECCCurve"]
    BRAINPOOL_P256R1: ClassVar["ECCCurve"]
    BRAINPOOL_P384R1: ClassVar["ECCCurve"]
    BRAINPOOL_P512R1: ClassVar["ECCCurve"]
    SECP256K1: ClassVar["ECCCurve"]

    @classmethod
    def unknown(cls, dotted: str) -> "ECCCurve":
        """Return a curve that is only known by its dotted OID."""
        return cls("unknown", dotted)

    def name(self) -> str:
        """Standard name of the curve."""
        return self.ident

    def oid_str(self) -> str:
        """Dotted form of the OID."""
        return self.dotted

    def nbits(self) -> int:
        """Nominal bit length of the curve; 0 when unknown."""
        return self.bits

    def alias(self) -> str | None:
        """Alternative name of the curve, if any."""
        return self.short_name

    def pubkey_algo(self) -> PublicKeyAlgorithm | None:
        """Required algorithm, or None for ECDSA/ECDH curves."""
        return self.algorithm

    def oid(self) -> bytes:
        """DER encoded OID content bytes, the first two arcs combined."""
        arcs = [int(part) for part in self.dotted.split(".")]
        combined = [arcs[0] * 40 + arcs[1], *arcs[2:]]
        return b"".join(asn1_der_object_id_val_enc(arc) for arc in combined)

    def __str__(self) -> str:
        return self.name()


ECCCurve.CURVE25519 = ECCCurve(
    "Curve25519", "1.3.6.1.4.1.3029.1.5.1", 255, "cv25519", PublicKeyAlgorithm.ECDH
)
ECCCurve.ED25519 = ECCCurve(
    "Ed25519", "1.3.6.1.4.1.11591.15.1", 255, "ed25519", PublicKeyAlgorithm.EDDSA
)
ECCCurve.P256 = ECCCurve("NIST P-256", "1.2.840.10045.3.1.7", 256, "nistp256")
ECCCurve.P384 = ECCCurve("NIST P-384", "1.3.132.0.34", 384, "nistp384")
ECCCurve.P521 = ECCCurve("NIST P-521", "1.3.132.0.35", 521, "nistp521")
ECCCurve.BRAINPOOL_P256R1 = ECCCurve("brainpoolP256r1", "1.3.36.3.3.2.8.1.1.7", 256)
ECCCurve.BRAINPOOL_P384R1 = ECCCurve("brainpoolP384r1", "1.3.36.3.3.2.8.1.1.11", 384)
ECCCurve.BRAINPOOL_P512R1 = ECCCurve("brainpoolP512r1", "1.3.36.3.3.2.8.1.1.13", 512)
ECCCurve.SECP256K1 = ECCCurve("secp256k1", "1.3.132.0.10", 256)

_KNOWN_CURVES = (
    ECCCurve.CURVE25519,
    ECCCurve.ED25519,
    ECCCurve.P256,
    ECCCurve.P384,
    ECCCurve.P521,
    ECCCurve.BRAINPOOL_P256R1,
    ECCCurve.BRAINPOOL_P384R1,
    ECCCurve.BRAINPOOL_P512R1,
    ECCCurve.SECP256K1,
)


def asn1_der_object_id_val_enc(val: int) -> bytes:
    """Encode one OID arc in base 128 with continuation bits."""
    out = [val & 0x7F]
    val >>= 7
    while val > 0:
        out.append(0x80 | (val & 0x7F))
        val >>= 7
    return bytes(reversed(out))


def _decode_oid(data: bytes) -> str | None:
    if not data:
        return None
    arcs: list[int] = []
    value = 0
    fresh = True
    for byte in data:
        if fresh and byte == 0x80:
            return None  # non-minimal encoding
        value = (value << 7) | (byte & 0x7F)
        if value > _MAX_ARC:
            return None
        if byte & 0x80:
            fresh = False
        else:
            arcs.append(value)
            value = 0
            fresh = True
    if not fresh:
        return None  # truncated arc
    first = min(arcs[0] // 40, 2)
    parts = [first, arcs[0] - 40 * first, *arcs[1:]]
    return ".".join(str(part) for part in parts)


def ecc_curve_from_oid(oid: bytes) -> ECCCurve | None:
    """Return the curve for DER encoded OID bytes, or None if they are malformed."""
    oid = bytes(oid)
    for curve in _KNOWN_CURVES:
        if curve.oid() == oid:
            return curve
    dotted = _decode_oid(oid)
    return None if dotted is None else ECCCurve.unknown(dotted)