"""Error hierarchy shared by the whole package."""

from __future__ import annotations

from typing import Any, ClassVar


class PgpError(Exception):
    """Base class of every error raised by the package.

    Each concrete subclass carries a stable numeric code and a message
    template; ``detail`` holds the optional payload of the error.
    """

    code: ClassVar[int]
    template: ClassVar[str] = "{detail}"

    def __init__(self, detail: Any = None) -> None:
        self.detail = detail
        super().__init__(self.template.format(detail=detail))

    def as_code(self) -> int:
        """Return the stable numeric code of this kind of error."""
        return type(self).code


class ParsingError(PgpError):
    code = 0
    template = "failed to parse {detail}"


class InvalidInput(PgpError):
    code = 1
    template = "invalid input"


class Incomplete(PgpError):
    code = 2
    template = "incomplete input: {detail}"


class InvalidArmorWrappers(PgpError):
    code = 3
    template = "invalid armor wrappers"


class InvalidChecksum(PgpError):
    code = 4
    template = "invalid crc24 checksum"


class Base64DecodeError(PgpError):
    code = 5
    template = "failed to decode base64 {detail}"


class RequestedSizeTooLarge(PgpError):
    code = 6
    template = "requested data size is larger than the packet body"


class NoMatchingPacket(PgpError):
    code = 7
    template = "no matching packet found"


class TooManyPackets(PgpError):
    code = 8
    template = "more than one matching packet was found"


class RSAError(PgpError):
    code = 9
    template = "rsa error: {detail}"


class PgpIOError(PgpError):
    code = 10
    template = "io error: {detail}"


class MissingPackets(PgpError):
    code = 11
    template = "missing packets"


class InvalidKeyLength(PgpError):
    code = 12
    template = "invalid key length"


class BlockModeError(PgpError):
    code = 13
    template = "block mode error"


class MissingKey(PgpError):
    code = 14
    template = "missing key"


class CfbInvalidKeyIvLength(PgpError):
    code = 15
    template = "cfb: invalid key iv length"


class Unimplemented(PgpError):
    code = 16
    template = "Not yet implemented: {detail}"


class Unsupported(PgpError):
    """Packet versions and parameters that are not supported but can be ignored."""

    code = 17
    template = "Unsupported: {detail}"


class Message(PgpError):
    code = 18
    template = "{detail}"


class PacketError(PgpError):
    code = 19
    template = "Invalid Packet {detail}"


class PacketIncomplete(PgpError):
    code = 20
    template = "Incomplete Packet"


class UnpadError(PgpError):
    code = 21
    template = "Unpadding failed"


class PadError(PgpError):
    code = 22
    template = "Padding failed"


class Utf8Error(PgpError):
    code = 23
    template = "Utf8 {detail}"


class ParseIntError(PgpError):
    code = 24
    template = "ParseInt {detail}"


class InvalidPacketContent(PgpError):
    code = 25
    template = "Invalid Packet Content {detail}"


class SignatureError(PgpError):
    code = 26
    template = "Signature {detail}"


class MdcError(PgpError):
    code = 27
    template = "Modification Detection Code error"


class TryFromIntError(PgpError):
    code = 28
    template = "Invalid size conversion {detail}"


class EllipticCurveError(PgpError):
    code = 29
    template = "elliptic error: {detail}"


def ensure(cond: bool, message: str) -> None:
    """Raise :class:`Message` with ``message`` unless ``cond`` holds."""
    if not cond:
        raise Message(message)


def ensure_eq(left: Any, right: Any, message: str | None = None) -> None:
    """Raise :class:`Message` describing both values unless they are equal."""
    if left == right:
        return
    text = f"assertion failed: `(left == right)`\n  left: `{left!r}`,\n right: `{right!r}`"
    if message is not None:
        text = f"{text}: {message}"
    raise Message(text)