"""OpenPGP building blocks: algorithm identifiers, checksums, CFB encryption, key wrap, DSA and RSA."""

__version__ = "0.1.0"