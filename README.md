# pgpkit

pgpkit provides low-level building blocks for working with OpenPGP data.

- `pgpkit.errors`: all errors derive from `PgpError`. Each error has a stable numeric code, returned by `as_code()`. The module also has the helpers `ensure(cond, message)` and `ensure_eq(left, right, message)`, which raise `Message` when the check fails.
- `pgpkit.line_reader.LineReader`: wraps a seekable binary stream and reads from it with every CR and LF byte left out. It records where the line breaks were, so that a relative `seek(offset)` counts data bytes only. Only `os.SEEK_CUR` is supported. `into_inner()` returns the wrapped stream.
- `pgpkit.normalize_lines`: `normalized(data, line_break)` yields the bytes of `data` with every line ending rewritten to `LineBreak.LF`, `LineBreak.CR` or `LineBreak.CRLF`.
- `pgpkit.public_key.PublicKeyAlgorithm`, `pgpkit.hash.HashAlgorithm`, `pgpkit.aead.AeadAlgorithm` and `pgpkit.sym.SymmetricKeyAlgorithm`: the algorithm identifiers as integer enums. `from_byte(value)` accepts any octet. Values that are not listed become `UNKNOWN_<n>` or `OTHER_<n>` members.
- `pgpkit.hash`: `HashAlgorithm.digest(data)`, `HashAlgorithm.digest_size()`, and `HashAlgorithm.new_hasher()`, which returns a `Hasher` with `update`, `write` and `finish`.
- `pgpkit.checksum`: the two-octet simple checksum (`SimpleChecksum`, `calculate_simple`, `simple`, `simple_to_writer`) and `calculate_sha1(chunks)`.
- `pgpkit.ecc_curve`: the named curves on `ECCCurve`, such as `ECCCurve.P256` and `ECCCurve.ED25519`. Each curve gives its name, dotted OID, DER-encoded OID, bit size, alias and required algorithm. `ecc_curve_from_oid(oid)` returns the curve for a DER-encoded OID. An OID that is well formed but not listed gives an `ECCCurve.unknown(...)` curve, and malformed bytes give `None`.
- `pgpkit.aes_kw`: `wrap(key, data)` and `unwrap(key, data)` implement AES key wrap as defined in RFC 3394, with 128, 192 or 256-bit keys.
- `pgpkit.sym`: OpenPGP CFB encryption with a zero IV, with or without the modification detection code. It also has regular CFB (`encrypt_with_iv_regular` and `decrypt_with_iv_regular`) and `new_session_key(rng)`. The supported ciphers are IDEA, Triple-DES, CAST5, Blowfish, AES-128/192/256, Twofish and Camellia-128/192/256.
- `pgpkit.twofish.Twofish`: the Twofish block cipher, with `encrypt_block` and `decrypt_block`.
- `pgpkit.dsa`: `sign(p, q, g, x, y, hash_algorithm, hashed)` signs a prehashed message with a deterministic nonce (RFC 6979). `verify(p, q, g, y, hashed, r, s)` raises `SignatureError` when verification fails.
- `pgpkit.rsa`: `encrypt(n, e, plaintext)`, `sign(key, hash_algorithm, digest)` and `verify(n, e, hash_algorithm, hashed, signature)` use PKCS#1 v1.5 padding. For `sign`, the key is a `cryptography` `RSAPrivateKey`. `verify` accepts signatures shorter than the modulus.

Functions that take an `rng` argument call it with a byte count and expect that many random bytes back. `secrets.token_bytes` works.

## Installation

```
pip install pgpkit
```

## Examples

Normalise line endings:

```python
from pgpkit.normalize_lines import LineBreak, normalized

assert bytes(normalized(b"a\rb\nc", LineBreak.CRLF)) == b"a\r\nb\r\nc"
```

Hash data:

```python
from pgpkit.hash import HashAlgorithm

digest = HashAlgorithm.SHA2_256.digest(b"hello")
hasher = HashAlgorithm.from_byte(8).new_hasher()
hasher.update(b"hello")
assert hasher.finish() == digest
```

Wrap and unwrap a session key:

```python
from pgpkit import aes_kw

kek = bytes(range(16))
wrapped = aes_kw.wrap(kek, bytes.fromhex("00112233445566778899aabbccddeeff"))
assert aes_kw.unwrap(kek, wrapped).hex() == "00112233445566778899aabbccddeeff"
```

Encrypt with OpenPGP CFB and the modification detection code:

```python
from pgpkit.sym import SymmetricKeyAlgorithm

alg = SymmetricKeyAlgorithm.AES128
key = bytes(alg.key_size())
ciphertext = alg.encrypt_protected(key, b"payload")
assert alg.decrypt_protected(key, ciphertext) == b"payload"
```

All errors are subclasses of `pgpkit.errors.PgpError`. For example:

- `MdcError` is raised when the modification detection code does not match.
- `CfbInvalidKeyIvLength` is raised for a key or IV of the wrong length.
- `Unimplemented` is raised for algorithms that are not supported.

## What it does not do

- CFB with resynchronization is not available. Called with a real cipher, `SymmetricKeyAlgorithm.encrypt`, `encrypt_with_rng` and `decrypt` all raise `Unimplemented`, and so does `resync=True`. Use the protected variants instead.
- The package does not parse or write OpenPGP packets, and it does not handle ASCII armor.
- The package does not generate keys, and it has no ECDH, ECDSA or EdDSA operations.
- The package has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```