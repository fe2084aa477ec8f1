import pytest
from hypothesis import given, strategies as st

from pgpkit.aes_kw import unwrap, wrap
from pgpkit.errors import Message

VECTORS = [
    (
        "000102030405060708090A0B0C0D0E0F",
        "00112233445566778899AABBCCDDEEFF",
        "1FA68B0A8112B447AEF34BD8FB5A7B829D3E862371D2CFE5",
    ),
    (
        "000102030405060708090A0B0C0D0E0F1011121314151617",
        "00112233445566778899AABBCCDDEEFF",
        "96778B25AE6CA435F92B5B97C050AED2468AB8A17AD84E5D",
    ),
    (
        "000102030405060708090A0B0C0D0E0F101112131415161718191A1B1C1D1E1F",
        "00112233445566778899AABBCCDDEEFF",
        "64E8C3F9CE0F5BA263E9777905818A2A93C8191E7D6E8AE7",
    ),
    (
        "000102030405060708090A0B0C0D0E0F1011121314151617",
        "00112233445566778899AABBCCDDEEFF0001020304050607",
        "031D33264E15D33268F24EC260743EDCE1C6C7DDEE725A936BA814915C6762D2",
    ),
    (
        "000102030405060708090A0B0C0D0E0F101112131415161718191A1B1C1D1E1F",
        "00112233445566778899AABBCCDDEEFF0001020304050607",
        "A8F9BC1612C68B3FF6E6F4FBE30E71E4769C8B80A32CB8958CD5D17D6B254DA1",
    ),
    (
        "000102030405060708090A0B0C0D0E0F101112131415161718191A1B1C1D1E1F",
        "00112233445566778899AABBCCDDEEFF000102030405060708090A0B0C0D0E0F",
        "28C9F404C4B810F4CBCCB35CFB87F8263F5786E2D80ED326CBC7F0E71A99F43BFB988B9B7A02DD21",
    ),
]


@pytest.mark.parametrize("kek, plain, wrapped", VECTORS)
def test_wrap_vectors(kek, plain, wrapped):
    assert wrap(bytes.fromhex(kek), bytes.fromhex(plain)).hex() == wrapped.lower()


@pytest.mark.parametrize("kek, plain, wrapped", VECTORS)
def test_unwrap_vectors(kek, plain, wrapped):
    assert unwrap(bytes.fromhex(kek), bytes.fromhex(wrapped)).hex() == plain.lower()


def test_wrap_rejects_unaligned_data():
    with pytest.raises(Message, match="multiple of 64bit"):
        wrap(bytes(16), bytes(15))


def test_unwrap_rejects_unaligned_data():
    with pytest.raises(Message, match="multiple of 64bit"):
        unwrap(bytes(16), bytes(23))


@pytest.mark.parametrize("key_len", [0, 8, 15, 20, 33])
def test_invalid_key_size(key_len):
    with pytest.raises(Message, match=f"invalid aes key size: {key_len * 8}"):
        wrap(bytes(key_len), bytes(16))
    with pytest.raises(Message, match=f"invalid aes key size: {key_len * 8}"):
        unwrap(bytes(key_len), bytes(24))


def test_unwrap_detects_tampering():
    kek, _, wrapped = VECTORS[0]
    damaged = bytearray(bytes.fromhex(wrapped))
    damaged[10] ^= 0x01
    with pytest.raises(Message, match="failed integrity check"):
        unwrap(bytes.fromhex(kek), bytes(damaged))


def test_unwrap_with_wrong_key_fails():
    _, plain, _ = VECTORS[0]
    wrapped = wrap(bytes(range(16)), bytes.fromhex(plain))
    with pytest.raises(Message, match="failed integrity check"):
        unwrap(bytes(range(1, 17)), wrapped)


def test_wrapped_output_is_eight_bytes_longer():
    assert len(wrap(bytes(32), bytes(40))) == 48


@given(
    key=st.sampled_from([16, 24, 32]).flatmap(lambda n: st.binary(min_size=n, max_size=n)),
    blocks=st.integers(min_value=1, max_value=8),
    seed=st.binary(min_size=64, max_size=64),
)
def test_roundtrip(key, blocks, seed):
    data = seed[: blocks * 8]
    wrapped = wrap(key, data)
    assert len(wrapped) == len(data) + 8
    assert unwrap(key, wrapped) == data