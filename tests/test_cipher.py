"""
stat_cipher — Block + Message Codec Test Suite
===============================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_cipher.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import random

import pytest
from stat_cipher.block  import BlockCipher, UnitKey
from stat_cipher.codec  import MessageCodec, EncryptedBlock
from stat_cipher.errors import (
    BlockCountMismatch,
    InvalidBlockLength,
    InvalidKeyByteRange,
    InvalidKeyIndex,
    InvalidKeyLength,
    InvalidPlaintextByteRange,
    StatCipherError,
)

PIKACHU   = UnitKey((35, 55, 40, 50, 50, 90), 25)
BULBASAUR = UnitKey((45, 49, 49, 65, 65, 45), 1)
HELLO_KEY = UnitKey((45, 49, 49, 65, 65, 45), 25)

# ── BlockCipher ───────────────────────────────────────────────────────────────
def test_block_hello_vector():
    bc = BlockCipher()
    cipher, shift = bc.encrypt("HELLO", HELLO_KEY.stats, HELLO_KEY.index)
    # padded [72,69,76,76,79,32] XOR key = [101,116,125,13,14,13], rotated left by 1
    assert shift == 1
    assert list(cipher) == [116, 125, 13, 14, 13, 101]
    assert bc.decrypt(cipher, HELLO_KEY.stats, HELLO_KEY.index) == b"HELLO"

def test_block_non_final_keeps_padding():
    bc = BlockCipher()
    cipher, _ = bc.encrypt("HELLO", HELLO_KEY.stats, HELLO_KEY.index)
    plain = bc.decrypt(cipher, HELLO_KEY.stats, HELLO_KEY.index, is_final_block=False)
    assert plain == b"HELLO "

def test_block_empty_is_all_padding():
    bc = BlockCipher()
    cipher, _ = bc.encrypt("", BULBASAUR.stats, 0)
    assert cipher == bytes(32 ^ k for k in BULBASAUR.stats)
    assert bc.decrypt(cipher, BULBASAUR.stats, 0) == b""

@pytest.mark.parametrize("index", [0, 1, 5, 6, 25, 151, 1000])
def test_block_shift_is_index_mod_6(index):
    bc = BlockCipher()
    c1, s1 = bc.encrypt("abcdef", PIKACHU.stats, index)
    c2, s2 = bc.encrypt("abcdef", PIKACHU.stats, index + 6)
    assert s1 == s2 == index % 6
    assert c1 == c2

def test_block_rotation_direction():
    bc = BlockCipher()
    zero = (0,) * 6
    cipher, _ = bc.encrypt("ABCDEF", zero, 2)
    assert cipher == b"CDEFAB"

def test_block_accepts_bytes_and_int_lists():
    bc = BlockCipher()
    a, _ = bc.encrypt("Hi!", PIKACHU.stats, 7)
    b, _ = bc.encrypt(b"Hi!", list(PIKACHU.stats), 7)
    assert a == b
    assert bc.decrypt(list(a), PIKACHU.stats, 7) == b"Hi!"

def test_block_key_unit_helpers():
    bc = BlockCipher()
    cipher, shift = bc.encrypt_key("xyz", PIKACHU)
    assert shift == 1
    assert bc.decrypt_key(cipher, PIKACHU) == b"xyz"

@pytest.mark.parametrize("stats", [(1, 2, 3, 4, 5), (1, 2, 3, 4, 5, 6, 7), ()])
def test_block_rejects_wrong_key_length(stats):
    with pytest.raises(InvalidKeyLength):
        BlockCipher().encrypt("abc", stats, 1)

@pytest.mark.parametrize("stats", [(256, 0, 0, 0, 0, 0), (0, -1, 0, 0, 0, 0),
                                   (0, 0, 1.5, 0, 0, 0), (0, 0, 0, "7", 0, 0)])
def test_block_rejects_out_of_range_key(stats):
    with pytest.raises(InvalidKeyByteRange):
        BlockCipher().encrypt("abc", stats, 1)

def test_block_rejects_negative_index():
    with pytest.raises(InvalidKeyIndex):
        BlockCipher().encrypt("abc", PIKACHU.stats, -1)

def test_block_rejects_non_ascii_and_long_blocks():
    bc = BlockCipher()
    with pytest.raises(InvalidPlaintextByteRange):
        bc.encrypt("café", PIKACHU.stats, 1)
    with pytest.raises(InvalidBlockLength):
        bc.encrypt("seven!!", PIKACHU.stats, 1)

def test_block_rejects_non_int_codes():
    bc = BlockCipher()
    with pytest.raises(InvalidPlaintextByteRange):
        bc.encrypt([72.0], (0,) * 6, 0)
    with pytest.raises(InvalidPlaintextByteRange):
        bc.encrypt([True, 65], (0,) * 6, 0)

def test_block_rejects_short_cipher():
    with pytest.raises(InvalidBlockLength):
        BlockCipher().decrypt(b"\x01\x02\x03", PIKACHU.stats, 1)

def test_errors_are_value_errors():
    assert issubclass(StatCipherError, ValueError)
    with pytest.raises(ValueError):
        BlockCipher().encrypt("abc", (1, 2), 1)

# ── MessageCodec ──────────────────────────────────────────────────────────────
@pytest.mark.parametrize("length,blocks", [(0, 1), (1, 1), (6, 1), (7, 2), (12, 2), (36, 6)])
def test_codec_block_count(length, blocks):
    assert MessageCodec.required_blocks("x" * length) == blocks

def test_codec_empty_message():
    codec = MessageCodec()
    result = codec.encrypt("", [PIKACHU])
    assert len(result) == 1
    assert result[0].block == ""
    assert codec.decrypt(result, [PIKACHU]) == ""

def test_codec_multi_block_interior_space():
    codec = MessageCodec()
    msg = "HELLO WORLD!"           # block 0 ends in a real space
    keys = [PIKACHU, BULBASAUR]
    result = codec.encrypt(msg, keys)
    assert [r.block for r in result] == ["HELLO ", "WORLD!"]
    assert codec.decrypt(result, keys) == msg

def test_codec_result_metadata():
    codec = MessageCodec()
    (block,) = codec.encrypt("HELLO", [HELLO_KEY])
    assert isinstance(block, EncryptedBlock)
    assert block.key_index == 25
    assert block.shift == 1
    assert block.triple1 == (116, 13, 13)
    assert block.triple2 == (125, 14, 101)

def test_codec_extra_keys_ignored():
    codec = MessageCodec()
    result = codec.encrypt("short", [PIKACHU, BULBASAUR, HELLO_KEY])
    assert len(result) == 1
    assert codec.decrypt(result, [PIKACHU]) == "short"

def test_codec_accepts_raw_blocks_and_pairs():
    codec = MessageCodec()
    keys = [((10, 20, 30, 40, 50, 60), 4), ((1, 1, 1, 1, 1, 1), 9)]
    result = codec.encrypt("raw bytes!", keys)
    raw = [bytes(r.cipher_bytes) for r in result]
    assert codec.decrypt(raw, keys) == "raw bytes!"

def test_codec_too_few_keys():
    with pytest.raises(BlockCountMismatch):
        MessageCodec().encrypt("seven!!", [PIKACHU])

def test_codec_decrypt_count_mismatch():
    codec = MessageCodec()
    result = codec.encrypt("HELLO WORLD!", [PIKACHU, BULBASAUR])
    with pytest.raises(BlockCountMismatch):
        codec.decrypt(result, [PIKACHU])
    with pytest.raises(BlockCountMismatch):
        codec.decrypt([], [])

def test_codec_rejects_non_ascii_before_output():
    with pytest.raises(InvalidPlaintextByteRange):
        MessageCodec().encrypt("ok then ☃", [PIKACHU, BULBASAUR])

def test_codec_validates_every_key_up_front():
    with pytest.raises(InvalidKeyLength):
        MessageCodec().encrypt("HELLO WORLD!", [PIKACHU, ((1, 2, 3), 4)])

def test_codec_rejects_key_that_is_not_a_pair():
    codec = MessageCodec()
    with pytest.raises(InvalidKeyLength):
        codec.encrypt("abc", [[35, 55, 40, 50, 50, 90]])
    with pytest.raises(InvalidKeyLength):
        codec.encrypt("abc", [7])
    blocks = codec.encrypt("abc", [PIKACHU])
    with pytest.raises(InvalidKeyLength):
        codec.decrypt(blocks, [list(PIKACHU.stats)])

def test_codec_trailing_spaces_are_lost():
    # Real trailing spaces in the last block look like padding.
    codec = MessageCodec()
    result = codec.encrypt("AB  ", [PIKACHU])
    assert codec.decrypt(result, [PIKACHU]) == "AB"

@pytest.mark.parametrize("length", range(0, 37))
def test_codec_roundtrip_random(length):
    rng = random.Random(length)
    chars = [chr(rng.randrange(128)) for _ in range(length)]
    if chars and chars[-1] == " ":
        chars[-1] = "."
    msg = "".join(chars)
    keys = [UnitKey(tuple(rng.randrange(256) for _ in range(6)), rng.randrange(10_000))
            for _ in range(MessageCodec.required_blocks(msg))]
    codec = MessageCodec()
    assert codec.decrypt(codec.encrypt(msg, keys), keys) == msg

# ── colour triples ────────────────────────────────────────────────────────────
def test_triples_interleave_inverse():
    rng = random.Random(6)
    for _ in range(50):
        c = bytes(rng.randrange(256) for _ in range(6))
        t1, t2 = MessageCodec.split_triples(c)
        assert t1 == (c[0], c[2], c[4])
        assert t2 == (c[1], c[3], c[5])
        assert MessageCodec.triples_to_cipher_bytes(t1, t2) == c

def test_triples_bad_shape():
    with pytest.raises(InvalidBlockLength):
        MessageCodec.triples_to_cipher_bytes((1, 2), (3, 4, 5))
    with pytest.raises(InvalidBlockLength):
        MessageCodec.triples_to_cipher_bytes((1, 2, 300), (3, 4, 5))

def test_decrypt_from_triples_only():
    codec = MessageCodec()
    keys = [PIKACHU, BULBASAUR, HELLO_KEY, UnitKey((0, 0, 0, 0, 0, 0), 3)]
    msg = "Meet at the gym, 6pm"
    visible = [(r.triple1, r.triple2) for r in codec.encrypt(msg, keys)]
    assert codec.decrypt_from_triples(visible, keys) == msg

# ── run directly ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
