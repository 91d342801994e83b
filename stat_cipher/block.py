"""
Block Cipher — XOR Substitution + Cyclic Transposition
=======================================================
Transforms one 6-byte block under a unit's key material:

  key vector : six stat integers [HP, Atk, Def, SpA, SpD, Spe], 0-255 each
  key index  : the unit's catalog number; only (index % 6) is used

Encryption:
  1. pad the block to 6 bytes with ASCII space (32)
  2. substitution   sub[i]    = pad[i] XOR key[i]
  3. transposition  cipher[j] = sub[(j + shift) % 6],  shift = index % 6

Decryption runs the two steps backwards. XOR is self-inverse, and a
left rotation by `shift` is undone by a left rotation by (6 - shift) % 6.

Only the final block of a message carries padding, so only the final
block has its trailing spaces stripped. Genuine trailing spaces at the
end of a message cannot be told apart from padding and are dropped.

Toy puzzle cipher: the keyspace is tiny and there is no diffusion
between positions. It is not a security mechanism.
"""

from typing import NamedTuple, Sequence, Tuple, Union

from .errors import (
    InvalidBlockLength,
    InvalidKeyByteRange,
    InvalidKeyIndex,
    InvalidKeyLength,
    InvalidPlaintextByteRange,
)

BlockInput = Union[str, bytes, bytearray, Sequence[int]]


class UnitKey(NamedTuple):
    """Key material for one block: stat vector plus catalog index."""
    stats: Tuple[int, ...]
    index: int


class BlockCipher:
    """Single-block substitution/transposition transform."""

    BLOCK_SIZE = 6
    PAD_BYTE   = 32    # ASCII space
    MAX_ASCII  = 127

    # ── key validation ───────────────────────────────────────────────────────

    @classmethod
    def check_key(cls, stats: Sequence[int]) -> Tuple[int, ...]:
        """Return the key vector as a tuple, or raise if it is not 6 bytes."""
        values = tuple(stats)
        if len(values) != cls.BLOCK_SIZE:
            raise InvalidKeyLength(
                f"Key vector must have {cls.BLOCK_SIZE} entries, got {len(values)}."
            )
        for pos, v in enumerate(values):
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 255:
                raise InvalidKeyByteRange(
                    f"Key vector entry {pos} is {v!r}; expected an int in 0-255."
                )
        return values

    @staticmethod
    def check_key_index(index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise InvalidKeyIndex(
                f"Key index must be a non-negative int, got {index!r}."
            )
        return index

    @classmethod
    def shift_for(cls, index: int) -> int:
        """Transposition shift selected by a key index."""
        return cls.check_key_index(index) % cls.BLOCK_SIZE

    # ── block conversion ─────────────────────────────────────────────────────

    @classmethod
    def _plain_bytes(cls, block: BlockInput) -> bytes:
        if isinstance(block, str):
            codes = [ord(ch) for ch in block]
        else:
            codes = list(block)
        if len(codes) > cls.BLOCK_SIZE:
            raise InvalidBlockLength(
                f"Plaintext block holds at most {cls.BLOCK_SIZE} bytes, "
                f"got {len(codes)}."
            )
        for pos, code in enumerate(codes):
            if (isinstance(code, bool) or not isinstance(code, int)
                    or not 0 <= code <= cls.MAX_ASCII):
                raise InvalidPlaintextByteRange(
                    f"Character code {code!r} at position {pos} is outside ASCII."
                )
        return bytes(codes)

    @classmethod
    def check_cipher_bytes(cls, cipher: Sequence[int]) -> bytes:
        """Return `cipher` as 6 bytes, or raise if it is not a cipher block."""
        values = list(cipher)
        if len(values) != cls.BLOCK_SIZE:
            raise InvalidBlockLength(
                f"Cipher block must be {cls.BLOCK_SIZE} bytes, got {len(values)}."
            )
        for pos, v in enumerate(values):
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 255:
                raise InvalidBlockLength(
                    f"Cipher byte {pos} is {v!r}; expected an int in 0-255."
                )
        return bytes(values)

    @staticmethod
    def _rotate_left(data: bytes, n: int) -> bytes:
        return data[n:] + data[:n]

    # ── public API ───────────────────────────────────────────────────────────

    def encrypt(self, block: BlockInput, stats: Sequence[int],
                index: int) -> Tuple[bytes, int]:
        """
        Encrypt up to 6 ASCII bytes.

        Returns:
            (cipher_bytes, shift). The shift is redundant with the index
            but is kept for visualization.
        """
        key   = self.check_key(stats)
        shift = self.shift_for(index)
        plain = self._plain_bytes(block)

        padded = plain + bytes([self.PAD_BYTE]) * (self.BLOCK_SIZE - len(plain))
        substituted = bytes(p ^ k for p, k in zip(padded, key))
        return self._rotate_left(substituted, shift), shift

    def decrypt(self, cipher: Sequence[int], stats: Sequence[int],
                index: int, is_final_block: bool = True) -> bytes:
        """
        Decrypt one 6-byte cipher block.

        The default is_final_block=True matches single-block use. A
        message decoder passes False for every block except the last.
        """
        key   = self.check_key(stats)
        shift = self.shift_for(index)
        data  = self.check_cipher_bytes(cipher)

        reverse = (self.BLOCK_SIZE - shift) % self.BLOCK_SIZE
        detransposed = self._rotate_left(data, reverse)
        plain = bytes(c ^ k for c, k in zip(detransposed, key))

        if is_final_block:
            return plain.rstrip(bytes([self.PAD_BYTE]))
        return plain

    def encrypt_key(self, block: BlockInput, key: UnitKey) -> Tuple[bytes, int]:
        return self.encrypt(block, key.stats, key.index)

    def decrypt_key(self, cipher: Sequence[int], key: UnitKey,
                    is_final_block: bool = True) -> bytes:
        return self.decrypt(cipher, key.stats, key.index, is_final_block)
