"""
Message Codec — Multi-block Chaining + Colour Triples
======================================================
Splits a message into 6-character blocks and pairs block i with key i.
Each block runs through BlockCipher, and the blocks are reassembled in
order on the way back.

Every cipher block also has a "colour" form: two RGB triples taken
from alternating byte positions.

    triple1 = (c[0], c[2], c[4])     # HP,  Def, SpD
    triple2 = (c[1], c[3], c[5])     # Atk, SpA, Spe

Someone who only sees the two colours can interleave them back into
the cipher bytes and decrypt with the right units.

Block count: ceil(len / 6), and at least 1, so an empty message still
costs one unit and decrypts to "".
"""

import logging
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .block import BlockCipher, UnitKey
from .errors import (
    BlockCountMismatch,
    InvalidBlockLength,
    InvalidKeyLength,
    InvalidPlaintextByteRange,
)

logger = logging.getLogger(__name__)

Triple = Tuple[int, int, int]


class EncryptedBlock(NamedTuple):
    """One encrypted block plus the metadata a renderer needs."""
    block: str                 # source plaintext fragment, unpadded
    cipher_bytes: bytes
    shift: int
    triple1: Triple
    triple2: Triple
    key_index: int
    unit_name: Optional[str] = None


class MessageCodec:
    """Encrypt / decrypt whole messages, one unit key per block."""

    BLOCK_SIZE = BlockCipher.BLOCK_SIZE

    def __init__(self, cipher: BlockCipher = None):
        self._cipher = cipher or BlockCipher()

    # ── helpers ──────────────────────────────────────────────────────────────

    @classmethod
    def required_blocks(cls, plaintext: str) -> int:
        """Number of keys needed for `plaintext` (never less than 1)."""
        if not plaintext:
            return 1
        return -(-len(plaintext) // cls.BLOCK_SIZE)

    @staticmethod
    def _as_key(key) -> UnitKey:
        """Accept a UnitKey, a catalog Unit, or a plain (stats, index) pair."""
        unit_key = getattr(key, "key", None)
        if isinstance(unit_key, UnitKey):
            key = unit_key
        try:
            stats, index = key
        except (TypeError, ValueError):
            raise InvalidKeyLength(
                f"Key must be a (stats, index) pair or a unit, got {key!r}."
            ) from None
        return UnitKey(BlockCipher.check_key(stats),
                       BlockCipher.check_key_index(index))

    @staticmethod
    def _check_ascii(plaintext: str) -> None:
        for pos, ch in enumerate(plaintext):
            if ord(ch) > BlockCipher.MAX_ASCII:
                raise InvalidPlaintextByteRange(
                    f"Character {ch!r} at position {pos} is outside ASCII."
                )

    @staticmethod
    def split_triples(cipher_bytes: bytes) -> Tuple[Triple, Triple]:
        """Split 6 cipher bytes into (even positions, odd positions)."""
        c = cipher_bytes
        return (c[0], c[2], c[4]), (c[1], c[3], c[5])

    @staticmethod
    def triples_to_cipher_bytes(triple1: Sequence[int],
                                triple2: Sequence[int]) -> bytes:
        """Interleave two colour triples back into 6 cipher bytes."""
        t1, t2 = tuple(triple1), tuple(triple2)
        if len(t1) != 3 or len(t2) != 3:
            raise InvalidBlockLength(
                f"Colour triples need 3 components each, got {len(t1)} and {len(t2)}."
            )
        return BlockCipher.check_cipher_bytes(
            [t1[0], t2[0], t1[1], t2[1], t1[2], t2[2]]
        )

    # ── public API ───────────────────────────────────────────────────────────

    def encrypt(self, plaintext: str, keys: Sequence) -> List[EncryptedBlock]:
        """
        Encrypt a message, pairing block i with keys[i].

        Args:
            plaintext : ASCII text (code points 0-127)
            keys      : at least required_blocks(plaintext) entries; extra
                        entries are ignored

        Returns:
            One EncryptedBlock per block, in message order.
        """
        count = self.required_blocks(plaintext)
        if len(keys) < count:
            raise BlockCountMismatch(
                f"Message of {len(plaintext)} chars needs {count} keys, "
                f"got {len(keys)}."
            )
        self._check_ascii(plaintext)
        unit_keys = [self._as_key(k) for k in keys[:count]]

        results = []
        for i, key in enumerate(unit_keys):
            start = i * self.BLOCK_SIZE
            block = plaintext[start:start + self.BLOCK_SIZE]
            cipher_bytes, shift = self._cipher.encrypt_key(block, key)
            triple1, triple2 = self.split_triples(cipher_bytes)
            results.append(EncryptedBlock(
                block=block,
                cipher_bytes=cipher_bytes,
                shift=shift,
                triple1=triple1,
                triple2=triple2,
                key_index=key.index,
                unit_name=getattr(keys[i], "name", None),
            ))
        logger.debug(f"Encrypted {len(plaintext)} chars into {count} blocks")
        return results

    def decrypt(self, blocks: Sequence, keys: Sequence) -> str:
        """
        Decrypt blocks produced by encrypt(), with the same keys in order.

        Each element of `blocks` may be an EncryptedBlock or 6 raw bytes.
        Only the last block has its trailing padding stripped.
        """
        if not blocks:
            raise BlockCountMismatch("At least one cipher block is required.")
        if len(blocks) != len(keys):
            raise BlockCountMismatch(
                f"Got {len(blocks)} cipher blocks but {len(keys)} keys."
            )
        unit_keys = [self._as_key(k) for k in keys]
        raw = [b.cipher_bytes if isinstance(b, EncryptedBlock)
               else BlockCipher.check_cipher_bytes(b) for b in blocks]

        last = len(raw) - 1
        plain = b"".join(
            self._cipher.decrypt_key(cipher, key, is_final_block=(i == last))
            for i, (cipher, key) in enumerate(zip(raw, unit_keys))
        )
        logger.debug(f"Decrypted {len(raw)} blocks into {len(plain)} chars")
        return plain.decode("latin-1")

    def decrypt_from_triples(self, triples: Iterable[Tuple[Sequence[int], Sequence[int]]],
                             keys: Sequence) -> str:
        """Decrypt a message when only the colour triples are visible."""
        cipher_blocks = [self.triples_to_cipher_bytes(t1, t2) for t1, t2 in triples]
        return self.decrypt(cipher_blocks, keys)
