"""
Cipher session: the state of one encrypt/decrypt walk-through.

Holds the plaintext, the units picked for it (in pick order) and the
last encryption result. It is passed around explicitly instead of
living in module globals.
"""

import logging
import random
import string
from typing import List, Optional

from .catalog import Unit, UnitCatalog
from .codec import EncryptedBlock, MessageCodec
from .errors import InvalidPlaintextByteRange, SelectionError

logger = logging.getLogger(__name__)


class CipherSession:

    MAX_PLAINTEXT_LENGTH = 36
    ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + " !?"
    RANDOM_LENGTH_RANGE = (6, 24)

    def __init__(self, codec: MessageCodec = None, max_length: int = None):
        self.codec = codec or MessageCodec()
        self.max_length = max_length or self.MAX_PLAINTEXT_LENGTH
        self.plaintext = ""
        self.selected: List[Unit] = []
        self.results: List[EncryptedBlock] = []

    def set_plaintext(self, text: str) -> int:
        """Validate and store the message; returns the units it needs."""
        if not text:
            raise ValueError("Plaintext must not be empty.")
        if len(text) > self.max_length:
            raise ValueError(
                f"Plaintext is {len(text)} chars; the limit is {self.max_length}."
            )
        for pos, ch in enumerate(text):
            if ord(ch) > 127:
                raise InvalidPlaintextByteRange(
                    f"Character {ch!r} at position {pos + 1} is outside ASCII."
                )
        self.plaintext = text
        self.selected = []
        self.results = []
        logger.info(f"Plaintext set: {len(text)} chars, {self.required_count} units needed")
        return self.required_count

    @property
    def required_count(self) -> int:
        if not self.plaintext:
            return 0
        return self.codec.required_blocks(self.plaintext)

    @property
    def is_ready(self) -> bool:
        return bool(self.plaintext) and len(self.selected) == self.required_count

    def toggle(self, unit: Unit) -> bool:
        """Select `unit`, or deselect it if already picked. Returns new state."""
        for i, picked in enumerate(self.selected):
            if picked.id == unit.id:
                del self.selected[i]
                logger.debug(f"Deselected unit {unit.id}")
                return False
        if len(self.selected) >= self.required_count:
            raise SelectionError(f"Only {self.required_count} units are needed.")
        self.selected.append(unit)
        logger.debug(f"Selected unit {unit.id} ({len(self.selected)}/{self.required_count})")
        return True

    def encrypt(self) -> List[EncryptedBlock]:
        if not self.is_ready:
            raise SelectionError(
                f"Select exactly {self.required_count} units before encrypting "
                f"({len(self.selected)} selected)."
            )
        self.results = self.codec.encrypt(self.plaintext, self.selected)
        return self.results

    def decrypt(self, results: Optional[List[EncryptedBlock]] = None) -> str:
        blocks = self.results if results is None else results
        return self.codec.decrypt(blocks, self.selected)

    def verify(self) -> bool:
        """True if decrypting the last result gives back the plaintext."""
        ok = self.decrypt() == self.plaintext
        logger.info(f"Round-trip verification: {'ok' if ok else 'MISMATCH'}")
        return ok

    # ── helpers ──────────────────────────────────────────────────────────────

    @classmethod
    def random_plaintext(cls, length: int = 12,
                         rng: Optional[random.Random] = None) -> str:
        """Random text from ALPHABET, capped at MAX_PLAINTEXT_LENGTH chars."""
        rng = rng or random
        length = max(0, min(length, cls.MAX_PLAINTEXT_LENGTH))
        return "".join(rng.choice(cls.ALPHABET) for _ in range(length))

    def set_random_plaintext(self, rng: Optional[random.Random] = None) -> str:
        """Pick a length in RANDOM_LENGTH_RANGE and load random text."""
        rng = rng or random
        low, high = self.RANDOM_LENGTH_RANGE
        text = self.random_plaintext(rng.randint(low, high), rng)
        self.set_plaintext(text)
        return text

    def refresh(self, catalog: UnitCatalog,
                rng: Optional[random.Random] = None) -> List[Unit]:
        """Clear the selection and draw a new visible unit listing."""
        self.selected = []
        self.results = []
        return catalog.visible(rng)
