"""
stat_cipher — Stat-keyed Block Cipher
======================================
Encodes short ASCII messages into 6-byte blocks. Each block is keyed
by one catalog unit's six base stats and its catalog number.

Layers:
    BLOCK    — XOR substitution + cyclic transposition of one 6-byte block
    CODEC    — message splitting, positional key pairing, colour triples
    CATALOG  — CSV unit table supplying key material
    SWATCH   — colour triples painted to / read from a PNG sheet
    SESSION  — explicit walk-through state (plaintext, picks, results)

Toy puzzle cipher. Not for protecting real data.
"""

__version__ = "1.0.0"

from .block   import BlockCipher, UnitKey
from .codec   import MessageCodec, EncryptedBlock
from .catalog import Unit, UnitCatalog
from .swatch  import SwatchSheet, to_hex, format_bytes
from .session import CipherSession
from .errors  import (
    StatCipherError,
    InvalidKeyLength,
    InvalidKeyByteRange,
    InvalidKeyIndex,
    InvalidPlaintextByteRange,
    InvalidBlockLength,
    BlockCountMismatch,
    CatalogError,
    SelectionError,
)

__all__ = [
    "BlockCipher",
    "UnitKey",
    "MessageCodec",
    "EncryptedBlock",
    "Unit",
    "UnitCatalog",
    "SwatchSheet",
    "to_hex",
    "format_bytes",
    "CipherSession",
    "StatCipherError",
    "InvalidKeyLength",
    "InvalidKeyByteRange",
    "InvalidKeyIndex",
    "InvalidPlaintextByteRange",
    "InvalidBlockLength",
    "BlockCountMismatch",
    "CatalogError",
    "SelectionError",
]
