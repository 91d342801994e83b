"""
Errors raised at the stat_cipher API boundary.

Every error is a ValueError subclass, so callers that already catch
ValueError around cipher calls keep working. Checks run before any
output is produced: a rejected call never returns a partial message.
"""


class StatCipherError(ValueError):
    """Base class for every stat_cipher input error."""


class InvalidKeyLength(StatCipherError):
    """Key vector does not have exactly six components."""


class InvalidKeyByteRange(StatCipherError):
    """Key vector component is not an integer in [0, 255]."""


class InvalidKeyIndex(StatCipherError):
    """Key index is not a non-negative integer."""


class InvalidPlaintextByteRange(StatCipherError):
    """Plaintext character code falls outside ASCII [0, 127]."""


class InvalidBlockLength(StatCipherError):
    """Block, cipher block or colour triple has the wrong size."""


class BlockCountMismatch(StatCipherError):
    """Number of keys does not match the number of blocks."""


class CatalogError(StatCipherError):
    """Unit catalog row could not be parsed."""


class SelectionError(StatCipherError):
    """Session selection is incomplete or over-full."""
