"""Hash utilities for Twig."""

import hashlib

# Length of a full hex digest
DIGEST_LENGTH = 40

HEX_DIGITS = frozenset('0123456789abcdef')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def is_hex(value: str) -> bool:
    """Return True if value is a non-empty lowercase hex string."""
    return bool(value) and all(c in HEX_DIGITS for c in value)
