"""
hashbits.py
SHA-256 digest derivation and bit-field decoding for the omikuji slip.

Every lucky value is read straight out of a single 256-bit digest, so the
same (year, seed) pair always decodes to the same slip.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple
import hashlib
import logging

logger = logging.getLogger(__name__)

# ----- Constants and Configuration -----
SALT = "sha-omikuji-2026"
SEPARATOR = "-"
DIGEST_SIZE = 32  # bytes
DIGEST_BITS = DIGEST_SIZE * 8
MAX_READ_WIDTH = 64

LUCK_CATEGORY_COUNT = 16
SCORE_WIDTH = 8

# Bit layout, format version 1: field -> (start_bit, width_bits)
CATALOGUE_VERSION = 1
FIELD_LAYOUT: Dict[str, Tuple[int, int]] = {
    "lucky_number": (0, 8),
    "lucky_hex": (8, 8),
    "lucky_bits": (16, 16),
    "lucky_day": (32, 9),
    "lucky_hour": (41, 5),
    "lucky_minute": (46, 6),
    "luck_flags": (52, 64),
    "luck_scores": (116, LUCK_CATEGORY_COUNT * SCORE_WIDTH),
    "entropy_check": (244, 12),
}

DAYS_IN_YEAR = 365
HOURS_IN_DAY = 24
MINUTES_IN_HOUR = 60


# === Digest Derivation ===
def derive_digest(year: int, seed: str) -> bytes:
    """Hash ``{year}-{seed}-{SALT}`` with SHA-256 and return the 32 raw bytes."""
    material = f"{year}{SEPARATOR}{seed}{SEPARATOR}{SALT}"
    digest = hashlib.sha256(material.encode("utf-8")).digest()
    logger.debug("Derived digest for year %s (%d seed chars)", year, len(seed))
    return digest


# === Field Decoder ===
@dataclass(frozen=True)
class HashBits:
    """Immutable, bit-addressable view over a 32-byte digest."""
    digest: bytes

    def __post_init__(self):
        if len(self.digest) != DIGEST_SIZE:
            raise ValueError(
                f"Digest must be exactly {DIGEST_SIZE} bytes, got {len(self.digest)}."
            )
        object.__setattr__(self, "digest", bytes(self.digest))

    @classmethod
    def from_seed(cls, year: int, seed: str) -> HashBits:
        return cls(derive_digest(year, seed))

    def raw_bytes(self) -> bytes:
        return self.digest

    def hex_string(self) -> str:
        """Fingerprint: 64 lowercase hex characters, two per byte."""
        return self.digest.hex()

    def read_bits(self, start_bit: int, width: int) -> int:
        """
        Read ``width`` bits starting at ``start_bit``, most significant first.

        Bit 0 is the high bit of byte 0. Positions past the end of the digest
        are skipped rather than rejected, so an overlong read simply yields
        fewer bits.
        """
        if start_bit < 0:
            raise ValueError(f"start_bit must be non-negative, got {start_bit}.")
        if not 0 <= width <= MAX_READ_WIDTH:
            raise ValueError(f"width must be between 0 and {MAX_READ_WIDTH}, got {width}.")

        result = 0
        for position in range(start_bit, start_bit + width):
            byte_index = position // 8
            if byte_index >= DIGEST_SIZE:
                continue
            bit_offset = 7 - (position % 8)
            bit = (self.digest[byte_index] >> bit_offset) & 1
            result = (result << 1) | bit
        return result

    def _field(self, name: str) -> int:
        start, width = FIELD_LAYOUT[name]
        return self.read_bits(start, width)

    # bit[0..7]
    def lucky_number(self) -> int:
        return self._field("lucky_number")

    # bit[8..15]
    def lucky_hex(self) -> int:
        return self._field("lucky_hex")

    # bit[16..31]
    def lucky_bits(self) -> int:
        return self._field("lucky_bits")

    def lucky_day(self) -> int:
        """Day of year in 1..365 from a 9-bit field (modulo bias is accepted)."""
        return self._field("lucky_day") % DAYS_IN_YEAR + 1

    def lucky_hour(self) -> int:
        return self._field("lucky_hour") % HOURS_IN_DAY

    def lucky_minute(self) -> int:
        return self._field("lucky_minute") % MINUTES_IN_HOUR

    def luck_flags(self) -> int:
        """64-bit flag set; bit i (from the LSB) switches luck category i on."""
        return self._field("luck_flags")

    def luck_scores(self) -> Tuple[int, ...]:
        """Sixteen independent raw bytes, aligned with the luck category index."""
        base, _ = FIELD_LAYOUT["luck_scores"]
        return tuple(
            self.read_bits(base + i * SCORE_WIDTH, SCORE_WIDTH)
            for i in range(LUCK_CATEGORY_COUNT)
        )

    # bit[244..255]
    def entropy_check(self) -> int:
        return self._field("entropy_check")


__all__ = [
    "CATALOGUE_VERSION",
    "DIGEST_SIZE",
    "FIELD_LAYOUT",
    "HashBits",
    "SALT",
    "derive_digest",
]
