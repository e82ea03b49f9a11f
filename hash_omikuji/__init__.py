"""Deterministic SHA-256 omikuji (fortune slip) generator."""

from hash_omikuji.hashbits import CATALOGUE_VERSION, HashBits, derive_digest
from hash_omikuji.luck import ALL_LUCK_TYPES, LuckScore, LuckType, Rank, calculate_luck_scores
from hash_omikuji.result import OmikujiResult

__version__ = "0.1.0"

__all__ = [
    "ALL_LUCK_TYPES",
    "CATALOGUE_VERSION",
    "HashBits",
    "LuckScore",
    "LuckType",
    "OmikujiResult",
    "Rank",
    "calculate_luck_scores",
    "derive_digest",
]
