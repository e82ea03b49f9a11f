from __future__ import annotations

import hashlib
import string
from concurrent.futures import ThreadPoolExecutor

import pytest

from hash_omikuji.hashbits import DIGEST_SIZE, FIELD_LAYOUT, SALT, HashBits, derive_digest

ALICE_2026_HEX = "a5bf253479ea8b349ce7be4d227ec2cfeed0ecdb2638ff261dd5507f32730f01"


def _alice() -> HashBits:
    return HashBits.from_seed(2026, "alice")


def test_derive_digest_matches_sha256_of_salted_seed() -> None:
    expected = hashlib.sha256(f"2026-alice-{SALT}".encode("utf-8")).digest()
    assert derive_digest(2026, "alice") == expected
    assert derive_digest(2026, "alice").hex() == ALICE_2026_HEX


def test_hash_deterministic() -> None:
    assert _alice().hex_string() == _alice().hex_string()
    assert _alice() == _alice()


def test_different_users_different_hash() -> None:
    assert HashBits.from_seed(2026, "alice") != HashBits.from_seed(2026, "bob")


def test_different_years_different_hash() -> None:
    assert HashBits.from_seed(2025, "alice") != HashBits.from_seed(2026, "alice")


def test_empty_and_unicode_seeds_are_accepted() -> None:
    assert len(derive_digest(2026, "")) == DIGEST_SIZE
    assert len(derive_digest(0, "おみくじ🎍")) == DIGEST_SIZE


def test_digest_length_is_enforced() -> None:
    with pytest.raises(ValueError):
        HashBits(b"\x00" * 31)


def test_known_vector_fields() -> None:
    bits = _alice()
    assert bits.lucky_number() == 0xA5
    assert bits.lucky_hex() == 0xBF
    assert bits.lucky_bits() == 0x2534
    assert bits.lucky_day() == 244
    assert bits.lucky_hour() == 2
    assert bits.lucky_minute() == 40
    assert bits.luck_flags() == 0xB349CE7BE4D227EC
    assert bits.entropy_check() == 0xF01
    assert bits.luck_scores() == (
        0x2C, 0xFE, 0xED, 0x0E, 0xCD, 0xB2, 0x63, 0x8F,
        0xF2, 0x61, 0xDD, 0x55, 0x07, 0xF3, 0x27, 0x30,
    )


def test_read_bits_is_msb_first() -> None:
    digest = bytes([0b10110000, 0b00001111]) + bytes(30)
    bits = HashBits(digest)
    assert bits.read_bits(0, 1) == 1
    assert bits.read_bits(1, 1) == 0
    assert bits.read_bits(0, 4) == 0b1011
    # Range straddling a byte boundary
    assert bits.read_bits(6, 6) == 0b000000
    assert bits.read_bits(10, 6) == 0b001111
    assert bits.read_bits(0, 16) == 0b1011000000001111


def test_read_bits_zero_width() -> None:
    assert _alice().read_bits(100, 0) == 0


def test_read_bits_past_the_end_is_permissive() -> None:
    bits = HashBits(b"\xff" * DIGEST_SIZE)
    # Only the 6 in-range bits contribute
    assert bits.read_bits(250, 12) == 0b111111
    assert bits.read_bits(256, 8) == 0
    assert bits.read_bits(1000, 64) == 0


def test_read_bits_rejects_bad_arguments() -> None:
    bits = _alice()
    with pytest.raises(ValueError):
        bits.read_bits(-1, 8)
    with pytest.raises(ValueError):
        bits.read_bits(0, 65)


def test_read_bits_full_width() -> None:
    bits = HashBits(b"\xff" * DIGEST_SIZE)
    assert bits.read_bits(0, 64) == 2**64 - 1


def test_modulo_fields_wrap() -> None:
    # All ones: day 511 % 365 + 1, hour 31 % 24, minute 63 % 60
    bits = HashBits(b"\xff" * DIGEST_SIZE)
    assert bits.lucky_day() == 147
    assert bits.lucky_hour() == 7
    assert bits.lucky_minute() == 3

    zeros = HashBits(bytes(DIGEST_SIZE))
    assert zeros.lucky_day() == 1
    assert zeros.lucky_hour() == 0
    assert zeros.lucky_minute() == 0


def test_field_layout_stays_inside_digest() -> None:
    for start, width in FIELD_LAYOUT.values():
        assert start + width <= DIGEST_SIZE * 8


@pytest.mark.parametrize("i", range(100))
def test_field_ranges_many_seeds(i: int) -> None:
    bits = HashBits.from_seed(2026, f"test-{i}")
    assert 1 <= bits.lucky_day() <= 365
    assert 0 <= bits.lucky_hour() <= 23
    assert 0 <= bits.lucky_minute() <= 59
    assert 0 <= bits.lucky_number() <= 255
    assert 0 <= bits.lucky_hex() <= 255
    assert 0 <= bits.lucky_bits() <= 0xFFFF
    assert 0 <= bits.entropy_check() <= 0xFFF
    assert 0 <= bits.luck_flags() < 2**64
    scores = bits.luck_scores()
    assert len(scores) == 16
    assert all(0 <= raw <= 255 for raw in scores)


def test_hex_string_is_64_lowercase_hex_chars() -> None:
    hex_string = HashBits.from_seed(2026, "test").hex_string()
    assert len(hex_string) == 64
    assert set(hex_string) <= set(string.hexdigits.lower())


def test_concurrent_derivations_agree() -> None:
    seeds = [f"user-{i % 4}" for i in range(64)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        digests = list(pool.map(lambda seed: derive_digest(2026, seed), seeds))
    for seed, digest in zip(seeds, digests):
        assert digest == derive_digest(2026, seed)
