"""
result.py
The decoded omikuji slip and its plain-text / JSON renderings.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List
import json

from hash_omikuji.art import render_art
from hash_omikuji.hashbits import CATALOGUE_VERSION, HashBits
from hash_omikuji.luck import ALL_LUCK_TYPES, LuckScore, calculate_luck_scores

SHORT_LIMIT = 5
LABEL_WIDTH = 18


def format_lucky_color(lucky_hex: int, lucky_number: int) -> str:
    # Blue channel wraps like a u8 before halving
    blue = ((lucky_hex + lucky_number) & 0xFF) // 2
    return f"#{lucky_hex:02X}{lucky_number:02X}{blue:02X}"


def format_lucky_bits(value: int) -> str:
    """16-bit value as four space-separated binary nibbles, high nibble first."""
    return " ".join(f"{(value >> shift) & 0xF:04b}" for shift in (12, 8, 4, 0))


def format_lucky_day(year: int, day_number: int) -> str:
    try:
        lucky_date = date(year, 1, 1) + timedelta(days=day_number - 1)
    except (ValueError, OverflowError):
        raise ValueError(f"Year {year} is outside the supported calendar range (1-9999).")
    return f"{lucky_date.isoformat()} ({day_number} / 365)"


@dataclass(frozen=True)
class OmikujiResult:
    """Everything shown on one slip, already formatted for display."""
    year: int
    seed: str
    lucky_number: int
    lucky_hex: str
    lucky_color: str
    lucky_bits: str
    lucky_day: str
    lucky_day_number: int
    lucky_time: str
    luck_scores: List[LuckScore]
    entropy_check: str
    fingerprint: str
    omikuji_art: str

    @classmethod
    def from_hash(cls, hash_bits: HashBits, year: int, seed: str, art_style: str = "bars") -> OmikujiResult:
        lucky_number = hash_bits.lucky_number()
        lucky_hex = hash_bits.lucky_hex()
        day_number = hash_bits.lucky_day()

        return cls(
            year=year,
            seed=seed,
            lucky_number=lucky_number,
            lucky_hex=f"0x{lucky_hex:02X}",
            lucky_color=format_lucky_color(lucky_hex, lucky_number),
            lucky_bits=format_lucky_bits(hash_bits.lucky_bits()),
            lucky_day=format_lucky_day(year, day_number),
            lucky_day_number=day_number,
            lucky_time=f"{hash_bits.lucky_hour():02}:{hash_bits.lucky_minute():02}",
            luck_scores=calculate_luck_scores(hash_bits.luck_scores(), hash_bits.luck_flags()),
            entropy_check=f"0x{hash_bits.entropy_check():03X}",
            fingerprint=hash_bits.hex_string(),
            omikuji_art=render_art(hash_bits.raw_bytes(), art_style),
        )

    @classmethod
    def generate(cls, year: int, seed: str, art_style: str = "bars") -> OmikujiResult:
        return cls.from_hash(HashBits.from_seed(year, seed), year, seed, art_style)

    def active_scores(self) -> List[LuckScore]:
        """Active categories, best score first (ties keep category order)."""
        active = [score for score in self.luck_scores if score.active]
        return sorted(active, key=lambda score: score.score, reverse=True)

    def format_text(self, short: bool = False, show_seed: bool = False) -> str:
        lines = [f"🎍 SHA-Omikuji {self.year} 🎍", ""]

        lines.append(f"{'Lucky Number':{LABEL_WIDTH}}: {self.lucky_number}")
        lines.append(f"{'Lucky Hex':{LABEL_WIDTH}}: {self.lucky_hex}")
        lines.append(f"{'Lucky Color':{LABEL_WIDTH}}: {self.lucky_color}")
        lines.append(f"{'Lucky Bits':{LABEL_WIDTH}}: {self.lucky_bits}")
        lines.append("")

        lines.append(f"{'Lucky Day':{LABEL_WIDTH}}: {self.lucky_day}")
        lines.append(f"{'Lucky Time':{LABEL_WIDTH}}: {self.lucky_time}")
        lines.append("")

        lines.append(f"{'Active Luck Flags':{LABEL_WIDTH}}:")
        by_type = {score.luck_type: score for score in self.luck_scores}
        flag_types = ALL_LUCK_TYPES[:SHORT_LIMIT] if short else ALL_LUCK_TYPES
        flags = []
        for luck_type in flag_types:
            mark = "✔" if by_type[luck_type].active else "✖"
            flags.append(f"{mark} {luck_type.label}")
        lines.append("  ".join(flags))
        lines.append("")

        lines.append("Luck Scores :")
        active = self.active_scores()
        if short:
            active = active[:SHORT_LIMIT]
        for score in active:
            lines.append(f"{score.luck_type.display_name:{LABEL_WIDTH}}: {score.score:3} ({score.rank.value})")
        lines.append("")

        lines.append(f"{'Entropy Check':{LABEL_WIDTH}}: OK ({self.entropy_check})")
        lines.append("")
        lines.append("[ Omikuji Art ]")
        lines.append(self.omikuji_art)

        if show_seed:
            lines.append("")
            lines.append(f"{'Seed':{LABEL_WIDTH}}: {self.seed}")
            lines.append(f"{'Fingerprint':{LABEL_WIDTH}}: {self.fingerprint}")

        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "seed": self.seed,
            "lucky_number": self.lucky_number,
            "lucky_hex": self.lucky_hex,
            "lucky_color": self.lucky_color,
            "lucky_bits": self.lucky_bits,
            "lucky_day": self.lucky_day,
            "lucky_day_number": self.lucky_day_number,
            "lucky_time": self.lucky_time,
            "luck_scores": [score.to_dict() for score in self.luck_scores],
            "entropy_check": self.entropy_check,
            "fingerprint": self.fingerprint,
            "omikuji_art": self.omikuji_art,
            "catalogue_version": CATALOGUE_VERSION,
        }

    def format_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)


__all__ = ["OmikujiResult", "format_lucky_bits", "format_lucky_color", "format_lucky_day"]
