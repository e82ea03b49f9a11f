"""
art.py
Bar-glyph art drawn from the raw digest bytes.

Two styles:
  bars  -- the first 16 bytes mapped straight to one of 8 bar heights.
  walk  -- a 128-step random walk around a 32-cell ring, drawn as a
           histogram of how often each cell was visited.
"""

from __future__ import annotations
from typing import Callable, Dict, List

# Bar characters: 8 levels of height
BARS = "▁▂▃▄▅▆▇█"
BLANK = " "

BAR_ART_WIDTH = 16
LEVEL_SPAN = 256 // len(BARS)  # 32 byte values per bar height

RING_SIZE = 32
# 2-bit group -> step around the ring
WALK_MOVES = (-1, 0, 1, 2)
WALK_SHIFTS = (6, 4, 2, 0)


def bar_art(digest: bytes) -> str:
    """Map each of the first 16 bytes (0-255) to a bar height (0-7)."""
    return "".join(BARS[byte // LEVEL_SPAN] for byte in digest[:BAR_ART_WIDTH])


def walk_counts(digest: bytes) -> List[int]:
    """Visit counts per ring cell after walking every 2-bit group of the digest."""
    counts = [0] * RING_SIZE
    position = 0
    for byte in digest:
        for shift in WALK_SHIFTS:
            step = WALK_MOVES[(byte >> shift) & 0b11]
            position = (position + step) % RING_SIZE
            counts[position] += 1
    return counts


def walk_art(digest: bytes) -> str:
    """Render the walk histogram, scaled so the busiest cell is a full bar."""
    counts = walk_counts(digest)
    peak = max(counts)
    cells = []
    for count in counts:
        if count == 0:
            cells.append(BLANK)
        else:
            level = max(1, count * len(BARS) // peak)
            cells.append(BARS[level - 1])
    return "".join(cells)


ART_STYLES: Dict[str, Callable[[bytes], str]] = {
    "bars": bar_art,
    "walk": walk_art,
}


def render_art(digest: bytes, style: str = "bars") -> str:
    try:
        renderer = ART_STYLES[style]
    except KeyError:
        raise ValueError(f"Unknown art style {style!r}; choose from {', '.join(ART_STYLES)}.")
    return renderer(digest)


__all__ = ["ART_STYLES", "BARS", "bar_art", "render_art", "walk_art", "walk_counts"]
