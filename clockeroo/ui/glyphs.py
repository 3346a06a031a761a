"""Block-letter glyphs for the big clock face.

Each glyph is ``GLYPH_HEIGHT`` rows tall.  Digits are five columns wide;
the separators are narrower.
"""

from __future__ import annotations

GLYPH_HEIGHT = 5

GLYPHS: dict[str, tuple[str, ...]] = {
    "0": ("█████", "█   █", "█   █", "█   █", "█████"),
    "1": ("  █  ", " ██  ", "  █  ", "  █  ", " ███ "),
    "2": ("█████", "    █", "█████", "█    ", "█████"),
    "3": ("█████", "    █", " ████", "    █", "█████"),
    "4": ("█   █", "█   █", "█████", "    █", "    █"),
    "5": ("█████", "█    ", "█████", "    █", "█████"),
    "6": ("█████", "█    ", "█████", "█   █", "█████"),
    "7": ("█████", "    █", "   █ ", "  █  ", "  █  "),
    "8": ("█████", "█   █", "█████", "█   █", "█████"),
    "9": ("█████", "█   █", "█████", "    █", "█████"),
    ":": ("   ", " █ ", "   ", " █ ", "   "),
    ".": ("  ", "  ", "  ", "  ", "██"),
    " ": ("   ",) * GLYPH_HEIGHT,
}

BANNER = r"""      _            _
  ___| | ___   ___| | _____ _ __ ___   ___
 / __| |/ _ \ / __| |/ / _ \ '__/ _ \ / _ \
| (__| | (_) | (__|   <  __/ | | (_) | (_) |
 \___|_|\___/ \___|_|\_\___|_|  \___/ \___/"""


def render(text: str, spacing: int = 1) -> tuple[str, ...]:
    """Lay out *text* as rows of block glyphs.

    Characters without a glyph are drawn as blanks.
    """
    gap = " " * spacing
    rows = [[] for _ in range(GLYPH_HEIGHT)]
    for char in text:
        glyph = GLYPHS.get(char, GLYPHS[" "])
        for row, part in zip(rows, glyph):
            row.append(part)
    return tuple(gap.join(row) for row in rows)
