# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Text measurement.

Layout only needs ``measure(text, font) -> (width, height)``; any object with
that method can be passed in place of the Pillow-backed measurer below.
"""

from functools import lru_cache

from PIL import ImageFont

# Ascender of the tallest and descender of the deepest common glyph.
_LINE_PROBE = "Ag"


@lru_cache(maxsize=32)
def load_font(font):
    """Pillow font for a FontSpec (TrueType file if given, else Pillow's default)."""
    if font.path:
        return ImageFont.truetype(font.path, font.size)
    return ImageFont.load_default(font.size)


class PillowTextMeasurer:
    """Measures strings with the same Pillow fonts the paint pass draws with."""

    def measure(self, text, font):
        f = load_font(font)
        width = f.getlength(text) if text else 0.0
        height = f.getbbox(_LINE_PROBE)[3]
        return float(width), float(height)


class FixedTextMeasurer:
    """Monospace approximation: every character is ``char_width * size`` wide.

    Keeps layouts deterministic where real font metrics are not wanted.
    """

    def __init__(self, char_width=0.6, line_height=1.2):
        self.char_width = char_width
        self.line_height = line_height

    def measure(self, text, font):
        return (len(text) * self.char_width * font.size,
                self.line_height * font.size)
