"""
Copyright (C) 2012-2023, Leif Theden <leif.theden@gmail.com>

This file is part of pytmj.

pytmj is free software: you can redistribute it and/or modify
it under the terms of the GNU Lesser General Public License as
published by the Free Software Foundation, either version 3 of the
License, or (at your option) any later version.

pytmj is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public
License along with pytmj.  If not, see <https://www.gnu.org/licenses/>.

"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

__all__ = ("Color", "DEFAULT_COLOR")

logger = logging.getLogger(__name__)


def _hex_pair(text: str) -> int:
    # a bad digit counts as zero; Tiled never writes one
    value = 0
    for char in text:
        try:
            digit = int(char, 16)
        except ValueError:
            digit = 0
        value = (value << 4) + digit
    return value


@dataclass(frozen=True)
class Color:
    """RGBA color, as written by Tiled in "#rrggbb" or "#aarrggbb" form."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Return a new Color from a Tiled color string.

        This never fails.  A string without the leading "#", or one that
        is neither 7 nor 9 characters long, gives DEFAULT_COLOR.

        Args:
            text (str): Color string.

        Returns:
            Color: The parsed color.

        """
        if len(text) not in (7, 9) or not text.startswith("#"):
            logger.debug('cannot parse "%s" as a color, using default', text)
            return DEFAULT_COLOR
        digits = text[1:]
        if len(digits) == 8:
            a, digits = _hex_pair(digits[:2]), digits[2:]
        else:
            a = 255
        return cls(
            _hex_pair(digits[0:2]),
            _hex_pair(digits[2:4]),
            _hex_pair(digits[4:6]),
            a,
        )

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.r, self.g, self.b, self.a

    def __str__(self) -> str:
        return "#{:02X}{:02X}{:02X}{:02X}".format(self.a, self.r, self.g, self.b)


# fallback for unparseable color strings
DEFAULT_COLOR = Color(255, 0, 255, 255)
BLACK = Color(0, 0, 0, 255)
