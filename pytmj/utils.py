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
import logging
from collections import namedtuple
from typing import Any, Callable, Dict, Tuple

from .exceptions import MalformedDocument

__all__ = (
    "GID_TRANS_FLIPX",
    "GID_TRANS_FLIPY",
    "GID_TRANS_ROT",
    "GID_MASK",
    "TileFlags",
    "decode_gid",
    "gid_without_flags",
    "gid_flipped_horizontally",
    "gid_flipped_vertically",
    "gid_flipped_diagonally",
    "gid_flipped_hvd",
    "getdefault",
    "REQUIRED",
)

logger = logging.getLogger(__name__)

# Tiled gid flags
GID_TRANS_FLIPX = 1 << 31
GID_TRANS_FLIPY = 1 << 30
GID_TRANS_ROT = 1 << 29
GID_MASK = GID_TRANS_FLIPX | GID_TRANS_FLIPY | GID_TRANS_ROT

flag_names = ("flipped_horizontally", "flipped_vertically", "flipped_diagonally")

TileFlags = namedtuple("TileFlags", flag_names)
empty_flags = TileFlags(False, False, False)

# marker for getdefault: the key must be present
REQUIRED = object()

UINT32_MAX = (1 << 32) - 1


def decode_gid(raw_gid: int) -> Tuple[int, TileFlags]:
    """Decode a GID from tile layer data.

    Args:
        raw_gid (int): GID, as reported by Tiled.

    Returns:
        Tuple[int, TileFlags]: Tuple of the GID without flags, and TileFlags object

    """
    if raw_gid < GID_TRANS_ROT:
        return raw_gid, empty_flags
    return (
        raw_gid & ~GID_MASK,
        TileFlags(
            raw_gid & GID_TRANS_FLIPX == GID_TRANS_FLIPX,
            raw_gid & GID_TRANS_FLIPY == GID_TRANS_FLIPY,
            raw_gid & GID_TRANS_ROT == GID_TRANS_ROT,
        ),
    )


def gid_without_flags(gid: int) -> int:
    """Return a copy of the gid with the flip flags removed."""
    return gid & ~GID_MASK


def gid_flipped_horizontally(gid: int) -> bool:
    return gid & GID_TRANS_FLIPX == GID_TRANS_FLIPX


def gid_flipped_vertically(gid: int) -> bool:
    return gid & GID_TRANS_FLIPY == GID_TRANS_FLIPY


def gid_flipped_diagonally(gid: int) -> bool:
    return gid & GID_TRANS_ROT == GID_TRANS_ROT


def gid_flipped_hvd(gid: int) -> Tuple[bool, bool, bool]:
    """Return (horizontal, vertical, diagonal) flip flags of the gid."""
    return (
        gid_flipped_horizontally(gid),
        gid_flipped_vertically(gid),
        gid_flipped_diagonally(gid),
    )


def getdefault(d: Dict, context: str = "") -> Callable:
    """Return dictionary key as optional type, with a default

    Missing keys give the default; keys with the REQUIRED default
    must be present.  A value of the wrong type, or one the
    conversion function rejects, means the document is malformed.

    Args:
        d (Dict): JSON object to read from.
        context (str): Element name used in error messages.

    Returns:
        Callable: get(key, type=None, default=None)

    """
    if not isinstance(d, dict):
        msg = "expected a JSON object for {}, got {}".format(
            context or "element", type(d).__name__
        )
        logger.error(msg)
        raise MalformedDocument(msg)

    def get(key: str, type: Callable = None, default: Any = None) -> Any:
        try:
            value = d[key]
        except KeyError:
            if default is REQUIRED:
                msg = 'missing field "{}" in {}'.format(key, context or "element")
                logger.error(msg)
                raise MalformedDocument(msg)
            return default
        if type is not None:
            try:
                return type(value)
            except (TypeError, ValueError) as e:
                msg = 'invalid value for "{}" in {}: {!r}'.format(
                    key, context or "element", value
                )
                logger.error(msg)
                raise MalformedDocument(msg) from e
        return value

    return get


# strict casts for JSON values; json gives bool as a subclass of int, so
# booleans are rejected where a number is expected


def as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError("expected an integer, got {!r}".format(value))
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("expected an integer, got {!r}".format(value))
        value = int(value)
    return value


def as_uint(value: Any) -> int:
    """Cast to an unsigned 32 bit integer."""
    value = as_int(value)
    if not 0 <= value <= UINT32_MAX:
        raise ValueError("expected an unsigned 32 bit integer, got {!r}".format(value))
    return value


def as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError("expected a number, got {!r}".format(value))
    return float(value)


def as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError("expected a boolean, got {!r}".format(value))
    return value


def as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError("expected a string, got {!r}".format(value))
    return value


def as_list(value: Any) -> list:
    if not isinstance(value, list):
        raise TypeError("expected an array, got {!r}".format(value))
    return value
