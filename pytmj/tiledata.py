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
import binascii
import logging
import struct
import sys
import zlib
from base64 import b64decode
from typing import List, Optional, Union

from .exceptions import (
    CorruptData,
    InvalidEncoding,
    MalformedDocument,
    SizeMismatch,
    UnsupportedCompression,
)

__all__ = ("decode_tile_data", "unpack_gids", "decompress", "reshape_data")

logger = logging.getLogger(__name__)

GID_MAX = (1 << 32) - 1

# zlib window sizes: zlib header, or gzip header and trailer
WBITS = {
    "zlib": zlib.MAX_WBITS,
    "gzip": zlib.MAX_WBITS | 16,
}


def reshape_data(gids: List[int], width: int) -> List[List[int]]:
    """Change 1D list to 2d list

    Args:
        gids (List[int]): List of gid ints.
        width (int): Width of each row.

    Returns:
        List[List[int]]: 2D nested list object.

    """
    if width <= 0:
        return list()
    return [gids[i : i + width] for i in range(0, len(gids), width)]


def decompress(
    data: bytes,
    compression: str,
    limit: int,
    layer_name: str = "",
    layer_id: Optional[int] = None,
) -> bytes:
    """Inflate a zlib or gzip stream, producing at most ``limit`` + 1 bytes.

    Stopping one byte past the limit is enough for the caller to tell an
    oversized payload apart from an exact one, without inflating the
    whole stream.

    Args:
        data (bytes): compressed stream.
        compression (str): "zlib" or "gzip".
        limit (int): largest acceptable output size, in bytes.
        layer_name (str): owning layer, for error messages.
        layer_id (Optional[int]): owning layer id, for error messages.

    Raises:
        UnsupportedCompression: for any other scheme.
        CorruptData: if the stream is damaged or truncated.

    Returns:
        bytes: decompressed data.

    """
    try:
        wbits = WBITS[compression]
    except KeyError:
        logger.error("layer compression %s is not supported.", compression)
        raise UnsupportedCompression(layer_name, compression, layer_id)

    decoder = zlib.decompressobj(wbits)
    try:
        output = decoder.decompress(data, limit + 1)
    except zlib.error as e:
        logger.error("invalid %s data in tilelayer named %s", compression, layer_name)
        raise CorruptData(layer_name, layer_id) from e

    if len(output) > limit:
        return output

    if not decoder.eof:
        logger.error("truncated %s data in tilelayer named %s", compression, layer_name)
        raise CorruptData(layer_name, layer_id)

    return output


def unpack_gids(data: bytes, count: int) -> List[int]:
    """Return ``count`` little-endian 32 bit gids from a byte buffer."""
    fmt = "<%dL" % count
    return list(struct.unpack(fmt, data))


def decode_tile_data(
    source: Union[None, str, List[int]],
    expected_count: int,
    compression: Optional[str] = None,
    layer_name: str = "",
    layer_id: Optional[int] = None,
) -> List[int]:
    """Return all gids from a tile layer's "data" field.

    The data is either absent, a plain list of gids, or a base64 string
    of little-endian 32 bit gids, optionally compressed with zlib or gzip.

    Absent data and an explicitly empty payload both give an empty list.
    Otherwise the payload must hold exactly ``expected_count`` gids.

    Args:
        source (Union[None, str, List[int]]): the "data" field.
        expected_count (int): width * height of the layer.
        compression (Optional[str]): the "compression" field.
        layer_name (str): owning layer, for error messages.
        layer_id (Optional[int]): owning layer id, for error messages.

    Raises:
        InvalidEncoding: if the base64 string cannot be decoded.
        UnsupportedCompression: if compression is not zlib or gzip.
        CorruptData: if the compressed stream is damaged.
        SizeMismatch: if the payload does not hold expected_count gids.
        MalformedDocument: if data is neither a list nor a string.

    Returns:
        List[int]: the gids, flags included.

    """
    if source is None:
        return list()

    if isinstance(source, list):
        for gid in source:
            if isinstance(gid, bool) or not isinstance(gid, int) or not 0 <= gid <= GID_MAX:
                msg = "invalid gid {!r} in tilelayer named {}".format(gid, layer_name)
                logger.error(msg)
                raise MalformedDocument(msg)
        return source

    if not isinstance(source, str):
        msg = "tilelayer data must be an array or a string, layer named {}".format(
            layer_name
        )
        logger.error(msg)
        raise MalformedDocument(msg)

    expected_size = expected_count * 4

    try:
        data = b64decode(source, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error("Cannot decode base64 string of tilelayer named: %s", layer_name)
        raise InvalidEncoding(layer_name, layer_id) from e

    if not data:
        return list()

    if compression:
        if expected_size >= sys.maxsize:
            logger.error("tilelayer named %s is too large to decompress", layer_name)
            raise SizeMismatch(layer_name, expected_size, len(data), layer_id)
        data = decompress(data, compression, expected_size, layer_name, layer_id)
        if not data:
            return list()

    if len(data) != expected_size:
        logger.error("corrupted tilelayer data for name: %s", layer_name)
        raise SizeMismatch(layer_name, expected_size, len(data), layer_id)

    return unpack_gids(data, expected_count)
