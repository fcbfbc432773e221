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
import math
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Set, Tuple

from .builder import load_map
from .color import Color
from .objects import Layer, Map, Tileset
from .utils import TileFlags, decode_gid, gid_without_flags

logger = logging.getLogger(__name__)

try:
    from pygame.transform import flip, rotate
    import pygame
except ImportError:
    logger.error("cannot import pygame (is it installed?)")
    raise

__all__ = ["load_pygame", "pygame_image_loader", "PygameMap"]


def handle_transformation(
    tile: pygame.Surface,
    flags: TileFlags,
) -> pygame.Surface:
    """
    Transform tile according to the flags and return a new one

    Parameters:
        tile: tile surface to transform
        flags: TileFlags object

    Returns:
        new tile surface

    """
    if flags.flipped_diagonally:
        tile = flip(rotate(tile, 270), True, False)
    if flags.flipped_horizontally or flags.flipped_vertically:
        tile = flip(tile, flags.flipped_horizontally, flags.flipped_vertically)
    return tile


def smart_convert(
    original: pygame.Surface,
    colorkey: Optional[Color],
    pixelalpha: bool,
) -> pygame.Surface:
    """
    Return new pygame Surface with optimal pixel/data format

    Tiles without transparent pixels are converted for quick blitting,
    tiles with transparent pixels get per-pixel alpha if allowed.

    Parameters:
        original: tile surface to inspect
        colorkey: optional colorkey for the tileset image
        pixelalpha: if true, prefer per-pixel alpha surfaces

    Returns:
        new tile surface

    """
    if colorkey:
        tile = original.convert()
        tile.set_colorkey(colorkey.as_tuple(), pygame.RLEACCEL)
        return tile

    if pixelalpha:
        filled_pixels = pygame.mask.from_surface(original).count()
        total_pixels = math.prod(original.get_size())
        if filled_pixels != total_pixels:
            return original.convert_alpha()
    return original.convert()


def pygame_image_loader(filename: str, colorkey: Optional[Color], **kwargs):
    """
    pytmj image loader for pygame

    Parameters:
        filename: filename, including path, to load
        colorkey: colorkey for the image

    Returns:
        function to load tile images

    """
    pixelalpha = kwargs.get("pixelalpha", True)
    image = pygame.image.load(filename)

    def load_image(rect=None, flags=None):
        if rect:
            try:
                tile = image.subsurface(rect)
            except ValueError:
                logger.error("Tile bounds outside bounds of tileset image")
                raise
        else:
            tile = image.copy()

        if flags:
            tile = handle_transformation(tile, flags)

        return smart_convert(tile, colorkey, pixelalpha)

    return load_image


@dataclass
class PygameMap:
    """A loaded map, and a surface for each gid it uses.

    Gids are kept as they appear in the map data, so each combination of
    tile and flip flags has its own, already transformed, surface.

    """

    tmjmap: Map
    images: Dict[int, pygame.Surface] = field(default_factory=dict)

    def get_tile_image_by_gid(self, gid: int) -> Optional[pygame.Surface]:
        """Return the surface for a gid, or None for the empty gid 0.

        Raises:
            ValueError: if no image was loaded for the gid.

        """
        if not gid_without_flags(gid):
            return None
        try:
            return self.images[gid]
        except KeyError:
            msg = "No image loaded for GID: {}".format(gid)
            logger.debug(msg)
            raise ValueError(msg)

    def get_tile_image(self, x: int, y: int, layer: Layer) -> Optional[pygame.Surface]:
        """Return the tile image for this location of a tile layer.

        Raises:
            ValueError: if the coordinates are out of bounds.

        """
        data = layer.get_data()
        if not data or not (0 <= x < layer.width and 0 <= y < layer.height):
            msg = "Coords: ({},{}) are not in layer {}".format(x, y, layer.name)
            logger.debug(msg)
            raise ValueError(msg)
        return self.get_tile_image_by_gid(data[y * layer.width + x])


def used_gids(tmjmap: Map) -> Set[int]:
    """Return every non-empty gid placed by tile layers and tile objects."""
    gids = set()
    for layer in tmjmap.tile_layers(include_invisible=True):
        gids.update(gid for gid in layer.get_data() if gid_without_flags(gid))
    for obj in tmjmap.objects:
        if obj.is_tile() and gid_without_flags(obj.gid):
            gids.add(obj.gid)
    return gids


def tile_source(
    tmjmap: Map, tileset: Tileset, gid: int
) -> Tuple[str, Optional[Tuple[int, int, int, int]]]:
    """Return the image file holding a tile, and the tile's rect in it."""
    folder = os.path.dirname(tmjmap.filename or "")
    tile = tileset.tile_by_gid(gid)
    if tile is not None and tile.image:
        return os.path.join(folder, tile.image), None
    x, y = tileset.coord_by_gid(gid)
    rect = (x, y, tileset.tilewidth, tileset.tileheight)
    return os.path.join(folder, tileset.image), rect


def load_images(tmjmap: Map, **kwargs) -> Dict[int, pygame.Surface]:
    """Load a surface for every gid the map needs.

    Parameters:
        tmjmap: map to load images for
        pixelalpha: if true, prefer per-pixel alpha surfaces
        load_all: if true, load every tile of every tileset, not only
            the tiles placed on the map

    Returns:
        dict of gid to surface

    """
    if kwargs.get("load_all", False):
        gids = set()
        for tileset in tmjmap.tilesets:
            gids.update(range(tileset.firstgid, tileset.firstgid + tileset.tilecount))
    else:
        gids = used_gids(tmjmap)

    loaders = dict()
    images = dict()
    for gid in sorted(gids):
        tileset = tmjmap.tileset_by_gid(gid)
        if tileset is None:
            logger.error("No tileset for GID: %s", gid)
            continue
        path, rect = tile_source(tmjmap, tileset, gid)
        try:
            loader = loaders[path]
        except KeyError:
            loader = pygame_image_loader(path, tileset.transparentcolor, **kwargs)
            loaders[path] = loader
        _, flags = decode_gid(gid)
        images[gid] = loader(rect, flags)
    return images


def load_pygame(filename: str, **kwargs) -> PygameMap:
    """Load a Tiled JSON map and the images of its tiles

    PYGAME USERS: Use me.

    By default any tile without transparent pixels will be loaded for
    quick blitting.  If the tile has transparent pixels, then it will be
    loaded with per-pixel alpha.  This is a per-tile check.

    If the tileset has a transparent color set in Tiled, per-pixel alpha
    is not used at all and the tiles get it as their colorkey.

    Don't attempt to convert() or convert_alpha() the individual tiles.
    It is already done for you.  A display mode must be set first.

    Parameters:
        filename: filename to load
        pixelalpha: if true (the default), allow per-pixel alpha tiles
        load_all: if true, load every tile of every tileset

    Returns:
        new PygameMap object

    """
    tmjmap = load_map(filename, encoding=kwargs.get("encoding", "utf-8"))
    return PygameMap(tmjmap, load_images(tmjmap, **kwargs))
