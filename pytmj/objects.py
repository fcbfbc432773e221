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

This is what the data tree looks like:

        Map
            Layers
                Tile Layers
                    Data (gids corresponding to some tileset)
                Object Groups
                    Objects
                Image Layers (images directly on map)
                Groups (groups of layers)
            Tilesets
                Tiles
                    Animations
                    Collisions

Every class is a frozen dataclass: the tree is built once by the loader
and is read-only afterwards.

"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from itertools import chain
from operator import attrgetter
from typing import Iterator, List, Optional, Tuple, Type, TypeVar, Union

from .color import BLACK, Color
from .properties import HasProperties, Property
from .utils import (
    gid_flipped_diagonally,
    gid_flipped_horizontally,
    gid_flipped_hvd,
    gid_flipped_vertically,
    gid_without_flags,
)

__all__ = (
    "MapOrientation",
    "RenderOrder",
    "StaggerAxis",
    "StaggerIndex",
    "LayerType",
    "DrawOrder",
    "GridOrientation",
    "HAlign",
    "VAlign",
    "Point",
    "Text",
    "Object",
    "TileLayerData",
    "ObjectGroupData",
    "ImageLayerData",
    "GroupData",
    "Layer",
    "Frame",
    "TileOffset",
    "Grid",
    "Tile",
    "Tileset",
    "Map",
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def enum_from_string(cls: Type[E], value: Optional[str], default: E) -> E:
    """Return the enum member named by a Tiled string, or the default.

    Unknown strings are not errors; Tiled adds values between versions.

    """
    if value is None:
        return default
    try:
        return cls(value)
    except ValueError:
        logger.debug("unknown %s %r, using %s", cls.__name__, value, default.value)
        return default


class MapOrientation(Enum):
    ORTHOGONAL = "orthogonal"
    ISOMETRIC = "isometric"
    STAGGERED = "staggered"
    HEXAGONAL = "hexagonal"


class RenderOrder(Enum):
    RIGHT_DOWN = "right-down"
    RIGHT_UP = "right-up"
    LEFT_DOWN = "left-down"
    LEFT_UP = "left-up"


class StaggerAxis(Enum):
    X = "x"
    Y = "y"


class StaggerIndex(Enum):
    EVEN = "even"
    ODD = "odd"


class LayerType(Enum):
    TILE_LAYER = "tilelayer"
    OBJECT_GROUP = "objectgroup"
    IMAGE_LAYER = "imagelayer"
    GROUP = "group"


class DrawOrder(Enum):
    TOPDOWN = "topdown"
    INDEX = "index"


class GridOrientation(Enum):
    ORTHOGONAL = "orthogonal"
    ISOMETRIC = "isometric"


class HAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VAlign(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __getitem__(self, index):
        return (self.x, self.y)[index]


@dataclass(frozen=True)
class Text:
    text: str
    bold: bool = False
    italic: bool = False
    strikeout: bool = False
    underline: bool = False
    kerning: bool = True
    wrap: bool = False
    pixelsize: int = 16
    color: Color = BLACK
    fontfamily: str = "sans-serif"
    halign: HAlign = HAlign.LEFT
    valign: VAlign = VAlign.TOP


@dataclass(frozen=True)
class Object(HasProperties):
    """Represents any Tiled Object.

    Supported types: Box, Ellipse, Point, Tile Object, Polyline, Polygon, Text.

    """

    id: int
    x: float
    y: float
    gid: Optional[int] = None  # only if the object is a tile
    name: str = ""
    type: str = ""
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0
    visible: bool = True
    ellipse: bool = False
    point: bool = False
    polygon: Optional[List[Point]] = None
    polyline: Optional[List[Point]] = None
    text: Optional[Text] = None
    properties: List[Property] = field(default_factory=list)

    def is_tile(self) -> bool:
        return self.gid is not None

    def is_ellipse(self) -> bool:
        return self.ellipse

    def is_point(self) -> bool:
        return self.point

    def is_polygon(self) -> bool:
        return self.polygon is not None

    def is_polyline(self) -> bool:
        return self.polyline is not None

    def is_text(self) -> bool:
        return self.text is not None

    @property
    def as_points(self) -> List[Point]:
        return [
            Point(*i)
            for i in [
                (self.x, self.y),
                (self.x, self.y + self.height),
                (self.x + self.width, self.y + self.height),
                (self.x + self.width, self.y),
            ]
        ]


@dataclass(frozen=True)
class TileLayerData:
    data: List[int]


@dataclass(frozen=True)
class ObjectGroupData:
    draworder: DrawOrder
    objects: List[Object]


@dataclass(frozen=True)
class ImageLayerData:
    image: str
    transparentcolor: Optional[Color] = None


@dataclass(frozen=True)
class GroupData:
    layers: List[Layer]


LayerData = Union[TileLayerData, ObjectGroupData, ImageLayerData, GroupData]

layer_types = {
    TileLayerData: LayerType.TILE_LAYER,
    ObjectGroupData: LayerType.OBJECT_GROUP,
    ImageLayerData: LayerType.IMAGE_LAYER,
    GroupData: LayerType.GROUP,
}


@dataclass(frozen=True)
class Layer(HasProperties):
    """A map layer: common fields plus exactly one kind of layer data.

    ``layerdata`` is one of TileLayerData, ObjectGroupData, ImageLayerData
    or GroupData.  The getters below return None when the layer is of
    another kind, so callers that know what they loaded can skip the
    isinstance checks.

    """

    name: str
    layerdata: LayerData
    id: Optional[int] = None  # collision layers inside tiles have no id
    opacity: float = 1.0
    visible: bool = True
    width: int = 0
    height: int = 0
    offsetx: float = 0.0
    offsety: float = 0.0
    properties: List[Property] = field(default_factory=list)

    def __repr__(self):
        return '<{}[{}]: "{}">'.format(self.type.value, self.id, self.name)

    @property
    def type(self) -> LayerType:
        return layer_types[type(self.layerdata)]

    def is_tile_layer(self) -> bool:
        return isinstance(self.layerdata, TileLayerData)

    def is_object_group(self) -> bool:
        return isinstance(self.layerdata, ObjectGroupData)

    def is_image_layer(self) -> bool:
        return isinstance(self.layerdata, ImageLayerData)

    def is_group(self) -> bool:
        return isinstance(self.layerdata, GroupData)

    def get_data(self) -> Optional[List[int]]:
        if self.is_tile_layer():
            return self.layerdata.data
        return None

    def get_draworder(self) -> Optional[DrawOrder]:
        if self.is_object_group():
            return self.layerdata.draworder
        return None

    def get_objects(self) -> Optional[List[Object]]:
        if self.is_object_group():
            return self.layerdata.objects
        return None

    def get_image(self) -> Optional[str]:
        if self.is_image_layer():
            return self.layerdata.image
        return None

    def get_transparentcolor(self) -> Optional[Color]:
        if self.is_image_layer():
            return self.layerdata.transparentcolor
        return None

    def get_layers(self) -> Optional[List[Layer]]:
        """Return the child layers of a group, even if there are none."""
        if self.is_group():
            return self.layerdata.layers
        return None

    def _gid_at(self, pos: int) -> Optional[int]:
        data = self.get_data()
        if data is not None and 0 <= pos < len(data):
            return data[pos]
        return None

    def is_flipped_horizontally(self, pos: int) -> bool:
        gid = self._gid_at(pos)
        return gid is not None and gid_flipped_horizontally(gid)

    def is_flipped_vertically(self, pos: int) -> bool:
        gid = self._gid_at(pos)
        return gid is not None and gid_flipped_vertically(gid)

    def is_flipped_diagonally(self, pos: int) -> bool:
        gid = self._gid_at(pos)
        return gid is not None and gid_flipped_diagonally(gid)

    def is_flipped_hvd(self, pos: int) -> Tuple[bool, bool, bool]:
        gid = self._gid_at(pos)
        if gid is None:
            return False, False, False
        return gid_flipped_hvd(gid)

    def get_gid_without_flags(self, pos: int) -> int:
        """Return the gid at ``pos`` with flags removed, or 0 if there is none."""
        gid = self._gid_at(pos)
        if gid is None:
            return 0
        return gid_without_flags(gid)

    def iter_data(self) -> Iterator[Tuple[int, int, int]]:
        """Yields X, Y, GID tuples for each tile in a tile layer.

        Returns:
            Iterator[Tuple[int, int, int]]: Iterator of X, Y, GID tuples.

        """
        data = self.get_data()
        if not data or not self.width:
            return
        for index, gid in enumerate(data):
            y, x = divmod(index, self.width)
            yield x, y, gid


@dataclass(frozen=True)
class Frame:
    """One step of a tile animation.  tileid is a local id, not a gid."""

    tileid: int
    duration: int


@dataclass(frozen=True)
class TileOffset:
    x: int  # in pixels
    y: int  # positive is down


@dataclass(frozen=True)
class Grid:
    width: int
    height: int
    orientation: GridOrientation = GridOrientation.ORTHOGONAL


@dataclass(frozen=True)
class Tile(HasProperties):
    """Per-tile overrides of a tileset: animation, collision, image, properties."""

    id: int
    image: Optional[str] = None
    imagewidth: int = 0
    imageheight: int = 0
    type: Optional[str] = None
    objectgroup: Optional[Layer] = None
    animation: List[Frame] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)

    def get_anim(self, msecs: int) -> Tuple[bool, int]:
        """Return the local tile id of the animation frame at ``msecs``.

        Args:
            msecs (int): milliseconds since the animation started.

        Returns:
            Tuple[bool, int]: (True, tileid), or (False, 0) if the tile
            is not animated.

        """
        total = sum(frame.duration for frame in self.animation)
        if not total:
            return False, 0
        msecs %= total
        for frame in self.animation:
            if msecs < frame.duration:
                return True, frame.tileid
            msecs -= frame.duration
        return False, 0


@dataclass(frozen=True)
class Tileset(HasProperties):
    """Represents a Tiled Tileset.  Only embedded tilesets are supported."""

    firstgid: int
    image: str
    imagewidth: int
    imageheight: int
    tilewidth: int
    tileheight: int
    tilecount: int
    columns: int
    margin: int = 0
    spacing: int = 0
    name: str = ""
    tiledversion: str = ""
    backgroundcolor: Optional[Color] = None
    transparentcolor: Optional[Color] = None
    grid: Optional[Grid] = None
    tileoffset: Optional[TileOffset] = None
    tiles: List[Tile] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)

    def __repr__(self):
        return '<Tileset[{}]: "{}">'.format(self.firstgid, self.name)

    def rows(self) -> int:
        """Return the height of the tileset in tiles, or 0 without columns."""
        if self.columns == 0:
            return 0
        return self.tilecount // self.columns

    def local_id(self, gid: int) -> int:
        """Return the id of the gid inside this tileset, flags removed."""
        return gid_without_flags(gid) - self.firstgid

    def _coord(self, lid: int) -> Tuple[int, int]:
        if not self.columns:
            msg = 'Tileset "{}" has no columns'.format(self.name)
            logger.debug(msg)
            raise ValueError(msg)
        row, column = divmod(lid, self.columns)
        x = (self.tilewidth + self.spacing) * column + self.margin
        y = (self.tileheight + self.spacing) * row + self.margin
        return x, y

    def coord_by_gid(self, gid: int) -> Tuple[int, int]:
        """Return the pixel position of the gid's tile in the tileset image.

        Animations are not taken into account; see anim_by_gid.

        Args:
            gid (int): GID, which should belong to this tileset.

        Returns:
            Tuple[int, int]: x, y of the top left corner.

        Raises:
            ValueError: if the tileset has no columns.

        """
        return self._coord(self.local_id(gid))

    def anim_by_gid(self, gid: int, milliseconds: int) -> Tuple[int, int]:
        """Return the pixel position of the frame shown ``milliseconds`` in."""
        lid = self.local_id(gid)
        tile = self.tile_by_gid(gid)
        if tile is not None:
            animated, tileid = tile.get_anim(milliseconds)
            if animated:
                lid = tileid
        return self._coord(lid)

    def tile_by_gid(self, gid: int) -> Optional[Tile]:
        lid = self.local_id(gid)
        for tile in self.tiles:
            if tile.id == lid:
                return tile
        return None

    def collision_by_gid(self, gid: int) -> Optional[Layer]:
        tile = self.tile_by_gid(gid)
        if tile is None:
            return None
        return tile.objectgroup

    def type_by_gid(self, gid: int) -> Optional[str]:
        tile = self.tile_by_gid(gid)
        if tile is None:
            return None
        return tile.type

    def properties_by_gid(self, gid: int) -> Optional[List[Property]]:
        tile = self.tile_by_gid(gid)
        if tile is None:
            return None
        return tile.properties


@dataclass(frozen=True)
class Map(HasProperties):
    """Contains the layers, tilesets and properties of a Tiled JSON map."""

    orientation: MapOrientation
    width: int  # width of map in tiles
    height: int  # height of map in tiles
    tilewidth: int  # width of a tile in pixels
    tileheight: int  # height of a tile in pixels
    nextobjectid: int
    nextlayerid: int
    tiledversion: str = ""
    backgroundcolor: Optional[Color] = None
    renderorder: RenderOrder = RenderOrder.RIGHT_DOWN
    hexsidelength: int = 0
    staggeraxis: Optional[StaggerAxis] = None
    staggerindex: Optional[StaggerIndex] = None
    tilesets: List[Tileset] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)
    filename: Optional[str] = None

    def __repr__(self):
        return '<Map: "{}">'.format(self.filename)

    def layer_by_name(self, name: str) -> Optional[Layer]:
        """Return the first top level layer with this name.

        Args:
            name (str): The layer's name. Case-sensitive!

        Returns:
            Optional[Layer]: The layer, or None.

        """
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def tileset_by_gid(self, gid: int) -> Optional[Tileset]:
        """Return tileset that owns the gid.

        Flags are stripped from the gid first.  No bounds checking is
        done: a gid past the end of the last tileset still gives the
        tileset with the highest firstgid.  Only a map without tilesets
        gives None.

        Args:
            gid (int): GID from tile layer data.

        Returns:
            Optional[Tileset]: The tileset that owns the GID.

        """
        tiled_gid = gid_without_flags(gid)
        for tileset in sorted(self.tilesets, key=attrgetter("firstgid"), reverse=True):
            if tileset.firstgid <= tiled_gid:
                return tileset
        return None

    def all_layers(self) -> Iterator[Layer]:
        """Yield every layer, descending into groups depth-first."""
        stack = list(reversed(self.layers))
        while stack:
            layer = stack.pop()
            yield layer
            if layer.is_group():
                stack.extend(reversed(layer.get_layers()))

    def tile_layers(self, include_invisible: bool = False) -> Iterator[Layer]:
        """Return iterator of tile layers, including those inside groups."""
        layers = (layer for layer in self.all_layers() if layer.is_tile_layer())
        if include_invisible:
            return layers
        return (layer for layer in layers if layer.visible)

    def object_groups(self, include_invisible: bool = False) -> Iterator[Layer]:
        """Return iterator of object groups, including those inside groups."""
        layers = (layer for layer in self.all_layers() if layer.is_object_group())
        if include_invisible:
            return layers
        return (layer for layer in layers if layer.visible)

    @property
    def objects(self) -> Iterator[Object]:
        """Returns iterator of all the objects associated with the map."""
        return chain.from_iterable(
            layer.get_objects() for layer in self.object_groups(include_invisible=True)
        )

    @property
    def visible_layers(self) -> Iterator[Layer]:
        return (layer for layer in self.layers if layer.visible)
