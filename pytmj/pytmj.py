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

Public interface of pytmj.  ``from pytmj import *`` gives the loaders,
the object tree, the property model, gid helpers and the exceptions.

"""
from .builder import load_map, loads
from .color import DEFAULT_COLOR, Color
from .exceptions import (
    CorruptData,
    DecodeError,
    InvalidEncoding,
    MalformedDocument,
    PyTMJException,
    SizeMismatch,
    UnknownLayerType,
    UnsupportedCompression,
)
from .objects import (
    DrawOrder,
    Frame,
    Grid,
    GridOrientation,
    GroupData,
    HAlign,
    ImageLayerData,
    Layer,
    LayerType,
    Map,
    MapOrientation,
    Object,
    ObjectGroupData,
    Point,
    RenderOrder,
    StaggerAxis,
    StaggerIndex,
    Text,
    Tile,
    TileLayerData,
    TileOffset,
    Tileset,
    VAlign,
)
from .properties import HasProperties, Property, PropertyType
from .tiledata import decode_tile_data
from .utils import (
    TileFlags,
    decode_gid,
    gid_flipped_diagonally,
    gid_flipped_horizontally,
    gid_flipped_hvd,
    gid_flipped_vertically,
    gid_without_flags,
)

__all__ = (
    "load_map",
    "loads",
    "Color",
    "DEFAULT_COLOR",
    "PyTMJException",
    "MalformedDocument",
    "UnknownLayerType",
    "DecodeError",
    "InvalidEncoding",
    "UnsupportedCompression",
    "CorruptData",
    "SizeMismatch",
    "Map",
    "MapOrientation",
    "RenderOrder",
    "StaggerAxis",
    "StaggerIndex",
    "Layer",
    "LayerType",
    "TileLayerData",
    "ObjectGroupData",
    "ImageLayerData",
    "GroupData",
    "DrawOrder",
    "Tileset",
    "Tile",
    "Frame",
    "TileOffset",
    "Grid",
    "GridOrientation",
    "Object",
    "Point",
    "Text",
    "HAlign",
    "VAlign",
    "Property",
    "PropertyType",
    "HasProperties",
    "decode_tile_data",
    "TileFlags",
    "decode_gid",
    "gid_without_flags",
    "gid_flipped_horizontally",
    "gid_flipped_vertically",
    "gid_flipped_diagonally",
    "gid_flipped_hvd",
)
