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

Builds the object tree of objects.py from a decoded JSON document.

Every JSON object is read through ``getdefault``, so each ``new_*``
function below states which fields it needs, their types, and their
defaults in one place.  Layers are dispatched on their "type" string
through ``layer_factory``.

"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .color import BLACK, Color
from .exceptions import MalformedDocument, UnknownLayerType
from .objects import (
    DrawOrder,
    Frame,
    Grid,
    GridOrientation,
    GroupData,
    HAlign,
    ImageLayerData,
    Layer,
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
    enum_from_string,
)
from .properties import parse_properties
from .tiledata import decode_tile_data
from .utils import (
    REQUIRED,
    as_bool,
    as_float,
    as_int,
    as_list,
    as_str,
    as_uint,
    getdefault,
)

__all__ = ("new_layer", "new_map", "loads", "load_map")

logger = logging.getLogger(__name__)


def as_color(value: Any) -> Color:
    return Color.from_hex(as_str(value))


def list_of(new: Callable) -> Callable:
    """Return a cast that builds every item of a JSON array with ``new``."""

    def cast(value: Any) -> List:
        return [new(item) for item in as_list(value)]

    return cast


def new_point(record: Dict) -> Point:
    get = getdefault(record, "point")
    return Point(get("x", as_float, REQUIRED), get("y", as_float, REQUIRED))


def new_text(record: Dict) -> Text:
    get = getdefault(record, "text")
    return Text(
        text=get("text", as_str, REQUIRED),
        bold=get("bold", as_bool, False),
        italic=get("italic", as_bool, False),
        strikeout=get("strikeout", as_bool, False),
        underline=get("underline", as_bool, False),
        kerning=get("kerning", as_bool, True),
        wrap=get("wrap", as_bool, False),
        pixelsize=get("pixelsize", as_int, 16),
        color=get("color", as_color, BLACK),
        fontfamily=get("fontfamily", as_str, "sans-serif"),
        halign=enum_from_string(HAlign, get("halign", as_str), HAlign.LEFT),
        valign=enum_from_string(VAlign, get("valign", as_str), VAlign.TOP),
    )


def new_object(record: Dict) -> Object:
    get = getdefault(record, "object")
    return Object(
        id=get("id", as_uint, REQUIRED),
        x=get("x", as_float, REQUIRED),
        y=get("y", as_float, REQUIRED),
        gid=get("gid", as_uint),
        name=get("name", as_str, ""),
        # newer versions of Tiled write "class" instead of "type"
        type=get("type", as_str) or get("class", as_str, ""),
        width=get("width", as_float, 0.0),
        height=get("height", as_float, 0.0),
        rotation=get("rotation", as_float, 0.0),
        visible=get("visible", as_bool, True),
        ellipse=get("ellipse", as_bool, False),
        point=get("point", as_bool, False),
        polygon=get("polygon", list_of(new_point)),
        polyline=get("polyline", list_of(new_point)),
        text=get("text", new_text),
        properties=parse_properties(get("properties", as_list)),
    )


def new_tilelayer(
    get: Callable, name: str, layer_id: Optional[int], size: int
) -> TileLayerData:
    data = decode_tile_data(
        get("data"),
        size,
        get("compression", as_str),
        name,
        layer_id,
    )
    return TileLayerData(data)


def new_objectgroup(
    get: Callable, name: str, layer_id: Optional[int], size: int
) -> ObjectGroupData:
    draworder = get("draworder", as_str)
    return ObjectGroupData(
        draworder=enum_from_string(DrawOrder, draworder, DrawOrder.TOPDOWN),
        objects=get("objects", list_of(new_object), list()),
    )


def new_imagelayer(
    get: Callable, name: str, layer_id: Optional[int], size: int
) -> ImageLayerData:
    return ImageLayerData(
        image=get("image", as_str, ""),
        transparentcolor=get("transparentcolor", as_color),
    )


def new_group(
    get: Callable, name: str, layer_id: Optional[int], size: int
) -> GroupData:
    return GroupData(get("layers", list_of(new_layer), list()))


layer_factory = {
    "tilelayer": new_tilelayer,
    "objectgroup": new_objectgroup,
    "imagelayer": new_imagelayer,
    "group": new_group,
}


def new_layer(record: Dict) -> Layer:
    """Build one layer, and its children if it is a group.

    The "type" string alone selects the kind of layer; fields that
    belong to other kinds are ignored.

    Args:
        record (Dict): JSON object of the layer.

    Raises:
        MalformedDocument: if "type" is missing or a field has the wrong type.
        UnknownLayerType: if "type" is not a known layer type.
        DecodeError: if tile layer data cannot be decoded.

    Returns:
        Layer: the new layer.

    """
    get = getdefault(record, "layer")
    layer_type = get("type", as_str, REQUIRED)
    layer_id = get("id", as_uint)
    name = get("name", as_str, "")
    width = get("width", as_uint, 0)
    height = get("height", as_uint, 0)

    try:
        new_layerdata = layer_factory[layer_type]
    except KeyError:
        logger.error("invalid layer type %s, layer named %s", layer_type, name)
        raise UnknownLayerType(layer_type, layer_id, name)

    return Layer(
        name=name,
        layerdata=new_layerdata(get, name, layer_id, width * height),
        id=layer_id,
        opacity=get("opacity", as_float, 1.0),
        visible=get("visible", as_bool, True),
        width=width,
        height=height,
        offsetx=get("offsetx", as_float, 0.0),
        offsety=get("offsety", as_float, 0.0),
        properties=parse_properties(get("properties", as_list)),
    )


def new_frame(record: Dict) -> Frame:
    get = getdefault(record, "frame")
    return Frame(
        tileid=get("tileid", as_uint, REQUIRED),
        duration=get("duration", as_uint, REQUIRED),
    )


def new_tile(record: Dict) -> Tile:
    get = getdefault(record, "tile")
    return Tile(
        id=get("id", as_uint, REQUIRED),
        image=get("image", as_str),
        imagewidth=get("imagewidth", as_uint, 0),
        imageheight=get("imageheight", as_uint, 0),
        type=get("type", as_str) or get("class", as_str),
        objectgroup=get("objectgroup", new_layer),
        animation=get("animation", list_of(new_frame), list()),
        properties=parse_properties(get("properties", as_list)),
    )


def new_grid(record: Dict) -> Grid:
    get = getdefault(record, "grid")
    orientation = get("orientation", as_str)
    return Grid(
        width=get("width", as_uint, REQUIRED),
        height=get("height", as_uint, REQUIRED),
        orientation=enum_from_string(
            GridOrientation, orientation, GridOrientation.ORTHOGONAL
        ),
    )


def new_tileoffset(record: Dict) -> TileOffset:
    get = getdefault(record, "tileoffset")
    return TileOffset(get("x", as_int, 0), get("y", as_int, 0))


def new_tileset(record: Dict) -> Tileset:
    get = getdefault(record, "tileset")
    source = get("source", as_str)
    if source is not None:
        msg = "external tileset {} is not supported".format(source)
        logger.error(msg)
        raise MalformedDocument(msg)

    return Tileset(
        firstgid=get("firstgid", as_uint, REQUIRED),
        image=get("image", as_str, REQUIRED),
        imagewidth=get("imagewidth", as_uint, REQUIRED),
        imageheight=get("imageheight", as_uint, REQUIRED),
        tilewidth=get("tilewidth", as_uint, REQUIRED),
        tileheight=get("tileheight", as_uint, REQUIRED),
        tilecount=get("tilecount", as_uint, REQUIRED),
        columns=get("columns", as_uint, REQUIRED),
        margin=get("margin", as_uint, 0),
        spacing=get("spacing", as_uint, 0),
        name=get("name", as_str, ""),
        tiledversion=get("tiledversion", as_str, ""),
        backgroundcolor=get("backgroundcolor", as_color),
        transparentcolor=get("transparentcolor", as_color),
        grid=get("grid", new_grid),
        tileoffset=get("tileoffset", new_tileoffset),
        tiles=get("tiles", list_of(new_tile), list()),
        properties=parse_properties(get("properties", as_list)),
    )


def new_map(record: Dict, filename: Optional[str] = None) -> Map:
    """Build a map, with all of its tilesets and layers.

    Args:
        record (Dict): the root JSON object of the document.
        filename (Optional[str]): where the document was read from, if known.

    Returns:
        Map: the new map.

    """
    get = getdefault(record, "map")
    if get("infinite", as_bool, False):
        logger.warning("infinite maps are not supported, chunks will be ignored")

    orientation = get("orientation", as_str, REQUIRED)
    staggeraxis = get("staggeraxis", as_str)
    staggerindex = get("staggerindex", as_str)
    return Map(
        orientation=enum_from_string(
            MapOrientation, orientation, MapOrientation.ORTHOGONAL
        ),
        width=get("width", as_uint, REQUIRED),
        height=get("height", as_uint, REQUIRED),
        tilewidth=get("tilewidth", as_uint, REQUIRED),
        tileheight=get("tileheight", as_uint, REQUIRED),
        nextobjectid=get("nextobjectid", as_uint, REQUIRED),
        nextlayerid=get("nextlayerid", as_uint, REQUIRED),
        tiledversion=get("tiledversion", as_str, ""),
        backgroundcolor=get("backgroundcolor", as_color),
        renderorder=enum_from_string(
            RenderOrder, get("renderorder", as_str), RenderOrder.RIGHT_DOWN
        ),
        hexsidelength=get("hexsidelength", as_uint, 0),
        staggeraxis=None
        if staggeraxis is None
        else enum_from_string(StaggerAxis, staggeraxis, StaggerAxis.X),
        staggerindex=None
        if staggerindex is None
        else enum_from_string(StaggerIndex, staggerindex, StaggerIndex.EVEN),
        tilesets=get("tilesets", list_of(new_tileset), list()),
        layers=get("layers", list_of(new_layer), list()),
        properties=parse_properties(get("properties", as_list)),
        filename=filename,
    )


def loads(document: Union[str, bytes], **kwargs) -> Map:
    """Load a map from the text of a Tiled JSON document.

    Args:
        document (Union[str, bytes]): the JSON text.
        encoding (str): text encoding of a bytes document, default "utf-8".
        filename (str): stored on the map as ``Map.filename``.

    Raises:
        MalformedDocument: if the document is not valid JSON, its root is
            not an object, or a required field is missing or mistyped.
        UnknownLayerType: if a layer has an unknown "type".
        DecodeError: if tile layer data cannot be decoded.

    Returns:
        Map: the loaded map.

    """
    encoding = kwargs.get("encoding", "utf-8")
    filename = kwargs.get("filename")

    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode(encoding)
        except UnicodeDecodeError as e:
            msg = "map is not valid {} text".format(encoding)
            logger.error(msg)
            raise MalformedDocument(msg) from e

    try:
        record = json.loads(document)
    except json.JSONDecodeError as e:
        msg = "map is not valid JSON: {}".format(e)
        logger.error(msg)
        raise MalformedDocument(msg) from e

    return new_map(record, filename)


def load_map(filename: str, **kwargs) -> Map:
    """Load a map from a Tiled JSON file.

    Args:
        filename (str): path of the .tmj / .json file.
        encoding (str): text encoding of the file, default "utf-8".

    Raises:
        OSError: if the file cannot be read.
        MalformedDocument: see ``loads``.

    Returns:
        Map: the loaded map.

    """
    logger.info("Loading map %s", filename)
    with open(filename, "rb") as fp:
        document = fp.read()
    kwargs["filename"] = filename
    return loads(document, **kwargs)
