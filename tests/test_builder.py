import base64
import struct
import unittest
import zlib

from pytmj.builder import layer_factory, new_layer, new_object, new_tile, new_tileset
from pytmj.color import BLACK, Color
from pytmj.exceptions import (
    CorruptData,
    MalformedDocument,
    SizeMismatch,
    UnknownLayerType,
)
from pytmj.objects import (
    DrawOrder,
    GroupData,
    HAlign,
    ImageLayerData,
    LayerType,
    ObjectGroupData,
    Point,
    TileLayerData,
    VAlign,
)
from pytmj.properties import PropertyType


def tilelayer(**kwargs):
    record = {"type": "tilelayer", "id": 1, "name": "Ground", "width": 2, "height": 2}
    record.update(kwargs)
    return record


class TestLayerFactory(unittest.TestCase):
    def test_known_types(self):
        self.assertEqual(
            set(layer_factory), {"tilelayer", "objectgroup", "imagelayer", "group"}
        )

    def test_tilelayer(self):
        layer = new_layer(tilelayer(data=[1, 2, 3, 4], opacity=0.5, visible=False))
        self.assertIsInstance(layer.layerdata, TileLayerData)
        self.assertEqual(layer.type, LayerType.TILE_LAYER)
        self.assertEqual(layer.get_data(), [1, 2, 3, 4])
        self.assertEqual(layer.id, 1)
        self.assertEqual(layer.name, "Ground")
        self.assertEqual(layer.opacity, 0.5)
        self.assertFalse(layer.visible)

    def test_tilelayer_base64_zlib(self):
        gids = [1, 0x80000002, 3, 0]
        data = base64.b64encode(zlib.compress(struct.pack("<4L", *gids))).decode()
        layer = new_layer(tilelayer(data=data, encoding="base64", compression="zlib"))
        self.assertEqual(layer.get_data(), gids)
        self.assertTrue(layer.is_flipped_horizontally(1))

    def test_tilelayer_without_data(self):
        layer = new_layer(tilelayer(width=10, height=10))
        self.assertTrue(layer.is_tile_layer())
        self.assertEqual(layer.get_data(), [])

    def test_objectgroup(self):
        layer = new_layer(
            {
                "type": "objectgroup",
                "id": 2,
                "name": "Things",
                "draworder": "index",
                "objects": [{"id": 1, "x": 0, "y": 0}],
            }
        )
        self.assertIsInstance(layer.layerdata, ObjectGroupData)
        self.assertEqual(layer.get_draworder(), DrawOrder.INDEX)
        self.assertEqual(len(layer.get_objects()), 1)
        self.assertIsNone(layer.get_data())

    def test_objectgroup_defaults(self):
        layer = new_layer({"type": "objectgroup", "draworder": "sideways"})
        self.assertEqual(layer.get_draworder(), DrawOrder.TOPDOWN)
        self.assertEqual(layer.get_objects(), [])
        self.assertIsNone(layer.id)
        self.assertEqual(layer.name, "")
        self.assertEqual(layer.opacity, 1.0)
        self.assertTrue(layer.visible)
        self.assertEqual((layer.offsetx, layer.offsety), (0.0, 0.0))

    def test_imagelayer(self):
        layer = new_layer(
            {
                "type": "imagelayer",
                "id": 3,
                "name": "Sky",
                "image": "sky.png",
                "transparentcolor": "#00ff00",
            }
        )
        self.assertIsInstance(layer.layerdata, ImageLayerData)
        self.assertEqual(layer.get_image(), "sky.png")
        self.assertEqual(layer.get_transparentcolor(), Color(0, 255, 0, 255))

    def test_group(self):
        layer = new_layer(
            {
                "type": "group",
                "id": 4,
                "name": "Outer",
                "layers": [
                    tilelayer(id=5, data=[0, 0, 0, 0]),
                    {"type": "group", "id": 6, "name": "Inner", "layers": []},
                ],
            }
        )
        self.assertIsInstance(layer.layerdata, GroupData)
        children = layer.get_layers()
        self.assertEqual([child.id for child in children], [5, 6])
        self.assertEqual(children[1].get_layers(), [])

    def test_fields_of_other_kinds_are_ignored(self):
        layer = new_layer(tilelayer(data=[1, 2, 3, 4], image="x.png", objects=[]))
        self.assertTrue(layer.is_tile_layer())
        self.assertIsNone(layer.get_image())
        self.assertIsNone(layer.get_objects())

    def test_properties(self):
        layer = new_layer(
            tilelayer(properties=[{"name": "speed", "type": "float", "value": 5}])
        )
        prop = layer.get_property("speed")
        self.assertEqual(prop.type, PropertyType.FLOAT)
        self.assertEqual(prop.value, 5.0)


class TestLayerErrors(unittest.TestCase):
    def test_unknown_type(self):
        with self.assertRaises(UnknownLayerType) as cm:
            new_layer({"type": "bogus", "id": 7, "name": "Weird"})
        e = cm.exception
        self.assertEqual(e.declared_type, "bogus")
        self.assertEqual(e.id, 7)
        self.assertEqual(e.name, "Weird")
        self.assertEqual(str(e), "invalid layer type bogus (id: 7, name: Weird)")

    def test_unknown_type_without_id(self):
        with self.assertRaises(UnknownLayerType) as cm:
            new_layer({"type": "bogus"})
        self.assertEqual(str(cm.exception), "invalid layer type bogus (id: nil, name: )")

    def test_missing_type(self):
        with self.assertRaises(MalformedDocument):
            new_layer({"id": 1, "name": "Ground", "data": [1]})

    def test_mistyped_field(self):
        with self.assertRaises(MalformedDocument):
            new_layer(tilelayer(width="2"))
        with self.assertRaises(MalformedDocument):
            new_layer(tilelayer(visible=1))

    def test_size_outside_32_bits(self):
        with self.assertRaises(MalformedDocument):
            new_layer(tilelayer(width=2 ** 32, data=[]))

    def test_compressed_layer_too_large(self):
        data = base64.b64encode(zlib.compress(b"\x00" * 4)).decode()
        with self.assertRaises(SizeMismatch):
            new_layer(tilelayer(width=2 ** 31, height=2 ** 31, data=data, compression="zlib"))

    def test_decode_error_names_layer(self):
        data = base64.b64encode(b"\x01\x00\x00\x00").decode()
        with self.assertRaises(SizeMismatch) as cm:
            new_layer(tilelayer(id=9, name="Broken", data=data))
        self.assertEqual(cm.exception.layer_name, "Broken")
        self.assertEqual(cm.exception.layer_id, 9)

    def test_group_child_failure_aborts(self):
        bad = tilelayer(id=2, name="Bad", data="AAAA", compression="zlib")
        with self.assertRaises(CorruptData) as cm:
            new_layer({"type": "group", "id": 1, "layers": [tilelayer(data=[0] * 4), bad]})
        self.assertEqual(cm.exception.layer_name, "Bad")

    def test_nested_unknown_type(self):
        with self.assertRaises(UnknownLayerType):
            new_layer({"type": "group", "layers": [{"type": "chunklayer"}]})


class TestObjects(unittest.TestCase):
    def test_rectangle(self):
        obj = new_object({"id": 1, "x": 1, "y": 2.5, "width": 3, "height": 4})
        self.assertEqual((obj.x, obj.y, obj.width, obj.height), (1.0, 2.5, 3.0, 4.0))
        self.assertFalse(obj.is_tile())
        self.assertFalse(obj.is_ellipse())
        self.assertFalse(obj.is_point())
        self.assertFalse(obj.is_polygon())
        self.assertFalse(obj.is_polyline())
        self.assertFalse(obj.is_text())
        self.assertTrue(obj.visible)
        self.assertEqual(obj.as_points[2], Point(4.0, 6.5))

    def test_shapes(self):
        polygon = new_object({"id": 1, "x": 0, "y": 0, "polygon": [{"x": 1, "y": 2}]})
        self.assertTrue(polygon.is_polygon())
        self.assertEqual(polygon.polygon, [Point(1.0, 2.0)])
        polyline = new_object({"id": 2, "x": 0, "y": 0, "polyline": []})
        self.assertTrue(polyline.is_polyline())
        self.assertTrue(new_object({"id": 3, "x": 0, "y": 0, "ellipse": True}).is_ellipse())
        self.assertTrue(new_object({"id": 4, "x": 0, "y": 0, "point": True}).is_point())

    def test_tile_object(self):
        obj = new_object({"id": 1, "x": 0, "y": 0, "gid": 0x80000005})
        self.assertTrue(obj.is_tile())
        self.assertEqual(obj.gid, 0x80000005)

    def test_text_defaults(self):
        obj = new_object({"id": 1, "x": 0, "y": 0, "text": {"text": "hi"}})
        text = obj.text
        self.assertTrue(obj.is_text())
        self.assertEqual(text.text, "hi")
        self.assertFalse(text.bold)
        self.assertTrue(text.kerning)
        self.assertEqual(text.pixelsize, 16)
        self.assertEqual(text.color, BLACK)
        self.assertEqual(text.fontfamily, "sans-serif")
        self.assertEqual(text.halign, HAlign.LEFT)
        self.assertEqual(text.valign, VAlign.TOP)

    def test_text_requires_text(self):
        with self.assertRaises(MalformedDocument):
            new_object({"id": 1, "x": 0, "y": 0, "text": {"bold": True}})

    def test_required_fields(self):
        for record in ({"x": 0, "y": 0}, {"id": 1, "y": 0}, {"id": 1, "x": 0}):
            with self.assertRaises(MalformedDocument):
                new_object(record)

    def test_class_is_read_as_type(self):
        self.assertEqual(new_object({"id": 1, "x": 0, "y": 0, "class": "door"}).type, "door")
        self.assertEqual(new_object({"id": 1, "x": 0, "y": 0, "type": "door"}).type, "door")


class TestTilesets(unittest.TestCase):
    record = {
        "firstgid": 1,
        "image": "tiles.png",
        "imagewidth": 64,
        "imageheight": 32,
        "tilewidth": 16,
        "tileheight": 16,
        "tilecount": 8,
        "columns": 4,
    }

    def test_minimal(self):
        tileset = new_tileset(self.record)
        self.assertEqual(tileset.margin, 0)
        self.assertEqual(tileset.spacing, 0)
        self.assertEqual(tileset.tiles, [])
        self.assertIsNone(tileset.grid)
        self.assertIsNone(tileset.tileoffset)
        self.assertEqual(tileset.rows(), 2)

    def test_required_fields(self):
        for key in self.record:
            record = dict(self.record)
            del record[key]
            with self.assertRaises(MalformedDocument):
                new_tileset(record)

    def test_external_tileset(self):
        with self.assertRaises(MalformedDocument):
            new_tileset({"firstgid": 1, "source": "tiles.tsj"})

    def test_tile_collision_layer_has_no_id(self):
        tile = new_tile(
            {
                "id": 0,
                "objectgroup": {
                    "type": "objectgroup",
                    "name": "",
                    "objects": [{"id": 1, "x": 0, "y": 0}],
                },
            }
        )
        self.assertTrue(tile.objectgroup.is_object_group())
        self.assertIsNone(tile.objectgroup.id)

    def test_tile_requires_id(self):
        with self.assertRaises(MalformedDocument):
            new_tile({"type": "grass"})
