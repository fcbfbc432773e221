import unittest

from pytmj.color import DEFAULT_COLOR, Color
from pytmj.exceptions import MalformedDocument
from pytmj.properties import (
    HasProperties,
    Property,
    PropertyType,
    parse_properties,
    resolve_property_value,
)


class TestResolvePropertyValue(unittest.TestCase):
    def test_bool(self):
        self.assertEqual(resolve_property_value(True, "bool"), (PropertyType.BOOL, True))
        # booleans are not numbers, whatever the declared type
        self.assertEqual(resolve_property_value(False, "int"), (PropertyType.BOOL, False))

    def test_int(self):
        self.assertEqual(resolve_property_value(42, "int"), (PropertyType.INT, 42))
        self.assertEqual(resolve_property_value(-7, "string"), (PropertyType.INT, -7))

    def test_int_declared_float(self):
        kind, value = resolve_property_value(5, "float")
        self.assertEqual(kind, PropertyType.FLOAT)
        self.assertEqual(value, 5.0)
        self.assertIsInstance(value, float)

    def test_int_outside_32_bits(self):
        kind, value = resolve_property_value(2 ** 31, "int")
        self.assertEqual(kind, PropertyType.FLOAT)
        self.assertEqual(value, 2147483648.0)
        self.assertEqual(resolve_property_value(-(2 ** 31), "int"), (PropertyType.INT, -(2 ** 31)))

    def test_float(self):
        self.assertEqual(resolve_property_value(1.5, "float"), (PropertyType.FLOAT, 1.5))
        self.assertEqual(resolve_property_value(1.5, "int"), (PropertyType.FLOAT, 1.5))

    def test_string_and_file(self):
        self.assertEqual(resolve_property_value("abc", "string"), (PropertyType.STRING, "abc"))
        self.assertEqual(resolve_property_value("a.png", "file"), (PropertyType.FILE, "a.png"))

    def test_color(self):
        self.assertEqual(
            resolve_property_value("#ff00ff00", "color"),
            (PropertyType.COLOR, Color(0, 255, 0, 255)),
        )

    def test_unknown_string_type_reads_as_color(self):
        self.assertEqual(
            resolve_property_value("#102030", "class"),
            (PropertyType.COLOR, Color(0x10, 0x20, 0x30, 255)),
        )

    def test_bad_color_falls_back(self):
        self.assertEqual(
            resolve_property_value("notahexcolor", "color"),
            (PropertyType.COLOR, DEFAULT_COLOR),
        )

    def test_color_instance_passes_through(self):
        color = Color(1, 2, 3, 4)
        self.assertEqual(resolve_property_value(color, "string"), (PropertyType.COLOR, color))

    def test_other_json_values_become_strings(self):
        self.assertEqual(resolve_property_value(None, "string"), (PropertyType.STRING, "null"))
        self.assertEqual(resolve_property_value([1, 2], "string"), (PropertyType.STRING, "[1, 2]"))
        self.assertEqual(
            resolve_property_value({"a": 1}, "class"), (PropertyType.STRING, '{"a": 1}')
        )


class TestProperty(unittest.TestCase):
    def test_getters_match_type(self):
        prop = Property("speed", PropertyType.INT, 3)
        self.assertEqual(prop.get_int(), 3)
        self.assertIsNone(prop.get_float())
        self.assertIsNone(prop.get_string())
        self.assertIsNone(prop.get_bool())
        self.assertIsNone(prop.get_color())
        self.assertIsNone(prop.get_file())

    def test_each_getter(self):
        self.assertEqual(Property("a", PropertyType.STRING, "s").get_string(), "s")
        self.assertEqual(Property("a", PropertyType.FLOAT, 1.0).get_float(), 1.0)
        self.assertIs(Property("a", PropertyType.BOOL, False).get_bool(), False)
        self.assertEqual(Property("a", PropertyType.FILE, "f").get_file(), "f")
        self.assertEqual(
            Property("a", PropertyType.COLOR, DEFAULT_COLOR).get_color(), DEFAULT_COLOR
        )

    def test_type_as_string(self):
        self.assertEqual(Property("a", PropertyType.COLOR, DEFAULT_COLOR).type_as_string(), "color")
        self.assertEqual(Property("a", PropertyType.INT, 1).type_as_string(), "int")
        self.assertEqual(str(PropertyType.FILE), "file")


class Holder(HasProperties):
    def __init__(self, properties):
        self.properties = properties


class TestParseProperties(unittest.TestCase):
    def test_parse_in_order(self):
        props = parse_properties(
            [
                {"name": "b", "type": "bool", "value": True},
                {"name": "f", "type": "float", "value": 5},
                {"name": "s", "value": "text"},
            ]
        )
        self.assertEqual(
            props,
            [
                Property("b", PropertyType.BOOL, True),
                Property("f", PropertyType.FLOAT, 5.0),
                Property("s", PropertyType.STRING, "text"),
            ],
        )

    def test_none_gives_empty_list(self):
        self.assertEqual(parse_properties(None), [])

    def test_missing_name_or_value(self):
        with self.assertRaises(MalformedDocument):
            parse_properties([{"type": "int", "value": 1}])
        with self.assertRaises(MalformedDocument):
            parse_properties([{"name": "x", "type": "int"}])

    def test_has_properties(self):
        holder = Holder(
            parse_properties(
                [
                    {"name": "a", "type": "int", "value": 1},
                    {"name": "a", "type": "int", "value": 2},
                    {"name": "b", "type": "string", "value": "x"},
                ]
            )
        )
        self.assertEqual(holder.get_property("a"), Property("a", PropertyType.INT, 1))
        self.assertIsNone(holder.get_property("A"))
        self.assertEqual(holder.get_property_value("b"), "x")
        self.assertIsNone(holder.get_property_value("missing"))
        self.assertEqual(holder.properties_as_dict(), {"a": 2, "b": "x"})
