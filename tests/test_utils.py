import unittest

from pytmj.exceptions import MalformedDocument
from pytmj.utils import (
    GID_MASK,
    GID_TRANS_FLIPX,
    GID_TRANS_FLIPY,
    GID_TRANS_ROT,
    REQUIRED,
    TileFlags,
    as_bool,
    as_float,
    as_int,
    as_list,
    as_str,
    as_uint,
    decode_gid,
    getdefault,
    gid_flipped_diagonally,
    gid_flipped_horizontally,
    gid_flipped_hvd,
    gid_flipped_vertically,
    gid_without_flags,
)


class TestGidFlags(unittest.TestCase):
    def test_flag_bits(self):
        self.assertEqual(GID_TRANS_FLIPX, 0x80000000)
        self.assertEqual(GID_TRANS_FLIPY, 0x40000000)
        self.assertEqual(GID_TRANS_ROT, 0x20000000)

    def test_without_flags(self):
        self.assertEqual(gid_without_flags(0x80000003), 3)
        self.assertEqual(gid_without_flags(0xE0000006), 6)
        self.assertEqual(gid_without_flags(7), 7)
        self.assertEqual(gid_without_flags(0), 0)

    def test_flags_and_id_rebuild_gid(self):
        for gid in (0, 1, 0x1FFFFFFF, 0x80000001, 0x40000010, 0x20000100, 0xFFFFFFFF):
            self.assertEqual(gid_without_flags(gid) | (gid & GID_MASK), gid)

    def test_single_flags(self):
        self.assertTrue(gid_flipped_horizontally(0x80000001))
        self.assertFalse(gid_flipped_vertically(0x80000001))
        self.assertFalse(gid_flipped_diagonally(0x80000001))
        self.assertTrue(gid_flipped_vertically(0x40000001))
        self.assertTrue(gid_flipped_diagonally(0x20000001))

    def test_hvd(self):
        self.assertEqual(gid_flipped_hvd(1), (False, False, False))
        self.assertEqual(gid_flipped_hvd(0xA0000001), (True, False, True))
        self.assertEqual(gid_flipped_hvd(0xE0000001), (True, True, True))

    def test_decode_gid(self):
        self.assertEqual(decode_gid(5), (5, TileFlags(False, False, False)))
        gid, flags = decode_gid(0xC0000005)
        self.assertEqual(gid, 5)
        self.assertTrue(flags.flipped_horizontally)
        self.assertTrue(flags.flipped_vertically)
        self.assertFalse(flags.flipped_diagonally)


class TestGetDefault(unittest.TestCase):
    d = {"key": "value", "int": 1, "float": 2.5}

    def test_get_key(self):
        get = getdefault(self.d)
        self.assertEqual(get("key"), "value")

    def test_get_missing_returns_default(self):
        get = getdefault(self.d)
        self.assertEqual(get("not_key"), None)
        self.assertEqual(get("not_key", default="default"), "default")

    def test_get_convert_type(self):
        get = getdefault(self.d)
        self.assertEqual(get("int", as_float), 1.0)
        self.assertIsInstance(get("int", as_float), float)

    def test_get_with_type_doesnt_convert_default(self):
        get = getdefault(self.d)
        self.assertEqual(get("not_int", as_int, None), None)

    def test_missing_required_raises(self):
        get = getdefault(self.d, "thing")
        with self.assertRaises(MalformedDocument) as cm:
            get("width", as_int, REQUIRED)
        self.assertIn("width", str(cm.exception))
        self.assertIn("thing", str(cm.exception))

    def test_wrong_type_raises(self):
        get = getdefault(self.d)
        with self.assertRaises(MalformedDocument):
            get("key", as_int)
        with self.assertRaises(MalformedDocument):
            get("float", as_int)

    def test_not_an_object_raises(self):
        with self.assertRaises(MalformedDocument):
            getdefault([1, 2, 3], "map")


class TestCasts(unittest.TestCase):
    def test_bool_is_not_a_number(self):
        for cast in (as_int, as_uint, as_float):
            with self.assertRaises(TypeError):
                cast(True)

    def test_as_int_accepts_integral_float(self):
        self.assertEqual(as_int(3.0), 3)
        self.assertIsInstance(as_int(3.0), int)
        with self.assertRaises(ValueError):
            as_int(3.5)

    def test_as_uint_rejects_negative(self):
        self.assertEqual(as_uint(0), 0)
        with self.assertRaises(ValueError):
            as_uint(-1)
        self.assertEqual(as_uint(2 ** 32 - 1), 2 ** 32 - 1)
        with self.assertRaises(ValueError):
            as_uint(2 ** 32)

    def test_as_bool(self):
        self.assertIs(as_bool(False), False)
        with self.assertRaises(TypeError):
            as_bool(0)

    def test_as_str_and_list(self):
        self.assertEqual(as_str("a"), "a")
        self.assertEqual(as_list([1]), [1])
        with self.assertRaises(TypeError):
            as_str(1)
        with self.assertRaises(TypeError):
            as_list({})
