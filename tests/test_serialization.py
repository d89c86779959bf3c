"""
Tests for JSON/YAML encoding and decoding, file helpers, copy and must.
"""

import json
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

from DotConfig import (
    Config,
    load_file,
    must,
    parse_json,
    parse_json_file,
    parse_yaml,
    parse_yaml_file,
    render_json,
    render_yaml,
    save_file,
)
from DotConfig.config.serialization import normalize_value
from DotConfig.exceptions import NoSuchKeyError, SerializationError, UnsupportedValueError

YAML_STRING = """
map:
  key0: true
  key4: 4.2
  key6: 42
  key8: value8
  empty: null
list:
  - "43"
  - 4.3
config:
  server:
    - www.google.com
    - www.cnn.com
  admin:
    - username: calvin
      password: yukon
"""


class TestRoundTrip(unittest.TestCase):
    """Test cases for render/parse round trips."""

    def setUp(self):
        self.config = parse_yaml(YAML_STRING)

    def test_yaml_round_trip(self):
        text = render_yaml(self.config.root)
        self.assertEqual(render_yaml(parse_yaml(text).root), text)

    def test_json_round_trip(self):
        text = render_json(self.config.root)
        self.assertEqual(render_json(parse_json(text).root), text)

    def test_json_and_yaml_agree(self):
        from_json = parse_json(render_json(self.config.root))
        self.assertEqual(from_json.root, self.config.root)
        self.assertEqual(from_json.get_string("config.admin.0.username"), "calvin")

    def test_render_json_is_compact_and_sorted(self):
        self.assertEqual(render_json({"b": 1, "a": [True, None]}), '{"a":[true,null],"b":1}')

    def test_end_to_end(self):
        config = parse_yaml("a:\n  b: 1\n")
        self.assertEqual(config.get_int("a.b"), 1)
        config.set("a.c", 2)
        reparsed = parse_yaml(render_yaml(config.root))
        self.assertEqual(reparsed.get_int("a.b"), 1)
        self.assertEqual(reparsed.get_int("a.c"), 2)

    def test_complex_keys(self):
        config = parse_yaml("""
root:
  field1: value1
  field.something.2: value2
  "field number 3":
    field4: value3
  field.something.4:
    field5: value5
    field.6: value6
""")
        self.assertEqual(config.safe_string("root.field1"), "value1")
        self.assertEqual(config.safe_string("root.[field.something.2]"), "value2")
        self.assertEqual(config.safe_string("root.field number 3.field4"), "value3")
        self.assertEqual(config.safe_string("root.[field.something.4].field5"), "value5")
        self.assertEqual(config.safe_string("root.[field.something.4].[field.6]"), "value6")


class TestDecoding(unittest.TestCase):
    """Test cases for decode-time validation."""

    def test_timestamps_stay_strings(self):
        config = parse_yaml("released: 2024-01-31\n")
        self.assertEqual(config.get_string("released"), "2024-01-31")
        self.assertIn("'2024-01-31'", render_yaml(config.root))

    def test_non_string_key(self):
        with self.assertRaises(UnsupportedValueError) as ctx:
            parse_yaml("map:\n  1: one\n")
        self.assertIn("1", str(ctx.exception))

    def test_unsupported_value(self):
        with self.assertRaises(UnsupportedValueError):
            parse_yaml("blob: !!binary aGVsbG8=\n")

    def test_unsupported_value_is_a_serialization_error(self):
        with self.assertRaises(SerializationError):
            normalize_value({"a": {1, 2}})

    def test_invalid_yaml(self):
        with self.assertRaises(SerializationError) as ctx:
            parse_yaml("a: [1, 2\n")
        self.assertIsNotNone(ctx.exception.cause)

    @unittest.skipUnless(hasattr(sys, "get_int_max_str_digits"), "no integer digit limit")
    def test_integer_past_the_digit_limit(self):
        digits = sys.get_int_max_str_digits()
        if digits == 0:
            self.skipTest("integer digit limit disabled")
        with self.assertRaises(SerializationError):
            parse_yaml("n: " + "9" * (digits + 1))
        with self.assertRaises(SerializationError):
            render_yaml({"n": 10 ** (digits + 1)})
        with self.assertRaises(SerializationError):
            Config({"n": 10 ** (digits + 1)}).copy()

    def test_large_integer_within_the_limit(self):
        self.assertEqual(parse_yaml("n: " + "9" * 400).root["n"], 10 ** 400 - 1)

    def test_invalid_json(self):
        with self.assertRaises(SerializationError):
            parse_json("{'a': 1}")

    def test_json_rejects_nan(self):
        with self.assertRaises(SerializationError):
            render_json({"a": float("nan")})

    def test_empty_document(self):
        self.assertIsNone(parse_yaml("").root)


class TestFiles(unittest.TestCase):
    """Test cases for reading and writing configuration files."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_yaml_file(self):
        path = Path(self.temp_dir) / "settings.yml"
        path.write_text(YAML_STRING, encoding="utf-8")
        self.assertEqual(parse_yaml_file(path).get_int("map.key6"), 42)
        self.assertEqual(load_file(str(path)).get_int("map.key6"), 42)

    def test_json_file(self):
        path = Path(self.temp_dir) / "settings.json"
        path.write_text(json.dumps({"a": {"b": [1, 2]}}), encoding="utf-8")
        self.assertEqual(parse_json_file(path).get_int("a.b.1"), 2)
        self.assertEqual(load_file(path).get_list("a.b"), [1, 2])

    def test_save_and_load(self):
        config = parse_yaml(YAML_STRING)
        for name in ("out.yaml", "nested/out.json"):
            with self.subTest(name=name):
                path = Path(self.temp_dir) / name
                save_file(config, path)
                self.assertEqual(load_file(path).root, config.root)

    def test_unsupported_suffix(self):
        path = Path(self.temp_dir) / "settings.ini"
        path.write_text("[a]\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_file(path)
        with self.assertRaises(ValueError):
            save_file(Config({}), path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_file(os.path.join(self.temp_dir, "missing.yml"))


class TestCopy(unittest.TestCase):
    """Test cases for deep copies."""

    def setUp(self):
        self.config = parse_yaml(YAML_STRING)

    def test_copy_is_independent(self):
        copied = self.config.copy()
        copied.set("map.key6", 43)
        self.assertEqual(self.config.get_int("map.key6"), 42)
        self.assertNotEqual(render_yaml(copied.root), render_yaml(self.config.root))

    def test_copy_subtree(self):
        by_parts = self.config.copy("config", "server")
        by_path = self.config.copy("config.server")
        self.assertEqual(by_parts.safe_string("0"), "www.google.com")
        self.assertEqual(by_path.safe_string("0"), "www.google.com")
        self.assertEqual(render_yaml(by_parts.root), render_yaml(by_path.root))
        self.assertIsNot(by_path.root, self.config.get_list("config.server"))

    def test_copy_ignores_empty_parts(self):
        self.assertEqual(self.config.copy("", "map", "").get_int("key6"), 42)

    def test_copy_missing_path(self):
        with self.assertRaises(NoSuchKeyError):
            self.config.copy("config.missing")

    def test_copy_rejects_unsupported_values(self):
        with self.assertRaises(SerializationError):
            Config({"a": object()}).copy()


class TestSubHandles(unittest.TestCase):
    """Test cases for handles returned by Config.get."""

    def test_child_set_is_visible_in_parent(self):
        config = parse_yaml(YAML_STRING)
        admin = config.get("config.admin.0")
        admin.set("username", "susie")
        admin.set("roles.0", "root")
        self.assertEqual(config.get_string("config.admin.0.username"), "susie")
        self.assertEqual(config.get_string("config.admin.0.roles.0"), "root")

    def test_child_sequence_growth_is_visible(self):
        config = parse_yaml(YAML_STRING)
        config.get("config.server").set("3", "www.python.org")
        self.assertEqual(len(config.get_list("config.server")), 4)


class TestMust(unittest.TestCase):
    """Test cases for the must() initialization helper."""

    def test_returns_config(self):
        config = must(parse_yaml, YAML_STRING)
        self.assertIsInstance(config, Config)
        self.assertEqual(config.get_string("map.key8"), "value8")

    def test_exits_on_error(self):
        with self.assertLogs("DotConfig.config.manager", level="CRITICAL"):
            with self.assertRaises(SystemExit) as ctx:
                must(parse_yaml, "a: [1, 2\n")
        self.assertEqual(ctx.exception.code, 1)
        self.assertIsInstance(ctx.exception.__cause__, SerializationError)


if __name__ == "__main__":
    unittest.main()
