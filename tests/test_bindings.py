"""
Tests for environment variable and command-line overrides.
"""

import os
import unittest
from unittest.mock import patch

import click

from DotConfig import Config, parse_yaml
from DotConfig.config.bindings import apply_env, build_command, env_var_name

YAML_STRING = """
map:
  key0: true
  key6: 42
  key8: value8
list:
  - item0
  - 43
"""

FLAG_YAML = """
map:
  - listmap1:
      nested1: value1
      nested2: value2
    listmap2: value3
"""


class TestEnv(unittest.TestCase):
    """Test cases for Config.env."""

    def setUp(self):
        self.config = parse_yaml(YAML_STRING)

    def test_env_var_name(self):
        self.assertEqual(env_var_name(["map", "key8"]), "MAP_KEY8")
        self.assertEqual(env_var_name(["list", "0"], "app"), "APP_LIST_0")

    def test_env_overrides(self):
        self.config.set("map.key8", "should be overwritten")
        with patch.dict(os.environ, {"MAP_KEY8": "test", "LIST_1": "44"}):
            self.assertIs(self.config.env(), self.config)
        self.assertEqual(self.config.get_string("map.key8"), "test")
        self.assertEqual(self.config.get("list.1").root, "44")
        self.assertEqual(self.config.get_int("list.1"), 44)

    def test_env_prefix(self):
        self.config.set("map.key8", "should be overwritten")
        with patch.dict(os.environ, {"PREFIX_MAP_KEY8": "test", "MAP_KEY6": "7"}):
            self.config.env("prefix")
        self.assertEqual(self.config.get_string("map.key8"), "test")
        self.assertEqual(self.config.get_int("map.key6"), 42)

    def test_env_does_not_add_keys(self):
        with patch.dict(os.environ, {"MAP_NEWKEY": "x"}):
            self.config.env()
        self.assertNotIn("newkey", self.config.get_map("map"))

    def test_empty_value_overrides(self):
        with patch.dict(os.environ, {"MAP_KEY0": ""}):
            count = apply_env(self.config, "")
        self.assertEqual(count, 1)
        self.assertEqual(self.config.get_string("map.key0"), "")

    def test_string_values_convert_on_read(self):
        with patch.dict(os.environ, {"MAP_KEY0": "false"}):
            self.config.env()
        self.assertIs(self.config.get_bool("map.key0"), False)


class TestArgs(unittest.TestCase):
    """Test cases for Config.args and Config.flag."""

    def setUp(self):
        self.config = parse_yaml(FLAG_YAML)

    def test_single_dash_option(self):
        self.config.args(["prog", "-map-0-listmap2", "other"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.config.get_string("map.0.listmap2"), "other")
        self.assertEqual(self.config.get_string("map.0.listmap1.nested1"), "value1")

    def test_double_dash_equals_option(self):
        self.config.args(["prog", "--map-0-listmap1-nested2=changed"])
        self.assertEqual(self.config.get_string("map.0.listmap1.nested2"), "changed")
        self.assertEqual(self.config.get_string("map.0.listmap2"), "value3")

    def test_no_arguments(self):
        before = self.config.copy().root
        self.config.args(["prog"])
        self.config.args([])
        self.assertEqual(self.config.root, before)
        self.assertIsNone(self.config.last_error)

    def test_unknown_option(self):
        self.config.args(["prog", "-map-0-listmap2", "other", "--unknown", "x"])
        self.assertIsInstance(self.config.last_error, click.UsageError)
        self.assertEqual(self.config.get_string("map.0.listmap2"), "value3")

    def test_last_error_resets(self):
        self.config.args(["prog", "--unknown"])
        self.assertIsNotNone(self.config.last_error)
        self.config.args(["prog", "-map-0-listmap2", "other"])
        self.assertIsNone(self.config.last_error)

    def test_extra_positional_arguments(self):
        self.config.args(["prog", "-map-0-listmap2", "other", "extra"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.config.get_string("map.0.listmap2"), "other")

    def test_options_after_positional_argument_are_ignored(self):
        self.config.args(["prog", "extra", "-map-0-listmap2", "other"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.config.get_string("map.0.listmap2"), "value3")

    def test_double_dash_ends_options(self):
        self.config.args(["prog", "--", "-map-0-listmap2", "other"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.config.get_string("map.0.listmap2"), "value3")

    def test_options_default_to_current_values(self):
        command, key_paths = build_command(self.config, "prog")
        defaults = {key_paths[param.name]: param.default for param in command.params}
        self.assertEqual(defaults, {
            "map.0.listmap1.nested1": "value1",
            "map.0.listmap1.nested2": "value2",
            "map.0.listmap2": "value3",
        })

    def test_flag(self):
        with patch("sys.argv", ["prog", "-map-0-listmap2", "other"]):
            self.assertIs(self.config.flag(), self.config)
        self.assertEqual(self.config.get_string("map.0.listmap2"), "other")

    def test_flag_exits_on_bad_option(self):
        with patch("sys.argv", ["prog", "--unknown"]):
            with self.assertRaises(SystemExit) as ctx:
                self.config.flag()
        self.assertEqual(ctx.exception.code, 2)



class TestSingleLetterArgs(unittest.TestCase):
    """Test cases for options named after one-letter keys."""

    def setUp(self):
        self.config = Config({"a": "x", "ab": "y", "b": "z"})

    def values(self):
        return self.config.get_string("a"), self.config.get_string("ab"), self.config.get_string("b")

    def test_single_dash_equals(self):
        self.config.args(["prog", "-a=1", "-ab=2"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.values(), ("1", "2", "z"))

    def test_single_dash_separate_value(self):
        self.config.args(["prog", "-a", "1", "-b", "3"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.values(), ("1", "y", "3"))

    def test_double_dash_equals(self):
        self.config.args(["prog", "--a=1", "--b=3"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.values(), ("1", "y", "3"))

    def test_value_that_looks_like_an_option(self):
        self.config.args(["prog", "-ab", "-b=3"])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.values(), ("x", "-b=3", "z"))

    def test_empty_value(self):
        self.config.args(["prog", "-a="])
        self.assertIsNone(self.config.last_error)
        self.assertEqual(self.values(), ("", "y", "z"))

if __name__ == "__main__":
    unittest.main()
