"""Tests for config persistence and input sanitization.

Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rbentries import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_defaults_when_config_is_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("rbentries.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertFalse(config.load_sort())
                self.assertTrue(config.load_skip_empty_dirs())
                self.assertEqual(config.load_log_level(), logging.WARNING)

    def test_preferences_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("rbentries.config.CONFIG_PATH", config_path):
                config.save_sort(True)
                config.save_skip_empty_dirs(False)
                config.save_log_level("debug")

                self.assertEqual(
                    config.load_config(),
                    {"sort": True, "skip_empty_dirs": False, "log_level": "DEBUG"},
                )
                self.assertTrue(config.load_sort())
                self.assertFalse(config.load_skip_empty_dirs())
                self.assertEqual(config.load_log_level(), logging.DEBUG)

    def test_malformed_values_fall_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("rbentries.config.CONFIG_PATH", config_path):
                config.save_config({"sort": "yes", "skip_empty_dirs": 0, "log_level": "LOUD"})

                self.assertFalse(config.load_sort())
                self.assertTrue(config.load_skip_empty_dirs())
                self.assertEqual(config.load_log_level(), logging.WARNING)

    def test_non_object_json_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2]\n", encoding="utf-8")
            with mock.patch("rbentries.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_unknown_log_level_is_not_saved(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("rbentries.config.CONFIG_PATH", config_path):
                config.save_log_level("chatty")
                self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
