"""
core/tests/test_config_service.py

Layering and typing of the configuration service.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from core.config.config_service import ConfigService


class TestConfigService(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.user_ini = Path(self._tmp.name) / "config.ini"
        clean_env = {k: v for k, v in os.environ.items() if not k.startswith("FIELDSTAMP_")}
        self._env = mock.patch.dict(os.environ, clean_env, clear=True)
        self._env.start()

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def test_defaults(self) -> None:
        cfg = ConfigService(user_ini=self.user_ini)
        self.assertEqual(cfg.fonts.standard_font, "Helvetica")
        self.assertEqual(cfg.fonts.handwriting_font_path, "")
        self.assertEqual(cfg.font_sizes.min_standard, 8.0)
        self.assertEqual(cfg.font_sizes.default_standard, 15.0)
        self.assertEqual(cfg.font_sizes.min_handwriting, 20.0)
        self.assertEqual(cfg.font_sizes.default_handwriting, 50.0)

    def test_env_overrides_defaults(self) -> None:
        os.environ["FIELDSTAMP_FONTSIZES__MIN_STANDARD"] = "6"
        cfg = ConfigService(user_ini=self.user_ini)
        self.assertEqual(cfg.font_sizes.min_standard, 6.0)
        self.assertEqual(cfg.meta_source("FontSizes", "min_standard")["layer"], "env")

    def test_user_ini_wins_over_env(self) -> None:
        os.environ["FIELDSTAMP_FONTS__STANDARD_FONT"] = "Courier"
        self.user_ini.write_text("[Fonts]\nstandard_font = Times-Roman\n", encoding="utf-8")
        cfg = ConfigService(user_ini=self.user_ini)
        self.assertEqual(cfg.fonts.standard_font, "Times-Roman")
        self.assertEqual(cfg.meta_source("Fonts", "standard_font")["layer"], "user")

    def test_get_casts_and_missing_is_none(self) -> None:
        cfg = ConfigService(user_ini=self.user_ini)
        self.assertEqual(cfg.get("FontSizes", "default_handwriting", cast=float), 50.0)
        self.assertIsNone(cfg.get("Fonts", "does_not_exist"))

    def test_sections_are_typed(self) -> None:
        os.environ["FIELDSTAMP_FONT_SIZES__DEFAULT_HANDWRITING"] = "42.5"
        cfg = ConfigService(user_ini=self.user_ini)
        self.assertIsInstance(cfg.font_sizes.default_handwriting, float)
        self.assertEqual(cfg.font_sizes.default_handwriting, 42.5)
        self.assertIsInstance(cfg.fonts.handwriting_font_path, str)
        self.assertEqual(cfg.get("FontSizes", "min_handwriting", cast=int), 20)

    def test_reload_picks_up_changes(self) -> None:
        cfg = ConfigService(user_ini=self.user_ini)
        self.user_ini.write_text("[FontSizes]\ndefault_standard = 12\n", encoding="utf-8")
        cfg.reload()
        self.assertEqual(cfg.font_sizes.default_standard, 12.0)


if __name__ == "__main__":
    unittest.main()
