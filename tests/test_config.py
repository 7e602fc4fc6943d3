"""설정 로더 / 명령행 진입점 테스트."""

import json
import tempfile
import unittest
from pathlib import Path

from PIL import Image, ImageDraw

import main
from config import _DEFAULTS, load_config


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_returns_defaults(self):
        config = load_config(self.tmp / "missing.json")
        self.assertEqual(config, _DEFAULTS)
        config["background"]["invert"] = True
        self.assertFalse(_DEFAULTS["background"]["invert"])

    def test_partial_override_is_merged(self):
        path = self.tmp / "config.json"
        path.write_text(json.dumps({"background": {"upper": "#FF0000"}, "output": {"width": 12}}), encoding="utf-8")
        config = load_config(path)
        self.assertEqual(config["background"]["upper"], "#FF0000")
        self.assertEqual(config["background"]["gradient_type"], "linear")
        self.assertEqual(config["output"]["width"], 12)
        self.assertEqual(config["output"]["height"], 64)
        self.assertIsNone(_DEFAULTS["background"]["upper"])


    def test_section_must_be_an_object(self):
        path = self.tmp / "config.json"
        path.write_text(json.dumps({"background": "radial"}), encoding="utf-8")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_top_level_must_be_an_object(self):
        path = self.tmp / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_unknown_key_is_kept_with_warning(self):
        path = self.tmp / "config.json"
        path.write_text(json.dumps({"output": {"dpi": 2}}), encoding="utf-8")
        with self.assertLogs("config", level="WARNING"):
            config = load_config(path)
        self.assertEqual(config["output"]["dpi"], 2)
        self.assertEqual(config["output"]["width"], 64)


class TestMain(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config = str(self.tmp / "missing.json")

    def tearDown(self):
        self._tmp.cleanup()

    def test_renders_png_from_image(self):
        src = self.tmp / "ref.png"
        img = Image.new("RGB", (8, 8), (0, 0, 255))
        ImageDraw.Draw(img).rectangle([(0, 0), (7, 3)], fill=(255, 0, 0))
        img.save(src)
        out = self.tmp / "bg.png"

        code = main.main([str(src), "-o", str(out), "--config", self.config,
                          "--width", "16", "--height", "8", "--invert"])

        self.assertEqual(code, 0)
        with Image.open(out) as rendered:
            self.assertEqual(rendered.size, (16, 8))
            top = rendered.convert("RGBA").getpixel((0, 0))
        self.assertGreater(top[2], 200)

    def test_colors_only(self):
        out = self.tmp / "bg.png"
        code = main.main(["-o", str(out), "--config", self.config, "--upper", "#00FF00", "--type", "radial"])
        self.assertEqual(code, 0)
        self.assertTrue(out.exists())

    def test_nothing_to_derive_from(self):
        out = self.tmp / "bg.png"
        code = main.main(["-o", str(out), "--config", self.config])
        self.assertEqual(code, 1)
        self.assertFalse(out.exists())


if __name__ == "__main__":
    unittest.main()
