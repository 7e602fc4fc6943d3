"""지배 색상 추출 테스트 — 메모리 상의 Pillow 이미지 / 가짜 픽셀 소스 사용."""

import unittest

from PIL import Image, ImageDraw

from blending.dominant import DominatingBitmapColors, ImagePixelSource, InvalidImageError, as_pixel_source
from blending.pair import ColorPair

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)


def _split_image(width: int, height: int, top: tuple, bottom: tuple) -> Image.Image:
    img = Image.new("RGBA", (width, height), bottom)
    ImageDraw.Draw(img).rectangle([(0, 0), (width - 1, height // 2 - 1)], fill=top)
    return img


class _GridSource:
    """행 리스트로 만든 픽셀 소스."""

    def __init__(self, rows):
        self._rows = rows
        self.height = len(rows)
        self.width = len(rows[0]) if rows else 0

    def get_pixel(self, x, y):
        return self._rows[y][x]


class TestDominatingBitmapColors(unittest.TestCase):

    def test_uniform_image_returns_exact_color(self):
        color = (10, 20, 30, 255)
        source = ImagePixelSource(Image.new("RGBA", (7, 5), color))
        pair = DominatingBitmapColors(source).get_colors()
        self.assertEqual(pair, ColorPair(color, color))

    def test_red_top_blue_bottom(self):
        source = ImagePixelSource(_split_image(6, 8, RED, BLUE))
        pair = DominatingBitmapColors(source).get_colors()
        self.assertEqual(pair.upper, RED)
        self.assertEqual(pair.lower, BLUE)

    def test_rgb_image_is_treated_as_opaque(self):
        img = Image.new("RGB", (4, 4), (0, 128, 0))
        pair = DominatingBitmapColors(as_pixel_source(img)).get_colors()
        self.assertEqual(pair.upper, (0, 128, 0, 255))

    def test_majority_bucket_wins(self):
        rows = [
            [RED, GREEN, GREEN],
            [GREEN, BLUE, RED],
            [BLUE, BLUE, RED],
            [BLUE, RED, BLUE],
        ]
        pair = DominatingBitmapColors(_GridSource(rows)).get_colors()
        self.assertEqual(pair.upper, GREEN)
        self.assertEqual(pair.lower, BLUE)

    def test_similar_colors_share_a_bucket(self):
        gray_a = (100, 100, 100, 255)
        gray_b = (101, 101, 101, 255)
        white = (250, 250, 250, 255)
        rows = [
            [gray_a, white, gray_b],
            [white, white, white],
        ]
        pair = DominatingBitmapColors(_GridSource(rows)).get_colors()
        # 100과 101은 상위 4비트가 같으므로 같은 버킷, 평균은 내림
        self.assertEqual(pair.upper, gray_a)
        self.assertEqual(pair.lower, white)

    def test_full_precision_separates_similar_colors(self):
        rows = [
            [(100, 100, 100, 255), (101, 101, 101, 255), (101, 101, 101, 255)],
            [(0, 0, 0, 255), (0, 0, 0, 255), (0, 0, 0, 255)],
        ]
        pair = DominatingBitmapColors(_GridSource(rows), quantize_bits=8).get_colors()
        self.assertEqual(pair.upper, (101, 101, 101, 255))

    def test_tie_goes_to_first_scanned_bucket(self):
        rows = [
            [GREEN, RED],
            [BLUE, GREEN],
        ]
        pair = DominatingBitmapColors(_GridSource(rows)).get_colors()
        self.assertEqual(pair.upper, GREEN)
        self.assertEqual(pair.lower, BLUE)

    def test_single_row_uses_same_region(self):
        rows = [[RED, RED, BLUE]]
        pair = DominatingBitmapColors(_GridSource(rows)).get_colors()
        self.assertEqual(pair, ColorPair(RED, RED))

    def test_deterministic_and_input_untouched(self):
        img = _split_image(5, 6, RED, BLUE)
        before = img.tobytes()
        first = DominatingBitmapColors(as_pixel_source(img)).get_colors()
        second = DominatingBitmapColors(as_pixel_source(img)).get_colors()
        self.assertEqual(first, second)
        self.assertEqual(img.tobytes(), before)

    def test_large_image_is_sampled_down(self):
        source = ImagePixelSource(_split_image(400, 200, RED, BLUE), max_sample_size=100)
        self.assertLessEqual(source.width, 100)
        self.assertLessEqual(source.height, 100)
        pair = DominatingBitmapColors(source).get_colors()
        self.assertEqual(pair, ColorPair(RED, BLUE))

    def test_missing_or_empty_source(self):
        with self.assertRaises(InvalidImageError):
            DominatingBitmapColors(None)
        with self.assertRaises(InvalidImageError):
            DominatingBitmapColors(_GridSource([]))

    def test_invalid_quantize_bits(self):
        with self.assertRaises(ValueError):
            DominatingBitmapColors(_GridSource([[RED]]), quantize_bits=0)


if __name__ == "__main__":
    unittest.main()
