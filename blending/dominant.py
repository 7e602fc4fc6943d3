"""지배 색상 추출 모듈 — 이미지 상단/하단 영역의 대표 색상을 계산한다.

각 영역의 픽셀을 채널당 상위 비트만 남겨 버킷으로 묶고,
가장 많은 픽셀이 속한 버킷의 평균 색상을 대표색으로 사용한다.
"""

import logging
from collections import Counter

from PIL import Image

from blending.color import Color
from blending.pair import ColorPair

logger = logging.getLogger(__name__)

DEFAULT_QUANTIZE_BITS = 4  # ImageOps.posterize(img, 4)와 같은 정밀도
DEFAULT_MAX_SAMPLE_SIZE = 100


class InvalidImageError(ValueError):
    """픽셀 소스가 없거나 비어 있을 때 발생한다."""


def check_quantize_bits(bits) -> int:
    """버킷 정밀도(채널당 비트 수)가 1~8 정수인지 확인한다."""
    if isinstance(bits, bool) or not isinstance(bits, int) or not 1 <= bits <= 8:
        raise ValueError(f"quantize_bits는 1~8 정수여야 합니다: {bits!r}")
    return bits


class ImagePixelSource:
    """Pillow 이미지를 픽셀 소스(width, height, get_pixel)로 감싼다.

    큰 이미지는 NEAREST로 축소하여 원본에 없는 색이 생기지 않게 한다.
    """

    def __init__(self, img: Image.Image, max_sample_size: int | None = DEFAULT_MAX_SAMPLE_SIZE):
        if img.width < 1 or img.height < 1:
            raise InvalidImageError(f"빈 이미지입니다: {img.width}x{img.height}")
        try:
            img = img.convert("RGBA")
            if max_sample_size and (img.width > max_sample_size or img.height > max_sample_size):
                img.thumbnail((max_sample_size, max_sample_size), Image.Resampling.NEAREST)
            self._pixels = img.load()
        except (OSError, ValueError) as e:
            # 손상·잘림·닫힌 이미지
            raise InvalidImageError(f"이미지를 디코딩할 수 없습니다: {e}") from e
        self._image = img

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def get_pixel(self, x: int, y: int) -> Color:
        return self._pixels[x, y]


def as_pixel_source(obj, max_sample_size: int | None = DEFAULT_MAX_SAMPLE_SIZE):
    """Pillow 이미지면 ImagePixelSource로 감싸고, 그 외에는 그대로 반환한다."""
    if isinstance(obj, Image.Image):
        return ImagePixelSource(obj, max_sample_size=max_sample_size)
    return obj


class DominatingBitmapColors:
    """픽셀 소스의 상단/하단 지배 색상 쌍을 계산한다."""

    def __init__(self, source, quantize_bits: int = DEFAULT_QUANTIZE_BITS):
        check_quantize_bits(quantize_bits)
        if source is None:
            raise InvalidImageError("픽셀 소스가 없습니다.")
        width = getattr(source, "width", 0)
        height = getattr(source, "height", 0)
        if width < 1 or height < 1:
            raise InvalidImageError(f"빈 이미지입니다: {width}x{height}")
        self._source = source
        self._bits = quantize_bits

    def get_colors(self) -> ColorPair:
        height = self._source.height
        mid = height // 2
        if mid == 0:
            # 한 줄짜리 이미지는 상단/하단이 같은 영역
            upper_rows = lower_rows = range(height)
        else:
            upper_rows = range(0, mid)
            lower_rows = range(mid, height)
        return ColorPair(self._dominant(upper_rows), self._dominant(lower_rows))

    def _dominant(self, rows: range) -> Color:
        """영역 내 가장 빈도가 높은 버킷의 평균 색상을 반환한다."""
        shift = 8 - self._bits
        counts: Counter = Counter()
        sums: dict[tuple, list[int]] = {}

        for y in rows:
            for x in range(self._source.width):
                pixel = tuple(self._source.get_pixel(x, y))
                if len(pixel) == 3:
                    pixel = pixel + (255,)
                key = tuple(c >> shift for c in pixel)
                counts[key] += 1
                acc = sums.setdefault(key, [0, 0, 0, 0])
                for i, c in enumerate(pixel):
                    acc[i] += c

        # 동률이면 스캔 순서상 먼저 나온 버킷
        key, count = counts.most_common(1)[0]
        return tuple(s // count for s in sums[key])
