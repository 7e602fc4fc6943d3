"""두 색상 그라데이션 모듈 — 그라데이션 기술자 생성 및 Pillow 렌더링."""

import math
from dataclasses import dataclass
from enum import Enum

from PIL import Image

from blending.color import Color

_MASK_SIZE = 256

# 스윕 마스크 캐시
_sweep_mask: Image.Image | None = None


class GradientType(Enum):
    LINEAR = "linear"    # 위 → 아래
    RADIAL = "radial"    # 중심 → 바깥
    SWEEP = "sweep"      # 중심 기준 시계 방향 (3시 방향 시작)

    @classmethod
    def parse(cls, value) -> "GradientType":
        """이름 문자열(대소문자 무시)이나 GradientType을 변환한다."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(t.value for t in cls)
            raise ValueError(f"알 수 없는 그라데이션 종류: {value!r} ({names})") from None


def _build_sweep_mask() -> Image.Image:
    """중심 기준 각도를 0~255로 매핑한 256x256 마스크."""
    center = (_MASK_SIZE - 1) / 2
    data = []
    for y in range(_MASK_SIZE):
        for x in range(_MASK_SIZE):
            angle = math.atan2(y - center, x - center) % (2 * math.pi)
            data.append(int(angle / (2 * math.pi) * 255))
    mask = Image.new("L", (_MASK_SIZE, _MASK_SIZE))
    mask.putdata(data)
    return mask


def _mask_for(shape: GradientType) -> Image.Image:
    global _sweep_mask
    if shape is GradientType.RADIAL:
        return Image.radial_gradient("L")
    if shape is GradientType.SWEEP:
        if _sweep_mask is None:
            _sweep_mask = _build_sweep_mask()
        return _sweep_mask
    return Image.linear_gradient("L")


@dataclass(frozen=True)
class GradientDescriptor:
    """호스트가 그대로 그릴 수 있는 그라데이션 기술자."""

    width: int
    height: int
    start_color: Color
    end_color: Color
    shape: GradientType = GradientType.LINEAR

    def render(self) -> Image.Image:
        """RGBA 이미지로 렌더링한다. 크기가 0 이하면 빈 이미지."""
        w, h = max(self.width, 0), max(self.height, 0)
        if w == 0 or h == 0:
            return Image.new("RGBA", (w, h))
        mask = _mask_for(self.shape).resize((w, h), Image.Resampling.BILINEAR)
        start = Image.new("RGBA", (w, h), tuple(self.start_color))
        end = Image.new("RGBA", (w, h), tuple(self.end_color))
        return Image.composite(end, start, mask)


class Gradient:
    """크기·두 색상·모양으로부터 그라데이션 기술자를 만든다."""

    def __init__(self, width: int, height: int, start_color: Color, end_color: Color,
                 shape: GradientType = GradientType.LINEAR):
        self._width = width
        self._height = height
        self._start = tuple(start_color)
        self._end = tuple(end_color)
        self._shape = shape

    def get(self) -> GradientDescriptor:
        return GradientDescriptor(self._width, self._height, self._start, self._end, self._shape)
