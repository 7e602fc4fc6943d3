"""상단/하단 두 색상 쌍 모듈."""

from blending.color import Color, TRANSPARENT, average, to_hex


class ColorPair:
    """그라데이션의 상단·하단 색상을 보관한다. 모든 연산은 제자리 변경."""

    def __init__(self, upper: Color = TRANSPARENT, lower: Color = TRANSPARENT):
        self._upper = tuple(upper)
        self._lower = tuple(lower)

    @property
    def upper(self) -> Color:
        return self._upper

    @property
    def lower(self) -> Color:
        return self._lower

    def set_upper(self, color: Color) -> None:
        self._upper = tuple(color)

    def set_lower(self, color: Color) -> None:
        self._lower = tuple(color)

    def blend_upper(self, color: Color) -> None:
        """상단 색상을 주어진 색상과 채널별 평균으로 섞는다."""
        self._upper = average(self._upper, color)

    def blend_lower(self, color: Color) -> None:
        """하단 색상을 주어진 색상과 채널별 평균으로 섞는다."""
        self._lower = average(self._lower, color)

    def invert(self) -> None:
        """상단과 하단을 맞바꾼다."""
        self._upper, self._lower = self._lower, self._upper

    def copy(self) -> "ColorPair":
        return ColorPair(self._upper, self._lower)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ColorPair):
            return NotImplemented
        return (self._upper, self._lower) == (other._upper, other._lower)

    def __repr__(self) -> str:
        return f"ColorPair(upper={to_hex(self._upper)}, lower={to_hex(self._lower)})"
