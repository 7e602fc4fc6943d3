"""사용자 지정 색상 모듈 — '지정 안 됨'과 '투명'을 구분한다."""

from dataclasses import dataclass

from blending.color import Color, TRANSPARENT


@dataclass(frozen=True)
class UserDefinedColor:
    """사용자가 지정한 색상 (없으면 None). 변경 시 새 인스턴스로 교체한다."""

    color: Color | None = None

    def is_defined(self) -> bool:
        return self.color is not None

    def get_color(self) -> Color | None:
        return self.color

    def or_transparent(self) -> Color:
        """지정되지 않았으면 투명색을 반환한다."""
        return self.color if self.color is not None else TRANSPARENT
