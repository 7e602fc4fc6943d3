"""블렌디드 배경 모듈 — 참조 이미지의 지배 색상과 사용자 색상으로 그라데이션 배경을 만든다.

설정 변경(setter)은 변경 플래그를 세우고 구독자에게 알리기만 한다.
다시 그릴지는 구독자가 get()을 호출하여 결정한다.
"""

import logging
from dataclasses import dataclass

from blending.color import Color, TRANSPARENT, parse_color
from blending.dominant import (
    DEFAULT_MAX_SAMPLE_SIZE,
    DEFAULT_QUANTIZE_BITS,
    DominatingBitmapColors,
    InvalidImageError,
    as_pixel_source,
    check_quantize_bits,
)
from blending.pair import ColorPair
from blending.user_defined import UserDefinedColor
from observer import Subject
from renderer.gradient import Gradient, GradientDescriptor, GradientType

logger = logging.getLogger(__name__)

DEFAULT_REF_TAG = "bb_ref"


class NoReferenceFoundError(RuntimeError):
    """참조 이미지도 사용자 색상도 없어 배경을 계산할 수 없을 때 발생한다."""

    def __init__(self):
        super().__init__(
            "참조를 찾을 수 없습니다. 참조 뷰에 ref_tag를 지정하거나 "
            "upper/lower 색상 중 하나 이상을 설정하세요."
        )


@dataclass
class ReferenceView:
    """호스트 뷰 — drawable(이미지 뷰)이 있으면 우선, 없으면 background를 사용한다."""

    name: str
    drawable: object = None
    background: object = None
    tag: str | None = None

    def source(self):
        return self.drawable if self.drawable is not None else self.background


def find_referenced_view(children, ref_tag: str = DEFAULT_REF_TAG) -> ReferenceView | None:
    """자식 뷰 중 태그가 일치하는 첫 번째 뷰를 반환한다."""
    for child in children:
        if getattr(child, "tag", None) == ref_tag:
            return child
    return None


def _optional_color(value) -> Color | None:
    return None if value is None else parse_color(value)


def _check_dimension(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name}는 0 이상의 정수여야 합니다: {value!r}")
    return value


def _check_flag(name: str, value) -> bool:
    # JSON의 "false" 같은 문자열이 True로 둔갑하지 않도록 bool만 허용
    if not isinstance(value, bool):
        raise ValueError(f"{name}는 true/false여야 합니다: {value!r}")
    return value


class BlendedBackground:
    """참조 이미지 + 사용자 색상 → 두 색상 그라데이션."""

    def __init__(self, parent_width: int = 0, parent_height: int = 0,
                 ref_tag: str = DEFAULT_REF_TAG,
                 upper: Color | None = None, lower: Color | None = None,
                 upper_blend_in: bool = False, lower_blend_in: bool = False,
                 invert: bool = False,
                 gradient_type: GradientType = GradientType.LINEAR,
                 quantize_bits: int = DEFAULT_QUANTIZE_BITS,
                 max_sample_size: int | None = DEFAULT_MAX_SAMPLE_SIZE):
        self._ref_tag = ref_tag
        self._parent_width = parent_width
        self._parent_height = parent_height
        self._upper = UserDefinedColor(_optional_color(upper))
        self._lower = UserDefinedColor(_optional_color(lower))
        self._upper_blend_in = upper_blend_in
        self._lower_blend_in = lower_blend_in
        self._invert = invert
        self._gradient_type = GradientType.parse(gradient_type)
        self._quantize_bits = check_quantize_bits(quantize_bits)
        self._max_sample_size = max_sample_size

        self._referenced_view = None
        # 마지막으로 성공한 추출 결과 (기본: 투명)
        self._extracted = ColorPair(TRANSPARENT, TRANSPARENT)
        self._colors = ColorPair(TRANSPARENT, TRANSPARENT)
        self._subject = Subject()
        self._changed = False

    def __repr__(self) -> str:
        return (
            f"BlendedBackground(ref_tag={self._ref_tag!r}, "
            f"size={self._parent_width}x{self._parent_height}, colors={self._colors!r}, "
            f"upper={self._upper.get_color()}, lower={self._lower.get_color()}, "
            f"upper_blend_in={self._upper_blend_in}, lower_blend_in={self._lower_blend_in}, "
            f"invert={self._invert}, gradient_type={self._gradient_type.value})"
        )

    # --- 구독 ---

    def subscribe(self, callback) -> None:
        self._subject.subscribe(callback)

    def unsubscribe(self, callback) -> None:
        self._subject.unsubscribe(callback)

    def has_changed(self) -> bool:
        """마지막 렌더링 이후 설정이 바뀌었는지 반환한다."""
        return self._changed

    def clear_changed(self) -> None:
        self._changed = False

    def _notify(self) -> None:
        self._changed = True
        self._subject.emit()

    # --- 조회 ---

    @property
    def ref_tag(self) -> str:
        return self._ref_tag

    @property
    def referenced_view(self):
        return self._referenced_view

    @property
    def parent_width(self) -> int:
        return self._parent_width

    @property
    def parent_height(self) -> int:
        return self._parent_height

    @property
    def upper_blend_in(self) -> bool:
        return self._upper_blend_in

    @property
    def lower_blend_in(self) -> bool:
        return self._lower_blend_in

    @property
    def invert(self) -> bool:
        return self._invert

    @property
    def gradient_type(self) -> GradientType:
        return self._gradient_type

    def get_upper(self) -> Color:
        """사용자 상단 색상. 지정되지 않았으면 투명색."""
        return self._upper.or_transparent()

    def get_lower(self) -> Color:
        """사용자 하단 색상. 지정되지 않았으면 투명색."""
        return self._lower.or_transparent()

    def get_colors(self) -> ColorPair:
        """마지막으로 계산된 색상 쌍의 복사본."""
        return self._colors.copy()

    # --- 변경 (각 호출마다 알림 1회) ---

    def set_upper(self, color) -> None:
        """상단 사용자 색상을 지정한다. None이면 지정 해제."""
        self._upper = UserDefinedColor(_optional_color(color))
        self._notify()

    def set_lower(self, color) -> None:
        """하단 사용자 색상을 지정한다. None이면 지정 해제."""
        self._lower = UserDefinedColor(_optional_color(color))
        self._notify()

    def set_parent_width(self, width: int) -> None:
        self._parent_width = _check_dimension("parent_width", width)
        self._notify()

    def set_parent_height(self, height: int) -> None:
        self._parent_height = _check_dimension("parent_height", height)
        self._notify()

    def set_upper_blend_in(self, blend_in: bool) -> None:
        self._upper_blend_in = blend_in
        self._notify()

    def set_lower_blend_in(self, blend_in: bool) -> None:
        self._lower_blend_in = blend_in
        self._notify()

    def set_invert(self, invert: bool) -> None:
        self._invert = invert
        self._notify()

    def set_gradient_type(self, gradient_type) -> None:
        self._gradient_type = GradientType.parse(gradient_type)
        self._notify()

    # --- 계산 ---

    def get(self) -> GradientDescriptor:
        """현재 상태로 색상을 다시 계산하고 그라데이션 기술자를 반환한다."""
        self._update_colors()
        self._changed = False
        gradient = Gradient(
            self._parent_width, self._parent_height,
            self._colors.upper, self._colors.lower, self._gradient_type,
        )
        return gradient.get()

    def update_referenced_view(self, new_reference) -> GradientDescriptor:
        """참조 뷰(또는 이미지)를 교체하고 다시 계산한 결과를 반환한다."""
        self._referenced_view = new_reference
        return self.get()

    def _update_colors(self) -> None:
        if self._referenced_view is None:
            if not self._upper.is_defined() and not self._lower.is_defined():
                raise NoReferenceFoundError()
        else:
            self._calculate_background_for(self._referenced_view)

        self._colors.set_upper(self._extracted.upper)
        self._colors.set_lower(self._extracted.lower)
        self._apply_user_definitions(self._colors)

    def _calculate_background_for(self, view) -> None:
        logger.debug("참조 뷰 발견: %s", getattr(view, "name", view))

        source = view.source() if isinstance(view, ReferenceView) else view
        if source is None:
            logger.warning("참조 뷰에서 이미지를 가져올 수 없습니다. 이전 색상(기본 투명)을 사용합니다.")
            return

        try:
            dominating = DominatingBitmapColors(
                as_pixel_source(source, self._max_sample_size),
                quantize_bits=self._quantize_bits,
            )
            colors = dominating.get_colors()
        except InvalidImageError as e:
            logger.warning("지배 색상 추출 실패: %s — 이전 색상(기본 투명)을 사용합니다.", e)
            return

        self._extracted = colors
        logger.debug("지배 색상: %s", colors)

    def _apply_user_definitions(self, colors: ColorPair) -> None:
        upper_color = self._upper.get_color()
        if upper_color is not None:
            if self._upper_blend_in:
                colors.blend_upper(upper_color)
            else:
                colors.set_upper(upper_color)

        lower_color = self._lower.get_color()
        if lower_color is not None:
            if self._lower_blend_in:
                colors.blend_lower(lower_color)
            else:
                colors.set_lower(lower_color)

        if self._invert:
            colors.invert()


def create_background(parent_width: int, parent_height: int,
                      ref_tag: str | None = None, **options) -> BlendedBackground:
    """크기를 검증하고 기본값(투명/투명, LINEAR, 플래그 off)으로 배경을 만든다."""
    _check_dimension("parent_width", parent_width)
    _check_dimension("parent_height", parent_height)
    return BlendedBackground(
        parent_width, parent_height,
        ref_tag=ref_tag or DEFAULT_REF_TAG,
        **options,
    )


def from_config(config: dict, parent_width: int | None = None,
                parent_height: int | None = None) -> BlendedBackground:
    """설정 딕셔너리(load_config 결과)로 배경을 만든다."""
    bg_cfg = config.get("background", {})
    analysis_cfg = config.get("analysis", {})
    output_cfg = config.get("output", {})

    width = parent_width if parent_width is not None else output_cfg.get("width", 0)
    height = parent_height if parent_height is not None else output_cfg.get("height", 0)

    return create_background(
        width, height,
        ref_tag=bg_cfg.get("ref_tag"),
        upper=bg_cfg.get("upper"),
        lower=bg_cfg.get("lower"),
        upper_blend_in=_check_flag("upper_blend_in", bg_cfg.get("upper_blend_in", False)),
        lower_blend_in=_check_flag("lower_blend_in", bg_cfg.get("lower_blend_in", False)),
        invert=_check_flag("invert", bg_cfg.get("invert", False)),
        gradient_type=GradientType.parse(bg_cfg.get("gradient_type", "linear")),
        quantize_bits=analysis_cfg.get("quantize_bits", DEFAULT_QUANTIZE_BITS),
        max_sample_size=analysis_cfg.get("max_sample_size", DEFAULT_MAX_SAMPLE_SIZE),
    )
