"""색상 값 모듈 — RGBA 튜플 변환 및 채널 연산.

색상은 (r, g, b, a) 튜플이며 각 채널은 0~255 정수다.
"""

Color = tuple[int, int, int, int]

TRANSPARENT: Color = (0, 0, 0, 0)


def _clamp(v: int) -> int:
    return max(0, min(255, int(v)))


def from_argb_int(value: int) -> Color:
    """0xAARRGGBB 형식의 정수를 RGBA 튜플로 변환한다."""
    value &= 0xFFFFFFFF
    return (
        (value >> 16) & 0xFF,
        (value >> 8) & 0xFF,
        value & 0xFF,
        (value >> 24) & 0xFF,
    )


def to_argb_int(color: Color) -> int:
    """RGBA 튜플을 0xAARRGGBB 정수로 변환한다."""
    r, g, b, a = color
    return (a << 24) | (r << 16) | (g << 8) | b


def _from_hex(text: str) -> Color:
    """#RGB, #RRGGBB, #AARRGGBB 형식의 문자열을 변환한다."""
    digits = text.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    try:
        if len(digits) == 6:
            return from_argb_int(0xFF000000 | int(digits, 16))
        if len(digits) == 8:
            return from_argb_int(int(digits, 16))
    except ValueError:
        pass
    raise ValueError(f"잘못된 색상 문자열: {text!r}")


def parse_color(value) -> Color:
    """튜플/리스트, ARGB 정수, hex 문자열을 RGBA 튜플로 변환한다.

    RGB 3채널 입력은 불투명(alpha=255)으로 간주한다.
    """
    if isinstance(value, bool):
        raise ValueError(f"잘못된 색상 값: {value!r}")
    if isinstance(value, int):
        return from_argb_int(value)
    if isinstance(value, str):
        return _from_hex(value.strip())
    if isinstance(value, (tuple, list)):
        if len(value) == 3:
            r, g, b = value
            return (_clamp(r), _clamp(g), _clamp(b), 255)
        if len(value) == 4:
            r, g, b, a = value
            return (_clamp(r), _clamp(g), _clamp(b), _clamp(a))
    raise ValueError(f"잘못된 색상 값: {value!r}")


def to_hex(color: Color) -> str:
    """#AARRGGBB 문자열로 변환한다."""
    return f"#{to_argb_int(color):08X}"


def average(c1: Color, c2: Color) -> Color:
    """두 색상의 채널별 평균 (내림)."""
    return tuple((a + b) // 2 for a, b in zip(c1, c2))
