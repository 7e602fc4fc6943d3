"""설정 파일 로더 모듈."""

import copy
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# 기본 설정 경로
_CONFIG_PATH = Path(__file__).parent / "config.json"

# 기본값 — config.json에 누락된 키가 있을 때 사용
_DEFAULTS = {
    "background": {
        "ref_tag": "bb_ref",
        "upper": None,            # "#AARRGGBB", "#RRGGBB", [r, g, b(, a)] 또는 null
        "lower": None,
        "upper_blend_in": False,
        "lower_blend_in": False,
        "invert": False,
        "gradient_type": "linear",  # linear / radial / sweep
    },
    "analysis": {
        "quantize_bits": 4,
        "max_sample_size": 100,
    },
    "output": {
        "width": 64,
        "height": 64,
        "path": "background.png",
    },
}


def _merge_section(name: str, defaults: dict, override) -> dict:
    """섹션 기본값 위에 사용자 값을 덮어쓴다. 모르는 키는 경고만 남긴다."""
    if not isinstance(override, dict):
        raise ValueError(f"설정 섹션 '{name}'은 객체여야 합니다: {override!r}")
    unknown = sorted(set(override) - set(defaults))
    if unknown:
        logger.warning("알 수 없는 설정 키: %s.%s", name, ", ".join(unknown))
    return {**defaults, **override}


def load_config(path: Path | None = None) -> dict:
    """설정 파일(config.json)을 기본값과 섹션 단위로 병합해 반환한다.

    파일이 없으면 기본값의 복사본을 반환한다.
    """
    config = copy.deepcopy(_DEFAULTS)
    config_path = Path(path) if path else _CONFIG_PATH
    if not config_path.exists():
        return config

    user_config = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(user_config, dict):
        raise ValueError(f"설정 파일 최상위는 객체여야 합니다: {config_path}")

    for name, section in user_config.items():
        config[name] = _merge_section(name, config.get(name, {}), section)
    logger.debug("설정 로드: %s", config_path)
    return config
