"""메인 — 참조 이미지로 블렌디드 그라데이션 배경을 생성해 PNG로 저장한다."""

import argparse
import logging

from PIL import Image

from config import load_config
from background import NoReferenceFoundError, ReferenceView, from_config
from blending.color import to_hex
from renderer.gradient import GradientType

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s")
logging.getLogger("PIL").setLevel(logging.WARNING)


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="이미지의 지배 색상으로 두 색상 그라데이션 배경을 생성한다",
    )
    parser.add_argument("image_path", nargs="?", default=None, help="참조 이미지 경로")
    parser.add_argument("--output", "-o", metavar="PNG", default=None, help="출력 파일 경로")
    parser.add_argument("--config", metavar="JSON", default=None, help="설정 파일 경로")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--upper", metavar="COLOR", default=None, help="상단 색상 (#RRGGBB / #AARRGGBB)")
    parser.add_argument("--lower", metavar="COLOR", default=None, help="하단 색상 (#RRGGBB / #AARRGGBB)")
    parser.add_argument("--blend-upper", action="store_true", help="상단 색상을 추출 색상과 섞는다")
    parser.add_argument("--blend-lower", action="store_true", help="하단 색상을 추출 색상과 섞는다")
    parser.add_argument("--invert", action="store_true", help="상단/하단을 뒤집는다")
    parser.add_argument(
        "--type", dest="gradient_type", default=None,
        choices=[t.value for t in GradientType],
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    config = load_config(args.config)
    out_path = args.output or config["output"].get("path", "background.png")

    bg = from_config(config, parent_width=args.width, parent_height=args.height)

    # 변경 알림만 기록하고, 렌더링은 모든 설정을 반영한 뒤 한 번만 한다
    changes = []
    bg.subscribe(lambda: changes.append(1))

    if args.upper:
        bg.set_upper(args.upper)
    if args.lower:
        bg.set_lower(args.lower)
    if args.blend_upper:
        bg.set_upper_blend_in(True)
    if args.blend_lower:
        bg.set_lower_blend_in(True)
    if args.invert:
        bg.set_invert(True)
    if args.gradient_type:
        bg.set_gradient_type(args.gradient_type)
    logging.info("설정 변경 %d건", len(changes))

    reference = None
    if args.image_path:
        with Image.open(args.image_path) as img:
            reference = ReferenceView(name=args.image_path, drawable=img.copy(), tag=bg.ref_tag)

    try:
        descriptor = bg.update_referenced_view(reference)
    except NoReferenceFoundError as e:
        logging.error("%s", e)
        return 1
    descriptor.render().save(out_path)

    colors = bg.get_colors()
    logging.info("상단 %s / 하단 %s (%s)", to_hex(colors.upper), to_hex(colors.lower), descriptor.shape.value)
    logging.info("저장됨: %s (%dx%d)", out_path, descriptor.width, descriptor.height)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
