"""
Command-line meme renderer.

    memerender-render --top "TOP TEXT" --bottom "BOTTOM" --out out.png [--bg image.jpg] [--width 1200] [--height 675]

Without --bg a random gradient background is used.
"""

import argparse
import logging
import sys
from typing import List, Optional

from memerender.config import get_settings
from memerender.services.renderer import MemeRenderer, RenderError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="memerender-render",
        description="Render a meme PNG from top/bottom text.",
    )
    parser.add_argument("--top", default="", help="Top text")
    parser.add_argument("--bottom", default="", help="Bottom text")
    parser.add_argument("--bg", default=None, help="Background image path (random gradient if omitted)")
    parser.add_argument("--out", default="meme.png", help="Output PNG path")
    parser.add_argument("--width", type=int, default=settings.DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=settings.DEFAULT_HEIGHT)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
    args = build_parser().parse_args(argv)
    
    background = None
    if args.bg:
        try:
            with open(args.bg, "rb") as f:
                background = f.read()
        except OSError as e:
            logger.warning(f"Failed to read background {args.bg}, using gradient: {e}")
    
    try:
        png = MemeRenderer().render(args.top, args.bottom, args.width, args.height, background)
    except RenderError as e:
        logger.error(str(e))
        return 1
    
    with open(args.out, "wb") as f:
        f.write(png)
    logger.info(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
