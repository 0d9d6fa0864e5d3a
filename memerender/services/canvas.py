"""
Pillow-backed drawing surface.

The renderer only needs a handful of primitives from the graphics library:
measuring text, drawing stroked/filled text, drawing a scaled image,
filling a gradient and filling translucent rectangles. They are collected
on `Canvas` so the layout and composition code never touches Pillow directly.
"""

import logging
import math
import os
from io import BytesIO
from typing import Optional, Sequence, Tuple, Union

from PIL import Image, ImageChops, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Bold display fonts tried in order when no FONT_PATH is configured
FONT_CANDIDATES = [
    "C:\\Windows\\Fonts\\impact.ttf" if os.name == "nt" else None,
    "/System/Library/Fonts/Supplemental/Impact.ttf",
    "/usr/share/fonts/truetype/msttcorefonts/Impact.ttf",
    "/System/Library/Fonts/Supplemental/Arial Black.ttf",
    "/usr/share/fonts/truetype/msttcorefonts/Arial_Black.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
]


def load_font(size: int, font_path: Optional[str] = None) -> Font:
    """
    Load a bold caption font at the given pixel size.
    
    Tries the configured font first, then FONT_CANDIDATES, then Pillow's
    bundled scalable default.
    """
    for path in [font_path, *FONT_CANDIDATES]:
        if not path or not os.path.exists(path):
            continue
        try:
            return ImageFont.truetype(path, size)
        except OSError as e:
            logger.warning(f"Could not load font {path}: {e}")
    logger.debug("No TrueType caption font found, using Pillow default font")
    return ImageFont.load_default(size=size)


class Canvas:
    """An RGB raster of fixed size plus the drawing operations the renderer uses."""
    
    def __init__(self, width: int, height: int, color: RGB = (0, 0, 0)):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.image = Image.new("RGB", (width, height), color)
        self._draw = ImageDraw.Draw(self.image)
    
    def measure_text_width(self, text: str, font: Font) -> float:
        """Advance width of `text` in pixels."""
        return self._draw.textlength(text, font=font)
    
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        font: Font,
        fill_color: Optional[str] = "white",
        stroke_color: Optional[str] = "black",
        stroke_width: int = 0,
    ) -> None:
        """
        Draw `text` centred on (x, y).
        
        The outline is drawn in its own pass before the body so the fill
        always sits on top of the stroke. `stroke_width` is the full line
        width; half of it lands outside the glyph edge.
        """
        if not text:
            return
        if stroke_color and stroke_width > 0:
            self._draw.text(
                (x, y),
                text,
                font=font,
                fill=stroke_color,
                stroke_width=max(1, math.ceil(stroke_width / 2)),
                stroke_fill=stroke_color,
                anchor="mm",
            )
        if fill_color:
            self._draw.text((x, y), text, font=font, fill=fill_color, anchor="mm")
    
    def draw_image_scaled(self, image: Image.Image, rect: Tuple[float, float, float, float]) -> None:
        """
        Draw `image` scaled into rect = (x, y, width, height).
        
        Size is rounded up and the offset rounded down so a rect that covers
        the canvas mathematically also covers it in whole pixels.
        Parts outside the canvas are clipped. An RGBA image is blended over
        what is already drawn.
        """
        x, y, w, h = rect
        size = (max(1, math.ceil(w - 1e-9)), max(1, math.ceil(h - 1e-9)))
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGB")
        scaled = image.resize(size, Image.Resampling.LANCZOS)
        position = (math.floor(x), math.floor(y))
        if scaled.mode == "RGBA":
            self.image.paste(scaled, position, scaled)
        else:
            self.image.paste(scaled, position)
    
    def fill_gradient(self, rect: Tuple[int, int, int, int], color_stops: Sequence[RGB]) -> None:
        """
        Fill rect = (x, y, width, height) with a two-stop linear gradient
        running from the rect's top-left corner to its bottom-right corner.
        
        Position along the gradient is the projection of each pixel onto the
        diagonal, t = (dx*w + dy*h) / (w^2 + h^2), built from two scaled ramps.
        """
        x, y, w, h = rect
        start, end = color_stops[0], color_stops[-1]
        norm = float(w * w + h * h)
        
        ramp = Image.linear_gradient("L")
        vertical = ramp.resize((w, h)).point(lambda v: round(v * (h * h) / norm))
        horizontal = ramp.transpose(Image.Transpose.ROTATE_90).resize((w, h)).point(
            lambda v: round(v * (w * w) / norm)
        )
        mask = ImageChops.add(vertical, horizontal)
        
        gradient = Image.composite(
            Image.new("RGB", (w, h), end),
            Image.new("RGB", (w, h), start),
            mask,
        )
        self.image.paste(gradient, (x, y))
    
    def fill_rects(
        self,
        rects: Sequence[Tuple[Tuple[float, float, float, float], RGB, float]],
        global_alpha: float = 1.0,
    ) -> None:
        """
        Blend solid rectangles over the canvas in one compositing pass.
        
        Each item is (rect, color, alpha) with rect = (x, y, width, height);
        the effective opacity is alpha * global_alpha.
        """
        overlay = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        for (x, y, w, h), color, alpha in rects:
            opacity = max(0.0, min(alpha * global_alpha, 1.0))
            box = [x, y, max(x, x + w - 1), max(y, y + h - 1)]
            draw.rectangle(box, fill=(*color, round(255 * opacity)))
        self.image = Image.alpha_composite(self.image.convert("RGBA"), overlay).convert("RGB")
        self._draw = ImageDraw.Draw(self.image)
    
    def to_png(self) -> bytes:
        """Encode the canvas as PNG bytes."""
        buffer = BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()
