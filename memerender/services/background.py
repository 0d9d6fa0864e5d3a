"""
Background composition.

Fills the whole canvas either with an uploaded image scaled to "cover"
(aspect preserved, overflow cropped evenly on both sides) or with a random
two-colour diagonal gradient, then lays a faint striped texture on top.
"""

import logging
import random
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, ImageColor
from pydantic import BaseModel, Field

from memerender.services.canvas import Canvas

logger = logging.getLogger(__name__)

STRIPE_COUNT = 40
STRIPE_ALPHAS = (0.01, 0.02)
STRIPE_GLOBAL_ALPHA = 0.06

# Pillow plugins an uploaded background may be decoded with
ALLOWED_FORMATS = ("PNG", "JPEG", "GIF", "WEBP", "BMP")
MAX_IMAGE_PIXELS = 40_000_000


class HSLColor(BaseModel):
    hue: int = Field(..., ge=0, lt=360)
    saturation: int = Field(..., ge=0, le=100)
    lightness: int = Field(..., ge=0, le=100)
    
    @property
    def css(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"
    
    @property
    def rgb(self) -> Tuple[int, int, int]:
        return ImageColor.getrgb(self.css)


class ColorPair(BaseModel):
    """Start and end colours of the generated gradient."""
    
    primary: HSLColor
    secondary: HSLColor


def random_color_pair(rng: Optional[random.Random] = None) -> ColorPair:
    """
    Pick a gradient colour pair from one random hue.
    
    The secondary colour is rotated 40 degrees round the wheel and shares
    the primary's saturation, with its own (usually darker) lightness.
    """
    rng = rng or random.Random()
    hue = rng.randrange(360)
    saturation = 60 + rng.randrange(20)
    primary_lightness = 40 + rng.randrange(20)
    secondary_lightness = 20 + rng.randrange(30)
    return ColorPair(
        primary=HSLColor(hue=hue, saturation=saturation, lightness=primary_lightness),
        secondary=HSLColor(hue=(hue + 40) % 360, saturation=saturation, lightness=secondary_lightness),
    )


def cover_fit(
    image_width: int,
    image_height: int,
    width: int,
    height: int,
) -> Tuple[float, float, float, float]:
    """
    Placement that scales an image to cover a width x height canvas.
    
    Returns (x, y, scaled_width, scaled_height). The limiting axis matches
    the canvas exactly; the other overflows and is centred, so x and y are
    zero or negative.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Invalid image size {image_width}x{image_height}")
    
    scale_x = width / image_width
    scale_y = height / image_height
    if scale_x >= scale_y:
        scaled_width = float(width)
        scaled_height = max(image_height * scale_x, float(height))
    else:
        scaled_width = max(image_width * scale_y, float(width))
        scaled_height = float(height)
    
    return (
        (width - scaled_width) / 2,
        (height - scaled_height) / 2,
        scaled_width,
        scaled_height,
    )


def paint_gradient(canvas: Canvas, colors: ColorPair) -> None:
    canvas.fill_gradient(
        (0, 0, canvas.width, canvas.height),
        [colors.primary.rgb, colors.secondary.rgb],
    )


def decode_image(image_bytes: bytes, max_pixels: int = MAX_IMAGE_PIXELS) -> Image.Image:
    """
    Decode an uploaded background into an RGB or RGBA image.
    
    Only common raster formats are accepted and the pixel count is checked
    from the header before any pixel data is decoded.
    
    Raises:
        ValueError: If the image is larger than `max_pixels`
        Exception: Whatever Pillow raises for unsupported or corrupt data
    """
    with Image.open(BytesIO(image_bytes), formats=ALLOWED_FORMATS) as img:
        if img.width * img.height > max_pixels:
            raise ValueError(
                f"Image of {img.width}x{img.height} exceeds {max_pixels} pixel limit"
            )
        img.load()
        transparent = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
        return img.convert("RGBA" if transparent else "RGB")


def paint_image(canvas: Canvas, image: Image.Image) -> None:
    """Draw `image` cover-fitted over the canvas."""
    rect = cover_fit(image.width, image.height, canvas.width, canvas.height)
    canvas.draw_image_scaled(image, rect)


def apply_stripes(canvas: Canvas) -> None:
    """Overlay 40 faint horizontal bands of alternating opacity."""
    stripe_height = canvas.height / STRIPE_COUNT
    canvas.fill_rects(
        [
            ((0, stripe_height * i, canvas.width, stripe_height), (0, 0, 0), STRIPE_ALPHAS[i % 2])
            for i in range(STRIPE_COUNT)
        ],
        global_alpha=STRIPE_GLOBAL_ALPHA,
    )


def compose_background(
    canvas: Canvas,
    background: Optional[bytes] = None,
    rng: Optional[random.Random] = None,
    max_pixels: int = MAX_IMAGE_PIXELS,
) -> Optional[ColorPair]:
    """
    Paint the full background of `canvas`.
    
    An image that cannot be decoded is logged and replaced by a gradient;
    it never fails the render. Transparent areas of an image show the
    gradient underneath.
    
    Returns:
        The gradient colours used, or None when an opaque image covers the canvas
    """
    image = None
    if background:
        try:
            image = decode_image(background, max_pixels)
        except Exception as e:
            logger.warning(f"Failed to load background image, using gradient: {e}")
    
    colors = None
    if image is None or image.mode == "RGBA":
        colors = random_color_pair(rng)
        logger.debug(f"Gradient background {colors.primary.css} -> {colors.secondary.css}")
        paint_gradient(canvas, colors)
    
    if image is not None:
        paint_image(canvas, image)
    
    apply_stripes(canvas)
    return colors
