"""
Meme Renderer Service.

This module turns top/bottom caption text and an optional background
image into a finished PNG:
1. Composes the background (cover-fitted image or random gradient)
2. Wraps and vertically centres each caption block
3. Draws every line as a black outline followed by a white body
4. Encodes the canvas as PNG

Nothing is written to disk or sent anywhere; the caller owns the bytes.
"""

import base64
import logging
import math
import random
from functools import partial
from typing import Annotated, Optional

from fastapi import Depends
from PIL import Image

from memerender.config import Settings, get_settings
from memerender.services.background import compose_background
from memerender.services.canvas import Canvas, load_font
from memerender.services.layout import layout_block

# Configure logging
logger = logging.getLogger(__name__)

FONT_SIZE_RATIO = 0.12
MIN_STROKE_WIDTH = 6
HORIZONTAL_MARGIN = 80
TOP_CENTER_RATIO = 0.12
BOTTOM_CENTER_RATIO = 0.88


class RenderError(Exception):
    """Raised when the canvas cannot be drawn or encoded."""
    pass


class MemeRenderer:
    """
    Server-side meme compositor.
    
    A renderer holds only read-only configuration and an optional random
    source for gradient colours, so one instance can serve concurrent
    requests; each render allocates its own canvas.
    """
    
    def __init__(self, settings: Optional[Settings] = None, rng: Optional[random.Random] = None):
        """
        Initialize the renderer.
        
        Args:
            settings: Optional settings instance. If not provided, uses default settings.
            rng: Optional random source for gradient colours (seed it for reproducible output)
        """
        self.settings = settings or get_settings()
        self.rng = rng
    
    def render(
        self,
        top_text: str,
        bottom_text: str,
        width: int,
        height: int,
        background: Optional[bytes] = None,
    ) -> bytes:
        """
        Render a meme and return it as PNG bytes.
        
        Args:
            top_text: Caption for the top of the image (may be empty)
            bottom_text: Caption for the bottom of the image (may be empty)
            width: Output width in pixels
            height: Output height in pixels
            background: Optional encoded image to use as background
            
        Returns:
            PNG-encoded image bytes
            
        Raises:
            RenderError: If drawing or encoding fails
        """
        if width <= 0 or height <= 0:
            raise RenderError(f"Invalid canvas size {width}x{height}")
        
        try:
            canvas = Canvas(width, height)
            compose_background(canvas, background, self.rng, self.settings.MAX_IMAGE_PIXELS)
            
            font_size = math.floor(width * FONT_SIZE_RATIO)
            stroke_width = max(MIN_STROKE_WIDTH, math.floor(font_size / 12))
            font = load_font(font_size, self.settings.FONT_PATH)
            measure = partial(canvas.measure_text_width, font=font)
            max_width = width - HORIZONTAL_MARGIN
            
            blocks = [
                layout_block((top_text or "").upper(), height * TOP_CENTER_RATIO, font_size, max_width, measure),
                layout_block((bottom_text or "").upper(), height * BOTTOM_CENTER_RATIO, font_size, max_width, measure),
            ]
            
            for block in blocks:
                for line, y in zip(block.lines, block.positions):
                    canvas.draw_text(
                        line,
                        width / 2,
                        y,
                        font,
                        fill_color="white",
                        stroke_color="black",
                        stroke_width=stroke_width,
                    )
            
            png = canvas.to_png()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.error(f"Render failed: {e}", exc_info=True)
            raise RenderError(f"Failed to render meme: {e}") from e
        
        logger.info(
            f"Rendered {width}x{height} meme "
            f"(top lines={len(blocks[0].lines)}, bottom lines={len(blocks[1].lines)}, "
            f"background supplied={bool(background)}, {len(png)} bytes)"
        )
        return png
    
    def render_data_url(
        self,
        top_text: str,
        bottom_text: str,
        width: int,
        height: int,
        background: Optional[bytes] = None,
    ) -> str:
        """Render a meme and return it as a `data:image/png;base64,...` URL."""
        png = self.render(top_text, bottom_text, width, height, background)
        return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


# Convenience function for dependency injection
def get_meme_renderer(settings: Annotated[Settings, Depends(get_settings)]) -> MemeRenderer:
    """Get a MemeRenderer instance for dependency injection."""
    return MemeRenderer(settings)
