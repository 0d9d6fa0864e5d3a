"""
Caption text layout.

Greedy word wrapping against a pixel width and vertical centring of the
wrapped block around a target line. Both are pure functions of their
inputs; measuring is delegated to a callback so the same code works with
any font backend.
"""

from typing import Callable, List

from pydantic import BaseModel, Field

# Distance between consecutive baselines, as a multiple of the font size
LINE_SPACING = 1.05

MeasureFn = Callable[[str], float]


class LayoutBlock(BaseModel):
    """Wrapped lines of one caption block and where to draw them."""
    
    lines: List[str] = Field(default_factory=lambda: [""])
    line_height: float
    center_y: float
    font_size: float
    
    @property
    def positions(self) -> List[float]:
        """Vertical centre of each line, top to bottom."""
        return line_positions(len(self.lines), self.center_y, self.font_size)


def wrap_text(text: str, max_width: float, measure: MeasureFn) -> List[str]:
    """
    Wrap `text` into lines no wider than `max_width` pixels.
    
    Words are separated by single spaces. A word is moved to a new line
    only when the current line already has content, so a single word wider
    than `max_width` sits alone on its own line rather than being split.
    
    Args:
        text: Text to wrap
        max_width: Maximum line width in pixels
        measure: Returns the pixel width of a string
        
    Returns:
        At least one line; `[""]` for empty text
    """
    if not text:
        return [""]
    
    lines: List[str] = []
    line = ""
    for word in text.split(" "):
        candidate = f"{line} {word}" if line else word
        if measure(candidate) > max_width and line:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    
    return lines or [""]


def line_positions(line_count: int, center_y: float, font_size: float) -> List[float]:
    """
    Y coordinate of each line's centre for a block centred on `center_y`.
    
    totalHeight = n * F * 1.05, first line at center_y - totalHeight/2 + F/2.
    """
    step = font_size * LINE_SPACING
    total_height = line_count * step
    start_y = center_y - total_height / 2 + font_size / 2
    return [start_y + i * step for i in range(line_count)]


def layout_block(
    text: str,
    center_y: float,
    font_size: float,
    max_width: float,
    measure: MeasureFn,
) -> LayoutBlock:
    """Wrap `text` and place the resulting block around `center_y`."""
    return LayoutBlock(
        lines=wrap_text(text, max_width, measure),
        line_height=font_size * LINE_SPACING,
        center_y=center_y,
        font_size=font_size,
    )
