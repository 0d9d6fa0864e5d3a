"""
Heuristic description parser.

Turns a free-text meme description into a RenderSpec without any model.
Used directly when no generation model is configured and as the fallback
whenever the model call fails.

The rules run as a strict priority chain:
1. "key: value" lines (top, bottom, template/templateid, width, height)
2. Sentence split on . ! ? (first sentence on top, the rest below)
3. Comma split (first segment on top, the rest below)
4. Word-count bisection
Finally both captions are truncated to the maximum text length.
"""

import logging
import math
import re
from typing import Optional

from memerender.schemas.meme import RenderSpec

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT_LENGTH = 200

_SENTENCE_SPLIT = re.compile(r"[.!?]+\s*")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def leading_int(value: str) -> Optional[int]:
    """Leading integer of `value` ("1200px" -> 1200), or None if there is none."""
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_int(value, default: int) -> int:
    """
    Parse the leading integer of `value` ("1200px" -> 1200).
    
    Returns `default` when there is no leading integer or it is zero.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value) or default
    return leading_int(str(value or "")) or default


def _apply_key_values(description: str, spec: RenderSpec) -> None:
    lines = [line.strip() for line in re.split(r"\r?\n", description)]
    for line in lines:
        if not line or ":" not in line:
            continue
        key, _, value = line.partition(":")
        key = key.lower()
        value = value.strip()
        
        if key.startswith("top"):
            spec.top = value
        elif key.startswith("bottom"):
            spec.bottom = value
        elif key in ("template", "templateid"):
            spec.template_id = value
        elif key == "width":
            spec.width = parse_int(value, spec.width)
        elif key == "height":
            spec.height = parse_int(value, spec.height)


def _split_captions(description: str, spec: RenderSpec) -> None:
    sentences = [s.strip() for s in _SENTENCE_SPLIT.split(description) if s.strip()]
    if len(sentences) >= 2:
        spec.top = sentences[0]
        spec.bottom = " ".join(sentences[1:])
        return
    
    segments = [s.strip() for s in description.split(",") if s.strip()]
    if len(segments) >= 2:
        spec.top = segments[0]
        spec.bottom = ", ".join(segments[1:])
        return
    
    words = description.split()
    middle = math.ceil(len(words) / 2)
    spec.top = " ".join(words[:middle])
    spec.bottom = " ".join(words[middle:])


def parse_description(
    description: Optional[str],
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
) -> RenderSpec:
    """
    Build a RenderSpec from free text.
    
    Args:
        description: User supplied description
        max_text_length: Both captions are cut to this many characters
        
    Returns:
        RenderSpec: Defaults (gradient, 1200x675) for anything not found
    """
    spec = RenderSpec()
    if not description:
        return spec
    
    _apply_key_values(description, spec)
    
    if not spec.top and not spec.bottom:
        _split_captions(description, spec)
    
    spec.top = spec.top[:max_text_length]
    spec.bottom = spec.bottom[:max_text_length]
    
    logger.debug(f"Heuristic spec: template={spec.template_id}, top='{spec.top[:30]}', bottom='{spec.bottom[:30]}'")
    return spec
