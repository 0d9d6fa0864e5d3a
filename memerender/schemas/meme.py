"""
Meme rendering schemas.

This module contains all Pydantic models for request/response validation
and for the structured data passed between the render services.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SpecSource(str, Enum):
    """Where a render spec came from."""
    LLAMA = "llama"
    HEURISTIC = "heuristic"


class SarcasmIndicator(str, Enum):
    """Tags naming which sarcasm heuristic fired."""
    ALL_CAPS = "ALL_CAPS"
    EXCESSIVE_PUNCTUATION = "EXCESSIVE_PUNCTUATION"
    SARCASM_PATTERN = "SARCASM_PATTERN"
    RHETORICAL_QUESTION = "RHETORICAL_QUESTION"


# =============================================================================
# RENDER SPEC (description -> structured meme)
# =============================================================================

class RenderSpec(BaseModel):
    """
    Normalized meme description consumed by the renderer.
    
    Serialized with the camelCase keys used on the wire:
    {"templateId": "...", "top": "...", "bottom": "...", "width": 1200, "height": 675, "bg": null}
    """
    
    model_config = ConfigDict(populate_by_name=True)
    
    template_id: str = Field("gradient", alias="templateId")
    top: str = ""
    bottom: str = ""
    width: int = 1200
    height: int = 675
    bg: Optional[str] = Field(
        None,
        description="Background image reference (URL or data URL), if any"
    )


class GenerateRequest(BaseModel):
    """Request body for POST /generate."""
    
    description: Optional[str] = Field(
        "",
        description="Free-text description of the meme to build",
        examples=["top: Writing tests\nbottom: Shipping on Friday\ntemplate: drake"]
    )


class GenerateResponse(BaseModel):
    """Response body for POST /generate."""
    
    spec: RenderSpec
    source: SpecSource


# =============================================================================
# SARCASM
# =============================================================================

class SarcasmResult(BaseModel):
    """Bounded sarcasm confidence plus the indicators that fired, in detection order."""
    
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    indicators: List[SarcasmIndicator] = Field(default_factory=list)


# =============================================================================
# TEMPLATES
# =============================================================================

class TextLayout(BaseModel):
    """Relative vertical position of one text block in a template."""
    
    position: str
    y: float = Field(..., ge=0.0, le=1.0)


class MemeTemplate(BaseModel):
    """A layout preset exposed by GET /templates."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: str
    name: str
    description: str
    width: int
    height: int
    text_layout: List[TextLayout] = Field(..., alias="textLayout")


class TemplateListResponse(BaseModel):
    templates: List[MemeTemplate]


# =============================================================================
# RENDER RESPONSES
# =============================================================================

class DataUrlResponse(BaseModel):
    """Response body for POST /render-dataurl."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    data_url: str = Field(..., alias="dataUrl")


# =============================================================================
# ERROR RESPONSE SCHEMAS
# =============================================================================

class ErrorResponse(BaseModel):
    """Single error message."""
    
    error: str = Field(..., description="Human-readable error message")


class ValidationErrorResponse(BaseModel):
    """Every validation problem found in a render request."""
    
    errors: List[str] = Field(..., description="All validation failures, not just the first")


# =============================================================================
# RENDER REQUEST (validated form input handed to the renderer)
# =============================================================================

class RenderRequest(BaseModel):
    """Validated input for one render."""
    
    top_text: str = ""
    bottom_text: str = ""
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    background: Optional[bytes] = None
