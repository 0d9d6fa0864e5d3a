# Schemas package - Pydantic models for request/response validation
from memerender.schemas.meme import (
    DataUrlResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    MemeTemplate,
    RenderRequest,
    RenderSpec,
    SarcasmIndicator,
    SarcasmResult,
    SpecSource,
    TemplateListResponse,
    TextLayout,
    ValidationErrorResponse,
)

__all__ = [
    "DataUrlResponse",
    "ErrorResponse",
    "GenerateRequest",
    "GenerateResponse",
    "MemeTemplate",
    "RenderRequest",
    "RenderSpec",
    "SarcasmIndicator",
    "SarcasmResult",
    "SpecSource",
    "TemplateListResponse",
    "TextLayout",
    "ValidationErrorResponse",
]
