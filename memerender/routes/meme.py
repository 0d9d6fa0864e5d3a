"""
Meme API routes.

This module defines the HTTP surface around the render services:
1. GET  /templates        - layout presets
2. GET  /sarcasm          - sarcasm heuristic
3. POST /render           - multipart form -> PNG
4. POST /render-dataurl   - multipart form -> {"dataUrl": ...}
5. POST /generate         - description -> render spec

Request validation (text length, dimension bounds, upload size) lives here;
the renderer itself assumes its inputs are already within bounds.
"""

import logging
import os
from typing import Annotated, List, Optional, Union

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from memerender.config import Settings, get_settings
from memerender.schemas.meme import (
    DataUrlResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    RenderRequest,
    SarcasmResult,
    TemplateListResponse,
    ValidationErrorResponse,
)
from memerender.services.description import leading_int
from memerender.services.generator import SpecGenerator, get_spec_generator
from memerender.services.renderer import MemeRenderer, get_meme_renderer
from memerender.services.sarcasm import detect_sarcasm
from memerender.services.templates import TemplateService, get_template_service

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["meme"])

FORM_PATH = os.path.join(os.path.dirname(__file__), "..", "static", "form.html")

RENDER_RESPONSES = {
    400: {"description": "Invalid text length or dimensions", "model": ValidationErrorResponse},
    413: {"description": "Background upload too large", "model": ErrorResponse},
    500: {"description": "Rendering failed", "model": ErrorResponse},
}


# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def parse_dimension(value: Optional[str], default: int) -> Optional[int]:
    """
    Parse a width/height form field.
    
    Blank means `default`; otherwise the leading integer ("1200px" -> 1200).
    Returns None when there is no leading integer.
    """
    if value is None or not value.strip():
        return default
    return leading_int(value)


def validate_render_input(
    top: str,
    bottom: str,
    width: Optional[int],
    height: Optional[int],
    settings: Settings,
) -> List[str]:
    """
    Collect every validation problem with a render request.
    
    Returns:
        List of error messages, empty when the request is valid
    """
    errors = []
    max_len = settings.MAX_TEXT_LENGTH
    low, high = settings.MIN_DIMENSION, settings.MAX_DIMENSION
    
    if top and len(top) > max_len:
        errors.append(f"top text exceeds {max_len} chars")
    if bottom and len(bottom) > max_len:
        errors.append(f"bottom text exceeds {max_len} chars")
    if width is None or width < low or width > high:
        errors.append(f"width must be {low}-{high}")
    if height is None or height < low or height > high:
        errors.append(f"height must be {low}-{high}")
    
    return errors


async def read_render_request(
    top: str,
    bottom: str,
    width: Optional[str],
    height: Optional[str],
    bg: Optional[UploadFile],
    settings: Settings,
) -> Union[RenderRequest, JSONResponse]:
    """
    Validate the multipart render form.
    
    Returns the RenderRequest to render, or the error response to send.
    The upload is read at most one byte past the limit and oversized files
    are rejected before any decoding.
    """
    top = (top or "").strip()
    bottom = (bottom or "").strip()
    parsed_width = parse_dimension(width, settings.DEFAULT_WIDTH)
    parsed_height = parse_dimension(height, settings.DEFAULT_HEIGHT)
    
    errors = validate_render_input(top, bottom, parsed_width, parsed_height, settings)
    if errors:
        logger.info(f"Rejected render request: {errors}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})
    
    background = None
    if bg is not None:
        limit = settings.MAX_UPLOAD_BYTES
        data = await bg.read(limit + 1)
        if len(data) > limit:
            logger.info(f"Rejected background upload '{bg.filename}' over {limit} bytes")
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"error": f"File exceeds {limit / (1024 * 1024):g} MB limit"},
            )
        background = data or None
    
    return RenderRequest(
        top_text=top,
        bottom_text=bottom,
        width=parsed_width,
        height=parsed_height,
        background=background,
    )


# =============================================================================
# ROUTES
# =============================================================================

@router.get("/", response_class=PlainTextResponse, summary="Health string")
async def root() -> str:
    return "meme renderer OK"


@router.get("/form", response_class=FileResponse, summary="Browser form for /render")
async def form() -> FileResponse:
    return FileResponse(FORM_PATH, media_type="text/html; charset=utf-8")


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Check if the service is running and whether the generation model is configured.",
)
async def health_check(settings: Annotated[Settings, Depends(get_settings)]):
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "llama_configured": settings.llama_configured,
    }


@router.get(
    "/templates",
    response_model=TemplateListResponse,
    summary="List layout templates",
)
async def list_templates(
    template_service: Annotated[TemplateService, Depends(get_template_service)],
) -> TemplateListResponse:
    return TemplateListResponse(templates=template_service.list_templates())


@router.get(
    "/sarcasm",
    response_model=SarcasmResult,
    responses={400: {"description": "Missing text", "model": ErrorResponse}},
    summary="Score text for sarcasm",
)
async def sarcasm(text: Annotated[str, Query()] = ""):
    """
    Returns a confidence in [0, 1] and the indicators that fired.
    """
    if not text:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "text parameter required"},
        )
    return detect_sarcasm(text)


@router.post(
    "/render",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}, **RENDER_RESPONSES},
    summary="Render a meme as PNG",
)
async def render(
    settings: Annotated[Settings, Depends(get_settings)],
    renderer: Annotated[MemeRenderer, Depends(get_meme_renderer)],
    top: Annotated[str, Form()] = "",
    bottom: Annotated[str, Form()] = "",
    width: Annotated[Optional[str], Form()] = None,
    height: Annotated[Optional[str], Form()] = None,
    bg: Annotated[Optional[UploadFile], File()] = None,
):
    """
    Render top/bottom captions over an uploaded background (field `bg`)
    or a random gradient, and return the PNG inline.
    """
    request = await read_render_request(top, bottom, width, height, bg, settings)
    if isinstance(request, JSONResponse):
        return request
    
    png = await run_in_threadpool(
        renderer.render,
        request.top_text,
        request.bottom_text,
        request.width,
        request.height,
        request.background,
    )
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": 'inline; filename="meme.png"'},
    )


@router.post(
    "/render-dataurl",
    response_model=DataUrlResponse,
    responses=RENDER_RESPONSES,
    summary="Render a meme as a base64 data URL",
)
async def render_dataurl(
    settings: Annotated[Settings, Depends(get_settings)],
    renderer: Annotated[MemeRenderer, Depends(get_meme_renderer)],
    top: Annotated[str, Form()] = "",
    bottom: Annotated[str, Form()] = "",
    width: Annotated[Optional[str], Form()] = None,
    height: Annotated[Optional[str], Form()] = None,
    bg: Annotated[Optional[UploadFile], File()] = None,
):
    """Same as /render but returns {"dataUrl": "data:image/png;base64,..."}."""
    request = await read_render_request(top, bottom, width, height, bg, settings)
    if isinstance(request, JSONResponse):
        return request
    
    data_url = await run_in_threadpool(
        renderer.render_data_url,
        request.top_text,
        request.bottom_text,
        request.width,
        request.height,
        request.background,
    )
    return DataUrlResponse(data_url=data_url)


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={400: {"description": "Empty description", "model": ErrorResponse}},
    summary="Turn a description into a render spec",
)
async def generate(
    body: GenerateRequest,
    generator: Annotated[SpecGenerator, Depends(get_spec_generator)],
):
    """
    Uses the LLaMA API when LLAMA_API_URL and LLAMA_API_KEY are set,
    otherwise (or when that call fails) the heuristic parser. `source`
    reports which one produced the spec.
    """
    description = (body.description or "").strip()
    if not description:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "description required"},
        )
    
    spec, source = await generator.generate(description)
    logger.info(f"Generated spec from {source.value} source (template={spec.template_id})")
    return GenerateResponse(spec=spec, source=source)
