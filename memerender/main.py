"""
Meme Renderer - Main Application Entry Point.

This FastAPI application composites captioned images server-side.
It exposes:
1. Rendering endpoints (PNG bytes or base64 data URL)
2. A template catalogue
3. Text heuristics (sarcasm scoring, description -> render spec)

The optional LLaMA API is only used by /generate and is never required.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from memerender.config import get_settings
from memerender.routes.meme import router as meme_router
from memerender.services.renderer import RenderError

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.
    
    Handles startup and shutdown events.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    
    # Log configuration status (without exposing secrets)
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"LLaMA API configured: {settings.llama_configured}")
    logger.info(f"Caption font override: {settings.FONT_PATH or 'none'}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    
    if not settings.llama_configured:
        logger.info("LLAMA_API_URL/LLAMA_API_KEY not set; /generate uses the heuristic parser only")
    
    logger.info("Application startup complete")
    
    yield
    
    logger.info("Application shutdown")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
## Meme Renderer

Server-side meme compositing: captions are wrapped, centred and drawn with
a black outline over an uploaded background or a random gradient.

### Key Endpoints

- `POST /render` - multipart form -> PNG
- `POST /render-dataurl` - multipart form -> base64 data URL
- `POST /generate` - description -> render spec
- `GET /templates` - layout presets
- `GET /sarcasm?text=...` - sarcasm heuristic
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(RenderError)
async def render_error_handler(request: Request, exc: RenderError):
    logger.error(f"Render failed for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(meme_router)


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn
    
    # In production, use: uvicorn memerender.main:app --host 0.0.0.0 --port 3000
    uvicorn.run(
        "memerender.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

if __name__ == "__main__":
    run()
