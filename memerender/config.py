"""
Configuration module for the Meme Renderer service.

This module handles all environment variable loading and configuration settings.
Render limits and the optional external generation model endpoint are configured here.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    All sensitive values and external endpoints should be configured
    via environment variables or a .env file.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
    
    # ==========================================================================
    # APPLICATION SETTINGS
    # ==========================================================================
    
    APP_NAME: str = "Meme Renderer"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    
    # ==========================================================================
    # EXTERNAL GENERATION MODEL (LLaMA) SETTINGS
    # ==========================================================================
    
    # Endpoint used by POST /generate. When either the URL or the key is
    # missing, descriptions are parsed by the local heuristic only.
    # The LLAMA4_* names are still honoured for existing deployments.
    LLAMA_API_URL: str = Field(
        default="",
        validation_alias=AliasChoices("LLAMA_API_URL", "LLAMA4_API_URL"),
    )
    LLAMA_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("LLAMA_API_KEY", "LLAMA4_API_KEY"),
    )
    
    # Supported values: "bearer", "api_key", "none"
    LLAMA_AUTH_TYPE: str = "bearer"
    
    # Timeout for a single generation call (in seconds). There is no retry.
    LLAMA_TIMEOUT: float = 15.0
    
    # ==========================================================================
    # RENDER LIMITS
    # ==========================================================================
    
    MAX_TEXT_LENGTH: int = 200
    MIN_DIMENSION: int = 800
    MAX_DIMENSION: int = 2400
    DEFAULT_WIDTH: int = 1200
    DEFAULT_HEIGHT: int = 675
    
    # Uploaded backgrounds larger than this are rejected before decoding
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    
    # Decoded backgrounds with more pixels than this fall back to the gradient
    MAX_IMAGE_PIXELS: int = 40_000_000
    
    # Optional TrueType font for captions. Falls back to common bold system fonts.
    FONT_PATH: Optional[str] = None
    
    # ==========================================================================
    # CORS SETTINGS
    # ==========================================================================
    
    # Comma separated, e.g. "https://memes.example.com,http://localhost:3000"
    CORS_ORIGINS: str = "*"
    
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS string into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
    
    @property
    def llama_configured(self) -> bool:
        """Whether both the generation model URL and key are set."""
        return bool(self.LLAMA_API_URL and self.LLAMA_API_KEY)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.
    
    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.
    
    Returns:
        Settings: The application settings instance
    """
    return Settings()
