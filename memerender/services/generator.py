"""
Description to render spec, model first then heuristic.

The generation model is strictly an enhancement: it is only tried when it
is fully configured, it gets exactly one attempt, and any failure is
absorbed by falling back to the local parser.
"""

import logging
from typing import Annotated, Tuple

from fastapi import Depends

from memerender.config import Settings, get_settings
from memerender.schemas.meme import RenderSpec, SpecSource
from memerender.services.description import parse_description
from memerender.services.llama import LlamaService, LlamaServiceError

logger = logging.getLogger(__name__)


class SpecGenerator:
    def __init__(self, settings: Settings, llama_service: LlamaService):
        self.settings = settings
        self.llama_service = llama_service
    
    async def generate(self, description: str) -> Tuple[RenderSpec, SpecSource]:
        """
        Build a RenderSpec for `description`.
        
        Returns:
            (spec, source) where source says which path produced the spec
        """
        if self.llama_service.configured:
            try:
                spec = await self.llama_service.generate_render_spec(description)
                return spec, SpecSource.LLAMA
            except LlamaServiceError as e:
                logger.warning(f"LLaMA call failed, falling back to heuristic parser: {e}")
        
        spec = parse_description(description, self.settings.MAX_TEXT_LENGTH)
        return spec, SpecSource.HEURISTIC


# Convenience function for dependency injection
def get_spec_generator(settings: Annotated[Settings, Depends(get_settings)]) -> SpecGenerator:
    """Get a SpecGenerator wired to the current settings."""
    return SpecGenerator(settings, LlamaService(settings))
