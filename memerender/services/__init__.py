# Services package - rendering and text heuristics
from memerender.services.generator import SpecGenerator
from memerender.services.llama import LlamaService
from memerender.services.renderer import MemeRenderer, RenderError
from memerender.services.templates import TemplateService

__all__ = [
    "LlamaService",
    "MemeRenderer",
    "RenderError",
    "SpecGenerator",
    "TemplateService",
]
