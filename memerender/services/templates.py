import logging
from typing import Dict, List, Optional

from memerender.schemas.meme import MemeTemplate, TextLayout

logger = logging.getLogger(__name__)

TEMPLATES: List[MemeTemplate] = [
    MemeTemplate(
        id="gradient",
        name="Gradient Meme",
        description="Simple gradient background with top/bottom text",
        width=1200,
        height=675,
        text_layout=[
            TextLayout(position="top", y=0.12),
            TextLayout(position="bottom", y=0.88),
        ],
    ),
    MemeTemplate(
        id="drake",
        name="Drake (mock/approve)",
        description="Two rows: top row (disapprove), bottom row (approve)",
        width=1200,
        height=800,
        text_layout=[
            TextLayout(position="top", y=0.25),
            TextLayout(position="bottom", y=0.75),
        ],
    ),
    MemeTemplate(
        id="loss",
        name="Loss (4-panel)",
        description="Four-panel meme layout (coming soon)",
        width=1200,
        height=900,
        text_layout=[
            TextLayout(position="top-left", y=0.25),
            TextLayout(position="top-right", y=0.25),
            TextLayout(position="bottom-left", y=0.75),
            TextLayout(position="bottom-right", y=0.75),
        ],
    ),
]


class TemplateService:
    """
    Read-only catalogue of layout presets.
    """
    
    def __init__(self, templates: Optional[List[MemeTemplate]] = None):
        self.templates: Dict[str, MemeTemplate] = {
            template.id: template for template in (templates or TEMPLATES)
        }
        logger.debug(f"Loaded {len(self.templates)} templates")
    
    def list_templates(self) -> List[MemeTemplate]:
        """Return every template in catalogue order."""
        return list(self.templates.values())
    
    def get_template_by_id(self, template_id: str) -> Optional[MemeTemplate]:
        """Return a template by id, or None if not found."""
        return self.templates.get(template_id)


# Dependency injection support
_template_service = None

def get_template_service() -> TemplateService:
    global _template_service
    if _template_service is None:
        _template_service = TemplateService()
    return _template_service
