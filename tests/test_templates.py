from memerender.schemas.meme import MemeTemplate, TextLayout
from memerender.services.templates import TemplateService


def test_catalogue_order_and_sizes():
    templates = TemplateService().list_templates()
    assert [(t.id, t.width, t.height) for t in templates] == [
        ("gradient", 1200, 675),
        ("drake", 1200, 800),
        ("loss", 1200, 900),
    ]


def test_get_template_by_id():
    service = TemplateService()
    drake = service.get_template_by_id("drake")
    assert drake is not None
    assert [layout.y for layout in drake.text_layout] == [0.25, 0.75]
    assert service.get_template_by_id("distracted_boyfriend") is None


def test_custom_catalogue():
    custom = MemeTemplate(
        id="square",
        name="Square",
        description="One caption",
        width=1000,
        height=1000,
        text_layout=[TextLayout(position="bottom", y=0.9)],
    )
    service = TemplateService([custom])
    assert service.list_templates() == [custom]


def test_serialized_with_camel_case_layout():
    dumped = TemplateService().get_template_by_id("gradient").model_dump(by_alias=True)
    assert "textLayout" in dumped
