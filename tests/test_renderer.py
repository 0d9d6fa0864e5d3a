import base64
import random
from io import BytesIO

import pytest
from PIL import Image

from memerender.services.renderer import MemeRenderer, RenderError

from tests.conftest import make_png

PNG_SIGNATURE = b"\x89PNG"


@pytest.fixture
def renderer(settings):
    return MemeRenderer(settings, rng=random.Random(1))


def test_render_returns_png(renderer):
    png = renderer.render("Hello", "World", 1200, 675)
    
    assert len(png) > 0
    assert png[:4] == PNG_SIGNATURE
    with Image.open(BytesIO(png)) as img:
        assert img.size == (1200, 675)
        assert img.format == "PNG"


def test_render_without_text(renderer):
    png = renderer.render("", "", 1200, 675)
    assert png[:4] == PNG_SIGNATURE


@pytest.mark.parametrize("width,height", [(1600, 900), (800, 2400), (2400, 800)])
def test_render_custom_dimensions(renderer, width, height):
    with Image.open(BytesIO(renderer.render("Test", "Size", width, height))) as img:
        assert img.size == (width, height)


def test_render_long_text_wraps(renderer):
    text = "this caption is far too long to fit on a single line of the meme " * 3
    png = renderer.render(text, text, 1200, 800)
    assert png[:4] == PNG_SIGNATURE


def test_render_draws_white_caption_with_black_outline(settings):
    renderer = MemeRenderer(settings, rng=random.Random(1))
    background = make_png((400, 400), color=(128, 128, 128))
    
    with Image.open(BytesIO(renderer.render("IIIIIIII", "", 1000, 1000, background))) as img:
        band = img.crop((80, 60, 920, 180)).convert("RGB")
        colors = {color for _, color in band.getcolors(maxcolors=1_000_000)}
    
    assert (255, 255, 255) in colors
    assert (0, 0, 0) in colors


def test_same_seed_gives_same_image(settings):
    first = MemeRenderer(settings, rng=random.Random(9)).render("A", "B", 900, 900)
    second = MemeRenderer(settings, rng=random.Random(9)).render("A", "B", 900, 900)
    assert first == second


def test_render_with_image_background(renderer):
    png = renderer.render("Top", "Bottom", 1200, 800, make_png((300, 100), "navy"))
    with Image.open(BytesIO(png)) as img:
        assert img.size == (1200, 800)


def test_undecodable_background_still_renders(renderer):
    png = renderer.render("Top", "Bottom", 1200, 800, b"\x00\x01garbage")
    assert png[:4] == PNG_SIGNATURE


def test_render_data_url(renderer):
    data_url = renderer.render_data_url("Hello", "World", 1200, 800)
    
    prefix = "data:image/png;base64,"
    assert data_url.startswith(prefix)
    assert base64.b64decode(data_url[len(prefix):])[:4] == PNG_SIGNATURE


def test_invalid_size_raises_render_error(renderer):
    with pytest.raises(RenderError):
        renderer.render("a", "b", 0, 100)


def test_encode_failure_raises_render_error(renderer, monkeypatch):
    def broken_save(self, *args, **kwargs):
        raise OSError("disk on fire")
    
    monkeypatch.setattr(Image.Image, "save", broken_save)
    with pytest.raises(RenderError):
        renderer.render("a", "b", 800, 800)
