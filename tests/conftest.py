import random
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from memerender.config import Settings, get_settings
from memerender.main import app


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any local .env file."""
    values = {"LLAMA_API_URL": "", "LLAMA_API_KEY": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_png(size=(100, 50), color="red") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def llama_settings():
    return make_settings(
        LLAMA_API_URL="https://llama.example.com/generate",
        LLAMA_API_KEY="test-key",
    )


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def measure():
    """Fixed-width measurement: 10px per character."""
    return lambda text: len(text) * 10


@pytest.fixture
def client(settings):
    """
    Provides a TestClient with settings overridden so the tests never
    depend on the host environment.
    """
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
