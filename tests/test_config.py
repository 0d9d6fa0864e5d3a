from memerender.config import Settings

from tests.conftest import make_settings


def test_defaults():
    settings = make_settings()
    assert settings.MAX_TEXT_LENGTH == 200
    assert (settings.MIN_DIMENSION, settings.MAX_DIMENSION) == (800, 2400)
    assert (settings.DEFAULT_WIDTH, settings.DEFAULT_HEIGHT) == (1200, 675)
    assert settings.MAX_UPLOAD_BYTES == 5 * 1024 * 1024
    assert settings.MAX_IMAGE_PIXELS == 40_000_000
    assert settings.llama_configured is False


def test_llama_needs_url_and_key():
    assert make_settings(LLAMA_API_URL="https://x").llama_configured is False
    assert make_settings(LLAMA_API_URL="https://x", LLAMA_API_KEY="k").llama_configured is True


def test_legacy_llama4_env_names(monkeypatch):
    monkeypatch.delenv("LLAMA_API_URL", raising=False)
    monkeypatch.delenv("LLAMA_API_KEY", raising=False)
    monkeypatch.setenv("LLAMA4_API_URL", "https://legacy.example.com")
    monkeypatch.setenv("LLAMA4_API_KEY", "legacy-key")
    
    settings = Settings(_env_file=None)
    assert settings.LLAMA_API_URL == "https://legacy.example.com"
    assert settings.llama_configured is True


def test_cors_origins_list():
    settings = make_settings(CORS_ORIGINS="https://a.com, https://b.com,")
    assert settings.cors_origins_list == ["https://a.com", "https://b.com"]
