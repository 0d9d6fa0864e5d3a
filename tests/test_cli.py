from memerender.cli import main

from tests.conftest import make_png


def test_cli_writes_png(tmp_path):
    out = tmp_path / "meme.png"
    assert main(["--top", "hello", "--bottom", "world", "--out", str(out), "--width", "900", "--height", "900"]) == 0
    assert out.read_bytes()[:4] == b"\x89PNG"


def test_cli_uses_background_file(tmp_path):
    bg = tmp_path / "bg.png"
    bg.write_bytes(make_png((200, 100), "teal"))
    out = tmp_path / "meme.png"
    
    assert main(["--top", "hi", "--bg", str(bg), "--out", str(out)]) == 0
    assert out.exists()


def test_cli_missing_background_falls_back(tmp_path):
    out = tmp_path / "meme.png"
    assert main(["--bg", str(tmp_path / "missing.jpg"), "--out", str(out)]) == 0
    assert out.read_bytes()[:4] == b"\x89PNG"
