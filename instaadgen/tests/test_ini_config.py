from __future__ import annotations

from pathlib import Path

import pytest

from instaadgen.config.ini_config import DEFAULT_IMAGE_URL, DEFAULT_PUBLISH_ENDPOINT, IniConfig

MINIMAL_INI = """
[flask]
secret_key = test-secret

[secrets]
codec = base64
"""


def write_ini(tmp_path: Path, text: str) -> IniConfig:
    p = tmp_path / "InstaAdGen.ini"
    p.write_text(text, encoding="utf-8")
    return IniConfig(p)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("APP_INI", "INSTAGRAM_ACCESS_TOKEN", "IG_USER_ID"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path: Path):
    s = write_ini(tmp_path, MINIMAL_INI).load_settings()

    assert s.flask_port == 3001
    assert s.flask_debug is False
    assert s.log_level == "INFO"
    assert s.gemini_model == "gemini-2.5-flash"
    assert s.secret_codec == "base64"
    assert s.publish_endpoint_url == DEFAULT_PUBLISH_ENDPOINT
    assert s.default_image_url == DEFAULT_IMAGE_URL
    assert s.stock_image_urls == (DEFAULT_IMAGE_URL,)
    assert s.stock_video_urls == ()
    assert s.firebase_credentials_path is None


def test_multiline_media_lists(tmp_path: Path):
    ini = MINIMAL_INI + """
[media]
stock_image_urls =
    https://a/1.jpg
    https://a/2.jpg
stock_video_urls = https://v/1.mp4, https://v/2.mp4
"""
    s = write_ini(tmp_path, ini).load_settings()

    assert s.stock_image_urls == ("https://a/1.jpg", "https://a/2.jpg")
    assert s.stock_video_urls == ("https://v/1.mp4", "https://v/2.mp4")


def test_environment_overrides_instagram_pair(tmp_path: Path, monkeypatch):
    ini = MINIMAL_INI + """
[instagram]
access_token = from-ini
ig_user_id = 111
"""
    monkeypatch.setenv("INSTAGRAM_ACCESS_TOKEN", "from-env")

    s = write_ini(tmp_path, ini).load_settings()

    assert s.instagram_access_token == "from-env"
    assert s.instagram_user_id == "111"


def test_relative_credentials_path_resolves_next_to_ini(tmp_path: Path):
    (tmp_path / "sa.json").write_text("{}", encoding="utf-8")
    s = write_ini(tmp_path, MINIMAL_INI + "\n[firebase]\ncredentials_path = sa.json\n").load_settings()
    assert s.firebase_credentials_path == (tmp_path / "sa.json").resolve()


@pytest.mark.parametrize("text", [
    "[flask]\nsecret_key =\n[secrets]\ncodec = base64\n",
    "[flask]\nsecret_key = x\n[secrets]\ncodec = rot13\n",
    "[flask]\nsecret_key = x\n[secrets]\ncodec = fernet\n",
])
def test_invalid_settings_raise(tmp_path: Path, text: str):
    with pytest.raises(ValueError):
        write_ini(tmp_path, text).load_settings()


def test_missing_credentials_file_raises(tmp_path: Path):
    ini = write_ini(tmp_path, MINIMAL_INI + "\n[firebase]\ncredentials_path = missing.json\n")
    with pytest.raises(FileNotFoundError):
        ini.load_settings()


def test_missing_ini_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        IniConfig(tmp_path / "nope.ini")


def test_app_ini_env_var(tmp_path: Path, monkeypatch):
    ini = write_ini(tmp_path, MINIMAL_INI)
    monkeypatch.setenv("APP_INI", str(ini.ini_path))
    assert IniConfig.from_env_or_default().ini_path == ini.ini_path


def test_shipped_ini_loads():
    shipped = Path(__file__).resolve().parents[2] / "InstaAdGen.ini"
    s = IniConfig(shipped).load_settings()
    assert s.secret_codec == "base64"
    assert s.flask_port == 3001
