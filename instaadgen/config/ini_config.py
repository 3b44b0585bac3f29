########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

INI_DEFAULT_NAME = "InstaAdGen.ini"

DEFAULT_PUBLISH_ENDPOINT = "http://localhost:3001/api/publish-to-instagram"
DEFAULT_IMAGE_URL = (
    "https://images.pexels.com/photos/1029757/pexels-photo-1029757.jpeg"
    "?auto=compress&cs=tinysrgb&w=1080&h=1080&fit=crop"
)


@dataclass(frozen=True)
class AppSettings:
    flask_host: str
    flask_port: int
    flask_debug: bool
    secret_key: str

    log_level: str

    firebase_credentials_path: Optional[Path]
    firebase_storage_bucket: str
    firebase_web_api_key: str

    gemini_model: str

    secret_codec: str
    fernet_key: str

    instagram_access_token: str
    instagram_user_id: str
    graph_api_version: str
    meta_app_secret: str

    publish_endpoint_url: str
    publish_timeout_seconds: int
    default_image_url: str

    stock_image_urls: tuple[str, ...]
    stock_video_urls: tuple[str, ...]


def _split_list(raw: str) -> tuple[str, ...]:
    return tuple(u.strip() for u in (raw or "").replace("\n", ",").split(",") if u.strip())


class IniConfig:
    """
    Adapter around ConfigParser.
    Keeps INI handling out of the services and routes.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser(interpolation=None)
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # If APP_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    @property
    def ini_path(self) -> Path:
        return self._ini_path

    def _str(self, section: str, key: str, fallback: str = "") -> str:
        return (self._cfg.get(section, key, fallback=fallback) or "").strip()

    def _optional_path(self, section: str, key: str) -> Optional[Path]:
        raw = self._str(section, key)
        if not raw:
            return None
        raw = os.path.expandvars(os.path.expanduser(raw))
        path = Path(raw)
        if not path.is_absolute():
            path = self._ini_path.parent / path
        return path.resolve()

    def load_settings(self) -> AppSettings:
        # Flask
        flask_host = self._str("flask", "host", "127.0.0.1") or "127.0.0.1"
        flask_port = self._cfg.getint("flask", "port", fallback=3001)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=False)
        secret_key = self._str("flask", "secret_key")

        log_level = (self._str("logging", "level", "INFO") or "INFO").upper()

        # Firebase
        firebase_credentials_path = self._optional_path("firebase", "credentials_path")
        firebase_storage_bucket = self._str("firebase", "storage_bucket")
        firebase_web_api_key = self._str("firebase", "web_api_key")

        gemini_model = self._str("gemini", "model", "gemini-2.5-flash") or "gemini-2.5-flash"

        # Stored secrets
        secret_codec = (self._str("secrets", "codec", "fernet") or "fernet").lower()
        fernet_key = self._str("secrets", "fernet_key")

        # Instagram Graph API; the environment wins over the INI for the token pair
        instagram_access_token = os.getenv("INSTAGRAM_ACCESS_TOKEN") or self._str("instagram", "access_token")
        instagram_user_id = os.getenv("IG_USER_ID") or self._str("instagram", "ig_user_id")
        graph_api_version = self._str("instagram", "graph_api_version", "v19.0") or "v19.0"
        meta_app_secret = self._str("instagram", "app_secret")

        # Publishing
        publish_endpoint_url = self._str("publish", "endpoint_url") or DEFAULT_PUBLISH_ENDPOINT
        publish_timeout_seconds = self._cfg.getint("publish", "timeout_seconds", fallback=60)
        default_image_url = self._str("publish", "default_image_url") or DEFAULT_IMAGE_URL

        stock_image_urls = _split_list(self._str("media", "stock_image_urls")) or (default_image_url,)
        stock_video_urls = _split_list(self._str("media", "stock_video_urls"))

        # Validate
        if not secret_key:
            raise ValueError("flask.secret_key is empty in INI")
        if secret_codec not in ("fernet", "base64"):
            raise ValueError(f"Unknown secrets.codec: {secret_codec!r} (expected 'fernet' or 'base64')")
        if secret_codec == "fernet" and not fernet_key:
            raise ValueError("secrets.fernet_key is required when secrets.codec = fernet")
        if firebase_credentials_path is not None and not firebase_credentials_path.exists():
            raise FileNotFoundError(f"Firebase credentials not found: {firebase_credentials_path}")

        return AppSettings(
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
            secret_key=secret_key,
            log_level=log_level,
            firebase_credentials_path=firebase_credentials_path,
            firebase_storage_bucket=firebase_storage_bucket,
            firebase_web_api_key=firebase_web_api_key,
            gemini_model=gemini_model,
            secret_codec=secret_codec,
            fernet_key=fernet_key,
            instagram_access_token=instagram_access_token,
            instagram_user_id=instagram_user_id,
            graph_api_version=graph_api_version,
            meta_app_secret=meta_app_secret,
            publish_endpoint_url=publish_endpoint_url,
            publish_timeout_seconds=publish_timeout_seconds,
            default_image_url=default_image_url,
            stock_image_urls=stock_image_urls,
            stock_video_urls=stock_video_urls,
        )
