from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Callable, Optional

from flask import Flask

from instaadgen.adapters.firebase_app import firestore_client, init_firebase, storage_bucket
from instaadgen.adapters.firebase_identity import FirebaseIdentity
from instaadgen.adapters.instagram_graph import InstagramGraphPublisher
from instaadgen.config.ini_config import IniConfig
from instaadgen.logging_config import setup_logging
from instaadgen.repositories.ad_repository import AdRepository
from instaadgen.repositories.media_store import MediaStore
from instaadgen.repositories.user_repository import UserRepository
from instaadgen.services.auth_service import AuthService
from instaadgen.services.gemini_service import GeminiService
from instaadgen.services.media_service import MediaGenerationService
from instaadgen.services.publish_service import PublishClient
from instaadgen.services.secret_codec import codec_from_settings
from instaadgen.web.api import create_api_blueprint
from instaadgen.web.routes import create_blueprint

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def build_app(
    *,
    secret_key: str,
    auth_service: AuthService,
    gemini_factory: Callable[[], GeminiService],
    media_service: MediaGenerationService,
    publish_client: PublishClient,
    publisher: InstagramGraphPublisher,
    default_image_url: str,
    meta_app_secret: str = "",
) -> Flask:
    """Creates the Flask app around already-built services and registers both blueprints."""
    app = Flask(__name__, template_folder=str(TEMPLATE_DIR))
    app.secret_key = secret_key

    app.register_blueprint(create_blueprint(
        auth_service, gemini_factory, media_service, publish_client, default_image_url,
    ))
    app.register_blueprint(create_api_blueprint(publisher, meta_app_secret))
    return app


def create_app(ini: Optional[IniConfig] = None) -> Flask:
    ini = ini or IniConfig.from_env_or_default()
    settings = ini.load_settings()

    setup_logging(settings.log_level)

    firebase = init_firebase(settings.firebase_credentials_path, settings.firebase_storage_bucket)
    db = firestore_client(firebase)
    media_store = MediaStore(bucket=storage_bucket(firebase)) if settings.firebase_storage_bucket else None

    auth_service = AuthService(
        identity=FirebaseIdentity(web_api_key=settings.firebase_web_api_key, app=firebase),
        users=UserRepository(db=db),
        ads=AdRepository(db=db),
        codec=codec_from_settings(settings.secret_codec, settings.fernet_key),
        media=media_store,
    )

    media_service = MediaGenerationService(
        stock_image_urls=settings.stock_image_urls,
        stock_video_urls=settings.stock_video_urls,
    )

    publish_client = PublishClient(
        endpoint_url=settings.publish_endpoint_url,
        timeout_seconds=settings.publish_timeout_seconds,
    )

    publisher = InstagramGraphPublisher(
        access_token=settings.instagram_access_token,
        ig_user_id=settings.instagram_user_id,
        api_version=settings.graph_api_version,
        timeout_seconds=settings.publish_timeout_seconds,
    )

    app = build_app(
        secret_key=settings.secret_key,
        auth_service=auth_service,
        # one GeminiService per request; each user brings their own API key
        gemini_factory=partial(GeminiService, model_name=settings.gemini_model),
        media_service=media_service,
        publish_client=publish_client,
        publisher=publisher,
        default_image_url=settings.default_image_url,
        meta_app_secret=settings.meta_app_secret,
    )

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    app.logger.info("InstaAdGen configured from %s", ini.ini_path)
    return app
