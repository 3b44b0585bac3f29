## routes.py
from __future__ import annotations

from typing import Callable

from flask import Blueprint, abort, current_app, redirect, render_template, request, session, url_for

from instaadgen.domain.models import GeneratedMedia, MetaCredentials, SavedAd
from instaadgen.services.auth_service import AuthService
from instaadgen.services.gemini_service import GeminiService, friendly_generation_error, is_api_key_error
from instaadgen.services.media_service import MediaGenerationService
from instaadgen.services.publish_service import PublishClient, friendly_publish_error
from instaadgen.web.guards import current_user, login_required, public_only, start_session

INVALID_CREDENTIALS = "Invalid credentials. Password must be at least 6 characters."
MIN_PASSWORD_LENGTH = 6
TITLE_LENGTH = 50


def _ad_title(caption: str) -> str:
    return caption[:TITLE_LENGTH] + "..."


def create_blueprint(
    auth_service: AuthService,
    gemini_factory: Callable[[], GeminiService],
    media_service: MediaGenerationService,
    publish_client: PublishClient,
    default_image_url: str,
) -> Blueprint:
    bp = Blueprint("web", __name__)

    def owned_ad(ad_id: str) -> SavedAd:
        ad = auth_service.get_ad(ad_id)
        if ad is None or ad.user_id != session.get("uid"):
            abort(404)
        return ad

    def render_generator(code: int = 200, **model):
        user = current_user()
        page_model = dict(
            user=user,
            prompt="",
            ad=None,
            media=[],
            error=None,
            publish_status="idle",
            post_id=None,
            show_api_key_form=False,
            default_image_url=default_image_url,
        )
        page_model.update(model)
        if not page_model["show_api_key_form"] and auth_service.get_gemini_api_key(user.id) is None:
            page_model["show_api_key_form"] = True
        return render_template("generator.html", **page_model), code

    # -----------------------------
    # Authentication
    # -----------------------------
    @bp.get("/")
    def index():
        if session.get("uid"):
            return redirect(url_for("web.dashboard"))
        return redirect(url_for("web.login"))

    @bp.route("/login", methods=["GET", "POST"])
    @public_only
    def login():
        status = request.args.get("status")
        if request.method == "GET":
            return render_template("login.html", email_or_username="", error=None, status=status)

        email_or_username = (request.form.get("email_or_username") or "").strip()
        password = request.form.get("password") or ""

        error = None
        if not email_or_username:
            error = "Please enter your email or username"
        elif not password:
            error = "Please enter your password"
        if error:
            return render_template("login.html", email_or_username=email_or_username, error=error, status=None), 400

        profile = auth_service.login(email_or_username, password)
        if profile is None:
            current_app.logger.info("Login failed for %r", email_or_username)
            return render_template(
                "login.html", email_or_username=email_or_username, error=INVALID_CREDENTIALS, status=None
            ), 401

        start_session(profile)
        current_app.logger.info("User %s signed in", profile.uid)
        return redirect(url_for("web.dashboard"))

    @bp.route("/signup", methods=["GET", "POST"])
    @public_only
    def signup():
        if request.method == "GET":
            return render_template("signup.html", email="", username="", error=None)

        email = (request.form.get("email") or "").strip()
        username = (request.form.get("username") or "").strip()
        password = request.form.get("password") or ""

        error = None
        if not email or not username or not password:
            error = "Please fill in all fields"
        elif len(password) < MIN_PASSWORD_LENGTH:
            error = "Password must be at least 6 characters."
        if error:
            return render_template("signup.html", email=email, username=username, error=error), 400

        try:
            profile = auth_service.sign_up(email, password, username)
        except Exception as e:
            return render_template("signup.html", email=email, username=username, error=f"Sign up failed: {e}"), 400

        start_session(profile)
        return redirect(url_for("web.dashboard"))

    @bp.post("/logout")
    @login_required
    def logout():
        uid = session.get("uid")
        try:
            auth_service.sign_out(uid)
        except Exception:
            current_app.logger.exception("Logout error for %s", uid)
        session.clear()
        return redirect(url_for("web.login"))

    # -----------------------------
    # Dashboard
    # -----------------------------
    @bp.get("/dashboard")
    @login_required
    def dashboard():
        user = current_user()
        try:
            profile = auth_service.ensure_profile(user.id, user.email, user.username)
        except Exception:
            current_app.logger.exception("Could not load profile for %s", user.id)
            profile = None
        return render_template("dashboard.html", user=user, profile=profile, status=request.args.get("status"))

    # -----------------------------
    # AI generator
    # -----------------------------
    @bp.get("/generator")
    @login_required
    def generator():
        ad_id = (request.args.get("ad_id") or "").strip()
        ad = owned_ad(ad_id) if ad_id else None
        prompt = (request.args.get("prompt") or "").strip() or (ad.prompt if ad else "")
        return render_generator(prompt=prompt, ad=ad)

    @bp.post("/generator/api-key")
    @login_required
    def save_api_key():
        prompt = (request.form.get("prompt") or "").strip()
        api_key = (request.form.get("api_key") or "").strip()
        if not api_key:
            return render_generator(400, prompt=prompt, show_api_key_form=True, error="Please enter your Gemini API key")

        try:
            auth_service.save_gemini_api_key(session["uid"], api_key)
        except Exception:
            return render_generator(
                500, prompt=prompt, show_api_key_form=True, error="Invalid API key. Please check and try again."
            )
        return redirect(url_for("web.generator", prompt=prompt or None))

    @bp.post("/generator/generate")
    @login_required
    def generate():
        uid = session["uid"]
        prompt = (request.form.get("prompt") or "").strip()
        if not prompt:
            return render_generator(400, error="Please enter a description for your ad")

        api_key = auth_service.get_gemini_api_key(uid)
        if not api_key:
            return render_generator(prompt=prompt, show_api_key_form=True)

        gemini = gemini_factory()
        try:
            gemini.initialize(api_key)
            content = gemini.generate_ad_content(prompt)
        except Exception as e:
            current_app.logger.warning("Generation failed for %s: %s", uid, e)
            if is_api_key_error(e):
                return render_generator(400, prompt=prompt, show_api_key_form=True, error=str(e))
            return render_generator(502, prompt=prompt, error=friendly_generation_error(e))

        try:
            ad_id = auth_service.save_ad(uid, _ad_title(content.caption), prompt, content)
        except Exception as e:
            return render_generator(500, prompt=prompt, error=f"Failed to save ad: {e}")

        current_app.logger.info("Generated ad %s for %s", ad_id, uid)
        return redirect(url_for("web.generator", ad_id=ad_id))

    @bp.post("/generator/<ad_id>/media")
    @login_required
    def generate_media(ad_id: str):
        ad = owned_ad(ad_id)
        upload = request.files.get("media_file")

        try:
            if upload is not None and upload.filename:
                url = auth_service.upload_media(
                    upload.read(), upload.filename, ad.user_id, ad.id, content_type=upload.mimetype
                )
                media = [GeneratedMedia(type="image", url=url, description=upload.filename)]
            else:
                media_type = (request.form.get("media_type") or "image").strip()
                media = media_service.generate_media_from_ad_content(ad.content, media_type)
        except Exception as e:
            current_app.logger.exception("Media generation failed for ad %s", ad_id)
            return render_generator(500, prompt=ad.prompt, ad=ad, error=str(e) or "Failed to generate media")

        return render_generator(prompt=ad.prompt, ad=ad, media=media)

    @bp.post("/generator/<ad_id>/publish")
    @login_required
    def publish(ad_id: str):
        ad = owned_ad(ad_id)
        image_url = (request.form.get("image_url") or "").strip() or default_image_url

        try:
            post_id = publish_client.publish(image_url, ad.content.full_caption)
        except Exception as e:
            current_app.logger.warning("Publishing ad %s failed: %s", ad_id, e)
            return render_generator(
                502, prompt=ad.prompt, ad=ad, publish_status="error", error=friendly_publish_error(str(e))
            )

        # the post is live from here on, so the page reports success either way
        try:
            auth_service.mark_ad_as_published(ad.id)
        except Exception:
            current_app.logger.exception("Ad %s published as %s but could not be marked published", ad_id, post_id)

        current_app.logger.info("Ad %s published as post %s", ad_id, post_id)
        return render_generator(
            prompt=ad.prompt, ad=auth_service.get_ad(ad.id) or ad, publish_status="success", post_id=post_id
        )

    # -----------------------------
    # Credentials
    # -----------------------------
    def render_credentials(code: int = 200, **model):
        uid = session["uid"]
        page_model = dict(
            user=current_user(),
            tab="basic",
            instagram=auth_service.get_instagram_credentials(uid),
            meta=auth_service.get_meta_credentials(uid),
            save_status="idle",
            error=None,
        )
        page_model.update(model)
        return render_template("credentials.html", **page_model), code

    @bp.get("/credentials")
    @login_required
    def credentials():
        tab = request.args.get("tab") if request.args.get("tab") in ("basic", "api") else "basic"
        return render_credentials(tab=tab)

    @bp.post("/credentials/instagram")
    @login_required
    def save_instagram_credentials():
        username = (request.form.get("username") or "").strip()
        password = request.form.get("password") or ""
        if not username or not password:
            return render_credentials(400, tab="basic", save_status="error", error="Please fill in all fields")

        try:
            auth_service.save_instagram_credentials(session["uid"], username, password)
        except Exception as e:
            return render_credentials(500, tab="basic", save_status="error", error=f"Failed to save credentials: {e}")
        return render_credentials(tab="basic", save_status="success")

    @bp.post("/credentials/meta")
    @login_required
    def save_meta_credentials():
        form = {k: (request.form.get(k) or "").strip() for k in
                ("app_id", "app_secret", "access_token", "business_account_id", "instagram_account_id")}
        if not all(form[k] for k in ("app_id", "app_secret", "access_token", "business_account_id")):
            return render_credentials(400, tab="api", save_status="error", error="Please fill in all required fields")

        try:
            auth_service.save_meta_credentials(session["uid"], MetaCredentials(**form))
        except Exception as e:
            return render_credentials(500, tab="api", save_status="error", error=f"Failed to save credentials: {e}")
        return render_credentials(tab="api", save_status="success")

    # -----------------------------
    # History
    # -----------------------------
    @bp.get("/history")
    @login_required
    def history():
        ads = auth_service.get_user_ads(session["uid"])
        return render_template("history.html", user=current_user(), ads=ads, error=None)

    @bp.post("/history/<ad_id>/delete")
    @login_required
    def delete_ad(ad_id: str):
        ad = owned_ad(ad_id)
        try:
            auth_service.delete_ad(ad.id)
        except Exception:
            ads = auth_service.get_user_ads(session["uid"])
            return render_template("history.html", user=current_user(), ads=ads, error="Failed to delete ad"), 500
        return redirect(url_for("web.history"))

    @bp.get("/history/<ad_id>/recreate")
    @login_required
    def recreate_ad(ad_id: str):
        ad = owned_ad(ad_id)
        return redirect(url_for("web.generator", prompt=ad.prompt))

    return bp
