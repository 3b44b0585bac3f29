from __future__ import annotations

import secrets

from flask import Blueprint, current_app, jsonify, redirect, request, url_for

from instaadgen.adapters.instagram_graph import InstagramGraphPublisher
from instaadgen.adapters.meta_signed_request import SignedRequestError, parse_signed_request
from instaadgen.domain.errors import PublishError


def create_api_blueprint(publisher: InstagramGraphPublisher, meta_app_secret: str = "") -> Blueprint:
    """JSON endpoints: the publish endpoint, health check and the Meta app callbacks."""
    bp = Blueprint("api", __name__)

    @bp.post("/api/publish-to-instagram")
    def publish_to_instagram():
        if not publisher.is_configured:
            return jsonify(
                error="Missing Instagram credentials in environment variables",
                details="Please set INSTAGRAM_ACCESS_TOKEN and IG_USER_ID in your environment",
            ), 400

        body = request.get_json(silent=True) or {}
        image_url = (body.get("image_url") or "").strip()
        caption = body.get("caption") or ""
        if not image_url:
            return jsonify(error="Missing image_url", details="image_url is required"), 400

        try:
            result = publisher.publish(image_url, caption)
        except PublishError as e:
            current_app.logger.warning("Instagram publishing failed: %s (%s)", e, e.details)
            return jsonify(error=str(e), details=e.details, code=e.code), 400
        except Exception as e:
            current_app.logger.exception("Server error during Instagram publishing")
            return jsonify(error="Server error during Instagram publishing", details=str(e)), 500

        return jsonify(success=True, postId=result.post_id, message=result.message)

    @bp.get("/api/health")
    def health():
        return jsonify(status="OK", message="Instagram API server is running")

    # -----------------------------
    # Meta app callbacks
    # -----------------------------
    @bp.get("/auth/instagram/callback")
    def instagram_callback():
        code = request.args.get("code")
        if not code:
            current_app.logger.warning("Instagram login callback without code: %s", request.args.get("error_reason"))
            return redirect(url_for("web.login", status="instagram_login_failed"))

        current_app.logger.info("Instagram login callback received")
        return redirect(url_for("web.dashboard", status="instagram_login_success"))

    def signed_payload():
        return parse_signed_request(request.form.get("signed_request", ""), meta_app_secret)

    @bp.post("/api/instagram/deauthorize")
    def instagram_deauthorize():
        try:
            payload = signed_payload()
        except SignedRequestError as e:
            return jsonify(error=str(e)), 400

        current_app.logger.info("Instagram deauthorized for user_id=%s", payload.get("user_id"))
        return jsonify(success=True)

    @bp.post("/api/instagram/data-deletion")
    def instagram_data_deletion():
        try:
            payload = signed_payload()
        except SignedRequestError as e:
            return jsonify(error=str(e)), 400

        code = secrets.token_hex(8)
        current_app.logger.info("Data deletion requested for user_id=%s, confirmation_code=%s",
                                payload.get("user_id"), code)
        return jsonify(
            url=url_for("api.data_deletion_status", code=code, _external=True),
            confirmation_code=code,
        )

    @bp.get("/api/instagram/data-deletion/<code>")
    def data_deletion_status(code: str):
        return jsonify(confirmation_code=code, status="received")

    return bp
