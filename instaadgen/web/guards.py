from __future__ import annotations

from functools import wraps
from types import SimpleNamespace
from typing import Optional

from flask import redirect, session, url_for

from instaadgen.domain.models import UserProfile


def start_session(profile: UserProfile) -> None:
    session.clear()
    session["uid"] = profile.uid
    session["email"] = profile.email
    session["username"] = profile.username


def current_user() -> Optional[SimpleNamespace]:
    uid = session.get("uid")
    if not uid:
        return None
    return SimpleNamespace(id=uid, email=session.get("email", ""), username=session.get("username", ""))


def login_required(view):
    """Pages for signed-in users only; anonymous visitors go to the login page."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not session.get("uid"):
            return redirect(url_for("web.login"))
        return view(*args, **kwargs)
    return wrapped


def public_only(view):
    """Login/sign-up pages; signed-in users go straight to the dashboard."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if session.get("uid"):
            return redirect(url_for("web.dashboard"))
        return view(*args, **kwargs)
    return wrapped
