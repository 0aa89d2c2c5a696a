from __future__ import annotations

import logging
import secrets

from flask import Flask, jsonify, redirect, request, session, url_for

from ..common.web import SESSION_TOKEN_KEY, json_error
from ..container import Container
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

STATE_KEY = "oauth_state"


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    @app.route("/auth/login", methods=["GET"], endpoint="login")
    def login():
        state = secrets.token_urlsafe(16)
        session[STATE_KEY] = state
        return redirect(auth.login_url(state))

    @app.route("/auth/callback", methods=["GET"], endpoint="auth_callback")
    def auth_callback():
        expected = session.pop(STATE_KEY, None)
        if not expected or request.args.get("state") != expected:
            return json_error("Invalid login state, please log in again", 401)

        try:
            token = auth.exchange_code(request.args.get("code", ""))
        except AuthenticationError as e:
            return json_error(str(e), 401)

        session[SESSION_TOKEN_KEY] = token.to_session()
        logger.info("Login succeeded, token valid until %s", token.expires_at.isoformat())
        return redirect(url_for("api_dashboard"))

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.pop(SESSION_TOKEN_KEY, None)
        return jsonify({"success": True})
