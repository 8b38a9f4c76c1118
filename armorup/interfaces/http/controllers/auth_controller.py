# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from armorup.infrastructure.upstream import BackendClient
from armorup.interfaces.http.controllers.proxy_controller import relay
from armorup.shared.config import SecurityConfig
from armorup.shared.errors import UpstreamTransportError, UpstreamUnavailableError
from armorup.shared.logging import logger


class AuthController:
    """Credential exchange routes; these also own the HTTP-only session cookie."""

    def __init__(self, *, backend: BackendClient, security: SecurityConfig) -> None:
        self._backend = backend
        self._security = security

    def login(self) -> Response:
        return self._exchange("login", "/api/login")

    def register(self) -> Response:
        return self._exchange("register", "/api/register")

    def refresh(self) -> Response:
        return self._exchange("refresh", "/api/refresh")

    def logout(self) -> Response:
        response = jsonify({"success": True})
        response.set_cookie(
            self._security.session_cookie,
            "",
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            max_age=0,
            path="/",
        )
        logger.info("auth.logout: session cookie cleared")
        return response

    def health(self) -> Response:
        return jsonify({"ok": True})

    def _exchange(self, action: str, path: str) -> Response:
        payload = request.get_json(silent=True)

        try:
            upstream = self._backend.request("POST", path, json=payload)
        except UpstreamTransportError as exc:
            logger.error(f"auth.{action}: backend unreachable at {self._backend.base_url}")
            raise UpstreamUnavailableError() from exc

        response = relay(upstream)
        if not upstream.ok:
            logger.warning(f"auth.{action}: backend rejected with status={upstream.status}")
            return response

        access_token = upstream.body.get("access_token") if isinstance(upstream.body, dict) else None
        if access_token:
            response.set_cookie(
                self._security.session_cookie,
                access_token,
                httponly=True,
                samesite=self._security.cookie_samesite,
                secure=self._security.cookie_secure,
                max_age=self._security.cookie_max_age,
                path="/",
            )
        logger.info(f"auth.{action}: ok cookie_set={bool(access_token)}")
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp
