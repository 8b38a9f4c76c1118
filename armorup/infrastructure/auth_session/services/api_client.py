# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from armorup.infrastructure.auth_session.exceptions import (
    AuthRequestError,
    ConnectionFailedError,
    InvalidServerResponseError,
)
from armorup.infrastructure.auth_session.models.dto import CurrentUser
from armorup.shared.logging import logger


class ProxyApiClient:
    """Talks to the proxy application the way a browser tab does, cookie jar included."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)
        logger.debug(f"ProxyApiClient: initialized base_url={base_url}")

    @property
    def cookies(self) -> httpx.Cookies:
        return self._http.cookies

    def send(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            return self._http.request(
                method,
                path,
                headers=headers,
                json=json,
                params=dict(params) if params else None,
            )
        except httpx.RequestError as exc:
            logger.warning(f"ProxyApiClient: {method} {path} request failed: {type(exc).__name__}")
            raise ConnectionFailedError(str(self._http.base_url)) from exc

    def call(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: Any = None,
        fallback_error: str = "Request failed ({status})",
    ) -> Any:
        response = self.send(method, path, token=token, json=json)

        payload: Any = None
        if response.content.strip():
            try:
                payload = response.json()
            except ValueError as exc:
                logger.error(f"ProxyApiClient: {method} {path} returned a non-JSON body")
                raise InvalidServerResponseError(context={"status": response.status_code}) from exc

        if not response.is_success:
            message = None
            if isinstance(payload, dict):
                message = payload.get("error")
            if not isinstance(message, str) or not message:
                message = fallback_error.format(status=response.status_code)
            raise AuthRequestError(message, response.status_code, payload)

        return payload

    def login(self, email: str, password: str) -> Any:
        return self.call(
            "POST",
            "/api/login",
            json={"email": email, "password": password},
            fallback_error="Login failed ({status})",
        )

    def register(self, username: str, email: str, password: str) -> Any:
        return self.call(
            "POST",
            "/api/register",
            json={"username": username, "email": email, "password": password},
            fallback_error="Registration failed",
        )

    def refresh(self, refresh_token: str) -> Any:
        return self.call(
            "POST",
            "/api/refresh",
            json={"refresh_token": refresh_token},
            fallback_error="Session refresh failed ({status})",
        )

    def logout(self) -> Any:
        return self.call("POST", "/api/logout", fallback_error="Logout failed ({status})")

    def whoami(self, token: str | None = None) -> CurrentUser:
        payload = self.call(
            "GET",
            "/api/users/me",
            token=token,
            fallback_error="Failed to get user data",
        )
        try:
            return CurrentUser.model_validate(payload)
        except ValidationError as exc:
            raise InvalidServerResponseError("Invalid user payload from server") from exc

    def forget_cookies(self) -> None:
        self._http.cookies.clear()

    def close(self) -> None:
        self._http.close()
