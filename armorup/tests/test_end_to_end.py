from __future__ import annotations

import json

import httpx
import pytest
from flask import Flask

from armorup.infrastructure.auth_session import (
    AuthRequestError,
    AuthSessionManager,
    MemoryTokenStore,
    ProxyApiClient,
    SessionResolver,
    TokenPair,
    build_session_manager,
)
from armorup.shared.config import AppConfig
from armorup.tests.conftest import FakeBackend

_USER = {"id": 7, "username": "grace", "email": "grace@example.com"}


def _whoami_for(token: str):
    def handle(request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") == f"Bearer {token}":
            return httpx.Response(200, json=_USER)
        return httpx.Response(401, json={"error": "Unauthorized"})

    return handle


@pytest.fixture()
def api(flask_app: Flask) -> ProxyApiClient:
    return ProxyApiClient("http://proxy.test", transport=httpx.WSGITransport(app=flask_app))


@pytest.fixture()
def signed_in_backend(backend: FakeBackend) -> FakeBackend:
    backend.on(
        "POST",
        "/api/login",
        json={"access_token": "AT1", "refresh_token": "RT1", **_USER},
    )
    backend.on_call("GET", "/api/users/me", _whoami_for("AT1"))
    return backend


def test_login_through_proxy_sets_cookie_and_tokens(
    api: ProxyApiClient, signed_in_backend: FakeBackend
) -> None:
    store = MemoryTokenStore()
    manager = AuthSessionManager(api=api, token_store=store, navigator=lambda _: None)

    user = manager.login("grace@example.com", "secret1")

    assert user is not None and user.id == 7
    assert api.cookies.get("token") == "AT1"
    assert store.get() == TokenPair(access_token="AT1", refresh_token="RT1")
    login_call = signed_in_backend.requests[0]
    assert json.loads(login_call.content) == {"email": "grace@example.com", "password": "secret1"}
    assert "Authorization" not in login_call.headers


def test_cold_start_resolves_by_cookie_alone(
    api: ProxyApiClient, signed_in_backend: FakeBackend
) -> None:
    AuthSessionManager(api=api, token_store=MemoryTokenStore(), navigator=lambda _: None).login(
        "grace@example.com", "secret1"
    )
    fresh_store = MemoryTokenStore()

    user = SessionResolver(api, fresh_store).resolve()

    assert user is not None and user.username == "grace"
    assert signed_in_backend.last.headers["Authorization"] == "Bearer AT1"


def test_logout_drops_cookie_and_session(
    api: ProxyApiClient, signed_in_backend: FakeBackend
) -> None:
    store = MemoryTokenStore()
    manager = AuthSessionManager(api=api, token_store=store, navigator=lambda _: None)
    manager.login("grace@example.com", "secret1")
    calls_before = len(signed_in_backend.requests)

    manager.logout()

    assert api.cookies.get("token") is None
    assert store.get() is None
    assert SessionResolver(api, store).resolve() is None
    assert len(signed_in_backend.requests) == calls_before


def test_unknown_credentials_surface_backend_message(
    api: ProxyApiClient, backend: FakeBackend
) -> None:
    backend.on("POST", "/api/login", status=401, json={"error": "invalid credentials"})
    manager = AuthSessionManager(api=api, token_store=MemoryTokenStore(), navigator=lambda _: None)

    with pytest.raises(AuthRequestError) as excinfo:
        manager.login("grace@example.com", "nope")

    assert str(excinfo.value) == "invalid credentials"
    assert api.cookies.get("token") is None


def test_request_retries_after_refresh_through_proxy(
    api: ProxyApiClient, backend: FakeBackend
) -> None:
    store = MemoryTokenStore()
    store.set(TokenPair(access_token="AT1", refresh_token="RT1"))
    backend.on("POST", "/api/refresh", json={"access_token": "AT2", "refresh_token": "RT2"})

    def journal(request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") == "Bearer AT2":
            return httpx.Response(200, json=[{"id": 1, "title": "Morning"}])
        return httpx.Response(401, json={"error": "token expired"})

    backend.on_call("GET", "/api/journal", journal)
    manager = AuthSessionManager(api=api, token_store=store, navigator=lambda _: None)

    response = manager.request("GET", "/api/journal")

    assert response.status_code == 200
    assert store.get() == TokenPair(access_token="AT2", refresh_token="RT2")
    assert api.cookies.get("token") == "AT2"


def test_insights_outage_reaches_client_as_503(api: ProxyApiClient, backend: FakeBackend) -> None:
    store = MemoryTokenStore()
    store.set(TokenPair(access_token="AT1", refresh_token="RT1"))
    manager = AuthSessionManager(api=api, token_store=store, navigator=lambda _: None)

    response = manager.request("GET", "/api/insights")

    assert response.status_code == 503
    assert response.json()["feature_unavailable"] is True


def test_factory_persists_tokens_to_file(
    config: AppConfig, flask_app: Flask, signed_in_backend: FakeBackend
) -> None:
    manager = build_session_manager(
        config=config,
        navigator=lambda _: None,
        transport=httpx.WSGITransport(app=flask_app),
    )

    manager.login("grace@example.com", "secret1", remember_me=True)

    saved = json.loads(config.token_store_path.read_text(encoding="utf-8"))
    assert saved == {"accessToken": "AT1", "refreshToken": "RT1", "rememberMe": True}
