from __future__ import annotations

import json

from flask import Flask

_TOKENS = {
    "access_token": "AT1",
    "refresh_token": "RT1",
    "id": 1,
    "username": "a",
    "email": "a@b.com",
}


def _set_cookie_headers(response) -> list[str]:
    return response.headers.getlist("Set-Cookie")


def test_login_forwards_credentials_and_sets_cookie(flask_app: Flask, backend) -> None:
    backend.on("POST", "/api/login", json=_TOKENS)

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "a@b.com", "password": "secret1"})

    assert response.status_code == 200
    assert response.get_json() == _TOKENS

    sent = backend.last
    assert "Authorization" not in sent.headers
    assert json.loads(sent.read()) == {"email": "a@b.com", "password": "secret1"}

    cookies = _set_cookie_headers(response)
    assert len(cookies) == 1
    assert cookies[0].startswith("token=AT1")
    assert "HttpOnly" in cookies[0]
    assert "Max-Age=604800" in cookies[0]
    assert "Path=/" in cookies[0]
    assert "SameSite=Lax" in cookies[0]


def test_login_failure_passes_backend_error_through(flask_app: Flask, backend) -> None:
    backend.on("POST", "/api/login", status=401, json={"error": "invalid credentials"})

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "a@b.com", "password": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid credentials"}
    assert _set_cookie_headers(response) == []


def test_login_backend_unreachable_returns_503(flask_app: Flask, backend) -> None:
    backend.fail("POST", "/api/login")

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "a@b.com", "password": "secret1"})

    assert response.status_code == 503
    assert "Unable to connect" in response.get_json()["error"]


def test_login_non_json_response_returns_500(flask_app: Flask, backend) -> None:
    backend.on("POST", "/api/login", status=200, content=b"OK")

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "a@b.com", "password": "secret1"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Invalid response from server"}


def test_register_sets_cookie(flask_app: Flask, backend) -> None:
    backend.on("POST", "/api/register", status=201, json=_TOKENS)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register",
            json={"username": "a", "email": "a@b.com", "password": "secret1"},
        )

    assert response.status_code == 201
    assert _set_cookie_headers(response)[0].startswith("token=AT1")


def test_register_conflict_passes_through(flask_app: Flask, backend) -> None:
    backend.on("POST", "/api/register", status=409, json={"error": "email already registered"})

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register",
            json={"username": "a", "email": "a@b.com", "password": "secret1"},
        )

    assert response.status_code == 409
    assert response.get_json() == {"error": "email already registered"}


def test_refresh_rotates_cookie(flask_app: Flask, backend) -> None:
    backend.on("POST", "/api/refresh", json={"access_token": "AT2", "refresh_token": "RT2"})

    with flask_app.test_client() as client:
        response = client.post("/api/refresh", json={"refresh_token": "RT1"})

    assert response.status_code == 200
    assert json.loads(backend.last.read()) == {"refresh_token": "RT1"}
    assert _set_cookie_headers(response)[0].startswith("token=AT2")


def test_logout_expires_cookie_without_backend_call(flask_app: Flask, backend) -> None:
    with flask_app.test_client() as client:
        client.set_cookie("token", "AT1")
        response = client.post("/api/logout")

    assert response.status_code == 200
    assert response.get_json() == {"success": True}
    cookie = _set_cookie_headers(response)[0]
    assert cookie.startswith("token=;")
    assert "Max-Age=0" in cookie
    assert backend.requests == []


def test_health_is_local(flask_app: Flask, backend) -> None:
    with flask_app.test_client() as client:
        response = client.get("/api/health")

    assert response.get_json() == {"ok": True}
    assert backend.requests == []


def test_security_headers_present(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.get("/api/health")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Request-ID"]
