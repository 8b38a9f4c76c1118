from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from flask import Flask

from armorup.app import create_app
from armorup.shared.config import AppConfig

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Stands in for the external backend service behind the proxy."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Handler] = {}

    def on(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        content: bytes | None = None,
    ) -> None:
        def _respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status, content=content)
            if json is None:
                return httpx.Response(status)
            return httpx.Response(status, json=json)

        self._routes[(method, path)] = _respond

    def on_call(self, method: str, path: str, handler: Handler) -> None:
        self._routes[(method, path)] = handler

    def fail(self, method: str, path: str) -> None:
        def _boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self._routes[(method, path)] = _boom

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppConfig:
    for name in ("BACKEND_URL", "NEXT_PUBLIC_BACKEND_URL", "PROXY_URL", "COOKIE_SECURE"):
        monkeypatch.delenv(name, raising=False)
    return AppConfig(
        backend_url="http://backend.test",
        proxy_url="http://proxy.test",
        token_store_path=tmp_path / "session.json",
    )


@pytest.fixture()
def flask_app(config: AppConfig, backend: FakeBackend) -> Flask:
    return create_app(config, transport=backend.transport)
