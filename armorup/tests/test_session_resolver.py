from __future__ import annotations

import httpx
import pytest

from armorup.infrastructure.auth_session import (
    MemoryTokenStore,
    ProxyApiClient,
    SessionResolver,
    StoredTokenStrategy,
    TokenPair,
)

_USER = {"id": 1, "username": "a", "email": "a@b.com"}


class CountingStore(MemoryTokenStore):
    def __init__(self) -> None:
        super().__init__()
        self.writes = 0
        self.clears = 0

    def set(self, tokens: TokenPair) -> None:
        self.writes += 1
        super().set(tokens)

    def clear(self) -> None:
        self.clears += 1
        super().clear()


def _proxy(valid_cookie: str | None, valid_token: str | None, seen: list[httpx.Request]):
    def handle(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        auth = request.headers.get("Authorization", "")
        cookie = request.headers.get("Cookie", "")
        if valid_token and auth == f"Bearer {valid_token}":
            return httpx.Response(200, json=_USER)
        if not auth and valid_cookie and f"token={valid_cookie}" in cookie:
            return httpx.Response(200, json=_USER)
        return httpx.Response(401, json={"error": "Unauthorized"})

    return httpx.MockTransport(handle)


@pytest.fixture()
def seen() -> list[httpx.Request]:
    return []


def test_cookie_alone_resolves_without_touching_store(seen) -> None:
    api = ProxyApiClient("http://proxy.test", transport=_proxy("CK1", None, seen))
    api.cookies.set("token", "CK1", domain="proxy.test")
    store = CountingStore()

    user = SessionResolver(api, store).resolve()

    assert user is not None and user.username == "a"
    assert store.writes == 0
    assert store.clears == 0
    assert len(seen) == 1


def test_falls_back_to_stored_token(seen) -> None:
    api = ProxyApiClient("http://proxy.test", transport=_proxy(None, "AT1", seen))
    store = CountingStore()
    store.set(TokenPair(access_token="AT1", refresh_token="RT1"))

    user = SessionResolver(api, store).resolve()

    assert user is not None and user.id == 1
    assert [r.headers.get("Authorization") for r in seen] == [None, "Bearer AT1"]
    assert store.get() == TokenPair(access_token="AT1", refresh_token="RT1")


def test_nothing_valid_clears_the_store(seen) -> None:
    api = ProxyApiClient("http://proxy.test", transport=_proxy(None, None, seen))
    store = CountingStore()
    store.set(TokenPair(access_token="STALE", refresh_token="RT1"))
    store.set_remember_me(True)

    assert SessionResolver(api, store).resolve() is None
    assert store.get() is None
    assert store.get_remember_me() is False
    assert store.clears == 1


def test_no_stored_token_skips_second_call(seen) -> None:
    api = ProxyApiClient("http://proxy.test", transport=_proxy(None, None, seen))

    assert SessionResolver(api, CountingStore()).resolve() is None
    assert len(seen) == 1


def test_unreachable_proxy_resolves_unauthenticated() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    api = ProxyApiClient("http://proxy.test", transport=httpx.MockTransport(refuse))
    store = CountingStore()
    store.set(TokenPair(access_token="AT1", refresh_token="RT1"))

    assert SessionResolver(api, store).resolve() is None
    assert store.get() is None


def test_strategy_order_is_configurable(seen) -> None:
    api = ProxyApiClient("http://proxy.test", transport=_proxy("CK1", "AT1", seen))
    api.cookies.set("token", "CK1", domain="proxy.test")
    store = CountingStore()
    store.set(TokenPair(access_token="AT1", refresh_token="RT1"))

    user = SessionResolver(api, store, strategies=[StoredTokenStrategy()]).resolve()

    assert user is not None
    assert [r.headers.get("Authorization") for r in seen] == ["Bearer AT1"]
