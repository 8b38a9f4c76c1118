# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from collections.abc import Sequence
from typing import Protocol

from armorup.infrastructure.auth_session.exceptions import SessionError
from armorup.infrastructure.auth_session.interfaces.token_store import ITokenStore
from armorup.infrastructure.auth_session.models.dto import CurrentUser
from armorup.infrastructure.auth_session.services.api_client import ProxyApiClient
from armorup.shared.logging import logger


class IdentityStrategy(Protocol):
    name: str

    def resolve(self, api: ProxyApiClient, store: ITokenStore) -> CurrentUser | None: ...


class AmbientCookieStrategy:
    name = "cookie"

    def resolve(self, api: ProxyApiClient, store: ITokenStore) -> CurrentUser | None:
        return api.whoami()


class StoredTokenStrategy:
    name = "stored_token"

    def resolve(self, api: ProxyApiClient, store: ITokenStore) -> CurrentUser | None:
        tokens = store.get()
        if tokens is None:
            return None
        return api.whoami(tokens.access_token)


DEFAULT_STRATEGIES: tuple[IdentityStrategy, ...] = (
    AmbientCookieStrategy(),
    StoredTokenStrategy(),
)


class SessionResolver:
    """Finds out who is signed in on a cold start; first strategy that succeeds wins."""

    def __init__(
        self,
        api: ProxyApiClient,
        store: ITokenStore,
        strategies: Sequence[IdentityStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        self._api = api
        self._store = store
        self._strategies = tuple(strategies)

    def resolve(self) -> CurrentUser | None:
        for strategy in self._strategies:
            try:
                user = strategy.resolve(self._api, self._store)
            except SessionError as exc:
                logger.debug(f"SessionResolver: strategy={strategy.name} failed: {exc.message}")
                continue

            if user is not None:
                logger.info(f"SessionResolver: resolved user_id={user.id} via {strategy.name}")
                return user

        logger.info("SessionResolver: no credential resolved, clearing token store")
        self._store.clear()
        return None
