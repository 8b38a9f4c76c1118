# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import dataclasses
import threading
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from armorup.infrastructure.auth_session.exceptions import (
    AuthRequestError,
    InvalidServerResponseError,
    NotAuthenticatedError,
    SessionError,
    TokenStoreError,
)
from armorup.infrastructure.auth_session.interfaces.navigator import INavigator
from armorup.infrastructure.auth_session.interfaces.token_store import ITokenStore
from armorup.infrastructure.auth_session.models.dto import (
    CurrentUser,
    SessionState,
    SessionStatus,
    TokenPair,
    TokenResponseDTO,
)
from armorup.infrastructure.auth_session.services.api_client import ProxyApiClient
from armorup.infrastructure.auth_session.services.session_resolver import SessionResolver
from armorup.shared.logging import logger

Listener = Callable[[SessionState], None]


def _log_navigation(path: str) -> None:
    logger.debug(f"AuthSessionManager: navigate to {path}")


class AuthSessionManager:
    """Single owner of the signed-in state.

    ``login``, ``register``, ``logout`` and ``refresh`` are serialized by one
    lock, so overlapping calls run one after another instead of racing on the
    token store. ``login`` and ``register`` raise ``SessionError`` subclasses
    for the caller to display; ``logout`` never raises.
    """

    def __init__(
        self,
        *,
        api: ProxyApiClient,
        token_store: ITokenStore,
        resolver: SessionResolver | None = None,
        navigator: INavigator | None = None,
        home_path: str = "/dashboard",
        login_path: str = "/login",
    ) -> None:
        self._api = api
        self._store = token_store
        self._resolver = resolver or SessionResolver(api, token_store)
        self._navigator = navigator or _log_navigation
        self._home_path = home_path
        self._login_path = login_path

        self._lock = threading.Lock()
        self._state = SessionState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_user(self) -> CurrentUser | None:
        return self._state.current_user

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def initialize(self) -> SessionState:
        with self._lock:
            user = self._resolver.resolve()
            self._set_state(current_user=user, status=SessionStatus.READY)
        return self._state

    def login(self, email: str, password: str, *, remember_me: bool = False) -> CurrentUser | None:
        with self._lock:
            self._set_state(status=SessionStatus.LOADING)
            try:
                payload = self._api.login(email, password)
                user = self._establish(payload, action="login", remember_me=remember_me)
            except SessionError as exc:
                logger.warning(f"AuthSessionManager: login failed: {exc.message}")
                raise
            finally:
                self._set_state(status=SessionStatus.READY)

        logger.info(f"AuthSessionManager: login ok user_id={user.id if user else None}")
        self._navigate(self._home_path)
        return user

    def register(self, username: str, email: str, password: str) -> CurrentUser | None:
        with self._lock:
            self._set_state(status=SessionStatus.LOADING)
            try:
                payload = self._api.register(username, email, password)
                user = self._establish(payload, action="register")
            except SessionError as exc:
                logger.warning(f"AuthSessionManager: registration failed: {exc.message}")
                raise
            finally:
                self._set_state(status=SessionStatus.READY)

        logger.info(f"AuthSessionManager: register ok user_id={user.id if user else None}")
        self._navigate(self._home_path)
        return user

    def logout(self) -> None:
        with self._lock:
            try:
                self._api.logout()
            except SessionError as exc:
                logger.warning(f"AuthSessionManager: logout notification failed: {exc.message}")
            finally:
                self._api.forget_cookies()
                self._store.clear()
                self._set_state(current_user=None, status=SessionStatus.READY)

        logger.info("AuthSessionManager: logged out")
        self._navigate(self._login_path)

    def refresh(self) -> TokenPair:
        with self._lock:
            tokens = self._store.get()
            if tokens is None or not tokens.refresh_token:
                raise NotAuthenticatedError("refresh")

            try:
                payload = self._api.refresh(tokens.refresh_token)
            except AuthRequestError as exc:
                if exc.status == 401:
                    logger.warning("AuthSessionManager: refresh token rejected, dropping session")
                    self._api.forget_cookies()
                    self._store.clear()
                    self._set_state(current_user=None)
                raise

            new_tokens = self._require_tokens(payload, action="refresh")
            self._store.set(new_tokens)
            logger.info("AuthSessionManager: tokens refreshed")
            return new_tokens

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Authorized call through the proxy; one refresh-and-retry on 401."""
        tokens = self._store.get()
        access_token = tokens.access_token if tokens else None
        response = self._api.send(method, path, token=access_token, json=json, params=params)

        if response.status_code != 401 or tokens is None or not tokens.refresh_token:
            return response

        try:
            new_tokens = self.refresh()
        except SessionError as exc:
            logger.info(f"AuthSessionManager: refresh after 401 failed: {exc.message}")
            return response

        return self._api.send(method, path, token=new_tokens.access_token, json=json, params=params)

    def _establish(
        self, payload: Any, *, action: str, remember_me: bool | None = None
    ) -> CurrentUser | None:
        tokens = self._require_tokens(payload, action=action)
        try:
            self._store.set(tokens)
            if remember_me is not None:
                self._store.set_remember_me(remember_me)
        except TokenStoreError:
            logger.error(f"AuthSessionManager: could not persist {action} session, discarding it")
            self._store.clear()
            raise

        user = self._fetch_user(tokens.access_token)
        if user is not None:
            self._set_state(current_user=user)
        return user

    def _require_tokens(self, payload: Any, *, action: str) -> TokenPair:
        try:
            return TokenResponseDTO.model_validate(payload).to_pair()
        except ValidationError as exc:
            logger.error(f"AuthSessionManager: {action} response is missing tokens")
            raise InvalidServerResponseError(
                "Invalid response: missing authentication tokens",
                context={"action": action},
            ) from exc

    def _fetch_user(self, access_token: str) -> CurrentUser | None:
        try:
            return self._api.whoami(access_token)
        except SessionError as exc:
            logger.warning(f"AuthSessionManager: failed to fetch user data after sign-in: {exc.message}")
            return None

    def _set_state(self, **changes: Any) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("AuthSessionManager: state listener failed")

    def _navigate(self, path: str) -> None:
        try:
            self._navigator(path)
        except Exception:
            logger.exception(f"AuthSessionManager: navigation to {path} failed")
