# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import httpx

from armorup.infrastructure.auth_session.interfaces.navigator import INavigator
from armorup.infrastructure.auth_session.interfaces.token_store import ITokenStore
from armorup.infrastructure.auth_session.services.api_client import ProxyApiClient
from armorup.infrastructure.auth_session.services.session_manager import AuthSessionManager
from armorup.infrastructure.auth_session.services.session_resolver import SessionResolver
from armorup.infrastructure.auth_session.storage.file_token_store import FileTokenStore
from armorup.shared.config import AppConfig, load_config
from armorup.shared.logging import logger


def build_session_manager(
    *,
    config: AppConfig | None = None,
    token_store: ITokenStore | None = None,
    navigator: INavigator | None = None,
    transport: httpx.BaseTransport | None = None,
) -> AuthSessionManager:
    config = config or load_config()
    logger.debug(f"build_session_manager: proxy_url={config.proxy_url}")

    api = ProxyApiClient(
        config.proxy_url,
        timeout=config.upstream.timeout,
        transport=transport,
    )
    store = token_store or FileTokenStore(config.token_store_path)

    return AuthSessionManager(
        api=api,
        token_store=store,
        resolver=SessionResolver(api, store),
        navigator=navigator,
    )
