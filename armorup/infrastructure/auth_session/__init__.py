# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import (
    AuthRequestError,
    ConnectionFailedError,
    InvalidServerResponseError,
    NotAuthenticatedError,
    SessionError,
    TokenStoreError,
)
from .factory import build_session_manager
from .models.dto import CurrentUser, SessionState, SessionStatus, TokenPair
from .services.api_client import ProxyApiClient
from .services.session_manager import AuthSessionManager
from .services.session_resolver import (
    AmbientCookieStrategy,
    SessionResolver,
    StoredTokenStrategy,
)
from .storage.file_token_store import FileTokenStore
from .storage.memory_token_store import MemoryTokenStore

__all__ = [
    "AmbientCookieStrategy",
    "AuthRequestError",
    "AuthSessionManager",
    "ConnectionFailedError",
    "CurrentUser",
    "FileTokenStore",
    "InvalidServerResponseError",
    "MemoryTokenStore",
    "NotAuthenticatedError",
    "ProxyApiClient",
    "SessionError",
    "SessionResolver",
    "SessionState",
    "SessionStatus",
    "StoredTokenStrategy",
    "TokenPair",
    "TokenStoreError",
    "build_session_manager",
]
