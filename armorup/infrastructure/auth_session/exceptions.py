# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from typing import Any


class SessionError(Exception):
    def __init__(self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class AuthRequestError(SessionError):
    """The proxy or backend answered with a non-2xx status."""

    def __init__(self, message: str, status: int, payload: Any = None):
        super().__init__(
            message=message,
            error_code="request_failed",
            context={"status": status},
        )
        self.status = status
        self.payload = payload


class InvalidServerResponseError(SessionError):
    def __init__(self, message: str = "Invalid response from server", context: dict[str, Any] | None = None):
        super().__init__(message=message, error_code="invalid_response", context=context)


class ConnectionFailedError(SessionError):
    def __init__(self, url: str):
        super().__init__(
            message="Unable to connect to server. Please try again.",
            error_code="connection_failed",
            context={"url": url},
        )


class NotAuthenticatedError(SessionError):
    def __init__(self, action: str):
        super().__init__(
            message=f"Cannot {action} without a stored session",
            error_code="not_authenticated",
            context={"action": action},
        )


class TokenStoreError(SessionError):
    pass
