# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    message: str
    status: HTTPStatus
    extra: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.extra:
            payload.update(self.extra)
        return payload


class MissingCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(
            message="Unauthorized - No token provided",
            status=HTTPStatus.UNAUTHORIZED,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        message: str = "Internal server error",
        *,
        status: HTTPStatus | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(message=message, status=resolved_status, extra=extra)


class UpstreamTransportError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__("Internal server error")


class UpstreamUnavailableError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__(
            "Unable to connect to server. Please check if the backend is running.",
            status=HTTPStatus.SERVICE_UNAVAILABLE,
        )


class InvalidUpstreamResponseError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__("Invalid response from server")


class FeatureUnavailableError(AppError):
    def __init__(self, feature: str) -> None:
        super().__init__(
            message=(
                f"{feature} feature is currently unavailable. "
                "OpenAI integration may not be configured."
            ),
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            extra={"feature_unavailable": True},
        )


class ValidationError(AppError):
    def __init__(
        self,
        message: str = "Invalid request body",
        *,
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status=HTTPStatus.BAD_REQUEST,
            extra=extra,
        )
