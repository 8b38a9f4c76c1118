# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP client for the external backend service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from armorup.shared.errors import UpstreamTransportError
from armorup.shared.logging import logger


class UpstreamConnectionError(UpstreamTransportError):
    """The backend could not be reached at all."""


@dataclass(frozen=True, slots=True)
class UpstreamResponse:
    status: int
    body: Any = None
    malformed: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def empty(self) -> bool:
        return self.body is None and not self.malformed


class BackendClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )
        logger.debug(f"BackendClient: initialized base_url={self._base_url} timeout={timeout}")

    @property
    def base_url(self) -> str:
        return self._base_url

    def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> UpstreamResponse:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._http.request(
                method,
                path,
                headers=headers,
                json=json,
                params=dict(params) if params else None,
            )
        except httpx.ConnectError as exc:
            logger.warning(f"upstream: {method} {path} connect failed: {exc}")
            raise UpstreamConnectionError() from exc
        except httpx.RequestError as exc:
            logger.warning(f"upstream: {method} {path} request failed: {type(exc).__name__}")
            raise UpstreamTransportError() from exc

        logger.debug(f"upstream: {method} {path} -> {response.status_code}")

        if not response.content.strip():
            return UpstreamResponse(status=response.status_code)

        try:
            body = response.json()
        except ValueError:
            logger.warning(
                f"upstream: {method} {path} -> {response.status_code} returned a non-JSON body "
                f"({len(response.content)} bytes)"
            )
            return UpstreamResponse(status=response.status_code, malformed=True)

        return UpstreamResponse(status=response.status_code, body=body)

    def close(self) -> None:
        self._http.close()


__all__ = ["BackendClient", "UpstreamConnectionError", "UpstreamResponse"]
