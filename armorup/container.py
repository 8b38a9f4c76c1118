# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

import httpx

from armorup.infrastructure.upstream import BackendClient
from armorup.interfaces.http.controllers.auth_controller import AuthController
from armorup.interfaces.http.controllers.proxy_controller import ProxyController
from armorup.interfaces.http.routes import RESOURCES
from armorup.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or load_config()
        self._transport = transport

    @cached_property
    def backend_client(self) -> BackendClient:
        return BackendClient(
            self.config.backend_url,
            timeout=self.config.upstream.timeout,
            transport=self._transport,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            backend=self.backend_client,
            security=self.config.security,
        )

    @cached_property
    def proxy_controllers(self) -> list[ProxyController]:
        return [
            ProxyController(
                resource,
                backend=self.backend_client,
                cookie_names=self.config.security.credential_cookies,
            )
            for resource in RESOURCES
        ]
