# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from collections.abc import Iterable
from functools import partial
from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from armorup.infrastructure.upstream import BackendClient, UpstreamResponse
from armorup.interfaces.http.credentials import extract_token
from armorup.interfaces.http.routes import ProxyResource, ProxyRoute
from armorup.shared.errors import (
    FeatureUnavailableError,
    InvalidUpstreamResponseError,
    MissingCredentialsError,
    ValidationError as RequestValidationError,
)
from armorup.shared.errors.validation import raise_validation_error
from armorup.shared.logging import logger

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def relay(upstream: UpstreamResponse) -> Response:
    """Mirror the backend's status and JSON body."""
    if upstream.malformed:
        raise InvalidUpstreamResponseError()
    if upstream.empty:
        return Response(status=upstream.status)
    response = jsonify(upstream.body)
    response.status_code = upstream.status
    return response


class ProxyController:
    def __init__(
        self,
        resource: ProxyResource,
        *,
        backend: BackendClient,
        cookie_names: Iterable[str],
    ) -> None:
        self._resource = resource
        self._backend = backend
        self._cookie_names = tuple(cookie_names)

    def forward(self, route: ProxyRoute, **view_args: Any) -> Response:
        token = extract_token(request, self._cookie_names)
        if not token:
            logger.warning(
                f"proxy.{self._resource.name}: no Authorization header/cookie on "
                f"{request.method} {request.path}"
            )
            raise MissingCredentialsError()

        path, params = route.target(view_args, request.args)
        body = self._read_body(route) if request.method in _BODY_METHODS else None

        upstream = self._backend.request(
            request.method, path, token=token, json=body, params=params
        )

        if self._resource.feature_gated and upstream.status == 404:
            logger.warning(
                f"proxy.{self._resource.name}: backend has no {path}, "
                f"reporting {self._resource.feature} as unavailable"
            )
            raise FeatureUnavailableError(self._resource.feature or self._resource.name)

        logger.info(f"proxy.{self._resource.name}: {request.method} {path} -> {upstream.status}")
        return relay(upstream)

    def _read_body(self, route: ProxyRoute) -> Any:
        raw = request.get_data(cache=True)
        payload = None
        if raw.strip():
            try:
                payload = json.loads(raw)
            except ValueError as exc:
                logger.warning(
                    f"proxy.{self._resource.name}: rejected non-JSON body on "
                    f"{request.method} {request.path}"
                )
                raise RequestValidationError("Invalid JSON body") from exc
        if route.body_model is None:
            return payload

        try:
            dto = route.body_model.model_validate(payload or {})
        except ValidationError as exc:
            raise_validation_error(exc, route.body_error)
        return dto.model_dump(exclude_none=True)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint(self._resource.name, __name__, url_prefix=self._resource.prefix)
        for index, route in enumerate(self._resource.routes):
            bp.add_url_rule(
                route.rule,
                endpoint=f"{self._resource.name}_{index}",
                view_func=partial(self.forward, route),
                methods=list(route.methods),
            )
        return bp
