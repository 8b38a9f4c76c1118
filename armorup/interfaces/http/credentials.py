# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable

from flask import Request


def bearer_from_header(value: str | None) -> str | None:
    scheme, _, credential = (value or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credential.strip() or None


def extract_token(request: Request, cookie_names: Iterable[str]) -> str | None:
    """Return the caller's token: Authorization header first, then cookies in order."""
    token = bearer_from_header(request.headers.get("Authorization"))
    if token:
        return token

    for name in cookie_names:
        value = request.cookies.get(name, "").strip()
        if value:
            return value
    return None


__all__ = ["bearer_from_header", "extract_token"]
