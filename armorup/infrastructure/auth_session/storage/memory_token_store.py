# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from armorup.infrastructure.auth_session.models.dto import TokenPair


class MemoryTokenStore:
    def __init__(self) -> None:
        self._tokens: TokenPair | None = None
        self._remember_me = False

    def get(self) -> TokenPair | None:
        return self._tokens

    def set(self, tokens: TokenPair) -> None:
        self._tokens = tokens

    def clear(self) -> None:
        self._tokens = None
        self._remember_me = False

    def get_remember_me(self) -> bool:
        return self._remember_me

    def set_remember_me(self, value: bool) -> None:
        self._remember_me = bool(value)
