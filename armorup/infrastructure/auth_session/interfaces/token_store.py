# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from typing import Protocol

from armorup.infrastructure.auth_session.models.dto import TokenPair


class ITokenStore(Protocol):
    def get(self) -> TokenPair | None: ...

    def set(self, tokens: TokenPair) -> None: ...

    def clear(self) -> None: ...

    def get_remember_me(self) -> bool: ...

    def set_remember_me(self, value: bool) -> None: ...
