# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from typing import Protocol


class INavigator(Protocol):
    def __call__(self, path: str) -> None: ...
