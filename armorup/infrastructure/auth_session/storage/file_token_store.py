# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import json
import os
from pathlib import Path
from typing import Any

from armorup.infrastructure.auth_session.exceptions import TokenStoreError
from armorup.infrastructure.auth_session.models.dto import TokenPair
from armorup.shared.config import load_config
from armorup.shared.logging import logger

_ACCESS_KEY = "accessToken"
_REFRESH_KEY = "refreshToken"
_REMEMBER_KEY = "rememberMe"


class FileTokenStore:
    """Tokens and the remember-me flag in one JSON file, surviving restarts."""

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            path = load_config().token_store_path

        self._path = Path(path)
        logger.debug(f"FileTokenStore: initialized path={self._path}")

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> TokenPair | None:
        data = self._read()
        access_token = data.get(_ACCESS_KEY)
        refresh_token = data.get(_REFRESH_KEY)
        if not isinstance(access_token, str) or not access_token:
            return None
        if not isinstance(refresh_token, str):
            refresh_token = ""
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def set(self, tokens: TokenPair) -> None:
        data = self._read()
        data[_ACCESS_KEY] = tokens.access_token
        data[_REFRESH_KEY] = tokens.refresh_token
        self._write(data)

    def clear(self) -> None:
        try:
            os.remove(self._path)
            logger.debug(f"FileTokenStore: cleared path={self._path}")
        except FileNotFoundError:
            return
        except OSError:
            logger.exception(f"FileTokenStore: failed to clear path={self._path}")

    def get_remember_me(self) -> bool:
        return bool(self._read().get(_REMEMBER_KEY, False))

    def set_remember_me(self, value: bool) -> None:
        data = self._read()
        data[_REMEMBER_KEY] = bool(value)
        self._write(data)

    def _read(self) -> dict[str, Any]:
        try:
            with open(self._path, encoding="utf-8") as f:
                loaded = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning(f"FileTokenStore: unreadable store path={self._path}, treating as empty")
            return {}
        return loaded if isinstance(loaded, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self._path)
        except OSError as e:
            logger.exception(f"FileTokenStore: failed to write path={self._path}")
            raise TokenStoreError(
                f"Failed to persist session to {self._path}",
                error_code="token_store_write_failed",
            ) from e
