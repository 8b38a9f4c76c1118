# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str


class CurrentUser(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(extra="ignore", frozen=True)


class TokenResponseDTO(BaseModel):
    access_token: str = Field(min_length=1)
    refresh_token: str = Field(min_length=1)

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    def to_pair(self) -> TokenPair:
        return TokenPair(access_token=self.access_token, refresh_token=self.refresh_token)


class SessionStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class SessionState:
    current_user: CurrentUser | None = None
    status: SessionStatus = SessionStatus.LOADING

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def is_loading(self) -> bool:
        return self.status is SessionStatus.LOADING
