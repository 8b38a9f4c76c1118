# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StruggleLogDTO(BaseModel):
    """A struggle and the encouragement given for it, kept as separate fields."""

    struggle: str = Field(min_length=1)
    message: str = Field(min_length=1)
    verse: str | None = None

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)
