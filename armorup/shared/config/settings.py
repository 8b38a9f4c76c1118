# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


def _parse_list(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class UpstreamConfig(BaseSettings):
    timeout: float = Field(30.0, gt=0, alias="UPSTREAM_TIMEOUT")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")


class SecurityConfig(BaseSettings):
    # Session cookie
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")
    session_cookie: str = Field("token", alias="SESSION_COOKIE")
    legacy_cookies: Annotated[list[str], NoDecode] = Field(["accessToken"], alias="LEGACY_COOKIES")
    cookie_max_age: int = Field(60 * 60 * 24 * 7, ge=1, alias="COOKIE_MAX_AGE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("allowed_origins", "legacy_cookies", mode="before")
    @classmethod
    def _parse_lists(cls, value: str | list[str]) -> list[str]:
        return _parse_list(value)

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @property
    def credential_cookies(self) -> tuple[str, ...]:
        return (self.session_cookie, *self.legacy_cookies)


def _upstream_config_factory() -> UpstreamConfig:
    return UpstreamConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    backend_url: str = Field(
        "http://localhost:8080",
        validation_alias=AliasChoices("BACKEND_URL", "NEXT_PUBLIC_BACKEND_URL"),
    )
    proxy_url: str = Field("http://localhost:5000", alias="PROXY_URL")
    token_store_path: Path = Field(Path("instance/session.json"), alias="TOKEN_STORE_PATH")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    upstream: UpstreamConfig = Field(default_factory=_upstream_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("backend_url", "proxy_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")
        if self.backend_url.startswith("http://localhost"):
            warnings.append(f"⚠️  BACKEND_URL points at a development host ({self.backend_url})")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider fixing these settings in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "SecurityConfig", "UpstreamConfig", "load_config"]
