# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import AppConfig, SecurityConfig, UpstreamConfig, load_config

__all__ = ["AppConfig", "SecurityConfig", "UpstreamConfig", "load_config"]
