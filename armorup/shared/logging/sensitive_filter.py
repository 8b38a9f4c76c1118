# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

SENSITIVE_PATTERNS = [
    # Bearer credentials
    (r"(bearer\s+)([a-zA-Z0-9_\-\.]{8,})", r"\1***REDACTED***", re.IGNORECASE),
    (r"(authorization\s*:\s*['\"]?)([^'\"]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Session tokens, JSON and key=value forms
    (r"([\"']?(?:access|refresh)[_-]?token[\"']?\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{8,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"([\"']?(?:accessToken|refreshToken)[\"']?\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{8,})(['\"]?)", r"\1***REDACTED***\3"),
    (r"((?<![a-z_])token\s*=\s*)([a-zA-Z0-9_\-\.]{8,})", r"\1***REDACTED***", re.IGNORECASE),

    # Passwords
    (r"([\"']?password[\"']?\s*[:=]\s*['\"]?)([^'\",}\s]{1,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Email addresses (partial masking)
    (r"([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", r"***@\2"),
]


def sanitize_message(message: str) -> str:
    sanitized = message

    for pattern_tuple in SENSITIVE_PATTERNS:
        if len(pattern_tuple) == 2:
            pattern, replacement = pattern_tuple
            flags = 0
        else:
            pattern, replacement, flags = pattern_tuple

        sanitized = re.sub(pattern, replacement, sanitized, flags=flags)

    return sanitized


def sanitize_record(record: dict[str, Any]) -> None:
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
