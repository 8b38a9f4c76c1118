from .base import (
    AppError,
    FeatureUnavailableError,
    InfrastructureError,
    InvalidUpstreamResponseError,
    MissingCredentialsError,
    UpstreamTransportError,
    UpstreamUnavailableError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "FeatureUnavailableError",
    "InfrastructureError",
    "InvalidUpstreamResponseError",
    "MissingCredentialsError",
    "UpstreamTransportError",
    "UpstreamUnavailableError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
