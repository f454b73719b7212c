"""Umbrel app manifest and docker-compose generator package."""

from .compose import render_compose
from .manifest import render_manifest
from .models import (
    AppProxyConfig,
    ComposeDescriptor,
    ComposeProfile,
    EnvLines,
    EnvMapping,
    ManifestDescriptor,
    ManifestProfile,
    ServiceRecord,
    ValidationResult,
)
from .validation import validate_manifest

__all__ = [
    "AppProxyConfig",
    "ComposeDescriptor",
    "ComposeProfile",
    "EnvLines",
    "EnvMapping",
    "ManifestDescriptor",
    "ManifestProfile",
    "ServiceRecord",
    "ValidationResult",
    "render_compose",
    "render_manifest",
    "validate_manifest",
]
