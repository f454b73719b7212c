"""Required-field checks run before a manifest is exported."""
from __future__ import annotations

from .constants import REQUIRED_MANIFEST_FIELDS
from .models import ManifestDescriptor, ValidationResult


def validate_manifest(descriptor: ManifestDescriptor) -> ValidationResult:
    """Return the labels of every required field that is missing or blank."""
    missing = []
    for attr, label in REQUIRED_MANIFEST_FIELDS:
        value = getattr(descriptor, attr)
        if not value or (isinstance(value, str) and not value.strip()):
            missing.append(label)
    return ValidationResult(is_valid=not missing, missing_fields=missing)
