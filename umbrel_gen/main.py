"""High level orchestration helpers consumed by the CLI and the web UI."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from . import models
from .compose import render_compose
from .constants import VOLUME_PREFIXES
from .manifest import render_manifest
from .text_utils import volume_warnings
from .validation import validate_manifest
from .yaml_out import write_text_file

logger = logging.getLogger(__name__)


def load_document(path: Path) -> Dict:
    """Load a JSON or YAML document into a python dictionary."""
    if not path.exists():
        raise FileNotFoundError(f"Descriptor file not found: {path}")

    logger.info("Loading descriptor: %s", path)
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} did not produce a mapping")
    return data


def load_manifest_descriptor(path: Path) -> models.ManifestDescriptor:
    return models.ManifestDescriptor.model_validate(load_document(path))


def load_compose_descriptor(path: Path) -> models.ComposeDescriptor:
    return models.ComposeDescriptor.model_validate(load_document(path))


def load_profiles(path: Optional[Path] = None) -> Tuple[models.ManifestProfile, models.ComposeProfile]:
    """Read rendering profiles from a YAML file with ``manifest`` and ``compose`` sections."""
    if path is None:
        return models.ManifestProfile(), models.ComposeProfile()
    data = load_document(path)
    unknown = set(data) - {"manifest", "compose"}
    if unknown:
        raise ValueError(f"Unknown profile sections: {', '.join(sorted(unknown))}")
    manifest_profile = models.ManifestProfile.model_validate(data.get("manifest") or {})
    compose_profile = models.ComposeProfile.model_validate(data.get("compose") or {})
    return manifest_profile, compose_profile


def emit_text(text: str, output_path: Path, dry_run: bool) -> None:
    if dry_run:
        logger.info("Dry run enabled; %s not written to disk.", output_path.name)
        print(text, end="")
        return
    write_text_file(text, output_path)


def export_manifest(
    descriptor: models.ManifestDescriptor,
    output_path: Path,
    force: bool = False,
    dry_run: bool = False,
    profile: Optional[models.ManifestProfile] = None,
) -> models.ValidationResult:
    """Validate, then render and write umbrel-app.yml.

    Nothing is written when required fields are missing unless ``force`` is set.
    """
    result = validate_manifest(descriptor)
    if not result.is_valid:
        logger.warning("Missing required fields: %s", ", ".join(result.missing_fields))
        if not force:
            return result
        logger.warning("Exporting anyway (--force).")
    emit_text(render_manifest(descriptor, profile), output_path, dry_run)
    return result


def export_compose(
    descriptor: models.ComposeDescriptor,
    output_path: Path,
    dry_run: bool = False,
    profile: Optional[models.ComposeProfile] = None,
) -> None:
    for service in descriptor.services:
        for volume in volume_warnings(service.volumes):
            logger.warning("Service %s mounts %s outside %s", service.name, volume, " or ".join(VOLUME_PREFIXES))
    emit_text(render_compose(descriptor, profile), output_path, dry_run)
