"""Render an Umbrel app manifest (umbrel-app.yml) from a ManifestDescriptor."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from yaml.reader import Reader

from .models import ManifestDescriptor, ManifestProfile
from .text_utils import coerce_port, numbered_gallery, split_csv
from .yaml_out import QuotedStr, dump_yaml, splice_folded_block

logger = logging.getLogger(__name__)

FOLDED_KEYS = ("description", "releaseNotes")


def _gallery_entries(descriptor: ManifestDescriptor, profile: ManifestProfile) -> List[str]:
    mode = profile.gallery_mode
    if mode is None:
        if descriptor.screenshot_count is not None:
            mode = "count"
        elif descriptor.gallery is not None:
            mode = "urls"
    if mode == "count":
        return numbered_gallery(descriptor.screenshot_count or 0)
    if mode == "urls":
        return split_csv(descriptor.gallery)
    return []


def build_manifest_data(
    descriptor: ManifestDescriptor,
    profile: Optional[ManifestProfile] = None,
) -> Dict[str, Any]:
    """Build the ordered mapping that is dumped as umbrel-app.yml."""
    profile = profile or ManifestProfile()
    data: Dict[str, Any] = {
        "manifestVersion": 1.1 if descriptor.manifest_version == "1.1" else 1,
    }

    def put(key: str, value: Any) -> None:
        if value:
            data[key] = value

    put("id", descriptor.id)
    put("category", descriptor.category)
    put("name", descriptor.name)
    if descriptor.version:
        data["version"] = QuotedStr(descriptor.version)
    put("tagline", descriptor.tagline)
    put("description", descriptor.description)
    data["releaseNotes"] = descriptor.release_notes
    put("developer", descriptor.developer)
    put("website", descriptor.website)
    data["dependencies"] = split_csv(descriptor.dependencies)
    data["permissions"] = split_csv(descriptor.permissions)
    put("repo", descriptor.repo)
    put("support", descriptor.support)
    if descriptor.port:
        data["port"] = coerce_port(descriptor.port)
    data["gallery"] = _gallery_entries(descriptor, profile)
    data["path"] = QuotedStr(descriptor.path)
    data["defaultUsername"] = QuotedStr(descriptor.default_username)
    if descriptor.deterministic_password:
        data["deterministicPassword"] = True
    else:
        data["defaultPassword"] = QuotedStr(descriptor.default_password)
    put("submitter", descriptor.submitter)
    put("submission", descriptor.submission)
    return data


def render_manifest(
    descriptor: ManifestDescriptor,
    profile: Optional[ManifestProfile] = None,
) -> str:
    """Render umbrel-app.yml text. Never raises for descriptor content."""
    data = build_manifest_data(descriptor, profile)
    logger.debug("Manifest keys: %s", ", ".join(data))
    text = dump_yaml(data)
    for key in FOLDED_KEYS:
        value = data.get(key)
        # Control characters only survive in the escaped double-quoted form.
        if value and not Reader.NON_PRINTABLE.search(value):
            text = splice_folded_block(text, key, value)
    return text
