"""FastAPI service that previews, validates and exports Umbrel app files."""
from __future__ import annotations

import logging
from typing import Literal, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from .compose import render_compose
from .constants import (
    APP_CATEGORIES,
    COMPOSE_FILENAME,
    DEFAULT_VOLUME_ENTRY,
    MANIFEST_FILENAME,
    MANIFEST_VERSIONS,
    PERMISSIONS,
    RESTART_POLICIES,
    UMBREL_SPECIAL_VARS,
)
from .manifest import render_manifest
from .models import (
    ComposeDescriptor,
    ComposeProfile,
    ManifestDescriptor,
    ManifestProfile,
    RestartPolicy,
)
from .validation import validate_manifest

logger = logging.getLogger(__name__)

app = FastAPI(title="Umbrel App Config Generator")

YAML_MEDIA_TYPE = "text/yaml"


def _attachment(text: str, filename: str) -> PlainTextResponse:
    return PlainTextResponse(
        text,
        media_type=YAML_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _compose_profile(
    profile: Literal["strict", "minimal"],
    compose_version: Optional[str],
    restart_policy: Optional[RestartPolicy],
) -> ComposeProfile:
    return ComposeProfile(
        strict_quoting=profile == "strict",
        locked_version=compose_version,
        locked_restart=restart_policy,
    )


@app.get("/api/defaults")
async def get_defaults() -> dict:
    return {
        "manifest": ManifestDescriptor().model_dump(by_alias=True),
        "compose": ComposeDescriptor().model_dump(by_alias=True),
        "manifestVersions": MANIFEST_VERSIONS,
        "categories": APP_CATEGORIES,
        "restartPolicies": RESTART_POLICIES,
        "permissions": PERMISSIONS,
        "specialVars": UMBREL_SPECIAL_VARS,
        "volumeTemplate": DEFAULT_VOLUME_ENTRY,
    }


@app.post("/api/manifest/render", response_class=PlainTextResponse)
async def preview_manifest(
    descriptor: ManifestDescriptor,
    gallery_mode: Optional[Literal["count", "urls"]] = None,
) -> PlainTextResponse:
    text = render_manifest(descriptor, ManifestProfile(gallery_mode=gallery_mode))
    return PlainTextResponse(text, media_type=YAML_MEDIA_TYPE)


@app.post("/api/manifest/validate")
async def check_manifest(descriptor: ManifestDescriptor) -> dict:
    return validate_manifest(descriptor).model_dump(by_alias=True)


@app.post("/api/manifest/export", response_class=PlainTextResponse)
async def export_manifest(
    descriptor: ManifestDescriptor,
    force: bool = False,
    gallery_mode: Optional[Literal["count", "urls"]] = None,
) -> PlainTextResponse:
    result = validate_manifest(descriptor)
    if not result.is_valid:
        logger.warning("Manifest export missing fields: %s", ", ".join(result.missing_fields))
        if not force:
            raise HTTPException(
                status_code=422,
                detail={"message": "Required fields are missing.", "missingFields": result.missing_fields},
            )
    text = render_manifest(descriptor, ManifestProfile(gallery_mode=gallery_mode))
    return _attachment(text, MANIFEST_FILENAME)


@app.post("/api/compose/render", response_class=PlainTextResponse)
async def preview_compose(
    descriptor: ComposeDescriptor,
    profile: Literal["strict", "minimal"] = "strict",
    compose_version: Optional[str] = None,
    restart_policy: Optional[RestartPolicy] = None,
) -> PlainTextResponse:
    text = render_compose(descriptor, _compose_profile(profile, compose_version, restart_policy))
    return PlainTextResponse(text, media_type=YAML_MEDIA_TYPE)


@app.post("/api/compose/export", response_class=PlainTextResponse)
async def export_compose(
    descriptor: ComposeDescriptor,
    profile: Literal["strict", "minimal"] = "strict",
    compose_version: Optional[str] = None,
    restart_policy: Optional[RestartPolicy] = None,
) -> PlainTextResponse:
    text = render_compose(descriptor, _compose_profile(profile, compose_version, restart_policy))
    return _attachment(text, COMPOSE_FILENAME)


def run(host: str = "127.0.0.1", port: int = 8001) -> None:
    """Launch the FastAPI web service using uvicorn."""
    logger.info("Starting Umbrel generator web service on %s:%s", host, port)
    uvicorn.run("umbrel_gen.webui:app", host=host, port=port, reload=False)


if __name__ == "__main__":  # pragma: no cover
    run()
