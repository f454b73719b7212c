"""Pydantic data models shared across the Umbrel generators."""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .constants import (
    DEFAULT_CATEGORY,
    DEFAULT_COMPOSE_VERSION,
    DEFAULT_MANIFEST_VERSION,
    DEFAULT_RESTART_POLICY,
)
from .text_utils import clean_env_key, split_env_text, strip_quotes

ManifestVersion = Literal["1", "1.1"]
AppCategory = Literal[
    "files",
    "bitcoin",
    "media",
    "networking",
    "social",
    "automation",
    "finance",
    "ai",
    "developer",
]
RestartPolicy = Literal["", "no", "always", "on-failure", "unless-stopped"]
GalleryMode = Literal["count", "urls"]


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )


class ManifestDescriptor(_Frozen):
    """Store listing and runtime descriptor of one Umbrel app."""

    manifest_version: ManifestVersion = DEFAULT_MANIFEST_VERSION
    id: str = ""
    category: AppCategory = DEFAULT_CATEGORY
    name: str = ""
    version: str = ""
    tagline: str = ""
    description: str = ""
    release_notes: str = ""
    developer: str = ""
    website: str = ""
    dependencies: str = ""
    repo: str = ""
    support: str = ""
    port: str = ""
    permissions: str = ""
    screenshot_count: Optional[int] = Field(default=None, ge=0, alias="galleryCount")
    gallery: Optional[str] = None
    path: str = ""
    default_username: str = ""
    deterministic_password: bool = False
    default_password: str = ""
    submitter: str = ""
    submission: str = ""


class AppProxyConfig(_Frozen):
    enabled: bool = True
    app_host: str = Field(default="", alias="APP_HOST")
    app_port: str = Field(default="", alias="APP_PORT")
    proxy_auth_add: Optional[str] = Field(default=None, alias="PROXY_AUTH_ADD")
    proxy_auth_whitelist: Optional[str] = Field(default=None, alias="PROXY_AUTH_WHITELIST")
    proxy_auth_blacklist: Optional[str] = Field(default=None, alias="PROXY_AUTH_BLACKLIST")

    def env_items(self) -> List[tuple]:
        """Environment variables in the fixed order they are rendered."""
        return [
            ("APP_HOST", self.app_host),
            ("APP_PORT", self.app_port),
            ("PROXY_AUTH_ADD", self.proxy_auth_add),
            ("PROXY_AUTH_WHITELIST", self.proxy_auth_whitelist),
            ("PROXY_AUTH_BLACKLIST", self.proxy_auth_blacklist),
        ]


class EnvMapping(_Frozen):
    format: Literal["object"] = "object"
    values: Dict[str, str] = Field(default_factory=dict)


class EnvLines(_Frozen):
    format: Literal["array"] = "array"
    lines: List[str] = Field(default_factory=list)


Environment = Union[EnvMapping, EnvLines]


class ServiceRecord(_Frozen):
    id: str = ""
    name: str = ""
    image: str = ""
    restart: RestartPolicy = DEFAULT_RESTART_POLICY
    ports: List[str] = Field(default_factory=list)
    volumes: List[str] = Field(default_factory=list)
    environment: Environment = Field(default_factory=EnvMapping, discriminator="format")

    @model_validator(mode="before")
    @classmethod
    def _accept_flat_environment(cls, data: Any) -> Any:
        """Convert the flat ``environmentFormat`` payload into the tagged form."""
        if not isinstance(data, dict) or "environmentFormat" not in data:
            return data
        converted = dict(data)
        env_format = converted.pop("environmentFormat")
        mapping = converted.pop("environment", None) or {}
        lines = converted.pop("environmentArray", None) or []
        if isinstance(lines, str):
            lines = split_env_text(lines)
        else:
            lines = [strip_quotes(line) for line in lines]
        mapping = {clean_env_key(key): value for key, value in mapping.items() if clean_env_key(key)}
        if env_format == "array":
            converted["environment"] = {"format": "array", "lines": lines}
        else:
            converted["environment"] = {"format": "object", "values": mapping}
        return converted


class ComposeDescriptor(_Frozen):
    version: str = DEFAULT_COMPOSE_VERSION
    app_proxy: AppProxyConfig = Field(default_factory=AppProxyConfig)
    services: List[ServiceRecord] = Field(default_factory=list)

    def add_service(self, **fields: Any) -> "ComposeDescriptor":
        """Return a copy with a new service appended under a fresh identifier."""
        record = ServiceRecord(id=f"service-{uuid.uuid4().hex[:12]}", **fields)
        return self.model_copy(update={"services": [*self.services, record]})

    def remove_service(self, service_id: str) -> "ComposeDescriptor":
        remaining = [svc for svc in self.services if svc.id != service_id]
        return self.model_copy(update={"services": remaining})

    def update_service(self, service_id: str, **changes: Any) -> "ComposeDescriptor":
        updated = []
        for svc in self.services:
            if svc.id == service_id:
                svc = ServiceRecord.model_validate({**svc.model_dump(), **changes})
            updated.append(svc)
        return self.model_copy(update={"services": updated})


class ValidationResult(_Frozen):
    is_valid: bool
    missing_fields: List[str] = Field(default_factory=list)


class ManifestProfile(_Frozen):
    """Rendering options for the manifest generator."""

    model_config = ConfigDict(extra="forbid")

    gallery_mode: Optional[GalleryMode] = None


class ComposeProfile(_Frozen):
    """Rendering options for the compose generator."""

    model_config = ConfigDict(extra="forbid")

    strict_quoting: bool = True
    locked_version: Optional[str] = None
    locked_restart: Optional[RestartPolicy] = None

    @classmethod
    def strict(cls) -> "ComposeProfile":
        return cls(strict_quoting=True)

    @classmethod
    def minimal(cls) -> "ComposeProfile":
        return cls(strict_quoting=False)
