"""Render docker-compose.yml for an Umbrel app from a ComposeDescriptor."""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from .constants import APP_PROXY_SERVICE, STRICT_QUOTED_ENV_KEYS
from .models import AppProxyConfig, ComposeDescriptor, ComposeProfile, EnvLines, ServiceRecord
from .text_utils import non_blank
from .yaml_out import QuotedStr, dump_yaml

logger = logging.getLogger(__name__)

PORT_SHORTHAND = re.compile(r"[\d.:]+")


def _app_proxy_service(proxy: AppProxyConfig) -> Optional[Dict[str, Any]]:
    if not proxy.enabled:
        return None
    env = {key: value for key, value in proxy.env_items() if value}
    if not env:
        logger.debug("app_proxy enabled but has no environment; skipped")
        return None
    return {"environment": env}


def _environment(service: ServiceRecord) -> Any:
    env = service.environment
    if isinstance(env, EnvLines):
        lines = [line.strip() for line in env.lines if line.strip()]
        return lines or None
    return dict(env.values) or None


def _service_block(service: ServiceRecord, profile: ComposeProfile) -> Dict[str, Any]:
    block: Dict[str, Any] = {}
    if service.image:
        block["image"] = service.image
    restart = profile.locked_restart or service.restart
    if restart:
        block["restart"] = restart
    ports = non_blank(service.ports)
    if ports:
        block["ports"] = ports
    volumes = non_blank(service.volumes)
    if volumes:
        block["volumes"] = volumes
    environment = _environment(service)
    if environment is not None:
        block["environment"] = environment
    return block


def _apply_strict_quoting(services: Dict[str, Dict[str, Any]]) -> None:
    """Attach double-quote hints used by the strict profile."""
    for name, block in services.items():
        env = block.get("environment")
        if isinstance(env, dict):
            for key in STRICT_QUOTED_ENV_KEYS:
                if key in env:
                    env[key] = QuotedStr(env[key])
        if name == APP_PROXY_SERVICE or "ports" not in block:
            continue
        block["ports"] = [
            QuotedStr(port) if PORT_SHORTHAND.fullmatch(port) else port for port in block["ports"]
        ]


def build_compose_data(
    descriptor: ComposeDescriptor,
    profile: Optional[ComposeProfile] = None,
) -> Dict[str, Any]:
    """Build the ordered mapping that is dumped as docker-compose.yml."""
    profile = profile or ComposeProfile()
    version = profile.locked_version if profile.locked_version is not None else descriptor.version
    services: Dict[str, Dict[str, Any]] = {}

    proxy = _app_proxy_service(descriptor.app_proxy)
    if proxy is not None:
        services[APP_PROXY_SERVICE] = proxy

    for service in descriptor.services:
        if not service.name:
            logger.debug("Skipping unnamed service %s", service.id or "<no id>")
            continue
        services[service.name] = _service_block(service, profile)

    if profile.strict_quoting:
        _apply_strict_quoting(services)
    return {"version": version, "services": services}


def render_compose(
    descriptor: ComposeDescriptor,
    profile: Optional[ComposeProfile] = None,
) -> str:
    """Render docker-compose.yml text. Never raises for descriptor content."""
    data = build_compose_data(descriptor, profile)
    logger.debug("Compose services: %s", ", ".join(data["services"]) or "<none>")
    return dump_yaml(data)
