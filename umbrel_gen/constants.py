"""Shared constants for Umbrel manifest and compose generation."""

from __future__ import annotations

from typing import Dict, List

MANIFEST_FILENAME = "umbrel-app.yml"
COMPOSE_FILENAME = "docker-compose.yml"

MANIFEST_VERSIONS = ["1", "1.1"]
DEFAULT_MANIFEST_VERSION = "1"
DEFAULT_CATEGORY = "automation"
DEFAULT_COMPOSE_VERSION = "3.7"
DEFAULT_RESTART_POLICY = "on-failure"

APP_CATEGORIES = [
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

RESTART_POLICIES = ["no", "always", "on-failure", "unless-stopped"]

PERMISSIONS = {
    "STORAGE_DOWNLOADS": "Access to shared downloads folder",
    "GPU": "Access to GPU hardware for compute tasks",
}

APP_PROXY_SERVICE = "app_proxy"

# Environment keys the strict profile always renders double-quoted.
STRICT_QUOTED_ENV_KEYS = ("APP_PORT", "PROXY_AUTH_WHITELIST", "PROXY_AUTH_BLACKLIST")

VOLUME_PREFIXES = ("${APP_DATA_DIR}", "${UMBREL_ROOT}")
DEFAULT_VOLUME_ENTRY = "${APP_DATA_DIR}/"

UMBREL_SPECIAL_VARS: Dict[str, str] = {
    "$DEVICE_HOSTNAME": 'Umbrel server device hostname (e.g. "umbrel")',
    "$DEVICE_DOMAIN_NAME": 'A .local domain name for the Umbrel server (e.g. "umbrel.local")',
    "$TOR_PROXY_IP": "Local IP of Tor proxy",
    "$TOR_PROXY_PORT": "Port of Tor proxy",
    "$APP_HIDDEN_SERVICE": "The address of the Tor hidden service your app will be exposed at",
    "$APP_PASSWORD": "Unique plain text password that can be used for authentication in your app",
    "$APP_SEED": (
        "Unique 256 bit long hex string (128 bits of entropy) deterministically derived "
        "from user's Umbrel seed and your app's ID"
    ),
}

# Order matters: labels are reported in this order.
REQUIRED_MANIFEST_FIELDS: List[tuple] = [
    ("id", "ID"),
    ("name", "Name"),
    ("version", "Version"),
    ("tagline", "Tagline"),
    ("description", "Description"),
    ("developer", "Developer"),
    ("website", "Website"),
    ("repo", "Repository"),
    ("support", "Support"),
    ("port", "Port"),
    ("submitter", "Submitter"),
    ("submission", "Submission"),
]
