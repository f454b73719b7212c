"""Command line interface for Umbrel app file generation."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .constants import COMPOSE_FILENAME, MANIFEST_FILENAME, RESTART_POLICIES
from .main import (
    export_compose,
    export_manifest,
    load_compose_descriptor,
    load_manifest_descriptor,
    load_profiles,
)
from .validation import validate_manifest

EXIT_BLOCKED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="umbrel-gen",
        description="Generate umbrel-app.yml and docker-compose.yml for Umbrel apps.",
    )
    parser.add_argument(
        "--profiles",
        type=Path,
        help="YAML file with manifest/compose rendering profiles.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    manifest = commands.add_parser("manifest", help="Render umbrel-app.yml.")
    manifest.add_argument("input_file", type=Path, help="Manifest descriptor (JSON or YAML).")
    manifest.add_argument("-o", "--output", type=Path, default=Path(MANIFEST_FILENAME))
    manifest.add_argument(
        "--gallery-mode",
        choices=["count", "urls"],
        help="Render the gallery from galleryCount or from the raw gallery list.",
    )
    manifest.add_argument(
        "--force",
        action="store_true",
        help="Export even when required fields are missing.",
    )
    manifest.add_argument("--dry-run", action="store_true", help="Print instead of writing.")

    compose = commands.add_parser("compose", help="Render docker-compose.yml.")
    compose.add_argument("input_file", type=Path, help="Compose descriptor (JSON or YAML).")
    compose.add_argument("-o", "--output", type=Path, default=Path(COMPOSE_FILENAME))
    compose.add_argument(
        "--profile",
        choices=["strict", "minimal"],
        help="Quoting profile; strict forces quotes on ports and proxy settings.",
    )
    compose.add_argument("--compose-version", help="Pin the compose file version.")
    compose.add_argument(
        "--restart-policy",
        choices=RESTART_POLICIES,
        help="Use this restart policy for every service.",
    )
    compose.add_argument("--dry-run", action="store_true", help="Print instead of writing.")

    validate = commands.add_parser("validate", help="Check required manifest fields.")
    validate.add_argument("input_file", type=Path, help="Manifest descriptor (JSON or YAML).")

    serve = commands.add_parser("serve", help="Run the preview/export web service.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8001)
    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        manifest_profile, compose_profile = load_profiles(args.profiles)

        if args.command == "manifest":
            if args.gallery_mode:
                manifest_profile = manifest_profile.model_copy(update={"gallery_mode": args.gallery_mode})
            descriptor = load_manifest_descriptor(args.input_file)
            result = export_manifest(
                descriptor,
                args.output,
                force=args.force,
                dry_run=args.dry_run,
                profile=manifest_profile,
            )
            return 0 if result.is_valid or args.force else EXIT_BLOCKED

        if args.command == "compose":
            updates = {}
            if args.profile:
                updates["strict_quoting"] = args.profile == "strict"
            if args.compose_version:
                updates["locked_version"] = args.compose_version
            if args.restart_policy:
                updates["locked_restart"] = args.restart_policy
            descriptor = load_compose_descriptor(args.input_file)
            export_compose(
                descriptor,
                args.output,
                dry_run=args.dry_run,
                profile=compose_profile.model_copy(update=updates),
            )
            return 0

        if args.command == "validate":
            result = validate_manifest(load_manifest_descriptor(args.input_file))
            if result.is_valid:
                logging.info("All required fields are present.")
                return 0
            for label in result.missing_fields:
                print(f"missing: {label}")
            return EXIT_BLOCKED

        from .webui import run

        run(host=args.host, port=args.port)
        return 0
    except Exception as exc:  # pragma: no cover - protects CLI UX
        logging.error("umbrel-gen failed: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
