"""Utility for verifying the Allure bridge configuration before deployment.

Two commands are available:

``check``
    Load the settings from the given ``.env`` file and report any missing
    Allure connection values. The service refuses to start without them.

``probe``
    Run ``check`` and then exchange the configured API token for a bearer
    token, proving the base URL and the token are accepted by Allure. The
    bearer token itself is never printed.

Example usages::

    python -m scripts.check_env check --env-file /opt/allure-bridge/.env
    python -m scripts.check_env probe --env-file /opt/allure-bridge/.env
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from allure_bridge.clients import AllureClientError, BearerTokenCache
from allure_bridge.core.config import AppSettings, ConfigMissingError, load_settings

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_PROBE_ERROR = 4
EXIT_RUNTIME_ERROR = 5


def _probe_token(settings: AppSettings) -> int:
    cache = BearerTokenCache(settings.allure, timeout=settings.request_timeout_seconds)
    try:
        asyncio.run(cache.ensure_valid())
    except AllureClientError as exc:
        print(f"Token exchange against {settings.allure.base_url} failed: {exc}", file=sys.stderr)
        return EXIT_PROBE_ERROR
    print(f"Token exchange against {settings.allure.base_url} succeeded.")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate Allure bridge settings and optionally probe the token endpoint."
    )
    parser.add_argument("command", choices=("check", "probe"))
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the repo root).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = load_settings(env_file)
    except ConfigMissingError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            + "\n".join(f"  - {name}" for name in exc.missing),
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    print("Settings OK.")
    if args.command == "probe":
        return _probe_token(settings)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
