"""Verify the relay's environment configuration before starting the server.

The server exits immediately when ``GITHUB_CLIENT_ID`` or
``GITHUB_CLIENT_SECRET`` is missing. This tool surfaces that ahead of time and
can pin a checksum of the ``.env`` file so later edits are noticed.

Example usages::

    # Validate settings and print the resolved (masked) configuration.
    python -m scripts.check_env check --env-file .env

    # Validate and record the expected checksum.
    python -m scripts.check_env record --env-file .env --hash-file .env.sha256

    # Run later (e.g. from a deploy hook) to alert on drift.
    python -m scripts.check_env verify --env-file .env --hash-file .env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from ghtoken.core.config import AppSettings, GitHubSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    """Return the SHA256 checksum for the target environment file."""
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _mask(value: str) -> str:
    if len(value) <= 4:
        return "*" * len(value)
    return f"{value[:2]}{'*' * (len(value) - 4)}{value[-2:]}"


def _load_settings(env_file: Path) -> AppSettings:
    """Build settings from the supplied env file plus the process environment."""
    _load_env_file(str(env_file))
    github = GitHubSettings()  # type: ignore[call-arg]
    return AppSettings(github=github, _env_file=env_file)  # type: ignore[call-arg]


def _describe(settings: AppSettings) -> int:
    print("Configuration OK.")
    print(f"  GITHUB_CLIENT_ID:        {settings.github.client_id}")
    print(f"  GITHUB_CLIENT_SECRET:    {_mask(settings.github.client_secret)}")
    print(f"  GITHUB_PUBLIC_CLIENT_ID: {settings.public_client_id}")
    print(f"  GITHUB_OAUTH_SCOPE:      {settings.ui.scope}")
    print(f"  RELAY_BASE_URL:          {settings.ui.relay_base_url}")
    print(f"  listening on:            {settings.host}:{settings.port}")
    return EXIT_OK


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    """Persist the current checksum to ``hash_file``."""
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    """Compare the current checksum to the recorded baseline."""
    if not hash_file.exists():
        print(
            f"Expected checksum file {hash_file} is missing. "
            "Re-run with the 'record' command to establish a baseline.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}\n"
        "Review the GitHub OAuth credentials before restarting the relay.",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the relay's settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common_arguments(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env in the repo root).",
        )

    record_parser = subparsers.add_parser(
        "record",
        help="Validate settings and store the checksum baseline.",
    )
    add_common_arguments(record_parser)
    record_parser.add_argument("--hash-file", required=True, type=Path)

    verify_parser = subparsers.add_parser(
        "verify",
        help="Validate settings and compare the checksum with the baseline.",
    )
    add_common_arguments(verify_parser)
    verify_parser.add_argument("--hash-file", required=True, type=Path)

    check_parser = subparsers.add_parser(
        "check",
        help="Validate settings and print them with secrets masked.",
    )
    add_common_arguments(check_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file

    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Copy .env.example and fill in the GitHub OAuth app credentials.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print("Settings validation failed:", file=sys.stderr)
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ())) or "settings"
            print(f"  {location}: {error.get('msg')}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    command: str = args.command
    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": lambda: _describe(settings),
    }
    return handlers[command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
