"""Command-line helper for inspecting and driving the stored API session.

Subcommands::

    # Validate settings loaded from an .env file.
    python -m scripts.session --env-file .env check

    # Report whether an access token is currently stored.
    python -m scripts.session status

    # Log in (password is prompted when omitted) and fetch a profile.
    python -m scripts.session login --email a@b.com
    python -m scripts.session fetch-user 42

    # Forget the local session.
    python -m scripts.session logout
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from pathlib import Path
from typing import Awaitable, Callable

from pydantic import ValidationError

from netcore.core.config import AppSettings, _load_env_file
from netcore.core.errors import (
    AuthenticationError,
    NetworkError,
    SecretStoreError,
    UnauthorizedError,
)
from netcore.core.logging import configure_logging
from netcore.dependencies import (
    build_api_client,
    build_token_manager,
    build_transport,
)
from netcore.services import APIClient, TokenManager

EXIT_OK = 0
EXIT_NOT_AUTHENTICATED = 1
EXIT_VALIDATION_ERROR = 2
EXIT_REQUEST_ERROR = 4
EXIT_RUNTIME_ERROR = 5


def _load_settings(env_file: Path) -> AppSettings:
    """Load settings, letting variables from ``env_file`` fill any gaps."""
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _build_session(settings: AppSettings) -> tuple[APIClient, TokenManager]:
    transport = build_transport(settings)
    tokens = build_token_manager(settings, transport=transport)
    return build_api_client(settings, transport=transport, token_manager=tokens), tokens


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and manage the locally stored API session."
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the working directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check", help="Validate settings and exit.")
    subparsers.add_parser("status", help="Report whether a session is stored.")
    subparsers.add_parser("logout", help="Clear the stored token pair.")
    subparsers.add_parser(
        "refresh", help="Exchange the stored refresh token for a new pair."
    )

    login_parser = subparsers.add_parser("login", help="Log in and store tokens.")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument(
        "--password",
        default=None,
        help="Password; prompted for interactively when omitted.",
    )

    fetch_parser = subparsers.add_parser("fetch-user", help="Fetch one user profile.")
    fetch_parser.add_argument("user_id")

    return parser


async def _login(client: APIClient, args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else getpass.getpass()
    await client.login(args.email, password)
    print("Logged in.")
    return EXIT_OK


async def _fetch_user(client: APIClient, args: argparse.Namespace) -> int:
    user = await client.fetch_user(args.user_id)
    print(user.model_dump_json(indent=2))
    return EXIT_OK


async def _refresh(tokens: TokenManager) -> int:
    await tokens.refresh_access_token()
    print("Access token refreshed.")
    return EXIT_OK


def _status(tokens: TokenManager) -> int:
    if tokens.is_authenticated:
        print("Authenticated.")
        return EXIT_OK
    print("Not authenticated.")
    return EXIT_NOT_AUTHENTICATED


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args.env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    configure_logging(settings.log_level)
    if args.command == "check":
        print(f"Settings OK ({settings.environment}, {settings.api.base_url}).")
        return EXIT_OK

    client, tokens = _build_session(settings)
    handlers: dict[str, Callable[[], Awaitable[int]]] = {
        "login": lambda: _login(client, args),
        "fetch-user": lambda: _fetch_user(client, args),
        "refresh": lambda: _refresh(tokens),
    }

    try:
        if args.command == "status":
            return _status(tokens)
        if args.command == "logout":
            asyncio.run(client.logout())
            print("Logged out.")
            return EXIT_OK
        return asyncio.run(handlers[args.command]())
    except (UnauthorizedError, AuthenticationError) as exc:
        print(f"{exc} Run 'login' to start a new session.", file=sys.stderr)
        return EXIT_NOT_AUTHENTICATED
    except NetworkError as exc:
        print(f"Request failed: {exc}", file=sys.stderr)
        return EXIT_REQUEST_ERROR
    except SecretStoreError as exc:
        print(f"Secret store error: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
