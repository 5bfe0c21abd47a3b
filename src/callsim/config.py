"""Startup configuration.

Settings come from environment variables (``bot.py`` loads ``.env`` first).
``validate_config()`` runs before the app is built, so a malformed value fails
at startup with a clear message rather than mid-call.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from callsim.dialogue import MAX_TURNS_PER_CALL

logger = logging.getLogger(__name__)

REQUIRED_VARS: list[str] = []

OPTIONAL_VARS = [
    "CALLSIM_PROFILE_PATH",
    "CALLSIM_MAX_TURNS",
    "LOG_LEVEL",
    "PORT",
]

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    profile_path: Path | None = None
    max_turns: int = MAX_TURNS_PER_CALL
    log_level: str = "INFO"
    port: int = 8765


def _config_errors() -> list[str]:
    errors = []
    missing = [var for var in REQUIRED_VARS if not os.getenv(var)]
    if missing:
        errors.append(f"Missing required environment variables: {', '.join(missing)}")

    profile_path = os.getenv("CALLSIM_PROFILE_PATH")
    if profile_path and not Path(profile_path).is_file():
        errors.append(f"CALLSIM_PROFILE_PATH does not point to a file: {profile_path}")

    for var in ("CALLSIM_MAX_TURNS", "PORT"):
        value = os.getenv(var)
        if value and (not value.isdigit() or int(value) < 1):
            errors.append(f"{var} must be a positive integer, got {value!r}")

    level = os.getenv("LOG_LEVEL")
    if level and level.upper() not in LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}, got {level!r}")
    return errors


def validate_config() -> None:
    """Validate environment variables at startup.

    Exits the process with a clear error if any value is malformed.
    Logs warnings for missing optional variables.
    """
    errors = _config_errors()
    if errors:
        print(
            "\nFATAL: Invalid configuration:\n"
            + "".join(f"  {e}\n" for e in errors)
            + "\nSet them in .env or the process environment.\n",
            file=sys.stderr,
        )
        sys.exit(1)

    for var in OPTIONAL_VARS:
        if not os.getenv(var):
            logger.warning("Optional env var %s is not set", var)


def load_settings() -> Settings:
    profile_path = os.getenv("CALLSIM_PROFILE_PATH")
    return Settings(
        profile_path=Path(profile_path) if profile_path else None,
        max_turns=int(os.getenv("CALLSIM_MAX_TURNS") or MAX_TURNS_PER_CALL),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        port=int(os.getenv("PORT") or 8765),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
