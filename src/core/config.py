"""Collection configuration model for IceCave.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_COLLECTION_NAME,
    DEFAULT_DIRECTORY,
    DEFAULT_DUMP_INTERVAL_SECONDS,
    DUMP_FILE_SUFFIX,
    FALSY_ENV_VALUES,
    TRUTHY_ENV_VALUES,
)
from core.errors import IceCaveConfigError


@dataclass(frozen=True)
class CollectionConfig:
    """Validated collection configuration.

    Attributes:
        directory: Existing directory that holds the dump file.
        name: Collection name, used as the dump file stem.
        memory_only: Skip all disk I/O when true.
        dump_interval_seconds: Delay between periodic dumps.
    """

    directory: Path
    name: str = DEFAULT_COLLECTION_NAME
    memory_only: bool = False
    dump_interval_seconds: float = DEFAULT_DUMP_INTERVAL_SECONDS

    @property
    def dump_path(self) -> Path:
        """Return the dump file path for this collection."""
        return self.directory / f"{self.name}{DUMP_FILE_SUFFIX}"

    @classmethod
    def from_env(cls) -> "CollectionConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            IceCaveConfigError: If environment values are invalid.
        """
        directory_value = os.getenv("ICECAVE_DIRECTORY", str(DEFAULT_DIRECTORY))
        name = os.getenv("ICECAVE_NAME", DEFAULT_COLLECTION_NAME)
        memory_only = _parse_bool("ICECAVE_MEMORY_ONLY", os.getenv("ICECAVE_MEMORY_ONLY", ""))
        interval_value = os.getenv("ICECAVE_DUMP_INTERVAL", str(DEFAULT_DUMP_INTERVAL_SECONDS))
        return cls(
            directory=Path(directory_value).expanduser(),
            name=_validate_name(name),
            memory_only=memory_only,
            dump_interval_seconds=_parse_interval(interval_value),
        )


def validate_directory(config: CollectionConfig) -> None:
    """Ensure the configured directory exists.

    Args:
        config: Collection configuration.

    Raises:
        IceCaveConfigError: If the directory is missing.
    """
    if not config.directory.is_dir():
        raise IceCaveConfigError(
            f"Whoops! The directory \"{config.directory}\" doesn't exist. "
            "Please create it and try again."
        )


def _validate_name(raw_value: str) -> str:
    """Reject collection names that cannot be used as a file stem."""
    name = raw_value.strip()
    if not name or "/" in name or "\\" in name:
        raise IceCaveConfigError(
            f"Invalid ICECAVE_NAME value: got '{raw_value}'. "
            "Use a non-empty name without path separators."
        )
    return name


def _parse_bool(variable: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        variable: Environment variable name for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag.

    Raises:
        IceCaveConfigError: If the value is not a recognized flag.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUTHY_ENV_VALUES:
        return True
    if normalized in FALSY_ENV_VALUES:
        return False
    raise IceCaveConfigError(
        f"Invalid {variable} value: expected one of "
        f"{', '.join(TRUTHY_ENV_VALUES + FALSY_ENV_VALUES[:-1])}, got '{raw_value}'."
    )


def _parse_interval(raw_value: str) -> float:
    """Parse the dump interval environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive interval in seconds.

    Raises:
        IceCaveConfigError: If value is not a positive number.
    """
    try:
        interval = float(raw_value)
    except ValueError as error:
        raise IceCaveConfigError(
            "Invalid ICECAVE_DUMP_INTERVAL value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set ICECAVE_DUMP_INTERVAL to a positive number."
        ) from error
    if interval <= 0:
        raise IceCaveConfigError(
            f"Invalid ICECAVE_DUMP_INTERVAL value: expected positive seconds, got '{raw_value}'."
        )
    return interval
