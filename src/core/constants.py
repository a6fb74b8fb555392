"""Core constants used across IceCave modules.

This module centralizes defaults and file naming.
Keeping values here avoids magic literals in store logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DIRECTORY = Path("./icecave-data")
DEFAULT_COLLECTION_NAME = "icecave"
DEFAULT_DUMP_INTERVAL_SECONDS = 5.0
DUMP_FILE_SUFFIX = ".json"
DUMP_TEMP_SUFFIX = ".tmp"
DUMP_FILE_ENCODING = "utf-8"
EMPTY_DUMP_PAYLOAD = "[]"
DUMP_OPEN_TOKEN = "[\n"
DUMP_SEPARATOR_TOKEN = ",\n"
DUMP_CLOSE_TOKEN = "\n]"
TRUTHY_ENV_VALUES = ("1", "true", "yes", "on")
FALSY_ENV_VALUES = ("0", "false", "no", "off", "")
