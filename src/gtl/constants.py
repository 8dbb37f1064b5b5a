"""Global constants and file locations for gtl.

This module defines the program identity, the location of the remotes
configuration file, and the fixed command lines and retry parameters used
by the publish workflow.
"""

import os
from pathlib import Path

# --- Identity ---
APP_NAME = "gtl"
"""str: The program name, used for logging and user-facing messages."""

APP_VERSION = "0.1.6"
"""str: The program version reported by `gtl version`."""

# --- Paths ---
_CONFIG_OVERRIDE = os.environ.get("GTL_CONFIG")

CONFIG_FILE: Path = (
    Path(_CONFIG_OVERRIDE)
    if _CONFIG_OVERRIDE
    else Path.home() / ".git_helper" / "config.json"
)
"""Path: The JSON file mapping directory paths to their remotes."""

MANIFEST_FILE = "Cargo.toml"
"""str: The package manifest read for the auto-generated commit message."""

# --- External Commands ---
GIT_BINARY = "git"
"""str: The version-control executable, resolved on PATH."""

PUBLISH_COMMAND = ("cargo", "publish", "--allow-dirty")
"""tuple[str, ...]: The package-publish command line run by `gtl pacp`."""

# --- Retry Policy ---
MAX_RETRIES = 6
"""int: Maximum number of publish attempts before giving up."""

RETRY_DELAY_SECS = 2
"""int: Fixed delay in seconds between publish attempts."""

# --- Logging ---
LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

COMMIT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
"""str: strftime format for the timestamp fallback commit message."""
