import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import (
    APP_NAME,
    APP_VERSION,
    CONFIG_FILE,
    GIT_BINARY,
    MANIFEST_FILE,
    MAX_RETRIES,
    PUBLISH_COMMAND,
    RETRY_DELAY_SECS,
)
from .errors import ConfigError

logger = logging.getLogger(APP_NAME)


@dataclass(frozen=True)
class Settings:
    """Runtime settings, built once at startup and passed to each component.

    Attributes:
        app_name (str): Program name shown in usage and version output.
        version (str): Program version string.
        config_file (Path): Location of the remotes configuration file.
        git_binary (str): The version-control executable.
        publish_command (tuple[str, ...]): Command line for publishing the package.
        max_retries (int): Maximum publish attempts.
        retry_delay (float): Seconds to wait between publish attempts.
        manifest_file (str): Manifest read for the auto-generated commit message.
    """

    app_name: str = APP_NAME
    version: str = APP_VERSION
    config_file: Path = CONFIG_FILE
    git_binary: str = GIT_BINARY
    publish_command: tuple[str, ...] = PUBLISH_COMMAND
    max_retries: int = MAX_RETRIES
    retry_delay: float = RETRY_DELAY_SECS
    manifest_file: str = MANIFEST_FILE


@dataclass(frozen=True)
class Remote:
    """A named remote endpoint a repository pushes to.

    Attributes:
        name (str): The git remote name (e.g. 'origin').
        url (str): The remote URL, passed to git unvalidated.
    """

    name: str
    url: str

    @classmethod
    def from_dict(cls, data: Any) -> "Remote":
        """Builds a Remote from one decoded JSON object.

        Raises:
            ValueError: If `data` is not an object with string `name` and `url`.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Remote entry must be an object, got {data!r}")
        name, url = data.get("name"), data.get("url")
        if not isinstance(name, str) or not isinstance(url, str):
            raise ValueError(f"Remote entry needs string 'name' and 'url': {data!r}")
        return cls(name=name, url=url)


@dataclass
class Config:
    """The mapping of absolute directory paths to their configured remotes.

    Attributes:
        remotes (dict[str, list[Remote]]): Remotes keyed by directory path,
            in the order they appear in the file.
    """

    remotes: dict[str, list[Remote]] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Loads the configuration file, creating an empty one if it is absent.

        Args:
            path (Path): Location of the JSON configuration file.

        Returns:
            Config: The parsed configuration.

        Raises:
            ConfigError: If the file cannot be created, read or parsed.
        """
        if not path.exists():
            logger.info(f"Creating empty config at {path}")
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(json.dumps({}), encoding="utf-8")
            except OSError as e:
                raise ConfigError(f"Unable to create config file {path}: {e}") from e

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Unable to read config file {path}: {e}") from e

        try:
            return cls.from_dict(json.loads(text))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass.
            raise ConfigError(f"Unable to parse config file {path}: {e}") from e

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Validates decoded JSON and converts it into a Config.

        Raises:
            ValueError: If the data is not a mapping of paths to remote lists.
        """
        if not isinstance(data, dict):
            raise ValueError("top level must be an object mapping paths to remotes")

        remotes: dict[str, list[Remote]] = {}
        for key, entries in data.items():
            if not isinstance(entries, list):
                raise ValueError(f"remotes for '{key}' must be a list")
            remotes[key] = [Remote.from_dict(entry) for entry in entries]
        return cls(remotes=remotes)

    def remotes_for(self, path: str) -> list[Remote]:
        """Returns the remotes configured for an exact path key, or an empty list."""
        return list(self.remotes.get(path, []))
