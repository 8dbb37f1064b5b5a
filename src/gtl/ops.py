import datetime
import logging
import time
import tomllib
from collections.abc import Callable
from pathlib import Path

from rich.console import Console

from .config import Config, Remote, Settings
from .constants import APP_NAME, COMMIT_TIMESTAMP_FORMAT
from .errors import InputError, PublishError, SpawnError
from .git_wrapper import GitRepo, ProcessInvoker

console = Console()
logger = logging.getLogger(APP_NAME)


def canonical_path(path: Path) -> str:
    """Returns the absolute, symlink-free form of `path` used as a config key."""
    return str(path.resolve())


def for_each_remote(
    config: Config, current_dir: Path, operation: Callable[[Remote], int]
) -> int:
    """Applies an operation to every remote configured for a directory.

    Remotes are visited in file order. A non-zero exit code from one remote is
    logged and iteration moves on to the next; only a failure to start the
    command (SpawnError) stops the loop.

    Args:
        config (Config): The loaded remotes configuration.
        current_dir (Path): The directory whose remotes are used.
        operation (Callable[[Remote], int]): Runs the git command for one
            remote and returns its exit code.

    Returns:
        int: The number of remotes the operation was applied to.
    """
    key = canonical_path(current_dir)
    remotes = config.remotes_for(key)
    if not remotes:
        logger.debug(f"No remotes configured for {key}")
        return 0

    for remote in remotes:
        code = operation(remote)
        if code != 0:
            logger.warning(f"{remote.name}: git exited with status {code}")
    return len(remotes)


def add_remotes(repo: GitRepo, config: Config, current_dir: Path) -> int:
    """Runs `git remote add` for each configured remote."""
    return for_each_remote(config, current_dir, repo.remote_add)


def push_all(repo: GitRepo, config: Config, current_dir: Path) -> int:
    """Runs `git push <name>` for each configured remote."""
    return for_each_remote(config, current_dir, lambda r: repo.push(r.name))


def publish_package(
    invoker: ProcessInvoker,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Runs the package publish command, retrying with a fixed delay.

    Args:
        invoker (ProcessInvoker): Runs the publish command.
        settings (Settings): Supplies the command line, attempt limit and delay.
        sleep (Callable[[float], None], optional): Blocks between attempts.
            Defaults to time.sleep.

    Returns:
        int: The attempt number that succeeded.

    Raises:
        PublishError: If every attempt fails.
    """
    for attempt in range(1, settings.max_retries + 1):
        try:
            code = invoker.run(list(settings.publish_command))
        except SpawnError as e:
            cause = f"error: {e}"
        else:
            if code == 0:
                console.print(
                    "[bold green]✔ Successfully published package.[/bold green]"
                )
                return attempt
            cause = f"status: {code}"

        if attempt < settings.max_retries:
            logger.warning(
                f"Attempt {attempt} failed with {cause}. "
                f"Retrying in {settings.retry_delay} seconds..."
            )
            sleep(settings.retry_delay)
        else:
            logger.warning(f"Attempt {attempt} failed with {cause}.")

    raise PublishError(
        f"Failed to publish package after {settings.max_retries} attempts."
    )


def _read_manifest_version(manifest: Path) -> str | None:
    """Reads `[package].version` from a TOML manifest, or None on any failure."""
    try:
        with open(manifest, "rb") as f:
            data = tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.debug(f"Could not read {manifest}: {e}")
        return None

    package = data.get("package")
    version = package.get("version") if isinstance(package, dict) else None
    if not isinstance(version, str):
        logger.debug(f"No [package].version in {manifest}")
        return None
    return version


def generate_auto_commit_message(
    settings: Settings,
    cwd: Path,
    now: datetime.datetime | None = None,
) -> str:
    """Builds a commit message from the manifest version or the current time.

    Args:
        settings (Settings): Supplies the manifest file name.
        cwd (Path): Directory searched for the manifest.
        now (datetime.datetime | None, optional): Timestamp for the fallback
            message. Defaults to the current local time.

    Returns:
        str: 'feat: v<version>' when the manifest has a version,
             otherwise 'feat: <YYYY-MM-DD HH:MM:SS>'.
    """
    version = _read_manifest_version(cwd / settings.manifest_file)
    if version is not None:
        return f"feat: v{version}"

    now = now or datetime.datetime.now()
    return f"feat: {now.strftime(COMMIT_TIMESTAMP_FORMAT)}"


def read_commit_message() -> str:
    """Reads one line from standard input and returns it stripped.

    Raises:
        InputError: If standard input is closed or unreadable.
    """
    try:
        line = console.input(
            "[bold]Commit message[/bold] [dim](blank for auto)[/dim]: "
        )
    except (EOFError, OSError, UnicodeDecodeError) as e:
        reason = str(e) or "end of input"
        raise InputError(f"Failed to read commit message: {reason}") from e
    return line.strip()


def init_repository(repo: GitRepo, config: Config, cwd: Path) -> None:
    """Initializes a repository and registers its configured remotes."""
    repo.init()
    repo.add_safe_directory(canonical_path(cwd))
    repo.disable_ignored_file_advice()
    count = add_remotes(repo, config, cwd)
    logger.info(f"Added {count} remote(s) for {cwd}")


def add_commit_push(
    repo: GitRepo, config: Config, settings: Settings, cwd: Path
) -> None:
    """Prompts for a message, commits everything and pushes to every remote."""
    message = read_commit_message() or generate_auto_commit_message(settings, cwd)
    repo.add_all()
    repo.commit(message)
    push_all(repo, config, cwd)


def publish_and_push(
    invoker: ProcessInvoker,
    repo: GitRepo,
    config: Config,
    settings: Settings,
    cwd: Path,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Publishes the package, then commits with an auto message and pushes."""
    publish_package(invoker, settings, sleep=sleep)
    repo.add_all()
    repo.commit(generate_auto_commit_message(settings, cwd))
    push_all(repo, config, cwd)
