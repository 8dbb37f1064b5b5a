import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import ops
from .config import Config, Settings
from .constants import APP_NAME, LOG_DATE_FORMAT, LOG_FORMAT
from .errors import GtlError
from .git_wrapper import GitRepo, ProcessInvoker

logger = logging.getLogger(APP_NAME)
console = Console()
err_console = Console(stderr=True)

VERSION_FLAGS = ("version", "-v", "--version")

# Verbs that read the remotes configuration before doing any work.
CONFIG_COMMANDS = ("init", "push", "acp", "pacp")


def setup_logging(level: str | None = None) -> None:
    """Configures the logging subsystem.

    Args:
        level (str | None, optional): A logging level name. Defaults to the
            GTL_LOG_LEVEL environment variable, or WARNING when unset.
    """
    level_name = (level or os.environ.get("GTL_LOG_LEVEL") or "WARNING").upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    if logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)


def show_help(repo: GitRepo, settings: Settings) -> None:
    """Prints the gtl usage hint followed by git's own help."""
    name = settings.app_name
    console.print(f"{name} extension usage: {name} acp\n", highlight=False)
    repo.help()


def show_version(settings: Settings) -> None:
    console.print(f"{settings.app_name} version: {settings.version}", highlight=False)


def run(
    argv: list[str],
    settings: Settings,
    invoker: ProcessInvoker | None = None,
    cwd: Path | None = None,
) -> int:
    """Dispatches a single command line and returns the process exit code.

    The first argument selects a gtl verb. Anything gtl does not recognise is
    handed to git verbatim, and git's exit code becomes ours.

    Args:
        argv (list[str]): Command-line arguments, without the program name.
        settings (Settings): Runtime settings.
        invoker (ProcessInvoker | None, optional): Runs external commands.
            Defaults to a real subprocess invoker.
        cwd (Path | None, optional): The working directory whose remotes are
            used. Defaults to the process working directory.

    Returns:
        int: The exit code for the process.

    Raises:
        GtlError: On any fatal condition (bad config, unspawnable binary,
            unreadable stdin, publish retries exhausted).
    """
    if not argv:
        err_console.print(f"Usage: {settings.app_name} help")
        return 1

    invoker = invoker or ProcessInvoker()
    repo = GitRepo(invoker, binary=settings.git_binary)
    command = argv[0]

    if command == "help":
        show_help(repo, settings)
        return 0
    elif command in VERSION_FLAGS:
        show_version(settings)
        return 0
    elif command not in CONFIG_COMMANDS:
        return repo.passthrough(argv)

    config = Config.load(settings.config_file)
    cwd = cwd or Path.cwd()

    if command == "init":
        ops.init_repository(repo, config, cwd)
    elif command == "push":
        ops.push_all(repo, config, cwd)
    elif command == "acp":
        ops.add_commit_push(repo, config, settings, cwd)
    elif command == "pacp":
        ops.publish_and_push(invoker, repo, config, settings, cwd)
    return 0


def main() -> None:
    """Main entry point for the gtl CLI."""
    setup_logging()
    settings = Settings()

    try:
        code = run(sys.argv[1:], settings)
    except GtlError as e:
        logger.debug(f"Aborting: {e!r}")
        err_console.print(f"[bold red]ERROR:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(130)

    sys.exit(code)


if __name__ == "__main__":
    main()
