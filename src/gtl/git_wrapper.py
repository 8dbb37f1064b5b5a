import logging
import subprocess

from .config import Remote
from .constants import APP_NAME, GIT_BINARY
from .errors import SpawnError

logger = logging.getLogger(APP_NAME)


class ProcessInvoker:
    """Runs external commands synchronously with inherited standard streams.

    This is the single seam through which gtl touches other programs. Tests
    substitute an object with the same `run` method that records the
    arguments and returns scripted exit codes.
    """

    def run(self, args: list[str]) -> int:
        """Executes a command and waits for it to finish.

        The child shares the caller's stdin, stdout and stderr, so prompts and
        progress output from git pass straight through to the terminal.

        Args:
            args (list[str]): The executable followed by its arguments.

        Returns:
            int:    The child's exit code. A child killed by a signal is
                    reported as 128 + the signal number.

        Raises:
            SpawnError: If the executable cannot be started.
        """
        logger.debug(f"Running: {' '.join(args)}")
        try:
            res = subprocess.run(args, check=False)
        except OSError as e:
            raise SpawnError(f"Failed to execute '{' '.join(args)}': {e}") from e

        if res.returncode < 0:
            return 128 + abs(res.returncode)
        return res.returncode


class GitRepo:
    """A wrapper around the git command line for the current working directory.

    Each method maps to one git invocation and returns its exit code. Non-zero
    exit codes are left to the caller; git has already reported the problem
    on the inherited streams.

    Attributes:
        invoker (ProcessInvoker): Runs the assembled command lines.
        binary (str): The git executable name or path.
    """

    def __init__(self, invoker: ProcessInvoker, binary: str = GIT_BINARY):
        self.invoker = invoker
        self.binary = binary

    def _run(self, args: list[str]) -> int:
        return self.invoker.run([self.binary, *args])

    def init(self) -> int:
        """Initializes a new repository in the current directory."""
        return self._run(["init"])

    def add_safe_directory(self, path: str) -> int:
        """Adds a directory to git's global safe.directory list.

        Args:
            path (str): The directory to trust.
        """
        return self._run(["config", "--global", "--add", "safe.directory", path])

    def disable_ignored_file_advice(self) -> int:
        """Silences the hint git prints when `add` matches ignored files."""
        return self._run(["config", "advice.addIgnoredFile", "false"])

    def remote_add(self, remote: Remote) -> int:
        """Registers a remote in the repository.

        Args:
            remote (Remote): The remote name and URL to add.
        """
        return self._run(["remote", "add", remote.name, remote.url])

    def add_all(self) -> int:
        """Stages every change in the working tree."""
        return self._run(["add", "*"])

    def commit(self, message: str) -> int:
        """Creates a commit from the staged changes.

        Args:
            message (str): The commit message.
        """
        return self._run(["commit", "-m", message])

    def push(self, remote_name: str) -> int:
        """Pushes the current branch to a remote.

        Args:
            remote_name (str): The remote to push to.
        """
        return self._run(["push", remote_name])

    def help(self) -> int:
        return self._run(["help"])

    def passthrough(self, args: list[str]) -> int:
        """Forwards an arbitrary argument list to git unchanged."""
        return self._run(list(args))
