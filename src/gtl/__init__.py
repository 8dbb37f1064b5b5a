"""gtl: push one repository to many remotes with a single command.

This package wraps the git command line with a few composite subcommands
(init, push, acp, pacp) driven by a JSON file that maps local directories to
the remotes they should be wired up to. Unknown subcommands pass straight
through to git.
"""

from . import (
    cli,
    config,
    constants,
    errors,
    git_wrapper,
    ops,
)

__all__ = [
    "cli",
    "config",
    "constants",
    "errors",
    "git_wrapper",
    "ops",
]
