"""Running external commands (git, gh, docker, ...) for the setup scripts.

Everything that shells out takes a ``runner`` so tests can substitute a fake.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Callable, Sequence

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    args: Sequence[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return self.stdout.strip()


Runner = Callable[[Sequence[str]], CommandResult]


def run_command(args: Sequence[str]) -> CommandResult:
    """Run a command and capture its output. A missing executable is a failed result, not an exception."""
    logger.debug("Running %s", " ".join(args))
    try:
        completed = subprocess.run(list(args), capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        return CommandResult(args, 127, "", str(exc))
    return CommandResult(args, completed.returncode, completed.stdout, completed.stderr)
