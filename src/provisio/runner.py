"""External command execution used to read the keychain and verify profiles."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of one external command."""

    returncode: int
    stdout: bytes
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")


class CommandRunner(Protocol):
    """Runs an argv to completion. Raises ``OSError`` when it cannot be spawned."""

    def run(self, argv: tuple[str, ...]) -> CommandResult: ...


class SubprocessRunner:
    """``CommandRunner`` backed by :func:`subprocess.run`.

    There is no timeout: a hung child hangs the caller.
    """

    def run(self, argv: tuple[str, ...]) -> CommandResult:
        logger.debug("Running %s", " ".join(argv))
        completed = subprocess.run(list(argv), capture_output=True, check=False)
        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
