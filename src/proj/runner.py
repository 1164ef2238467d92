"""Synchronous shell command execution for start/teardown commands."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from proj.errors import ProjError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one shell invocation."""

    args: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def command_line(self) -> str:
        return " ".join(self.args)


class CommandFailed(ProjError):
    """A shell command could not be started or exited with a non-zero status."""

    def __init__(self, message: str, result: CommandResult | None = None) -> None:
        super().__init__(message)
        self.result = result

    @classmethod
    def from_result(cls, result: CommandResult) -> CommandFailed:
        message = f"Command exited with status {result.returncode}: {result.command_line}"
        context = result.stderr.strip() or result.stdout.strip()
        if context:
            message = f"{message}\n{context}"
        return cls(message, result)


def build_shell_args(command: str, *, shell: str = "sh") -> list[str]:
    return [shell, "-c", command]


def run_shell_command(
    command: str,
    cwd: Path,
    *,
    shell: str = "sh",
    on_execute: Callable[[list[str]], None] | None = None,
) -> CommandResult:
    """Run `command` through `<shell> -c` inside `cwd` and wait for it to exit.

    stdout and stderr are both captured and decoded as UTF-8; undecodable bytes
    become U+FFFD so binary output never fails a command that succeeded. There
    is no timeout. `on_execute`, when
    given, receives the argument vector right before the process is spawned.

    Raises:
        CommandFailed: the shell could not be started, `cwd` is missing, or the
            command exited with a non-zero status.
    """

    args = build_shell_args(command, shell=shell)
    if not cwd.is_dir():
        raise CommandFailed(f"Project path is not a directory: {cwd}")

    logger.info("Executing command", extra={"command_args": args, "cwd": str(cwd)})
    if on_execute is not None:
        on_execute(args)
    try:
        completed = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise CommandFailed(f"Could not run {shell!r}: {e}") from e

    result = CommandResult(
        args=args,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    logger.info(
        "Command finished", extra={"command_args": args, "returncode": result.returncode}
    )

    if result.returncode != 0:
        raise CommandFailed.from_result(result)
    return result
