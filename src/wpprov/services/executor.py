"""Sandboxed subprocess runner used for every external tool call."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from wpprov.errors import CommandError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    stdout: str
    exit_code: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandExecutor:
    """Run commands, optionally wrapped in the site user's sandbox prefix.

    ``run`` never raises for a non-zero exit; ``check`` turns one into a
    :class:`CommandError` carrying the tool's exit code.
    """

    def __init__(self, sandbox: list[str] | None = None):
        self.sandbox = list(sandbox or [])

    def run(
        self,
        argv: list[str],
        cwd: Path | None = None,
        stdin: str | None = None,
        *,
        sandboxed: bool = True,
    ) -> CommandResult:
        cmd = [*self.sandbox, *argv] if sandboxed else list(argv)
        log.debug("run: %s (cwd=%s)", " ".join(cmd), cwd)
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                input=stdin,
                capture_output=True,
                text=True,
                check=False,
                start_new_session=True,
            )
        except FileNotFoundError as exc:
            log.debug("executable not found: %s", exc)
            return CommandResult(stdout="", exit_code=127, stderr=str(exc))
        if proc.returncode != 0:
            log.debug("exit=%s stderr=%s", proc.returncode, proc.stderr.strip())
        return CommandResult(stdout=proc.stdout, exit_code=proc.returncode, stderr=proc.stderr)

    def check(
        self,
        argv: list[str],
        cwd: Path | None = None,
        stdin: str | None = None,
        *,
        sandboxed: bool = True,
    ) -> CommandResult:
        result = self.run(argv, cwd, stdin, sandboxed=sandboxed)
        if not result.ok:
            raise CommandError(
                f"Command failed: {' '.join(argv)}\nstderr: {result.stderr.strip()}",
                exit_code=result.exit_code,
                argv=argv,
                stderr=result.stderr,
            )
        return result
