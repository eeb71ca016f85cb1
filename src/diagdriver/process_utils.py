# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution with combined output capture."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional—we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(self, command: Sequence[str], returncode: int, output: bytes) -> None:
        super().__init__(f"Command '{command[0]}' exited with status {returncode}")
        self.command = tuple(command)
        self.returncode = returncode
        self.output = output


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[bytes]:
    """Execute *args* and capture stdout and stderr as one byte stream.

    Args:
        args: Command line to execute; the executable must be absolute or on ``PATH``.
        cwd: Working directory for the child process.
        check: Raise :class:`SubprocessExecutionError` on a non-zero exit.
        timeout: Seconds to wait before abandoning the process.

    Returns:
        subprocess.CompletedProcess[bytes]: Completed process whose ``stdout``
        holds the interleaved stdout/stderr output.

    Raises:
        FileNotFoundError: If the executable cannot be located.
        SubprocessExecutionError: If ``check`` is set and the command fails.
    """

    normalized = _normalize_args(args)
    try:
        # Bandit: commands originate from validated driver settings; we pass
        # argument lists directly without shell expansion.
        completed: subprocess.CompletedProcess[bytes] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        partial = exc.stdout if isinstance(exc.stdout, bytes) else b""
        timeout_msg = f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=b"\n".join(chunk for chunk in (partial, timeout_msg.encode()) if chunk),
        )

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(normalized, completed.returncode, completed.stdout or b"")

    return completed


__all__ = ["SubprocessExecutionError", "TIMEOUT_RETURNCODE", "run_command"]
