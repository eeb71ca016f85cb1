# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build and execute the analysis tool, capturing its raw output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from .config import DriverSettings
from .errors import BuildFailure, InvocationFailure
from .process_utils import SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class Invoker(Protocol):
    """Produce the raw report of one analysis tool run over ``directory``."""

    def run(self, directory: Path) -> bytes:
        """Return the combined stdout/stderr of the tool run."""
        ...


class SubprocessInvoker:
    """Invoke a freshly built analysis tool binary as a child process."""

    def __init__(self, settings: DriverSettings | None = None) -> None:
        self._settings = settings or DriverSettings()

    def build(self) -> None:
        """Run the configured build command from the project root.

        Raises:
            BuildFailure: If the build exits non-zero or cannot be started.
        """

        command = self._settings.build_command
        if not command:
            LOGGER.debug("build step disabled")
            return
        LOGGER.debug("building analysis tool: %s (cwd=%s)", " ".join(command), self._settings.project_root)
        try:
            run_command(command, cwd=self._settings.project_root, timeout=self._settings.timeout)
        except SubprocessExecutionError as exc:
            raise BuildFailure(exc, exc.output) from exc
        except OSError as exc:
            raise BuildFailure(exc, b"") from exc

    def run(self, directory: Path) -> bytes:
        """Build the tool, then run it against every package below ``directory``.

        Args:
            directory: Root of the target project; becomes the tool's working directory.

        Returns:
            bytes: Interleaved stdout/stderr output of a successful run.

        Raises:
            BuildFailure: If the tool could not be built.
            InvocationFailure: If the tool exits non-zero or cannot be started.
        """

        self.build()
        command = self._settings.tool_command()
        LOGGER.debug("running analysis tool: %s (cwd=%s)", " ".join(command), directory)
        try:
            completed = run_command(command, cwd=directory, timeout=self._settings.timeout)
        except SubprocessExecutionError as exc:
            raise InvocationFailure(exc, exc.output) from exc
        except OSError as exc:
            raise InvocationFailure(exc, b"") from exc
        output = completed.stdout or b""
        LOGGER.debug("captured %d bytes of analysis tool output", len(output))
        return output


__all__ = ["Invoker", "SubprocessInvoker"]
