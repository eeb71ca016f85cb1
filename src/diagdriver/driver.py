# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Driver contract consumed by integration-test orchestration."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .config import DriverSettings
from .invoker import Invoker, SubprocessInvoker
from .models import Position
from .normalizer import normalize


@runtime_checkable
class Driver(Protocol):
    """Collect the diagnostics the analysis tool reports for a target project."""

    def run(self, directory: Path) -> dict[Position, str]:
        """Return the message reported at each position below ``directory``."""
        ...


class StandaloneDriver:
    """Run the analysis tool as a standalone binary and normalise its report."""

    def __init__(self, settings: DriverSettings | None = None, *, invoker: Invoker | None = None) -> None:
        """Initialise the driver.

        Args:
            settings: Build and invocation settings; defaults are used when omitted.
            invoker: Strategy producing the raw report; defaults to a
                :class:`SubprocessInvoker` built from ``settings``.
        """

        self._settings = settings or DriverSettings()
        self._invoker = invoker or SubprocessInvoker(self._settings)

    def run(self, directory: Path) -> dict[Position, str]:
        """Build and run the tool over ``directory`` and return its diagnostics.

        Args:
            directory: Root of the target project.

        Returns:
            dict[Position, str]: Message reported at each position.

        Raises:
            DriverError: Subclass describing the first problem encountered.
        """

        raw = self._invoker.run(directory)
        return normalize(raw, analyzer=self._settings.analyzer)


__all__ = ["Driver", "StandaloneDriver"]
