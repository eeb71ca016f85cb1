# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Driver settings and their TOML loaders."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "diagdriver"

DEFAULT_ANALYZER: Final[str] = "nilaway"
DEFAULT_BUILD_COMMAND: Final[tuple[str, ...]] = ("make", "build")
DEFAULT_BINARY: Final[Path] = Path("bin") / "nilaway"
# Structured output, single line, one entry per finding, every package below the root.
TOOL_FLAGS: Final[tuple[str, ...]] = ("-json", "-pretty-print=false", "-group-error-messages=false")
TARGET_SELECTOR: Final[str] = "./..."


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class DriverSettings(BaseModel):
    """Describe how the analysis tool is built and invoked."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_root: Path = Field(default_factory=Path)
    build_command: tuple[str, ...] = DEFAULT_BUILD_COMMAND
    binary: Path = DEFAULT_BINARY
    analyzer: str = Field(default=DEFAULT_ANALYZER, min_length=1)
    extra_args: tuple[str, ...] = ()
    timeout: float | None = Field(default=None, gt=0)

    def resolved_binary(self) -> Path:
        """Return the absolute path of the analysis tool binary.

        Returns:
            Path: ``binary`` resolved against ``project_root`` when relative.
        """

        binary = self.binary if self.binary.is_absolute() else self.project_root / self.binary
        return binary.resolve()

    def tool_command(self) -> list[str]:
        """Return the full command line used to run the analysis tool.

        Returns:
            list[str]: Binary path, output flags, extra arguments and target selector.
        """

        return [str(self.resolved_binary()), *TOOL_FLAGS, *self.extra_args, TARGET_SELECTOR]


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration from {path}: {exc}") from exc


def _section_for(path: Path, document: Mapping[str, Any]) -> Mapping[str, Any]:
    if path.name != PYPROJECT_FILENAME:
        return document
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return section


def load_settings(path: Path, **overrides: Any) -> DriverSettings:
    """Load :class:`DriverSettings` from a TOML document.

    ``pyproject.toml`` files are read from their ``[tool.diagdriver]`` table;
    any other file is treated as a bare settings table. A relative
    ``project_root`` is resolved against the directory holding ``path``.

    Args:
        path: TOML file to read.
        **overrides: Values replacing those read from the file; ``None`` values are ignored.

    Returns:
        DriverSettings: Validated settings.

    Raises:
        ConfigError: If the file cannot be read or its content is invalid.
    """

    data = dict(_section_for(path, _read_toml(path)))
    root = data.get("project_root", ".")
    if not isinstance(root, str):
        raise ConfigError(f"project_root in {path} must be a string, got {root!r}")
    data["project_root"] = path.parent / root
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return DriverSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid driver settings in {path}: {exc}") from exc


__all__ = [
    "ConfigError",
    "DEFAULT_ANALYZER",
    "DEFAULT_BINARY",
    "DEFAULT_BUILD_COMMAND",
    "DriverSettings",
    "TARGET_SELECTOR",
    "TOOL_FLAGS",
    "load_settings",
]
