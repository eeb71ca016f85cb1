# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models shared by the diagnostic-collection driver."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, TypeAdapter

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]


class Position(BaseModel):
    """Identify the source location a diagnostic is reported against.

    Positions are value objects: two instances compare equal (and hash equal)
    when both ``filename`` and ``line`` match. The filename is kept exactly as
    the analysis tool reported it.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    line: int

    def sort_key(self) -> tuple[str, int]:
        """Return the tuple used to order positions deterministically.

        Returns:
            tuple[str, int]: ``(filename, line)`` pair.
        """

        return self.filename, self.line

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


class RawDiagnostic(BaseModel):
    """Capture a single finding exactly as the analysis tool emits it."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    posn: str
    message: str


type AnalyzerReport = dict[str, list[RawDiagnostic]]
type ToolOutput = dict[str, AnalyzerReport]

TOOL_OUTPUT_ADAPTER: TypeAdapter[dict[str, dict[str, list[RawDiagnostic]]]] = TypeAdapter(
    dict[str, dict[str, list[RawDiagnostic]]],
)


def serialize_result(result: Mapping[Position, str]) -> list[dict[str, JsonValue]]:
    """Convert a normalised result mapping into JSON-friendly entries.

    Args:
        result: Mapping of positions to diagnostic messages.

    Returns:
        list[dict[str, JsonValue]]: Entries sorted by position, each holding
        ``filename``, ``line`` and ``message`` keys.
    """

    return [
        {"filename": position.filename, "line": position.line, "message": result[position]}
        for position in sorted(result)
    ]


__all__ = [
    "AnalyzerReport",
    "JsonScalar",
    "JsonValue",
    "Position",
    "RawDiagnostic",
    "TOOL_OUTPUT_ADAPTER",
    "ToolOutput",
    "serialize_result",
]
