# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert raw analysis tool reports into position-keyed diagnostics."""

from __future__ import annotations

import re
from typing import Final

from pydantic import ValidationError

from .config import DEFAULT_ANALYZER
from .errors import DecodeFailure, DuplicatePositionFailure, MalformedPositionFailure, SchemaFailure
from .models import TOOL_OUTPUT_ADAPTER, Position, RawDiagnostic, ToolOutput

POSITION_SEPARATOR: Final[str] = ":"
POSITION_PARTS: Final[int] = 3
_LINE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
# Line numbers are bounded like a signed 64-bit integer.
_MAX_LINE: Final[int] = 2**63 - 1
_MIN_LINE: Final[int] = -(2**63)


def decode_tool_output(raw: bytes) -> ToolOutput:
    """Decode ``raw`` into the package -> analyzer -> diagnostics structure.

    Args:
        raw: Captured tool output.

    Returns:
        ToolOutput: Validated report.

    Raises:
        DecodeFailure: If ``raw`` is not JSON of the expected shape.
    """

    try:
        return TOOL_OUTPUT_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise DecodeFailure(exc, raw) from exc


def _parse_line(segment: str) -> int:
    """Return ``segment`` as a line number.

    Only an optional sign followed by ASCII digits is accepted; whitespace,
    underscores and other Unicode digits are rejected even though :func:`int`
    would take them.

    Raises:
        ValueError: If ``segment`` is not an integer literal or is out of range.
    """

    if not _LINE_PATTERN.fullmatch(segment):
        raise ValueError(f"invalid literal for base-10 line number: {segment!r}")
    line = int(segment)
    if not _MIN_LINE <= line <= _MAX_LINE:
        raise ValueError(f"line number out of range: {segment!r}")
    return line


def parse_position(diagnostic: RawDiagnostic) -> Position:
    """Return the position encoded in ``diagnostic.posn``; the column is dropped.

    Raises:
        MalformedPositionFailure: If ``posn`` is not ``file:line:column`` or
            the line is not an integer.
    """

    parts = diagnostic.posn.split(POSITION_SEPARATOR)
    if len(parts) != POSITION_PARTS:
        raise MalformedPositionFailure(diagnostic.posn, diagnostic=diagnostic)
    filename, line_segment, _column = parts
    try:
        line = _parse_line(line_segment)
    except ValueError as exc:
        raise MalformedPositionFailure(line_segment, diagnostic=diagnostic, error=exc) from exc
    return Position(filename=filename, line=line)


def collect(report: ToolOutput, *, analyzer: str = DEFAULT_ANALYZER) -> dict[Position, str]:
    """Fold every package's diagnostics into a single position-keyed mapping.

    Positions must be unique across the whole report, not only within a
    package, because consumers index expectations by bare ``file:line``.

    Args:
        report: Decoded tool output.
        analyzer: Key naming the analyzer's diagnostics in each package entry.

    Returns:
        dict[Position, str]: Message reported at each position.

    Raises:
        SchemaFailure: If a package entry lacks ``analyzer``.
        MalformedPositionFailure: If a location string cannot be parsed.
        DuplicatePositionFailure: If two findings share a position.
    """

    collected: dict[Position, str] = {}
    for package, entry in report.items():
        diagnostics = entry.get(analyzer)
        if diagnostics is None:
            raise SchemaFailure(package, entry, analyzer=analyzer)
        for diagnostic in diagnostics:
            position = parse_position(diagnostic)
            if position in collected:
                raise DuplicatePositionFailure(position, current=collected[position], incoming=diagnostic.message)
            collected[position] = diagnostic.message
    return collected


def normalize(raw: bytes, *, analyzer: str = DEFAULT_ANALYZER) -> dict[Position, str]:
    """Decode and normalise a raw tool report.

    Args:
        raw: Combined output captured from the analysis tool.
        analyzer: Key naming the analyzer's diagnostics in each package entry.

    Returns:
        dict[Position, str]: Message reported at each position.
    """

    return collect(decode_tool_output(raw), analyzer=analyzer)


__all__ = ["collect", "decode_tool_output", "normalize", "parse_position"]
