# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Failure taxonomy raised by the diagnostic-collection pipeline.

Every failure is fatal to the current driver invocation and carries the
context needed to debug the integration with the analysis tool. Callers can
catch :class:`DriverError` to handle all of them uniformly.
"""

from __future__ import annotations

from collections.abc import Mapping

from .models import Position, RawDiagnostic


def _decode_output(output: bytes | str) -> str:
    if isinstance(output, bytes):
        return output.decode(errors="replace")
    return output


class DriverError(RuntimeError):
    """Base class for failures surfaced by a driver invocation."""


class BuildFailure(DriverError):
    """Raised when the analysis tool could not be built."""

    def __init__(self, error: BaseException, output: bytes | str) -> None:
        """Initialise the failure with the build error and its captured output.

        Args:
            error: Underlying exception reported by the build step.
            output: Combined build output, kept verbatim.
        """

        self.error = error
        self.output = output
        super().__init__(f"build analysis tool: {error}: {_decode_output(output)!r}")


class InvocationFailure(DriverError):
    """Raised when the analysis tool exited non-zero or could not be started."""

    def __init__(self, error: BaseException, output: bytes | str) -> None:
        """Initialise the failure with the process error and its combined output.

        Args:
            error: Underlying exception describing the process failure.
            output: Combined stdout/stderr captured from the tool.
        """

        self.error = error
        self.output = output
        super().__init__(f"run analysis tool: {error}\n{_decode_output(output)}")


class DecodeFailure(DriverError):
    """Raised when captured output does not match the expected report shape."""

    def __init__(self, error: BaseException, raw: bytes) -> None:
        """Initialise the failure with the decode error and the undecodable output.

        Args:
            error: Validation error raised while decoding the report.
            raw: Captured tool output that failed to decode.
        """

        self.error = error
        self.raw = raw
        super().__init__(f"decode analysis tool output: {error}")


class SchemaFailure(DriverError):
    """Raised when a package entry lacks the analyzer key."""

    def __init__(self, package: str, entry: Mapping[str, list[RawDiagnostic]], *, analyzer: str) -> None:
        """Initialise the failure with the package entry lacking the analyzer key.

        Args:
            package: Identifier of the offending package.
            entry: Full contents of the package entry.
            analyzer: Analyzer key that was expected in ``entry``.
        """

        self.package = package
        self.entry = entry
        self.analyzer = analyzer
        super().__init__(f"expect {analyzer!r} key in result for package {package!r}, got {dict(entry)!r}")


class MalformedPositionFailure(DriverError):
    """Raised when a diagnostic location cannot be converted into a position."""

    def __init__(
        self,
        value: str,
        *,
        diagnostic: RawDiagnostic | None = None,
        error: BaseException | None = None,
    ) -> None:
        """Initialise the failure with the offending raw value.

        Args:
            value: Location string or line segment that failed to parse.
            diagnostic: Diagnostic carrying the malformed location, when known.
            error: Parse error raised while converting the line number.
        """

        self.value = value
        self.diagnostic = diagnostic
        self.error = error
        if error is not None:
            message = f"convert line number {value!r}: {error}"
        else:
            message = f"expect 3 parts in position string {value!r}, got {diagnostic!r}"
        super().__init__(message)


class DuplicatePositionFailure(DriverError):
    """Raised when two findings normalise onto the same position."""

    def __init__(self, position: Position, *, current: str, incoming: str) -> None:
        """Initialise the failure with both messages reported at ``position``.

        Args:
            position: Position shared by the colliding findings.
            current: Message already collected for ``position``.
            incoming: Message of the finding that collided with it.
        """

        self.position = position
        self.current = current
        self.incoming = incoming
        super().__init__(
            f"multiple diagnostics on the same line not supported at {position}, "
            f"current: {current!r}, got: {incoming!r}",
        )


__all__ = [
    "BuildFailure",
    "DecodeFailure",
    "DriverError",
    "DuplicatePositionFailure",
    "InvocationFailure",
    "MalformedPositionFailure",
    "SchemaFailure",
]
