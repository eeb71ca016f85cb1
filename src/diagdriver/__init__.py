# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Collect analysis tool diagnostics as a position-keyed mapping."""

from __future__ import annotations

from .config import ConfigError, DriverSettings, load_settings
from .driver import Driver, StandaloneDriver
from .errors import (
    BuildFailure,
    DecodeFailure,
    DriverError,
    DuplicatePositionFailure,
    InvocationFailure,
    MalformedPositionFailure,
    SchemaFailure,
)
from .invoker import Invoker, SubprocessInvoker
from .models import Position, RawDiagnostic, ToolOutput, serialize_result
from .normalizer import collect, decode_tool_output, normalize, parse_position

__all__ = [
    "BuildFailure",
    "ConfigError",
    "DecodeFailure",
    "Driver",
    "DriverError",
    "DriverSettings",
    "DuplicatePositionFailure",
    "InvocationFailure",
    "Invoker",
    "MalformedPositionFailure",
    "Position",
    "RawDiagnostic",
    "SchemaFailure",
    "StandaloneDriver",
    "SubprocessInvoker",
    "ToolOutput",
    "collect",
    "decode_tool_output",
    "load_settings",
    "normalize",
    "parse_position",
    "serialize_result",
]
