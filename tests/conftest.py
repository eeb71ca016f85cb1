# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable

import pytest

type Finding = tuple[str, str]


def _payload(packages: dict[str, list[Finding]], analyzer: str = "nilaway") -> bytes:
    document = {
        package: {analyzer: [{"posn": posn, "message": message} for posn, message in findings]}
        for package, findings in packages.items()
    }
    return json.dumps(document, separators=(",", ":")).encode()


@pytest.fixture
def make_payload() -> Callable[..., bytes]:
    """Return a builder producing compact tool reports from ``(posn, message)`` pairs."""
    return _payload
