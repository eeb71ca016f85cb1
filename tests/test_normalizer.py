# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests covering decoding and normalisation of tool reports."""

from __future__ import annotations

import json
from collections.abc import Callable

import pytest

from diagdriver.errors import (
    DecodeFailure,
    DriverError,
    DuplicatePositionFailure,
    MalformedPositionFailure,
    SchemaFailure,
)
from diagdriver.models import Position, RawDiagnostic
from diagdriver.normalizer import collect, decode_tool_output, normalize, parse_position

PayloadFactory = Callable[..., bytes]


def test_single_diagnostic_is_keyed_by_file_and_line() -> None:
    raw = b'{"pkg/a": {"nilaway": [{"posn":"x.go:10:5","message":"m1"}]}}'

    assert normalize(raw) == {Position(filename="x.go", line=10): "m1"}


def test_diagnostics_from_every_package_are_kept(make_payload: PayloadFactory) -> None:
    raw = make_payload(
        {
            "pkg/a": [("a/a.go:3:1", "nil dereference in a")],
            "pkg/b": [("b/b.go:7:12", "nil dereference in b")],
        }
    )

    assert normalize(raw) == {
        Position(filename="a/a.go", line=3): "nil dereference in a",
        Position(filename="b/b.go", line=7): "nil dereference in b",
    }


def test_one_entry_per_distinct_line(make_payload: PayloadFactory) -> None:
    findings = [(f"x.go:{line}:1", f"m{line}") for line in range(1, 6)]
    findings.append(("y.go:1:1", "other file"))

    result = normalize(make_payload({"pkg": findings}))

    assert len(result) == 6
    assert result[Position(filename="x.go", line=4)] == "m4"
    assert result[Position(filename="y.go", line=1)] == "other file"


def test_empty_diagnostic_list_means_no_findings(make_payload: PayloadFactory) -> None:
    assert normalize(make_payload({"pkg/a": [], "pkg/b": []})) == {}


def test_empty_report_yields_empty_mapping() -> None:
    assert normalize(b"{}") == {}


def test_same_line_different_column_is_rejected() -> None:
    raw = b'{"pkg/a": {"nilaway": [{"posn":"x.go:10:5","message":"m1"},{"posn":"x.go:10:9","message":"m2"}]}}'

    with pytest.raises(DuplicatePositionFailure) as excinfo:
        normalize(raw)

    failure = excinfo.value
    assert failure.position == Position(filename="x.go", line=10)
    assert {failure.current, failure.incoming} == {"m1", "m2"}
    assert "m1" in str(failure)
    assert "m2" in str(failure)


def test_duplicates_across_packages_are_rejected(make_payload: PayloadFactory) -> None:
    raw = make_payload(
        {
            "pkg/a": [("shared.go:4:1", "from a")],
            "pkg/b": [("shared.go:4:8", "from b")],
        }
    )

    with pytest.raises(DuplicatePositionFailure) as excinfo:
        normalize(raw)

    assert {excinfo.value.current, excinfo.value.incoming} == {"from a", "from b"}


def test_missing_analyzer_key_is_a_schema_failure() -> None:
    raw = json.dumps({"pkg/a": {"other": [{"posn": "x.go:1:1", "message": "m"}]}}).encode()

    with pytest.raises(SchemaFailure) as excinfo:
        normalize(raw)

    failure = excinfo.value
    assert failure.package == "pkg/a"
    assert failure.analyzer == "nilaway"
    assert "other" in failure.entry
    assert "pkg/a" in str(failure)


def test_custom_analyzer_key(make_payload: PayloadFactory) -> None:
    raw = make_payload({"pkg": [("x.go:2:2", "m")]}, analyzer="nilness")

    assert normalize(raw, analyzer="nilness") == {Position(filename="x.go", line=2): "m"}
    with pytest.raises(SchemaFailure):
        normalize(raw)


@pytest.mark.parametrize("posn", ["x.go:10", "x.go", "", "C:/src/x.go:10:5", "x.go:10:5:extra"])
def test_position_must_have_three_segments(make_payload: PayloadFactory, posn: str) -> None:
    with pytest.raises(MalformedPositionFailure) as excinfo:
        normalize(make_payload({"pkg": [(posn, "m")]}))

    assert excinfo.value.value == posn
    assert excinfo.value.diagnostic == RawDiagnostic(posn=posn, message="m")
    assert excinfo.value.error is None


@pytest.mark.parametrize("line", ["abc", "", " 10", "1_0", "1.5", "١٢", "9223372036854775808", "99999999999999999999999"])
def test_line_must_be_a_base10_integer(make_payload: PayloadFactory, line: str) -> None:
    with pytest.raises(MalformedPositionFailure) as excinfo:
        normalize(make_payload({"pkg": [(f"foo.go:{line}:3", "m")]}))

    failure = excinfo.value
    assert failure.value == line
    assert isinstance(failure.error, ValueError)
    assert isinstance(failure.__cause__, ValueError)


def test_parse_position_discards_column() -> None:
    position = parse_position(RawDiagnostic(posn="pkg/file.go:42:17", message="m"))

    assert position == Position(filename="pkg/file.go", line=42)


def test_parse_position_keeps_filename_verbatim() -> None:
    position = parse_position(RawDiagnostic(posn="../outside/./file.go:1:1", message="m"))

    assert position.filename == "../outside/./file.go"


@pytest.mark.parametrize(
    "raw",
    [
        b"panic: runtime error",
        b"[]",
        b'{"pkg": ["not", "a", "mapping"]}',
        b'{"pkg": {"nilaway": {"posn": "x.go:1:1"}}}',
        b'{"pkg": {"nilaway": [{"posn": 1, "message": "m"}]}}',
        b'{"pkg": {"nilaway": [{"message": "m"}]}}',
        b'{"pkg": null}',
        b'{"pkg": {"nilaway": null}}',
        b"",
    ],
)
def test_malformed_reports_are_decode_failures(raw: bytes) -> None:
    with pytest.raises(DecodeFailure) as excinfo:
        decode_tool_output(raw)

    assert excinfo.value.raw == raw
    assert excinfo.value.error is excinfo.value.__cause__


def test_normalisation_is_repeatable(make_payload: PayloadFactory) -> None:
    raw = make_payload(
        {
            "pkg/a": [("a.go:1:1", "one"), ("a.go:2:1", "two")],
            "pkg/b": [("b.go:1:1", "three")],
        }
    )

    assert normalize(raw) == normalize(raw)


def test_package_order_does_not_change_result() -> None:
    forward = {"pkg/a": {"nilaway": []}, "pkg/b": {"nilaway": []}}
    forward["pkg/a"]["nilaway"].append(RawDiagnostic(posn="a.go:1:1", message="a"))
    forward["pkg/b"]["nilaway"].append(RawDiagnostic(posn="b.go:1:1", message="b"))
    backward = dict(reversed(list(forward.items())))

    assert collect(forward) == collect(backward)


def test_failures_share_a_common_base(make_payload: PayloadFactory) -> None:
    with pytest.raises(DriverError):
        normalize(make_payload({"pkg": [("x.go:1:1", "a"), ("x.go:1:2", "b")]}))


def test_line_numbers_up_to_64_bit_limit_are_accepted(make_payload: PayloadFactory) -> None:
    result = normalize(make_payload({"pkg": [("a.go:9223372036854775807:1", "m")]}))

    assert result == {Position(filename="a.go", line=9223372036854775807): "m"}
