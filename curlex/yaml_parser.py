"""Loading and validating test suites written in YAML."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from .defaults import apply_defaults
from .models import (
    Assertion,
    AssertionType,
    DefaultConfig,
    StructuredRequest,
    Test,
    TestSuite,
    parse_duration,
)
from .variables import VariableExpander


class SuiteError(ValueError):
    """Raised when a test suite cannot be read, parsed or validated."""


def parse_suite_file(path: str | os.PathLike) -> TestSuite:
    """Read a YAML file and return the expanded, validated test suite."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SuiteError(f"failed to read YAML file: {exc}") from exc
    return load_suite(text)


def load_suite(text: str) -> TestSuite:
    """Parse YAML text into a suite, expand variables, apply defaults and validate."""
    try:
        data = yaml.safe_load(text)
        suite = _build_suite(data)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        raise SuiteError(f"failed to parse YAML: {exc}") from exc

    VariableExpander().expand_suite(suite)
    apply_defaults(suite)

    try:
        validate_suite(suite)
    except SuiteError as exc:
        raise SuiteError(f"validation failed: {exc}") from exc
    return suite


def validate_suite(suite: TestSuite) -> None:
    """Raise SuiteError listing every problem found in ``suite``."""
    if not suite.tests:
        raise SuiteError("no tests defined in suite")

    problems: list[str] = []
    for index, test in enumerate(suite.tests):
        test_id = test.name or str(index)
        if not test.name:
            problems.append(f"test {index}: name is required")
        if not test.curl and test.request is None:
            problems.append(f"test {test_id}: must specify either 'curl' or 'request'")
        if test.curl and test.request is not None:
            problems.append(f"test {test.name}: cannot specify both 'curl' and 'request'")
        if not test.assertions:
            problems.append(f"test {test_id}: must have at least one assertion")
        if test.request is not None:
            if not test.request.url:
                problems.append(f"test {test.name}: request.url is required")
            if not test.request.method:
                problems.append(f"test {test.name}: request.method is required")

    if problems:
        raise SuiteError("\n".join(problems))


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _mapping(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{where}: expected a mapping")
    return value


def _sequence(value: Any, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{where}: expected a list")
    return value


def _integer(value: Any, where: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: expected an integer, got {value!r}")
    return value


def _optional_integer(value: Any, where: str) -> int | None:
    if value is None:
        return None
    return _integer(value, where)


def _duration(value: Any, where: str) -> timedelta:
    if value is None or value == "":
        return timedelta(0)
    if isinstance(value, bool):
        raise ValueError(f"{where}: invalid duration {value!r}")
    if isinstance(value, int):
        return timedelta(microseconds=value / 1000)
    try:
        return parse_duration(str(value))
    except ValueError as exc:
        raise ValueError(f"{where}: {exc}") from exc


def _string_map(value: Any, where: str) -> dict[str, str]:
    return {_text(key): _text(item) for key, item in _mapping(value, where).items()}


def _status_list(value: Any, where: str) -> list[int]:
    return [_integer(item, where) for item in _sequence(value, where)]


def _build_suite(data: Any) -> TestSuite:
    root = _mapping(data, "document")
    return TestSuite(
        version=_text(root.get("version")),
        variables=_string_map(root.get("variables"), "variables"),
        defaults=_build_defaults(_mapping(root.get("defaults"), "defaults")),
        tests=[
            _build_test(_mapping(item, f"tests[{index}]"), f"tests[{index}]")
            for index, item in enumerate(_sequence(root.get("tests"), "tests"))
        ],
    )


def _build_defaults(data: dict) -> DefaultConfig:
    return DefaultConfig(
        timeout=_duration(data.get("timeout"), "defaults.timeout"),
        retries=_integer(data.get("retries"), "defaults.retries"),
        retry_delay=_duration(data.get("retry_delay"), "defaults.retry_delay"),
        retry_backoff=_text(data.get("retry_backoff")),
        retry_on_status=_status_list(data.get("retry_on_status"), "defaults.retry_on_status"),
        max_redirects=_optional_integer(data.get("max_redirects"), "defaults.max_redirects"),
        headers=_string_map(data.get("headers"), "defaults.headers"),
    )


def _build_test(data: dict, where: str) -> Test:
    request = None
    if data.get("request") is not None:
        request = _build_request(_mapping(data["request"], f"{where}.request"), where)
    return Test(
        name=_text(data.get("name")),
        curl=_text(data.get("curl")),
        request=request,
        assertions=_build_assertions(data.get("assertions"), f"{where}.assertions"),
        timeout=_duration(data.get("timeout"), f"{where}.timeout"),
        retries=_integer(data.get("retries"), f"{where}.retries"),
        retry_delay=_duration(data.get("retry_delay"), f"{where}.retry_delay"),
        retry_backoff=_text(data.get("retry_backoff")),
        retry_on_status=_status_list(data.get("retry_on_status"), f"{where}.retry_on_status"),
        max_redirects=_optional_integer(data.get("max_redirects"), f"{where}.max_redirects"),
        debug=bool(data.get("debug", False)),
    )


def _build_request(data: dict, where: str) -> StructuredRequest:
    return StructuredRequest(
        method=_text(data.get("method")),
        url=_text(data.get("url")),
        headers=_string_map(data.get("headers"), f"{where}.request.headers"),
        body=_text(data.get("body")),
    )


def _build_assertions(value: Any, where: str) -> list[Assertion]:
    assertions: list[Assertion] = []
    for index, item in enumerate(_sequence(value, where)):
        for key, expected in _mapping(item, f"{where}[{index}]").items():
            try:
                kind = AssertionType(_text(key))
            except ValueError as exc:
                raise ValueError(f"{where}[{index}]: unknown assertion type {key!r}") from exc
            assertions.append(Assertion(type=kind, value=_text(expected)))
    return assertions