"""Data model for test suites, requests and results."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


class AssertionType(str, Enum):
    """Kinds of checks a test can make against a response."""

    STATUS = "status"
    BODY = "body"
    BODY_CONTAINS = "body_contains"
    JSON_PATH = "json_path"
    HEADER = "header"
    RESPONSE_TIME = "response_time"


@dataclass
class Assertion:
    """A single check: its kind and the expression or value it tests."""

    type: AssertionType
    value: str = ""


@dataclass
class AssertionFailure:
    """An assertion that did not hold."""

    type: AssertionType | str = ""
    expected: str = ""
    actual: str = ""
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return self.message
        return f"expected {self.expected}, got {self.actual}"


@dataclass
class StructuredRequest:
    """A request given field by field rather than as a curl command."""

    method: str = ""
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass
class PreparedRequest:
    """A request ready to be sent."""

    method: str = "GET"
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass
class DefaultConfig:
    """Suite-wide settings that tests inherit unless they set their own."""

    timeout: timedelta = timedelta(0)
    retries: int = 0
    retry_delay: timedelta = timedelta(0)
    retry_backoff: str = ""
    retry_on_status: list[int] = field(default_factory=list)
    max_redirects: int | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Test:
    """One HTTP test: the request to make and the assertions to check."""

    __test__ = False

    name: str = ""
    curl: str = ""
    request: StructuredRequest | None = None
    assertions: list[Assertion] = field(default_factory=list)
    timeout: timedelta = timedelta(0)
    retries: int = 0
    retry_delay: timedelta = timedelta(0)
    retry_backoff: str = ""
    retry_on_status: list[int] = field(default_factory=list)
    max_redirects: int | None = None
    debug: bool = False


@dataclass
class TestSuite:
    """A collection of tests with shared variables and defaults."""

    __test__ = False

    version: str = ""
    variables: dict[str, str] = field(default_factory=dict)
    defaults: DefaultConfig = field(default_factory=DefaultConfig)
    tests: list[Test] = field(default_factory=list)


@dataclass
class TestResult:
    """The outcome of running one test."""

    __test__ = False

    test: Test = field(default_factory=Test)
    success: bool = False
    status_code: int = 0
    response_time: timedelta = timedelta(0)
    response_body: str = ""
    headers: dict[str, list[str]] = field(default_factory=dict)
    failures: list[AssertionFailure] = field(default_factory=list)
    error: Exception | None = None
    prepared_request: PreparedRequest | None = None


@dataclass
class SuiteResult:
    """The outcome of running a whole suite."""

    results: list[TestResult] = field(default_factory=list)
    total_tests: int = 0
    passed_tests: int = 0
    failed_tests: int = 0
    total_time: timedelta = timedelta(0)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime = field(default_factory=datetime.now)


_MICROSECONDS_PER_UNIT = {
    "ns": 0.001,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1_000.0,
    "s": 1_000_000.0,
    "m": 60_000_000.0,
    "h": 3_600_000_000.0,
}
_COMPONENT = r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_COMPONENT_RE = re.compile(_COMPONENT)
_DURATION_RE = re.compile(rf"(?:{_COMPONENT})+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``30s``, ``1m30s`` or ``250ms``."""
    s = text.strip()
    if not s:
        raise ValueError(f"invalid duration {text!r}")
    sign = 1
    if s[0] in "+-":
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not _DURATION_RE.fullmatch(s):
        raise ValueError(f"invalid duration {text!r}")
    total = sum(
        float(number) * _MICROSECONDS_PER_UNIT[unit]
        for number, unit in _COMPONENT_RE.findall(s)
    )
    return timedelta(microseconds=sign * total)