"""Apply suite-wide defaults to individual tests."""

from __future__ import annotations

from datetime import timedelta

from .models import DefaultConfig, StructuredRequest, Test, TestSuite

MAX_TIMEOUT = timedelta(minutes=10)
MAX_RETRIES = 100
MAX_REDIRECTS = 1000


def merge_defaults(test: Test, defaults: DefaultConfig) -> None:
    """Fill unset fields of ``test`` from ``defaults``; test settings win."""
    if not test.timeout and defaults.timeout > timedelta(0):
        test.timeout = min(defaults.timeout, MAX_TIMEOUT)

    if test.retries == 0 and defaults.retries > 0:
        test.retries = min(defaults.retries, MAX_RETRIES)

    if not test.retry_delay and defaults.retry_delay > timedelta(0):
        test.retry_delay = defaults.retry_delay

    if not test.retry_backoff and defaults.retry_backoff:
        test.retry_backoff = defaults.retry_backoff

    if not test.retry_on_status and defaults.retry_on_status:
        test.retry_on_status = list(defaults.retry_on_status)

    if test.max_redirects is None and defaults.max_redirects is not None:
        redirects = defaults.max_redirects
        if redirects > MAX_REDIRECTS:
            redirects = MAX_REDIRECTS
        test.max_redirects = redirects

    if test.request is not None and defaults.headers:
        _merge_headers(test.request, defaults.headers)


def _merge_headers(request: StructuredRequest, default_headers: dict[str, str]) -> None:
    if request.headers is None:
        request.headers = {}
    for key, value in default_headers.items():
        request.headers.setdefault(key, value)


def apply_defaults(suite: TestSuite) -> None:
    """Apply the suite's defaults to every test in it."""
    for test in suite.tests:
        merge_defaults(test, suite.defaults)