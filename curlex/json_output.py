"""JSON reports of suite results."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import Any

from .models import AssertionFailure, SuiteResult, TestResult

REPORT_VERSION = "1.0.0"

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def format_duration(duration: timedelta) -> str:
    """Render a duration rounded to milliseconds, e.g. ``500ms``, ``1.5s``, ``1m30s``."""
    micros = duration // timedelta(microseconds=1)
    negative = micros < 0
    whole_ms, remainder = divmod(abs(micros), 1000)
    if remainder >= 500:
        whole_ms += 1
    if whole_ms == 0:
        return "0s"

    sign = "-" if negative else ""
    if whole_ms < 1000:
        return f"{sign}{whole_ms}ms"

    hours, rest = divmod(whole_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    seconds_text = str(seconds)
    if millis:
        seconds_text += "." + f"{millis:03d}".rstrip("0")

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds_text}s"
    if minutes:
        return f"{sign}{minutes}m{seconds_text}s"
    return f"{sign}{seconds_text}s"


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    offset = moment.utcoffset() or timedelta(0)
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if offset == timedelta(0):
        return stamp + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{stamp}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _failure(failure: AssertionFailure) -> dict[str, str]:
    kind = getattr(failure.type, "value", failure.type)
    return {
        "type": str(kind),
        "expected": failure.expected,
        "actual": failure.actual,
        "message": failure.message,
    }


def _test_entry(result: TestResult) -> dict[str, Any]:
    entry: dict[str, Any] = {"name": result.test.name, "success": result.success}
    if result.status_code:
        entry["status_code"] = result.status_code
    response_time = format_duration(result.response_time)
    if response_time:
        entry["response_time"] = response_time
    if result.error is not None and str(result.error):
        entry["error"] = str(result.error)
    if result.failures:
        entry["failures"] = [_failure(failure) for failure in result.failures]

    request = result.prepared_request
    if request is not None:
        request_entry: dict[str, Any] = {"method": request.method, "url": request.url}
        if request.headers:
            request_entry["headers"] = dict(sorted(request.headers.items()))
        if request.body:
            request_entry["body"] = request.body
        entry["request"] = request_entry

    if result.status_code > 0:
        response_entry: dict[str, Any] = {"status_code": result.status_code}
        if result.headers:
            response_entry["headers"] = {
                key: list(values) for key, values in sorted(result.headers.items())
            }
        if result.response_body:
            response_entry["body"] = result.response_body
        entry["response"] = response_entry

    return entry


class JSONFormatter:
    """Formats suite results as an indented JSON document."""

    def format(self, suite_result: SuiteResult) -> str:
        """Render ``suite_result`` as JSON text ending in a newline."""
        document = {
            "version": REPORT_VERSION,
            "total_tests": suite_result.total_tests,
            "passed_tests": suite_result.passed_tests,
            "failed_tests": suite_result.failed_tests,
            "total_time": format_duration(suite_result.total_time),
            "start_time": _rfc3339(suite_result.start_time),
            "end_time": _rfc3339(suite_result.end_time),
            "tests": [_test_entry(result) for result in suite_result.results],
        }
        text = json.dumps(document, indent=2, ensure_ascii=False)
        for char, escape in _HTML_ESCAPES.items():
            text = text.replace(char, escape)
        return text + "\n"