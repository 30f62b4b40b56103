"""JUnit XML reports of suite results."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from .models import SuiteResult, TestResult

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
SUITE_NAME = "curlex"
CLASS_NAME = "curlex.tests"

_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}

_REPLACEMENT = "\ufffd"


def _valid_xml_char(char: str) -> bool:
    code = ord(char)
    return (
        code in (0x09, 0x0A, 0x0D)
        or 0x20 <= code <= 0xD7FF
        or 0xE000 <= code <= 0xFFFD
        or 0x10000 <= code <= 0x10FFFF
    )


def _escape(text: str) -> str:
    return "".join(
        _ESCAPES.get(char, char) if _valid_xml_char(char) else _REPLACEMENT
        for char in text
    )


def _number(value: float) -> str:
    """Shortest float form, switching to exponent notation outside 1e-4..1e6."""
    if value == 0:
        return "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    raw = "".join(str(digit) for digit in digit_tuple)
    point = len(raw) + exponent
    digits = raw.rstrip("0") or "0"
    prefix = "-" if sign else ""
    exp = point - 1

    if exp < -4 or exp >= 6:
        mantissa = digits[0]
        if len(digits) > 1:
            mantissa += "." + digits[1:]
        exp_sign = "-" if exp < 0 else "+"
        return prefix + mantissa + "e" + exp_sign + format(abs(exp), "02d")
    if point <= 0:
        return prefix + "0." + "0" * -point + digits
    if point >= len(digits):
        return prefix + digits + "0" * (point - len(digits))
    return prefix + digits[:point] + "." + digits[point:]


def _seconds(duration: timedelta) -> str:
    return _number(duration / timedelta(seconds=1))


def _attributes(**values: str) -> str:
    return "".join(
        " " + name + '="' + _escape(value) + '"' for name, value in values.items()
    )


class JUnitFormatter:
    """Formats suite results as a JUnit XML document."""

    def format(self, suite_result: SuiteResult) -> str:
        """Render ``suite_result`` as JUnit XML text ending in a newline."""
        errors = sum(
            1
            for result in suite_result.results
            if not result.success and result.error is not None
        )
        cases = [self._case(result) for result in suite_result.results]

        suite_open = (
            "  <testsuite"
            + _attributes(
                name=SUITE_NAME,
                tests=str(suite_result.total_tests),
                failures=str(suite_result.failed_tests),
                errors=str(errors),
                time=_seconds(suite_result.total_time),
            )
            + ">"
        )

        lines = ["<testsuites>"]
        if cases:
            lines.append(suite_open)
            lines.extend(line for case in cases for line in case)
            lines.append("  </testsuite>")
        else:
            lines.append(suite_open + "</testsuite>")
        lines.append("</testsuites>")
        return XML_HEADER + "\n".join(lines) + "\n"

    @staticmethod
    def _case(result: TestResult) -> list[str]:
        millis = result.response_time // timedelta(milliseconds=1)
        system_out = ""
        if result.prepared_request is not None:
            request = result.prepared_request
            system_out += f"Request: {request.method} {request.url}\n"
        system_out += f"Status: {result.status_code}\n"
        system_out += f"Response Time: {millis}ms\n"

        lines = [
            "    <testcase"
            + _attributes(
                name=result.test.name,
                classname=CLASS_NAME,
                time=_seconds(result.response_time),
            )
            + ">"
        ]

        if not result.success:
            if result.error is not None:
                lines.append(
                    "      <error"
                    + _attributes(message="Test execution error", type="ExecutionError")
                    + ">"
                    + _escape(str(result.error))
                    + "</error>"
                )
            elif result.failures:
                content = "\n".join(str(failure) for failure in result.failures)
                lines.append(
                    "      <failure"
                    + _attributes(
                        message=f"{len(result.failures)} assertion(s) failed",
                        type="AssertionFailure",
                    )
                    + ">"
                    + _escape(content)
                    + "</failure>"
                )

        lines.append("      <system-out>" + _escape(system_out) + "</system-out>")
        lines.append("    </testcase>")
        return lines