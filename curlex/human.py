"""Human-readable terminal output."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from .models import TestResult


class Color(str, Enum):
    """ANSI escape sequences used for terminal output."""

    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"


def _code(color: Color | str) -> str:
    return color.value if isinstance(color, Color) else color


@dataclass
class HumanFormatter:
    """Formats results for reading in a terminal."""

    no_color: bool = False

    def colorize(self, color: Color | str, text: str) -> str:
        """Wrap ``text`` in ``color`` unless colours are disabled."""
        if self.no_color:
            return text
        return _code(color) + text + Color.RESET.value

    def indent(self, text: str, spaces: int) -> str:
        """Prefix ``text`` with ``spaces`` spaces."""
        return " " * spaces + text

    @staticmethod
    def _millis(duration: timedelta) -> int:
        return duration // timedelta(milliseconds=1)

    @staticmethod
    def _status_color(status_code: int) -> Color:
        if status_code >= 400:
            return Color.RED
        if status_code >= 300:
            return Color.YELLOW
        return Color.GREEN

    def format_result(self, result: TestResult) -> str:
        """Render one test result."""
        icon = (
            self.colorize(Color.GREEN, "✓")
            if result.success
            else self.colorize(Color.RED, "✗")
        )
        lines = [f"{icon} {self.colorize(Color.BOLD, result.test.name)}"]

        if result.error is not None:
            lines.append(self.indent(self.colorize(Color.RED, f"Error: {result.error}"), 2))
            return "\n".join(lines) + "\n"

        reset = Color.RESET.value
        status = self.colorize(self._status_color(result.status_code), str(result.status_code))
        lines.append(
            self.indent(
                f"{self.colorize(Color.GRAY, 'Status:')} {status}{reset}  "
                f"{self.colorize(Color.GRAY, '')}{self._millis(result.response_time)}ms{reset}",
                2,
            )
        )

        if result.test.debug:
            lines.append(self.indent(self.colorize(Color.BLUE, "Headers:"), 2))
            lines.extend(
                self.indent(f"{key}: {value}", 4)
                for key, values in result.headers.items()
                for value in values
            )
            lines.append(self.indent(self.colorize(Color.BLUE, "Body (first 500 chars):"), 2))
            body = result.response_body
            if len(body) > 500:
                body = body[:500] + "..."
            lines.extend(self.indent(line, 4) for line in body.split("\n"))

        if result.failures:
            lines.append(self.indent(self.colorize(Color.RED, "Failures:"), 2))
            lines.extend(
                self.indent(self.colorize(Color.RED, f"• {failure}"), 4)
                for failure in result.failures
            )

        return "\n".join(lines) + "\n"

    def format_summary(self, results: Sequence[TestResult], duration: timedelta) -> str:
        """Render the closing summary for a run."""
        total = len(results)
        passed = sum(1 for result in results if result.success)
        failed = total - passed
        rule = "─" * 50
        reset = Color.RESET.value
        gray = self.colorize(Color.GRAY, "")

        if failed == 0:
            headline = self.colorize(
                Color.GREEN.value + Color.BOLD.value, f"✓ All {total} tests passed"
            )
        else:
            headline = self.colorize(
                Color.RED.value + Color.BOLD.value, f"✗ {failed} of {total} tests failed"
            )

        if failed > 0:
            failed_text = f"{gray}Failed:{reset} {Color.RED.value}{failed}{reset}  "
        else:
            failed_text = f"{gray}Failed:{reset} {failed}  "

        stats = (
            f"{gray}Passed:{reset} {passed}  "
            + failed_text
            + f"{gray}Total:{reset} {total}  "
            + f"{gray}Time:{reset} {self._millis(duration)}ms\n"
        )
        return f"\n{rule}\n{headline}\n{stats}{rule}\n"