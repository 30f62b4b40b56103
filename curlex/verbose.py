"""Detailed output for troubleshooting failing tests."""

from __future__ import annotations

from .human import Color, HumanFormatter
from .logger import REDACTED, is_sensitive_header
from .models import TestResult


class VerboseFormatter(HumanFormatter):
    """Shows the full request, response and assertion details of each test."""

    def format_result(self, result: TestResult) -> str:
        """Render one test result with request and response details."""
        bold = Color.BOLD.value
        separator = "=" * 60
        if result.success:
            title = self.colorize(Color.GREEN.value + bold, "✓ " + result.test.name)
        else:
            title = self.colorize(Color.RED.value + bold, "✗ " + result.test.name)
        out = [separator, "\n", title, "\n", separator, "\n\n"]

        request = result.prepared_request
        if request is not None:
            out += [self.colorize(Color.BLUE.value + bold, "REQUEST:"), "\n"]
            out.append(f"  {request.method} {request.url}\n")
            if request.headers:
                out += [self.colorize(Color.BLUE, "  Headers:"), "\n"]
                for key, value in request.headers.items():
                    shown = REDACTED if is_sensitive_header(key) else value
                    out.append(f"    {key}: {shown}\n")
            if request.body:
                out += [self.colorize(Color.BLUE, "  Body:"), "\n"]
                out.append(self._block(request.body, 200))
            out.append("\n")

        out += [self.colorize(Color.BLUE.value + bold, "RESPONSE:"), "\n"]
        status = self.colorize(self._status_color(result.status_code), str(result.status_code))
        out.append(f"  Status: {status} ({self._millis(result.response_time)}ms)\n")

        if result.headers:
            out += [self.colorize(Color.BLUE, "  Headers:"), "\n"]
            for key, values in result.headers.items():
                out.extend(f"    {key}: {value}\n" for value in values)

        if result.response_body:
            out += [self.colorize(Color.BLUE, "  Body (first 300 chars):"), "\n"]
            out.append(self._block(result.response_body, 300))
        out.append("\n")

        out += [self.colorize(Color.BLUE.value + bold, "ASSERTIONS:"), "\n"]
        if not result.failures:
            out += [self.colorize(Color.GREEN, "  ✓ All assertions passed"), "\n"]
        else:
            out += [
                self.colorize(Color.RED, f"  ✗ {len(result.failures)} assertion(s) failed:"),
                "\n",
            ]
            for failure in result.failures:
                out += [self.colorize(Color.RED, f"    • {failure}"), "\n"]

        if result.error is not None:
            out += ["\n", self.colorize(Color.RED.value + bold, "ERROR:"), "\n"]
            out += [self.colorize(Color.RED, f"  {result.error}"), "\n"]

        out.append("\n")
        return "".join(out)

    @staticmethod
    def _block(text: str, limit: int) -> str:
        if len(text) > limit:
            text = text[:limit] + "..."
        return "    " + text.replace("\n", "\n    ") + "\n"