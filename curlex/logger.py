"""Writing full request and response details to log files."""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path

from .models import PreparedRequest, TestResult

_UNSAFE_FILENAME_CHARS = ("/", "\\", ":", "*", "?", '"', "<", ">", "|", " ")
_SENSITIVE_HEADER_PARTS = ("authorization", "cookie", "api-key", "x-api-key", "token")
REDACTED = "***REDACTED***"


def sanitize_filename(name: str) -> str:
    """Replace characters unsafe in file names and cap the length at 50."""
    for char in _UNSAFE_FILENAME_CHARS:
        name = name.replace(char, "_")
    return name[:50]


def is_sensitive_header(key: str) -> bool:
    """Whether a header's value should be hidden from logs."""
    lower = key.lower()
    return any(part in lower for part in _SENSITIVE_HEADER_PARTS)


def format_body(body: str) -> str:
    """Indent every line of a body by two spaces."""
    return "  " + body.replace("\n", "\n  ")


class RequestLogger:
    """Saves request and response details of each test to its own file."""

    def __init__(self, log_dir: str | os.PathLike | None = None) -> None:
        self.log_dir = log_dir

    def log_test(
        self, result: TestResult, prepared_request: PreparedRequest | None
    ) -> Path | None:
        """Write a log file for ``result``; return its path, or None when disabled."""
        if not self.log_dir:
            return None

        directory = Path(self.log_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OSError(f"failed to create log directory: {exc}") from exc

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        path = directory / f"{timestamp}_{sanitize_filename(result.test.name)}.log"

        try:
            path.write_text(self._render(result, prepared_request), encoding="utf-8")
        except OSError as exc:
            raise OSError(f"failed to write log file: {exc}") from exc
        return path

    @staticmethod
    def _render(result: TestResult, request: PreparedRequest | None) -> str:
        parts = ["=== REQUEST ===\n"]
        if request is not None:
            parts.append(f"{request.method} {request.url}\n")
            if request.headers:
                parts.append("\nHeaders:\n")
                for key, value in request.headers.items():
                    shown = REDACTED if is_sensitive_header(key) else value
                    parts.append(f"  {key}: {shown}\n")
            if request.body:
                parts.extend(["\nBody:\n", format_body(request.body), "\n"])

        millis = result.response_time // timedelta(milliseconds=1)
        parts.append("\n=== RESPONSE ===\n")
        parts.append(f"Status: {result.status_code} ({millis}ms)\n")
        if result.headers:
            parts.append("\nHeaders:\n")
            for key, values in result.headers.items():
                parts.extend(f"  {key}: {value}\n" for value in values)
        if result.response_body:
            parts.extend(["\nBody:\n", format_body(result.response_body), "\n"])

        parts.append("\n=== ASSERTIONS ===\n")
        if not result.failures:
            parts.append("✓ All assertions passed\n")
        else:
            parts.append(f"✗ {len(result.failures)} assertion(s) failed:\n")
            parts.extend(f"  • {failure}\n" for failure in result.failures)

        if result.error is not None:
            parts.extend(["\n=== ERROR ===\n", str(result.error), "\n"])

        return "".join(parts)