"""Minimal output: a single summary line."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta

from .human import Color
from .models import TestResult


@dataclass
class QuietFormatter:
    """Reports only the final pass/fail counts."""

    no_color: bool = False

    def _colorize(self, color: Color, text: str) -> str:
        if self.no_color:
            return text
        return color.value + text + Color.RESET.value

    def format_summary(self, results: Sequence[TestResult], duration: timedelta) -> str:
        """Render a one-line summary of ``results``."""
        total = len(results)
        passed = sum(1 for result in results if result.success)
        failed = total - passed
        millis = duration // timedelta(milliseconds=1)

        if failed == 0:
            return self._colorize(Color.GREEN, f"✓ {passed}/{total} passed ({millis}ms)\n")
        return self._colorize(
            Color.RED, f"✗ {failed}/{total} failed, {passed} passed ({millis}ms)\n"
        )