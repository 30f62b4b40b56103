"""Selecting which tests of a suite to run."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import Test, TestSuite


@dataclass
class FilterConfig:
    """Test selection: an exact name, a name pattern, and a name to skip."""

    test_name: str = ""
    test_pattern: str = ""
    skip_tests: str = ""


def filter_tests(suite: TestSuite, config: FilterConfig) -> list[Test]:
    """Return the tests of ``suite`` selected by ``config``.

    An invalid pattern selects every test.
    """
    if not (config.test_name or config.test_pattern or config.skip_tests):
        return list(suite.tests)

    pattern = None
    if config.test_pattern:
        try:
            pattern = re.compile(config.test_pattern)
        except re.error:
            return list(suite.tests)

    def selected(test: Test) -> bool:
        if config.skip_tests and test.name == config.skip_tests:
            return False
        if config.test_name:
            return test.name == config.test_name
        if pattern is not None:
            return pattern.search(test.name) is not None
        return True

    return [test for test in suite.tests if selected(test)]