"""Substitution of ``${NAME}`` references in test suites."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

from .models import Test, TestSuite

_VARIABLE = re.compile(r"\$\{([^}]+)\}")


class VariableExpander:
    """Replaces ``${NAME}`` with suite variables, falling back to the environment."""

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._variables: dict[str, str] = dict(variables or {})

    def expand(self, text: str) -> str:
        """Return ``text`` with known references replaced; unknown ones are kept."""

        def replace(match: re.Match) -> str:
            name = match.group(1)
            if name in self._variables:
                return self._variables[name]
            return os.environ.get(name) or match.group(0)

        return _VARIABLE.sub(replace, text)

    def expand_suite(self, suite: TestSuite) -> None:
        """Expand references throughout ``suite`` in place."""
        self._variables = dict(suite.variables or {})
        self._variables = {key: self.expand(value) for key, value in self._variables.items()}
        for test in suite.tests:
            self._expand_test(test)

    def _expand_test(self, test: Test) -> None:
        if test.curl:
            test.curl = self.expand(test.curl)
        if test.request is not None:
            test.request.url = self.expand(test.request.url)
            test.request.body = self.expand(test.request.body)
            if test.request.headers is not None:
                test.request.headers = {
                    self.expand(key): self.expand(value)
                    for key, value in test.request.headers.items()
                }
        for assertion in test.assertions:
            assertion.value = self.expand(assertion.value)