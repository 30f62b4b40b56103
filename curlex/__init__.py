"""Loading YAML HTTP test suites, parsing curl commands and formatting test results."""

__version__ = "1.0.1"