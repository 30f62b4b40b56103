from datetime import timedelta

import pytest

from curlex.logger import (
    RequestLogger,
    format_body,
    is_sensitive_header,
    sanitize_filename,
)
from curlex.models import AssertionFailure, PreparedRequest, Test, TestResult


def _result(**overrides):
    values = dict(
        test=Test(name="Create user"),
        success=True,
        status_code=201,
        response_time=timedelta(milliseconds=42),
        response_body='{"id":1}',
        headers={"Content-Type": ["application/json"]},
    )
    values.update(overrides)
    return TestResult(**values)


def test_sanitize_filename_removes_unsafe_characters():
    name = 'a/b\\c:d*e?f"g<h>i|j k'
    safe = sanitize_filename(name)
    assert len(safe) == len(name)
    for char in '/\\:*?"<>| ':
        assert char not in safe
    assert safe.replace("_", "") == "abcdefghijk"


def test_sanitize_filename_caps_length():
    assert sanitize_filename("x" * 80) == "x" * 50


@pytest.mark.parametrize(
    "key, sensitive",
    [
        ("Authorization", True),
        ("Cookie", True),
        ("X-API-Key", True),
        ("X-Auth-Token", True),
        ("Content-Type", False),
        ("Accept", False),
    ],
)
def test_is_sensitive_header(key, sensitive):
    assert is_sensitive_header(key) is sensitive


def test_format_body_indents_every_line():
    body = "line one\nline two\nline three"
    formatted = format_body(body)
    assert all(line.startswith("  ") for line in formatted.split("\n"))
    assert formatted.replace("\n  ", "\n")[2:] == body


def test_disabled_logger_writes_nothing(tmp_path):
    logger = RequestLogger("")
    assert logger.log_test(_result(), None) is None
    assert list(tmp_path.iterdir()) == []


def test_log_test_writes_request_and_response(tmp_path):
    log_dir = tmp_path / "logs"
    logger = RequestLogger(log_dir)
    request = PreparedRequest(
        method="POST",
        url="https://example.com/users",
        headers={"Authorization": "Bearer token", "Accept": "application/json"},
        body='{"name":"a"}',
    )
    result = _result(prepared_request=request)

    path = logger.log_test(result, request)

    assert path.parent == log_dir
    assert path.name.endswith("_" + sanitize_filename(result.test.name) + ".log")
    content = path.read_text(encoding="utf-8")
    assert content.startswith("=== REQUEST ===\n")
    assert "POST https://example.com/users\n" in content
    assert "  Authorization: ***REDACTED***\n" in content
    assert "Bearer token" not in content
    assert "  Accept: application/json\n" in content
    assert format_body('{"name":"a"}') in content
    assert "=== RESPONSE ===" in content
    assert "Status: 201 (42ms)" in content
    assert "  Content-Type: application/json\n" in content
    assert "✓ All assertions passed" in content
    assert "=== ERROR ===" not in content


def test_log_test_records_failures_and_error(tmp_path):
    failures = [
        AssertionFailure(message="status mismatch"),
        AssertionFailure(message="body mismatch"),
    ]
    result = _result(success=False, failures=failures, error=RuntimeError("boom"))
    path = RequestLogger(tmp_path).log_test(result, None)
    content = path.read_text(encoding="utf-8")
    assert "✗ 2 assertion(s) failed:" in content
    assert "  • status mismatch\n" in content
    assert "  • body mismatch\n" in content
    assert "\n=== ERROR ===\nboom\n" in content


def test_log_test_fails_when_directory_cannot_be_created(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(OSError, match="failed to create log directory"):
        RequestLogger(blocker).log_test(_result(), None)