import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

from curlex.junit import XML_HEADER, JUnitFormatter
from curlex.models import (
    AssertionFailure,
    AssertionType,
    PreparedRequest,
    SuiteResult,
    Test,
    TestResult,
)


def _suite_result():
    return SuiteResult(
        total_tests=2,
        passed_tests=1,
        failed_tests=1,
        total_time=timedelta(milliseconds=1500),
        start_time=datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        end_time=datetime(2024, 1, 1, 12, 0, 1, 500000, tzinfo=timezone.utc),
        results=[
            TestResult(
                test=Test(name="Success test"),
                success=True,
                status_code=200,
                response_time=timedelta(milliseconds=500),
                prepared_request=PreparedRequest(method="GET", url="https://example.com"),
            ),
            TestResult(
                test=Test(name="Failed test"),
                success=False,
                status_code=404,
                response_time=timedelta(milliseconds=300),
                failures=[
                    AssertionFailure(
                        type=AssertionType.STATUS,
                        expected="200",
                        actual="404",
                        message="expected status 200, got 404",
                    )
                ],
            ),
        ],
    )


def _parse(output):
    return ET.fromstring(output.encode("utf-8"))


def test_format():
    output = JUnitFormatter().format(_suite_result())

    assert output.startswith(XML_HEADER)
    root = _parse(output)
    suites = root.findall("testsuite")
    assert len(suites) == 1
    suite = suites[0]
    assert suite.get("tests") == "2"
    assert suite.get("failures") == "1"
    cases = suite.findall("testcase")
    assert len(cases) == 2
    assert cases[0].find("failure") is None
    assert cases[1].find("failure") is not None
    assert cases[1].find("failure").text == "expected status 200, got 404"


def test_attributes_and_system_out():
    root = _parse(JUnitFormatter().format(_suite_result()))
    suite = root.find("testsuite")
    first, second = suite.findall("testcase")

    assert suite.get("name") == "curlex"
    assert suite.get("errors") == "0"
    assert suite.get("time") == "1.5"
    assert first.get("classname") == "curlex.tests"
    assert first.get("time") == "0.5"
    assert first.find("system-out").text == (
        "Request: GET https://example.com\nStatus: 200\nResponse Time: 500ms\n"
    )
    assert second.get("time") == "0.3"
    assert second.find("failure").get("message") == "1 assertion(s) failed"
    assert second.find("failure").get("type") == "AssertionFailure"


def test_execution_error_counted():
    suite_result = SuiteResult(
        total_tests=1,
        failed_tests=1,
        results=[
            TestResult(
                test=Test(name="broken & bad"),
                success=False,
                response_time=timedelta(microseconds=20),
                error=RuntimeError("connection <refused>"),
            )
        ],
    )
    output = JUnitFormatter().format(suite_result)
    suite = _parse(output).find("testsuite")
    case = suite.find("testcase")

    assert suite.get("errors") == "1"
    assert case.get("name") == "broken & bad"
    assert case.get("time") == "2e-05"
    error = case.find("error")
    assert error.get("type") == "ExecutionError"
    assert error.get("message") == "Test execution error"
    assert error.text == "connection <refused>"
    assert case.find("failure") is None


def test_newlines_escaped_in_output():
    output = JUnitFormatter().format(_suite_result())

    assert "Status: 200&#xA;Response Time: 500ms&#xA;" in output


def test_valid_xml_for_empty_suite():
    output = JUnitFormatter().format(SuiteResult(results=[]))
    suite = _parse(output).find("testsuite")

    assert suite.get("tests") == "0"
    assert suite.get("time") == "0"
    assert suite.findall("testcase") == []