# curlex

curlex describes HTTP API tests in YAML and turns test results into
readable reports. A suite lists tests, each made either from a plain curl
command or from a structured request, together with the assertions the
response has to satisfy.

## Writing a suite

```yaml
version: "1.0"
variables:
  BASE_URL: "${API_URL}"
defaults:
  timeout: 30s
  retries: 2
  headers:
    Accept: application/json
tests:
  - name: "List users"
    curl: "curl ${BASE_URL}/users"
    assertions:
      - status: 200
  - name: "Create user"
    request:
      method: POST
      url: "${BASE_URL}/users"
      body: '{"name": "Alice"}'
    assertions:
      - status: 201
      - body_contains: "Alice"
```

Each assertion is a one-key mapping whose key is one of the
`AssertionType` values: `status`, `body`, `body_contains`, `json_path`,
`header` or `response_time`. Any other key is rejected.

Durations such as `timeout` and `retry_delay` take the forms `250ms`,
`30s` or `1m30s` (see `curlex.models.parse_duration`); a bare integer is
read as nanoseconds.

`${NAME}` references in curl commands, request URLs, bodies, header names
and values, and assertion values are replaced by suite variables first and
by environment variables second; a reference that resolves to nothing is
kept as written. Suite variables may themselves refer to environment
variables.

Values under `defaults` fill in whatever a test leaves unset. Timeouts are
capped at ten minutes, retries at 100 and redirects at 1000; a
`max_redirects` of `-1` is kept as it is. Default headers are added to
structured requests without overriding headers a test sets itself.

## Loading and checking a suite

```python
from curlex.yaml_parser import SuiteError, parse_suite_file

try:
    suite = parse_suite_file("api-tests.yaml")
except SuiteError as err:
    print(err)
```

Loading expands variables, applies defaults and validates the suite. Every
test needs a name, exactly one of `curl` or `request`, and at least one
assertion; a structured request needs both `method` and `url`. All problems
found are reported together in one `SuiteError`. `load_suite` does the same
for YAML text already in memory, and `validate_suite` checks a `TestSuite`
built by hand. The pieces are also available separately:
`curlex.variables.VariableExpander` and `curlex.defaults.apply_defaults` /
`merge_defaults`.

## Parsing curl commands

```python
from curlex.curl_parser import parse_curl

request = parse_curl(
    """curl -X POST -H "Content-Type: application/json" -d '{"key":"value"}' https://api.example.com/endpoint"""
)
# request.method == "POST", request.url == "https://api.example.com/endpoint"
```

The flags understood are `-X`/`--request`, `-H`/`--header`, `-d`/`--data`
(which turns a GET into a POST), `-u`/`--user` (Basic authentication),
`-A`/`--user-agent`, `-b`/`--cookie` (several cookies are joined with `; `)
and `--json` (sets `Content-Type` and `Accept` to `application/json`). A
command without a URL raises `CurlParseError`.

## Choosing tests

`curlex.filtering.filter_tests` narrows a suite according to a
`FilterConfig`: an exact test name, a regular expression searched in test
names, or a name to skip. An invalid expression leaves the suite
unfiltered.

## Reporting

Results are held in `curlex.models.TestResult` and `SuiteResult` and
rendered by the formatters:

- `curlex.human.HumanFormatter` – one block per test and a summary, with
  optional ANSI colours (`no_color=True` turns them off);
- `curlex.verbose.VerboseFormatter` – full request, response and assertion
  details, with sensitive headers redacted;
- `curlex.quiet.QuietFormatter` – a single summary line;
- `curlex.json_output.JSONFormatter` – an indented JSON document;
- `curlex.junit.JUnitFormatter` – JUnit XML for CI systems.

`curlex.logger.RequestLogger` writes one log file per test into a
directory of your choosing and returns its path; headers such as
`Authorization` or `Cookie` are written as `***REDACTED***`.
`curlex.progress.Progress` draws a spinner and progress bar on a terminal
while tests run, does nothing when the output is not a terminal, and can be
used as a context manager:

```python
from curlex.progress import Progress

with Progress(total=len(suite.tests)) as progress:
    for test in suite.tests:
        ...
        progress.increment()
```

## What curlex does not do

curlex does not send HTTP requests, evaluate assertions against responses,
or run suites, and it has no command-line program. It loads, prepares and
filters suites and formats results that are produced elsewhere.