"""Turn a curl command line into a prepared request."""

from __future__ import annotations

import base64
import re

from .models import PreparedRequest

_URL_PATTERNS = (
    re.compile(r'"([^"]+)"'),
    re.compile(r"'([^']+)'"),
    re.compile(r"(https?://\S+)", re.ASCII),
    re.compile(r"([a-zA-Z0-9.\-_:/@]+\S*)", re.ASCII),
)

_METHOD_PATTERNS = (
    re.compile(r"-X\s+(\w+)", re.ASCII),
    re.compile(r"--request\s+(\w+)", re.ASCII),
)
_HEADER_PATTERNS = (
    re.compile(r"""-H\s+["']([^"']+)["']"""),
    re.compile(r"""--header\s+["']([^"']+)["']"""),
)
_DATA_PATTERNS = (
    re.compile(r'-d\s+"([^"]+)"'),
    re.compile(r"-d\s+'([^']+)'"),
    re.compile(r'--data\s+"([^"]+)"'),
    re.compile(r"--data\s+'([^']+)'"),
)
_USER_PATTERNS = (
    re.compile(r"""-u\s+["']([^"']+)["']"""),
    re.compile(r"""--user\s+["']([^"']+)["']"""),
)
_USER_AGENT_PATTERNS = (
    re.compile(r"""-A\s+["']([^"']+)["']"""),
    re.compile(r"""--user-agent\s+["']([^"']+)["']"""),
)
_COOKIE_PATTERNS = (
    re.compile(r"""-b\s+["']([^"']+)["']"""),
    re.compile(r"""--cookie\s+["']([^"']+)["']"""),
)


class CurlParseError(ValueError):
    """Raised when a curl command cannot be understood."""


def parse_curl(command: str) -> PreparedRequest:
    """Parse a curl command, honouring -X, -H, -d, -u, -A, -b and --json."""
    cmd = command.strip().removeprefix("curl ").removeprefix("curl").strip()
    url, remaining = _extract_url(cmd)
    if not url:
        raise CurlParseError("no URL found in curl command")
    request = PreparedRequest(method="GET", url=url)
    _apply_flags(remaining, request)
    return request


def _extract_url(cmd: str) -> tuple[str, str]:
    for pattern in _URL_PATTERNS:
        match = pattern.search(cmd)
        if match:
            url = match.group(1)
            if "://" in url or url.startswith("http"):
                return url, pattern.sub("", cmd)

    parts = cmd.split()
    for position, part in enumerate(parts):
        if not part.startswith("-"):
            rest = parts[:position] + parts[position + 1 :]
            return part, " ".join(rest)
    return "", cmd


def _first(cmd: str, patterns) -> str:
    for pattern in patterns:
        match = pattern.search(cmd)
        if match:
            return match.group(1)
    return ""


def _all(cmd: str, patterns) -> list[str]:
    return [value for pattern in patterns for value in pattern.findall(cmd)]


def _apply_flags(cmd: str, request: PreparedRequest) -> None:
    method = _first(cmd, _METHOD_PATTERNS)
    if method:
        request.method = method.upper()

    for header in _all(cmd, _HEADER_PATTERNS):
        key, sep, value = header.partition(":")
        if sep:
            request.headers[key.strip()] = value.strip()

    body = _first(cmd, _DATA_PATTERNS)
    if body:
        request.body = body
        if request.method == "GET":
            request.method = "POST"

    credentials = _first(cmd, _USER_PATTERNS)
    if credentials:
        encoded = base64.b64encode(credentials.encode()).decode("ascii")
        request.headers["Authorization"] = "Basic " + encoded

    agent = _first(cmd, _USER_AGENT_PATTERNS)
    if agent:
        request.headers["User-Agent"] = agent

    cookies = _all(cmd, _COOKIE_PATTERNS)
    if cookies:
        request.headers["Cookie"] = "; ".join(cookies)

    if "--json" in cmd:
        request.headers["Content-Type"] = "application/json"
        request.headers["Accept"] = "application/json"