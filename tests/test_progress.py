import io
import time

import pytest

from curlex.progress import Progress


def test_new_progress():
    progress = Progress(10, False, writer=io.StringIO())
    assert progress.total == 10
    assert progress.current == 0
    assert progress.no_color is False
    assert progress.active is False

    no_color = Progress(5, True, writer=io.StringIO())
    assert no_color.no_color is True


def test_non_tty_writer_is_not_terminal():
    progress = Progress(3, writer=io.StringIO())
    assert progress.is_terminal is False


def test_increment():
    progress = Progress(10, False, writer=io.StringIO())
    assert progress.current == 0
    progress.increment()
    assert progress.current == 1
    progress.increment()
    progress.increment()
    assert progress.current == 3


@pytest.mark.parametrize(
    ("current", "total", "no_color", "spinner", "contains"),
    [
        (5, 10, True, "⠋", ["⠋", "Running tests", "5/10", "50%"]),
        (10, 10, True, "⠙", ["⠙", "Running tests", "10/10", "100%"]),
        (0, 20, True, "⠹", ["⠹", "Running tests", "0/20", "0%"]),
        (3, 6, False, "⠸", ["⠸", "Running tests", "3/6", "50%"]),
    ],
)
def test_format_progress_bar(current, total, no_color, spinner, contains):
    progress = Progress(total, no_color, writer=io.StringIO())
    output = progress.format_progress_bar(current, total, spinner)

    for expected in contains:
        assert expected in output
    assert "█" in output or "░" in output


def test_format_progress_bar_exact_no_color():
    progress = Progress(10, True, writer=io.StringIO())
    output = progress.format_progress_bar(5, 10, "⠋")
    assert output == "⠋ Running tests [" + "█" * 15 + "░" * 15 + "] 5/10 (50%)"


@pytest.mark.parametrize(
    ("current", "no_color", "spinner"),
    [(0, True, "⠋"), (5, True, "⠙"), (10, False, "⠹")],
)
def test_format_spinner(current, no_color, spinner):
    progress = Progress(0, no_color, writer=io.StringIO())
    output = progress.format_spinner(current, spinner)

    for expected in (spinner, "Running tests", str(current), "completed"):
        assert expected in output


def test_format_spinner_exact_no_color():
    progress = Progress(0, True, writer=io.StringIO())
    assert progress.format_spinner(5, "⠙") == "⠙ Running tests... 5 completed"


def test_stop_when_not_active_writes_nothing():
    buffer = io.StringIO()
    progress = Progress(10, False, writer=buffer, is_terminal=True)
    progress.stop()
    assert buffer.getvalue() == ""
    assert progress.active is False


def test_clear():
    buffer = io.StringIO()
    progress = Progress(10, False, writer=buffer, is_terminal=True)
    progress.clear()

    output = buffer.getvalue()
    assert "\r" in output
    assert "\033[K" in output


def test_clear_non_terminal():
    buffer = io.StringIO()
    progress = Progress(10, False, writer=buffer, is_terminal=False)
    progress.clear()
    assert buffer.getvalue() == ""


def test_start_on_non_terminal_draws_nothing():
    buffer = io.StringIO()
    progress = Progress(2, True, writer=buffer, is_terminal=False)
    progress.start()
    progress.increment()
    progress.stop()
    assert buffer.getvalue() == ""
    assert progress.current == 1


def test_context_manager_renders_and_clears():
    buffer = io.StringIO()
    with Progress(4, True, writer=buffer, is_terminal=True) as progress:
        progress.increment()
        time.sleep(0.3)
        assert progress.active is True

    output = buffer.getvalue()
    assert progress.active is False
    assert "Running tests" in output
    assert "1/4" in output
    assert output.endswith("\r\033[K")