"""
Console user interface for the Resource Monitor.
Renders the status line in a terminal and prints CLI messages.
"""
import os
import sys
from typing import Optional, TextIO

from resource_monitor.monitoring import SampleResult
from resource_monitor.ui.presenter import PLACEHOLDER, StatusLabels, format_result


COLORS = {
    'RESET': '\033[0m',
    'RED': '\033[91m',
    'GREEN': '\033[92m',
    'YELLOW': '\033[93m',
    'BLUE': '\033[94m',
    'MAGENTA': '\033[95m',
    'CYAN': '\033[96m',
    'BOLD': '\033[1m'
}


def _supports_color(stream: TextIO) -> bool:
    """
    Determine if the given stream is a terminal that accepts ANSI colors.

    :param stream: Output stream
    :type stream: TextIO
    :return: True if color is supported, False otherwise
    :rtype: bool
    """
    if os.environ.get('NO_COLOR') is not None or os.environ.get('TERM') == 'dumb':
        return False
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


def colored_text(text: str, color: str, stream: TextIO = sys.stdout) -> str:
    """
    Wraps text with ANSI color codes if supported.

    :param text: Text to colorize
    :type text: str
    :param color: Color name from COLORS dict
    :type color: str
    :param stream: Stream the text will be written to
    :type stream: TextIO
    :return: Colorized text if supported, original text otherwise
    :rtype: str
    """
    if color not in COLORS or not _supports_color(stream):
        return text

    return COLORS[color] + text + COLORS['RESET']


def display_error(message: str, error_type: str = "ERROR") -> None:
    """
    Displays an error message on stderr.

    :param message: The error message to display
    :type message: str
    :param error_type: Type of error for the prefix
    :type error_type: str
    """
    error_prefix = colored_text(f"[{error_type}]", "RED", sys.stderr)
    print(f"{error_prefix} {message}", file=sys.stderr)


def display_info(message: str, info_type: str = "INFO") -> None:
    """
    Displays an informational message.

    :param message: The message to display
    :type message: str
    :param info_type: Type of info for the prefix
    :type info_type: str
    """
    info_prefix = colored_text(f"[{info_type}]", "BLUE", sys.stdout)
    print(f"{info_prefix} {message}")


def render_status_line(labels: StatusLabels, stream: TextIO = sys.stdout) -> str:
    """
    Joins the four labels into one status line.

    >>> render_status_line(StatusLabels('1.0%', '2.0%', '0.5 KB/s', '1.9 MB/s'), stream=None)
    'CPU 1.0% | RAM 2.0% | ↓ 0.5 KB/s | ↑ 1.9 MB/s'
    """
    items = [
        (colored_text("CPU", "CYAN", stream), labels.cpu),
        (colored_text("RAM", "MAGENTA", stream), labels.ram),
        (colored_text("↓", "GREEN", stream), labels.down),
        (colored_text("↑", "YELLOW", stream), labels.up),
    ]
    return " | ".join(f"{name} {value}" for name, value in items)


class ConsolePresenter:
    """
    Result listener writing one status line per cycle.

    On a terminal the line is redrawn in place; otherwise each result is
    written on its own line so the output can be piped or logged.
    """

    def __init__(self, stream: Optional[TextIO] = None, placeholder: str = PLACEHOLDER):
        self.stream = stream or sys.stdout
        self.placeholder = placeholder
        isatty = getattr(self.stream, 'isatty', None)
        self._inline = bool(isatty and isatty())

    def __call__(self, result: SampleResult):
        line = render_status_line(format_result(result, self.placeholder), self.stream)
        if self._inline:
            self.stream.write(f"\r\033[K{line}")
        else:
            self.stream.write(f"{line}\n")
        self.stream.flush()

    def finish(self):
        """Moves the cursor off an in-place status line."""
        if self._inline:
            self.stream.write("\n")
            self.stream.flush()
