"""
Formatting of sample results into short status-area strings.
"""
from dataclasses import dataclass
from typing import Optional

from resource_monitor.monitoring import SampleResult

PLACEHOLDER = '...'
BYTES_PER_KB = 1024
BYTES_PER_MB = 1024 * 1024


def format_speed(bytes_per_sec: float) -> str:
    """
    Formats a throughput: below 1 MiB/s in KB/s, otherwise in MB/s.

    >>> format_speed(500)
    '0.5 KB/s'
    >>> format_speed(2000000)
    '1.9 MB/s'
    """
    if bytes_per_sec < BYTES_PER_MB:
        return f"{bytes_per_sec / BYTES_PER_KB:.1f} KB/s"
    return f"{bytes_per_sec / BYTES_PER_MB:.1f} MB/s"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


@dataclass(frozen=True)
class StatusLabels:
    """Display strings for the four status-area items"""
    cpu: str
    ram: str
    down: str
    up: str


def format_result(result: SampleResult, placeholder: str = PLACEHOLDER) -> StatusLabels:
    """
    Formats every field of a result. Absent fields render as the placeholder
    so the status area keeps a stable layout.

    :param result: Result of one sampling cycle
    :type result: SampleResult
    :param placeholder: Text shown for an unavailable metric
    :type placeholder: str
    :return: Display strings
    :rtype: StatusLabels
    """
    def _or_placeholder(value: Optional[float], formatter) -> str:
        return placeholder if value is None else formatter(value)

    return StatusLabels(
        cpu=_or_placeholder(result.cpu_percent, format_percent),
        ram=_or_placeholder(result.ram_percent, format_percent),
        down=_or_placeholder(result.down_rate, format_speed),
        up=_or_placeholder(result.up_rate, format_speed)
    )
