"""
Memory utilization sampling from /proc/meminfo.
"""
import re
from typing import Dict, Optional

from resource_monitor.monitoring.errors import SampleError, MalformedData
from resource_monitor.monitoring.snapshots import clamp_percent
from resource_monitor.monitoring.sources import PROC_MEMINFO, read_source
from resource_monitor.utils import get_logger

logger = get_logger(__name__)

MEMINFO_LINE = re.compile(r'^(\w+):\s+(\d+)\s+kB\s*$')


def parse_meminfo(text: str) -> Dict[str, int]:
    """
    Collects every ``<Key>: <integer> kB`` line of the memory counter source.

    Lines in any other shape (e.g. ``HugePages_Total`` without a unit) are ignored.

    :param text: Contents of the memory counter source
    :type text: str
    :return: Mapping of key to value in kB
    :rtype: Dict[str, int]
    """
    values: Dict[str, int] = {}
    for line in text.splitlines():
        match = MEMINFO_LINE.match(line.strip())
        if match:
            values[match.group(1)] = int(match.group(2))
    return values


def ram_percent_from(values: Dict[str, int]) -> float:
    total = values.get('MemTotal')
    available = values.get('MemAvailable')
    if total is None or available is None:
        raise MalformedData("MemTotal or MemAvailable missing from memory counter source")
    if total <= 0:
        raise MalformedData(f"MemTotal must be positive, got {total}")
    return clamp_percent(100.0 * (total - available) / total)


class MemSampler:
    """Stateless: the source already reports instantaneous availability."""

    def __init__(self, source_path: str = PROC_MEMINFO):
        self.source_path = source_path

    def sample(self) -> Optional[float]:
        """
        Takes one memory sample.

        :return: Percentage of memory in use, or None if it cannot be derived
        :rtype: Optional[float]
        """
        try:
            percent = ram_percent_from(parse_meminfo(read_source(self.source_path)))
        except SampleError as e:
            logger.warning(f"RAM sample unavailable ({type(e).__name__}): {e}")
            return None

        logger.debug(f"RAM usage: {percent:.1f}%")
        return percent
