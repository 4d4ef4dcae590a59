"""
CPU utilization sampling from the aggregate line of /proc/stat.
"""
from typing import Optional, Tuple

from resource_monitor.monitoring.errors import SampleError, MalformedData
from resource_monitor.monitoring.snapshots import CounterSnapshot, clamp_percent
from resource_monitor.monitoring.sources import PROC_STAT, read_source
from resource_monitor.utils import get_logger

logger = get_logger(__name__)

# user, nice, system, idle, iowait, irq, softirq
MIN_CPU_FIELDS = 7
IDLE_INDEX = 3
IOWAIT_INDEX = 4


def parse_cpu_line(text: str) -> CounterSnapshot:
    """
    Parses the first line of /proc/stat into cumulative totals.

    Every field on the line counts towards the total so that fields added by
    newer kernels (steal, guest, guest_nice, ...) are included. I/O wait is
    counted as idle time.

    :param text: Contents of the CPU counter source
    :type text: str
    :return: Snapshot of total and idle jiffies
    :rtype: CounterSnapshot
    :raises MalformedData: if the line is missing, mislabelled or has bad fields
    """
    lines = text.splitlines()
    parts = lines[0].split() if lines else []
    if not parts or parts[0] != 'cpu':
        raise MalformedData("First line of CPU counter source is not the aggregate 'cpu' line")

    fields = parts[1:]
    if len(fields) < MIN_CPU_FIELDS:
        raise MalformedData(f"Expected at least {MIN_CPU_FIELDS} CPU fields, got {len(fields)}")

    try:
        values = [int(field) for field in fields]
    except ValueError as e:
        raise MalformedData(f"Non-numeric CPU field: {e}") from e

    return CounterSnapshot(
        total=sum(values),
        idle=values[IDLE_INDEX] + values[IOWAIT_INDEX]
    )


def cpu_percent_between(prev: CounterSnapshot, current: CounterSnapshot) -> float:
    diff_total = current.total - prev.total
    diff_idle = current.idle - prev.idle
    if diff_total == 0:
        return 0.0
    return clamp_percent(100.0 * (1.0 - diff_idle / diff_total))


class CpuSampler:
    """
    Derives CPU utilization from two consecutive counter snapshots.

    The sampler holds no state of its own; the previous snapshot is passed in
    and the next one handed back to the caller.
    """

    def __init__(self, source_path: str = PROC_STAT):
        self.source_path = source_path

    def read(self) -> CounterSnapshot:
        return parse_cpu_line(read_source(self.source_path))

    def sample(self, prev: Optional[CounterSnapshot]) -> Tuple[Optional[float], Optional[CounterSnapshot]]:
        """
        Takes one CPU sample.

        :param prev: Snapshot from the previous successful sample, or None
        :type prev: Optional[CounterSnapshot]
        :return: Tuple (percent or None, snapshot to keep for the next call)
        :rtype: Tuple[Optional[float], Optional[CounterSnapshot]]
        """
        try:
            current = self.read()
        except SampleError as e:
            logger.warning(f"CPU sample unavailable ({type(e).__name__}): {e}")
            return None, prev

        if prev is None:
            logger.debug(f"Seeded CPU counters: {current}")
            return None, current

        percent = cpu_percent_between(prev, current)
        logger.debug(f"CPU usage: {percent:.1f}%")
        return percent, current
