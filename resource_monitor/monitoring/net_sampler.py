"""
Network throughput sampling from /proc/net/dev.

The interface table looks like::

    Inter-|   Receive                            ...|  Transmit
     face |bytes    packets errs drop fifo frame ...|bytes    packets ...
        lo:  123456     100    0    0    0     0 ...   123456     100 ...
      eth0: 9876543    5000    0    0    0     0 ...  1234567    4000 ...

Older kernels print large receive counters flush against the colon
(``eth0:9876543``), so both layouts are accepted.
"""
import time
from typing import Callable, List, Optional, Tuple

from resource_monitor.monitoring.errors import SampleError, MalformedData, DegenerateInterval
from resource_monitor.monitoring.snapshots import NetSnapshot, NetRates
from resource_monitor.monitoring.sources import PROC_NET_DEV, read_source
from resource_monitor.utils import get_logger

logger = get_logger(__name__)

HEADER_LINES = 2
NET_DEV_FIELD_COUNT = 16
RECV_BYTES_INDEX = 0
SENT_BYTES_INDEX = 8
LOOPBACK_INTERFACE = 'lo'


def parse_interface_line(line: str) -> Tuple[str, List[int]]:
    """
    Splits one data line of the interface table into its name and counters.

    :param line: A data line of /proc/net/dev
    :type line: str
    :return: Tuple (interface name, the 16 counter fields)
    :rtype: Tuple[str, List[int]]
    :raises MalformedData: if the name or any counter cannot be parsed
    """
    parts = line.split()
    if not parts:
        raise MalformedData("Empty interface line")

    head = parts[0]
    if head.endswith(':'):
        name = head[:-1]
        raw_fields = parts[1:]
    elif ':' in head:
        name, first_field = head.split(':', 1)
        if not first_field.isdigit():
            raise MalformedData(f"Unexpected text after interface name in {head!r}")
        raw_fields = [first_field] + parts[1:]
    else:
        raise MalformedData(f"No colon after interface name in {line.strip()!r}")

    if not name:
        raise MalformedData(f"Missing interface name in {line.strip()!r}")
    if len(raw_fields) < NET_DEV_FIELD_COUNT:
        raise MalformedData(f"Interface {name} has {len(raw_fields)} fields, expected {NET_DEV_FIELD_COUNT}")

    try:
        fields = [int(field) for field in raw_fields[:NET_DEV_FIELD_COUNT]]
    except ValueError as e:
        raise MalformedData(f"Non-numeric counter for interface {name}: {e}") from e
    return name, fields


def aggregate_interfaces(text: str) -> Tuple[int, int]:
    """
    Sums receive and transmit bytes over every non-loopback interface.

    A line that fails to parse is skipped and logged; the rest still count.

    :param text: Contents of the network counter source
    :type text: str
    :return: Tuple (total received bytes, total sent bytes)
    :rtype: Tuple[int, int]
    :raises MalformedData: if the header lines are missing or there were data
        lines but none of them parsed
    """
    lines = text.splitlines()
    if len(lines) < HEADER_LINES:
        raise MalformedData("Network counter source is missing its header lines")

    total_recv = 0
    total_sent = 0
    data_lines = 0
    parsed_lines = 0

    for line in lines[HEADER_LINES:]:
        if not line.strip():
            continue
        data_lines += 1
        try:
            name, fields = parse_interface_line(line)
        except MalformedData as e:
            logger.warning(f"Skipping interface line: {e}")
            continue

        parsed_lines += 1
        if name == LOOPBACK_INTERFACE:
            continue
        total_recv += fields[RECV_BYTES_INDEX]
        total_sent += fields[SENT_BYTES_INDEX]

    if data_lines and not parsed_lines:
        raise MalformedData("No interface line of the network counter source could be parsed")
    return total_recv, total_sent


def _rate(current: int, previous: int, time_diff: float) -> float:
    # A counter that went backwards was reset (interface restart, suspend).
    if current < previous:
        return 0.0
    return (current - previous) / time_diff


def rates_between(prev: NetSnapshot, current: NetSnapshot) -> NetRates:
    """
    Computes throughput between two snapshots.

    :raises DegenerateInterval: if no time elapsed between the snapshots
    """
    time_diff = current.timestamp - prev.timestamp
    if time_diff <= 0:
        raise DegenerateInterval(f"Elapsed time between network snapshots is {time_diff:.6f}s")
    return NetRates(
        down=_rate(current.recv_bytes, prev.recv_bytes, time_diff),
        up=_rate(current.sent_bytes, prev.sent_bytes, time_diff)
    )


class NetSampler:
    """
    Derives download/upload rates from two consecutive interface snapshots.
    """

    def __init__(self, source_path: str = PROC_NET_DEV, clock: Callable[[], float] = time.monotonic):
        """
        :param source_path: Path of the network counter source
        :type source_path: str
        :param clock: Monotonic clock returning seconds
        :type clock: Callable[[], float]
        """
        self.source_path = source_path
        self.clock = clock

    def read(self) -> NetSnapshot:
        total_recv, total_sent = aggregate_interfaces(read_source(self.source_path))
        return NetSnapshot(recv_bytes=total_recv, sent_bytes=total_sent, timestamp=self.clock())

    def sample(self, prev: Optional[NetSnapshot]) -> Tuple[Optional[NetRates], Optional[NetSnapshot]]:
        """
        Takes one network sample.

        :param prev: Snapshot from the previous successful sample, or None
        :type prev: Optional[NetSnapshot]
        :return: Tuple (rates or None, snapshot to keep for the next call)
        :rtype: Tuple[Optional[NetRates], Optional[NetSnapshot]]
        """
        try:
            current = self.read()
        except SampleError as e:
            logger.warning(f"Network sample unavailable ({type(e).__name__}): {e}")
            return None, prev

        if prev is None:
            logger.debug(f"Seeded network counters: {current}")
            return None, current

        try:
            rates = rates_between(prev, current)
        except DegenerateInterval as e:
            logger.warning(f"Network rates unavailable: {e}")
            return None, current

        logger.debug(f"Network rates: down={rates.down:.1f} B/s, up={rates.up:.1f} B/s")
        return rates, current
