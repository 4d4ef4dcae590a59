"""
Sample engine combining the CPU, memory and network samplers.
"""
from typing import Optional

from resource_monitor.monitoring.cpu_sampler import CpuSampler
from resource_monitor.monitoring.mem_sampler import MemSampler
from resource_monitor.monitoring.net_sampler import NetSampler
from resource_monitor.monitoring.snapshots import CounterSnapshot, NetSnapshot, SampleResult
from resource_monitor.utils import get_logger

logger = get_logger(__name__)


class SampleEngine:
    """
    Produces one :class:`SampleResult` per call from the host counter sources.

    The engine owns the previous CPU and network snapshots and is meant to be
    driven from a single execution context (see :class:`Scheduler`). Every
    metric is sampled independently: a failure in one leaves that field as
    None and does not affect the others. ``sample()`` never raises.
    """

    def __init__(self,
                 cpu_sampler: Optional[CpuSampler] = None,
                 mem_sampler: Optional[MemSampler] = None,
                 net_sampler: Optional[NetSampler] = None):
        self.cpu_sampler = cpu_sampler or CpuSampler()
        self.mem_sampler = mem_sampler or MemSampler()
        self.net_sampler = net_sampler or NetSampler()

        self._prev_cpu: Optional[CounterSnapshot] = None
        self._prev_net: Optional[NetSnapshot] = None
        self._closed = False
        logger.debug("SampleEngine initialized")

    @property
    def closed(self) -> bool:
        return self._closed

    def sample(self) -> SampleResult:
        """
        Runs one sampling cycle over all metrics.

        :return: Result with each metric set, or None where it is unavailable
        :rtype: SampleResult
        """
        if self._closed:
            logger.debug("Sample requested on a closed engine. Returning empty result.")
            return SampleResult()

        cpu_percent = None
        try:
            cpu_percent, self._prev_cpu = self.cpu_sampler.sample(self._prev_cpu)
        except Exception as e:
            logger.error(f"Unexpected error sampling CPU usage: {e}", exc_info=True)

        ram_percent = None
        try:
            ram_percent = self.mem_sampler.sample()
        except Exception as e:
            logger.error(f"Unexpected error sampling RAM usage: {e}", exc_info=True)

        rates = None
        try:
            rates, self._prev_net = self.net_sampler.sample(self._prev_net)
        except Exception as e:
            logger.error(f"Unexpected error sampling network usage: {e}", exc_info=True)

        result = SampleResult(
            cpu_percent=cpu_percent,
            ram_percent=ram_percent,
            down_rate=rates.down if rates else None,
            up_rate=rates.up if rates else None
        )
        logger.debug(f"Sample collected: {result}")
        return result

    def close(self):
        """
        Discards the snapshot history. Later ``sample()`` calls return empty results.
        """
        self._closed = True
        self._prev_cpu = None
        self._prev_net = None
        logger.debug("SampleEngine closed")
