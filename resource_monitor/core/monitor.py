"""
Resource Monitor service owning the engine and its scheduler.
"""
import threading
from typing import Callable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from resource_monitor.config import ConfigManager

from resource_monitor.core.scheduler import Scheduler, DEFAULT_INTERVAL_SEC
from resource_monitor.monitoring import SampleEngine, SampleResult, get_host_info
from resource_monitor.utils import get_logger

logger = get_logger(__name__)

Listener = Callable[[SampleResult], None]


class ResourceMonitor:
    """
    Owns a :class:`SampleEngine` for its whole lifetime and publishes its
    results to the UI layer.

    Collaborators either subscribe a callback, which is called once per cycle
    with the new :class:`SampleResult`, or poll :attr:`latest`. The monitor
    does not depend on any UI toolkit. The engine is created on construction
    and closed by :meth:`shutdown`; a monitor cannot be restarted after that.
    """

    def __init__(self,
                 config_manager: 'ConfigManager',
                 engine: Optional[SampleEngine] = None,
                 interval: Optional[float] = None):
        """
        :param config_manager: Configuration manager instance
        :param engine: Engine to drive; a default /proc engine is created if None
        :param interval: Sampling period in seconds, overriding ``monitor.interval_sec``
        """
        self.config = config_manager
        self.engine = engine or SampleEngine()
        self.interval = interval if interval is not None else self.config.get('monitor.interval_sec', DEFAULT_INTERVAL_SEC)

        self._listeners: List[Listener] = []
        self._listeners_lock = threading.Lock()
        self._latest: Optional[SampleResult] = None
        self._stop_requested = threading.Event()
        self._shut_down = False

        self.scheduler = Scheduler(self.engine, self._publish, self.interval)
        logger.info(f"ResourceMonitor initialized. Sampling interval={self.interval}s")

    @property
    def latest(self) -> Optional[SampleResult]:
        """The most recently published result, or None before the first cycle."""
        return self._latest

    def subscribe(self, listener: Listener):
        with self._listeners_lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def start(self) -> bool:
        """
        Logs the host summary and starts sampling.

        :return: True if sampling started
        :rtype: bool
        """
        if self._shut_down:
            logger.warning("ResourceMonitor start requested after shutdown. Ignoring.")
            return False

        host = get_host_info()
        logger.info(f"Monitoring host {host['hostname']} ({host['os_info']}), "
                    f"{host['cpu_count']} CPUs, interfaces: {', '.join(host['interfaces']) or 'none'}")
        return self.scheduler.start()

    def shutdown(self):
        """
        Stops sampling and releases the engine. Safe to call more than once.
        """
        if self._shut_down:
            logger.debug("Shutdown called but monitor already shut down.")
            return
        self._shut_down = True
        self._stop_requested.set()

        logger.info("Shutting down resource monitor...")
        self.scheduler.stop()
        self.engine.close()
        logger.info("Resource monitor shut down.")

    def request_stop(self):
        """Makes a blocked :meth:`run_forever` return."""
        self._stop_requested.set()

    def run_forever(self):
        """
        Starts sampling and blocks until Ctrl+C or :meth:`request_stop`.
        """
        try:
            if not self.start():
                return
            while not self._stop_requested.wait(0.5):
                pass
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received (Ctrl+C). Stopping monitor...")
        finally:
            self.shutdown()

    def _publish(self, result: SampleResult):
        self._latest = result
        with self._listeners_lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(result)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed to handle sample result: {e}", exc_info=True)
