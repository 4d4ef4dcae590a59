"""
Fixed-cadence driver for the sample engine.
"""
import math
import threading
import time
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from resource_monitor.monitoring import SampleEngine, SampleResult

from resource_monitor.core.scheduler_state import SchedulerState
from resource_monitor.utils import get_logger

logger = get_logger(__name__)

DEFAULT_INTERVAL_SEC = 2.0


class Scheduler:
    """
    Runs one sample/publish cycle immediately on ``start()`` and then once
    per interval on a periodic timer thread until ``stop()``.

    Cycles never overlap: the immediate cycle runs on the caller's thread
    before the timer thread exists, and all later cycles run on that single
    timer thread. A cycle that fires after ``stop()`` was requested does not
    sample or publish.
    """

    def __init__(self,
                 engine: 'SampleEngine',
                 publish: Callable[['SampleResult'], None],
                 interval: float = DEFAULT_INTERVAL_SEC):
        """
        :param engine: Engine sampled once per cycle
        :param publish: Callback receiving every result
        :param interval: Period of the timer in seconds
        :raises: ValueError if the interval is not a finite positive number
        """
        if not math.isfinite(interval) or interval <= 0:
            raise ValueError(f"Scheduler interval must be a finite positive number, got {interval}")

        self.engine = engine
        self.publish = publish
        self.interval = interval

        self._state = SchedulerState.IDLE
        self._state_lock = threading.Lock()
        self._running = threading.Event()
        self._stop_event = threading.Event()
        self._timer_thread: Optional[threading.Thread] = None
        self._cycle_count = 0

    @property
    def state(self) -> SchedulerState:
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    @property
    def cycle_count(self) -> int:
        """Number of cycles that published a result."""
        return self._cycle_count

    def start(self) -> bool:
        """
        Transitions IDLE -> RUNNING: publishes one sample now and arms the timer.

        :return: True if the scheduler was started, False if it was already running
        :rtype: bool
        """
        with self._state_lock:
            if self._state == SchedulerState.RUNNING:
                logger.warning("Scheduler start requested but already running.")
                return False
            logger.info(f"Scheduler state transition: {self._state.name} -> {SchedulerState.RUNNING.name}")
            self._state = SchedulerState.RUNNING
            self._stop_event = threading.Event()
            self._running.set()

        self._run_cycle()

        with self._state_lock:
            if not self._running.is_set():
                logger.debug("Scheduler stopped during the initial cycle. Timer not armed.")
                return True
            self._timer_thread = threading.Thread(
                target=self._timer_loop,
                args=(self._stop_event,),
                name="SampleTimerThread",
                daemon=True
            )
            self._timer_thread.start()
        logger.debug(f"Sample timer armed with a {self.interval} second period.")
        return True

    def stop(self, timeout: Optional[float] = 5.0):
        """
        Transitions RUNNING -> IDLE: cancels the timer. No further samples are taken.

        :param timeout: Seconds to wait for the timer thread to exit
        :type timeout: Optional[float]
        """
        with self._state_lock:
            if self._state == SchedulerState.IDLE:
                logger.debug("Scheduler stop requested but already idle.")
                return
            logger.info(f"Scheduler state transition: {self._state.name} -> {SchedulerState.IDLE.name}")
            self._state = SchedulerState.IDLE
            self._running.clear()
            self._stop_event.set()
            timer_thread = self._timer_thread
            self._timer_thread = None

        if timer_thread and timer_thread is not threading.current_thread():
            timer_thread.join(timeout=timeout)
            if timer_thread.is_alive():
                logger.warning("Sample timer thread did not exit within timeout.")

    def _timer_loop(self, stop_event: threading.Event):
        """Periodic timer body (runs in the timer thread)."""
        next_run = time.monotonic() + self.interval
        while not stop_event.wait(max(0.0, next_run - time.monotonic())):
            self._run_cycle()
            next_run += self.interval
            now = time.monotonic()
            if next_run < now:
                # Missed firings are dropped, not replayed.
                next_run = now + self.interval
        logger.debug("Sample timer thread exiting.")

    def _run_cycle(self):
        if not self._running.is_set():
            return

        result = self.engine.sample()

        if not self._running.is_set():
            logger.debug("Scheduler stopped while sampling. Dropping result.")
            return

        try:
            self.publish(result)
        except Exception as e:
            logger.error(f"Error publishing sample result: {e}", exc_info=True)
            return
        self._cycle_count += 1
