"""
Core scheduling and service components for the Resource Monitor.
"""
from resource_monitor.core.scheduler_state import SchedulerState
from resource_monitor.core.scheduler import Scheduler, DEFAULT_INTERVAL_SEC
from resource_monitor.core.monitor import ResourceMonitor

__all__ = [
    'SchedulerState',
    'Scheduler',
    'DEFAULT_INTERVAL_SEC',
    'ResourceMonitor'
]
