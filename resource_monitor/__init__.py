"""
Resource Monitor

Samples host CPU, memory and network counters from /proc on a fixed cadence
and formats them as short strings for a desktop status area.

Main components:
- SampleEngine: Derives percentages and rates from the kernel counters
- Scheduler: Runs the engine on a periodic timer
- ResourceMonitor: Owns engine and scheduler, publishes results to listeners
- ConfigManager: Manages monitor configuration
"""


from .version import __version__, __app_name__


from .monitoring import SampleEngine, SampleResult
from .core import Scheduler, SchedulerState, ResourceMonitor
from .config import ConfigManager

__all__ = [
    '__version__',
    '__app_name__',

    'SampleEngine',
    'SampleResult',

    'Scheduler',
    'SchedulerState',
    'ResourceMonitor',

    'ConfigManager'
]
