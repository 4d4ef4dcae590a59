"""
Defines the possible states of the sampling scheduler.
"""
from enum import Enum, auto

class SchedulerState(Enum):
    """
    Enumeration of scheduler states.

    States:
        IDLE: No timer is armed and no samples are taken
        RUNNING: The periodic timer is armed and a cycle runs every interval
    """
    IDLE = auto()
    RUNNING = auto()
