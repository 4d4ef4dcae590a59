"""
Utility functions for the Resource Monitor.
"""
from resource_monitor.utils.logger import get_logger, setup_logger

__all__ = [
    'get_logger',
    'setup_logger'
]
