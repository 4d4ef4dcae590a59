"""
Host hardware summary shown alongside the live counters.
"""
import json
import platform
import socket
from typing import Any, Dict, List

import psutil

from resource_monitor.monitoring.net_sampler import LOOPBACK_INTERFACE
from resource_monitor.utils import get_logger

logger = get_logger(__name__)


def _get_interface_names() -> List[str]:
    """
    Lists the network interfaces that contribute to the throughput totals.

    :return: Sorted interface names, loopback excluded
    :rtype: List[str]
    """
    return sorted(name for name in psutil.net_if_addrs() if name != LOOPBACK_INTERFACE)


def get_host_info() -> Dict[str, Any]:
    """
    Gathers basic host information using psutil, platform and socket.

    Each item is collected independently; an item that cannot be determined
    keeps its fallback value and a warning is logged.

    :return: Dictionary containing host details
    :rtype: Dict[str, Any]
    """
    logger.debug("Collecting host information...")
    host_info: Dict[str, Any] = {
        "hostname": "N/A",
        "os_info": "N/A",
        "cpu_count": 0,
        "total_ram": 0,
        "interfaces": [],
    }

    try:
        host_info["hostname"] = socket.gethostname()
    except OSError as e:
        logger.warning(f"Could not determine hostname: {e}")

    try:
        host_info["os_info"] = platform.platform()
    except Exception as e:
        logger.warning(f"Could not determine OS details: {e}")

    try:
        host_info["cpu_count"] = psutil.cpu_count(logical=True) or 0
    except Exception as e:
        logger.warning(f"Could not determine CPU count: {e}")

    try:
        host_info["total_ram"] = psutil.virtual_memory().total
    except Exception as e:
        logger.warning(f"Could not determine total RAM: {e}")

    try:
        host_info["interfaces"] = _get_interface_names()
    except Exception as e:
        logger.warning(f"Could not list network interfaces: {e}")

    logger.debug(f"Host Info: {json.dumps(host_info, indent=2)}")
    return host_info
