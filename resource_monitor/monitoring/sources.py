"""
Access to kernel-exposed counter sources.
"""
from resource_monitor.monitoring.errors import SourceUnreadable

PROC_STAT = '/proc/stat'
PROC_MEMINFO = '/proc/meminfo'
PROC_NET_DEV = '/proc/net/dev'


def read_source(path: str) -> str:
    """
    Reads a whole counter source as text.

    :param path: Path of the counter source
    :type path: str
    :return: File contents
    :rtype: str
    :raises SourceUnreadable: if the file is missing, inaccessible or not text
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadable(f"Cannot read counter source {path}: {e}") from e
