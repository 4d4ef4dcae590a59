"""Fake /proc counter sources written to a temporary directory."""

import os
import tempfile

NET_DEV_HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed\n"
)


def stat_text(user=0, nice=0, system=0, idle=0, iowait=0, irq=0, softirq=0, *extra):
    fields = [user, nice, system, idle, iowait, irq, softirq, *extra]
    return "cpu  " + " ".join(str(v) for v in fields) + "\ncpu0 1 2 3 4 5 6 7\nintr 12345\n"


def meminfo_text(total=16000000, available=4000000):
    return (
        f"MemTotal:       {total} kB\n"
        "MemFree:         1000000 kB\n"
        f"MemAvailable:   {available} kB\n"
        "Buffers:          200000 kB\n"
        "HugePages_Total:       0\n"
    )


def net_line(name, recv, sent, sticky=False):
    rx = f"{recv} 10 0 0 0 0 0 0"
    tx = f"{sent} 20 0 0 0 0 0 0"
    sep = ":" if sticky else ": "
    return f"{name:>6}{sep}{rx} {tx}\n"


def net_dev_text(*lines):
    return NET_DEV_HEADER + "".join(lines)


class FakeProc:
    """Owns a temporary directory holding stat, meminfo and net_dev files."""

    def __init__(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.stat = os.path.join(self._tmp.name, "stat")
        self.meminfo = os.path.join(self._tmp.name, "meminfo")
        self.net_dev = os.path.join(self._tmp.name, "net_dev")

    def write(self, path, text):
        with open(path, "w", encoding="ascii") as f:
            f.write(text)

    def remove(self, path):
        if os.path.exists(path):
            os.remove(path)

    def cleanup(self):
        self._tmp.cleanup()


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def advance(self, seconds):
        self.now += seconds

    def __call__(self):
        return self.now
