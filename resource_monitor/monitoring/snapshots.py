"""
Data types exchanged between the samplers, the engine and its consumers.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CounterSnapshot:
    """Cumulative CPU jiffies since boot"""
    total: int
    idle: int  # idle + iowait


@dataclass(frozen=True)
class NetSnapshot:
    """Aggregated interface byte counters at a monotonic clock reading"""
    recv_bytes: int
    sent_bytes: int
    timestamp: float  # seconds


@dataclass(frozen=True)
class NetRates:
    """Throughput in bytes per second"""
    down: float
    up: float


@dataclass(frozen=True)
class SampleResult:
    """
    One sampling cycle. A field is None when its metric could not be
    derived this cycle; fields are independent of each other.
    """
    cpu_percent: Optional[float] = None
    ram_percent: Optional[float] = None
    down_rate: Optional[float] = None
    up_rate: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))
