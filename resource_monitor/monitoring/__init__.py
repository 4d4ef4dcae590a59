"""
Monitoring components for the Resource Monitor.
"""
from resource_monitor.monitoring.cpu_sampler import CpuSampler
from resource_monitor.monitoring.errors import SampleError, SourceUnreadable, MalformedData, DegenerateInterval
from resource_monitor.monitoring.host_info import get_host_info
from resource_monitor.monitoring.mem_sampler import MemSampler
from resource_monitor.monitoring.net_sampler import NetSampler
from resource_monitor.monitoring.sample_engine import SampleEngine
from resource_monitor.monitoring.snapshots import CounterSnapshot, NetSnapshot, NetRates, SampleResult

__all__ = [
    'CpuSampler',
    'MemSampler',
    'NetSampler',
    'SampleEngine',
    'CounterSnapshot',
    'NetSnapshot',
    'NetRates',
    'SampleResult',
    'SampleError',
    'SourceUnreadable',
    'MalformedData',
    'DegenerateInterval',
    'get_host_info'
]
