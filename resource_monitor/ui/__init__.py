"""
Presentation of sample results for the Resource Monitor.
"""
from resource_monitor.ui.presenter import (
    PLACEHOLDER,
    StatusLabels,
    format_percent,
    format_result,
    format_speed
)
from resource_monitor.ui.ui_console import (
    ConsolePresenter,
    display_error,
    display_info,
    render_status_line
)

__all__ = [
    'PLACEHOLDER',
    'StatusLabels',
    'format_percent',
    'format_result',
    'format_speed',
    'ConsolePresenter',
    'display_error',
    'display_info',
    'render_status_line'
]
