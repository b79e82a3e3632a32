"""Selectors for the monitor kernel (read side)."""

from monitor_kernel.selectors.base import BaseSelector
from monitor_kernel.selectors.event_selector import EventSelector
from monitor_kernel.selectors.monitor_selector import MonitorSelector
from monitor_kernel.selectors.underfunded_selector import UnderfundedSelector

__all__ = [
    "BaseSelector",
    "EventSelector",
    "MonitorSelector",
    "UnderfundedSelector",
]
