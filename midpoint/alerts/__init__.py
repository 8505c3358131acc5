"""
User-visible notices raised by the engine.
"""

from midpoint.alerts.alert_manager import (
    AlertLevel,
    Alert,
    AlertManager,
    LogChannel,
    CallbackChannel,
)

__all__ = [
    "AlertLevel",
    "Alert",
    "AlertManager",
    "LogChannel",
    "CallbackChannel",
]
