"""
Alert management for user-visible notices.

The engine never raises for a refused action; it records an alert and
hands it to every channel. A UI host registers a CallbackChannel to
show the notice (e.g. in a modal).
"""

import logging
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass
from enum import Enum
from datetime import datetime, timezone


class AlertLevel(Enum):
    """Alert severity levels"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Alert:
    """Alert data structure"""
    level: AlertLevel
    message: str
    context: Dict[str, Any]
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert alert to dictionary"""
        return {
            "level": self.level.value,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }


class LogChannel:
    """Sends alerts to Python logging"""

    def send(self, alert: Alert) -> None:
        logger = logging.getLogger('midpoint.alerts')
        msg = f"[{alert.level.value.upper()}] {alert.message}"

        if alert.level == AlertLevel.ERROR:
            logger.error(msg)
        elif alert.level == AlertLevel.WARNING:
            logger.warning(msg)
        else:
            logger.info(msg)


class CallbackChannel:
    """Hands alerts to a host-supplied callable"""

    def __init__(self, callback: Callable[[Alert], None]):
        self.callback = callback

    def send(self, alert: Alert) -> None:
        self.callback(alert)


class AlertManager:
    """
    Collects notices raised by the controller.

    Channels:
    - Logging (always enabled)
    - Any callbacks added with add_channel
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        alerting_config = config.get('alerting', {}) if isinstance(config, dict) else {}
        self.config = alerting_config
        self.enabled = self.config.get('enabled', True)
        self.alert_log: List[Alert] = []
        self.channels: List[Any] = [LogChannel()]

    def add_channel(self, channel: Any) -> None:
        self.channels.append(channel)

    def alert(self, level: AlertLevel, message: str, context: Optional[Dict[str, Any]] = None) -> Optional[Alert]:
        """Send an alert through all channels"""
        if not self.enabled:
            return None

        alert = Alert(
            level=level,
            message=message,
            context=context or {},
            timestamp=datetime.now(timezone.utc)
        )

        self.alert_log.append(alert)

        for channel in self.channels:
            try:
                channel.send(alert)
            except Exception as e:
                logging.error(f"Failed to send alert via {channel.__class__.__name__}: {e}")
        return alert

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> Optional[Alert]:
        return self.alert(AlertLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> Optional[Alert]:
        return self.alert(AlertLevel.WARNING, message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> Optional[Alert]:
        return self.alert(AlertLevel.ERROR, message, context)

    def get_alert_count(self, level: Optional[AlertLevel] = None) -> int:
        """Get count of alerts, optionally filtered by level"""
        if level is None:
            return len(self.alert_log)
        return sum(1 for a in self.alert_log if a.level == level)

    def latest(self) -> Optional[Alert]:
        return self.alert_log[-1] if self.alert_log else None

    def clear(self) -> None:
        self.alert_log = []
