"""Notification channels for alert lifecycle actions."""
import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from models.alerts import PluginMessage

logger = logging.getLogger("alertsvc.alerts.channels")


@runtime_checkable
class AlertChannel(Protocol):
    def send(self, message: PluginMessage) -> bool: ...


class ConsoleChannel:
    """Print lifecycle actions to the terminal with rich formatting."""

    def send(self, message):
        from rich.console import Console
        console = Console()

        status_styles = {
            "OPEN": "bold white on red",
            "ACKNOWLEDGED": "bold yellow",
            "RESOLVED": "bold green",
        }
        alert = message.action.alert
        style = status_styles.get(alert.status.value, "")
        console.print(f"[{style}] [{alert.status.value}] [/] {alert.severity.value} "
                      f"{alert.trigger_name} ({alert.alert_id}) -> {message.action.action_id}")
        return True


class FileChannel:
    """Append lifecycle actions to a JSON lines log file."""

    def __init__(self, log_path="data/actions.jsonl"):
        self.log_path = log_path

    def send(self, message):
        action = message.action
        entry = action.to_dict()
        entry["triggerId"] = action.alert.trigger_id
        entry["severity"] = action.alert.severity.value
        try:
            Path(self.log_path).parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a") as f:
                f.write(json.dumps(entry) + "\n")
            return True
        except OSError as e:
            logger.warning(f"Failed to write action to file: {e}")
            return False


class EmailChannel:
    """Render email actions with the email plugin and deliver them over SMTP.

    Messages for other action plugins are ignored.
    """

    def __init__(self, config: dict, plugin=None, sender=None):
        from notifications.email_plugin import EmailPlugin
        from notifications.email_sender import EmailSender
        self.plugin = plugin or EmailPlugin(config)
        self.sender = sender or EmailSender(config)
        self.enabled = config.get("email", {}).get("enabled", True)

    def send(self, message):
        if message.action.action_plugin != self.plugin.plugin_name:
            return False
        if not self.enabled or not self.sender.is_configured():
            logger.debug("EmailChannel: disabled or not configured")
            return False

        msg = self.plugin.create_mime_message(message)
        to, cc = self.plugin.recipients(message)
        return self.sender.send_message(msg, to + cc)
