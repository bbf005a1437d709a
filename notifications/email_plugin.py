"""
Email action plugin: turns a PluginMessage into a MIME message.

Recognized properties (all strings):
  to                 - required, comma separated recipients
  cc                 - always copied
  cc.acknowledged    - copied only on ACKNOWLEDGED alerts
  cc.resolved        - copied only on RESOLVED alerts
  description        - free text shown at the top of the body
  template.hawkular.url - console URL linked from the body
  from / from-name   - sender override (defaults come from config.email)

Unknown properties are ignored. Bodies are rendered from the Jinja2 templates
next to this module, one plain text and one HTML part.
"""
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from models.alerts import PluginMessage
from models.enums import Status
from models.exceptions import ValidationError
from utils.formatters import format_timestamp, split_addresses

logger = logging.getLogger("alertsvc.notifications.email_plugin")

TEMPLATE_DIR = Path(__file__).parent / "templates"

STATUS_CC_KEYS = {
    Status.ACKNOWLEDGED: "cc.acknowledged",
    Status.RESOLVED: "cc.resolved",
}


class EmailPlugin:
    plugin_name = "email"

    def __init__(self, config: dict = None, template_dir=None):
        email_config = (config or {}).get("email", {})
        self.default_from = email_config.get("from_address") or "noreply@alertsvc.local"
        self.default_from_name = email_config.get("from_name", "Alerts")
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["timestamp"] = format_timestamp

    def recipients(self, message: PluginMessage):
        """Return (to, cc) address lists for the message's alert status."""
        props = message.properties or {}
        to = split_addresses(props.get("to"))
        if not to:
            raise ValidationError(
                f"Email action {message.action.action_id} has no 'to' property")

        cc = split_addresses(props.get("cc"))
        status_key = STATUS_CC_KEYS.get(message.action.alert.status)
        if status_key:
            cc.extend(a for a in split_addresses(props.get(status_key)) if a not in cc)
        return to, cc

    def subject(self, message: PluginMessage) -> str:
        alert = message.action.alert
        return f"[{alert.status.value}] {alert.severity.value} alert for {alert.trigger_name}"

    def context(self, message: PluginMessage) -> dict:
        alert = message.action.alert
        props = message.properties or {}
        return {
            "alert": alert,
            "action": message.action,
            "status": alert.status.value,
            "severity": alert.severity.value,
            "trigger_name": alert.trigger_name,
            "description": props.get("description"),
            "url": props.get("template.hawkular.url"),
            "dampening": alert.dampening.describe() if alert.dampening else None,
            "eval_sets": _sets_view(alert.eval_sets),
            "resolved_eval_sets": _sets_view(alert.resolved_eval_sets),
        }

    def render(self, message: PluginMessage):
        """Render (plain, html) bodies."""
        ctx = self.context(message)
        plain = self.env.get_template("alert_email.txt").render(**ctx)
        html = self.env.get_template("alert_email.html").render(**ctx)
        return plain, html

    def create_mime_message(self, message: PluginMessage) -> MIMEMultipart:
        alert = message.action.alert
        props = message.properties or {}
        to, cc = self.recipients(message)
        plain, html = self.render(message)

        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((props.get("from-name", self.default_from_name),
                                  props.get("from", self.default_from)))
        msg["To"] = ", ".join(to)
        if cc:
            msg["Cc"] = ", ".join(cc)
        msg["Subject"] = self.subject(message)
        msg["Date"] = formatdate(localtime=True)
        msg["X-Alert-Id"] = alert.alert_id
        msg["X-Alert-Status"] = alert.status.value
        msg["X-Alert-Tenant"] = alert.tenant_id or ""
        msg.attach(MIMEText(plain, "plain", "utf-8"))
        msg.attach(MIMEText(html, "html", "utf-8"))

        logger.debug(f"Built email for {alert.alert_id} [{alert.status.value}] to {to} cc {cc}")
        return msg


def _sets_view(sets):
    """Flatten evaluation sets into template-friendly rows, ordered by condition id."""
    if not sets:
        return []
    view = []
    for s in sets:
        rows = []
        for ev in sorted(s, key=lambda e: e.condition_id or ""):
            rows.append({
                "condition": ev.condition.describe(),
                "type": ev.type.value,
                "data_id": ev.data.data_id,
                "value": ev.display_value(),
                "match": ev.match,
                "data_timestamp": ev.data_timestamp,
            })
        view.append(rows)
    return view
