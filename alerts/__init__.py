"""Alert lifecycle, registry and notification channels."""
from alerts.lifecycle import new_alert, alert_from_trigger, acknowledge, resolve
from alerts.service import AlertsService
from alerts.channels import ConsoleChannel, FileChannel, EmailChannel
