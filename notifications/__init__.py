"""Notification rendering and delivery."""
from notifications.email_plugin import EmailPlugin
from notifications.email_sender import EmailSender
