"""
SMTP email sender for alert notifications.

Handles:
  - SMTP connection with optional STARTTLS
  - Delivery of MIME messages built by the email plugin
  - Credential management (env vars > config file)
"""
import os
import ssl
import smtplib
import logging
from email.message import Message

logger = logging.getLogger("alertsvc.notifications.email_sender")


class EmailSender:
    """
    SMTP email sender.

    Credential resolution order:
      1. Environment variables: ALERTSVC_SMTP_USER, ALERTSVC_SMTP_PASS
      2. Config file: config.email.smtp_username, config.email.smtp_password
    Authentication is skipped when no credentials resolve.
    """

    def __init__(self, config: dict):
        email_config = config.get("email", {})
        self.smtp_host = email_config.get("smtp_host", "localhost")
        self.smtp_port = email_config.get("smtp_port", 25)
        self.use_tls = email_config.get("use_tls", False)
        self.timeout = email_config.get("timeout_seconds", 30)
        self.from_address = email_config.get("from_address", "")

        self.username = os.environ.get(
            "ALERTSVC_SMTP_USER",
            email_config.get("smtp_username", ""),
        )
        self.password = os.environ.get(
            "ALERTSVC_SMTP_PASS",
            email_config.get("smtp_password", ""),
        )

    def is_configured(self) -> bool:
        """Check that an SMTP host and sender address are present."""
        return bool(self.smtp_host and self.from_address)

    def send_message(self, msg: Message, recipients: list = None) -> bool:
        """Send a constructed MIME message. Recipients default to its To/Cc headers."""
        if not self.is_configured():
            logger.warning("Email not configured - skipping send")
            return False
        if recipients is not None and not recipients:
            logger.warning(f"No recipients for {msg['Subject']!r} - skipping send")
            return False

        try:
            context = ssl.create_default_context()
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                server.ehlo()
                if self.use_tls:
                    server.starttls(context=context)
                    server.ehlo()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg, to_addrs=recipients)
            logger.info(f"Email sent to {recipients or msg['To']}: {msg['Subject']}")
            return True
        except smtplib.SMTPAuthenticationError:
            logger.error("SMTP authentication failed. Check username/password.")
            return False
        except smtplib.SMTPRecipientsRefused:
            logger.error(f"Recipients refused: {recipients or msg['To']}")
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email send failed: {e}")
            return False

    def test_connection(self) -> dict:
        """Test SMTP connectivity without sending an email."""
        try:
            context = ssl.create_default_context()
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=10) as server:
                server.ehlo()
                if self.use_tls:
                    server.starttls(context=context)
                    server.ehlo()
                if self.username and self.password:
                    server.login(self.username, self.password)
                return {"status": "ok", "message": "SMTP connection successful",
                        "server_response": str(server.noop())}
        except smtplib.SMTPAuthenticationError as e:
            return {"status": "error", "message": f"Authentication failed: {e}"}
        except smtplib.SMTPConnectError as e:
            return {"status": "error", "message": f"Connection failed: {e}"}
        except (smtplib.SMTPException, OSError) as e:
            return {"status": "error", "message": str(e)}
