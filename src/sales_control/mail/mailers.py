"""
Mail Transports
SMTP delivery of rendered messages, plus a log-only transport for development.
"""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from sales_control.core.exceptions import MailDeliveryException
from sales_control.core.logging import get_logger
from sales_control.domain.interfaces.infrastructure import IMailer, MailMessage

logger = get_logger(__name__)


class SmtpMailer(IMailer):
    """Sends each message over its own SMTP connection."""

    def __init__(
        self,
        host: str,
        port: int,
        from_address: str,
        from_name: str | None = None,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.from_address = from_address
        self.from_name = from_name
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_mime(self, message: MailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.from_name or "", self.from_address))
        msg["To"] = formataddr((message.to_name or "", message.to))
        msg["Subject"] = message.subject
        for name, value in message.headers.items():
            msg[name] = value

        if message.text_body:
            msg.attach(MIMEText(message.text_body, "plain", "utf-8"))
        msg.attach(MIMEText(message.html_body, "html", "utf-8"))
        return msg

    def send(self, message: MailMessage) -> None:
        mime = self.build_mime(message)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryException(
                f"Failed to send e-mail to {message.to}: {e}",
                recipient=message.to,
            ) from e

        logger.debug(f"E-mail sent to {message.to}: {message.subject}")


class LogMailer(IMailer):
    """Writes messages to the log instead of delivering them."""

    def send(self, message: MailMessage) -> None:
        logger.info(
            f"E-mail to {message.to}: {message.subject}",
            extra={"mail_to": message.to, "mail_subject": message.subject},
        )
