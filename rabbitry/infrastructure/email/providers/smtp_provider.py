from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage as MIMEMessage
from email.utils import formataddr

from rabbitry.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


def build_mime(message: EmailMessage) -> MIMEMessage:
    """Plain-text body with an optional HTML alternative; Bcc stays off the headers."""
    mime = MIMEMessage()
    mime["Subject"] = message.subject
    if message.from_email:
        mime["From"] = formataddr((message.from_name or "", message.from_email))
    mime["To"] = ", ".join(message.to)
    mime.set_content(message.text or "")
    if message.html:
        mime.add_alternative(message.html, subtype="html")
    return mime


class SMTPEmailService(EmailService):
    def __init__(
        self,
        *,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _deliver(self, mime: MIMEMessage, sender: str | None, recipients: list[str]) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls(context=ssl.create_default_context())
            if self.username and self.password:
                server.login(self.username, self.password)
            # Raises SMTPRecipientsRefused only when every recipient is refused
            refused = server.send_message(mime, from_addr=sender, to_addrs=recipients)
        if refused:
            logger.warning("SMTP server refused %d recipients: %s", len(refused), ", ".join(refused))

    async def send(self, message: EmailMessage) -> None:
        recipients = [*message.to, *(message.bcc or [])]
        if not recipients:
            raise ValueError("Email has no recipients")
        await asyncio.to_thread(self._deliver, build_mime(message), message.from_email, recipients)
