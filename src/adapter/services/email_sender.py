import logging

import httpx

from src.app.services.email_sender import EmailDeliveryError, IEmailSender, OutboundEmail

logger = logging.getLogger(__name__)


class HttpEmailSender(IEmailSender):
    """Sends mail through a Resend-compatible HTTP API"""

    def __init__(self, api_url: str, api_key: str, sender: str, timeout: float = 20):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout

    async def send(self, message: OutboundEmail) -> None:
        if not self.api_key or not self.sender:
            logger.warning("Email service not configured. Cannot send email.")
            raise EmailDeliveryError("Email service not configured")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": self.sender,
                        "to": [message.recipient],
                        "subject": message.subject,
                        "text": message.body,
                    },
                )
            except (httpx.RequestError, httpx.InvalidURL) as exc:
                logger.error(f"Error while sending email: {exc}")
                raise EmailDeliveryError("Email service communication error") from exc

        if response.status_code not in (200, 201, 202):
            logger.error(f"Failed to send email: HTTP {response.status_code}")
            raise EmailDeliveryError("Email could not be sent")

        logger.info("Email sent to %s", message.recipient)
