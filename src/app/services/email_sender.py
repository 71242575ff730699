from abc import ABC, abstractmethod
from dataclasses import dataclass


class EmailDeliveryError(Exception):
    """Raised when a message could not be handed to the mail provider"""


@dataclass(frozen=True)
class OutboundEmail:
    recipient: str
    subject: str
    body: str


class IEmailSender(ABC):
    """Outbound email port - delivery protocol is the adapter's concern"""

    @abstractmethod
    async def send(self, message: OutboundEmail) -> None:
        """Send a message or raise EmailDeliveryError"""
        pass
