"""Voice review client port (abstract interface).

Defines the contract for starting a browser voice call in which the AI
agent interviews a customer about an order. Adapters: ``RetellClient``
talks to Retell's API, ``FakeVoiceClient`` is used in tests and offline
development.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class WebCall:
    """A web-call session the browser SDK can join."""

    call_id: str
    access_token: str


class VoiceServiceError(Exception):
    """The voice service refused or failed to start a call."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body


class VoiceConfigurationError(VoiceServiceError):
    """Credentials or agent settings for the voice service are missing."""


class VoiceReviewClient(ABC):
    @abstractmethod
    def create_web_call(
        self,
        order_id: str,
        customer_name: str,
        product_names: list[str],
        order_date: str,
    ) -> WebCall:
        """Request a web-call session for a review interview about ``order_id``."""
        ...
