"""In-memory voice client for tests and offline development."""

import uuid

from roastery.voice.port import VoiceReviewClient, VoiceServiceError, WebCall


class FakeVoiceClient(VoiceReviewClient):
    """Hands out made-up call ids and remembers every request.

    Set ``fail_with`` to an exception to make the next calls raise it.
    """

    def __init__(self, fail_with: VoiceServiceError | None = None):
        self.calls: list[dict] = []
        self.fail_with = fail_with

    def create_web_call(self, order_id, customer_name, product_names, order_date) -> WebCall:
        if self.fail_with is not None:
            raise self.fail_with

        self.calls.append(
            {
                "order_id": str(order_id),
                "customer_name": customer_name,
                "product_names": list(product_names),
                "order_date": order_date,
            }
        )
        return WebCall(call_id=f"call_{uuid.uuid4().hex}", access_token=f"token_{uuid.uuid4().hex}")
