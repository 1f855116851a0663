"""Retell implementation of the voice review client."""

import os

import requests
import structlog

from roastery.voice.port import VoiceConfigurationError, VoiceReviewClient, VoiceServiceError, WebCall

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.retellai.com/v2/create-web-call"
DEFAULT_TIMEOUT_SECONDS = 10.0


class RetellClient(VoiceReviewClient):
    """Starts web calls through Retell's ``create-web-call`` endpoint.

    Settings default to the ``RETELL_API_KEY``, ``RETELL_AGENT_ID``,
    ``RETELL_API_URL`` and ``RETELL_TIMEOUT_SECONDS`` environment variables.
    Credentials are checked when a call is requested, not at construction,
    so the application starts without them.
    """

    def __init__(self, api_key=None, agent_id=None, api_url=None, timeout=None):
        self.api_key = api_key if api_key is not None else os.environ.get("RETELL_API_KEY")
        self.agent_id = agent_id if agent_id is not None else os.environ.get("RETELL_AGENT_ID")
        self.api_url = api_url or os.environ.get("RETELL_API_URL", DEFAULT_API_URL)
        self.timeout = timeout or float(os.environ.get("RETELL_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))

    def create_web_call(self, order_id, customer_name, product_names, order_date) -> WebCall:
        if not self.api_key:
            raise VoiceConfigurationError("RETELL_API_KEY environment variable is not set")
        if not self.agent_id:
            raise VoiceConfigurationError("RETELL_AGENT_ID environment variable is not set")

        payload = {
            "agent_id": self.agent_id,
            "metadata": {"order_id": str(order_id)},
            "retell_llm_dynamic_variables": {
                "customer_name": customer_name,
                "product_names": ", ".join(product_names),
                "order_date": order_date,
            },
        }

        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Voice service unreachable", order_id=str(order_id), error=str(exc))
            raise VoiceServiceError(f"Failed to create web call: {exc}") from exc

        if not response.ok:
            logger.error(
                "Voice service rejected web call",
                order_id=str(order_id),
                status=response.status_code,
                body=response.text,
            )
            raise VoiceServiceError(
                f"Failed to create web call: {response.status_code} {response.text}",
                status=response.status_code,
                body=response.text,
            )

        result = response.json()
        logger.info("Web call created", order_id=str(order_id), call_id=result["call_id"])
        return WebCall(call_id=result["call_id"], access_token=result["access_token"])
