"""Voice review client factory.

Provides get_voice_client() / set_voice_client() to swap implementations:
- RetellClient, the default, configured from the environment
- FakeVoiceClient for development and testing
"""

from roastery.voice.fake_adapter import FakeVoiceClient
from roastery.voice.port import VoiceConfigurationError, VoiceReviewClient, VoiceServiceError, WebCall
from roastery.voice.retell_adapter import RetellClient

_current_client: VoiceReviewClient | None = None


def get_voice_client() -> VoiceReviewClient:
    """Return the active voice client, building a RetellClient on first use."""
    global _current_client
    if _current_client is None:
        _current_client = RetellClient()
    return _current_client


def set_voice_client(client: VoiceReviewClient) -> None:
    """Override the active voice client (useful for tests)."""
    global _current_client
    _current_client = client


def reset_voice_client() -> None:
    global _current_client
    _current_client = None


__all__ = [
    "FakeVoiceClient",
    "RetellClient",
    "VoiceConfigurationError",
    "VoiceReviewClient",
    "VoiceServiceError",
    "WebCall",
    "get_voice_client",
    "reset_voice_client",
    "set_voice_client",
]
