"""Review aggregate (CQRS): a product review captured from a voice call.

One voice call about an order produces one review per distinct product on
that order. The transcript arrives first, when the call ends; the summary
and structured analysis arrive later and are the same for every review of
the call.

A review's identity is derived from ``(call_id, product_id)``, so storing
the same pair twice always lands on the same row.
"""

import json
import math
import uuid
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Text

from roastery.domain import roastery
from roastery.review.events import ReviewAnalyzed, ReviewRecorded, TranscriptRefreshed

REVIEW_NAMESPACE = uuid.UUID("5f3e8a52-7c1d-4b8e-9a61-2d4f0c9b7e13")


def review_identity(call_id, product_id) -> str:
    """Stable review id for a (call, product) pair."""
    return str(uuid.uuid5(REVIEW_NAMESPACE, f"{call_id}:{product_id}"))


@roastery.aggregate
class Review:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    call_id = Text(required=True)
    transcript = Text()
    summary = Text()
    analysis = Text()  # JSON object produced by the voice agent's post-call analysis
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def record(cls, call_id, order_id, product_id, transcript=None):
        now = datetime.now(UTC)
        review = cls(
            id=review_identity(call_id, product_id),
            call_id=call_id,
            order_id=order_id,
            product_id=product_id,
            transcript=transcript,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewRecorded(
                review_id=str(review.id),
                call_id=call_id,
                order_id=str(order_id),
                product_id=str(product_id),
                recorded_at=now,
            )
        )
        return review

    def refresh_transcript(self, transcript):
        now = datetime.now(UTC)
        self.transcript = transcript
        self.updated_at = now
        self.raise_(TranscriptRefreshed(review_id=str(self.id), call_id=self.call_id, refreshed_at=now))

    def attach_analysis(self, summary, analysis):
        """Overwrite summary and analysis with the latest post-call results."""
        now = datetime.now(UTC)
        self.summary = summary
        self.analysis = json.dumps(analysis) if analysis is not None else None
        self.updated_at = now

        rating = self.overall_rating
        self.raise_(
            ReviewAnalyzed(
                review_id=str(self.id),
                call_id=self.call_id,
                product_id=str(self.product_id),
                overall_rating=float(rating) if rating is not None else None,
                analyzed_at=now,
            )
        )

    @property
    def analysis_data(self) -> dict:
        """The stored analysis, with Infinity and NaN read back as None."""
        if not self.analysis:
            return {}
        data = json.loads(self.analysis, parse_constant=lambda _: None)
        return data if isinstance(data, dict) else {}

    @property
    def overall_rating(self):
        """The numeric overall rating, or None when absent or not a number.

        A rating of zero counts as absent, as do booleans and non-finite
        floats such as infinity or NaN.
        """
        value = self.analysis_data.get("overall_rating")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
            return None
        if not math.isfinite(value):
            return None
        return value
