"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Float, Identifier, Text

from roastery.domain import roastery


@roastery.event(part_of="Review")
class ReviewRecorded:
    """A voice call mentioned a product of an order for the first time."""

    __version__ = 1

    review_id = Identifier(required=True)
    call_id = Text(required=True)
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    recorded_at = DateTime(required=True)


@roastery.event(part_of="Review")
class TranscriptRefreshed:
    __version__ = 1

    review_id = Identifier(required=True)
    call_id = Text(required=True)
    refreshed_at = DateTime(required=True)


@roastery.event(part_of="Review")
class ReviewAnalyzed:
    """Post-call analysis arrived for the call this review came from."""

    __version__ = 1

    review_id = Identifier(required=True)
    call_id = Text(required=True)
    product_id = Identifier(required=True)
    overall_rating = Float()
    analyzed_at = DateTime(required=True)
