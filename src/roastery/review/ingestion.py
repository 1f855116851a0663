"""Review ingestion: commands and handler for voice-call lifecycle events.

The voice service reports two things about each call:

- ``call_ended`` carries the transcript and the order the call was about.
  One review per distinct product on that order is created, or has its
  transcript refreshed when the event is delivered again.
- ``call_analyzed`` carries the summary and structured analysis, which are
  written to every review of the call.

Events that cannot be attributed to an order or to existing reviews are
logged and dropped without an error.
"""

import json
import uuid

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, TransactionError
from protean.fields import Text
from protean.utils.globals import current_domain
from sqlalchemy.exc import IntegrityError

from roastery.domain import roastery
from roastery.order.order import Order
from roastery.review.review import Review, review_identity

logger = structlog.get_logger(__name__)


@roastery.command(part_of="Review")
class RecordCallTranscript:
    call_id = Text(required=True)
    order_id = Text()  # From the call's metadata; may be missing or garbage
    transcript = Text()


@roastery.command(part_of="Review")
class AttachCallAnalysis:
    call_id = Text(required=True)
    summary = Text()
    analysis = Text()  # JSON object


def _parse_order_id(raw):
    if not raw:
        return None
    try:
        return str(uuid.UUID(str(raw)))
    except ValueError:
        return None


@roastery.command_handler(part_of=Review)
class ReviewIngestionHandler:
    @handle(RecordCallTranscript)
    def record_call_transcript(self, command):
        log = logger.bind(call_id=command.call_id, order_id=command.order_id)

        order_id = _parse_order_id(command.order_id)
        if order_id is None:
            log.warning("Call ended without a usable order id, dropping event")
            return []

        try:
            order = current_domain.repository_for(Order).get(order_id)
        except ObjectNotFoundError:
            log.warning("Call ended for an unknown order, dropping event")
            return []

        repo = current_domain.repository_for(Review)
        review_ids = []
        for product_id in order.product_ids:
            try:
                review = repo.get(review_identity(command.call_id, product_id))
                review.refresh_transcript(command.transcript)
                log.debug("Transcript refreshed", product_id=product_id)
            except ObjectNotFoundError:
                review = Review.record(
                    call_id=command.call_id,
                    order_id=order_id,
                    product_id=product_id,
                    transcript=command.transcript,
                )
                log.debug("Review recorded", product_id=product_id)
            repo.add(review)
            review_ids.append(str(review.id))

        log.info("Call transcript stored", review_count=len(review_ids))
        return review_ids

    @handle(AttachCallAnalysis)
    def attach_call_analysis(self, command):
        log = logger.bind(call_id=command.call_id)

        repo = current_domain.repository_for(Review)
        reviews = repo.find_by_call_id(command.call_id)
        if not reviews:
            log.warning("Call analysis arrived for a call with no reviews, dropping event")
            return 0

        analysis = json.loads(command.analysis) if command.analysis else None
        for review in reviews:
            review.attach_analysis(summary=command.summary, analysis=analysis)
            repo.add(review)

        log.info("Call analysis attached", review_count=len(reviews))
        return len(reviews)


def _is_duplicate_insert(exc) -> bool:
    """True when a commit failed because another writer inserted the same row first."""
    return isinstance(exc, IntegrityError) or isinstance(exc.__cause__, IntegrityError)


def record_call_transcript(call_id, order_id, transcript):
    """Store a call transcript against the order's products.

    Two deliveries of the same ``call_ended`` event can race: both miss the
    review, both insert it, and the second commit hits the primary key. That
    delivery is processed again, which now finds the row and refreshes it.
    """
    try:
        return current_domain.process(
            RecordCallTranscript(call_id=call_id, order_id=order_id, transcript=transcript),
            asynchronous=False,
        )
    except (IntegrityError, TransactionError) as exc:
        if not _is_duplicate_insert(exc):
            raise
        logger.info("Review already inserted by a concurrent delivery, retrying as update", call_id=call_id)
        return current_domain.process(
            RecordCallTranscript(call_id=call_id, order_id=order_id, transcript=transcript),
            asynchronous=False,
        )
