"""Tests for the Review aggregate."""

import json

import pytest
from roastery.review.events import ReviewAnalyzed, ReviewRecorded, TranscriptRefreshed
from roastery.review.review import Review, review_identity


def _review(call_id="call-001", product_id="prod-a"):
    return Review.record(call_id=call_id, order_id="order-001", product_id=product_id, transcript="Agent: Hi!")


class TestReviewIdentity:
    def test_identity_is_stable_for_a_pair(self):
        assert review_identity("call-001", "prod-a") == review_identity("call-001", "prod-a")

    def test_identity_differs_per_product(self):
        assert review_identity("call-001", "prod-a") != review_identity("call-001", "prod-b")

    def test_identity_differs_per_call(self):
        assert review_identity("call-001", "prod-a") != review_identity("call-002", "prod-a")

    def test_recorded_review_uses_derived_identity(self):
        review = _review()
        assert str(review.id) == review_identity("call-001", "prod-a")


class TestRecord:
    def test_record_sets_fields(self):
        review = _review()
        assert review.call_id == "call-001"
        assert str(review.order_id) == "order-001"
        assert str(review.product_id) == "prod-a"
        assert review.transcript == "Agent: Hi!"
        assert review.summary is None
        assert review.analysis is None
        assert review.created_at is not None

    def test_record_raises_event(self):
        review = _review()
        event = review._events[0]
        assert isinstance(event, ReviewRecorded)
        assert event.review_id == str(review.id)
        assert event.call_id == "call-001"


class TestTranscriptRefresh:
    def test_refresh_replaces_transcript(self):
        review = _review()
        review._events.clear()
        review.refresh_transcript("Agent: Hi again!")
        assert review.transcript == "Agent: Hi again!"
        assert isinstance(review._events[0], TranscriptRefreshed)


class TestAttachAnalysis:
    def test_attach_stores_summary_and_analysis(self):
        review = _review()
        review.attach_analysis(summary="Loved it", analysis={"overall_rating": 5, "would_recommend": True})
        assert review.summary == "Loved it"
        assert json.loads(review.analysis) == {"overall_rating": 5, "would_recommend": True}
        assert review.analysis_data["would_recommend"] is True

    def test_attach_overwrites_previous_analysis(self):
        review = _review()
        review.attach_analysis(summary="First", analysis={"overall_rating": 2})
        review.attach_analysis(summary="Second", analysis={"overall_rating": 4})
        assert review.summary == "Second"
        assert review.overall_rating == 4

    def test_attach_raises_event_with_rating(self):
        review = _review()
        review._events.clear()
        review.attach_analysis(summary="Fine", analysis={"overall_rating": 3})
        event = review._events[0]
        assert isinstance(event, ReviewAnalyzed)
        assert event.overall_rating == 3.0

    def test_attach_without_analysis(self):
        review = _review()
        review.attach_analysis(summary="No data", analysis=None)
        assert review.analysis is None
        assert review.analysis_data == {}


class TestOverallRating:
    def _rated(self, value):
        review = _review()
        review.attach_analysis(summary=None, analysis={"overall_rating": value})
        return review

    def test_numeric_rating(self):
        assert self._rated(4.5).overall_rating == 4.5

    def test_missing_rating(self):
        review = _review()
        assert review.overall_rating is None

    def test_zero_counts_as_unrated(self):
        assert self._rated(0).overall_rating is None

    def test_string_counts_as_unrated(self):
        assert self._rated("5").overall_rating is None

    def test_boolean_counts_as_unrated(self):
        assert self._rated(True).overall_rating is None

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_counts_as_unrated(self, value):
        assert self._rated(value).overall_rating is None

    def test_non_finite_values_read_back_as_none(self):
        review = self._rated(float("inf"))
        assert review.analysis_data == {"overall_rating": None}
