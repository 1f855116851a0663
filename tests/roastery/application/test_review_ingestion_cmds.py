"""Application tests for review ingestion from voice-call events."""

import json
from unittest.mock import patch

import pytest
from protean import current_domain
from protean.exceptions import TransactionError
from roastery.catalogue.product import Product
from roastery.order.placement import PlaceOrder
from roastery.review.ingestion import AttachCallAnalysis, RecordCallTranscript, record_call_transcript
from roastery.review.review import Review, review_identity
from sqlalchemy.exc import IntegrityError


def _product(name, price):
    product = Product.add(name=name, category="equipment", price=price)
    current_domain.repository_for(Product).add(product)
    return str(product.id)


@pytest.fixture()
def order():
    """An order for two of product A and one of product B."""
    a = _product("Kettle", 10.0)
    b = _product("Filter", 5.0)
    order_id = current_domain.process(
        PlaceOrder(
            customer_name="Ada Lovelace",
            customer_email="ada@example.com",
            items=json.dumps(
                [
                    {"product_id": a, "quantity": 2, "unit_price": 10.0},
                    {"product_id": b, "quantity": 1, "unit_price": 5.0},
                ]
            ),
            total_amount=25.0,
        ),
        asynchronous=False,
    )
    return {"id": order_id, "products": [a, b]}


def _call_ended(call_id, order_id, transcript="Agent: How was your coffee?"):
    return current_domain.process(
        RecordCallTranscript(call_id=call_id, order_id=order_id, transcript=transcript),
        asynchronous=False,
    )


def _call_analyzed(call_id, summary="Happy customer", analysis=None):
    return current_domain.process(
        AttachCallAnalysis(
            call_id=call_id,
            summary=summary,
            analysis=json.dumps(analysis if analysis is not None else {"overall_rating": 5}),
        ),
        asynchronous=False,
    )


def _reviews():
    return current_domain.repository_for(Review)._dao.query.all().items


class TestCallEnded:
    def test_creates_one_review_per_product(self, order):
        _call_ended("call-001", order["id"])
        reviews = _reviews()
        assert len(reviews) == 2
        assert {str(r.product_id) for r in reviews} == set(order["products"])
        assert all(r.summary is None and r.analysis is None for r in reviews)

    def test_replay_keeps_one_review_per_product_with_latest_transcript(self, order):
        _call_ended("call-001", order["id"], transcript="first")
        _call_ended("call-001", order["id"], transcript="second")
        reviews = _reviews()
        assert len(reviews) == 2
        assert {r.transcript for r in reviews} == {"second"}

    def test_reviews_keyed_by_call_and_product(self, order):
        _call_ended("call-001", order["id"])
        a, b = order["products"]
        repo = current_domain.repository_for(Review)
        assert str(repo.get(review_identity("call-001", a)).product_id) == a
        assert str(repo.get(review_identity("call-001", b)).product_id) == b

    def test_separate_calls_create_separate_reviews(self, order):
        _call_ended("call-001", order["id"])
        _call_ended("call-002", order["id"])
        assert len(_reviews()) == 4

    def test_repeated_product_lines_create_one_review(self):
        a = _product("Kettle", 10.0)
        order_id = current_domain.process(
            PlaceOrder(
                customer_name="Ada",
                customer_email="ada@example.com",
                items=json.dumps(
                    [
                        {"product_id": a, "quantity": 1, "unit_price": 10.0},
                        {"product_id": a, "quantity": 2, "unit_price": 10.0},
                    ]
                ),
            ),
            asynchronous=False,
        )
        _call_ended("call-001", order_id)
        assert len(_reviews()) == 1

    def test_missing_order_id_is_dropped(self, order):
        assert _call_ended("call-001", None) == []
        assert _reviews() == []

    def test_malformed_order_id_is_dropped(self, order):
        assert _call_ended("call-001", "not-a-uuid") == []
        assert _reviews() == []

    def test_unknown_order_is_dropped(self, order):
        assert _call_ended("call-001", "00000000-0000-0000-0000-000000000000") == []
        assert _reviews() == []

    def test_overlong_order_id_is_dropped(self, order):
        assert _call_ended("call-001", "x" * 300) == []
        assert _reviews() == []

    def test_long_call_id_is_stored(self, order):
        call_id = "c" * 300
        _call_ended(call_id, order["id"])
        assert {r.call_id for r in _reviews()} == {call_id}


class TestCallAnalyzed:
    def test_unknown_call_is_a_no_op(self, order):
        assert _call_analyzed("call-unknown") == 0
        assert _reviews() == []

    def test_updates_every_review_of_the_call(self, order):
        _call_ended("call-001", order["id"])
        analysis = {"overall_rating": 4, "would_recommend": True, "taste_notes": "chocolate"}
        assert _call_analyzed("call-001", summary="Liked it", analysis=analysis) == 2

        reviews = _reviews()
        assert {r.summary for r in reviews} == {"Liked it"}
        assert all(r.analysis_data == analysis for r in reviews)

    def test_leaves_other_calls_alone(self, order):
        _call_ended("call-001", order["id"])
        _call_ended("call-002", order["id"])
        _call_analyzed("call-001")

        untouched = current_domain.repository_for(Review).find_by_call_id("call-002")
        assert all(r.summary is None for r in untouched)

    def test_replay_overwrites(self, order):
        _call_ended("call-001", order["id"])
        _call_analyzed("call-001", summary="first", analysis={"overall_rating": 2})
        _call_analyzed("call-001", summary="second", analysis={"overall_rating": 5})
        reviews = _reviews()
        assert {r.summary for r in reviews} == {"second"}
        assert {r.overall_rating for r in reviews} == {5}

    def test_transcript_survives_analysis(self, order):
        _call_ended("call-001", order["id"], transcript="the transcript")
        _call_analyzed("call-001")
        assert {r.transcript for r in _reviews()} == {"the transcript"}


def _duplicate_key_failure():
    try:
        raise IntegrityError("INSERT INTO review", {}, Exception("UNIQUE constraint failed: review.id"))
    except IntegrityError as exc:
        raise TransactionError(f"Unit of Work commit failed: {exc}") from exc


class TestConcurrentCallEnded:
    def test_duplicate_insert_is_retried_as_update(self, order):
        _call_ended("call-001", order["id"], transcript="first")

        domain = current_domain._get_current_object()
        real_process = domain.process
        calls = []

        def process(command, asynchronous=True):
            calls.append(command)
            if len(calls) == 1:
                _duplicate_key_failure()
            return real_process(command, asynchronous=asynchronous)

        with patch.object(domain, "process", side_effect=process):
            review_ids = record_call_transcript("call-001", order["id"], "second")

        assert len(calls) == 2
        assert len(review_ids) == 2
        reviews = _reviews()
        assert len(reviews) == 2
        assert {r.transcript for r in reviews} == {"second"}

    def test_other_failures_are_not_retried(self, order):
        domain = current_domain._get_current_object()
        with patch.object(domain, "process", side_effect=TransactionError("connection reset")) as process:
            with pytest.raises(TransactionError):
                record_call_transcript("call-001", order["id"], "transcript")
        assert process.call_count == 1
