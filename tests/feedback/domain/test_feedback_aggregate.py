"""Tests for the Feedback aggregate."""

import pytest
from protean.exceptions import ValidationError

from fable.feedback.events import FeedbackSubmitted
from fable.feedback.feedback import Feedback


def _submit(**overrides):
    data = {
        "product_id": "prod-001",
        "customer_id": "cust-001",
        "customer_name": "Asha Rao",
        "rating": 4,
        "comment": "  Great fit, soft fabric.  ",
    }
    data.update(overrides)
    return Feedback.submit(**data)


class TestSubmitFeedback:
    def test_comment_is_trimmed(self):
        feedback = _submit()
        assert feedback.comment == "Great fit, soft fabric."
        assert feedback.created_at is not None

    def test_raises_event(self):
        feedback = _submit()
        event = feedback._events[-1]
        assert isinstance(event, FeedbackSubmitted)
        assert event.rating == 4

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _submit(rating=rating)

    def test_blank_comment(self):
        with pytest.raises(ValidationError) as exc:
            _submit(comment="   ")
        assert "comment" in exc.value.messages
