"""Feedback aggregate: a shopper's rating and comment on a product."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from fable.domain import fable
from fable.feedback.events import FeedbackSubmitted

MIN_RATING = 1
MAX_RATING = 5


@fable.aggregate
class Feedback:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(required=True, max_length=100)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text(required=True)
    created_at = DateTime()

    @classmethod
    def submit(cls, product_id, customer_id, customer_name, rating, comment):
        comment = (comment or "").strip()
        if not comment:
            raise ValidationError({"comment": ["Comment cannot be blank"]})

        now = datetime.now(UTC)
        feedback = cls(
            product_id=product_id,
            customer_id=customer_id,
            customer_name=customer_name,
            rating=rating,
            comment=comment,
            created_at=now,
        )
        feedback.raise_(
            FeedbackSubmitted(
                feedback_id=str(feedback.id),
                product_id=str(product_id),
                customer_id=str(customer_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return feedback
