"""Submitting and moderating product feedback."""

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from fable.catalogue.product import Product
from fable.domain import fable
from fable.feedback.feedback import Feedback
from fable.identity.customer import Customer
from fable.utils.logging import get_logger

logger = get_logger(__name__)


@fable.command(part_of="Feedback")
class SubmitFeedback:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)


@fable.command(part_of="Feedback")
class DeleteFeedback:
    feedback_id = Identifier(required=True)


@fable.command_handler(part_of=Feedback)
class FeedbackHandler:
    @handle(SubmitFeedback)
    def submit_feedback(self, command):
        # Both lookups raise ObjectNotFoundError for unknown ids
        product = current_domain.repository_for(Product).get(command.product_id)
        customer = current_domain.repository_for(Customer).get(command.customer_id)

        feedback = Feedback.submit(
            product_id=product.id,
            customer_id=customer.id,
            customer_name=customer.name,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(Feedback).add(feedback)
        return str(feedback.id)

    @handle(DeleteFeedback)
    def delete_feedback(self, command):
        repo = current_domain.repository_for(Feedback)
        feedback = repo.get(command.feedback_id)
        repo._dao.delete(feedback)
        logger.info("feedback_deleted", feedback_id=str(command.feedback_id))
