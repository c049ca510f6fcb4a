"""Read-side queries for product feedback."""

from protean.utils.globals import current_domain

from fable.feedback.feedback import Feedback


def _newest_first(query):
    return query.order_by("-created_at").limit(None).all().items


def feedback_for_product(product_id) -> list[Feedback]:
    dao = current_domain.repository_for(Feedback)._dao
    return _newest_first(dao.query.filter(product_id=str(product_id)))


def all_feedback() -> list[Feedback]:
    return _newest_first(current_domain.repository_for(Feedback)._dao.query)


def average_rating(entries) -> float | None:
    if not entries:
        return None
    return round(sum(f.rating for f in entries) / len(entries), 1)
