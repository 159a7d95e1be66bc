import logging

from sqlalchemy.orm import Session

from app.core.exceptions import QuotaExceededException
from app.models.tenant import SubscriptionPlan, Tenant
from app.repositories.note_repository import NoteRepository

logger = logging.getLogger(__name__)

FREE_PLAN_NOTE_LIMIT = 3


def note_limit_for(plan: SubscriptionPlan) -> int | None:
    """Per-user note limit of a plan, None when unlimited"""
    if plan == SubscriptionPlan.FREE:
        return FREE_PLAN_NOTE_LIMIT
    return None


class QuotaPolicy:
    """
    Per-user note quota keyed to the tenant's subscription.

    Every user of a free tenant gets their own allowance; the pro plan
    has no limit and skips counting altogether.
    """

    def __init__(self, db: Session):
        self.db = db
        self.note_repo = NoteRepository(db)

    def check_note_quota(self, tenant: Tenant, user_id: str) -> None:
        """
        Raise if the user may not create another note.

        Call inside the transaction that will insert the note, after
        locking the tenant row, so the count stays valid until commit.

        Raises:
            QuotaExceededException: If the user is at the free-plan limit
        """
        limit = note_limit_for(tenant.subscription)
        if limit is None:
            return

        count = self.note_repo.count_by_owner(tenant.id, user_id)
        if count >= limit:
            logger.info(
                "Note quota reached for user %s in tenant %s (%d/%d)",
                user_id,
                tenant.slug,
                count,
                limit,
            )
            raise QuotaExceededException(
                f"Free plan is limited to {limit} notes per user. "
                "Upgrade to Pro for unlimited notes."
            )
