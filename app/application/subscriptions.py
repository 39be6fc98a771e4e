"""
Subscription use cases: CRUD подписок, список с фильтрами и расчёт стоимости за период.

Модуль работает напрямую с ORM (без event sourcing).
"""
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.application.cost_aggregator import overlap_clauses, total_cost
from app.application.subscription_filter import build_filter, parse_user_id
from app.domain.period import CalendarMonth, InvalidArgument, QueryPeriod
from app.domain.subscription import FilterCriteria, Subscription, validate_subscription_fields
from app.infrastructure.db.models import SubscriptionModel

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100
MAX_LIST_LIMIT = 100


class SubscriptionNotFoundError(LookupError):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _get_or_raise(db: Session, sub_id: uuid.UUID) -> SubscriptionModel:
    sub = db.query(SubscriptionModel).filter(SubscriptionModel.id == sub_id).first()
    if not sub:
        raise SubscriptionNotFoundError("subscription not found")
    return sub


# ============================================================================
# CRUD
# ============================================================================


class CreateSubscriptionUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        service_name: str,
        price: int,
        user_id: str | uuid.UUID,
        start_period: CalendarMonth,
        end_period: CalendarMonth | None = None,
    ) -> SubscriptionModel:
        name = validate_subscription_fields(service_name, price, start_period, end_period)
        owner = parse_user_id(user_id)

        now = _utcnow()
        sub = SubscriptionModel(
            id=uuid.uuid4(),
            service_name=name,
            price=price,
            user_id=owner,
            start_period=start_period.to_date(),
            end_period=end_period.to_date() if end_period else None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(sub)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to create subscription user_id=%s service=%s", owner, name)
            raise

        logger.info("Subscription created id=%s user_id=%s service=%s", sub.id, owner, name)
        return sub


class GetSubscriptionUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, sub_id: uuid.UUID) -> SubscriptionModel:
        try:
            return _get_or_raise(self.db, sub_id)
        except SubscriptionNotFoundError:
            logger.error("Failed to get subscription id=%s: not found", sub_id)
            raise


class UpdateSubscriptionUseCase:
    """Partial update; keys absent from changes keep their value, end_period=None clears the end."""

    def __init__(self, db: Session):
        self.db = db

    def execute(self, sub_id: uuid.UUID, **changes) -> SubscriptionModel:
        sub = _get_or_raise(self.db, sub_id)

        service_name = changes.get("service_name", sub.service_name)
        price = changes.get("price", sub.price)
        start_period = changes.get("start_period") or CalendarMonth.from_date(sub.start_period)
        if "end_period" in changes:
            end_period = changes["end_period"]
        else:
            end_period = CalendarMonth.from_date(sub.end_period) if sub.end_period else None

        sub.service_name = validate_subscription_fields(service_name, price, start_period, end_period)
        sub.price = price
        sub.start_period = start_period.to_date()
        sub.end_period = end_period.to_date() if end_period else None
        sub.updated_at = _utcnow()

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to update subscription id=%s", sub_id)
            raise

        logger.info("Subscription updated id=%s", sub_id)
        return sub


class DeleteSubscriptionUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, sub_id: uuid.UUID) -> None:
        sub = _get_or_raise(self.db, sub_id)
        self.db.delete(sub)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to delete subscription id=%s", sub_id)
            raise
        logger.info("Subscription deleted id=%s", sub_id)


# ============================================================================
# Queries
# ============================================================================


class ListSubscriptionsUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        criteria: FilterCriteria,
        limit: int = DEFAULT_LIST_LIMIT,
        offset: int = 0,
    ) -> list[SubscriptionModel]:
        if not 1 <= limit <= MAX_LIST_LIMIT:
            raise InvalidArgument("limit", limit, f"must be in 1..{MAX_LIST_LIMIT}")
        if offset < 0:
            raise InvalidArgument("offset", offset, "must be >= 0")

        sub_filter = build_filter(criteria)
        q = sub_filter.apply(self.db.query(SubscriptionModel), SubscriptionModel)
        return (
            q.order_by(SubscriptionModel.created_at.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )


class CalculateTotalUseCase:
    """
    Total cost of subscriptions matching criteria over a query period.

    Storage only narrows the candidates (filter + overlap pre-filter); the
    proration itself is computed in-process by cost_aggregator.
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self, criteria: FilterCriteria, period: QueryPeriod) -> int:
        sub_filter = build_filter(criteria)
        if period.is_reversed:
            logger.info("Total calculated: reversed period %s..%s, total=0", period.start, period.end)
            return 0

        q = sub_filter.apply(self.db.query(SubscriptionModel), SubscriptionModel)
        q = q.filter(*overlap_clauses(period, SubscriptionModel))
        try:
            rows = q.all()
        except Exception:
            logger.exception("Failed to calculate total for %s..%s", period.start, period.end)
            raise

        total = total_cost((Subscription.from_model(r) for r in rows), period)
        logger.info(
            "Total calculated: %d subscription(s), %s..%s, total=%d",
            len(rows), period.start, period.end, total,
        )
        return total
