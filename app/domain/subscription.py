"""
Subscription domain values.

Subscription is a read-only snapshot of a stored row; the cost aggregator and
the filter builder work on it instead of ORM objects so they stay independent
of the storage engine.
"""
import uuid
from dataclasses import dataclass

from app.domain.period import CalendarMonth, InvalidArgument


@dataclass(frozen=True)
class Subscription:
    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_period: CalendarMonth
    end_period: CalendarMonth | None = None

    @classmethod
    def from_model(cls, row) -> "Subscription":
        """Build from a SubscriptionModel (or anything with the same attributes)."""
        return cls(
            id=row.id,
            service_name=row.service_name,
            price=row.price,
            user_id=row.user_id,
            start_period=CalendarMonth.from_date(row.start_period),
            end_period=CalendarMonth.from_date(row.end_period) if row.end_period else None,
        )


@dataclass(frozen=True)
class FilterCriteria:
    """Optional query filters; None means "no constraint"."""
    user_id: str | uuid.UUID | None = None
    service_name: str | None = None


def validate_subscription_fields(
    service_name: str,
    price: int,
    start_period: CalendarMonth,
    end_period: CalendarMonth | None,
) -> str:
    """
    Check subscription invariants, return the normalized service name.

    Raises:
        InvalidArgument: empty name, negative price, end before start
    """
    name = (service_name or "").strip()
    if not name:
        raise InvalidArgument("service_name", service_name, "must not be empty")
    if isinstance(price, bool) or not isinstance(price, int) or price < 0:
        raise InvalidArgument("price", price, "must be a non-negative integer")
    if end_period is not None and end_period < start_period:
        raise InvalidArgument("end_date", end_period.format(), "must not be before start_date")
    return name
