"""
Period cost aggregation.

Each subscription is billed price * (number of whole months in which its
active period overlaps the query period). Months are inclusive on both ends;
an open-ended subscription (no end_period) is clipped only to the query end.
"""
from typing import Iterable

from sqlalchemy import or_

from app.domain.period import QueryPeriod, months_between
from app.domain.subscription import Subscription


def overlap_months(sub: Subscription, period: QueryPeriod) -> int:
    """Whole months of sub inside period; 0 when they do not intersect."""
    if period.is_reversed:
        return 0
    # fast reject
    if sub.start_period > period.end:
        return 0
    if sub.end_period is not None and sub.end_period < period.start:
        return 0

    effective_start = max(sub.start_period, period.start)
    effective_end = min(sub.end_period or period.end, period.end)
    if effective_end < effective_start:
        return 0
    return months_between(effective_start, effective_end) + 1


def subscription_cost(sub: Subscription, period: QueryPeriod) -> int:
    return sub.price * overlap_months(sub, period)


def total_cost(subscriptions: Iterable[Subscription], period: QueryPeriod) -> int:
    """
    Sum of prorated costs over period.

    Integer arithmetic only, so the result does not depend on the order of
    subscriptions. A reversed period yields 0.
    """
    if period.is_reversed:
        return 0
    return sum(subscription_cost(s, period) for s in subscriptions)


def overlap_clauses(period: QueryPeriod, model) -> list:
    """
    SQL pre-filter equivalent to the fast-reject rule in overlap_months.

    Only narrows the rows fetched from storage; the in-process calculation
    stays authoritative.
    """
    return [
        model.start_period <= period.end.to_date(),
        or_(model.end_period.is_(None), model.end_period >= period.start.to_date()),
    ]
