"""
Subscription filter builder.

Turns optional FilterCriteria into an ordered list of independent equality
clauses combined with AND. Every clause works both in-process (matches) and
as a bound-parameter SQLAlchemy expression, so the same filter narrows a
storage query and a plain list identically.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Any

from app.domain.period import InvalidArgument
from app.domain.subscription import FilterCriteria

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterClause:
    field: str
    value: Any

    def matches(self, sub) -> bool:
        return getattr(sub, self.field) == self.value

    def to_expression(self, model):
        return getattr(model, self.field) == self.value


@dataclass(frozen=True)
class SubscriptionFilter:
    clauses: tuple[FilterClause, ...] = ()

    def matches(self, sub) -> bool:
        """True when every clause matches (an empty filter matches everything)."""
        return all(clause.matches(sub) for clause in self.clauses)

    def select(self, subscriptions):
        return [s for s in subscriptions if self.matches(s)]

    def apply(self, query, model):
        """Narrow a SQLAlchemy query: one .filter() per clause."""
        for clause in self.clauses:
            query = query.filter(clause.to_expression(model))
        return query


def parse_user_id(raw: str | uuid.UUID) -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw).strip())
    except ValueError:
        raise InvalidArgument("user_id", raw, "expected UUID") from None


def build_filter(criteria: FilterCriteria) -> SubscriptionFilter:
    """
    Build a conjunctive filter from criteria.

    Absent criteria add no clause. A user_id that does not parse as UUID
    raises InvalidArgument; no partial filter is returned.
    """
    clauses: list[FilterClause] = []
    if criteria.user_id is not None:
        clauses.append(FilterClause("user_id", parse_user_id(criteria.user_id)))
    if criteria.service_name is not None:
        clauses.append(FilterClause("service_name", criteria.service_name))

    logger.debug("Subscription filter: %s", [c.field for c in clauses])
    return SubscriptionFilter(tuple(clauses))
