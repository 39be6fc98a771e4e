"""
Subscription API endpoints
"""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.deps import get_db, parse_subscription_id
from app.application.subscriptions import (
    CreateSubscriptionUseCase, GetSubscriptionUseCase, UpdateSubscriptionUseCase,
    DeleteSubscriptionUseCase, ListSubscriptionsUseCase, CalculateTotalUseCase,
    DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT,
)
from app.domain.period import CalendarMonth, QueryPeriod
from app.domain.subscription import FilterCriteria
from app.infrastructure.db.models import SubscriptionModel


router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])


# === Request/Response models ===

class CreateSubscriptionRequest(BaseModel):
    service_name: str = Field(examples=["Yandex Plus"])
    price: int = Field(ge=0, examples=[400])
    user_id: uuid.UUID
    start_date: str = Field(examples=["07-2025"])  # MM-YYYY
    end_date: str | None = Field(default=None, examples=["12-2025"])


class UpdateSubscriptionRequest(BaseModel):
    service_name: str | None = None
    price: int | None = Field(default=None, ge=0)
    start_date: str | None = None
    end_date: str | None = None  # явный null снимает дату окончания


class SubscriptionResponse(BaseModel):
    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: str
    end_date: str | None = None
    created_at: datetime
    updated_at: datetime


class CalculateTotalResponse(BaseModel):
    total_cost: int


class MessageResponse(BaseModel):
    message: str


# === Helpers ===

def _to_response(sub: SubscriptionModel) -> SubscriptionResponse:
    return SubscriptionResponse(
        id=sub.id,
        service_name=sub.service_name,
        price=sub.price,
        user_id=sub.user_id,
        start_date=CalendarMonth.from_date(sub.start_period).format(),
        end_date=CalendarMonth.from_date(sub.end_period).format() if sub.end_period else None,
        created_at=sub.created_at,
        updated_at=sub.updated_at,
    )


# === Endpoints ===

@router.post("", response_model=SubscriptionResponse, status_code=201)
def create_subscription(req: CreateSubscriptionRequest, db: Session = Depends(get_db)):
    """Создать новую подписку"""
    start = CalendarMonth.parse(req.start_date, "start_date")
    end = CalendarMonth.parse(req.end_date, "end_date") if req.end_date is not None else None

    sub = CreateSubscriptionUseCase(db).execute(
        service_name=req.service_name,
        price=req.price,
        user_id=req.user_id,
        start_period=start,
        end_period=end,
    )
    return _to_response(sub)


@router.get("", response_model=list[SubscriptionResponse])
def list_subscriptions(
    db: Session = Depends(get_db),
    user_id: str | None = None,
    service_name: str | None = None,
    limit: int = Query(default=DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT),
    offset: int = Query(default=0, ge=0),
):
    """Список подписок с фильтрацией"""
    subs = ListSubscriptionsUseCase(db).execute(
        FilterCriteria(user_id=user_id, service_name=service_name),
        limit=limit,
        offset=offset,
    )
    return [_to_response(s) for s in subs]


@router.get("/calculate", response_model=CalculateTotalResponse)
def calculate_total(
    start_period: str,
    end_period: str,
    db: Session = Depends(get_db),
    user_id: str | None = None,
    service_name: str | None = None,
):
    """Суммарная стоимость подписок за период (MM-YYYY..MM-YYYY)"""
    criteria = FilterCriteria(user_id=user_id, service_name=service_name)
    period = QueryPeriod.parse(start_period, end_period)

    total = CalculateTotalUseCase(db).execute(criteria, period)
    return CalculateTotalResponse(total_cost=total)


@router.get("/{sub_id}", response_model=SubscriptionResponse)
def get_subscription(sub_id: str, db: Session = Depends(get_db)):
    """Получить подписку по ID"""
    sub = GetSubscriptionUseCase(db).execute(parse_subscription_id(sub_id))
    return _to_response(sub)


@router.put("/{sub_id}", response_model=SubscriptionResponse)
def update_subscription(
    sub_id: str,
    req: UpdateSubscriptionRequest,
    db: Session = Depends(get_db),
):
    """Обновить подписку (только переданные поля)"""
    sid = parse_subscription_id(sub_id)
    sent = req.model_dump(exclude_unset=True)

    changes = {}
    if sent.get("service_name") is not None:
        changes["service_name"] = sent["service_name"]
    if sent.get("price") is not None:
        changes["price"] = sent["price"]
    if sent.get("start_date") is not None:
        changes["start_period"] = CalendarMonth.parse(sent["start_date"], "start_date")
    if "end_date" in sent:
        raw_end = sent["end_date"]
        changes["end_period"] = CalendarMonth.parse(raw_end, "end_date") if raw_end is not None else None

    sub = UpdateSubscriptionUseCase(db).execute(sid, **changes)
    return _to_response(sub)


@router.delete("/{sub_id}", response_model=MessageResponse)
def delete_subscription(sub_id: str, db: Session = Depends(get_db)):
    """Удалить подписку"""
    DeleteSubscriptionUseCase(db).execute(parse_subscription_id(sub_id))
    return MessageResponse(message="subscription deleted")
