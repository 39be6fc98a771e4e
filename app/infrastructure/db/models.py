"""
SQLAlchemy ORM models
"""
import uuid
from datetime import date as date_type, datetime
from sqlalchemy import String, Integer, TIMESTAMP, Date, Uuid, CheckConstraint, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.db.session import Base


class SubscriptionModel(Base):
    """Paid subscription of a user; periods are stored as the 1st day of the month"""
    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_subscriptions_price_non_negative"),
        CheckConstraint(
            "end_period IS NULL OR end_period >= start_period",
            name="ck_subscriptions_period_order",
        ),
        Index("ix_subscriptions_user_service", "user_id", "service_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    start_period: Mapped[date_type] = mapped_column(Date, nullable=False)
    end_period: Mapped[date_type | None] = mapped_column(Date, nullable=True)  # NULL = ещё активна

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
