"""
FastAPI dependencies (DB session, path parsing)
"""
import uuid

from fastapi import HTTPException, status

from app.infrastructure.db.session import get_db as _get_db


# Re-export get_db для удобства
get_db = _get_db


def parse_subscription_id(sub_id: str) -> uuid.UUID:
    """
    Path parameter -> UUID

    Raises:
        HTTPException(400): если id не является UUID
    """
    try:
        return uuid.UUID(sub_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="invalid subscription id",
        ) from None
