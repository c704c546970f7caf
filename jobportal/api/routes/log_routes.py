"""
Delivery Log Routes

GET /email-logs - Query the delivery audit log
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, Query

from jobportal.api.deps import get_delivery_log_store
from jobportal.core.auth import get_current_client
from jobportal.core.config import Settings, get_settings
from jobportal.services.stores import DeliveryLogStore
from jobportal.schemas.schemas import (
    DeliveryCategory, DeliveryChannel, DeliveryStatus, EmailLogListResponse, EmailLogResponse
)

router = APIRouter(tags=["Delivery Log"])


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Query dates without an offset are taken as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@router.get("/email-logs", response_model=EmailLogListResponse)
def get_email_logs(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    status: Optional[DeliveryStatus] = Query(None),
    type: Optional[DeliveryCategory] = Query(None),
    channel: Optional[DeliveryChannel] = Query(None),
    client: dict = Depends(get_current_client),
    logs: DeliveryLogStore = Depends(get_delivery_log_store),
    settings: Settings = Depends(get_settings)
):
    """
    Delivery attempts, newest first.

    The date range only applies when both startDate and endDate are given.
    """
    entries = logs.query(
        client_id=client["id"] if settings.tenant_scoped_listings else None,
        start=_as_utc(start_date),
        end=_as_utc(end_date),
        status=status.value if status else None,
        category=type.value if type else None,
        channel=channel.value if channel else None,
        limit=settings.email_log_limit,
    )
    return EmailLogListResponse(logs=[EmailLogResponse.model_validate(e) for e in entries])
