from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from sowcycle.application.use_cases.alerts import list_alerts
from sowcycle.infrastructure.auth.context import AuditContext
from sowcycle.interfaces.http.deps import get_audit_context, get_uow
from sowcycle.interfaces.http.schemas.alerts import AlertListResponse

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=AlertListResponse)
async def list_alerts_endpoint(
    status: str | None = None,
    alert_type: str | None = None,
    pig_id: str | None = None,
    due_on: date | None = None,
    context: AuditContext = Depends(get_audit_context),
    uow=Depends(get_uow),
):
    items = await list_alerts.execute(
        uow,
        context.farm_id,
        status=status,
        alert_type=alert_type,
        pig_id=pig_id,
        due_on=due_on,
    )
    return {"items": items, "total": len(items)}
