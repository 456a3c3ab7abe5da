from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from sowcycle.application.services.breeding_manager import BreedingRecordManager
from sowcycle.application.use_cases.breeding import (
    get_breeding_record,
    list_breeding_records,
    record_mating,
)
from sowcycle.config.settings import Settings
from sowcycle.infrastructure.auth.context import AuditContext
from sowcycle.interfaces.http.deps import (
    get_app_settings,
    get_audit_context,
    get_breeding_manager,
    get_uow,
)
from sowcycle.interfaces.http.schemas.breeding_records import (
    BirthOutcomeInput,
    BreedingRecordCreate,
    BreedingRecordDetailResponse,
    BreedingRecordListResponse,
    BreedingRecordResponse,
    BreedingRecordSummaryResponse,
    DeleteBreedingRecordResponse,
)
from sowcycle.interfaces.http.schemas.piglets import PigletResponse

router = APIRouter(prefix="/breeding-records", tags=["breeding"])
pigs_router = APIRouter(prefix="/pigs", tags=["breeding"])


@router.post("", response_model=BreedingRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_breeding_record_endpoint(
    payload: BreedingRecordCreate,
    context: AuditContext = Depends(get_audit_context),
    manager: BreedingRecordManager = Depends(get_breeding_manager),
):
    expected_birth_date = payload.expected_birth_date or manager.calculator.expected_birth_date(
        payload.mating_date
    )
    input_data = record_mating.RecordMatingInput(
        sow_id=payload.sow_id,
        boar_id=payload.boar_id,
        mating_date=payload.mating_date,
        expected_birth_date=expected_birth_date,
        notes=payload.notes,
        immediate_notify_date=payload.immediate_notify_date,
        alert_message=payload.alert_message,
    )
    return await manager.record_mating(context.farm_id, input_data, actor_user_id=context.user_id)


@router.get("", response_model=BreedingRecordListResponse)
async def list_breeding_records_endpoint(
    limit: int = 50,
    offset: int = 0,
    context: AuditContext = Depends(get_audit_context),
    manager: BreedingRecordManager = Depends(get_breeding_manager),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    result = await list_breeding_records.execute(
        uow,
        context.farm_id,
        manager.calculator,
        grace_days=settings.overdue_grace_days,
        limit=limit,
        offset=offset,
    )
    items = [
        BreedingRecordSummaryResponse(
            **BreedingRecordResponse.model_validate(item.record).model_dump(),
            state=item.state,
            is_overdue=item.is_overdue,
            piglet_count=item.piglet_count,
        )
        for item in result.items
    ]
    return {"items": items, "total": result.total, "limit": limit, "offset": offset}


@router.get("/{record_id}", response_model=BreedingRecordDetailResponse)
async def get_breeding_record_endpoint(
    record_id: UUID,
    context: AuditContext = Depends(get_audit_context),
    uow=Depends(get_uow),
):
    detail = await get_breeding_record.execute(uow, context.farm_id, record_id)
    return BreedingRecordDetailResponse(
        **BreedingRecordResponse.model_validate(detail.record).model_dump(),
        state=detail.record.state.value,
        piglets=[PigletResponse.model_validate(p) for p in detail.piglets],
    )


@router.post("/{record_id}/birth-outcome", response_model=BreedingRecordResponse)
async def record_birth_outcome_endpoint(
    record_id: UUID,
    payload: BirthOutcomeInput,
    context: AuditContext = Depends(get_audit_context),
    manager: BreedingRecordManager = Depends(get_breeding_manager),
):
    return await manager.record_birth_outcome(
        context.farm_id,
        record_id,
        payload.actual_birth_date,
        payload.number_of_piglets,
        notes=payload.notes,
        actor_user_id=context.user_id,
    )


@router.delete("/{record_id}", response_model=DeleteBreedingRecordResponse)
async def delete_breeding_record_endpoint(
    record_id: UUID,
    context: AuditContext = Depends(get_audit_context),
    manager: BreedingRecordManager = Depends(get_breeding_manager),
):
    return await manager.delete_record(context.farm_id, record_id, actor_user_id=context.user_id)


@pigs_router.get("/{sow_id}/breeding-history", response_model=list[BreedingRecordResponse])
async def get_breeding_history_endpoint(
    sow_id: str,
    context: AuditContext = Depends(get_audit_context),
    manager: BreedingRecordManager = Depends(get_breeding_manager),
):
    return await manager.get_breeding_history(context.farm_id, sow_id)
