from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from sowcycle.application.services.breeding_manager import BreedingRecordManager
from sowcycle.application.use_cases.piglets import register_litter
from sowcycle.infrastructure.auth.context import AuditContext
from sowcycle.interfaces.http.deps import get_audit_context, get_breeding_manager
from sowcycle.interfaces.http.schemas.piglets import (
    PigletResponse,
    PigletUpdate,
    PigletUpdateResponse,
    RegisterLitterRequest,
    RegisterLitterResponse,
)

router = APIRouter(tags=["piglets"])


@router.post("/breeding-records/{record_id}/piglets", response_model=RegisterLitterResponse)
async def register_litter_endpoint(
    record_id: UUID,
    payload: RegisterLitterRequest,
    context: AuditContext = Depends(get_audit_context),
    manager: BreedingRecordManager = Depends(get_breeding_manager),
):
    # Rejected batches come back as success=false with a message, not as an error status
    piglets = [register_litter.PigletInput(**p.model_dump()) for p in payload.piglets]
    result = await manager.register_litter(
        context.farm_id, record_id, piglets, actor_user_id=context.user_id
    )
    return RegisterLitterResponse(
        success=result.success,
        registered_count=result.registered_count,
        data=[PigletResponse.model_validate(p) for p in result.data],
        warnings=result.warnings,
        message=result.message,
    )


@router.patch("/piglets/{piglet_id}", response_model=PigletUpdateResponse)
async def update_piglet_endpoint(
    piglet_id: UUID,
    payload: PigletUpdate,
    context: AuditContext = Depends(get_audit_context),
    manager: BreedingRecordManager = Depends(get_breeding_manager),
):
    result = await manager.update_piglet(
        context.farm_id,
        piglet_id,
        payload.model_dump(exclude_unset=True),
        actor_user_id=context.user_id,
    )
    return PigletUpdateResponse(
        piglet=PigletResponse.model_validate(result.piglet), warnings=result.warnings
    )
