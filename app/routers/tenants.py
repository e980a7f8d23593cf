from typing import List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.dependencies.auth import require_tenant
from app.routers.accounts import build_account_router
from app.schemas.tenancy import TenantApprovedProperty
from app.services import workflow
from app.services.auth import Role

router = build_account_router(Role.tenant)


@router.get("/approved_properties", response_model=List[TenantApprovedProperty])
async def approved_properties(tenant_id: int = Depends(require_tenant), db: AsyncSession = Depends(get_session)):
    return await workflow.list_approved_for_tenant(db, tenant_id)
