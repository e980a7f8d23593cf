from typing import List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.dependencies.auth import require_landlord
from app.routers.accounts import build_account_router
from app.schemas.tenancy import LandlordTenancyRow
from app.services import workflow
from app.services.auth import Role

router = build_account_router(Role.landlord)


@router.get("/requests_to_approve", response_model=List[LandlordTenancyRow])
async def requests_to_approve(landlord_id: int = Depends(require_landlord), db: AsyncSession = Depends(get_session)):
    return await workflow.list_pending_for_landlord(db, landlord_id)


@router.get("/approved_requests", response_model=List[LandlordTenancyRow])
async def approved_requests(landlord_id: int = Depends(require_landlord), db: AsyncSession = Depends(get_session)):
    return await workflow.list_approved_for_landlord(db, landlord_id)
