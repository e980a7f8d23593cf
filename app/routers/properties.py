from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.dependencies.auth import require_landlord, require_tenant
from app.schemas.account import MessageResponse
from app.schemas.property import PropertyIn, PropertyMutationResponse, PropertyOut
from app.schemas.tenancy import ApproveRequest
from app.services import catalog, workflow

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=List[PropertyOut])
async def list_properties(db: AsyncSession = Depends(get_session)):
    return await catalog.list_properties(db)


@router.get("/{property_id}", response_model=PropertyOut)
async def get_property(property_id: int, db: AsyncSession = Depends(get_session)):
    return await catalog.get_available_property(db, property_id)


@router.post("", response_model=PropertyMutationResponse)
async def create_property(
    body: PropertyIn,
    landlord_id: int = Depends(require_landlord),
    db: AsyncSession = Depends(get_session),
):
    property_id = await catalog.create_property(db, landlord_id, body)
    return {"message": "Property created successfully", "property_id": property_id}


@router.put("/{property_id}", response_model=PropertyMutationResponse)
async def update_property(
    property_id: int,
    body: PropertyIn,
    landlord_id: int = Depends(require_landlord),
    db: AsyncSession = Depends(get_session),
):
    await catalog.update_property(db, property_id, landlord_id, body)
    return {"message": "Property updated successfully", "property_id": property_id}


@router.delete("/{property_id}", response_model=PropertyMutationResponse)
async def delete_property(
    property_id: int,
    landlord_id: int = Depends(require_landlord),
    db: AsyncSession = Depends(get_session),
):
    await catalog.delete_property(db, property_id, landlord_id)
    return {"message": "Property deleted successfully", "property_id": property_id}


@router.put("/{property_id}/availability", response_model=PropertyMutationResponse)
async def make_available(
    property_id: int,
    landlord_id: int = Depends(require_landlord),
    db: AsyncSession = Depends(get_session),
):
    await catalog.set_available(db, property_id, landlord_id)
    return {"message": "Property availability updated successfully", "property_id": property_id}


@router.post("/{property_id}/approve", response_model=MessageResponse)
async def approve(
    property_id: int,
    body: ApproveRequest,
    landlord_id: int = Depends(require_landlord),
    db: AsyncSession = Depends(get_session),
):
    await workflow.approve_request(db, property_id, body.tenant_id, landlord_id)
    return {"message": "Request approved successfully"}


@router.post("/{property_id}/request", response_model=MessageResponse)
async def request_property(
    property_id: int,
    tenant_id: int = Depends(require_tenant),
    db: AsyncSession = Depends(get_session),
):
    await workflow.request_property(db, tenant_id, property_id)
    return {"message": "Request sent successfully"}
