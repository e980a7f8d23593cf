"""
Tenancy workflow.

Each (tenant, property) pair moves through ``NONE -> REQUESTED -> APPROVED``.
A pending request lives in ``property_requests``; approving it removes that
row and inserts the matching ``tenant_properties`` row in the same
transaction. There is no reject or withdraw step.

Approval leaves ``properties.availability`` untouched, so an occupied
property keeps showing as available until its owner edits it.
"""
from typing import Dict, List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.errors import DuplicateRequest, PropertyNotFound, RequestNotFound
from app.models import Landlord, Property, PropertyRequest, Tenancy, Tenant
from app.services.catalog import get_owned_property

logger = get_logger()


def _property_columns():
    return (
        Property.title.label("property_title"),
        Property.description.label("property_description"),
        Property.address.label("property_address"),
        Property.rent_fee.label("property_rent_fee"),
        Property.availability.label("property_availability"),
    )


async def _pending_request_id(db: AsyncSession, tenant_id: int, property_id: int):
    result = await db.execute(
        select(PropertyRequest.id).where(
            PropertyRequest.tenant_id == tenant_id, PropertyRequest.property_id == property_id
        )
    )
    return result.scalar()


async def request_property(db: AsyncSession, tenant_id: int, property_id: int) -> None:
    if await db.get(Property, property_id) is None:
        raise PropertyNotFound()

    if await _pending_request_id(db, tenant_id, property_id) is not None:
        raise DuplicateRequest()

    approved = await db.execute(
        select(Tenancy.id).where(Tenancy.tenant_id == tenant_id, Tenancy.property_id == property_id)
    )
    if approved.first() is not None:
        raise DuplicateRequest("Tenancy already approved for this property")

    db.add(PropertyRequest(tenant_id=tenant_id, property_id=property_id))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # Only the unique (tenant_id, property_id) pair means a concurrent duplicate
        if await _pending_request_id(db, tenant_id, property_id) is not None:
            raise DuplicateRequest()
        raise
    logger.info("Property requested", tenant_id=tenant_id, property_id=property_id)


async def approve_request(db: AsyncSession, property_id: int, tenant_id: int, landlord_id: int) -> None:
    await get_owned_property(db, property_id, landlord_id, "approve requests for")

    result = await db.execute(
        select(PropertyRequest).where(
            PropertyRequest.property_id == property_id, PropertyRequest.tenant_id == tenant_id
        )
    )
    pending = result.scalars().first()
    if pending is None:
        raise RequestNotFound()

    # Delete and insert commit together. The row count check stops a second
    # concurrent approval of the same request from also inserting a tenancy.
    deleted = await db.execute(
        delete(PropertyRequest)
        .where(PropertyRequest.id == pending.id)
        .execution_options(synchronize_session=False)
    )
    if deleted.rowcount != 1:
        await db.rollback()
        raise RequestNotFound()
    db.add(Tenancy(tenant_id=tenant_id, property_id=property_id))
    await db.commit()
    logger.info("Request approved", tenant_id=tenant_id, property_id=property_id, landlord_id=landlord_id)


async def list_approved_for_tenant(db: AsyncSession, tenant_id: int) -> List[Dict]:
    stmt = (
        select(
            Tenancy.id,
            Tenancy.tenant_id,
            Tenancy.property_id,
            *_property_columns(),
            Landlord.first_name.label("landlord_first_name"),
            Landlord.last_name.label("landlord_last_name"),
        )
        .join(Property, Tenancy.property_id == Property.id)
        .join(Landlord, Property.landlord_id == Landlord.id)
        .where(Tenancy.tenant_id == tenant_id)
        .order_by(Tenancy.id)
    )
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def list_pending_for_landlord(db: AsyncSession, landlord_id: int) -> List[Dict]:
    stmt = (
        select(
            PropertyRequest.id,
            PropertyRequest.tenant_id,
            PropertyRequest.property_id,
            *_property_columns(),
            Tenant.first_name.label("tenant_first_name"),
            Tenant.last_name.label("tenant_last_name"),
        )
        .join(Tenant, PropertyRequest.tenant_id == Tenant.id)
        .join(Property, PropertyRequest.property_id == Property.id)
        .where(Property.landlord_id == landlord_id)
        .order_by(PropertyRequest.id)
    )
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def list_approved_for_landlord(db: AsyncSession, landlord_id: int) -> List[Dict]:
    stmt = (
        select(
            Tenancy.id,
            Tenancy.tenant_id,
            Tenancy.property_id,
            *_property_columns(),
            Tenant.first_name.label("tenant_first_name"),
            Tenant.last_name.label("tenant_last_name"),
        )
        .join(Tenant, Tenancy.tenant_id == Tenant.id)
        .join(Property, Tenancy.property_id == Property.id)
        .where(Property.landlord_id == landlord_id)
        .order_by(Tenancy.id)
    )
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]
