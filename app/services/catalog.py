from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.errors import NotAuthorized, PropertyNotFound
from app.models import Property, PropertyRequest, Tenancy
from app.schemas.property import PropertyIn

logger = get_logger()


async def get_owned_property(db: AsyncSession, property_id: int, landlord_id: int, action: str) -> Property:
    """
    Load a property for mutation by ``landlord_id``.

    Existence is checked before ownership, so a stranger probing an id sees a
    404 for missing rows and a 403 for someone else's.
    """
    prop = await db.get(Property, property_id)
    if prop is None:
        raise PropertyNotFound()
    if prop.landlord_id != landlord_id:
        logger.warning("Ownership check failed", property_id=property_id, landlord_id=landlord_id, action=action)
        raise NotAuthorized(f"Not authorized to {action} this property")
    return prop


async def create_property(db: AsyncSession, landlord_id: int, fields: PropertyIn) -> int:
    prop = Property(landlord_id=landlord_id, **fields.model_dump())
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    logger.info("Property created", property_id=prop.id, landlord_id=landlord_id)
    return prop.id


async def update_property(db: AsyncSession, property_id: int, landlord_id: int, fields: PropertyIn) -> Property:
    prop = await get_owned_property(db, property_id, landlord_id, "update")
    # Full replace: every listed field is written, including defaults
    for name, value in fields.model_dump().items():
        setattr(prop, name, value)
    await db.commit()
    logger.info("Property updated", property_id=property_id, landlord_id=landlord_id)
    return prop


async def delete_property(db: AsyncSession, property_id: int, landlord_id: int) -> None:
    prop = await get_owned_property(db, property_id, landlord_id, "delete")
    await db.execute(delete(PropertyRequest).where(PropertyRequest.property_id == property_id))
    await db.execute(delete(Tenancy).where(Tenancy.property_id == property_id))
    await db.delete(prop)
    await db.commit()
    logger.info("Property deleted", property_id=property_id, landlord_id=landlord_id)


async def set_available(db: AsyncSession, property_id: int, landlord_id: int) -> Property:
    prop = await get_owned_property(db, property_id, landlord_id, "update availability for")
    prop.availability = True
    await db.commit()
    logger.info("Property marked available", property_id=property_id, landlord_id=landlord_id)
    return prop


async def list_properties(db: AsyncSession) -> List[Property]:
    # Every row, available or not
    result = await db.execute(select(Property).order_by(Property.id))
    return list(result.scalars().all())


async def get_available_property(db: AsyncSession, property_id: int) -> Property:
    result = await db.execute(
        select(Property).where(Property.id == property_id, Property.availability.is_(True))
    )
    prop = result.scalars().first()
    if prop is None:
        raise PropertyNotFound("Property not found or not available")
    return prop
