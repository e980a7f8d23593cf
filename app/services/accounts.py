from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.errors import ProfileNotFound
from app.models import Property, PropertyRequest, Tenancy
from app.services.auth import Account, Role, account_model, duplicate_email, email_taken

logger = get_logger()


async def get_profile(db: AsyncSession, role: Role, account_id: int) -> Account:
    model = account_model(role)
    account = await db.get(model, account_id)
    if account is None:
        raise ProfileNotFound(f"{Role(role).value.capitalize()} not found")
    return account


async def update_profile(
    db: AsyncSession, role: Role, account_id: int, first_name: str, last_name: str, email: str
) -> Account:
    account = await get_profile(db, role, account_id)
    if await email_taken(db, role, email, exclude_id=account_id):
        raise duplicate_email(role)

    account.first_name = first_name
    account.last_name = last_name
    account.email = email
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        if await email_taken(db, role, email, exclude_id=account_id):
            raise duplicate_email(role)
        raise
    logger.info("Profile updated", role=Role(role).value, account_id=account_id)
    return account


async def delete_profile(db: AsyncSession, role: Role, account_id: int) -> None:
    """
    Hard delete of an account together with everything hanging off it.

    A landlord takes their properties with them, and with those every request
    and tenancy on them. A tenant takes their own requests and tenancies.
    All rows go in one transaction.
    """
    account = await get_profile(db, role, account_id)
    if Role(role) is Role.landlord:
        owned = select(Property.id).where(Property.landlord_id == account_id)
        await db.execute(
            delete(PropertyRequest)
            .where(PropertyRequest.property_id.in_(owned))
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Tenancy).where(Tenancy.property_id.in_(owned)).execution_options(synchronize_session=False)
        )
        await db.execute(delete(Property).where(Property.landlord_id == account_id))
    else:
        await db.execute(delete(PropertyRequest).where(PropertyRequest.tenant_id == account_id))
        await db.execute(delete(Tenancy).where(Tenancy.tenant_id == account_id))
    await db.delete(account)
    await db.commit()
    logger.info("Profile deleted", role=Role(role).value, account_id=account_id)
