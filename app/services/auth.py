import enum
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple, Type, Union

from jose import JWTError, ExpiredSignatureError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from structlog import get_logger

from app.config import Settings
from app.errors import DuplicateEmail, InvalidCredentials, InvalidOrExpiredToken, MissingToken
from app.models import Landlord, Tenant

logger = get_logger()


class Role(str, enum.Enum):
    landlord = "landlord"
    tenant = "tenant"


class Identity(BaseModel):
    id: int
    role: Role


Account = Union[Landlord, Tenant]

ACCOUNT_MODELS = {
    Role.landlord: Landlord,
    Role.tenant: Tenant,
}


def account_model(role: Role) -> Type[Account]:
    return ACCOUNT_MODELS[Role(role)]


def duplicate_email(role: Role) -> DuplicateEmail:
    return DuplicateEmail(f"{Role(role).value.capitalize()} with the same email already exists")


async def email_taken(db: AsyncSession, role: Role, email: str, exclude_id: Optional[int] = None) -> bool:
    model = account_model(role)
    stmt = select(model.id).where(model.email == email)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    result = await db.execute(stmt)
    return result.first() is not None


class AuthService:
    """
    Registers and authenticates landlords and tenants and issues the bearer
    claims the access gateway checks on every protected route.

    The settings object is handed in by the caller; nothing here reads the
    signing key from module state.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    # Password hashing is CPU bound; keep it off the event loop
    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(self.pwd_context.hash, password)

    async def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            await run_in_threadpool(self.pwd_context.dummy_verify)
            return False
        return await run_in_threadpool(self.pwd_context.verify, plain_password, hashed_password)

    def issue_claim(self, subject_id: int, role: Role, expires_delta: Optional[timedelta] = None) -> str:
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        claims = {
            "id": subject_id,
            "role": Role(role).value,
            "exp": datetime.now(timezone.utc) + expires_delta,
        }
        return jwt.encode(claims, self.settings.JWT_SECRET, algorithm=self.settings.JWT_ALGORITHM)

    def verify_claim(self, token: Optional[str]) -> Identity:
        if not token:
            raise MissingToken()
        try:
            payload = jwt.decode(token, self.settings.JWT_SECRET, algorithms=[self.settings.JWT_ALGORITHM])
        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidOrExpiredToken()
        except JWTError as e:
            logger.warning("Rejected invalid token", error=str(e))
            raise InvalidOrExpiredToken()
        try:
            return Identity(id=payload["id"], role=payload["role"])
        except (KeyError, ValueError):
            logger.warning("Token payload is missing id or role")
            raise InvalidOrExpiredToken()

    async def register(
        self,
        db: AsyncSession,
        role: Role,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> Tuple[int, str]:
        model = account_model(role)
        if await email_taken(db, role, email):
            raise duplicate_email(role)

        account = model(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=await self.hash_password(password),
        )
        db.add(account)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            # Lost a race with a concurrent signup for the same email
            if await email_taken(db, role, email):
                raise duplicate_email(role)
            raise
        await db.refresh(account)
        logger.info("Account registered", role=Role(role).value, account_id=account.id)
        return account.id, self.issue_claim(account.id, role)

    async def authenticate(self, db: AsyncSession, role: Role, email: str, password: str) -> Tuple[int, str]:
        model = account_model(role)
        result = await db.execute(select(model).where(model.email == email))
        account = result.scalars().first()
        hashed = account.password_hash if account is not None else None
        if not await self.verify_password(password, hashed):
            logger.warning("Login failed", role=Role(role).value)
            raise InvalidCredentials()
        logger.info("Login succeeded", role=Role(role).value, account_id=account.id)
        return account.id, self.issue_claim(account.id, role)
