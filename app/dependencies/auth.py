from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from structlog import get_logger

from app.config import Settings, get_settings
from app.database import get_session
from app.errors import AuthenticationRequired, InvalidOrExpiredToken, MissingToken
from app.services.auth import AuthService, Identity, Role, account_model

logger = get_logger()
# Missing or non-Bearer headers arrive as None
security = HTTPBearer(auto_error=False)


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(settings)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise MissingToken()
    identity = auth.verify_claim(credentials.credentials)
    request.state.identity = identity
    structlog.contextvars.bind_contextvars(actor_id=identity.id, actor_role=identity.role.value)
    return identity


def require_role(role: Role):
    async def _acting_id(
        identity: Identity = Depends(get_current_identity),
        db: AsyncSession = Depends(get_session),
    ) -> int:
        if identity.role is not role:
            logger.warning("Role mismatch", expected=role.value, actual=identity.role.value)
            raise AuthenticationRequired()
        # A token outlives a deleted account; it must not act for it
        if await db.get(account_model(role), identity.id) is None:
            logger.warning("Token for deleted account", role=role.value, account_id=identity.id)
            raise InvalidOrExpiredToken()
        return identity.id
    return _acting_id


require_landlord = require_role(Role.landlord)
require_tenant = require_role(Role.tenant)
