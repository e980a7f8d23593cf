from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.dependencies.auth import get_auth_service, require_role
from app.schemas.account import (
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUpdate,
    SignupRequest,
)
from app.services import accounts
from app.services.auth import AuthService, Role


def build_account_router(role: Role) -> APIRouter:
    """Signup, login and self-service profile routes, identical for both roles."""
    name = role.value
    label = name.capitalize()
    id_key = f"{name}_id"
    acting_id = require_role(role)
    router = APIRouter(prefix=f"/{name}s", tags=[f"{name}s"])

    @router.post("/signup")
    async def signup(
        body: SignupRequest,
        db: AsyncSession = Depends(get_session),
        auth: AuthService = Depends(get_auth_service),
    ):
        account_id, token = await auth.register(
            db, role, body.first_name, body.last_name, body.email, body.password
        )
        return {"message": f"{label} signed up successfully", id_key: account_id, "token": token}

    @router.post("/login")
    async def login(
        body: LoginRequest,
        db: AsyncSession = Depends(get_session),
        auth: AuthService = Depends(get_auth_service),
    ):
        account_id, token = await auth.authenticate(db, role, body.email, body.password)
        return {"message": f"{label} logged in successfully", id_key: account_id, "token": token}

    @router.get("/profile", response_model=ProfileResponse)
    async def profile(account_id: int = Depends(acting_id), db: AsyncSession = Depends(get_session)):
        return await accounts.get_profile(db, role, account_id)

    @router.put("/update_profile", response_model=MessageResponse)
    async def update_profile(
        body: ProfileUpdate,
        account_id: int = Depends(acting_id),
        db: AsyncSession = Depends(get_session),
    ):
        await accounts.update_profile(db, role, account_id, body.first_name, body.last_name, body.email)
        return {"message": f"{label} profile updated successfully"}

    @router.delete("/delete_profile", response_model=MessageResponse)
    async def delete_profile(account_id: int = Depends(acting_id), db: AsyncSession = Depends(get_session)):
        await accounts.delete_profile(db, role, account_id)
        return {"message": f"{label} profile deleted successfully"}

    return router
