import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings, get_settings
from app.database import get_session
from app.main import app
from app.models import Base
from app.services.auth import AuthService

# bcrypt's minimum cost keeps the suite fast
test_settings = Settings(
    DATABASE_URL="sqlite+aiosqlite://",
    JWT_SECRET="test-secret",
    BCRYPT_ROUNDS=4,
)


@pytest.fixture
def settings():
    return test_settings


@pytest.fixture
def auth_service(settings):
    return AuthService(settings)


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory, settings):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_settings] = lambda: settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


async def signup(client, role, email, first_name="Sam", last_name="Jones", password="s3cret-pass"):
    response = await client.post(
        f"/{role}s/signup",
        json={"first_name": first_name, "last_name": last_name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    return body[f"{role}_id"], body["token"]


async def create_property(client, token, **overrides):
    payload = {
        "title": "Garden flat",
        "description": "Ground floor flat with a garden",
        "address": "4 Mill Lane",
        "rent_fee": 950,
        "image": "https://example.com/garden.jpg",
    }
    payload.update(overrides)
    response = await client.post("/properties", json=payload, headers=auth_header(token))
    assert response.status_code == 200, response.text
    return response.json()["property_id"]


@pytest.fixture
async def landlord(client):
    return await signup(client, "landlord", "lena@example.com", first_name="Lena", last_name="Park")


@pytest.fixture
async def tenant(client):
    return await signup(client, "tenant", "tom@example.com", first_name="Tom", last_name="Reyes")
