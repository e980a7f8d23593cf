import ssl
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from app.config import settings

DB_URL = settings.DATABASE_URL
if not DB_URL:
    raise RuntimeError("DATABASE_URL not set")

connect_args = {}
if DB_URL.startswith("postgresql+asyncpg"):
    # Create an SSLContext as recommended for asyncpg
    ssl_ctx = ssl.create_default_context()
    # Allow self-signed certs for development
    ssl_ctx.check_hostname = False
    ssl_ctx.verify_mode = ssl.CERT_NONE
    connect_args["ssl"] = ssl_ctx

# Create a single, shared async engine for the application
engine = create_async_engine(DB_URL, connect_args=connect_args)

# Create a session factory to generate new sessions
AsyncSessionFactory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

# Dependency for getting a session in FastAPI routes
async def get_session() -> AsyncSession:
    async with AsyncSessionFactory() as session:
        yield session
