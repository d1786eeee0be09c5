"""
Async database engine construction for SQLAlchemy.
"""

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.config import Settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Convert sync URL to async URL if needed
def get_async_database_url(settings: Settings) -> URL:
    """
    Build the async database URL from db.url, db.user and db.password.

    Plain ``postgresql://`` and ``sqlite://`` URLs are switched to their
    async drivers; explicit credentials override the ones in the URL.
    """
    url = make_url(settings.db_url)
    if url.drivername in ("postgresql", "postgres"):
        url = url.set(drivername="postgresql+asyncpg")
    elif url.drivername == "sqlite":
        url = url.set(drivername="sqlite+aiosqlite")

    if settings.db_user:
        url = url.set(username=settings.db_user)
    if settings.db_password:
        url = url.set(password=settings.db_password)
    return url


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create the async engine and its connection pool.

    Pool sizing only applies to server databases; SQLite keeps the
    dialect's default pool.
    """
    url = get_async_database_url(settings)

    engine_kwargs = {
        "echo": settings.debug,
    }
    if url.get_backend_name() != "sqlite":
        engine_kwargs.update({
            "pool_pre_ping": True,
            "pool_recycle": 3600,
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
        })

    engine = create_async_engine(url, **engine_kwargs)
    logger.info(
        "Async database engine created.",
        backend=url.get_backend_name(),
        database=url.database,
        pool_size=engine_kwargs.get("pool_size"),
    )
    return engine
