"""Async SQLAlchemy engine and session factory.

Usage in routes (see routes/files.py):
    from fileshare.database import get_db

    @router.get("/file/{file_id}")
    async def download_file(request: Request, file_id: str, db: AsyncSession = Depends(get_db)):
        record = await db.get(FileRecord, uuid.UUID(file_id))
        if not record:
            return PlainTextResponse("File not found.", status_code=404)
        record.download_count += 1
        await db.commit()

The engine is process-wide and created once at import. There is no reconnect
loop; ``pool_pre_ping`` replaces dead connections on checkout.
"""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from fileshare.config import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """FastAPI dependency that yields an async DB session."""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
