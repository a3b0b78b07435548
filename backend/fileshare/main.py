"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from fileshare.config import settings
from fileshare.database import engine, get_db
from fileshare.models import Base
from fileshare.templating import STATIC_DIR

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup.

    A database that is unreachable at startup is logged and the app keeps
    serving; requests that touch the database fail with a 500 until it is back.
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Connected to database")
    except Exception as e:
        logger.error(f"Database connection error: {e}")

    yield

    await engine.dispose()


app = FastAPI(
    title="File Sharing",
    version="1.0.0",
    description="Upload a file, optionally protect it with a password, share the link.",
    lifespan=lifespan,
)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/api/health")
async def health_check():
    """Verify API and database connectivity."""
    try:
        async for db in get_db():
            await db.execute(text("SELECT 1"))
            return {"status": "ok", "database": "connected"}
    except Exception as e:
        return {"status": "error", "database": str(e)}


# Register routers
from fileshare.routes.pages import router as pages_router
from fileshare.routes.files import router as files_router
app.include_router(pages_router)
app.include_router(files_router)
