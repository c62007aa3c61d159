import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard.config import settings
from jobboard.errors import register_exception_handlers
from jobboard.routers import admin, applications, companies, jobs

logger = logging.getLogger("jobboard")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create the schema and integrity-check the job store
    try:
        from jobboard.database import init_db
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        init_db(settings.db_path)
        logger.info("Job store ready at %s", settings.db_path)
        conn = sqlite3.connect(str(settings.db_path))
        result = conn.execute("PRAGMA integrity_check").fetchone()
        conn.close()
        if result and result[0] == "ok":
            logger.info("Database integrity check passed.")
        else:
            logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
    except (OSError, sqlite3.Error) as exc:
        logger.error("Could not initialize job store: %s", exc)
    if not settings.admin_password_hash:
        logger.warning("JOBBOARD_ADMIN_PASSWORD_HASH is not set; admin login is disabled.")
    yield
    # Shutdown: drop admin sessions
    from jobboard.services.admin_service import admin_service
    admin_service.logout_all()


app = FastAPI(
    title="Job Board",
    description="Job listings, applications and admin console API",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(applications.admin_router)
app.include_router(companies.router)
app.include_router(admin.router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
