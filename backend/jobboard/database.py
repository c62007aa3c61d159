import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jobboard.config import settings


class Base(DeclarativeBase):
    pass


def _casefold(value):
    return value.casefold() if value is not None else None


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()
    # SQLite lower() only folds ASCII.
    dbapi_conn.create_function("casefold", 1, _casefold, deterministic=True)


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id               TEXT PRIMARY KEY,
    title            TEXT NOT NULL,
    company          TEXT NOT NULL,
    location         TEXT NOT NULL,
    category         TEXT,
    type             TEXT NOT NULL,
    salary           TEXT,
    description      TEXT NOT NULL,
    requirements     TEXT NOT NULL DEFAULT '[]',
    responsibilities TEXT NOT NULL DEFAULT '[]',
    tags             TEXT NOT NULL DEFAULT '[]',
    created_at       TEXT NOT NULL,
    updated_at       TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_jobs_created ON jobs(created_at);
CREATE INDEX IF NOT EXISTS idx_jobs_category ON jobs(category);
CREATE INDEX IF NOT EXISTS idx_jobs_type ON jobs(type);
CREATE INDEX IF NOT EXISTS idx_jobs_company ON jobs(company);

-- ============================================================
-- APPLICATIONS
-- ============================================================
-- job_id is checked at submission only: deleting a job keeps its applications.
CREATE TABLE IF NOT EXISTS applications (
    id          TEXT PRIMARY KEY,
    job_id      TEXT NOT NULL,
    name        TEXT NOT NULL,
    email       TEXT NOT NULL,
    resume_link TEXT NOT NULL,
    cover_note  TEXT,
    status      TEXT NOT NULL DEFAULT 'pending',
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_applications_job ON applications(job_id);
CREATE INDEX IF NOT EXISTS idx_applications_created ON applications(created_at);

-- ============================================================
-- AUTH THROTTLE
-- ============================================================
CREATE TABLE IF NOT EXISTS auth_throttle (
    key             TEXT PRIMARY KEY,
    failed_attempts INTEGER NOT NULL,
    last_failed_at  REAL NOT NULL
);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
