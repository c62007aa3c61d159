import logging

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from jobboard.errors import MissingField, NotFound, store_errors
from jobboard.models.job import Job
from jobboard.utils.identifiers import new_id, parse_id
from jobboard.utils.timestamps import now_iso

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "company", "location", "description", "type")
LIST_FIELDS = ("requirements", "responsibilities", "tags")
# Fields an update may set to null; the rest keep their value when sent null.
NULLABLE_FIELDS = {"salary", "category"}

FILTERABLE_FIELDS = {
    "category": Job.category,
    "type": Job.type,
    "title": Job.title,
}


def split_list_field(value: list[str] | str | None) -> list[str]:
    """Coerce a list field to a list, splitting flat strings on commas.

    >>> split_list_field("a, b ,c,,")
    ['a', 'b', 'c']
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return list(value)


def _ordered(query: Query) -> Query:
    return query.order_by(Job.created_at.desc())


def _paginate(query: Query, page: int = 1, per_page: int | None = None) -> Query:
    if per_page is None:
        return query
    return query.offset((page - 1) * per_page).limit(per_page)


def insert_job(db: Session, fields: dict) -> Job:
    missing = [name for name in REQUIRED_FIELDS if not (fields.get(name) or "").strip()]
    if missing:
        raise MissingField(f"Required fields: {', '.join(REQUIRED_FIELDS)} (missing: {', '.join(missing)})")

    now = now_iso()
    job = Job(
        id=new_id(),
        title=fields["title"],
        company=fields["company"],
        location=fields["location"],
        category=fields.get("category"),
        type=fields["type"],
        salary=fields.get("salary") or None,
        description=fields["description"],
        requirements=split_list_field(fields.get("requirements")),
        responsibilities=split_list_field(fields.get("responsibilities")),
        tags=split_list_field(fields.get("tags")),
        created_at=now,
        updated_at=now,
    )
    with store_errors("Failed to create job", db):
        db.add(job)
        db.commit()
        db.refresh(job)
    logger.info("Created job %s (%s at %s)", job.id, job.title, job.company)
    return job


def find_job(db: Session, job_id: str) -> Job | None:
    """Point lookup that returns None instead of raising for unknown ids."""
    with store_errors("Failed to fetch job", db):
        return db.query(Job).filter(Job.id == job_id).first()


def get_job(db: Session, job_id: str) -> Job:
    job = find_job(db, parse_id(job_id, "job ID"))
    if job is None:
        raise NotFound("Job not found")
    return job


def list_jobs(db: Session, page: int = 1, per_page: int | None = None) -> list[Job]:
    with store_errors("Failed to fetch jobs", db):
        return _paginate(_ordered(db.query(Job)), page, per_page).all()


def filter_jobs(
    db: Session,
    field: str,
    text: str,
    page: int = 1,
    per_page: int | None = None,
) -> list[Job]:
    """Jobs whose ``field`` contains ``text``, case-insensitively, newest first.

    ``text`` is matched literally: LIKE wildcards are escaped. Case folding
    is Unicode-aware through the ``casefold`` SQL function.
    """
    column = FILTERABLE_FIELDS[field]
    query = db.query(Job)
    if text:
        query = query.filter(func.casefold(column).contains(text.casefold(), autoescape=True))
    with store_errors(f"Failed to fetch jobs by {field}", db):
        return _paginate(_ordered(query), page, per_page).all()


def update_job(db: Session, job_id: str, fields: dict) -> Job:
    job = get_job(db, job_id)

    for key, value in fields.items():
        if key in LIST_FIELDS:
            value = split_list_field(value)
        elif value is None and key not in NULLABLE_FIELDS:
            continue
        elif key in REQUIRED_FIELDS and not value.strip():
            continue
        setattr(job, key, value)
    job.updated_at = now_iso()

    with store_errors("Failed to update job", db):
        db.commit()
        db.refresh(job)
    logger.info("Updated job %s (%s)", job.id, ", ".join(sorted(fields)) or "no fields")
    return job


def delete_job(db: Session, job_id: str) -> None:
    job = get_job(db, job_id)
    with store_errors("Failed to delete job", db):
        db.delete(job)
        db.commit()
    logger.info("Deleted job %s", job.id)
