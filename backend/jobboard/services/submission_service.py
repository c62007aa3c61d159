import re

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from jobboard.errors import InvalidEmail, InvalidIdentifier, InvalidUrl, JobNotFound, MissingField
from jobboard.models.application import Application
from jobboard.schemas.application import ApplicationCreate
from jobboard.services import application_store, job_store
from jobboard.utils.identifiers import parse_id

REQUIRED_FIELDS = ("job_id", "name", "email", "resume_link")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_url_adapter = TypeAdapter(AnyHttpUrl)


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.match(value) is not None


def is_valid_url(value: str) -> bool:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def submit_application(db: Session, req: ApplicationCreate) -> Application:
    """Validate an application and store it as pending.

    Checks run in order: required fields, email, resume URL, job existence.
    Nothing is written unless every check passes.
    """
    values = {name: (getattr(req, name) or "").strip() for name in REQUIRED_FIELDS}
    missing = [name for name in REQUIRED_FIELDS if not values[name]]
    if missing:
        raise MissingField(f"Required fields: {', '.join(missing)}")

    if not is_valid_email(values["email"]):
        raise InvalidEmail("Invalid email address")

    if not is_valid_url(values["resume_link"]):
        raise InvalidUrl("Resume link must be a valid URL")

    try:
        job_id = parse_id(values["job_id"], "job ID")
    except InvalidIdentifier as exc:
        raise JobNotFound("Job not found") from exc
    if job_store.find_job(db, job_id) is None:
        raise JobNotFound("Job not found")

    return application_store.insert_application(
        db,
        job_id=job_id,
        name=values["name"],
        email=values["email"],
        resume_link=values["resume_link"],
        cover_note=req.cover_note,
    )
