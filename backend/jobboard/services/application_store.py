import logging

from sqlalchemy.orm import Session

from jobboard.errors import InvalidIdentifier, InvalidRequest, NotFound, store_errors
from jobboard.models.application import Application
from jobboard.utils.identifiers import new_id, parse_id
from jobboard.utils.timestamps import now_iso

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "pending"


def insert_application(db: Session, job_id: str, name: str, email: str, resume_link: str,
                       cover_note: str | None = None) -> Application:
    now = now_iso()
    application = Application(
        id=new_id(),
        job_id=job_id,
        name=name,
        email=email,
        resume_link=resume_link,
        cover_note=cover_note or None,
        status=DEFAULT_STATUS,
        created_at=now,
        updated_at=now,
    )
    with store_errors("Failed to submit application", db):
        db.add(application)
        db.commit()
        db.refresh(application)
    logger.info("Application %s submitted for job %s", application.id, job_id)
    return application


def list_applications(db: Session, page: int = 1, per_page: int | None = None) -> list[Application]:
    query = db.query(Application).order_by(Application.created_at.desc())
    if per_page is not None:
        query = query.offset((page - 1) * per_page).limit(per_page)
    with store_errors("Failed to fetch applications", db):
        return query.all()


def list_applications_for_job(db: Session, job_id: str) -> list[Application]:
    try:
        job_id = parse_id(job_id, "job ID")
    except InvalidIdentifier:
        return []
    with store_errors("Failed to fetch applications for job", db):
        return (
            db.query(Application)
            .filter(Application.job_id == job_id)
            .order_by(Application.created_at.desc())
            .all()
        )


def get_application(db: Session, application_id: str) -> Application:
    application_id = parse_id(application_id, "application ID")
    with store_errors("Failed to fetch application", db):
        application = db.query(Application).filter(Application.id == application_id).first()
    if application is None:
        raise NotFound("Application not found")
    return application


def update_status(db: Session, application_id: str, status: str | None) -> Application:
    if not status or not status.strip():
        raise InvalidRequest("status is required")
    application = get_application(db, application_id)
    application.status = status
    application.updated_at = now_iso()
    with store_errors("Failed to update application", db):
        db.commit()
        db.refresh(application)
    logger.info("Application %s marked as %s", application.id, status)
    return application


def delete_application(db: Session, application_id: str) -> None:
    application = get_application(db, application_id)
    with store_errors("Failed to delete application", db):
        db.delete(application)
        db.commit()
    logger.info("Deleted application %s", application.id)
