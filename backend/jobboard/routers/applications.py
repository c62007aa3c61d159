from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import require_admin
from jobboard.models.application import Application
from jobboard.schemas.application import ApplicationCreate, ApplicationResponse, ApplicationStatusUpdate
from jobboard.schemas.common import Envelope
from jobboard.services import application_store
from jobboard.services.submission_service import submit_application

router = APIRouter(tags=["applications"])

admin_router = APIRouter(
    prefix="/api/applications",
    tags=["applications"],
    dependencies=[Depends(require_admin)],
)


def _application_to_response(application: Application) -> ApplicationResponse:
    return ApplicationResponse.model_validate(application)


@router.post("/applications", response_model=Envelope[ApplicationResponse], status_code=201)
async def create_application(req: ApplicationCreate, db: Session = Depends(get_db)):
    application = submit_application(db, req)
    return Envelope(data=_application_to_response(application), message="Application submitted successfully")


@admin_router.get("", response_model=Envelope[list[ApplicationResponse]])
async def list_applications(
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    applications = application_store.list_applications(db, page=page, per_page=per_page)
    return Envelope(data=[_application_to_response(a) for a in applications])


@admin_router.get("/job/{job_id}", response_model=Envelope[list[ApplicationResponse]])
async def list_applications_for_job(job_id: str, db: Session = Depends(get_db)):
    applications = application_store.list_applications_for_job(db, job_id)
    return Envelope(data=[_application_to_response(a) for a in applications])


@admin_router.put("/{application_id}", response_model=Envelope[ApplicationResponse])
async def update_application_status(
    application_id: str,
    req: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
):
    application = application_store.update_status(db, application_id, req.status)
    return Envelope(data=_application_to_response(application), message=f"Application marked as {application.status}")


@admin_router.delete("/{application_id}", response_model=Envelope)
async def delete_application(application_id: str, db: Session = Depends(get_db)):
    application_store.delete_application(db, application_id)
    return Envelope(message="Application deleted successfully")
