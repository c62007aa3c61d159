from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import require_admin
from jobboard.models.job import Job
from jobboard.schemas.common import Envelope
from jobboard.schemas.job import JobCreate, JobResponse, JobUpdate
from jobboard.services import job_store
from jobboard.services.job_query import FilterChannel, query_jobs

router = APIRouter(tags=["jobs"])


def job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        company=job.company,
        location=job.location,
        category=job.category,
        type=job.type,
        salary=job.salary,
        description=job.description,
        requirements=job.requirements or [],
        responsibilities=job.responsibilities or [],
        tags=job.tags or [],
        created_at=job.created_at,
        updated_at=job.updated_at,
    )


def _listing(jobs: list[Job]) -> Envelope[list[JobResponse]]:
    return Envelope(data=[job_to_response(j) for j in jobs])


@router.get("/jobs", response_model=Envelope[list[JobResponse]])
async def list_jobs(
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(query_jobs(db, page=page, per_page=per_page))


@router.get("/jobs/filter/category", response_model=Envelope[list[JobResponse]])
async def filter_by_category(
    category: str = Query(...),
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(query_jobs(db, FilterChannel.CATEGORY, category, page=page, per_page=per_page))


@router.get("/jobs/filter/type", response_model=Envelope[list[JobResponse]])
async def filter_by_type(
    job_type: str = Query(...),
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(query_jobs(db, FilterChannel.TYPE, job_type, page=page, per_page=per_page))


@router.get("/jobs/search/title", response_model=Envelope[list[JobResponse]])
async def search_by_title(
    title: str = Query(...),
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(query_jobs(db, FilterChannel.TITLE, title, page=page, per_page=per_page))


@router.post(
    "/api/jobs",
    response_model=Envelope[JobResponse],
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def create_job(req: JobCreate, db: Session = Depends(get_db)):
    job = job_store.insert_job(db, req.model_dump())
    return Envelope(data=job_to_response(job), message="Job created successfully")


@router.get("/jobs/{job_id}", response_model=Envelope[JobResponse])
async def get_job(job_id: str, db: Session = Depends(get_db)):
    return Envelope(data=job_to_response(job_store.get_job(db, job_id)))


@router.put("/jobs/{job_id}", response_model=Envelope[JobResponse], dependencies=[Depends(require_admin)])
async def update_job(job_id: str, req: JobUpdate, db: Session = Depends(get_db)):
    job = job_store.update_job(db, job_id, req.model_dump(exclude_unset=True))
    return Envelope(data=job_to_response(job), message="Job updated successfully")


@router.delete("/jobs/{job_id}", response_model=Envelope, dependencies=[Depends(require_admin)])
async def delete_job(job_id: str, db: Session = Depends(get_db)):
    job_store.delete_job(db, job_id)
    return Envelope(message="Job deleted successfully")
