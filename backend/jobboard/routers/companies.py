from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.routers.jobs import job_to_response
from jobboard.schemas.common import Envelope
from jobboard.schemas.company import CategoryCount, CompanyDetailResponse, CompanyResponse
from jobboard.services import company_service

router = APIRouter(tags=["companies"])


def _company_to_response(company: company_service.CompanySummary) -> CompanyResponse:
    return CompanyResponse(
        name=company.name,
        open_jobs=company.open_jobs,
        industry=company.industry,
        location=company.location,
        description=company.description,
        logo_url=company.logo_url,
        categories=company.categories,
    )


@router.get("/companies", response_model=Envelope[list[CompanyResponse]])
async def list_companies(
    search: str | None = None,
    industry: str | None = None,
    location: str | None = None,
    db: Session = Depends(get_db),
):
    companies = company_service.list_companies(db, search=search, industry=industry, location=location)
    return Envelope(data=[_company_to_response(c) for c in companies])


@router.get("/companies/{name:path}", response_model=Envelope[CompanyDetailResponse])
async def get_company(name: str, db: Session = Depends(get_db)):
    company = company_service.get_company(db, name)
    detail = CompanyDetailResponse(
        **_company_to_response(company).model_dump(),
        jobs=[job_to_response(j) for j in company.jobs],
    )
    return Envelope(data=detail)


@router.get("/categories", response_model=Envelope[list[CategoryCount]])
async def list_categories(db: Session = Depends(get_db)):
    counts = company_service.category_counts(db)
    return Envelope(data=[CategoryCount(name=name, count=count) for name, count in counts])
