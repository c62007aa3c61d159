from pydantic import BaseModel

from jobboard.schemas.job import JobResponse


class CompanyResponse(BaseModel):
    name: str
    open_jobs: int
    industry: str
    location: str
    description: str
    logo_url: str
    categories: list[str] = []


class CompanyDetailResponse(CompanyResponse):
    jobs: list[JobResponse] = []


class CategoryCount(BaseModel):
    name: str
    count: int
