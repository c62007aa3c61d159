"""Company and category views derived from the job listings.

There is no company table: a company is the set of jobs sharing a
``company`` value. Display fields are computed from those jobs only, so the
same data always yields the same view.
"""

from collections import Counter
from dataclasses import dataclass, field
from urllib.parse import quote

from sqlalchemy.orm import Session

from jobboard.errors import NotFound
from jobboard.models.job import Job
from jobboard.services import job_store

DEFAULT_INDUSTRY = "Technology"
DEFAULT_LOCATION = "Remote"


@dataclass
class CompanySummary:
    name: str
    open_jobs: int
    industry: str
    location: str
    description: str
    logo_url: str
    categories: list[str] = field(default_factory=list)
    jobs: list[Job] = field(default_factory=list)


def _logo_url(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote(name)}&background=4f46e5&color=fff&size=128"


def _summarize(name: str, jobs: list[Job]) -> CompanySummary:
    # jobs arrive newest first; the newest posting drives display fields.
    latest = jobs[0]
    industry = latest.tags[0] if latest.tags else DEFAULT_INDUSTRY
    location = (latest.location or "").split(",")[0].strip() or DEFAULT_LOCATION
    return CompanySummary(
        name=name,
        open_jobs=len(jobs),
        industry=industry,
        location=location,
        description=f"Leading {industry} company building innovative solutions.",
        logo_url=_logo_url(name),
        categories=sorted({j.category for j in jobs if j.category}),
        jobs=jobs,
    )


def _company_key(name: str | None) -> str:
    return (name or "").strip().casefold()


def _group_by_company(jobs: list[Job]) -> dict[str, list[Job]]:
    """Group jobs on their normalized company name, keeping newest-first order."""
    groups: dict[str, list[Job]] = {}
    for job in jobs:
        key = _company_key(job.company)
        if not key:
            continue
        groups.setdefault(key, []).append(job)
    return groups


def list_companies(
    db: Session,
    search: str | None = None,
    industry: str | None = None,
    location: str | None = None,
) -> list[CompanySummary]:
    groups = _group_by_company(job_store.list_jobs(db))
    # The newest job's spelling names the company.
    companies = [_summarize(jobs[0].company.strip(), jobs) for jobs in groups.values()]

    if search:
        companies = [c for c in companies if search.lower() in c.name.lower()]
    if industry:
        companies = [c for c in companies if industry.lower() in c.industry.lower()]
    if location:
        companies = [c for c in companies if location.lower() in c.location.lower()]

    companies.sort(key=lambda c: (-c.open_jobs, c.name.lower()))
    return companies


def get_company(db: Session, name: str) -> CompanySummary:
    jobs = _group_by_company(job_store.list_jobs(db)).get(_company_key(name))
    if not jobs:
        raise NotFound("Company not found")
    return _summarize(jobs[0].company.strip(), jobs)


def category_counts(db: Session) -> list[tuple[str, int]]:
    counts = Counter(j.category for j in job_store.list_jobs(db) if j.category)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))
