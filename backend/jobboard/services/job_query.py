"""Maps the job listing query shapes onto Job Store scans.

A request carries at most one filter channel. Listings are newest first.
"""

from enum import Enum

from sqlalchemy.orm import Session

from jobboard.models.job import Job
from jobboard.services import job_store


class FilterChannel(str, Enum):
    CATEGORY = "category"
    TYPE = "type"
    TITLE = "title"


def query_jobs(
    db: Session,
    channel: FilterChannel | None = None,
    text: str = "",
    page: int = 1,
    per_page: int | None = None,
) -> list[Job]:
    if channel is None:
        return job_store.list_jobs(db, page=page, per_page=per_page)
    return job_store.filter_jobs(db, channel.value, text, page=page, per_page=per_page)
