from pydantic import BaseModel


class JobCreate(BaseModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    category: str | None = None
    type: str | None = None
    salary: str | None = None
    description: str | None = None
    # The admin form may send either a list or one comma-separated string.
    requirements: list[str] | str | None = None
    responsibilities: list[str] | str | None = None
    tags: list[str] | str | None = None


class JobUpdate(BaseModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    category: str | None = None
    type: str | None = None
    salary: str | None = None
    description: str | None = None
    requirements: list[str] | str | None = None
    responsibilities: list[str] | str | None = None
    tags: list[str] | str | None = None


class JobResponse(BaseModel):
    id: str
    title: str
    company: str
    location: str
    category: str | None
    type: str
    salary: str | None
    description: str
    requirements: list[str] = []
    responsibilities: list[str] = []
    tags: list[str] = []
    created_at: str
    updated_at: str
