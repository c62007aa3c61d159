from pydantic import BaseModel, ConfigDict


class ApplicationCreate(BaseModel):
    job_id: str | None = None
    name: str | None = None
    email: str | None = None
    resume_link: str | None = None
    cover_note: str | None = None


class ApplicationStatusUpdate(BaseModel):
    status: str | None = None


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    name: str
    email: str
    resume_link: str
    cover_note: str | None
    status: str
    created_at: str
    updated_at: str
