from sqlalchemy import Column, Text
from jobboard.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    # Plain reference, no foreign key.
    job_id = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    resume_link = Column(Text, nullable=False)
    cover_note = Column(Text)
    status = Column(Text, nullable=False, default="pending")
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
