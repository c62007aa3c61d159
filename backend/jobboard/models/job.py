from sqlalchemy import JSON, Column, Text
from jobboard.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    category = Column(Text)
    type = Column(Text, nullable=False)
    salary = Column(Text)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    responsibilities = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
