from jobboard.models.job import Job
from jobboard.models.application import Application

__all__ = ["Job", "Application"]
