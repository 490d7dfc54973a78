"""
Database models package.
"""

from app.models.company import Company
from app.models.job import Job
from app.models.user import Application, User

__all__ = ["Application", "Company", "Job", "User"]
