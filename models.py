from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class ReportStatus(str, Enum):
    # Only REPORTED is assigned; nothing transitions a report yet.
    REPORTED = "Reported"
    UNDER_REVIEW = "Under Review"
    RESOLVED = "Resolved"


class ReportCreate(BaseModel):
    title: str
    description: str = ""
    location: str = ""
    date: datetime
    status: ReportStatus = ReportStatus.REPORTED


class Report(ReportCreate):
    id: str


class ReportCreated(BaseModel):
    message: str
    id: str
