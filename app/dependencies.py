from fastapi import Request

from app.utils.database import ReportRepository


def get_repository(request: Request) -> ReportRepository:
    return request.app.state.repository
