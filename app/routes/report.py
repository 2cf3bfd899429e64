import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from models import Report, ReportCreated
from app.dependencies import get_repository
from app.errors import StorageError, ValidationError
from app.utils.database import ReportRepository
from app.utils.validator import validate_report

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise ValidationError(
            "report must be a JSON object", field="body", details=str(exc)
        ) from exc


@router.post("/crimes", status_code=status.HTTP_201_CREATED, response_model=ReportCreated)
async def report_crime(
    request: Request,
    repository: ReportRepository = Depends(get_repository),
):
    try:
        record = validate_report(await _read_json(request))
    except ValidationError as exc:
        logger.warning("Rejected crime report: %s (%s)", exc.message, exc.field)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Failed to report crime", "field": exc.field, "detail": exc.message},
        )

    try:
        report_id = await run_in_threadpool(repository.create, record)
    except StorageError:
        logger.exception("Failed to store crime report")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to report crime"},
        )

    logger.info("Crime report %s submitted", report_id)
    return ReportCreated(message="Crime reported", id=report_id)


@router.get("/crimes", response_model=List[Report])
def get_crimes(
    term: Optional[str] = Query(None),
    ignore_case: bool = Query(False),
    repository: ReportRepository = Depends(get_repository),
):
    try:
        if term is None:
            return repository.list()
        return repository.search(term, case_sensitive=not ignore_case)
    except StorageError:
        logger.exception("Failed to fetch crime reports")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch crimes"},
        )
