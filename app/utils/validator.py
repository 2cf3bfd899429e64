from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from models import ReportCreate, ReportStatus
from app.errors import ValidationError


def _as_text(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


def ensure_utc(dt: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _storable(dt: datetime) -> datetime:
    """Convert to UTC at the millisecond precision BSON dates keep."""
    try:
        dt = ensure_utc(dt).astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValidationError(
            "date is outside the supported range", field="date", details=str(exc)
        ) from exc
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def parse_report_date(value: Any) -> datetime:
    """
    Parse the incident date of a submission.

    Absent or blank values default to the current time (capture time).
    Strings are read as ISO-8601, with a bare date meaning midnight.
    Anything else that is present fails. The result is in UTC, truncated
    to milliseconds.
    """
    if value is None:
        return _storable(datetime.now(timezone.utc))

    if isinstance(value, datetime):
        return _storable(value)

    if not isinstance(value, str):
        raise ValidationError("date must be an ISO-8601 timestamp", field="date")

    text = value.strip()
    if not text:
        return _storable(datetime.now(timezone.utc))

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(
            "date must be an ISO-8601 timestamp", field="date", details=str(exc)
        ) from exc
    return _storable(parsed)


def validate_report(raw: Any) -> ReportCreate:
    """
    Normalize an untyped submission into a ReportCreate payload.

    Raises ValidationError naming the offending field when the body is not a
    mapping, the title is missing or blank, or the date cannot be parsed.
    The status is always fixed to Reported.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("report must be a JSON object", field="body")

    title = _as_text(raw.get("title")).strip()
    if not title:
        raise ValidationError("title is required", field="title")

    return ReportCreate(
        title=title,
        description=_as_text(raw.get("description")),
        location=_as_text(raw.get("location")),
        date=parse_report_date(raw.get("date")),
        status=ReportStatus.REPORTED,
    )
