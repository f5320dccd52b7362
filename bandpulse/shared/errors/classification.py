"""
Error taxonomy for the API.

Every exception that reaches the error middleware is classified into
exactly one variant:

- ValidationFailure: input failed schema validation (itemized issues).
- OperationalFailure: an expected failure with an intended status.
- UnknownFailure: anything else, i.e. a defect.
"""

from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bandpulse.shared.errors.base import DEFAULT_STATUS_CODE, AppError

VALIDATION_STATUS_CODE = 400

# Leading loc segment FastAPI adds to say which part of the request failed.
_REQUEST_PARTS = frozenset({"body", "query", "path", "header", "cookie"})


@dataclass(frozen=True)
class FieldIssue:
    """One failed field: dotted location and human-readable message."""

    path: str
    message: str


@dataclass(frozen=True)
class ValidationFailure:
    issues: list[FieldIssue] = field(default_factory=list)
    status_code: int = VALIDATION_STATUS_CODE


@dataclass(frozen=True)
class OperationalFailure:
    message: str
    status_code: int = DEFAULT_STATUS_CODE


@dataclass(frozen=True)
class UnknownFailure:
    message: str
    status_code: int = DEFAULT_STATUS_CODE


ClassifiedError = Union[ValidationFailure, OperationalFailure, UnknownFailure]


def _field_path(loc: Sequence[Any], strip_request_part: bool) -> str:
    segments = list(loc)
    if strip_request_part and segments and segments[0] in _REQUEST_PARTS:
        segments = segments[1:]
    return ".".join(str(segment) for segment in segments)


def _issues(errors: Sequence[dict[str, Any]], strip_request_part: bool) -> list[FieldIssue]:
    return [
        FieldIssue(
            path=_field_path(error.get("loc", ()), strip_request_part),
            message=error.get("msg", ""),
        )
        for error in errors
    ]


def error_message(exc: BaseException) -> str:
    """Return the message an exception carries, whatever its type."""
    match exc:
        case AppError(message=message):
            return message
        case StarletteHTTPException(detail=detail):
            return str(detail)
        case _:
            return str(exc)


def classify_error(exc: BaseException) -> ClassifiedError:
    """Classify an exception. First matching case wins.

    Args:
        exc: Any exception raised while processing a request.

    Returns:
        The tagged variant describing how the error must be answered.
    """
    match exc:
        case RequestValidationError():
            return ValidationFailure(issues=_issues(exc.errors(), strip_request_part=True))
        case ValidationError():
            return ValidationFailure(issues=_issues(exc.errors(), strip_request_part=False))
        case AppError(is_operational=True):
            return OperationalFailure(
                message=exc.message,
                status_code=exc.status_code or DEFAULT_STATUS_CODE,
            )
        case StarletteHTTPException():
            return OperationalFailure(message=str(exc.detail), status_code=exc.status_code)
        case _:
            return UnknownFailure(
                message=str(exc),
                status_code=getattr(exc, "status_code", None) or DEFAULT_STATUS_CODE,
            )
