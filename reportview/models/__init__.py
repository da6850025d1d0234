"""reportview data models — all Pydantic v2, all frozen (immutable)."""

from reportview.models.errors import (
    ApiError,
    ApiErrorBase,
    DecodeError,
    DecodeFailure,
    ErrorKind,
    NetworkError,
    NotTriggeredYet,
    TransportError,
)
from reportview.models.report import BuildStatus, Finish, Report, Start
from reportview.models.resource import (
    Err,
    NotTriggered,
    Ok,
    Pending,
    Resolved,
    ResourceState,
    ResourceStatus,
    Result,
)

__all__ = [
    # report
    "BuildStatus",
    "Start",
    "Finish",
    "Report",
    # errors
    "ErrorKind",
    "ApiErrorBase",
    "NetworkError",
    "DecodeError",
    "NotTriggeredYet",
    "ApiError",
    "TransportError",
    "DecodeFailure",
    # resource state
    "ResourceStatus",
    "Ok",
    "Err",
    "Result",
    "NotTriggered",
    "Pending",
    "Resolved",
    "ResourceState",
]
