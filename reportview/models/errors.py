"""Closed error taxonomy for remote resources.

Three mutually exclusive kinds.  ``NetworkError`` and ``DecodeError`` carry
the diagnostic text of the layer that failed, verbatim.  ``NotTriggeredYet``
is not an operational failure: it is the placeholder result handed to callers
that need a value before any fetch has been armed.

Errors cross component boundaries as values (these models), never as raised
exceptions.  The exceptions at the bottom of this module are raised only
inside the transport and decoder layers and converted by
``RemoteResource.fetch``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """The three error kinds."""

    NETWORK = "network"
    DECODE = "decode"
    NOT_TRIGGERED_YET = "not_triggered_yet"


class ApiErrorBase(BaseModel):
    """Fields shared by every error kind."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind

    def describe(self) -> str:
        raise NotImplementedError


class NetworkError(ApiErrorBase):
    """The transport failed: refused, timed out, or non-2xx."""

    kind: Literal[ErrorKind.NETWORK] = ErrorKind.NETWORK
    detail: str

    def describe(self) -> str:
        return f"Network error: {self.detail}"


class DecodeError(ApiErrorBase):
    """The body arrived but did not match the expected schema."""

    kind: Literal[ErrorKind.DECODE] = ErrorKind.DECODE
    detail: str

    def describe(self) -> str:
        return f"Decode error: {self.detail}"


class NotTriggeredYet(ApiErrorBase):
    """A result was asked for before any trigger was armed."""

    kind: Literal[ErrorKind.NOT_TRIGGERED_YET] = ErrorKind.NOT_TRIGGERED_YET
    reason: str

    def describe(self) -> str:
        return f"Not requested yet: {self.reason}"


# Deserialization dispatches on ``kind``.
ApiError = Annotated[
    Union[NetworkError, DecodeError, NotTriggeredYet],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Layer-internal exceptions
# ---------------------------------------------------------------------------


class TransportError(RuntimeError):
    """Raised by a transport when a GET does not yield a 2xx body."""


class DecodeFailure(ValueError):
    """Raised by a decoder when a body cannot be turned into a value."""
