"""Body decoders for the two endpoints.

A decoder turns response bytes into a value or raises ``DecodeFailure``
with the reason; ``RemoteResource.fetch`` turns that into a ``DecodeError``.
"""

from __future__ import annotations

from pydantic import ValidationError

from reportview.models.errors import DecodeFailure
from reportview.models.report import Report


def decode_report(body: bytes) -> Report:
    """Validate a JSON body against the ``Report`` schema."""
    try:
        return Report.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeFailure(str(exc)) from exc


def decode_text(body: bytes) -> str:
    """Raw log text, verbatim.  Invalid UTF-8 is replaced, never rejected."""
    return body.decode("utf-8", errors="replace")
