"""Classification of SparkPost transmission responses.

A transmission succeeded only when the HTTP call succeeded and the
provider rejected no recipient at all.  A partially accepted transmission
is a failure.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sparkpost_transport.mailer.exceptions import (
    MailError,
    MalformedResponseError,
    ProviderRejectionError,
    TransportError,
)

GENERIC_ERROR = "Unknown error while sending through SparkPost"
MALFORMED_ERROR = "Unexpected response from SparkPost"


@dataclass
class HttpResponse:
    """What the transport collaborator hands back for one request."""

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class SendOutcome:
    """Result of a single transmission."""

    success: bool
    accepted: int = 0
    rejected: int = 0
    transmission_id: Optional[str] = None
    error: Optional[str] = None
    exception: Optional[MailError] = None

    def __bool__(self) -> bool:
        return self.success

    def raise_for_error(self) -> None:
        if self.exception is not None:
            raise self.exception


def _error_detail(payload: Dict[str, Any]) -> Optional[str]:
    errors = payload.get("errors")
    if not isinstance(errors, list) or not errors:
        return None
    first = errors[0]
    if not isinstance(first, dict):
        return str(first)
    parts = [str(first[k]) for k in ("message", "description") if first.get(k)]
    return ": ".join(parts) or None


def _failure(exception: MailError, **counts: Any) -> SendOutcome:
    return SendOutcome(success=False, error=str(exception), exception=exception, **counts)


class ResponseInterpreter:
    """Turns an :class:`HttpResponse` into a :class:`SendOutcome`."""

    def interpret(self, response: HttpResponse) -> SendOutcome:
        try:
            payload = json.loads(response.body)
        except (TypeError, ValueError):
            payload = None

        if not isinstance(payload, dict):
            if not response.ok:
                return _failure(
                    ProviderRejectionError(f"HTTP {response.status}: {GENERIC_ERROR}")
                )
            return _failure(MalformedResponseError(MALFORMED_ERROR))

        detail = _error_detail(payload)
        results = payload.get("results")
        if not response.ok or not isinstance(results, dict):
            if detail or not response.ok:
                return _failure(ProviderRejectionError(detail or GENERIC_ERROR))
            return _failure(MalformedResponseError(MALFORMED_ERROR))

        try:
            rejected = int(results["total_rejected_recipients"])
            accepted = int(results.get("total_accepted_recipients", 0))
        except (KeyError, TypeError, ValueError):
            return _failure(MalformedResponseError(MALFORMED_ERROR))

        transmission_id = results.get("id")
        if transmission_id is not None:
            transmission_id = str(transmission_id)

        if rejected:
            return _failure(
                ProviderRejectionError(
                    detail or f"{rejected} recipient(s) rejected by SparkPost"
                ),
                accepted=accepted,
                rejected=rejected,
                transmission_id=transmission_id,
            )
        return SendOutcome(
            success=True,
            accepted=accepted,
            rejected=rejected,
            transmission_id=transmission_id,
        )

    def interpret_failure(self, exc: TransportError) -> SendOutcome:
        return _failure(exc)


__all__ = [
    "GENERIC_ERROR",
    "HttpResponse",
    "MALFORMED_ERROR",
    "ResponseInterpreter",
    "SendOutcome",
]
