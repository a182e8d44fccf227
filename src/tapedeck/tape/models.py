"""Pydantic models for tapes and the interactions recorded on them.

A Tape is a named, ordered list of RecordedInteraction objects. Each
interaction pairs an immutable RecordedRequest with an immutable
RecordedResponse and the time the exchange was captured. The models are
passive: encoding them into a document is the job of
tapedeck.tape.mapper.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from pydantic import AnyUrl, BaseModel, Field, PrivateAttr, field_validator

from tapedeck.headers import Body, Headers

if TYPE_CHECKING:
    from tapedeck.message import Request, Response

__all__ = [
    "Body",
    "Headers",
    "RecordedInteraction",
    "RecordedRequest",
    "RecordedResponse",
    "Tape",
]


class RecordedRequest(BaseModel):
    """Request half of a recorded interaction."""

    model_config = {"extra": "forbid", "frozen": True, "arbitrary_types_allowed": True}

    method: str
    url: AnyUrl
    headers: Headers = Field(default_factory=Headers)
    body: Body = None

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> Headers:
        return Headers.coerce(value)

    @classmethod
    def from_message(cls, request: "Request") -> RecordedRequest:
        """Snapshot any Request, reading headers through its own accessor."""
        return cls(
            method=request.method,
            url=str(request.url),
            headers=request.headers,
            body=request.body,
        )


class RecordedResponse(BaseModel):
    """Response half of a recorded interaction."""

    model_config = {"extra": "forbid", "frozen": True, "arbitrary_types_allowed": True}

    status: int
    headers: Headers = Field(default_factory=Headers)
    body: Body = None

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> Headers:
        return Headers.coerce(value)

    @classmethod
    def from_message(cls, response: "Response") -> RecordedResponse:
        """Snapshot any Response, reading headers through its own accessor."""
        return cls(
            status=response.status,
            headers=response.headers,
            body=response.body,
        )


class RecordedInteraction(BaseModel):
    """One captured request/response exchange and when it happened."""

    model_config = {"extra": "forbid", "frozen": True}

    recorded: datetime
    request: RecordedRequest
    response: RecordedResponse

    @classmethod
    def capture(
        cls,
        request: "Request",
        response: "Response",
        recorded: datetime | None = None,
    ) -> RecordedInteraction:
        """Build an interaction from live (possibly filtered) messages.

        Args:
            request: The request as seen by the caller of this method.
            response: The response as seen by the caller of this method.
            recorded: Capture time. Defaults to now (UTC).

        Returns:
            An immutable RecordedInteraction.
        """
        return cls(
            recorded=recorded or datetime.now(timezone.utc),
            request=RecordedRequest.from_message(request),
            response=RecordedResponse.from_message(response),
        )


class Tape(BaseModel):
    """A named, ordered collection of recorded interactions.

    Interaction order is recording order and is never changed. Appends go
    through record() and readers that need a stable view use snapshot();
    both hold the same lock.
    """

    model_config = {"extra": "forbid"}

    name: str
    interactions: list[RecordedInteraction] = Field(default_factory=list)

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def record(self, interaction: RecordedInteraction) -> None:
        """Append an interaction to the end of the tape."""
        with self._lock:
            self.interactions.append(interaction)

    def snapshot(self) -> Tape:
        """Return an independent copy of the tape taken under its lock."""
        with self._lock:
            return Tape(name=self.name, interactions=list(self.interactions))

    def __len__(self) -> int:
        return len(self.interactions)
