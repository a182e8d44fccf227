"""Tests for tape models (Tape, RecordedInteraction, RecordedRequest, RecordedResponse)."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from tapedeck.headers import Headers
from tapedeck.message import BasicRequest, BasicResponse
from tapedeck.tape.models import (
    RecordedInteraction,
    RecordedRequest,
    RecordedResponse,
    Tape,
)

TS = datetime(2026, 1, 1, tzinfo=timezone.utc)


# -- Fixtures --


def _make_interaction(path: str = "a", recorded: datetime = TS) -> RecordedInteraction:
    """Create a minimal RecordedInteraction for testing."""
    return RecordedInteraction(
        recorded=recorded,
        request=RecordedRequest(method="GET", url=f"http://example.com/{path}"),
        response=RecordedResponse(status=200, body=path),
    )


class TestRecordedRequest:
    """RecordedRequest validation and construction."""

    def test_headers_accept_mapping(self):
        """A plain mapping is coerced into Headers."""
        request = RecordedRequest(
            method="GET",
            url="http://x/",
            headers={"Accept": "*/*", "X-Foo": ["1", "2"]},
        )
        assert isinstance(request.headers, Headers)
        assert request.headers.get_all("X-Foo") == ["1", "2"]

    def test_defaults(self):
        """Headers default to empty and body to None."""
        request = RecordedRequest(method="GET", url="http://x/")
        assert len(request.headers) == 0
        assert request.body is None
        assert str(request.url) == "http://x/"

    def test_body_types(self):
        """Body accepts text, bytes and file references."""
        assert RecordedRequest(method="POST", url="http://x/", body="text").body == "text"
        assert RecordedRequest(method="POST", url="http://x/", body=b"\x00").body == b"\x00"
        path = Path("bodies/payload.bin")
        assert RecordedRequest(method="POST", url="http://x/", body=path).body == path

    def test_is_frozen(self):
        """Recorded requests cannot be modified after creation."""
        request = RecordedRequest(method="GET", url="http://x/")
        with pytest.raises(ValidationError):
            request.method = "POST"

    def test_rejects_unknown_fields(self):
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError, match="extra_forbidden"):
            RecordedRequest.model_validate({"method": "GET", "url": "http://x/", "verb": "GET"})

    def test_rejects_invalid_url(self):
        """A value that is not a URL is rejected."""
        with pytest.raises(ValidationError):
            RecordedRequest(method="GET", url="not a url")

    def test_from_message(self):
        """from_message copies every accessor of a live request."""
        live = BasicRequest(
            method="PUT",
            url="http://x/items/1",
            headers=Headers([("Accept", "*/*")]),
            body="payload",
        )
        request = RecordedRequest.from_message(live)
        assert request.method == "PUT"
        assert str(request.url) == "http://x/items/1"
        assert request.headers == live.headers
        assert request.body == "payload"


class TestRecordedInteraction:
    """RecordedInteraction capture."""

    def test_capture_uses_given_time(self):
        """capture() records the supplied timestamp."""
        interaction = RecordedInteraction.capture(
            BasicRequest(method="GET", url="http://x/"),
            BasicResponse(status=204),
            recorded=TS,
        )
        assert interaction.recorded == TS
        assert interaction.response.status == 204

    def test_capture_defaults_to_now(self):
        """capture() stamps the current UTC time when none is given."""
        before = datetime.now(timezone.utc)
        interaction = RecordedInteraction.capture(
            BasicRequest(method="GET", url="http://x/"),
            BasicResponse(status=200),
        )
        assert interaction.recorded >= before


class TestTape:
    """Tape recording and snapshots."""

    def test_record_appends_in_order(self):
        """record() keeps recording order."""
        tape = Tape(name="t")
        for path in ("a", "b", "c"):
            tape.record(_make_interaction(path))
        assert [i.response.body for i in tape.interactions] == ["a", "b", "c"]
        assert len(tape) == 3

    def test_snapshot_is_independent(self):
        """Recording after a snapshot does not change the snapshot."""
        tape = Tape(name="t", interactions=[_make_interaction("a")])
        snapshot = tape.snapshot()
        tape.record(_make_interaction("b"))
        assert len(snapshot) == 1
        assert snapshot.name == "t"

    def test_concurrent_records_are_not_lost(self):
        """Appends from several threads all land on the tape."""
        tape = Tape(name="t")

        def record_many() -> None:
            for _ in range(100):
                tape.record(_make_interaction())

        threads = [threading.Thread(target=record_many) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(tape) == 400

    def test_validates_nested_dicts(self):
        """A tape can be validated from plain data, as captures are."""
        tape = Tape.model_validate(
            {
                "name": "t1",
                "interactions": [
                    {
                        "recorded": "2026-01-01T00:00:00Z",
                        "request": {"method": "GET", "url": "http://x/"},
                        "response": {"status": 200, "headers": {"Content-Type": "text/plain"}},
                    }
                ],
            }
        )
        assert tape.interactions[0].recorded == TS
        assert tape.interactions[0].response.headers.get("content-type") == "text/plain"
