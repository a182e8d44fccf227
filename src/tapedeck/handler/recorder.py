"""Recording step for handler chains, and re-recording of existing tapes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from tapedeck.handler.chain import ChainedHttpHandler, StaticResponseHandler, build_chain
from tapedeck.message import Request, Response
from tapedeck.tape.models import RecordedInteraction, Tape

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TapeRecordingHandler(ChainedHttpHandler):
    """Delegate a request, then append the exchange to a tape.

    The interaction is captured from the request and response exactly as
    this step sees them. Place header filters upstream of this step and
    the recorded headers are the filtered ones.

    Args:
        tape: Tape receiving the interactions. Its own lock serializes
            concurrent appends.
        clock: Source of capture timestamps.
    """

    def __init__(self, tape: Tape, clock: Callable[[], datetime] = _utc_now) -> None:
        super().__init__()
        self.tape = tape
        self.clock = clock

    def handle(self, request: Request) -> Response:
        response = self.chain(request)
        interaction = RecordedInteraction.capture(request, response, recorded=self.clock())
        self.tape.record(interaction)
        logger.debug(
            "Recorded %s %s -> %d on tape %r",
            interaction.request.method,
            interaction.request.url,
            interaction.response.status,
            self.tape.name,
        )
        return response


def rerecord(source: Tape, make_filter: Callable[[], ChainedHttpHandler]) -> Tape:
    """Replay every interaction of source through a filter into a new tape.

    Each interaction runs through ``make_filter() -> TapeRecordingHandler
    -> StaticResponseHandler``, keeping its original capture time. The
    result is what the tape would have contained had the filter been in
    place while recording.

    Args:
        source: Tape whose interactions are replayed, in order.
        make_filter: Returns a fresh filtering step for each chain.

    Returns:
        A new tape with the same name.
    """
    target = Tape(name=source.name)
    for interaction in source.snapshot().interactions:
        head = build_chain(
            [
                make_filter(),
                TapeRecordingHandler(target, clock=lambda recorded=interaction.recorded: recorded),
                StaticResponseHandler(interaction.response),
            ]
        )
        head.handle(interaction.request)
    return target
