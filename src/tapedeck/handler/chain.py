"""Chain of responsibility for HTTP handling.

Each handler either answers a request itself (a terminal handler such as
a transport or tape playback) or passes it to the next handler and
returns what comes back. Chains are linked once, at configuration time,
with build_chain(). Exceptions raised anywhere in a chain reach the
caller unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from tapedeck.errors import ConfigurationError
from tapedeck.message import Request, Response

logger = logging.getLogger(__name__)


class HttpHandler(ABC):
    """Anything that can turn a Request into a Response."""

    @abstractmethod
    def handle(self, request: Request) -> Response:
        """Handle request and return a response."""


class ChainedHttpHandler(HttpHandler):
    """A handler that may delegate to the next handler in its chain."""

    def __init__(self) -> None:
        self._next: HttpHandler | None = None

    @property
    def next_handler(self) -> HttpHandler | None:
        return self._next

    def add(self, handler: HttpHandler) -> HttpHandler:
        """Link handler after this one and return it, so calls can be chained.

        Raises:
            ConfigurationError: If this handler is already linked.
        """
        if self._next is not None and self._next is not handler:
            raise ConfigurationError(
                f"{type(self).__name__} is already linked to "
                f"{type(self._next).__name__}; build a separate instance per chain.",
                offending_type=type(self),
            )
        self._next = handler
        return handler

    def chain(self, request: Request) -> Response:
        """Delegate request to the next handler.

        Raises:
            ConfigurationError: If this is the last handler in the chain.
        """
        if self._next is None:
            raise ConfigurationError(
                f"{type(self).__name__} attempted to delegate but is the last handler in the chain.",
                offending_type=type(self),
            )
        return self._next.handle(request)


class StaticResponseHandler(HttpHandler):
    """Terminal handler that answers every request with the same response."""

    def __init__(self, response: Response) -> None:
        self.response = response

    def handle(self, request: Request) -> Response:
        return self.response


def build_chain(steps: Sequence[HttpHandler]) -> HttpHandler:
    """Link handlers in order and return the head of the chain.

    Every step except the last must be able to delegate. The last step
    should be a terminal handler.

    Args:
        steps: Handlers in the order a request visits them.

    Returns:
        The first handler; call its handle() to run the chain.

    Raises:
        ConfigurationError: If steps is empty, a non-final step cannot
            delegate, or a step is already linked elsewhere.
    """
    if not steps:
        raise ConfigurationError("A handler chain needs at least one handler.")

    for index, (current, following) in enumerate(zip(steps, steps[1:])):
        if not isinstance(current, ChainedHttpHandler):
            raise ConfigurationError(
                f"Handler at position {index} ({type(current).__name__}) cannot "
                f"delegate, so it must be the last handler in the chain.",
                offending_type=type(current),
            )
        current.add(following)

    logger.debug("Built handler chain: %s", " -> ".join(type(step).__name__ for step in steps))
    return steps[0]
