"""Result of resolving a request against a static source.

The static middleware decides what should happen before it touches the
pipeline: answer with a response, hand the request to the next handler,
or fail with an HTTP error. ``StaticServer.__call__`` is the only place
that acts on the decision, so ``resolve`` can be tested without one.
"""

from dataclasses import dataclass
from typing import TypeAlias

from larder.errors import HTTPError
from larder.http.response import Response, StreamingResponse


@dataclass(frozen=True, slots=True)
class Handled:
    """The middleware produced the final response."""

    response: Response | StreamingResponse


@dataclass(frozen=True, slots=True)
class Delegate:
    """Nothing to serve here; call the next handler."""


@dataclass(frozen=True, slots=True)
class Fail:
    """The request must fail with *error*."""

    error: HTTPError


Outcome: TypeAlias = Handled | Delegate | Fail

DELEGATE = Delegate()
