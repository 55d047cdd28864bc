"""Conditional GET negotiation.

Decides, once per request, whether the client's cached copy is still
valid and which validators the response should carry.

ETag takes strict precedence: Last-Modified is only consulted when ETag
negotiation is disabled or the resource has no etag. The two are never
combined.
"""

from dataclasses import dataclass
from datetime import UTC
from email.utils import formatdate, parsedate_to_datetime

from larder._internal.multimap import MultiValueMapping
from larder.config import ServeOptions
from larder.static.sources import ResourceMetadata


@dataclass(frozen=True, slots=True)
class Negotiation:
    """Outcome of conditional negotiation.

    ``headers`` holds the validators (and ``Cache-Control``) to put on
    the response, whether or not it is a 304.
    """

    not_modified: bool
    headers: tuple[tuple[str, str], ...] = ()


def http_date(timestamp: float) -> str:
    """Format POSIX seconds as an IMF-fixdate (``Sun, 06 Nov 1994 08:49:37 GMT``)."""
    return formatdate(timestamp, usegmt=True)


def parse_http_date(value: str | None) -> int | None:
    """Parse an HTTP-date to whole POSIX seconds; ``None`` when unparseable."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp())


def negotiate(
    headers: MultiValueMapping,
    metadata: ResourceMetadata,
    options: ServeOptions,
) -> Negotiation:
    """Compare request validators in *headers* against *metadata*."""
    validators: list[tuple[str, str]] = []

    if options.enable_etag and metadata.etag is not None:
        validators.append(("ETag", metadata.etag))
        if metadata.etag == headers.get("if-none-match"):
            return Negotiation(not_modified=True, headers=tuple(validators))

    elif (
        options.enable_last_modified
        and metadata.last_modified is not None
        and int(metadata.last_modified) > 0
    ):
        modified = int(metadata.last_modified)
        validators.append(("Last-Modified", http_date(modified)))
        since = parse_http_date(headers.get("if-modified-since"))
        if since is not None and since >= modified:
            return Negotiation(not_modified=True, headers=tuple(validators))

    if options.public_cache_control:
        validators.append(("Cache-Control", "public"))

    return Negotiation(not_modified=False, headers=tuple(validators))
