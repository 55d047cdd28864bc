"""Configuration records.

Both records are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServeOptions:
    """Capabilities of a static-resource middleware. Immutable after creation.

    Every flag is independent and off by default::

        options = ServeOptions(enable_etag=True, public_cache_control=True)
    """

    # Emit an ETag and answer 304 when If-None-Match matches it
    enable_etag: bool = False

    # Emit Last-Modified and answer 304 on If-Modified-Since; only consulted
    # when ETag negotiation is off or the resource has no etag
    enable_last_modified: bool = False

    # Append ``Cache-Control: public`` to fresh responses
    public_cache_control: bool = False

    # 403 instead of falling through when the file is not readable
    forbid_on_missing_rights: bool = False

    # Hand the transfer to the host server through ``X-Sendfile``
    use_sendfile: bool = False


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation."""

    debug: bool = False
