"""Parse ``scheme:///path`` URIs.

Only the scheme and an absolute path are recognised.  There is no
authority, query or fragment handling: anything after ``://`` is the
path, and it must start with ``/``.
"""

from __future__ import annotations

import re

from uri_repository._types import InvalidUriError, ParsedUri

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------
#   ([A-Za-z]+)   – scheme, ASCII letters only  (capture group 1)
#   ://           – literal separator
#   (/.*)         – absolute path, rest of the string  (capture group 2)
_SCHEME_PATTERN = re.compile(r"[A-Za-z]+")
_URI_PATTERN = re.compile(r"([A-Za-z]+)://(/.*)", re.DOTALL)


def is_valid_scheme(scheme: object) -> bool:
    """Return ``True`` if *scheme* is a non-empty, purely alphabetic string."""
    return isinstance(scheme, str) and _SCHEME_PATTERN.fullmatch(scheme) is not None


def parse_uri(uri: str) -> ParsedUri:
    """Split *uri* into its scheme and path.

    Parameters
    ----------
    uri:
        A string such as ``"resource:///acme/blog/config.yml"``.

    Returns
    -------
    ParsedUri
        ``ParsedUri(scheme="resource", path="/acme/blog/config.yml")``.

    Raises
    ------
    InvalidUriError
        If *uri* is not a string, lacks an alphabetic scheme, lacks the
        ``://`` separator, or its path does not start with ``/``.
    """
    if not isinstance(uri, str):
        raise InvalidUriError(f"The URI must be a string, got {type(uri).__name__}.")

    match = _URI_PATTERN.fullmatch(uri)
    if match is None:
        raise InvalidUriError(
            f'The URI "{uri}" is invalid. Expected the form "scheme:///absolute/path".'
        )

    return ParsedUri(scheme=match.group(1), path=match.group(2))
