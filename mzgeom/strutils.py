"""Small helpers for file names and whitespace handling."""

from __future__ import annotations

import string

_WHITESPACE = " \t\n\v\f\r"
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def directory_of(filename: str) -> str:
    """Return everything before the last '/', or '.' if there is none."""
    pos = filename.rfind("/")
    return "." if pos < 0 else filename[:pos]


def extension_of(filename: str) -> str:
    """Return everything after the last '.', or '' if there is none."""
    pos = filename.rfind(".")
    return "" if pos < 0 else filename[pos + 1:]


def filename_of(filename: str) -> str:
    """Return everything after the last '/', or the whole name."""
    pos = filename.rfind("/")
    return filename if pos < 0 else filename[pos + 1:]


def combine_dir(directory: str, rel: str) -> str:
    """Join a relative path onto a directory; absolute paths pass through."""
    if rel.startswith("/"):
        return rel
    return f"{directory}/{rel}"


def lower(s: str) -> str:
    """Lower-case ASCII letters only."""
    return s.translate(_TO_LOWER)


def upper(s: str) -> str:
    """Upper-case ASCII letters only."""
    return s.translate(_TO_UPPER)


def trimws(s: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return s.strip(_WHITESPACE)


def split(s: str, c: str) -> tuple[str, str] | None:
    """Split at the first occurrence of ``c`` and trim both halves.

    Returns None when ``c`` does not occur in ``s``.
    """
    pos = s.find(c)
    if pos < 0:
        return None
    return trimws(s[:pos]), trimws(s[pos + 1:])