"""Slash-delimited workspace paths.

A path is a string starting with ``/``, with segments separated by a single
``/`` and no trailing slash (except the root ``/`` itself).  All functions
here are pure.
"""

from __future__ import annotations

from codedeck.workspace_runtime.errors import InvalidPathError

ROOT = "/"
SEPARATOR = "/"


def normalize(path: str) -> str:
    """Return the normalized form of *path*.

    Adds a leading slash, collapses repeated slashes and strips any trailing
    slash.  ``""`` and ``"///"`` both normalize to the root.
    """
    segments = [s for s in path.split(SEPARATOR) if s]
    return SEPARATOR + SEPARATOR.join(segments)


def split(path: str) -> list[str]:
    """Return the segments of *path*.  The root has no segments."""
    return [s for s in normalize(path).split(SEPARATOR) if s]


def validate_name(name: str) -> None:
    """Raise ``InvalidPathError`` unless *name* is usable as a single segment."""
    if not name or not name.strip():
        msg = "Name must not be empty"
        raise InvalidPathError(msg)
    if SEPARATOR in name:
        msg = f"Name must not contain '{SEPARATOR}': {name!r}"
        raise InvalidPathError(msg)
    if name in (".", ".."):
        msg = f"Name must not be a relative segment: {name!r}"
        raise InvalidPathError(msg)


def join(parent_path: str, name: str) -> str:
    """Join a folder path and a child name into a normalized path."""
    validate_name(name)
    parent = normalize(parent_path)
    if parent == ROOT:
        return ROOT + name
    return parent + SEPARATOR + name


def is_ancestor(path: str, candidate: str) -> bool:
    """True iff *candidate* equals *path* or lies beneath it.

    The root is an ancestor of everything.
    """
    path = normalize(path)
    candidate = normalize(candidate)
    if path == ROOT:
        return True
    return candidate == path or candidate.startswith(path + SEPARATOR)


def basename(path: str) -> str:
    """Last segment of *path*; the root's basename is ``""``."""
    segments = split(path)
    return segments[-1] if segments else ""


def parent(path: str) -> str | None:
    """Parent folder of *path*, or ``None`` for the root."""
    segments = split(path)
    if not segments:
        return None
    return SEPARATOR + SEPARATOR.join(segments[:-1])


# -- Remote path mapping -------------------------------------------------------


def to_remote(path: str) -> str:
    """Workspace path -> host-relative path (no leading slash)."""
    return normalize(path).lstrip(SEPARATOR)


def from_remote(remote_path: str) -> str:
    """Host-relative path -> workspace path."""
    return normalize(remote_path)
