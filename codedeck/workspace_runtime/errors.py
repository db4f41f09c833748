"""Domain exceptions for the workspace runtime.

Core operations raise these synchronously to the immediate caller.  They
subclass the builtin that best matches their meaning so callers may catch
either the precise type or ``LookupError`` / ``ValueError``.  Translation to
HTTP status codes is the routers' responsibility.
"""

from __future__ import annotations


class InvalidPathError(ValueError):
    """Raised when a node name or path argument is malformed."""


class ParentNotFoundError(LookupError):
    """Raised when an insertion parent does not resolve to a folder."""


class PathCollisionError(ValueError):
    """Raised when a node already exists at the target path."""


class NodeNotFoundError(LookupError):
    """Raised when a file id is not present in the file index."""


class RootRemovalError(ValueError):
    """Raised when removal of the root folder is attempted."""


class IndexMismatchError(ValueError):
    """Raised when a file index does not match the files reachable in a tree."""


class WorkspaceNotFoundError(LookupError):
    """Raised when a workspace id is not registered."""


# -- Remote --------------------------------------------------------------------


class RemoteError(RuntimeError):
    """Base class for failures reported by a remote host."""


class RemoteConflictError(RemoteError):
    """The host rejected the optimistic-concurrency precondition of a write."""


class RemoteUnavailableError(RemoteError):
    """Transport, authentication or other host failure.  Retryable by the caller."""
