"""Remote host clients used by the sync adapter."""

from codedeck.workspace_runtime.remote.base import RemoteHost
from codedeck.workspace_runtime.remote.memory import InMemoryRemoteHost

__all__ = ["InMemoryRemoteHost", "RemoteHost"]
