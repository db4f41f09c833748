"""In-memory file tree store and its flat file index."""

from codedeck.workspace_runtime.fs.index import FileIndex
from codedeck.workspace_runtime.fs.tree import find, insert, iter_files, remove, toggle_expanded, walk

__all__ = ["FileIndex", "find", "insert", "iter_files", "remove", "toggle_expanded", "walk"]
