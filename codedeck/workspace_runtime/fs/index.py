"""Flat id -> file index kept in lockstep with the tree.

The index holds the *same* ``File`` objects the tree does, so a content
update through the index is visible from the tree without a second write.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from codedeck.workspace_runtime.errors import NodeNotFoundError
from codedeck.workspace_runtime.fs.tree import iter_files
from codedeck.workspace_runtime.models.tree import File, Tree


class FileIndex:
    def __init__(self, files: Iterable[File] = ()) -> None:
        self._files: dict[str, File] = {}
        for file in files:
            self.add(file)

    @classmethod
    def from_tree(cls, tree: Tree) -> FileIndex:
        """Index every file reachable in *tree*, in tree order."""
        return cls(iter_files(tree))

    # -- Mutation --------------------------------------------------------------

    def add(self, file: File) -> None:
        if file.id in self._files:
            msg = f"Duplicate file id in index: {file.id}"
            raise ValueError(msg)
        self._files[file.id] = file

    def discard(self, file_id: str) -> File | None:
        """Remove *file_id* if present and return the removed file."""
        return self._files.pop(file_id, None)

    def update(self, file_id: str, content: str) -> File:
        """Replace a file's content in place.  Raises ``NodeNotFoundError``."""
        file = self.get(file_id)
        file.content = content
        return file

    # -- Query -----------------------------------------------------------------

    def get(self, file_id: str) -> File:
        """Return the file with *file_id*.  Raises ``NodeNotFoundError``."""
        try:
            return self._files[file_id]
        except KeyError:
            msg = f"File not found: {file_id}"
            raise NodeNotFoundError(msg) from None

    def ids(self) -> set[str]:
        return set(self._files)

    def files(self) -> list[File]:
        """Files in insertion order."""
        return list(self._files.values())

    def __contains__(self, file_id: object) -> bool:
        return file_id in self._files

    def __iter__(self) -> Iterator[File]:
        return iter(list(self._files.values()))

    def __len__(self) -> int:
        return len(self._files)
