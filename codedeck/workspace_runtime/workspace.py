"""Workspace state container.

A ``Workspace`` owns the file tree, the flat file index, the active-file
pointer and the view settings.  It is the only entry point for mutating
them: every public operation runs under one re-entrant lock and either
applies completely or raises with the previous state untouched.

Readers get detached copies (``snapshot``, ``find``, ``get_file``) so they
never observe a half-applied mutation.
"""

from __future__ import annotations

import threading
import uuid

from codedeck.workspace_runtime import paths
from codedeck.workspace_runtime.errors import IndexMismatchError, InvalidPathError, NodeNotFoundError
from codedeck.workspace_runtime.fs import tree as tree_store
from codedeck.workspace_runtime.fs.index import FileIndex
from codedeck.workspace_runtime.languages import language_for
from codedeck.workspace_runtime.log import workspace_logger
from codedeck.workspace_runtime.models.enums import Theme
from codedeck.workspace_runtime.models.tree import File, Folder, Node, Tree
from codedeck.workspace_runtime.models.workspace import ViewSettings, WorkspaceSnapshot
from codedeck.workspace_runtime.seed import seed_tree


class Workspace:
    """Single-owner state for one editor session.

    Invariant: ``index.ids()`` is exactly the set of file ids reachable in
    ``tree``, and the index holds the tree's own ``File`` objects.
    """

    def __init__(
        self,
        tree: Tree | None = None,
        *,
        workspace_id: str | None = None,
        active_file_id: str | None = None,
        view: ViewSettings | None = None,
    ) -> None:
        self.workspace_id = workspace_id or uuid.uuid4().hex
        self._tree = tree if tree is not None else tree_store.new_tree()
        self._index = FileIndex.from_tree(self._tree)
        self._active_file_id = active_file_id
        self._view = view or ViewSettings()
        self._lock = threading.RLock()
        self._log = workspace_logger(self.workspace_id)

    @classmethod
    def seeded(cls, workspace_id: str | None = None) -> Workspace:
        """Workspace holding the starter project, with its first file active."""
        tree = seed_tree()
        first = next(tree_store.iter_files(tree), None)
        return cls(tree, workspace_id=workspace_id, active_file_id=first.id if first else None)

    # -- Create ----------------------------------------------------------------

    def create_file(self, name: str, parent_path: str, content: str = "") -> str:
        """Create a file under *parent_path* and return its id.

        The language comes from the extension.  The active file is unchanged.
        """
        path = paths.join(parent_path, name)
        file = File(name=name, path=path, content=content, language=language_for(name))
        with self._lock:
            tree_store.insert(self._tree, parent_path, file)
            self._index.add(file)
        self._log.debug("Created file {} ({})", path, file.language)
        return file.id

    def create_folder(self, name: str, parent_path: str) -> str:
        path = paths.join(parent_path, name)
        folder = Folder(name=name, path=path, expanded=True)
        with self._lock:
            tree_store.insert(self._tree, parent_path, folder)
        self._log.debug("Created folder {}", path)
        return folder.id

    # -- Update ----------------------------------------------------------------

    def update_file_content(self, file_id: str, content: str) -> None:
        """Replace a file's content.  Raises ``NodeNotFoundError``."""
        with self._lock:
            self._index.update(file_id, content)

    def record_remote_revision(self, file_id: str, revision: str | None) -> None:
        """Remember the revision a file now has on the remote host."""
        with self._lock:
            self._index.get(file_id).remote_revision = revision

    def set_active_file(self, file_id: str | None) -> None:
        with self._lock:
            self._active_file_id = file_id

    def toggle_expanded(self, folder_path: str) -> bool | None:
        with self._lock:
            return tree_store.toggle_expanded(self._tree, folder_path)

    # -- Delete ----------------------------------------------------------------

    def delete_file(self, path: str) -> list[str]:
        """Delete the file at *path*.  Returns the removed file ids.

        Deleting the active file clears the active pointer; no other file is
        selected in its place.
        """
        return self._delete(path)

    def delete_folder(self, path: str) -> list[str]:
        """Delete the folder at *path* and everything beneath it."""
        return self._delete(path)

    def _delete(self, path: str) -> list[str]:
        with self._lock:
            removed = tree_store.remove(self._tree, path)
            if removed is None:
                return []
            removed_ids = [f.id for f in tree_store.iter_files(removed)]
            for file_id in removed_ids:
                self._index.discard(file_id)
            if self._active_file_id in removed_ids:
                self._active_file_id = None
        self._log.debug("Deleted {} ({} files)", path, len(removed_ids))
        return removed_ids

    # -- Bulk ------------------------------------------------------------------

    def replace_all(self, tree: Tree, index: FileIndex, active_file_id: str | None = None) -> None:
        """Swap in a new tree and index at once.

        Raises ``IndexMismatchError`` if *index* is not exactly the files of
        *tree*, and ``NodeNotFoundError`` if *active_file_id* is not indexed.
        """
        if tree.root.path != paths.ROOT:
            msg = f"Tree root must be {paths.ROOT!r}, got {tree.root.path!r}"
            raise InvalidPathError(msg)
        tree_files = list(tree_store.iter_files(tree))
        if {f.id for f in tree_files} != index.ids() or len(tree_files) != len(index):
            msg = "File index does not match the files in the tree"
            raise IndexMismatchError(msg)
        if any(index.get(f.id) is not f for f in tree_files):
            msg = "File index must hold the tree's own file objects"
            raise IndexMismatchError(msg)
        if active_file_id is not None and active_file_id not in index:
            msg = f"Active file not in index: {active_file_id}"
            raise NodeNotFoundError(msg)

        with self._lock:
            self._tree = tree
            self._index = index
            self._active_file_id = active_file_id
        self._log.info("Replaced tree ({} files)", len(index))

    # -- View ------------------------------------------------------------------

    def set_split_position(self, position: float) -> None:
        self.update_view(split_position=position)

    def toggle_preview(self) -> bool:
        with self._lock:
            self.update_view(show_preview=not self._view.show_preview)
            return self._view.show_preview

    def set_theme(self, theme: Theme | str) -> None:
        self.update_view(theme=theme)

    def update_view(self, **changes: object) -> ViewSettings:
        """Apply validated view-setting changes.  Raises ``ValidationError``."""
        with self._lock:
            self._view = ViewSettings.model_validate({**self._view.model_dump(), **changes})
            return self._view.model_copy()

    # -- Read ------------------------------------------------------------------

    @property
    def active_file_id(self) -> str | None:
        return self._active_file_id

    @property
    def active_file(self) -> File | None:
        """Copy of the active file, or ``None`` when nothing (valid) is selected."""
        with self._lock:
            if self._active_file_id is None or self._active_file_id not in self._index:
                return None
            return self._index.get(self._active_file_id).model_copy()

    @property
    def view(self) -> ViewSettings:
        return self._view.model_copy()

    def find(self, path: str) -> Node | None:
        with self._lock:
            node = tree_store.find(self._tree, path)
            return node.model_copy(deep=True) if node is not None else None

    def get_file(self, file_id: str) -> File:
        """Copy of the file with *file_id*.  Raises ``NodeNotFoundError``."""
        with self._lock:
            return self._index.get(file_id).model_copy()

    def files(self) -> list[File]:
        """Copies of all files in index order."""
        with self._lock:
            return [f.model_copy() for f in self._index]

    def render(self) -> str:
        with self._lock:
            return tree_store.render(self._tree)

    def snapshot(self) -> WorkspaceSnapshot:
        with self._lock:
            tree = self._tree.model_copy(deep=True)
            files = {f.id: f for f in tree_store.iter_files(tree)}
            return WorkspaceSnapshot(
                workspace_id=self.workspace_id,
                tree=tree,
                files=files,
                active_file_id=self._active_file_id,
                view=self._view.model_copy(),
            )
