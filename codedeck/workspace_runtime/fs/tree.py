"""Tree store: lookup, insertion and removal of nodes by path.

All walks use an explicit stack so deeply nested trees never hit the
interpreter's recursion limit.  Lookups are linear in the number of nodes,
which is fine at editor scale; subtrees that cannot contain the target path
are pruned.

Children are kept in insertion order.  Nothing here sorts by name or kind.
"""

from __future__ import annotations

from collections.abc import Iterator

from codedeck.workspace_runtime import paths
from codedeck.workspace_runtime.errors import (
    InvalidPathError,
    ParentNotFoundError,
    PathCollisionError,
    RootRemovalError,
)
from codedeck.workspace_runtime.models.tree import File, Folder, Node, Tree


def new_tree() -> Tree:
    """Return an empty tree (a lone root folder)."""
    return Tree(root=Folder(name="root", path=paths.ROOT))


# -- Traversal -----------------------------------------------------------------


def walk(node: Tree | Node) -> Iterator[Node]:
    """Yield *node* and all its descendants, depth-first, in child order."""
    start = node.root if isinstance(node, Tree) else node
    stack: list[Node] = [start]
    while stack:
        current = stack.pop()
        yield current
        match current:
            case Folder():
                stack.extend(reversed(current.children))
            case File():
                pass


def iter_files(node: Tree | Node) -> Iterator[File]:
    """Yield every file at or beneath *node*, in tree order."""
    for current in walk(node):
        if isinstance(current, File):
            yield current


# -- Lookup --------------------------------------------------------------------


def find(tree: Tree, path: str) -> Node | None:
    """Return the node at exactly *path*, or ``None``."""
    target = paths.normalize(path)
    stack: list[Node] = [tree.root]
    while stack:
        current = stack.pop()
        if current.path == target:
            return current
        match current:
            case Folder():
                if paths.is_ancestor(current.path, target):
                    stack.extend(reversed(current.children))
            case File():
                pass
    return None


def find_folder(tree: Tree, path: str) -> Folder | None:
    node = find(tree, path)
    return node if isinstance(node, Folder) else None


# -- Mutation ------------------------------------------------------------------


def insert(tree: Tree, parent_path: str, node: Node) -> None:
    """Append *node* to the folder at *parent_path*.

    ``node.path`` must already equal ``paths.join(parent_path, node.name)``.

    Raises:
        ParentNotFoundError: *parent_path* does not resolve to a folder.
        PathCollisionError: a node already exists at ``node.path``.
        InvalidPathError: ``node.path`` is inconsistent with its parent and name.
    """
    parent = find_folder(tree, parent_path)
    if parent is None:
        msg = f"Parent folder not found: {parent_path}"
        raise ParentNotFoundError(msg)

    expected = paths.join(parent.path, node.name)
    if node.path != expected:
        msg = f"Node path {node.path!r} does not match {expected!r}"
        raise InvalidPathError(msg)

    if find(tree, node.path) is not None:
        msg = f"A file or folder already exists at {node.path}"
        raise PathCollisionError(msg)

    parent.children.append(node)


def remove(tree: Tree, path: str) -> Node | None:
    """Detach the node at *path* (with its whole subtree) and return it.

    Returns ``None`` when nothing exists at *path*.  Raises
    ``RootRemovalError`` for the root.
    """
    target = paths.normalize(path)
    parent_path = paths.parent(target)
    if parent_path is None:
        msg = "The root folder cannot be removed"
        raise RootRemovalError(msg)

    parent = find_folder(tree, parent_path)
    if parent is None:
        return None
    for i, child in enumerate(parent.children):
        if child.path == target:
            return parent.children.pop(i)
    return None


def toggle_expanded(tree: Tree, folder_path: str) -> bool | None:
    """Flip a folder's ``expanded`` flag and return the new value.

    No-op returning ``None`` if *folder_path* is not a folder.
    """
    folder = find_folder(tree, folder_path)
    if folder is None:
        return None
    folder.expanded = not folder.expanded
    return folder.expanded


# -- Presentation --------------------------------------------------------------


def render(tree: Tree) -> str:
    """Indented plain-text outline of *tree*; folders end with ``/``."""
    lines = ["/"]
    stack: list[tuple[Node, int]] = [(child, 0) for child in reversed(tree.root.children)]
    while stack:
        node, depth = stack.pop()
        indent = "  " * depth
        match node:
            case Folder():
                lines.append(f"{indent}{node.name}/")
                stack.extend((child, depth + 1) for child in reversed(node.children))
            case File():
                lines.append(f"{indent}{node.name}")
    return "\n".join(lines)
