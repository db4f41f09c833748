"""Unit tests for the tree store (no workspace, no index)."""

from __future__ import annotations

import pytest

from codedeck.workspace_runtime import paths
from codedeck.workspace_runtime.errors import (
    InvalidPathError,
    ParentNotFoundError,
    PathCollisionError,
    RootRemovalError,
)
from codedeck.workspace_runtime.fs import tree as tree_store
from codedeck.workspace_runtime.models.tree import File, Folder, Tree


def _file(parent: str, name: str, content: str = "") -> File:
    return File(name=name, path=paths.join(parent, name), content=content)


def _folder(parent: str, name: str) -> Folder:
    return Folder(name=name, path=paths.join(parent, name))


@pytest.fixture
def tree() -> Tree:
    t = tree_store.new_tree()
    tree_store.insert(t, "/", _file("/", "index.html"))
    tree_store.insert(t, "/", _folder("/", "src"))
    tree_store.insert(t, "/src", _file("/src", "app.js"))
    tree_store.insert(t, "/src", _folder("/src", "lib"))
    tree_store.insert(t, "/src/lib", _file("/src/lib", "util.ts"))
    return t


def test_new_tree_is_bare_root() -> None:
    t = tree_store.new_tree()
    assert t.root.path == "/"
    assert t.root.children == []


def test_insert_then_find(tree: Tree) -> None:
    node = _file("/src/lib", "extra.py")
    tree_store.insert(tree, "/src/lib", node)
    assert tree_store.find(tree, "/src/lib/extra.py") is node


def test_find_root_and_missing(tree: Tree) -> None:
    assert tree_store.find(tree, "/") is tree.root
    assert tree_store.find(tree, "/nope") is None
    assert tree_store.find(tree, "/src/nope/deeper") is None


def test_find_normalizes(tree: Tree) -> None:
    node = tree_store.find(tree, "//src//app.js/")
    assert isinstance(node, File)
    assert node.path == "/src/app.js"


def test_insert_missing_parent(tree: Tree) -> None:
    with pytest.raises(ParentNotFoundError):
        tree_store.insert(tree, "/missing", _file("/missing", "a.js"))


def test_insert_parent_is_file(tree: Tree) -> None:
    with pytest.raises(ParentNotFoundError):
        tree_store.insert(tree, "/index.html", _file("/index.html", "a.js"))


def test_insert_collision_across_kinds(tree: Tree) -> None:
    """Files and folders share one path space."""
    with pytest.raises(PathCollisionError):
        tree_store.insert(tree, "/", _folder("/", "index.html"))
    with pytest.raises(PathCollisionError):
        tree_store.insert(tree, "/", _file("/", "src"))


def test_insert_rejects_inconsistent_path(tree: Tree) -> None:
    with pytest.raises(InvalidPathError):
        tree_store.insert(tree, "/src", File(name="a.js", path="/elsewhere/a.js"))


def test_insertion_order_is_preserved() -> None:
    t = tree_store.new_tree()
    for name in ["zeta.js", "alpha.js"]:
        tree_store.insert(t, "/", _file("/", name))
    tree_store.insert(t, "/", _folder("/", "beta"))
    tree_store.insert(t, "/", _file("/", "aaa.css"))

    assert [c.name for c in t.root.children] == ["zeta.js", "alpha.js", "beta", "aaa.css"]


def test_remove_file(tree: Tree) -> None:
    removed = tree_store.remove(tree, "/src/app.js")
    assert isinstance(removed, File)
    assert tree_store.find(tree, "/src/app.js") is None
    assert tree_store.find(tree, "/src/lib/util.ts") is not None


def test_remove_folder_takes_subtree(tree: Tree) -> None:
    removed = tree_store.remove(tree, "/src")
    assert isinstance(removed, Folder)
    assert [f.path for f in tree_store.iter_files(removed)] == ["/src/app.js", "/src/lib/util.ts"]
    assert tree_store.find(tree, "/src") is None
    assert tree_store.find(tree, "/src/lib/util.ts") is None
    assert [c.path for c in tree.root.children] == ["/index.html"]


def test_remove_is_idempotent(tree: Tree) -> None:
    tree_store.remove(tree, "/src/lib")
    after_first = tree.model_dump()
    assert tree_store.remove(tree, "/src/lib") is None
    assert tree.model_dump() == after_first


def test_remove_missing_parent_is_noop(tree: Tree) -> None:
    before = tree.model_dump()
    assert tree_store.remove(tree, "/no/such/file.js") is None
    assert tree.model_dump() == before


def test_remove_root_rejected(tree: Tree) -> None:
    with pytest.raises(RootRemovalError):
        tree_store.remove(tree, "/")
    with pytest.raises(RootRemovalError):
        tree_store.remove(tree, "//")
    assert len(list(tree_store.iter_files(tree))) == 3


def test_toggle_expanded(tree: Tree) -> None:
    folder = tree_store.find(tree, "/src")
    assert isinstance(folder, Folder)
    assert folder.expanded is True

    assert tree_store.toggle_expanded(tree, "/src") is False
    assert folder.expanded is False
    assert tree_store.toggle_expanded(tree, "/src") is True


def test_toggle_expanded_noop_for_files_and_missing(tree: Tree) -> None:
    before = tree.model_dump()
    assert tree_store.toggle_expanded(tree, "/index.html") is None
    assert tree_store.toggle_expanded(tree, "/missing") is None
    assert tree.model_dump() == before


def test_walk_is_depth_first_in_child_order(tree: Tree) -> None:
    assert [n.path for n in tree_store.walk(tree)] == [
        "/",
        "/index.html",
        "/src",
        "/src/app.js",
        "/src/lib",
        "/src/lib/util.ts",
    ]


def test_render(tree: Tree) -> None:
    assert tree_store.render(tree) == "\n".join(
        [
            "/",
            "index.html",
            "src/",
            "  app.js",
            "  lib/",
            "    util.ts",
        ]
    )


def test_deep_nesting_does_not_recurse() -> None:
    """Walks are iterative; depth beyond the recursion limit is fine."""
    t = tree_store.new_tree()
    parent = t.root
    for i in range(1500):
        child = _folder(parent.path, f"d{i}")
        parent.children.append(child)
        parent = child
    leaf = _file(parent.path, "leaf.py")
    parent.children.append(leaf)

    assert tree_store.find(t, leaf.path) is leaf
    assert list(tree_store.iter_files(t)) == [leaf]
