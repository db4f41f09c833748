"""Unit tests for WorkspaceRegistry."""

from __future__ import annotations

import pytest

from codedeck.workspace_runtime.errors import WorkspaceNotFoundError
from codedeck.workspace_runtime.registry import WorkspaceRegistry


def test_create_seeded_and_empty(registry: WorkspaceRegistry) -> None:
    seeded = registry.create()
    empty = registry.create(seed=False, workspace_id="blank")

    assert len(seeded.files()) == 3
    assert empty.workspace_id == "blank"
    assert empty.files() == []
    assert registry.count == 2
    assert registry.get("blank") is empty


def test_create_duplicate_id(registry: WorkspaceRegistry) -> None:
    registry.create(workspace_id="ws")
    with pytest.raises(ValueError, match="already exists"):
        registry.create(workspace_id="ws")


def test_remove_and_lookup(registry: WorkspaceRegistry) -> None:
    ws = registry.create(workspace_id="ws")
    assert registry.remove("ws") is ws
    with pytest.raises(WorkspaceNotFoundError):
        registry.get("ws")
    with pytest.raises(WorkspaceNotFoundError):
        registry.remove("ws")


def test_clear(registry: WorkspaceRegistry) -> None:
    registry.create()
    registry.create()
    registry.clear()
    assert registry.all_workspaces() == []
