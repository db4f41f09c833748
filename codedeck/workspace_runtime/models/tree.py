"""File tree data model.

A tree is rooted at exactly one ``Folder`` whose path is ``/``.  Nodes are a
tagged union over ``File`` and ``Folder`` discriminated on ``kind``; every
consumer matches on the concrete type rather than probing for a
``children`` attribute.
"""

from __future__ import annotations

import uuid
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from codedeck.workspace_runtime.models.enums import Language


def new_node_id() -> str:
    return uuid.uuid4().hex


class File(BaseModel):
    """A text file.

    ``language`` is fixed at creation.  ``remote_revision`` is only set for
    files materialized from (or pushed to) a remote host and is the
    precondition token for overwriting the remote copy.
    """

    kind: Literal["file"] = "file"
    id: str = Field(default_factory=new_node_id)
    name: str
    path: str
    content: str = ""
    language: Language = Language.JAVASCRIPT
    remote_revision: str | None = None


class Folder(BaseModel):
    """A folder.  ``children`` keep insertion order."""

    kind: Literal["folder"] = "folder"
    id: str = Field(default_factory=new_node_id)
    name: str
    path: str
    children: list[Node] = Field(default_factory=list)
    expanded: bool = True


Node = Annotated[File | Folder, Field(discriminator="kind")]


class Tree(BaseModel):
    root: Folder = Field(default_factory=lambda: Folder(name="root", path="/"))


Folder.model_rebuild()
Tree.model_rebuild()
