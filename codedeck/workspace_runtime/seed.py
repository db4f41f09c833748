"""Starter project for a fresh workspace."""

from __future__ import annotations

from codedeck.workspace_runtime import paths
from codedeck.workspace_runtime.fs.tree import insert, new_tree
from codedeck.workspace_runtime.languages import language_for
from codedeck.workspace_runtime.models.tree import File, Tree

INDEX_HTML = """<html>
  <head>
    <title>My App</title>
    <link rel="stylesheet" href="styles.css">
  </head>
  <body>
    <div id="app"></div>
    <script src="app.js"></script>
  </body>
</html>"""

STYLES_CSS = """body {
  font-family: Arial, sans-serif;
  margin: 0;
  padding: 20px;
}

#app {
  background-color: #f5f5f5;
  border-radius: 5px;
  padding: 20px;
}"""

APP_JS = """// Main application code
document.addEventListener("DOMContentLoaded", () => {
  const appElement = document.getElementById("app");
  appElement.innerHTML = "<h1>Hello, World!</h1>";
});"""

SEED_FILES: list[tuple[str, str]] = [
    ("index.html", INDEX_HTML),
    ("styles.css", STYLES_CSS),
    ("app.js", APP_JS),
]


def seed_tree() -> Tree:
    tree = new_tree()
    for name, content in SEED_FILES:
        insert(
            tree,
            paths.ROOT,
            File(name=name, path=paths.join(paths.ROOT, name), content=content, language=language_for(name)),
        )
    return tree
