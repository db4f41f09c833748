"""Filename extension -> editor language table.

The table is a stable contract: unknown or missing extensions map to
``javascript`` rather than to an "unknown" language.
"""

from __future__ import annotations

from codedeck.workspace_runtime.models.enums import Language

DEFAULT_LANGUAGE = Language.JAVASCRIPT

EXTENSION_LANGUAGES: dict[str, Language] = {
    "js": Language.JAVASCRIPT,
    "ts": Language.TYPESCRIPT,
    "jsx": Language.JSX,
    "tsx": Language.TSX,
    "html": Language.HTML,
    "css": Language.CSS,
    "json": Language.JSON,
    "md": Language.MARKDOWN,
    "py": Language.PYTHON,
}


def file_extension(filename: str) -> str:
    """Text after the last dot, or ``""`` when the name has no dot."""
    parts = filename.split(".")
    return parts[-1] if len(parts) > 1 else ""


def language_for(filename: str) -> Language:
    return EXTENSION_LANGUAGES.get(file_extension(filename).lower(), DEFAULT_LANGUAGE)
