"""Recognizing schema documents and describing them for display."""

import os
from pathlib import Path

from schemastudio.models import FileRef

SCHEMA_EXTENSIONS = (".json", ".yaml", ".yml")


def is_schema_file(path: str | None) -> bool:
    """Whether a path looks like a JSON or YAML schema, by extension."""
    if not path:
        return False
    return os.path.splitext(path)[1].lower() in SCHEMA_EXTENSIONS


def get_file_ref(path: str | None, workspace_root: str | None = None) -> FileRef | None:
    """Describe a schema document, or return None if it is not one.

    The display path is relative to the workspace root when the document
    lives under it.
    """
    if not is_schema_file(path):
        return None

    display_path = path
    if workspace_root:
        try:
            display_path = str(Path(path).relative_to(workspace_root))
        except ValueError:
            pass

    return FileRef(
        absolute_path=path,
        display_path=display_path,
        file_name=os.path.basename(path),
    )
