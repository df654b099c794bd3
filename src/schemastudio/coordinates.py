"""Translate CLI positions into editor ranges."""

from schemastudio.models import EditorPosition, Position, Range


def to_editor_range(position: Position) -> Range:
    """Map a 1-based inclusive CLI span to a 0-based end-exclusive range.

    The end column is kept as is: the CLI's inclusive 1-based end column
    is already the exclusive 0-based bound.
    """
    return Range(
        start=EditorPosition(position.line_start - 1, position.column_start - 1),
        end=EditorPosition(position.line_end - 1, position.column_end),
    )
