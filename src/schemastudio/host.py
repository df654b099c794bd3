"""Interfaces the hosting editor provides to the session."""

from enum import IntEnum
from typing import Protocol

from schemastudio.models import PanelState, Range


class ViewColumn(IntEnum):
    BESIDE = -2
    ACTIVE = -1
    ONE = 1
    TWO = 2
    THREE = 3


class TextDocument(Protocol):
    path: str
    scheme: str


class TextEditor(Protocol):
    document: TextDocument
    view_column: int | None

    def reveal_range(self, range: Range, *, center: bool = True) -> None: ...

    def select(self, range: Range) -> None: ...


class Surface(Protocol):
    """The persistent panel that displays a PanelState."""

    view_column: int | None

    def render(self, state: PanelState) -> None: ...

    def reveal(self, column: int, *, preserve_focus: bool = True) -> None: ...

    def dispose(self) -> None: ...


class EditorHost(Protocol):
    workspace_root: str | None

    def active_editor(self) -> TextEditor | None: ...

    def create_surface(self, column: int) -> Surface: ...

    async def show_document(
        self, document: TextDocument, column: int | None, *, preview: bool = True
    ) -> TextEditor: ...

    async def close_active_editor(self) -> None: ...

    def show_error_message(self, message: str) -> None: ...
