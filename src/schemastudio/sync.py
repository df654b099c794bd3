"""Keep the display surface in step with the editor.

The synchronizer reacts to editor events (panel command, focus changes,
saves, panel disposal) and to messages posted by the surface. Every
refresh runs all analyses for the tracked schema concurrently, correlates
the outcomes into a single PanelState and commits it in one step: the
surface re-renders from it and the document's diagnostics are replaced.
"""

from __future__ import annotations

import logging
from typing import Any

from schemastudio.cli import run_analyses, run_format
from schemastudio.config import StudioConfig
from schemastudio.coordinates import to_editor_range
from schemastudio.diagnostics import DiagnosticCollection, DiagnosticsPublisher
from schemastudio.documents import get_file_ref, is_schema_file
from schemastudio.exceptions import StudioError
from schemastudio.host import EditorHost, TextDocument, TextEditor, ViewColumn
from schemastudio.messages import FormatSchema, GoToPosition, parse_message
from schemastudio.models import PanelState
from schemastudio.results import build_panel_state, loading_state
from schemastudio.session import SessionState

logger = logging.getLogger(__name__)

FILE_SCHEME = "file"


def relocation_column(surface_column: int | None) -> ViewColumn:
    """Where to move a document that opened in the surface's column."""
    return ViewColumn.TWO if surface_column == ViewColumn.ONE else ViewColumn.ONE


class Synchronizer:
    """Drives refreshes of the display surface from editor events."""

    def __init__(
        self,
        host: EditorHost,
        config: StudioConfig,
        diagnostics: DiagnosticCollection | None = None,
    ) -> None:
        self.host = host
        self.config = config
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollection()
        self.publisher = DiagnosticsPublisher(self.diagnostics, config.source)
        self.session = SessionState()

    @property
    def surface_open(self) -> bool:
        return self.session.surface is not None

    @property
    def panel_state(self) -> PanelState | None:
        return self.session.panel_state

    def track(self, editor: TextEditor | None) -> None:
        """Adopt an editor as the tracked document if it holds a schema file."""
        if editor is None or editor.document.scheme != FILE_SCHEME:
            return
        if is_schema_file(editor.document.path):
            self.session.tracked_editor = editor

    async def open_panel(self) -> None:
        """Show the panel, creating it on first use, and refresh it."""
        column = ViewColumn.BESIDE if self.host.active_editor() else ViewColumn.ONE

        if self.session.surface is not None:
            self.session.surface.reveal(column, preserve_focus=True)
        else:
            self.session.surface = self.host.create_surface(column)
            logger.debug("Created surface in column %s", column)

        await self.refresh()

    def on_surface_disposed(self) -> None:
        """The user closed the panel. The tracked document is kept."""
        self.session.surface = None

    async def on_active_editor_changed(self, editor: TextEditor | None) -> None:
        if editor is None or editor.document.scheme != FILE_SCHEME:
            return

        surface = self.session.surface
        if surface is not None and editor.view_column == surface.view_column:
            target = relocation_column(surface.view_column)
            logger.debug("Moving %s out of the panel's column to %s", editor.document.path, target)
            await self.host.close_active_editor()
            editor = await self.host.show_document(editor.document, target, preview=False)

        if not is_schema_file(editor.document.path):
            logger.debug("Not a schema, keeping tracked document: %s", editor.document.path)
            return

        self.session.tracked_editor = editor
        if self.surface_open:
            await self.refresh()

    async def on_document_saved(self, document: TextDocument) -> None:
        if not self.surface_open or self.session.tracked_path is None:
            return
        if document.path == self.session.tracked_path and is_schema_file(document.path):
            await self.refresh()

    async def refresh(self) -> PanelState | None:
        """Run one refresh cycle and commit its result.

        Returns:
            The committed state, or None if there is no surface or a newer
            refresh superseded this one.
        """
        if self.session.surface is None:
            return None

        sequence = self.session.next_sequence()
        path = self.session.tracked_path
        file_ref = get_file_ref(path, self.config.workspace_root)

        self.session.surface.render(loading_state(file_ref, self.session.cached_version, sequence))

        outcomes = await run_analyses(
            file_ref.absolute_path if file_ref else None,
            command=self.config.command,
        )
        state = build_panel_state(file_ref, outcomes, sequence)

        if self.session.surface is None:
            logger.debug("Surface closed during refresh %d", sequence)
            return None
        if not self.session.commit(state):
            logger.debug("Discarding superseded refresh %d", sequence)
            return None

        self.session.surface.render(state)
        self.publisher.publish(path, state.lint if file_ref else None)
        return state

    async def handle_message(self, message: Any) -> None:
        """Handle a message posted by the surface. Unknown messages are ignored."""
        command = parse_message(message)
        if command is None:
            logger.debug("Ignoring surface message: %r", message)
            return

        editor = self.session.tracked_editor
        if editor is None:
            return

        if isinstance(command, GoToPosition):
            target = to_editor_range(command.position)
            editor.reveal_range(target, center=True)
            editor.select(target)
            await self.host.show_document(editor.document, editor.view_column)
        elif isinstance(command, FormatSchema):
            await self.format_document(editor)

    async def format_document(self, editor: TextEditor) -> None:
        """Format the document in place, then refresh.

        A failure is reported to the user and leaves the panel state as is.
        """
        try:
            await run_format(editor.document.path, command=self.config.command)
        except (StudioError, OSError) as e:
            logger.warning("Format failed for %s: %s", editor.document.path, e)
            self.host.show_error_message(f"Format failed: {e}")
            return

        await self.host.show_document(editor.document, editor.view_column)
        await self.refresh()

    def deactivate(self) -> None:
        """Dispose the panel and drop all session state."""
        if self.session.surface is not None:
            self.session.surface.dispose()
        self.publisher.clear()
        self.session.clear()


def activate(
    host: EditorHost,
    config: StudioConfig | None = None,
    diagnostics: DiagnosticCollection | None = None,
) -> Synchronizer:
    """Start a session, tracking the active editor if it holds a schema.

    Raises:
        CliNotFoundError: If no config is given and the CLI cannot be found.
    """
    if config is None:
        config = StudioConfig.from_env(workspace_root=host.workspace_root)
    synchronizer = Synchronizer(host, config, diagnostics)
    synchronizer.track(host.active_editor())
    return synchronizer
