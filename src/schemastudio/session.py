"""Per-activation session state."""

from __future__ import annotations

from schemastudio.host import Surface, TextEditor
from schemastudio.models import PanelState
from schemastudio.results import LOADING


class SessionState:
    """Owns the surface, the tracked editor and the last committed state.

    Each refresh takes a sequence number; only the latest one may commit,
    so a slow cycle that finishes after a newer one is dropped.
    """

    def __init__(self) -> None:
        self.surface: Surface | None = None
        self.tracked_editor: TextEditor | None = None
        self.cached_version = LOADING
        self.panel_state: PanelState | None = None
        self._sequence = 0

    @property
    def tracked_path(self) -> str | None:
        if self.tracked_editor is None:
            return None
        return self.tracked_editor.document.path

    def next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    def commit(self, state: PanelState) -> bool:
        """Replace the panel state, unless a newer refresh has started."""
        if not self.is_current(state.sequence):
            return False
        self.panel_state = state
        self.cached_version = state.version
        return True

    def clear(self) -> None:
        self.surface = None
        self.tracked_editor = None
        self.cached_version = LOADING
        self.panel_state = None
