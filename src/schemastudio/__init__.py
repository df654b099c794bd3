"""Schema Studio - live jsonschema CLI analysis for the schema open in an editor."""

from schemastudio.cli import (
    find_cli,
    get_version,
    run_analyses,
    run_format,
    run_format_check,
    run_lint,
    run_metaschema,
)
from schemastudio.config import StudioConfig
from schemastudio.coordinates import to_editor_range
from schemastudio.diagnostics import DiagnosticCollection, DiagnosticsPublisher
from schemastudio.exceptions import AnalysisError, CliNotFoundError, LaunchError, StudioError
from schemastudio.logging_config import configure_logging
from schemastudio.messages import FormatSchema, GoToPosition, parse_message
from schemastudio.models import (
    AnalysisKind,
    AnalysisResult,
    Diagnostic,
    FileRef,
    Finding,
    LintResult,
    PanelState,
    Position,
    Range,
    Status,
)
from schemastudio.results import build_panel_state, parse_lint_result
from schemastudio.sync import Synchronizer, activate

__version__ = "0.1.0"

__all__ = [
    # Session
    "activate",
    "Synchronizer",
    "StudioConfig",
    "configure_logging",
    # CLI functions
    "find_cli",
    "get_version",
    "run_lint",
    "run_format_check",
    "run_format",
    "run_metaschema",
    "run_analyses",
    # Results
    "parse_lint_result",
    "build_panel_state",
    "to_editor_range",
    "DiagnosticCollection",
    "DiagnosticsPublisher",
    # Messages
    "parse_message",
    "GoToPosition",
    "FormatSchema",
    # Models
    "AnalysisKind",
    "AnalysisResult",
    "Diagnostic",
    "FileRef",
    "Finding",
    "LintResult",
    "PanelState",
    "Position",
    "Range",
    "Status",
    # Exceptions
    "StudioError",
    "CliNotFoundError",
    "LaunchError",
    "AnalysisError",
]
