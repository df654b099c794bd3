"""Turn raw CLI output into the structured state shown to the user."""

import json
import logging
from typing import Any

from schemastudio.models import (
    AnalysisKind,
    AnalysisResult,
    FileRef,
    Finding,
    LintResult,
    PanelState,
    Position,
    Status,
)

logger = logging.getLogger(__name__)

LOADING = "Loading..."
NO_FILE = "No file selected"
NO_RESULTS = "No results"

# Health bar colours
HEALTH_GREEN = "#4caf50"
HEALTH_ORANGE = "#ff9800"
HEALTH_RED = "#f44336"
HEALTH_NONE = "#666"


def _parse_finding(entry: Any) -> Finding:
    if not isinstance(entry, dict):
        raise TypeError(f"Lint error entry must be an object, got {entry!r}")

    message = entry["message"]
    if not isinstance(message, str):
        raise TypeError("Lint error message must be a string")

    finding_id = entry.get("id")
    description = entry.get("description")
    return Finding(
        id=str(finding_id) if finding_id is not None else None,
        message=message,
        schema_location=str(entry.get("schemaLocation", "")),
        path=str(entry.get("path", "")),
        span=Position.from_sequence(entry["position"]),
        description=str(description) if description else None,
    )


def parse_lint_result(raw: str | bytes) -> LintResult:
    """Parse ``jsonschema lint --json`` output.

    Never raises: output that cannot be decoded into the expected report
    comes back as a degraded result with ``error`` set and no health.
    """
    if isinstance(raw, bytes):
        raw = raw.decode(errors="replace")

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        logger.info("Lint output is not JSON, keeping raw output")
        return LintResult(raw=raw, error=True)

    if not isinstance(data, dict):
        logger.info("Lint output is not a JSON object, keeping raw output")
        return LintResult(raw=raw, error=True)

    try:
        findings = tuple(_parse_finding(entry) for entry in data.get("errors") or [])
    except (KeyError, TypeError, ValueError) as e:
        logger.info("Malformed lint report: %s", e)
        return LintResult(raw=raw, error=True)

    health = data.get("health")
    if not isinstance(health, int) or isinstance(health, bool) or not 0 <= health <= 100:
        health = None

    valid = data.get("valid")
    if not isinstance(valid, bool):
        valid = None

    return LintResult(raw=raw, health=health, valid=valid, findings=findings)


def lint_status(lint: LintResult) -> Status:
    if lint.error:
        return Status.ERROR
    if lint.health is None:
        return Status.NONE
    return Status.SUCCESS if lint.health == 100 else Status.WARNING


def lint_passed(lint: LintResult) -> bool:
    """Whether the lint tab shows its "no lint errors" message."""
    return not lint.error and not lint.findings and (
        lint.valid is True or lint.health is not None
    )


def health_color(health: int | None) -> str:
    if health is None:
        return HEALTH_NONE
    if health > 90:
        return HEALTH_GREEN
    if health > 60:
        return HEALTH_ORANGE
    return HEALTH_RED


def health_label(health: int | None) -> str:
    return "Health: N/A" if health is None else f"Health: {health}%"


def format_status(result: AnalysisResult) -> Status:
    """Exit code 0 is formatted; any other code needs formatting."""
    if result.exit_code is None:
        return Status.NONE
    return Status.SUCCESS if result.exit_code == 0 else Status.WARNING


def needs_formatting(result: AnalysisResult) -> bool:
    return format_status(result) is Status.WARNING


def metaschema_status(result: AnalysisResult) -> Status:
    """0 is valid, 2 is a validation failure, 1 is fatal; anything else is unknown."""
    return {
        0: Status.SUCCESS,
        2: Status.ERROR,
        1: Status.FATAL,
    }.get(result.exit_code, Status.NONE)


def escape_output(text: str | None) -> str:
    """Escape tool output for verbatim display."""
    if not text:
        return NO_RESULTS
    return text.replace("<", "&lt;").replace(">", "&gt;")


def placeholder(kind: AnalysisKind, text: str) -> AnalysisResult:
    return AnalysisResult(kind=kind, raw_output=text)


def loading_state(document: FileRef | None, version: str, sequence: int = 0) -> PanelState:
    """The state rendered while a refresh cycle is in flight."""
    return PanelState(
        document=document,
        version=version,
        lint=LintResult(raw=LOADING),
        format=placeholder(AnalysisKind.FORMAT_CHECK, LOADING),
        metaschema=placeholder(AnalysisKind.METASCHEMA, LOADING),
        sequence=sequence,
        loading=True,
    )


def _error_text(error: BaseException) -> str:
    return f"Error: {error}"


def build_panel_state(
    document: FileRef | None,
    outcomes: dict[AnalysisKind, AnalysisResult | BaseException],
    sequence: int = 0,
) -> PanelState:
    """Correlate the outcomes of one refresh cycle into a panel state.

    Each failed invocation becomes its own error state; the others are
    kept. Analyses that did not run because no schema is focused show a
    "No file selected" placeholder.
    """
    version_outcome = outcomes.get(AnalysisKind.VERSION)
    if isinstance(version_outcome, BaseException):
        version = _error_text(version_outcome)
    elif version_outcome is None:
        version = LOADING
    else:
        version = version_outcome.raw_output

    lint_outcome = outcomes.get(AnalysisKind.LINT)
    if isinstance(lint_outcome, BaseException):
        lint = LintResult(raw=_error_text(lint_outcome), error=True)
    elif lint_outcome is None:
        lint = LintResult(raw=NO_FILE)
    else:
        lint = parse_lint_result(lint_outcome.raw_output)

    def settle(kind: AnalysisKind) -> AnalysisResult:
        outcome = outcomes.get(kind)
        if isinstance(outcome, BaseException):
            return placeholder(kind, _error_text(outcome))
        if outcome is None:
            return placeholder(kind, NO_FILE)
        return outcome

    return PanelState(
        document=document,
        version=version,
        lint=lint,
        format=settle(AnalysisKind.FORMAT_CHECK),
        metaschema=settle(AnalysisKind.METASCHEMA),
        sequence=sequence,
    )
