"""Data models for Schema Studio analysis results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class AnalysisKind(str, Enum):
    """The analyses run against a schema on every refresh."""

    VERSION = "version"
    LINT = "lint"
    FORMAT_CHECK = "formatCheck"
    METASCHEMA = "metaschema"


class Status(str, Enum):
    """Outcome indicator shown next to each analysis tab."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"
    NONE = "none"


@dataclass(frozen=True)
class Position:
    """A span reported by the jsonschema CLI.

    Lines and columns are 1-based and both ends are inclusive.

    Attributes:
        line_start: First line of the span.
        column_start: First column of the span.
        line_end: Last line of the span.
        column_end: Last column of the span.
    """

    line_start: int
    column_start: int
    line_end: int
    column_end: int

    def __post_init__(self) -> None:
        for name in ("line_start", "column_start", "line_end", "column_end"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an integer, got {value!r}")
        if min(self.line_start, self.column_start, self.column_end) < 1:
            raise ValueError("Positions are 1-based")
        if self.line_start > self.line_end:
            raise ValueError(
                f"line_start ({self.line_start}) is after line_end ({self.line_end})"
            )
        if self.line_start == self.line_end and self.column_start > self.column_end:
            raise ValueError(
                f"column_start ({self.column_start}) is after "
                f"column_end ({self.column_end}) on line {self.line_start}"
            )

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "Position":
        """Build a position from the CLI's ``[lineStart, columnStart, lineEnd, columnEnd]`` array."""
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise TypeError(f"Position must be a 4-element array, got {values!r}")
        if len(values) != 4:
            raise ValueError(f"Position must have 4 elements, got {len(values)}")
        return cls(*values)

    def to_list(self) -> list[int]:
        return [self.line_start, self.column_start, self.line_end, self.column_end]


@dataclass(frozen=True)
class EditorPosition:
    """A 0-based line/character position in the editor."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """An editor range: 0-based, end-exclusive."""

    start: EditorPosition
    end: EditorPosition


@dataclass(frozen=True)
class Finding:
    """One issue reported by ``jsonschema lint``.

    Attributes:
        id: Rule identifier, if the CLI reported one.
        message: Short human readable message.
        schema_location: JSON Pointer into the schema, as a URI fragment.
        path: JSON Pointer of the offending keyword.
        span: Source position of the issue.
        description: Longer explanation of the rule.
    """

    id: str | None
    message: str
    schema_location: str
    path: str
    span: Position
    description: str | None = None


@dataclass(frozen=True)
class AnalysisRequest:
    """A single invocation of the CLI within a refresh cycle."""

    kind: AnalysisKind
    document_path: str | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """Captured output of one CLI invocation.

    Attributes:
        kind: Which analysis produced this result.
        raw_output: Captured output (stdout, else stderr, else a placeholder).
        exit_code: Process exit code; absent for the version call,
            for placeholders and for invocations that failed to launch.
        parsed_at: When the result was captured.
    """

    kind: AnalysisKind
    raw_output: str
    exit_code: int | None = None
    parsed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class LintResult:
    """Structured view of ``jsonschema lint --json`` output.

    A result with ``error`` set is degraded: the output could not be decoded
    (or the invocation failed) and only ``raw`` is meaningful.
    """

    raw: str
    health: int | None = None
    valid: bool | None = None
    findings: tuple[Finding, ...] = ()
    error: bool = False


@dataclass(frozen=True)
class FileRef:
    """The schema document currently under analysis."""

    absolute_path: str
    display_path: str
    file_name: str


@dataclass(frozen=True)
class PanelState:
    """Everything the display surface shows, from a single refresh cycle.

    Instances are built whole and never mutated, so health, findings and
    tool outputs always belong to the same cycle.
    """

    document: FileRef | None
    version: str
    lint: LintResult
    format: AnalysisResult
    metaschema: AnalysisResult
    sequence: int = 0
    loading: bool = False


@dataclass(frozen=True)
class Diagnostic:
    """An editor diagnostic derived from a lint finding."""

    range: Range
    message: str
    source: str
    severity: str = "warning"
    code: str | None = None
