"""Publish lint findings as editor diagnostics."""

import logging
from collections.abc import Iterable, Iterator

from schemastudio.coordinates import to_editor_range
from schemastudio.models import Diagnostic, Finding, LintResult

logger = logging.getLogger(__name__)


class DiagnosticCollection:
    """In-memory diagnostics store, keyed by document path."""

    def __init__(self, name: str = "sourcemeta-studio") -> None:
        self.name = name
        self._entries: dict[str, tuple[Diagnostic, ...]] = {}

    def set(self, path: str, diagnostics: Iterable[Diagnostic]) -> None:
        self._entries[path] = tuple(diagnostics)

    def get(self, path: str) -> tuple[Diagnostic, ...]:
        return self._entries.get(path, ())

    def delete(self, path: str) -> None:
        self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def to_diagnostics(findings: Iterable[Finding], source: str) -> list[Diagnostic]:
    """One warning per finding, in the order the CLI reported them."""
    return [
        Diagnostic(
            range=to_editor_range(finding.span),
            message=finding.message,
            source=source,
            code=finding.id or None,
        )
        for finding in findings
    ]


class DiagnosticsPublisher:
    """Replaces the diagnostics of the document under analysis."""

    def __init__(self, collection: DiagnosticCollection, source: str) -> None:
        self.collection = collection
        self.source = source

    def publish(self, path: str | None, lint: LintResult | None) -> None:
        """Replace a document's diagnostics with the findings of a lint run.

        Without a lint run, the document's diagnostics are cleared.
        """
        if path is None:
            return

        self.collection.delete(path)
        if lint is None or not lint.findings:
            return

        diagnostics = to_diagnostics(lint.findings, self.source)
        self.collection.set(path, diagnostics)
        logger.debug("Published %d diagnostics for %s", len(diagnostics), path)

    def clear(self, path: str | None = None) -> None:
        if path is None:
            self.collection.clear()
        else:
            self.collection.delete(path)
