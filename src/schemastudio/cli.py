"""Async wrapper around the jsonschema CLI."""

import asyncio
import logging
import shutil
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from schemastudio.exceptions import AnalysisError, CliNotFoundError, LaunchError
from schemastudio.models import AnalysisKind, AnalysisRequest, AnalysisResult

logger = logging.getLogger(__name__)

NO_OUTPUT = "No output"

# Argument vectors, without the document path
VERSION_ARGS = ("version",)
LINT_ARGS = ("lint", "--json")
FORMAT_CHECK_ARGS = ("fmt", "--check")
FORMAT_ARGS = ("fmt",)
METASCHEMA_ARGS = ("metaschema", "--json")


def find_cli() -> tuple[str, ...]:
    """Find the jsonschema CLI.

    Prefers a ``jsonschema`` binary on PATH, then falls back to running the
    npm distribution through ``npx``.

    Returns:
        Command prefix to launch the CLI with.

    Raises:
        CliNotFoundError: If neither is available.
    """
    binary = shutil.which("jsonschema")
    if binary is not None:
        return (binary,)

    npx = shutil.which("npx.cmd" if sys.platform == "win32" else "npx")
    if npx is not None:
        return (npx, "jsonschema")

    raise CliNotFoundError(
        "jsonschema CLI not found on PATH. "
        "Install with: npm install --global @sourcemeta/jsonschema"
    )


@dataclass(frozen=True)
class _Completed:
    stdout: str
    stderr: str
    returncode: int

    @property
    def output(self) -> str:
        return self.stdout or self.stderr or NO_OUTPUT


async def _run_cli(
    args: Sequence[str],
    *,
    command: Sequence[str] | None = None,
) -> _Completed:
    """Run the jsonschema CLI and wait for it to exit.

    Args:
        args: Subcommand and arguments.
        command: Command prefix (auto-detected if None).

    Returns:
        Captured stdout/stderr and the exit code.

    Raises:
        CliNotFoundError: If the CLI is not found.
        LaunchError: If the process could not be started.
    """
    prefix = tuple(command) if command else find_cli()
    cmd = [*prefix, *args]
    logger.debug("Running %s", cmd)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise LaunchError(f"Failed to execute jsonschema CLI: {e}") from e

    stdout, stderr = await process.communicate()
    return _Completed(
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
        returncode=process.returncode,
    )


async def get_version(*, command: Sequence[str] | None = None) -> AnalysisResult:
    """Get the version of the jsonschema CLI.

    Raises:
        CliNotFoundError: If the CLI is not found.
        LaunchError: If the process could not be started.
        AnalysisError: If the CLI exits with a nonzero code.
    """
    result = await _run_cli(VERSION_ARGS, command=command)
    if result.returncode != 0:
        raise AnalysisError(
            result.stderr.strip() or f"Process exited with code {result.returncode}",
            stderr=result.stderr,
        )
    return AnalysisResult(kind=AnalysisKind.VERSION, raw_output=result.stdout.strip())


async def run_lint(
    path: str | Path, *, command: Sequence[str] | None = None
) -> AnalysisResult:
    """Lint a schema.

    The CLI exits nonzero when it finds lint issues, but still prints its
    JSON report, so the output is returned regardless of the exit code.

    Raises:
        CliNotFoundError: If the CLI is not found.
        LaunchError: If the process could not be started.
    """
    result = await _run_cli([*LINT_ARGS, str(path)], command=command)
    return AnalysisResult(
        kind=AnalysisKind.LINT,
        raw_output=result.output,
        exit_code=result.returncode,
    )


async def run_format_check(
    path: str | Path, *, command: Sequence[str] | None = None
) -> AnalysisResult:
    """Check whether a schema is formatted. Exit code 0 means it is.

    Raises:
        CliNotFoundError: If the CLI is not found.
        LaunchError: If the process could not be started.
    """
    result = await _run_cli([*FORMAT_CHECK_ARGS, str(path)], command=command)
    return AnalysisResult(
        kind=AnalysisKind.FORMAT_CHECK,
        raw_output=result.output,
        exit_code=result.returncode,
    )


async def run_metaschema(
    path: str | Path, *, command: Sequence[str] | None = None
) -> AnalysisResult:
    """Validate a schema against its metaschema.

    Exit code 0 means valid, 2 means validation errors and 1 a fatal error.

    Raises:
        CliNotFoundError: If the CLI is not found.
        LaunchError: If the process could not be started.
    """
    result = await _run_cli([*METASCHEMA_ARGS, str(path)], command=command)
    return AnalysisResult(
        kind=AnalysisKind.METASCHEMA,
        raw_output=result.output,
        exit_code=result.returncode,
    )


async def run_format(path: str | Path, *, command: Sequence[str] | None = None) -> None:
    """Format a schema in place.

    Raises:
        CliNotFoundError: If the CLI is not found.
        LaunchError: If the process could not be started.
        AnalysisError: If formatting fails.
    """
    result = await _run_cli([*FORMAT_ARGS, str(path)], command=command)
    if result.returncode != 0:
        raise AnalysisError(
            result.stderr.strip() or f"Process exited with code {result.returncode}",
            stderr=result.stderr,
        )


_RUNNERS = {
    AnalysisKind.LINT: run_lint,
    AnalysisKind.FORMAT_CHECK: run_format_check,
    AnalysisKind.METASCHEMA: run_metaschema,
}


def plan_requests(path: str | None) -> list[AnalysisRequest]:
    """List the invocations of one refresh cycle.

    The version call ignores the document; the others only run when
    there is a schema to analyze.
    """
    requests = [AnalysisRequest(kind=AnalysisKind.VERSION)]
    if path is not None:
        requests.extend(
            AnalysisRequest(kind=kind, document_path=path) for kind in _RUNNERS
        )
    return requests


async def run_analyses(
    path: str | None,
    *,
    command: Sequence[str] | None = None,
) -> dict[AnalysisKind, AnalysisResult | BaseException]:
    """Run every analysis for a refresh cycle concurrently.

    A failing invocation does not affect the others: its exception is
    returned in place of its result.

    Args:
        path: Schema to analyze, or None when no schema is focused.
        command: Command prefix (auto-detected if None).

    Returns:
        Mapping of each launched analysis to its result or exception.
    """
    requests = plan_requests(path)
    tasks = []
    for request in requests:
        if request.kind is AnalysisKind.VERSION:
            tasks.append(get_version(command=command))
        else:
            tasks.append(_RUNNERS[request.kind](request.document_path, command=command))

    settled = await asyncio.gather(*tasks, return_exceptions=True)

    outcomes: dict[AnalysisKind, AnalysisResult | BaseException] = {}
    for request, outcome in zip(requests, settled):
        if isinstance(outcome, BaseException):
            logger.error("Error in %s analysis: %s", request.kind.value, outcome)
        outcomes[request.kind] = outcome
    return outcomes
