"""Pytest fixtures for schemastudio tests."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

COMMAND = ("jsonschema",)


@pytest.fixture
def sample_schema_file(tmp_path: Path) -> Path:
    """Create a sample JSON Schema for testing."""
    schema_file = tmp_path / "schema.json"
    schema_file.write_text(
        json.dumps(
            {
                "$schema": "http://json-schema.org/draft-07/schema#",
                "type": "object",
                "properties": {"x": {"type": "string"}},
            },
            indent=2,
        )
    )
    return schema_file


@pytest.fixture
def sample_yaml_schema(tmp_path: Path) -> Path:
    """Create a sample YAML schema for testing."""
    schema_file = tmp_path / "schema.YAML"
    schema_file.write_text(
        """\
$schema: https://json-schema.org/draft/2020-12/schema
type: string
"""
    )
    return schema_file


@pytest.fixture
def sample_text_file(tmp_path: Path) -> Path:
    """Create a file that is not a schema."""
    text_file = tmp_path / "notes.txt"
    text_file.write_text("not a schema\n")
    return text_file


def make_process(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout.encode(), stderr.encode()))
    process.returncode = returncode
    return process


class FakeCli:
    """Stands in for asyncio.create_subprocess_exec, keyed by subcommand."""

    def __init__(self) -> None:
        self.responses: dict[str, object] = {}
        self.calls: list[list[str]] = []

    def respond(
        self, subcommand: str, stdout: str = "", stderr: str = "", returncode: int = 0
    ) -> None:
        self.responses[subcommand] = (stdout, stderr, returncode)

    def fail(self, subcommand: str, error: BaseException) -> None:
        self.responses[subcommand] = error

    def calls_for(self, subcommand: str) -> list[list[str]]:
        return [call for call in self.calls if self._key(call) == subcommand]

    @staticmethod
    def _key(cmd: list[str]) -> str:
        args = cmd[len(COMMAND):]
        if args[:2] == ["fmt", "--check"]:
            return "fmt --check"
        return args[0]

    async def __call__(self, *cmd: str, **kwargs: object) -> MagicMock:
        self.calls.append(list(cmd))
        response = self.responses.get(self._key(list(cmd)), ("", "", 0))
        if isinstance(response, BaseException):
            raise response
        stdout, stderr, returncode = response
        return make_process(stdout, stderr, returncode)


@pytest.fixture
def fake_cli():
    """Patch process creation with a scriptable fake CLI."""
    cli = FakeCli()
    cli.respond("version", stdout="v9.3.1\n")
    with patch("asyncio.create_subprocess_exec", new=cli):
        yield cli


@dataclass
class FakeDocument:
    path: str
    scheme: str = "file"


@dataclass
class FakeEditor:
    document: FakeDocument
    view_column: int | None = 1
    reveal_range: MagicMock = field(default_factory=MagicMock)
    select: MagicMock = field(default_factory=MagicMock)


@dataclass
class FakeSurface:
    view_column: int | None = 2
    renders: list = field(default_factory=list)
    reveal: MagicMock = field(default_factory=MagicMock)
    dispose: MagicMock = field(default_factory=MagicMock)

    def render(self, state) -> None:
        self.renders.append(state)

    @property
    def last(self):
        return self.renders[-1]


class FakeHost:
    """Minimal editor host recording what the session asks of it."""

    def __init__(self, workspace_root: str | None = None) -> None:
        self.workspace_root = workspace_root
        self.active: FakeEditor | None = None
        self.surfaces: list[FakeSurface] = []
        self.created_columns: list[int] = []
        self.shown: list[tuple[FakeDocument, int | None]] = []
        self.errors: list[str] = []
        self.closed = 0

    def active_editor(self) -> FakeEditor | None:
        return self.active

    def create_surface(self, column: int) -> FakeSurface:
        self.created_columns.append(column)
        surface = FakeSurface(view_column=2 if self.active else 1)
        self.surfaces.append(surface)
        return surface

    async def show_document(self, document, column, *, preview: bool = True) -> FakeEditor:
        self.shown.append((document, column))
        self.active = FakeEditor(document=document, view_column=column)
        return self.active

    async def close_active_editor(self) -> None:
        self.closed += 1
        self.active = None

    def show_error_message(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def host(tmp_path: Path) -> FakeHost:
    return FakeHost(workspace_root=str(tmp_path))


@pytest.fixture
def make_editor():
    def factory(path, view_column: int | None = 1, scheme: str = "file") -> FakeEditor:
        return FakeEditor(document=FakeDocument(path=str(path), scheme=scheme), view_column=view_column)

    return factory
