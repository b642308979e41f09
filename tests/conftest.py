"""Pytest configuration and shared fixtures for acmoj-presubmit tests."""

import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from acmoj_presubmit.hooks.process import ProcessOutput, ProcessRunner
from acmoj_presubmit.notify import Notifier

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    """Keep tests out of the project repo and away from the caller's env."""
    monkeypatch.chdir(tmp_path)
    for name in ("ACMOJ_PROJECT_ROOT", "ACMOJ_LOG_LEVEL", "ACMOJ_OUTPUT_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project(tmp_path):
    """Project root with an empty .acmoj/ directory."""
    root = tmp_path / "proj"
    (root / ".acmoj").mkdir(parents=True)
    assert str(root) != str(PROJECT_ROOT)
    return root


@pytest.fixture
def source_file(project):
    """Solution file inside the project."""
    path = project / "src" / "main.cpp"
    path.parent.mkdir()
    path.write_text("int main() {}\n")
    return path


@pytest.fixture
def write_hooks(project):
    """Write a hook list to .acmoj/pre-submit.json."""

    def _write(hooks):
        path = project / ".acmoj" / "pre-submit.json"
        if isinstance(hooks, str):
            path.write_text(hooks)
        else:
            path.write_text(json.dumps(hooks))
        return path

    return _write


@pytest.fixture
def make_script():
    """Write a /bin/sh script."""

    def _make(path: Path, body: str, executable: bool = True) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n" + body)
        if executable:
            path.chmod(0o755)
        return path

    return _make


@dataclass
class RunnerCall:
    command_line: str
    cwd: str
    env: dict
    stdin: str | None


@dataclass
class FakeProcessRunner(ProcessRunner):
    """Process runner that records calls and replays scripted outcomes.

    Each entry in ``outcomes`` is a ProcessOutput to return or an exception
    to raise; once exhausted, calls return empty output.
    """

    outcomes: list = field(default_factory=list)
    calls: list[RunnerCall] = field(default_factory=list)

    def run(self, command_line, cwd, env, stdin=None):
        self.calls.append(RunnerCall(command_line, str(cwd), dict(env), stdin))
        if not self.outcomes:
            return ProcessOutput(stdout="", stderr="")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that records everything it is told."""

    infos: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    log: list[str] = field(default_factory=list)
    progress_titles: list[str] = field(default_factory=list)
    cleared: int = 0
    shown: int = 0

    def info(self, message):
        self.infos.append(message)

    def warning(self, message):
        self.warnings.append(message)

    def error(self, message):
        self.errors.append(message)

    def append_log(self, line):
        self.log.append(line)

    def clear_log(self):
        self.cleared += 1
        self.log.clear()

    def show_log(self):
        self.shown += 1

    def progress(self, title):
        self.progress_titles.append(title)
        return super().progress(title)


@pytest.fixture
def fake_runner():
    return FakeProcessRunner()


@pytest.fixture
def notifier():
    return RecordingNotifier()
