"""
Shared fixtures for lxbuild tests.

Provides a fake MSVC/Windows SDK installation on disk, a descriptor writer,
and process runners that never spawn a real compiler.
"""

import json
from pathlib import Path
from typing import List, Optional

import pytest

from lxbuild.build.frontend import IFrontend
from lxbuild.errors import TranslationFailed
from lxbuild.process_runner import ProcessOutcome, ProcessRunner

MSVC_VERSION = "14.40.33807"
SDK_VERSION = "10.0.22621.0"


class FakeProcessRunner(ProcessRunner):
    """Records commands and simulates cl.exe.

    Writes the /Fo object and /OUT executable a real compiler would produce.
    A command mentioning a file named ``fail_on`` exits with ``fail_code``.
    """

    def __init__(self, fail_on: Optional[str] = None, fail_code: int = 2, start_failure: bool = False):
        super().__init__(verbose=False)
        self.fail_on = fail_on
        self.fail_code = fail_code
        self.start_failure = start_failure
        self.commands: List[List[str]] = []

    def run(self, command, cwd=None) -> ProcessOutcome:
        cmd = [str(part) for part in command]
        self.commands.append(cmd)

        if self.start_failure:
            return ProcessOutcome(
                command=cmd,
                returncode=None,
                stderr=f"Failed to start {cmd[0]}: [Errno 2] No such file or directory",
                started=False,
            )

        if self.fail_on and any(Path(arg).name == self.fail_on for arg in cmd):
            return ProcessOutcome(
                command=cmd,
                returncode=self.fail_code,
                stdout=f"{self.fail_on}(3): error C2065: 'x': undeclared identifier",
                stderr="",
            )

        for arg in cmd:
            if arg.startswith("/Fo"):
                Path(arg[len("/Fo"):]).write_text("object")
            elif arg.startswith("/OUT:"):
                Path(arg[len("/OUT:"):]).write_text("executable")

        return ProcessOutcome(command=cmd, returncode=0)


class FakeFrontend(IFrontend):
    """Frontend that writes one trivial .cpp per translated .lx file."""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.translated: List[tuple] = []
        self.headers: List[Path] = []

    def translate(self, project_dir, src_dir_name, file_name, debug):
        self.translated.append((Path(project_dir), src_dir_name, file_name, debug))
        if file_name == self.fail_on:
            raise TranslationFailed(Path(project_dir) / src_dir_name / file_name, "parse error")
        stem = file_name[: -len(".lx")] if file_name.endswith(".lx") else file_name
        (Path(project_dir) / "build" / f"{stem}.cpp").write_text("int main() { return 0; }\n")

    def create_header(self, project_dir):
        self.headers.append(Path(project_dir))
        (Path(project_dir) / "build" / "functions.h").write_text("#pragma once\n")


def make_msvc_layout(root: Path, with_compiler: bool = True, skip: Optional[List[str]] = None) -> dict:
    """Create a fake Visual Studio + Windows SDK tree and return its compiler section."""
    skip = skip or []
    vs_dir = root / "VisualStudio"
    sdk_dir = root / "WindowsKits"
    msvc_root = vs_dir / "VC" / "Tools" / "MSVC" / MSVC_VERSION

    directories = {
        "msvc_include": msvc_root / "include",
        "msvc_lib": msvc_root / "lib" / "x86",
        "ucrt_include": sdk_dir / "Include" / SDK_VERSION / "ucrt",
        "shared_include": sdk_dir / "Include" / SDK_VERSION / "shared",
        "um_include": sdk_dir / "Include" / SDK_VERSION / "um",
        "ucrt_lib": sdk_dir / "Lib" / SDK_VERSION / "ucrt" / "x86",
        "um_lib": sdk_dir / "Lib" / SDK_VERSION / "um" / "x86",
    }
    for name, path in directories.items():
        if name not in skip:
            path.mkdir(parents=True, exist_ok=True)

    compiler = msvc_root / "bin" / "Hostx86" / "x86" / "cl.exe"
    if with_compiler:
        compiler.parent.mkdir(parents=True, exist_ok=True)
        compiler.write_text("")

    return {
        "type": "MSVC-22",
        "dir": str(vs_dir),
        "version": MSVC_VERSION,
        "sdk-dir": str(sdk_dir),
        "sdk-version": SDK_VERSION,
    }


@pytest.fixture
def fake_runner():
    return FakeProcessRunner()


@pytest.fixture
def fake_frontend():
    return FakeFrontend()


@pytest.fixture
def msvc_section(tmp_path):
    """Compiler section pointing at a complete fake installation."""
    return make_msvc_layout(tmp_path / "toolchain")


@pytest.fixture
def project_dir(tmp_path):
    """Project root with a src/ directory and an empty build/ directory."""
    project = tmp_path / "project"
    (project / "src").mkdir(parents=True)
    (project / "build").mkdir()
    return project


@pytest.fixture
def write_descriptor(project_dir):
    """Factory writing <project_dir>/<name>.lx-build from a dict (or raw text)."""

    def _write(content, name: str = "hello.lx-build") -> Path:
        path = project_dir / name
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(json.dumps(content))
        return path

    return _write


@pytest.fixture
def runner_factory():
    """FakeProcessRunner class, for tests that need a failing runner."""
    return FakeProcessRunner


@pytest.fixture
def frontend_factory():
    return FakeFrontend


@pytest.fixture
def layout_factory():
    """make_msvc_layout, for tests that need an incomplete installation."""
    return make_msvc_layout
