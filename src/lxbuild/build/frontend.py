"""LX frontend collaborator.

The frontend (lexer, parser and AST-to-C++ translator) is an external
component. lxbuild only needs two calls from it:

- translate one .lx file into C++ under <project>/build
- aggregate the function declarations of all translated files into one header

Both signal success or failure only; the orchestrator discovers the produced
.cpp files itself.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..errors import HeaderAggregationFailed, TranslationFailed
from ..process_runner import ProcessRunner


class IFrontend(ABC):
    """Interface for the LX frontend."""

    @abstractmethod
    def translate(
        self, project_dir: Path, src_dir_name: str, file_name: str, debug: bool
    ) -> None:
        """Translate <project_dir>/<src_dir_name>/<file_name> into C++.

        Raises:
            TranslationFailed: If lexing, parsing or translation fails
        """
        pass

    @abstractmethod
    def create_header(self, project_dir: Path) -> None:
        """Write the aggregated header into the project's build directory.

        Raises:
            HeaderAggregationFailed: If the header cannot be produced
        """
        pass


class CommandFrontend(IFrontend):
    """Frontend reached through its command-line executable.

    Invocations:
        <executable> translate <project_dir> <src_dir_name> <file_name> [--debug]
        <executable> header <project_dir>
    """

    def __init__(self, executable: str, runner: Optional[ProcessRunner] = None):
        self.executable = executable
        self.runner = runner if runner is not None else ProcessRunner()

    def translate(
        self, project_dir: Path, src_dir_name: str, file_name: str, debug: bool
    ) -> None:
        cmd = [self.executable, "translate", str(project_dir), src_dir_name, file_name]
        if debug:
            cmd.append("--debug")

        outcome = self.runner.run(cmd, cwd=project_dir)
        if not outcome.success:
            raise TranslationFailed(
                Path(project_dir) / src_dir_name / file_name, outcome.output
            )

    def create_header(self, project_dir: Path) -> None:
        outcome = self.runner.run([self.executable, "header", str(project_dir)], cwd=project_dir)
        if not outcome.success:
            raise HeaderAggregationFailed(project_dir, outcome.output)
