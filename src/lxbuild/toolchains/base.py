"""Toolchain driver interface.

Every native toolchain family (currently only MSVC) implements this
capability set. The BuildOrchestrator talks to a driver exclusively through
it, so adding a toolchain never touches the orchestration logic.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from ..process_runner import ProcessRunner


class IToolchainDriver(ABC):
    """Interface for C/C++ toolchain drivers.

    A driver that finished construction is guaranteed usable: all of its
    installation paths have been verified, and none of the operations below
    check them again.
    """

    @classmethod
    @abstractmethod
    def create(
        cls,
        descriptor_path: Path,
        toolchain_section: Mapping[str, Any],
        runner: Optional[ProcessRunner] = None,
        verbose: bool = False,
    ) -> "IToolchainDriver":
        """Build a driver from the descriptor's compiler section.

        Args:
            descriptor_path: Path to the .lx-build file (locates the project)
            toolchain_section: The raw "compiler" object of the descriptor
            runner: Process runner used for compile/link invocations
            verbose: Print progress for each unit

        Returns:
            Fully validated driver

        Raises:
            ToolchainResolutionError: If fields or installation paths are missing
        """
        pass

    @abstractmethod
    def compile_unit(self, source_file: Path) -> Path:
        """Compile one intermediate C++ file to an object file.

        Args:
            source_file: Path to the generated .cpp file

        Returns:
            Path to the object file written next to the source

        Raises:
            CompilationFailed: If the compiler fails to start or exits non-zero
        """
        pass

    @abstractmethod
    def compile_units(self, source_files: Sequence[Path]) -> List[Path]:
        """Compile several files in order, stopping at the first failure.

        Raises:
            CompilationFailed: The first failure, unchanged
        """
        pass

    @abstractmethod
    def link(self, project_dir: Path, output_name: str) -> Path:
        """Link every object file of the project's build directory.

        Args:
            project_dir: Project root; objects are read from its build directory
            output_name: Base name of the executable (a timestamp is appended)

        Returns:
            Path to the produced executable

        Raises:
            LinkFailed: If the linker fails to start or exits non-zero
        """
        pass
