"""
Build orchestration for LX projects.

This module coordinates the whole build, from parsing the .lx-build
descriptor to linking the executable:
- Configuration parsing (.lx-build)
- Toolchain resolution and validation
- Translation of .lx sources to C++ (external frontend)
- Header aggregation (external frontend)
- Compilation of generated C++ to objects
- Linking into a timestamped executable
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from ..config import BuildConfiguration
from ..errors import BuildDirUnavailable, BuildFailed, LXBuildError
from ..process_runner import ProcessRunner
from ..toolchains import IToolchainDriver, ToolchainRegistry
from .frontend import CommandFrontend, IFrontend
from .source_scanner import SourceScanner


class BuildStage(Enum):
    """Pipeline stage a build failure is attributed to."""

    CONFIGURATION = "configuration"
    TOOLCHAIN = "toolchain resolution"
    TRANSLATION = "translation"
    HEADER_AGGREGATION = "header aggregation"
    COMPILATION = "compilation"
    LINKING = "linking"


@dataclass
class BuildResult:
    """Result of a complete build operation."""

    success: bool
    executable_path: Optional[Path]
    build_time: float
    message: str
    object_files: List[Path] = field(default_factory=list)
    stage: Optional[BuildStage] = None
    error: Optional[LXBuildError] = None


class BuildOrchestrator:
    """
    Orchestrates the complete build of an LX project.

    Phases, each aborting the build on failure:
    1. Parse the .lx-build descriptor
    2. Resolve and validate the toolchain
    3. Translate every .lx file of every source directory
    4. Aggregate the function header
    5. Compile every generated .cpp file
    6. Link all objects into <project>_<timestamp>.exe

    Example usage:
        orchestrator = BuildOrchestrator(verbose=True)
        result = orchestrator.build(Path("example/project.lx-build"))
        if result.success:
            print(f"Executable: {result.executable_path}")
        else:
            print(f"{result.stage.value} failed: {result.message}")
    """

    TOTAL_PHASES = 6

    def __init__(
        self,
        registry: Optional[ToolchainRegistry] = None,
        frontend: Optional[IFrontend] = None,
        runner: Optional[ProcessRunner] = None,
        verbose: bool = False,
    ):
        """
        Initialize build orchestrator.

        Args:
            registry: Toolchain registry (defaults to the built-in toolchains)
            frontend: LX frontend (defaults to the command named in the descriptor)
            runner: Process runner shared by the toolchain and default frontend
            verbose: Enable verbose output
        """
        self.registry = registry if registry is not None else ToolchainRegistry()
        self.frontend = frontend
        self.verbose = verbose
        self.runner = runner if runner is not None else ProcessRunner(verbose=verbose)

    def build(self, descriptor_path: Union[str, Path]) -> BuildResult:
        """
        Execute the complete build.

        Args:
            descriptor_path: Path to the project's .lx-build file

        Returns:
            BuildResult; on failure it names the stage and carries the original error
        """
        start_time = time.time()
        stage = BuildStage.CONFIGURATION

        try:
            self._phase(1, "Parsing build descriptor...")
            config = BuildConfiguration.parse(descriptor_path)
            if self.verbose:
                print(f"      Project: {config.project_name}")
                print(f"      Debug: {config.debug}")

            stage = BuildStage.TOOLCHAIN
            self._phase(2, "Resolving toolchain...")
            driver = self._resolve_toolchain(config)

            stage = BuildStage.TRANSLATION
            self._phase(3, "Translating sources...")
            self._ensure_build_dir(config.build_dir)
            frontend = self._get_frontend(config)
            self._translate_sources(config, frontend)

            stage = BuildStage.HEADER_AGGREGATION
            self._phase(4, "Creating header file...")
            frontend.create_header(config.project_dir)

            stage = BuildStage.COMPILATION
            self._phase(5, "Compiling sources...")
            units = SourceScanner(config.build_dir).scan_intermediate()
            object_files = driver.compile_units(units)
            if self.verbose:
                print(f"      Compiled {len(object_files)} objects")

            stage = BuildStage.LINKING
            self._phase(6, "Linking executable...")
            executable = driver.link(config.project_dir, config.project_name)

            build_time = time.time() - start_time
            if self.verbose:
                print(f"      Executable: {executable}")
                print(f"Build time: {build_time:.2f}s")

            return BuildResult(
                success=True,
                executable_path=executable,
                build_time=build_time,
                message="Build successful",
                object_files=object_files,
            )

        except LXBuildError as e:
            return BuildResult(
                success=False,
                executable_path=None,
                build_time=time.time() - start_time,
                message=str(e),
                stage=stage,
                error=e,
            )

    def run_build(self, descriptor_path: Union[str, Path]) -> Path:
        """
        Build and return the executable path, raising on failure.

        Raises:
            BuildFailed: Names the failed stage; the original error is chained
        """
        result = self.build(descriptor_path)
        if not result.success:
            assert result.error is not None
            raise BuildFailed(result.stage, result.error) from result.error
        assert result.executable_path is not None
        return result.executable_path

    def _phase(self, number: int, message: str) -> None:
        if self.verbose:
            print(f"[{number}/{self.TOTAL_PHASES}] {message}")

    def _resolve_toolchain(self, config: BuildConfiguration) -> IToolchainDriver:
        driver = self.registry.resolve(
            config.toolchain_type,
            config.descriptor_path,
            config.toolchain_section,
            runner=self.runner,
            verbose=self.verbose,
        )
        if self.verbose:
            print(f"      Toolchain: {config.toolchain_type}")
        return driver

    @staticmethod
    def _ensure_build_dir(build_dir: Path) -> None:
        try:
            build_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BuildDirUnavailable(build_dir, e.strerror or str(e)) from e

    def _get_frontend(self, config: BuildConfiguration) -> IFrontend:
        if self.frontend is not None:
            return self.frontend
        return CommandFrontend(config.frontend, runner=self.runner)

    def _translate_sources(self, config: BuildConfiguration, frontend: IFrontend) -> None:
        scanner = SourceScanner(config.build_dir)
        for collection in scanner.scan_sources(config.source_dirs, config.project_dir):
            if self.verbose:
                print(f"      {collection.src_dir_name}: {len(collection.sources)} files")
            for source in collection.sources:
                frontend.translate(
                    config.project_dir,
                    collection.src_dir_name,
                    source.name,
                    config.debug,
                )
